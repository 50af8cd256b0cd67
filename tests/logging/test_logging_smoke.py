from __future__ import annotations

import logging

from cliquegraph.logging import get_logger, set_global_log_level


def test_set_global_log_level_and_get_logger_smoke(caplog) -> None:
    set_global_log_level(logging.WARNING)
    lg = get_logger("cliquegraph.smoke")
    assert lg.isEnabledFor(logging.WARNING)

    caplog.set_level(logging.DEBUG, logger="cliquegraph.smoke")
    lg.debug("debug message")
    assert any(
        r.levelno == logging.DEBUG and r.name == "cliquegraph.smoke"
        for r in caplog.records
    )
