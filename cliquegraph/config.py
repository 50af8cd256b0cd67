"""Configuration for cliquegraph components."""

from dataclasses import dataclass, replace
from typing import Optional

import numpy as np


@dataclass
class CliqueConfig:
    """Defaults for adjacency oracle construction and clique enumeration."""

    # Branch only on candidates outside the pivot's neighborhood
    pivot: bool = True

    # Use the explicit-stack engine instead of recursion
    iterative: bool = False

    # Largest index space accepted by the dense adjacency oracle.
    # The matrix takes max_oracle_nodes**2 bytes.
    max_oracle_nodes: int = 16384

    # Worker threads for parallel enumeration; None lets the executor decide
    parallel_workers: Optional[int] = None

    def oracle_limit(self) -> int:
        """Return the effective oracle limit, bounded by the index dtype width."""
        return min(self.max_oracle_nodes, int(np.iinfo(np.intp).max))

    def with_overrides(self, **overrides: object) -> "CliqueConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


# Global configuration instance
CLIQUE_CONFIG = CliqueConfig()
