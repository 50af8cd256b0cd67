"""Shared type aliases and enums."""

from cliquegraph.types.base import Clique, Direction, NodeID

__all__ = ["Clique", "Direction", "NodeID"]
