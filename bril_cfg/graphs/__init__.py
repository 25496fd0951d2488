"""Graph construction utilities (CFG, DOT)"""

from .cfg import (
    Block,
    Edge,
    EdgeType,
    ControlFlowGraph,
    CFGBuilder,
    form_blocks,
    derive_edges,
    build_cfg,
    serialize_cfg,
    deserialize_cfg,
)
from .dot import to_dot

__all__ = [
    "Block",
    "Edge",
    "EdgeType",
    "ControlFlowGraph",
    "CFGBuilder",
    "form_blocks",
    "derive_edges",
    "build_cfg",
    "serialize_cfg",
    "deserialize_cfg",
    "to_dot",
]
