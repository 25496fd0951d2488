"""Graphviz DOT rendering of control-flow graphs"""

from .cfg import ControlFlowGraph


def to_dot(cfg: ControlFlowGraph, name: str) -> str:
    """Render one `digraph` block: nodes in block order, then edges.

    Nodes are exactly `cfg.blocks`. Empty blocks with a synthesized `b<N>`
    name are dropped when the blocks are formed, so a function beginning
    with a label, or a label after a terminator, gets no empty `b<N>` node.
    """
    lines = [f"digraph {name} {{"]
    for block in cfg.blocks:
        lines.append(f"\t{block.label};")
    for edge in cfg.edges:
        lines.append(f"\t{edge.source} -> {edge.target};")
    lines.append("}")
    return "\n".join(lines)
