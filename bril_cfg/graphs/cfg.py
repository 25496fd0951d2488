"""Control Flow Graph (CFG) construction for Bril functions"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional
from enum import Enum
import networkx as nx

from ..data.loader import dump_code, parse_code
from ..ir import Code, Constant, EffectOperation, Function, Instruction, Label, ValueOperation
from ..utils.logging import get_logger

logger = get_logger(__name__)


class EdgeType(Enum):
    JUMP = 'jump'
    FALLTHROUGH = 'fallthrough'


@dataclass
class Block:
    label: str
    instrs: List[Instruction] = field(default_factory=list)

    @property
    def terminator(self) -> Optional[Instruction]:
        return self.instrs[-1] if self.instrs else None

    def __len__(self) -> int:
        return len(self.instrs)


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    edge_type: EdgeType = field(default=EdgeType.FALLTHROUGH, compare=False)


@dataclass
class ControlFlowGraph:
    blocks: List[Block]
    edges: List[Edge]

    @property
    def labels(self) -> List[str]:
        return [b.label for b in self.blocks]

    @property
    def entry(self) -> Optional[str]:
        return self.blocks[0].label if self.blocks else None

    def to_networkx(self) -> nx.DiGraph:
        """Convert to NetworkX DiGraph (parallel duplicate edges collapse)"""
        G = nx.DiGraph()

        for index, block in enumerate(self.blocks):
            G.add_node(
                block.label,
                index=index,
                instrs=list(block.instrs),
                size=len(block.instrs),
                missing=False,
            )

        for edge in self.edges:
            for label in (edge.source, edge.target):
                if label not in G:
                    G.add_node(label, missing=True)
            G.add_edge(edge.source, edge.target, edge_type=edge.edge_type.value)

        return G

    def get_block(self, label: str) -> Optional[Block]:
        for block in self.blocks:
            if block.label == label:
                return block
        return None

    def successors(self, label: str) -> List[str]:
        return [e.target for e in self.edges if e.source == label]

    def predecessors(self, label: str) -> List[str]:
        return [e.source for e in self.edges if e.target == label]

    def dangling_targets(self) -> List[str]:
        """Edge targets that name no block, in first-seen order"""
        known = set(self.labels)
        result = []
        for edge in self.edges:
            if edge.target not in known and edge.target not in result:
                result.append(edge.target)
        return result

    def unreachable_blocks(self) -> List[str]:
        """Blocks with no path from the entry block"""
        if not self.blocks:
            return []
        G = self.to_networkx()
        reachable = nx.descendants(G, self.entry) | {self.entry}
        return [label for label in self.labels if label not in reachable]


def _synthesized_label(ordinal: int) -> str:
    return f"b{ordinal}"


def _next_ordinal(ordinal: int, taken: set) -> int:
    while _synthesized_label(ordinal) in taken:
        ordinal += 1
    return ordinal


def form_blocks(instrs: Iterable[Code]) -> List[Block]:
    """Partition a flat code list into ordered basic blocks.

    An effect operation ends the current block; a label starts a new one.
    Blocks that begin without a label are named `b<N>`, N being the number of
    blocks emitted when the name was assigned, moved past any `b<N>` the
    function already uses as a label. A label closes the pending block even
    when it holds no instructions, but only if that block carries an explicit
    label: an empty block with a synthesized name has no place in the source
    and is dropped.
    """
    code = list(instrs)
    taken = {item.label for item in code if isinstance(item, Label)}

    blocks: List[Block] = []
    buffer: List[Instruction] = []
    ordinal = _next_ordinal(0, taken)
    label = _synthesized_label(ordinal)
    explicit = False

    for item in code:
        if isinstance(item, EffectOperation):
            buffer.append(item)
            blocks.append(Block(label=label, instrs=buffer))
            buffer = []
            ordinal = _next_ordinal(max(len(blocks), ordinal + 1), taken)
            label = _synthesized_label(ordinal)
            explicit = False
        elif isinstance(item, (Constant, ValueOperation)):
            buffer.append(item)
        elif isinstance(item, Label):
            if buffer or explicit:
                blocks.append(Block(label=label, instrs=buffer))
            buffer = []
            label = item.label
            explicit = True
        else:
            raise TypeError(f"Not a Bril code item: {item!r}")

    # Trailing block without a terminating effect
    if buffer:
        blocks.append(Block(label=label, instrs=buffer))

    return blocks


def derive_edges(blocks: List[Block]) -> List[Edge]:
    """Derive control-flow edges from ordered blocks.

    A block ending in an effect with labels jumps to exactly those labels, in
    order. Any other non-empty block falls through to the next block, if any.
    Empty blocks contribute no edges. Targets are not checked against the
    block list.
    """
    edges: List[Edge] = []

    for pos, block in enumerate(blocks):
        last = block.terminator
        if last is None:
            continue

        if isinstance(last, EffectOperation) and last.labels:
            for target in last.labels:
                edges.append(Edge(block.label, target, EdgeType.JUMP))
        elif pos + 1 < len(blocks):
            edges.append(Edge(block.label, blocks[pos + 1].label, EdgeType.FALLTHROUGH))

    return edges


class CFGBuilder:
    """Build a ControlFlowGraph from a Bril function"""

    def build(self, function: Function) -> ControlFlowGraph:
        blocks = form_blocks(function.instrs)
        edges = derive_edges(blocks)
        logger.debug(
            f"Function '{function.name}': {len(blocks)} blocks, {len(edges)} edges"
        )
        return ControlFlowGraph(blocks=blocks, edges=edges)


def build_cfg(function: Function) -> ControlFlowGraph:
    """Convenience function to build CFG"""
    return CFGBuilder().build(function)


def serialize_cfg(cfg: ControlFlowGraph) -> dict:
    """Serialize CFG to dict for saving to JSON"""
    return {
        'blocks': [
            {
                'label': b.label,
                'instrs': [dump_code(i) for i in b.instrs],
            }
            for b in cfg.blocks
        ],
        'edges': [
            {'from': e.source, 'to': e.target, 'type': e.edge_type.value}
            for e in cfg.edges
        ],
    }


def deserialize_cfg(data: dict) -> Optional[ControlFlowGraph]:
    """Deserialize CFG from dict"""
    if not data or 'blocks' not in data:
        return None

    edge_type_map: Dict[str, EdgeType] = {e.value: e for e in EdgeType}

    blocks = [
        Block(
            label=b['label'],
            instrs=[parse_code(i) for i in b.get('instrs', [])],
        )
        for b in data['blocks']
    ]

    edges = [
        Edge(e['from'], e['to'], edge_type_map.get(e.get('type'), EdgeType.FALLTHROUGH))
        for e in data.get('edges', [])
    ]

    return ControlFlowGraph(blocks=blocks, edges=edges)
