"""Graphviz dot output for simple graphs."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Generic,
    Iterable,
    Iterator,
    NamedTuple,
    Optional,
    TypeVar,
)

N = TypeVar("N")
E = TypeVar("E")

_INDENT = "    "


class Config(enum.Enum):
    """Rendering options for :class:`Dot`."""

    NODE_INDEX_LABEL = "node_index_label"
    EDGE_INDEX_LABEL = "edge_index_label"
    EDGE_NO_LABEL = "edge_no_label"
    NODE_NO_LABEL = "node_no_label"
    GRAPH_CONTENT_ONLY = "graph_content_only"


class NodeRef(NamedTuple):
    """A node of a :class:`Graph` together with its weight."""

    id: int
    weight: Any


class EdgeRef(NamedTuple):
    """An edge of a :class:`Graph` together with its endpoints and weight."""

    id: int
    source: int
    target: int
    weight: Any


class Graph(Generic[N, E]):
    """A minimal graph whose nodes and edges are numbered in insertion order."""

    def __init__(self, directed: bool = True) -> None:
        self.directed = directed
        self._nodes: list[N] = []
        self._edges: list[tuple[int, int, E]] = []

    def add_node(self, weight: N) -> int:
        """Add a node and return its index."""
        self._nodes.append(weight)
        return len(self._nodes) - 1

    def add_edge(self, source: int, target: int, weight: E) -> int:
        """Add an edge between two existing nodes and return its index."""
        for endpoint in (source, target):
            if not 0 <= endpoint < len(self._nodes):
                raise IndexError(f"no node with index {endpoint}")
        self._edges.append((source, target, weight))
        return len(self._edges) - 1

    def nodes(self) -> Iterator[NodeRef]:
        """Yield every node in insertion order."""
        for index, weight in enumerate(self._nodes):
            yield NodeRef(index, weight)

    def edges(self) -> Iterator[EdgeRef]:
        """Yield every edge in insertion order."""
        for index, (source, target, weight) in enumerate(self._edges):
            yield EdgeRef(index, source, target, weight)


def escape(text: str) -> str:
    """Escape text for use inside a quoted Graphviz label."""
    out = []
    for ch in text:
        if ch in ('"', "\\"):
            out.append("\\" + ch)
        elif ch == "\n":
            # \l is a left-justified line break
            out.append("\\l")
        else:
            out.append(ch)
    return "".join(out)


def _debug_format(value: Any) -> str:
    """Format a weight the way a debug view shows it: strings are quoted."""
    if isinstance(value, str):
        inner = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{inner}"'
    return str(value)


@dataclass
class Dot:
    """Renders a :class:`Graph` in Graphviz dot format."""

    graph: Graph
    config: Iterable[Config] = field(default_factory=frozenset)
    node_fmt: Callable[[Any], str] = _debug_format
    edge_fmt: Callable[[Any], str] = _debug_format
    get_edge_attributes: Optional[Callable[[Graph, EdgeRef], str]] = None
    get_node_attributes: Optional[Callable[[Graph, NodeRef], str]] = None

    def __post_init__(self) -> None:
        self.config = frozenset(self.config)

    def render(self) -> str:
        """Return the dot text for the graph."""
        g = self.graph
        conf = self.config
        lines: list[str] = []
        if Config.GRAPH_CONTENT_ONLY not in conf:
            lines.append(f"{'digraph' if g.directed else 'graph'} {{\n")

        for node in g.nodes():
            parts = [f"{_INDENT}{node.id} [ "]
            if Config.NODE_NO_LABEL not in conf:
                if Config.NODE_INDEX_LABEL in conf:
                    label = str(node.id)
                else:
                    label = escape(self.node_fmt(node.weight))
                parts.append(f'label = "{label}" ')
            attrs = self.get_node_attributes(g, node) if self.get_node_attributes else ""
            parts.append(f"{attrs}]\n")
            lines.append("".join(parts))

        arrow = "->" if g.directed else "--"
        for i, edge in enumerate(g.edges()):
            parts = [f"{_INDENT}{edge.source} {arrow} {edge.target} [ "]
            if Config.EDGE_NO_LABEL not in conf:
                if Config.EDGE_INDEX_LABEL in conf:
                    label = str(i)
                else:
                    label = escape(self.edge_fmt(edge.weight))
                parts.append(f'label = "{label}" ')
            attrs = self.get_edge_attributes(g, edge) if self.get_edge_attributes else ""
            parts.append(f"{attrs}]\n")
            lines.append("".join(parts))

        if Config.GRAPH_CONTENT_ONLY not in conf:
            lines.append("}\n")
        return "".join(lines)

    def __str__(self) -> str:
        return self.render()