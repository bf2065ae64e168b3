"""A tree stored in a single list, with nodes addressed by integer ids."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


@dataclass
class Node(Generic[T]):
    """A tree node holding its data and links to its relatives."""

    data: T
    parent: Optional[int] = None
    next_sibling: Optional[int] = None
    first_child: Optional[int] = None
    last_child: Optional[int] = None


class EdgeKind(enum.Enum):
    """Whether a traversal is entering or leaving a node."""

    START = "start"
    END = "end"


@dataclass(frozen=True)
class NodeEdge:
    """One side of a node visited during a depth-first traversal."""

    kind: EdgeKind
    node_id: int


class IndexTree(Generic[T]):
    """A rooted tree; the root has id 0 and new nodes get increasing ids."""

    def __init__(self, root_data: T) -> None:
        self._nodes: list[Node[T]] = [Node(root_data)]

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, node_id: int) -> Node[T]:
        if not 0 <= node_id < len(self._nodes):
            raise IndexError(f"no node with id {node_id}")
        return self._nodes[node_id]

    def get(self, node_id: int) -> Optional[Node[T]]:
        """Return the node with the given id, or None if there is none."""
        if 0 <= node_id < len(self._nodes):
            return self._nodes[node_id]
        return None

    def add_child(self, parent_id: int, data: T) -> int:
        """Append a new child after the parent's existing children; return its id."""
        parent = self[parent_id]
        child_id = len(self._nodes)
        self._nodes.append(Node(data, parent=parent_id))
        if parent.last_child is None:
            parent.first_child = child_id
        else:
            self._nodes[parent.last_child].next_sibling = child_id
        parent.last_child = child_id
        return child_id

    def children(self, node_id: int) -> Iterator[int]:
        """Yield the ids of a node's children in insertion order."""
        current = self[node_id].first_child
        while current is not None:
            yield current
            current = self._nodes[current].next_sibling

    def find_child(self, parent_id: int, predicate: Callable[[T], bool]) -> Optional[int]:
        """Return the id of the first child whose data satisfies the predicate."""
        return next(
            (child for child in self.children(parent_id) if predicate(self._nodes[child].data)),
            None,
        )

    def descendants(self, node_id: int) -> Iterator[int]:
        """Yield the ids of a node's descendants in pre-order, excluding the node."""
        for edge in self.traverse(node_id):
            if edge.kind is EdgeKind.START and edge.node_id != node_id:
                yield edge.node_id

    def traverse(self, root: int) -> Iterator[NodeEdge]:
        """Yield start and end sides of every node in the subtree, depth first."""
        self[root]
        edge: Optional[NodeEdge] = NodeEdge(EdgeKind.START, root)
        while edge is not None:
            yield edge
            edge = self._next_edge(edge, root)

    def _next_edge(self, edge: NodeEdge, root: int) -> Optional[NodeEdge]:
        node = self._nodes[edge.node_id]
        if edge.kind is EdgeKind.START:
            if node.first_child is not None:
                return NodeEdge(EdgeKind.START, node.first_child)
            return NodeEdge(EdgeKind.END, edge.node_id)
        if edge.node_id == root:
            return None
        if node.next_sibling is not None:
            return NodeEdge(EdgeKind.START, node.next_sibling)
        if node.parent is not None:
            return NodeEdge(EdgeKind.END, node.parent)
        return None