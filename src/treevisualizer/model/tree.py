"""
Tree Arena (Data Model)
=======================
An append-only n-ary tree whose nodes live in an arena and are addressed by
integer ids.

Why is this file needed?
------------------------
1. Shared subtrees: A node may be attached as a child in several places, even
   below itself, which turns the child relation into a graph with cycles
   ("fractal" trees). Storing ids instead of nested objects keeps this cheap
   and makes the two relations explicit.
2. Separation: The child lists (ownership) and the parent pointers
   (back-references) are independent dictionaries. `attach_child` only
   touches the former.

Classes:
    Tree: The arena plus its root id.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
NodeId = int


class Tree(Generic[T]):
    """
    Rooted tree of values. The root is created together with the tree and its
    parent is always None.
    """

    def __init__(self, root_value: T) -> None:
        self._values: Dict[NodeId, T] = {}
        self._children: Dict[NodeId, List[NodeId]] = {}
        self._parents: Dict[NodeId, Optional[NodeId]] = {}
        self._next_id: NodeId = 0
        self._root: NodeId = self._new_node(root_value, None)

    @classmethod
    def create_root(cls, value: T) -> Tree[T]:
        """New tree with a single root holding `value`."""
        return cls(value)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_child(self, parent: Optional[NodeId], value: T) -> NodeId:
        """Create a node holding `value` and append it to `parent`'s children."""
        self._require(parent, "parent")
        child = self._new_node(value, parent)
        self._children[parent].append(child)
        return child

    def attach_child(self, parent: Optional[NodeId], node: Optional[NodeId]) -> NodeId:
        """
        Append an existing node to `parent`'s children.

        The node keeps its recorded parent. No cycle or duplicate check is
        done, so a node may become its own descendant.
        """
        self._require(parent, "parent")
        self._require(node, "node")
        self._children[parent].append(node)
        logger.debug(f"Attached node {node} below {parent} (recorded parent: {self._parents[node]})")
        return node

    def set_value(self, node: NodeId, value: T) -> None:
        self._require(node, "node")
        self._values[node] = value

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def root(self) -> NodeId:
        return self._root

    def value(self, node: NodeId) -> T:
        self._require(node, "node")
        return self._values[node]

    def children(self, node: NodeId) -> Tuple[NodeId, ...]:
        """Children in insertion order."""
        self._require(node, "node")
        return tuple(self._children[node])

    def parent(self, node: NodeId) -> Optional[NodeId]:
        self._require(node, "node")
        return self._parents[node]

    def __contains__(self, node: Any) -> bool:
        return node in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[NodeId]:
        return iter(self._values)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _new_node(self, value: T, parent: Optional[NodeId]) -> NodeId:
        node = self._next_id
        self._next_id += 1
        self._values[node] = value
        self._children[node] = []
        self._parents[node] = parent
        return node

    def _require(self, node: Optional[NodeId], role: str) -> None:
        if node is None:
            raise ValueError(f"{role} must not be None.")
        if node not in self._values:
            raise ValueError(f"Unknown {role} id: {node!r}")
