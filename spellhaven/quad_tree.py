"""Quad tree of chunk data used for level-of-detail subdivision."""

from __future__ import annotations

import threading
from enum import IntEnum
from typing import Any, Callable, Iterable, Optional


class QuadTreeDistinction(IntEnum):
    """Index of a child within a branch node."""

    TOP_LEFT = 0
    TOP_RIGHT = 1
    BOTTOM_LEFT = 2
    BOTTOM_RIGHT = 3


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


class QuadTreeNode:
    """Either a leaf holding data or a branch with four children."""

    def __init__(
        self,
        data: Any = None,
        children: Optional[tuple["QuadTreeNode", ...]] = None,
        entities: Iterable[Any] = (),
    ) -> None:
        if children is not None and len(children) != 4:
            raise ValueError("a branch node needs exactly four children")
        self.data = data
        self.children = tuple(children) if children is not None else None
        self.entities = list(entities)
        self.child_progress = 0
        self._progress_lock = threading.Lock()

    @classmethod
    def leaf(cls, data, entities) -> "QuadTreeNode":
        return cls(data=data, entities=entities)

    @classmethod
    def branch(cls, children, entities) -> "QuadTreeNode":
        return cls(children=tuple(children), entities=entities)

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    def run_on_data(self, func: Callable[[Any], Any]) -> None:
        """Call ``func`` on the data of every leaf, children in order."""
        if self.children is None:
            func(self.data)
            return
        for child in self.children:
            child.run_on_data(func)

    def add_to_parent(self, depth: int, position, despawn: Callable[[Any], Any]) -> None:
        """Count a finished child; once all four are done, despawn the parent's entities."""
        further = False
        parent = self.get_parent_node(depth, position)
        if parent is not None and parent.children is not None:
            with parent._progress_lock:
                parent.child_progress += 1
                if parent.child_progress == 4:
                    for entity in parent.entities:
                        despawn(entity)
                    if depth != 1:
                        further = True
        if further:
            self.add_to_parent(
                depth - 1, [_tdiv(position[0], 2), _tdiv(position[1], 2)], despawn
            )

    def _descend(self, depth: int, position):
        divider = 2 ** (depth - 1)
        x, y = position[0], position[1]
        a, b, c, d = self.children
        if _tdiv(x, divider) == 0:
            if _tdiv(y, divider) == 0:
                return a, [x, y]
            return c, [x, y - divider]
        if _tdiv(y, divider) == 0:
            return b, [x - divider, y]
        return d, [x - divider, y - divider]

    def get_parent_node(self, depth: int, position) -> Optional["QuadTreeNode"]:
        """The node one level above the node at ``depth`` and ``position``."""
        if depth <= 1:
            return self
        if self.children is None:
            return None
        child, child_position = self._descend(depth, position)
        return child.get_parent_node(depth - 1, child_position)

    def get_node(self, depth: int, position) -> Optional["QuadTreeNode"]:
        """The node at ``depth`` below this one, or None if a leaf is hit first."""
        if depth == 0:
            return self
        if self.children is None:
            return None
        child, child_position = self._descend(depth, position)
        return child.get_node(depth - 1, child_position)

    def __repr__(self) -> str:
        if self.children is None:
            return f"QuadTreeNode.leaf({self.data!r}, {self.entities!r})"
        return f"QuadTreeNode.branch({list(self.children)!r}, {self.entities!r})"