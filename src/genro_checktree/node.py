# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""CheckableTree node class."""

from __future__ import annotations

import weakref
from typing import Any


class CheckableNode:
    """A node in a CheckableTree hierarchy.

    Each node has:
    - label: Opaque display reference (never inspected by the engine)
    - value: Optional payload, returned by selection queries
    - icon: Optional opaque display reference
    - children: Ordered list of owned child nodes
    - parent: Weak reference to the owning node (None for roots)

    and the mutable view state managed by CheckableTree:
    expanded, selected, partially_selected, hidden, original_index.

    Nodes are plain data holders. All state changes must go through
    the engine, otherwise the tri-state selection invariants break.

    Example:
        >>> leaf = CheckableNode('main.js', 'main_js', selected=True)
        >>> folder = CheckableNode('src', children=[leaf])
        >>> leaf.parent is folder
        True
    """

    __slots__ = (
        'label', 'value', 'icon', 'children', '_parent_ref',
        'expanded', 'selected', 'partially_selected', 'hidden',
        'original_index', '__weakref__',
    )

    def __init__(
        self,
        label: Any,
        value: Any = None,
        icon: Any = None,
        children: list[CheckableNode] | None = None,
        selected: bool = False,
    ) -> None:
        """Initialize a CheckableNode.

        Args:
            label: Display reference for the node.
            value: Optional payload.
            icon: Optional icon reference.
            children: Child nodes; their parent link is set to this node.
            selected: Initial selection state. Parents are reconciled
                with their children when the tree is attached to an engine.
        """
        self.label = label
        self.value = value
        self.icon = icon
        self.children: list[CheckableNode] = children if children is not None else []
        self._parent_ref: weakref.ref[CheckableNode] | None = None
        self.expanded = False
        self.selected = selected
        self.partially_selected = False
        self.hidden = False
        self.original_index = 0
        for child in self.children:
            child._parent_ref = weakref.ref(self)

    def __repr__(self) -> str:
        return (
            f"CheckableNode({self.label!r}, value={self.value!r}, "
            f"children={len(self.children)})"
        )

    @property
    def parent(self) -> CheckableNode | None:
        """The owning node, or None for roots (or if the owner is gone)."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def _attach(self, parent: CheckableNode | None) -> None:
        """Point the back-reference at parent, keeping an existing link to it."""
        if parent is None:
            self._parent_ref = None
        elif self.parent is not parent:
            self._parent_ref = weakref.ref(parent)

    @property
    def is_branch(self) -> bool:
        """True if this node has children."""
        return bool(self.children)

    @property
    def is_leaf(self) -> bool:
        """True if this node has no children."""
        return not self.children

    @property
    def depth(self) -> int:
        """Depth of this node in the hierarchy (roots=0)."""
        depth = 0
        parent = self.parent
        while parent is not None:
            depth += 1
            parent = parent.parent
        return depth

    @property
    def check_state(self) -> bool | None:
        """Value for a tri-state checkbox: True, False, or None when partial."""
        if self.selected:
            return True
        if self.partially_selected:
            return None
        return False

    @property
    def visible_children(self) -> list[CheckableNode]:
        """Non-hidden children in current order."""
        return [child for child in self.children if not child.hidden]

    def as_dict(self) -> dict[str, Any]:
        """Return a plain nested snapshot of this node and its subtree."""
        return {
            'label': self.label,
            'value': self.value,
            'selected': self.selected,
            'partially_selected': self.partially_selected,
            'expanded': self.expanded,
            'hidden': self.hidden,
            'original_index': self.original_index,
            'children': [child.as_dict() for child in self.children],
        }
