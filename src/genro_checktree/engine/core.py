# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""CheckableTree - tri-state selection engine over a fixed node hierarchy.

This module provides the CheckableTree class, which owns a list of root
CheckableNode instances and implements every state mutation a tree view
needs: selection with tri-state propagation, filtering, sorting and
expansion. A rendering collaborator reads node state and forwards user
input back into these operations; it must never write node fields itself.

Key Features:
    - **Tri-state selection**: parents are selected, partially selected or
      unselected according to their visible children
    - **Hidden freeze**: nodes hidden by a filter keep their selection state
      while bulk or subtree selections happen around them
    - **Filtering**: a node is shown if it or any descendant matches
    - **Sorting**: one ordering applied at every level, reversible to the
      construction order
    - **Notifications**: the full list of selected values after each change

Path Syntax:
    - Positional: '#0' (first root), '#0.#2' (third child of first root)
    - Negative indexes: '#-1' (last root)

Example:
    Basic usage::

        tree = CheckableTree(
            [
                CheckableNode('Root 1', 'r1', children=[
                    CheckableNode('Child 1.1', 'c11'),
                    CheckableNode('Child 1.2', 'c12'),
                ]),
            ],
            on_selection_changed=print,
            initial_expanded_levels=1,
        )
        tree.select(tree.get_node('#0.#1'))   # prints ['c12']
        tree.roots[0].partially_selected      # True

    From plain data::

        tree = CheckableTree({'src': {'_value': 'src', 'main.js': 'main_js'}})
"""

from __future__ import annotations

import functools
import logging
import re
from typing import Any, Callable, Iterator

from ..config import TreeViewConfig
from ..exceptions import FeatureDisabledError, NodeNotFoundError
from ..intent import TOGGLE, SelectionIntent, SetTo, as_intent
from ..node import CheckableNode
from .loading import load_nodes
from .subscription import SelectionCallback, SubscriptionMixin

logger = logging.getLogger(__name__)

NodePredicate = Callable[[CheckableNode], bool]
NodeComparator = Callable[[CheckableNode, CheckableNode], int]

_POSITION_RE = re.compile(r'#(-?[0-9]+)')


def _by_original_index(node: CheckableNode) -> int:
    return node.original_index


class CheckableTree(SubscriptionMixin):
    """A hierarchy of checkable, expandable nodes.

    CheckableTree provides:
    - toggle_selection(node, intent): tri-state selection with propagation
    - set_select_all(selected): bulk selection of visible nodes
    - filter(predicate) / sort(compare): visibility and ordering
    - expand_all() / collapse_all() / toggle_node(node): expansion
    - get_selected_nodes() / get_selected_values(): pre-order queries

    Structure is fixed after construction: only node state changes.
    The tree is single-threaded and every operation runs to completion
    before returning. Trees where a node has two parents or where the
    parent/child relation has a cycle are out of contract and lead to
    undefined behaviour.

    Attributes:
        roots: The root node list. When built from a list of nodes this
            is the very same list object the caller passed in.
        config: The TreeViewConfig in effect.
    """

    __slots__ = (
        'roots', 'config', '_all_selected', '_all_expanded',
        '_on_selection_changed', '_subscribers',
    )

    def __init__(
        self,
        source: list | dict | None = None,
        on_selection_changed: SelectionCallback | None = None,
        config: TreeViewConfig | None = None,
        **options: Any,
    ) -> None:
        """Initialize a CheckableTree.

        Args:
            source: Root nodes. Can be:
                - list of CheckableNode: used as is (aliased, not copied)
                - list of tuples or dicts, or a nested dict: converted to
                  nodes (see genro_checktree.engine.loading)
                - None: empty tree
            on_selection_changed: Called with the full list of selected
                values after every operation that can change it.
            config: Ready-made TreeViewConfig.
            **options: TreeViewConfig fields, when config is not given.

        Raises:
            TypeError: If both config and options are given, or source has
                an unsupported type.
            pydantic.ValidationError: If options are invalid.

        Example:
            >>> CheckableTree(nodes, print, initial_expanded_levels=0)
            >>> CheckableTree(nodes, config=TreeViewConfig(show_select_all=True))
        """
        if config is not None and options:
            raise TypeError("Pass either config or keyword options, not both")
        self.config = config if config is not None else TreeViewConfig(**options)
        self.roots: list[CheckableNode] = (
            load_nodes(source) if source is not None else []
        )
        self._on_selection_changed = on_selection_changed
        self._subscribers: dict[str, SelectionCallback] = {}
        self._all_selected = False

        self._initialize_nodes(self.roots, None)
        self._set_initial_expansion(self.roots, 0)
        self._update_all_selection_states()
        self._update_all_selected()
        self._all_expanded = self.config.initial_expanded_levels == 0
        logger.debug(
            "CheckableTree initialized: %d root(s), %d node(s), "
            "initial_expanded_levels=%s",
            len(self.roots),
            sum(1 for _ in self.walk()),
            self.config.initial_expanded_levels,
        )

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"CheckableTree({[node.label for node in self.roots]})"

    def __len__(self) -> int:
        """Return the number of root nodes."""
        return len(self.roots)

    def __iter__(self) -> Iterator[CheckableNode]:
        """Iterate over root nodes in current order."""
        return iter(self.roots)

    # ==================== Initialization ====================

    def _initialize_nodes(
        self, nodes: list[CheckableNode], parent: CheckableNode | None
    ) -> None:
        """Number siblings and confirm parent links, depth-first."""
        for index, node in enumerate(nodes):
            node.original_index = index
            node._attach(parent)
            self._initialize_nodes(node.children, node)

    def _set_initial_expansion(self, nodes: list[CheckableNode], level: int) -> None:
        levels = self.config.initial_expanded_levels
        if levels is None:
            return
        for node in nodes:
            node.expanded = levels == 0 or level < levels
            if node.expanded:
                self._set_initial_expansion(node.children, level + 1)

    # ==================== Aggregates ====================

    @property
    def all_selected(self) -> bool:
        """True if every visible root is fully selected.

        Fully selected means the node and, recursively, all of its visible
        descendants are selected. False when no root is visible.
        """
        return self._all_selected

    @property
    def all_expanded(self) -> bool:
        """Direction of the last bulk expansion (True = expanded)."""
        return self._all_expanded

    def _update_all_selected(self) -> None:
        visible = [node for node in self.roots if not node.hidden]
        self._all_selected = bool(visible) and all(
            self._is_fully_selected(node) for node in visible
        )

    def _is_fully_selected(self, node: CheckableNode) -> bool:
        if node.hidden:
            return True
        if not node.selected:
            return False
        return all(self._is_fully_selected(child) for child in node.children)

    # ==================== Selection ====================

    def toggle_selection(
        self,
        node: CheckableNode,
        intent: SelectionIntent | bool = TOGGLE,
    ) -> None:
        """Change the selection of node and propagate it.

        The node and its visible descendants take the new state; hidden
        nodes and their subtrees are left untouched. Ancestors are then
        recomputed from their visible children.

        Args:
            node: A node of this tree.
            intent: SetTo(bool), TOGGLE, or a plain bool. TOGGLE deselects
                a selected or partially selected node, selects otherwise.

        Raises:
            TypeError: If intent is not a bool or SelectionIntent.
        """
        selected = as_intent(intent).resolve(node)
        self._set_subtree_selection(node, selected)
        self._update_ancestors(node)
        self._update_all_selected()
        self._notify_selection_changed()

    def select(self, node: CheckableNode) -> None:
        """Select node and its visible subtree."""
        self.toggle_selection(node, SetTo(True))

    def deselect(self, node: CheckableNode) -> None:
        """Deselect node and its visible subtree."""
        self.toggle_selection(node, SetTo(False))

    def tap(self, node: CheckableNode) -> None:
        """Handle a tap on the node row: select unless already selected."""
        self.toggle_selection(node, SetTo(not node.selected))

    def set_select_all(self, selected: bool) -> None:
        """Set every visible node to selected, skipping hidden subtrees."""
        for root in self.roots:
            self._set_subtree_selection(root, selected)
        self._update_all_selected()
        logger.debug("Select all: %s", selected)
        self._notify_selection_changed()

    def toggle_select_all(self) -> None:
        """Header checkbox: flip the 'all selected' aggregate.

        Raises:
            FeatureDisabledError: If config.show_select_all is False.
        """
        if not self.config.show_select_all:
            raise FeatureDisabledError("select all is disabled (show_select_all=False)")
        self.set_select_all(not self._all_selected)

    def _set_subtree_selection(self, node: CheckableNode, selected: bool) -> None:
        if node.hidden:
            return
        node.selected = selected
        node.partially_selected = False
        for child in node.children:
            self._set_subtree_selection(child, selected)

    def _update_ancestors(self, node: CheckableNode) -> None:
        parent = node.parent
        while parent is not None:
            self._update_single_selection_state(parent)
            parent = parent.parent

    def _update_all_selection_states(self) -> None:
        for root in self.roots:
            self._update_selection_bottom_up(root)

    def _update_selection_bottom_up(self, node: CheckableNode) -> None:
        for child in node.children:
            self._update_selection_bottom_up(child)
        self._update_single_selection_state(node)

    def _update_single_selection_state(self, node: CheckableNode) -> None:
        """Recompute node flags from its visible children.

        A node without visible children keeps its own flags, as a leaf.
        """
        visible = node.visible_children
        if not visible:
            return
        all_selected = all(child.selected for child in visible)
        any_selected = any(
            child.selected or child.partially_selected for child in visible
        )
        node.selected = all_selected
        node.partially_selected = any_selected and not all_selected

    # ==================== Filtering ====================

    def filter(self, predicate: NodePredicate) -> None:
        """Hide every node that neither matches nor has a matching descendant.

        The predicate is called exactly once per node. Selection flags are
        not changed directly, but parents are re-aggregated over their
        new set of visible children.

        Args:
            predicate: Returns True when a node matches on its own.
        """
        shown: dict[int, bool] = {}
        self._match_filter(self.roots, predicate, shown)
        for _, node in self.walk():
            node.hidden = not shown[id(node)]
        self._update_all_selection_states()
        self._update_all_selected()
        if logger.isEnabledFor(logging.DEBUG):
            total = visible = 0
            for _, node in self.walk():
                total += 1
                visible += not node.hidden
            logger.debug("Filter applied: %d of %d node(s) visible", visible, total)
        self._notify_selection_changed()

    def clear_filter(self) -> None:
        """Show every node again."""
        self.filter(lambda node: True)

    def _match_filter(
        self,
        nodes: list[CheckableNode],
        predicate: NodePredicate,
        shown: dict[int, bool],
    ) -> bool:
        """Record in shown, by node id, whether each node stays visible.

        No node is modified, so a failing predicate leaves the tree as it was.

        Returns:
            True if any node in nodes (or below) matches the predicate.
        """
        any_shown = False
        for node in nodes:
            descendant_matches = self._match_filter(node.children, predicate, shown)
            shown[id(node)] = bool(predicate(node)) or descendant_matches
            any_shown = any_shown or shown[id(node)]
        return any_shown

    # ==================== Sorting ====================

    def sort(
        self,
        compare: NodeComparator | None = None,
        *,
        key: Callable[[CheckableNode], Any] | None = None,
        reverse: bool = False,
    ) -> None:
        """Reorder every sibling group in place with the same ordering.

        Args:
            compare: Comparator returning <0, 0 or >0, applied at every level.
            key: Key function, as an alternative to compare.
            reverse: Reverse the comparator/key ordering.

        With neither compare nor key, the construction order is restored
        and reverse is ignored. Selection, expansion and visibility are
        not touched.

        Raises:
            TypeError: If both compare and key are given.

        Example:
            >>> tree.sort(key=lambda n: n.value or '')
            >>> tree.sort(lambda a, b: len(a.children) - len(b.children))
            >>> tree.sort()  # back to original order
        """
        if compare is not None and key is not None:
            raise TypeError("Pass either compare or key, not both")
        if compare is not None:
            sort_key = functools.cmp_to_key(compare)
        elif key is not None:
            sort_key = key
        else:
            sort_key, reverse = _by_original_index, False
        ordered: list[tuple[list[CheckableNode], list[CheckableNode]]] = []
        self._plan_sort(self.roots, sort_key, reverse, ordered)
        for group, new_order in ordered:
            group[:] = new_order
        logger.debug(
            "Sorted tree (%s)",
            "original order" if compare is None and key is None else "custom order",
        )

    def _plan_sort(
        self,
        nodes: list[CheckableNode],
        sort_key: Callable[[CheckableNode], Any],
        reverse: bool,
        ordered: list[tuple[list[CheckableNode], list[CheckableNode]]],
    ) -> None:
        """Collect (sibling list, sorted copy) pairs without reordering anything."""
        ordered.append((nodes, sorted(nodes, key=sort_key, reverse=reverse)))
        for node in nodes:
            if node.children:
                self._plan_sort(node.children, sort_key, reverse, ordered)

    # ==================== Expansion ====================

    def expand_all(self) -> None:
        """Expand every node, hidden ones included."""
        self._set_expansion(self.roots, True)
        self._all_expanded = True
        logger.debug("Expanded all nodes")

    def collapse_all(self) -> None:
        """Collapse every node, hidden ones included."""
        self._set_expansion(self.roots, False)
        self._all_expanded = False
        logger.debug("Collapsed all nodes")

    def toggle_node(self, node: CheckableNode) -> None:
        """Flip the expansion of a single node."""
        node.expanded = not node.expanded

    def toggle_expand_collapse_all(self) -> None:
        """Header button: alternate between expand_all and collapse_all.

        Raises:
            FeatureDisabledError: If config.show_expand_collapse_button is False.
        """
        if not self.config.show_expand_collapse_button:
            raise FeatureDisabledError(
                "expand/collapse all is disabled (show_expand_collapse_button=False)"
            )
        if self._all_expanded:
            self.collapse_all()
        else:
            self.expand_all()

    def _set_expansion(self, nodes: list[CheckableNode], expanded: bool) -> None:
        for node in nodes:
            node.expanded = expanded
            self._set_expansion(node.children, expanded)

    # ==================== Queries ====================

    def iter_selected_nodes(self) -> Iterator[CheckableNode]:
        """Yield selected, visible nodes in pre-order."""
        for _, node in self.walk():
            if node.selected and not node.hidden:
                yield node

    def get_selected_nodes(self) -> list[CheckableNode]:
        """Return selected, visible nodes in pre-order.

        Partially selected nodes are never included.
        """
        return list(self.iter_selected_nodes())

    def get_selected_values(self) -> list[Any]:
        """Return the values of get_selected_nodes(), in the same order."""
        return [node.value for node in self.iter_selected_nodes()]

    # ==================== Walk ====================

    def walk(
        self,
        callback: Callable[[CheckableNode], Any] | None = None,
    ) -> Iterator[tuple[str, CheckableNode]] | None:
        """Walk every node in pre-order and current sibling order.

        Hidden nodes are included. Paths are positional ('#0.#1').

        Args:
            callback: Optional function to call on each node.
                      If provided, walk returns None.

        Yields:
            Tuples of (path, node) if no callback provided.

        Example:
            >>> for path, node in tree.walk():
            ...     print(path, node.value)

            >>> tree.walk(lambda n: print(n.label))
        """
        if callback is not None:
            for _, node in self._walk_gen(self.roots, ''):
                callback(node)
            return None
        return self._walk_gen(self.roots, '')

    def _walk_gen(
        self, nodes: list[CheckableNode], prefix: str
    ) -> Iterator[tuple[str, CheckableNode]]:
        for index, node in enumerate(nodes):
            path = f"{prefix}.#{index}" if prefix else f"#{index}"
            yield path, node
            yield from self._walk_gen(node.children, path)

    def iter_rows(self) -> Iterator[tuple[int, CheckableNode]]:
        """Yield (depth, node) for every node a renderer should draw.

        Hidden nodes are skipped with their subtrees; children are
        visited only below expanded nodes.
        """
        def _rows(nodes: list[CheckableNode], depth: int) -> Iterator[tuple[int, CheckableNode]]:
            for node in nodes:
                if node.hidden:
                    continue
                yield depth, node
                if node.expanded:
                    yield from _rows(node.children, depth + 1)

        return _rows(self.roots, 0)

    def get_node(self, path: str) -> CheckableNode:
        """Get the node at a positional path such as '#0.#2'.

        Raises:
            NodeNotFoundError: If a segment is malformed or out of range.
        """
        if not path:
            raise NodeNotFoundError("Empty path")
        nodes = self.roots
        node = None
        for segment in path.split('.'):
            match = _POSITION_RE.fullmatch(segment)
            if match is None:
                raise NodeNotFoundError(f"Invalid path segment '{segment}'")
            index = int(match.group(1))
            if not -len(nodes) <= index < len(nodes):
                raise NodeNotFoundError(
                    f"Position #{index} out of range in '{path}'"
                )
            node = nodes[index]
            nodes = node.children
        return node
