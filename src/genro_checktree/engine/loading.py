# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Build CheckableNode lists from plain Python data.

Supported sources:
    - list of CheckableNode: returned as is (same list object)
    - list of tuples: (label, value), (label, value, children) or
      (label, value, children, options) where options holds icon/selected
    - list of dicts: {'label': ..., 'value': ..., 'icon': ...,
      'selected': ..., 'children': [...]}
    - dict: label -> value for leaves, label -> dict for branches. Keys
      with '_' prefix ('_value', '_icon', '_selected') are node options,
      the other keys are children.
"""

from __future__ import annotations

from typing import Any

from ..node import CheckableNode

_NODE_OPTIONS = ('icon', 'selected')


def load_nodes(source: list | dict) -> list[CheckableNode]:
    """Return the root node list described by source.

    Raises:
        TypeError: If source is not a list or dict.
    """
    if isinstance(source, dict):
        return load_from_dict(source)
    if isinstance(source, list):
        if all(isinstance(item, CheckableNode) for item in source):
            return source
        return load_from_list(source)
    raise TypeError(
        f"source must be list or dict, not {type(source).__name__}"
    )


def load_from_list(items: list) -> list[CheckableNode]:
    """Convert a list of nodes, tuples or dicts into nodes."""
    return [_node_from_item(item) for item in items]


def _node_from_item(item: Any) -> CheckableNode:
    if isinstance(item, CheckableNode):
        return item
    if isinstance(item, dict):
        unknown = set(item) - {'label', 'value', 'children', *_NODE_OPTIONS}
        if unknown:
            raise ValueError(f"Unknown node keys: {sorted(unknown)}")
        if 'label' not in item:
            raise ValueError("Node dict requires a 'label' key")
        return CheckableNode(
            item['label'],
            item.get('value'),
            icon=item.get('icon'),
            children=_load_children(item.get('children')),
            selected=bool(item.get('selected', False)),
        )
    if isinstance(item, tuple):
        if not 2 <= len(item) <= 4:
            raise ValueError(
                f"Node tuple must have 2 to 4 items, got {len(item)}"
            )
        label, value = item[0], item[1]
        children = item[2] if len(item) > 2 else None
        options = (item[3] if len(item) > 3 else None) or {}
        unknown = set(options) - set(_NODE_OPTIONS)
        if unknown:
            raise ValueError(f"Unknown node options: {sorted(unknown)}")
        return CheckableNode(
            label,
            value,
            icon=options.get('icon'),
            children=_load_children(children),
            selected=bool(options.get('selected', False)),
        )
    raise TypeError(
        f"list items must be CheckableNode, tuple or dict, not {type(item).__name__}"
    )


def _load_children(children: list | dict | None) -> list[CheckableNode]:
    if children is None:
        return []
    if isinstance(children, dict):
        return load_from_dict(children)
    if isinstance(children, list):
        return load_from_list(children)
    raise TypeError(
        f"children must be list or dict, not {type(children).__name__}"
    )


def load_from_dict(data: dict[Any, Any]) -> list[CheckableNode]:
    """Convert a nested dict into nodes, using '_' keys as node options.

    Example:
        >>> load_from_dict({
        ...     'src': {'_value': 'src', 'main.js': 'main_js'},
        ...     'README': 'readme',
        ... })
    """
    nodes = []
    for label, value in data.items():
        if isinstance(label, str) and label.startswith('_'):
            continue
        if isinstance(value, dict):
            options = {
                key[1:]: val for key, val in value.items()
                if isinstance(key, str) and key.startswith('_')
            }
            unknown = set(options) - {'value', *_NODE_OPTIONS}
            if unknown:
                raise ValueError(f"Unknown node options: {sorted(unknown)}")
            nodes.append(CheckableNode(
                label,
                options.get('value'),
                icon=options.get('icon'),
                children=load_from_dict(value),
                selected=bool(options.get('selected', False)),
            ))
        else:
            nodes.append(CheckableNode(label, value))
    return nodes
