# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""CheckableTree engine package - selection, filtering, sorting, expansion.

The package is organized into:
- core: Main CheckableTree class with propagation, filter, sort and queries
- loading: Functions for building nodes from list or dict sources
- subscription: Selection-changed listener registry

Example:
    >>> from genro_checktree import CheckableTree
    >>> tree = CheckableTree([('Root', 'root', [('Leaf', 'leaf')])])
    >>> tree.select(tree.get_node('#0.#0'))
    >>> tree.get_selected_values()
    ['root', 'leaf']
"""

from .core import CheckableTree
from .loading import load_from_dict, load_from_list, load_nodes

__all__ = ["CheckableTree", "load_from_dict", "load_from_list", "load_nodes"]
