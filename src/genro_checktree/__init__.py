# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-CheckTree - Tri-state checkable tree state engine.

A lightweight library holding the state behind checkable tree views:
selection with parent/child propagation, filtering, sorting and expansion.
Rendering is left to the caller.
"""

__version__ = "0.1.0"

from .config import TreeViewConfig
from .engine import CheckableTree
from .exceptions import (
    CheckTreeError,
    FeatureDisabledError,
    NodeNotFoundError,
)
from .intent import TOGGLE, SelectionIntent, SetTo, Toggle
from .node import CheckableNode

__all__ = [
    # Core classes
    "CheckableTree",
    "CheckableNode",
    "TreeViewConfig",
    # Selection intents
    "SetTo",
    "Toggle",
    "TOGGLE",
    "SelectionIntent",
    # Exceptions
    "CheckTreeError",
    "NodeNotFoundError",
    "FeatureDisabledError",
]
