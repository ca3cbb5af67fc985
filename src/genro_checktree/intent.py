# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Selection intents - what a checkbox click asks the engine to do.

A click either sets an explicit state or asks the engine to flip the
node based on its current tri-state:

    >>> tree.toggle_selection(node, SetTo(True))
    >>> tree.toggle_selection(node, TOGGLE)

TOGGLE deselects a node that is selected or partially selected and
selects it otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .node import CheckableNode


@dataclass(frozen=True)
class SetTo:
    """Set the node (and its visible subtree) to an explicit state."""

    selected: bool

    def resolve(self, node: CheckableNode) -> bool:
        return self.selected


class Toggle:
    """Flip the node according to its current tri-state."""

    __slots__ = ()

    def __repr__(self) -> str:
        return 'TOGGLE'

    def resolve(self, node: CheckableNode) -> bool:
        return not (node.selected or node.partially_selected)


TOGGLE = Toggle()

SelectionIntent = Union[SetTo, Toggle]


def as_intent(intent: SelectionIntent | bool) -> SelectionIntent:
    """Normalize a plain bool into SetTo, pass intents through.

    Raises:
        TypeError: If intent is neither a bool nor a SelectionIntent.
    """
    if isinstance(intent, (SetTo, Toggle)):
        return intent
    if isinstance(intent, bool):
        return SetTo(intent)
    raise TypeError(
        f"intent must be SetTo, TOGGLE or bool, not {type(intent).__name__}"
    )
