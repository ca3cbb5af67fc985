# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Selection-changed subscriptions for CheckableTree."""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

SelectionCallback = Callable[[list[Any]], Any]


class SubscriptionMixin:
    """Keyed registry of selection listeners.

    The primary callback given to the tree constructor always fires
    first; subscribers follow in registration order. Every listener
    receives the complete list of selected values, never a diff.

    Exceptions raised by a listener are not caught: they propagate to
    whoever called the mutating operation.
    """

    __slots__ = ()

    _on_selection_changed: SelectionCallback | None
    _subscribers: dict[str, SelectionCallback]
    get_selected_values: Callable[[], list[Any]]

    def subscribe(self, subscriber_id: str, callback: SelectionCallback) -> None:
        """Register callback under subscriber_id, replacing any previous one.

        Example:
            >>> tree.subscribe('panel', lambda values: print(values))
        """
        self._subscribers[subscriber_id] = callback

    def unsubscribe(self, subscriber_id: str) -> None:
        """Remove the subscriber registered under subscriber_id, if any."""
        self._subscribers.pop(subscriber_id, None)

    def _notify_selection_changed(self) -> None:
        values = self.get_selected_values()
        logger.debug(
            "Notifying %d listener(s): %d value(s) selected",
            len(self._subscribers) + (self._on_selection_changed is not None),
            len(values),
        )
        if self._on_selection_changed is not None:
            self._on_selection_changed(list(values))
        for callback in list(self._subscribers.values()):
            callback(list(values))
