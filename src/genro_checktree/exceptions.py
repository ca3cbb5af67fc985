# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""CheckableTree exceptions."""

from __future__ import annotations


class CheckTreeError(Exception):
    """Base exception for CheckableTree errors."""

    pass


class NodeNotFoundError(CheckTreeError, KeyError):
    """Raised when a positional path does not resolve to a node."""

    pass


class FeatureDisabledError(CheckTreeError):
    """Raised when a header action is used while its config flag is off."""

    pass
