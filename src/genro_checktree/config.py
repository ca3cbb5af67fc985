# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""CheckableTree configuration model."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class TreeViewConfig(BaseModel):
    """Options controlling initial expansion and the header controls."""

    initial_expanded_levels: Optional[int] = Field(
        default=None,
        ge=0,
        description=(
            "Levels expanded at start: None expands nothing, 0 expands "
            "everything, N expands nodes shallower than depth N"
        ),
    )
    show_select_all: bool = Field(
        default=False,
        description="Whether the header 'select all' checkbox is available",
    )
    show_expand_collapse_button: bool = Field(
        default=False,
        description="Whether the header expand/collapse-all button is available",
    )

    model_config = {
        "extra": "forbid",
        "frozen": True,
    }
