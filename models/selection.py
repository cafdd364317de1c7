"""
Selection schemas.

Selection is a two-phase state: BROWSING (membership editable) and LOCKED
(rates and preview visible, membership frozen).
"""

from pydantic import Field
from typing import Optional
from enum import Enum

from models.base import BaseSchema, FrozenSchema, Notice
from models.catalog import CollectionSummary


class SelectionPhase(str, Enum):
    """Selection phase."""
    BROWSING = "BROWSING"
    LOCKED = "LOCKED"


class SelectionState(FrozenSchema):
    """Immutable snapshot of the selection."""

    phase: SelectionPhase = SelectionPhase.BROWSING
    selected_ids: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def is_locked(self) -> bool:
        return self.phase == SelectionPhase.LOCKED

    def contains(self, collection_id: str) -> bool:
        return collection_id in self.selected_ids


class SelectionResponse(BaseSchema):
    """Selection state plus the numbers the screen shows next to it."""

    phase: SelectionPhase
    selected_ids: list[str]
    all_selected: bool
    summary: CollectionSummary
    accepted: bool = True
    notice: Optional[Notice] = None
