"""
Collection selection state machine.

    BROWSING --confirm (non-empty)--> LOCKED
    LOCKED   --reselect-------------> BROWSING (selection kept)

Membership changes are only accepted while BROWSING; in LOCKED they are
ignored and reported as not accepted.
"""

from dataclasses import dataclass
from typing import Iterable, Optional
import structlog

from models.base import Notice
from models.selection import SelectionPhase, SelectionState

logger = structlog.get_logger(__name__)

EMPTY_SELECTION_MESSAGE = "Select a collection first."


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of one selection operation."""
    accepted: bool
    state: SelectionState
    notice: Optional[Notice] = None


class SelectionStateMachine:
    """
    Holds the current SelectionState and applies transitions to it.

    Usage:
        machine = SelectionStateMachine()
        machine.toggle("gid://shopify/Collection/1")
        result = machine.confirm()
    """

    def __init__(self, state: Optional[SelectionState] = None):
        self._state = state or SelectionState()

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def phase(self) -> SelectionPhase:
        return self._state.phase

    @property
    def selected_ids(self) -> tuple[str, ...]:
        return self._state.selected_ids

    @property
    def is_locked(self) -> bool:
        return self._state.is_locked

    # ===================
    # HELPERS
    # ===================

    def _accept(self, state: SelectionState, notice: Optional[Notice] = None) -> TransitionResult:
        self._state = state
        return TransitionResult(accepted=True, state=state, notice=notice)

    def _ignore(self, operation: str, notice: Optional[Notice] = None) -> TransitionResult:
        logger.debug("selection_operation_ignored", operation=operation, phase=self.phase.value)
        return TransitionResult(accepted=False, state=self._state, notice=notice)

    def all_selected(self, collection_ids: Iterable[str]) -> bool:
        """True when every given id is selected (and there is at least one)."""
        ids = list(collection_ids)
        return bool(ids) and all(self._state.contains(c) for c in ids)

    # ===================
    # TRANSITIONS
    # ===================

    def toggle(self, collection_id: str) -> TransitionResult:
        """Add or remove one collection. Ignored while LOCKED."""
        if self.is_locked:
            return self._ignore("toggle")

        current = self._state.selected_ids
        if collection_id in current:
            selected = tuple(c for c in current if c != collection_id)
        else:
            selected = current + (collection_id,)

        return self._accept(SelectionState(phase=SelectionPhase.BROWSING, selected_ids=selected))

    def select_all(self, collection_ids: Iterable[str]) -> TransitionResult:
        """Select every given collection, in the given order. Ignored while LOCKED."""
        if self.is_locked:
            return self._ignore("select_all")

        selected = tuple(dict.fromkeys(collection_ids))
        return self._accept(SelectionState(phase=SelectionPhase.BROWSING, selected_ids=selected))

    def deselect_all(self) -> TransitionResult:
        """Clear the selection. Ignored while LOCKED."""
        if self.is_locked:
            return self._ignore("deselect_all")

        return self._accept(SelectionState(phase=SelectionPhase.BROWSING))

    def toggle_all(self, collection_ids: Iterable[str]) -> TransitionResult:
        """Deselect all when everything is selected, otherwise select all."""
        ids = list(collection_ids)
        if self.all_selected(ids):
            return self.deselect_all()
        return self.select_all(ids)

    def confirm(self) -> TransitionResult:
        """
        Lock the selection.

        With nothing selected the state is unchanged and the result carries
        the "Select a collection first." notice.
        """
        if self.is_locked:
            return self._ignore("confirm")

        if not self._state.selected_ids:
            logger.info("selection_confirm_rejected", reason="empty")
            return self._ignore("confirm", Notice(error=True, message=EMPTY_SELECTION_MESSAGE))

        logger.info("selection_locked", selected=len(self._state.selected_ids))
        return self._accept(self._state.model_copy(update={"phase": SelectionPhase.LOCKED}))

    def reselect(self) -> TransitionResult:
        """Unlock the selection, keeping the chosen collections."""
        if not self.is_locked:
            return self._ignore("reselect")

        logger.info("selection_unlocked", selected=len(self._state.selected_ids))
        return self._accept(self._state.model_copy(update={"phase": SelectionPhase.BROWSING}))
