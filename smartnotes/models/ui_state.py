"""
Ambient UI state consumed by the view projection.

None of this is part of a Note: it describes what the presentation layer
is currently showing.
"""

from enum import Enum

from pydantic import BaseModel, Field

from smartnotes.models.note import SortOption, ViewMode


class ViewState(BaseModel):
    """Current list view, search term, sort, selection and mobile layout flag."""

    view_mode: ViewMode = ViewMode.ACTIVE
    search_term: str = ""
    sort: SortOption = SortOption.UPDATED
    selected_note_id: str | None = None
    is_mobile_list_visible: bool = True


class ConfirmationStatus(str, Enum):
    """States of the permanent-delete confirmation."""

    IDLE = "idle"
    PENDING = "pending"


class DeleteConfirmation(BaseModel):
    """
    Two-phase gate in front of permanent deletion.

    Transitions:
    - request(id): idle|pending -> pending(id)
    - cancel():    pending -> idle, no side effects
    - reset():     -> idle, called by the engine once a confirm attempt ends
    """

    status: ConfirmationStatus = ConfirmationStatus.IDLE
    note_id: str | None = None
    is_deleting: bool = Field(default=False, description="Store delete in flight")

    @property
    def is_open(self) -> bool:
        """Whether the confirmation prompt should be shown."""
        return self.status == ConfirmationStatus.PENDING

    def request(self, note_id: str) -> None:
        self.status = ConfirmationStatus.PENDING
        self.note_id = note_id

    def cancel(self) -> None:
        if self.is_deleting:
            # A confirm is already running; it resets the state itself
            return
        self.reset()

    def reset(self) -> None:
        self.status = ConfirmationStatus.IDLE
        self.note_id = None
        self.is_deleting = False
