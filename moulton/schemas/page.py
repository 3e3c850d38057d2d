from __future__ import annotations

import enum

from pydantic import BaseModel


class PageState(str, enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS_DISPLAY = "success_display"
    CONFIRMED_DISPLAY = "confirmed_display"


class IndexPage(BaseModel):
    """Everything the landing page needs, rebuilt on every load."""

    is_success: bool = False
    is_confirmed: bool = False
    is_error: bool = False
    days_until_next_issue: int = 0

    @property
    def state(self) -> PageState:
        # the provider's confirmation link wins over a fresh signup flash
        if self.is_confirmed:
            return PageState.CONFIRMED_DISPLAY
        if self.is_success:
            return PageState.SUCCESS_DISPLAY
        return PageState.IDLE

    @property
    def show_form(self) -> bool:
        return self.state is PageState.IDLE

    @property
    def next_issue_label(self) -> str:
        days = self.days_until_next_issue
        if days <= 0:
            return "today!"
        return f"in {days} day{'s' if days > 1 else ''}!"


class ActionError(BaseModel):
    error: bool = True
