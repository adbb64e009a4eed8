"""
navigation.py — Dashboard view state machine.

Tabs: profile (initial) → suggestions → visual.

TRANSITIONS is the single source of truth for which event moves the state
where; TAB_GUARDS says which tabs are unlocked for a given state. Every
transition returns a new NavigationState (the model is frozen), so a
rejected event never leaves a half-applied state behind.

There is no terminal state: a user can always go back to the profile tab
and submit again.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from pydantic import ConfigDict, computed_field

from law2ledger.agents.input_agent.schemas import CamelModel

logger = logging.getLogger(__name__)


class Tab(str, Enum):
    profile = "profile"
    suggestions = "suggestions"
    visual = "visual"


class NavigationEvent(str, Enum):
    submission_started = "submission_started"
    submission_succeeded = "submission_succeeded"
    submission_failed = "submission_failed"
    tab_selected = "tab_selected"


class NavigationError(Exception):
    """Raised when an event is not allowed from the current state."""

    def __init__(self, message: str, tab: Optional[Tab] = None):
        super().__init__(message)
        self.message = message
        self.tab = tab


class NavigationState(CamelModel):
    # unlockedTabs is derived; ignore it when a stored snapshot is read back
    model_config = ConfigDict(frozen=True, extra="ignore")

    active_tab: Tab = Tab.profile
    loading: bool = False
    has_profile: bool = False
    has_summary: bool = False

    @computed_field
    @property
    def unlocked_tabs(self) -> list[Tab]:
        return [tab for tab in Tab if TAB_GUARDS[tab](self)]


# ---------------------------------------------------------------------------
# Guards: a tab is selectable only when its guard holds
# ---------------------------------------------------------------------------

TAB_GUARDS: dict[Tab, Callable[[NavigationState], bool]] = {
    Tab.profile: lambda s: True,
    Tab.suggestions: lambda s: s.has_profile,
    Tab.visual: lambda s: s.has_summary,
}


def is_unlocked(state: NavigationState, tab: Tab) -> bool:
    return TAB_GUARDS[tab](state)


# ---------------------------------------------------------------------------
# Transition handlers
# ---------------------------------------------------------------------------

def _on_submission_started(state: NavigationState, tab: Optional[Tab]) -> NavigationState:
    if state.loading:
        raise NavigationError("A profile submission is already in progress")
    return state.model_copy(update={"loading": True})


def _on_submission_succeeded(state: NavigationState, tab: Optional[Tab]) -> NavigationState:
    return state.model_copy(update={
        "active_tab": Tab.suggestions,
        "loading": False,
        "has_profile": True,
        "has_summary": True,
    })


def _on_submission_failed(state: NavigationState, tab: Optional[Tab]) -> NavigationState:
    return state.model_copy(update={"loading": False})


def _on_tab_selected(state: NavigationState, tab: Optional[Tab]) -> NavigationState:
    if tab is None:
        raise NavigationError("No tab given")
    if not is_unlocked(state, tab):
        raise NavigationError(
            f"The {tab.value} tab is locked until your financial profile is submitted",
            tab=tab,
        )
    return state.model_copy(update={"active_tab": tab})


TRANSITIONS: dict[NavigationEvent, Callable[[NavigationState, Optional[Tab]], NavigationState]] = {
    NavigationEvent.submission_started: _on_submission_started,
    NavigationEvent.submission_succeeded: _on_submission_succeeded,
    NavigationEvent.submission_failed: _on_submission_failed,
    NavigationEvent.tab_selected: _on_tab_selected,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def apply_event(
    state: NavigationState,
    event: NavigationEvent,
    tab: Optional[Tab] = None,
) -> NavigationState:
    """Run one event through the transition table. Raises NavigationError on a rejected event."""
    new_state = TRANSITIONS[event](state, tab)
    logger.debug(
        "Navigation %s: %s → %s loading=%s",
        event.value,
        state.active_tab.value,
        new_state.active_tab.value,
        new_state.loading,
    )
    return new_state


def start_submission(state: NavigationState) -> NavigationState:
    return apply_event(state, NavigationEvent.submission_started)


def submission_succeeded(state: NavigationState) -> NavigationState:
    return apply_event(state, NavigationEvent.submission_succeeded)


def submission_failed(state: NavigationState) -> NavigationState:
    return apply_event(state, NavigationEvent.submission_failed)


def select_tab(state: NavigationState, tab: Tab) -> NavigationState:
    return apply_event(state, NavigationEvent.tab_selected, tab)


__all__ = [
    "Tab",
    "NavigationEvent",
    "NavigationError",
    "NavigationState",
    "TAB_GUARDS",
    "TRANSITIONS",
    "is_unlocked",
    "apply_event",
    "start_submission",
    "submission_succeeded",
    "submission_failed",
    "select_tab",
]
