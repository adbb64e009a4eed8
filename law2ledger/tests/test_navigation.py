"""
Unit tests for the dashboard view state machine.
"""
from __future__ import annotations

import pytest

from law2ledger.dashboard.navigation import (
    TRANSITIONS,
    NavigationError,
    NavigationEvent,
    NavigationState,
    Tab,
    select_tab,
    start_submission,
    submission_failed,
    submission_succeeded,
)


def test_initial_state():
    state = NavigationState()
    assert state.active_tab == Tab.profile
    assert not state.loading
    assert state.unlocked_tabs == [Tab.profile]


@pytest.mark.parametrize("tab", [Tab.suggestions, Tab.visual])
def test_locked_tabs_rejected_before_intake(tab: Tab):
    state = NavigationState()
    with pytest.raises(NavigationError) as exc_info:
        select_tab(state, tab)
    assert exc_info.value.tab == tab
    assert state.active_tab == Tab.profile


def test_profile_tab_always_selectable():
    state = select_tab(NavigationState(), Tab.profile)
    assert state.active_tab == Tab.profile


def test_successful_submission_moves_to_suggestions():
    state = start_submission(NavigationState())
    assert state.loading
    state = submission_succeeded(state)
    assert state.active_tab == Tab.suggestions
    assert not state.loading
    assert state.unlocked_tabs == [Tab.profile, Tab.suggestions, Tab.visual]


def test_failed_submission_only_clears_loading():
    before = NavigationState()
    after = submission_failed(start_submission(before))
    assert after == before


def test_second_submission_while_loading_rejected():
    state = start_submission(NavigationState())
    with pytest.raises(NavigationError):
        start_submission(state)


def test_tabs_free_after_submission():
    state = submission_succeeded(start_submission(NavigationState()))
    state = select_tab(state, Tab.visual)
    assert state.active_tab == Tab.visual
    state = select_tab(state, Tab.profile)
    assert state.active_tab == Tab.profile
    state = select_tab(state, Tab.suggestions)
    assert state.active_tab == Tab.suggestions


def test_resubmission_allowed_after_success():
    state = submission_succeeded(start_submission(NavigationState()))
    state = select_tab(state, Tab.profile)
    state = start_submission(state)
    assert state.loading
    assert state.has_profile


def test_every_event_has_a_transition():
    assert set(TRANSITIONS) == set(NavigationEvent)


def test_state_is_immutable():
    state = NavigationState()
    with pytest.raises(Exception):
        state.active_tab = Tab.visual


def test_snapshot_round_trip_ignores_derived_field():
    state = submission_succeeded(start_submission(NavigationState()))
    dumped = state.model_dump(by_alias=True, mode="json")
    assert dumped["unlockedTabs"] == ["profile", "suggestions", "visual"]
    assert NavigationState.model_validate(dumped) == state
