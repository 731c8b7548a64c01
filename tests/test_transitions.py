import pytest

from profilebrowser import transitions
from profilebrowser.state import Mode, UserSummary, ViewState


def _profile(user_id: int) -> UserSummary:
    return UserSummary(
        id=user_id,
        login=f"user{user_id}",
        avatar_url="https://avatars.example/u",
        profile_url=f"https://github.com/user{user_id}",
    )


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("25", 25),
        (" 7 ", 7),
        ("12abc", 12),
        ("12.7", 12),
        ("0", 1),
        ("-5", 1),
        ("100", 100),
        ("101", 100),
        ("99999999999999999999", 100),
        ("", 10),
        ("abc", 10),
        (None, 10),
        (42, 42),
        (-3, 1),
        (250, 100),
    ],
)
def test_parse_count_is_clamped(raw, expected):
    assert transitions.parse_count(raw) == expected


def test_set_count_returns_new_state():
    state = ViewState()
    new_state = transitions.set_count(state, "55")
    assert new_state.requested_count == 55
    assert state.requested_count == 10


def test_set_username_keeps_raw_text():
    state = transitions.set_username(ViewState(), "  octocat  ")
    assert state.username_query == "  octocat  "


def test_set_mode_keeps_profiles_and_error():
    state = ViewState(profiles=(_profile(1),), error_message="boom")
    new_state = transitions.set_mode(state, Mode.USERNAME)
    assert new_state.mode is Mode.USERNAME
    assert new_state.profiles == state.profiles
    assert new_state.error_message == "boom"


def test_clear_resets_query_profiles_and_error_only():
    state = ViewState(
        profiles=(_profile(1),),
        requested_count=42,
        username_query="octocat",
        error_message="boom",
        mode=Mode.USERNAME,
    )
    cleared = transitions.clear(state)
    assert cleared.username_query == ""
    assert cleared.profiles == ()
    assert cleared.error_message is None
    assert cleared.mode is Mode.USERNAME
    assert cleared.requested_count == 42


def test_begin_request_sets_loading_and_clears_error():
    state = transitions.begin_request(ViewState(error_message="old"))
    assert state.is_loading is True
    assert state.error_message is None


def test_batch_failed_keeps_stale_profiles():
    state = ViewState(profiles=(_profile(1), _profile(2)), is_loading=True)
    failed = transitions.batch_failed(state, "Failed to fetch profiles")
    assert failed.profiles == state.profiles
    assert failed.error_message == "Failed to fetch profiles"
    assert failed.is_loading is False


def test_user_failed_drops_profiles():
    state = ViewState(profiles=(_profile(1),), is_loading=True, mode=Mode.USERNAME)
    failed = transitions.user_failed(state, "User 'x' not found")
    assert failed.profiles == ()
    assert failed.is_loading is False


def test_success_transitions_set_mode():
    loading = ViewState(is_loading=True, mode=Mode.USERNAME)
    batch = transitions.batch_succeeded(loading, [_profile(1), _profile(2)])
    assert batch.mode is Mode.RANDOM
    assert batch.profiles == (_profile(1), _profile(2))
    assert batch.is_loading is False

    single = transitions.user_succeeded(ViewState(is_loading=True), _profile(3))
    assert single.mode is Mode.USERNAME
    assert single.profiles == (_profile(3),)


def test_reject_input_does_not_touch_loading():
    state = transitions.reject_input(ViewState(), "Please enter a username")
    assert state.error_message == "Please enter a username"
    assert state.is_loading is False
