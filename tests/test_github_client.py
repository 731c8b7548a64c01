import pytest
import requests

from profilebrowser.services import (
    FetchError,
    GitHubService,
    TransportError,
    UserNotFoundError,
)
from profilebrowser.state import UserSummary

from conftest import FakeResponse, make_user


def test_session_headers_are_set(service, session, config):
    assert session.headers["Accept"] == "application/vnd.github+json"
    assert session.headers["User-Agent"] == config.user_agent


def test_list_users_sends_page_and_offset(service, session):
    users = service.list_users(per_page=5, since=1000)

    assert session.calls == [
        {
            "url": "https://api.example.test/users",
            "params": {"per_page": 5, "since": 1000},
            "timeout": 3.0,
        }
    ]
    assert [user.id for user in users] == [1001, 1002, 1003, 1004, 1005]
    assert all(isinstance(user, UserSummary) for user in users)
    # le point d'accès /users ne renvoie pas les champs détaillés
    assert users[0].name is None
    assert users[0].follower_count is None


def test_list_users_error_status(service, session):
    session.handler = lambda url, params: FakeResponse(500, {"message": "oops"})
    with pytest.raises(FetchError, match="Failed to fetch profiles") as excinfo:
        service.list_users(per_page=3, since=0)
    assert excinfo.value.status_code == 500


def test_list_users_404_is_a_plain_fetch_error(service, session):
    session.handler = lambda url, params: FakeResponse(404, {})
    with pytest.raises(FetchError) as excinfo:
        service.list_users(per_page=3, since=0)
    assert not isinstance(excinfo.value, UserNotFoundError)


def test_list_users_rejects_non_list_payload(service, session):
    session.handler = lambda url, params: FakeResponse(200, {"id": 1})
    with pytest.raises(TransportError):
        service.list_users(per_page=1, since=0)


def test_invalid_json_is_a_transport_error(service, session, invalid_json):
    session.handler = lambda url, params: FakeResponse(200, invalid_json)
    with pytest.raises(TransportError, match="Invalid JSON"):
        service.list_users(per_page=1, since=0)


def test_malformed_record_is_a_transport_error(service, session):
    session.handler = lambda url, params: FakeResponse(200, [{"login": "no-id"}])
    with pytest.raises(TransportError, match="Malformed"):
        service.list_users(per_page=1, since=0)


def test_get_user_returns_full_profile(service, session):
    record = make_user(
        583231,
        "octocat",
        name="The Octocat",
        bio=None,
        location="San Francisco",
        public_repos=8,
        followers=9000,
        following=0,
    )
    session.handler = lambda url, params: FakeResponse(200, record)

    user = service.get_user("octocat")

    assert session.calls[0]["url"] == "https://api.example.test/users/octocat"
    assert session.calls[0]["params"] is None
    assert user.login == "octocat"
    assert user.name == "The Octocat"
    assert user.bio is None
    assert user.location == "San Francisco"
    assert user.public_repo_count == 8
    assert user.following_count == 0
    assert user.profile_url == "https://github.com/octocat"


def test_get_user_quotes_the_login(service, session):
    session.handler = lambda url, params: FakeResponse(404, {})
    with pytest.raises(UserNotFoundError):
        service.get_user("a b/c")
    assert session.calls[0]["url"] == "https://api.example.test/users/a%20b%2Fc"


def test_get_user_not_found(service, session):
    session.handler = lambda url, params: FakeResponse(404, {"message": "Not Found"})
    with pytest.raises(UserNotFoundError) as excinfo:
        service.get_user("zzz-does-not-exist-zzz")
    assert "zzz-does-not-exist-zzz" in str(excinfo.value)
    assert excinfo.value.status_code == 404
    assert isinstance(excinfo.value, FetchError)


def test_get_user_other_error(service, session):
    session.handler = lambda url, params: FakeResponse(403, {"message": "rate limited"})
    with pytest.raises(FetchError, match="Failed to fetch user"):
        service.get_user("octocat")


def test_network_failure_is_a_transport_error(service, session):
    def refuse(url, params):
        raise requests.ConnectionError("connection refused")

    session.handler = refuse
    with pytest.raises(TransportError, match="connection refused"):
        service.get_user("octocat")


def test_close_closes_session(config, session):
    GitHubService(config, session=session).close()
    assert session.closed
