import pytest

from profilebrowser.state import UserSummary

from conftest import make_user


def test_user_summary_from_abbreviated_record():
    user = UserSummary.from_api(make_user(1, "mojombo", name=""))

    assert user.login == "mojombo"
    assert user.profile_url == "https://github.com/mojombo"
    assert user.name is None
    assert user.bio is None
    assert user.public_repo_count is None
    assert user.follower_count is None


def test_user_summary_keeps_zero_counts_and_drops_null_text():
    user = UserSummary.from_api(
        make_user(2, "defunkt", bio=None, location="", public_repos=0, followers=0, following=3)
    )

    assert user.bio is None
    assert user.location is None
    assert user.public_repo_count == 0
    assert user.follower_count == 0
    assert user.following_count == 3


def test_user_summary_requires_identity_fields():
    with pytest.raises(KeyError):
        UserSummary.from_api({"login": "no-id"})
