"""Automatically run by pytest to set up test infrastructure."""

import pytest
import requests_mock

from create_release_bot.actions import GitHubReleaseActions
from create_release_bot.auth import get_github_session
from create_release_bot.types import RepoId

from . import settings as test_settings
from .fake_github import FakeGitHub


@pytest.fixture
def requests_mocker():
    """Make requests_mock available as a fixture."""
    mocker = requests_mock.Mocker(real_http=False, case_sensitive=True)
    mocker.start()
    try:
        yield mocker
    finally:
        mocker.stop()


@pytest.fixture
def fake_github(requests_mocker):
    the_fake_github = FakeGitHub(login="release-bot")
    the_fake_github.install_mocks(requests_mocker)
    return the_fake_github


@pytest.fixture
def bot_environ(monkeypatch):
    """
    Set the environment variables the bot needs.

    Returns the dict of them, for tests that want to change some.
    """
    for name in ["INPUT_GITHUB_EVENT", "GITHUB_EVENT_PATH", "GITHUB_API_URL",
                 "INPUT_TAG_POLICY", "INPUT_REQUEST_TIMEOUT", "SENTRY_DSN"]:
        monkeypatch.delenv(name, raising=False)
    for name, value in test_settings.TEST_ENVIRON.items():
        monkeypatch.setenv(name, value)
    return dict(test_settings.TEST_ENVIRON)


@pytest.fixture
def github_session():
    return get_github_session(test_settings.GITHUB_TOKEN)


@pytest.fixture
def github_actions(fake_github, github_session):
    """Release actions on the an-org/a-repo repo."""
    return GitHubReleaseActions(RepoId("an-org", "a-repo"), github_session)


@pytest.fixture(params=[
    pytest.param(False, id="pr:closed"),
    pytest.param(True, id="pr:merged"),
])
def is_merged(request):
    """Makes tests try both merged and closed pull requests."""
    return request.param
