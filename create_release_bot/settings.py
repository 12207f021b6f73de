"""Settings for how the bot should behave, read from the environment."""

import dataclasses
import os
from pathlib import Path
from typing import Mapping, Optional

from create_release_bot.errors import ConfigError
from create_release_bot.types import RepoId
from create_release_bot.versions import TagPolicy

DEFAULT_API_URL = "https://api.github.com"

# Seconds to wait for any one GitHub request.
DEFAULT_REQUEST_TIMEOUT = 30.0

# The required settings: environment variable, and what to call it when it's
# missing.  They are checked in this order.
REQUIRED_SETTINGS = [
    ("INPUT_REPO_OWNER", "repo owner"),
    ("INPUT_REPO_NAME", "repo name"),
    ("INPUT_BASE_BRANCH", "base branch"),
    ("INPUT_TARGET_BRANCH", "target branch"),
    ("INPUT_GITHUB_TOKEN", "github token"),
]


@dataclasses.dataclass(frozen=True)
class Settings:
    repo_owner: str
    repo_name: str
    # The branches are accepted for compatibility with existing workflows,
    # but nothing decides anything based on them.
    base_branch: str
    target_branch: str
    token: str = dataclasses.field(repr=False)
    event_payload: str = dataclasses.field(default="", repr=False)
    api_url: str = DEFAULT_API_URL
    tag_policy: TagPolicy = TagPolicy.ROLLOVER
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def repo(self) -> RepoId:
        return RepoId(self.repo_owner, self.repo_name)


def read_event_payload(environ: Mapping[str, str]) -> str:
    """
    Find the JSON payload of the event that triggered us.

    INPUT_GITHUB_EVENT has it directly.  Otherwise GITHUB_EVENT_PATH, set by
    GitHub Actions, names a file with it.  Returns "" if there's neither.
    """
    payload = environ.get("INPUT_GITHUB_EVENT", "")
    if payload:
        return payload
    event_path = environ.get("GITHUB_EVENT_PATH", "")
    if event_path:
        try:
            return Path(event_path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"couldn't read GITHUB_EVENT_PATH {event_path!r}: {exc}") from exc
    return ""


def _read_tag_policy(value: Optional[str]) -> TagPolicy:
    if not value:
        return TagPolicy.ROLLOVER
    try:
        return TagPolicy(value.strip().lower())
    except ValueError:
        choices = ", ".join(p.value for p in TagPolicy)
        raise ConfigError(f"INPUT_TAG_POLICY must be one of {choices}, not {value!r}") from None


def _read_timeout(value: Optional[str]) -> float:
    if not value:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigError(f"INPUT_REQUEST_TIMEOUT must be a number of seconds, not {value!r}") from None
    if timeout <= 0:
        raise ConfigError(f"INPUT_REQUEST_TIMEOUT must be positive, not {value!r}")
    return timeout


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Read the settings from the environment.

    Raises ConfigError if a required value is missing or a value is invalid.
    """
    if environ is None:
        environ = os.environ

    required = {}
    for name, description in REQUIRED_SETTINGS:
        value = environ.get(name, "")
        if not value:
            raise ConfigError(f"missing {description} ({name})")
        required[name] = value

    return Settings(
        repo_owner=required["INPUT_REPO_OWNER"],
        repo_name=required["INPUT_REPO_NAME"],
        base_branch=required["INPUT_BASE_BRANCH"],
        target_branch=required["INPUT_TARGET_BRANCH"],
        token=required["INPUT_GITHUB_TOKEN"],
        event_payload=read_event_payload(environ),
        api_url=environ.get("GITHUB_API_URL") or DEFAULT_API_URL,
        tag_policy=_read_tag_policy(environ.get("INPUT_TAG_POLICY")),
        request_timeout=_read_timeout(environ.get("INPUT_REQUEST_TIMEOUT")),
    )
