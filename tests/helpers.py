"""Helpers for tests."""

from typing import Dict, List, Optional, Tuple

from create_release_bot.errors import RemoteCallError
from create_release_bot.labels import PENDING_LABEL
from create_release_bot.types import Label, PrAction, PullRequest, PullRequestEvent, Release


class RecordingActions:
    """
    Release actions that make no calls, only record them.

    `releases` is what list_releases returns.  Name a method in `fail_on` to
    make it raise RemoteCallError instead.
    """

    def __init__(self, releases: Optional[List[Release]] = None, fail_on: Optional[str] = None):
        self.releases = releases or []
        self.fail_on = fail_on
        self.calls: List[Tuple[str, Dict]] = []

    def _call(self, name, /, **kwargs):
        self.calls.append((name, kwargs))
        if name == self.fail_on:
            raise RemoteCallError(f"{name} failed")

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def list_releases(self) -> List[Release]:
        self._call("list_releases")
        return list(self.releases)

    def create_tag(self, **kwargs) -> str:
        self._call("create_tag", **kwargs)
        return kwargs["tag_name"]

    def create_release(self, **kwargs) -> Release:
        self._call("create_release", **kwargs)
        return Release(
            tag_name=kwargs["tag_name"],
            name=kwargs["name"],
            html_url=f"https://github.com/an-org/a-repo/releases/tag/{kwargs['tag_name']}",
        )

    def add_label(self, **kwargs) -> None:
        self._call("add_label", **kwargs)

    def remove_label(self, **kwargs) -> None:
        self._call("remove_label", **kwargs)

    def create_comment(self, **kwargs) -> None:
        self._call("create_comment", **kwargs)


def make_event(
    action: str = "closed",
    merged: bool = True,
    labels=(PENDING_LABEL,),
    number: int = 42,
    head_sha: str = "0123456789abcdef0123456789abcdef01234567",
) -> PullRequestEvent:
    """Make a PullRequestEvent without going through JSON."""
    pr = PullRequest(
        number=number,
        merged=merged,
        head_sha=head_sha,
        labels=frozenset(Label(name) for name in labels),
    )
    return PullRequestEvent(action=PrAction.from_name(action), pull_request=pr, raw_action=action)


def release(tag_name: str) -> Release:
    """An existing release."""
    return Release(tag_name, f"Release {tag_name}", f"https://github.com/an-org/a-repo/releases/tag/{tag_name}")
