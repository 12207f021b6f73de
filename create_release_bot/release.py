"""
Releasing a pull request when it merges.

A pull request opts in by having the PENDING_LABEL when it closes.  If it was
merged, the label is swapped for MERGED_LABEL, a new tag is made on its head
commit, a release is made from the tag, and a comment links to the release.
If it was closed without merging, the PENDING_LABEL is just removed.

Each step is a separate call to GitHub.  The first one to fail stops the
sequence, and what was already done stays done.
"""

from __future__ import annotations

import datetime
import enum
from dataclasses import dataclass, field
from typing import List, Optional

from create_release_bot import logger
from create_release_bot.errors import ReleaseBotError
from create_release_bot.labels import (
    MERGED_LABEL,
    PENDING_LABEL,
    RELEASE_COMMENT_PREFIX,
    RELEASE_NAME_PREFIX,
    TAGGER_EMAIL,
    TAGGER_NAME,
)
from create_release_bot.types import PrAction, PullRequest, PullRequestEvent, Release
from create_release_bot.versions import TagPolicy, next_tag


def patchable_now() -> datetime.datetime:
    """Current time, in a way that freezegun can monkeypatch."""
    return datetime.datetime.now(datetime.timezone.utc)


class ReleaseOutcome(enum.Enum):
    # The event isn't a pull request closing.
    IGNORED = "ignored"
    # The pull request closed, but didn't ask for a release.
    NOT_PENDING = "not_pending"
    # Merged: tagged, released, and commented.
    RELEASED = "released"
    # Closed without merging: the pending label was removed.
    PENDING_CLEARED = "pending_cleared"


@dataclass
class ReleaseResult:
    """
    Return value from pull_request_event.
    """
    outcome: ReleaseOutcome
    # The tag and release created, if any.
    tag: Optional[str] = None
    release: Optional[Release] = None
    # Label changes GitHub confirmed, in the order they were made.
    removed_labels: List[str] = field(default_factory=list)
    added_labels: List[str] = field(default_factory=list)

    def progress(self) -> str:
        """What was done, for logging a run that stopped partway."""
        release_url = self.release.html_url if self.release else None
        return (
            f"removed labels {self.removed_labels}, added labels {self.added_labels}, "
            f"tag {self.tag}, release {release_url}"
        )


def release_comment(release: Release) -> str:
    return f"{RELEASE_COMMENT_PREFIX} {release.html_url}"


def pull_request_event(
    event: PullRequestEvent,
    actions,
    policy: TagPolicy = TagPolicy.ROLLOVER,
) -> ReleaseResult:
    """
    Handle one pull request event.

    `actions` makes the changes on GitHub (see GitHubReleaseActions).

    Returns a ReleaseResult saying what was done.  Any failure is raised
    as-is, after whatever steps preceded it, and what those steps did is
    logged.
    """
    pr = event.pull_request
    if event.action is not PrAction.CLOSED:
        logger.info(f"PR #{pr.number} action {event.raw_action!r}, nothing to do")
        return ReleaseResult(ReleaseOutcome.IGNORED)

    if not pr.has_label(PENDING_LABEL):
        logger.info(f"PR #{pr.number} closed without {PENDING_LABEL!r}, nothing to do")
        return ReleaseResult(ReleaseOutcome.NOT_PENDING)

    releaser = PrReleaser(pr, actions, policy=policy)
    try:
        if pr.merged:
            releaser.release()
        else:
            releaser.clear_pending()
    except ReleaseBotError:
        logger.error(f"PR #{pr.number} stopped partway, done so far: {releaser.result().progress()}")
        raise
    return releaser.result()


class PrReleaser:
    """
    The steps of releasing a closed pull request, one GitHub call at a time.
    """

    def __init__(self, pr: PullRequest, actions, policy: TagPolicy = TagPolicy.ROLLOVER) -> None:
        self.pr = pr
        self.actions = actions
        self.policy = policy
        self.release_result = ReleaseResult(ReleaseOutcome.NOT_PENDING)

    def result(self) -> ReleaseResult:
        return self.release_result

    def release(self) -> None:
        """
        The merged pull request: swap labels, tag, release, comment.
        """
        logger.info(f"PR #{self.pr.number} merged with {PENDING_LABEL!r}, releasing")
        self._swap_labels()
        tag = self._create_tag()
        release = self._create_release(tag)
        self.actions.create_comment(number=self.pr.number, body=release_comment(release))
        self.release_result.outcome = ReleaseOutcome.RELEASED
        logger.info(f"PR #{self.pr.number} released as {tag}: {release.html_url}")

    def clear_pending(self) -> None:
        """
        The pull request closed without merging: no release after all.
        """
        logger.info(f"PR #{self.pr.number} closed unmerged, removing {PENDING_LABEL!r}")
        self._remove_label(PENDING_LABEL)
        self.release_result.outcome = ReleaseOutcome.PENDING_CLEARED

    def _remove_label(self, label: str) -> None:
        self.actions.remove_label(number=self.pr.number, label=label)
        self.release_result.removed_labels.append(label)

    def _add_label(self, label: str) -> None:
        self.actions.add_label(number=self.pr.number, label=label)
        self.release_result.added_labels.append(label)

    def _swap_labels(self) -> None:
        # Removing first means a failure in between leaves the pull request
        # with neither label, never with both.
        self._remove_label(PENDING_LABEL)
        self._add_label(MERGED_LABEL)

    def _create_tag(self) -> str:
        releases = self.actions.list_releases()
        tag_name = next_tag([rel.tag_name for rel in releases], policy=self.policy)
        if releases:
            logger.info(f"Latest release is {releases[0].tag_name}, next is {tag_name}")
        else:
            logger.info(f"No releases yet, starting at {tag_name}")
        tag = self.actions.create_tag(
            tag_name=tag_name,
            sha=self.pr.head_sha,
            message=tag_name,
            tagger_name=TAGGER_NAME,
            tagger_email=TAGGER_EMAIL,
            timestamp=patchable_now(),
        )
        self.release_result.tag = tag
        return tag

    def _create_release(self, tag: str) -> Release:
        release = self.actions.create_release(
            tag_name=tag,
            name=RELEASE_NAME_PREFIX + tag,
        )
        self.release_result.release = release
        return release
