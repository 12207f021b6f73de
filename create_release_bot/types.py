"""Types specific to create_release_bot."""

from __future__ import annotations

import dataclasses
import enum
from typing import Dict, FrozenSet, Optional

# A release as described by a JSON object.
ReleaseDict = Dict


class PrAction(enum.Enum):
    """
    The `action` of a GitHub pull_request event.

    Actions GitHub adds in the future come through as UNHANDLED rather than
    being mistaken for one we know.
    """
    OPENED = "opened"
    EDITED = "edited"
    CLOSED = "closed"
    REOPENED = "reopened"
    SYNCHRONIZE = "synchronize"
    LABELED = "labeled"
    UNLABELED = "unlabeled"
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"
    REVIEW_REQUESTED = "review_requested"
    REVIEW_REQUEST_REMOVED = "review_request_removed"
    READY_FOR_REVIEW = "ready_for_review"
    CONVERTED_TO_DRAFT = "converted_to_draft"
    LOCKED = "locked"
    UNLOCKED = "unlocked"
    AUTO_MERGE_ENABLED = "auto_merge_enabled"
    AUTO_MERGE_DISABLED = "auto_merge_disabled"
    ENQUEUED = "enqueued"
    DEQUEUED = "dequeued"
    MILESTONED = "milestoned"
    DEMILESTONED = "demilestoned"
    UNHANDLED = "unhandled"

    @classmethod
    def from_name(cls, name: str) -> PrAction:
        try:
            return cls(name)
        except ValueError:
            return cls.UNHANDLED


@dataclasses.dataclass(frozen=True)
class Label:
    name: str


@dataclasses.dataclass(frozen=True)
class PullRequest:
    number: int
    merged: bool
    head_sha: str
    labels: FrozenSet[Label] = frozenset()
    html_url: Optional[str] = None

    def has_label(self, name: str) -> bool:
        return Label(name) in self.labels


@dataclasses.dataclass(frozen=True)
class PullRequestEvent:
    """A pull_request event, decoded from its JSON payload."""
    action: PrAction
    pull_request: PullRequest
    # The action as GitHub spelled it, for logging UNHANDLED ones.
    raw_action: str = ""
    repo_full_name: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class RepoId:
    """A repository on GitHub: the owner, and the repo name."""
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def __str__(self):
        return self.full_name


@dataclasses.dataclass(frozen=True)
class Release:
    tag_name: str
    name: str
    html_url: str

    @classmethod
    def from_release_dict(cls, release: ReleaseDict) -> Release:
        return cls(
            tag_name=release["tag_name"],
            name=release.get("name") or "",
            html_url=release.get("html_url") or "",
        )
