"""
Deciding the tag of the next release.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Sequence

from create_release_bot.errors import MalformedTagError

# The tag used when a repo has no releases at all.
SEED_TAG = "v0.0.1"

# Components roll over into the next one when they reach this.
ROLLOVER_AT = 10

_TAG_RE = re.compile(r"^v?([0-9]+)\.([0-9]+)\.([0-9]+)$")


class TagPolicy(enum.Enum):
    """How the next tag is derived from the latest one."""
    # Bump the patch number, rolling patch into minor and minor into major
    # when they reach 10.
    ROLLOVER = "rollover"
    # Bump the minor number and reset the patch number.
    MINOR = "minor"


@dataclass(frozen=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def to_tag(self) -> str:
        return f"v{self.major}.{self.minor}.{self.patch}"

    def bump(self, policy: TagPolicy = TagPolicy.ROLLOVER) -> SemVer:
        if policy is TagPolicy.MINOR:
            return SemVer(self.major, self.minor + 1, 0)

        major, minor, patch = self.major, self.minor, self.patch + 1
        if patch >= ROLLOVER_AT:
            patch = 0
            minor += 1
        # Checked on its own: a minor number that was already too big rolls
        # over even when the patch number didn't.
        if minor >= ROLLOVER_AT:
            minor = 0
            major += 1
        return SemVer(major, minor, patch)


def parse_tag(tag: str) -> SemVer:
    """
    Parse a release tag like "v1.2.3".

    The leading "v" is optional.  Raises MalformedTagError for anything else.
    """
    m = _TAG_RE.match(tag.strip())
    if m is None:
        raise MalformedTagError(tag)
    return SemVer(int(m[1]), int(m[2]), int(m[3]))


def next_tag(
    existing_tags: Sequence[str],
    present_index: int = 0,
    policy: TagPolicy = TagPolicy.ROLLOVER,
) -> str:
    """
    Compute the tag for a new release.

    Arguments:
        existing_tags: the tags of the existing releases, as GitHub lists
            them: most recent first.
        present_index: which of `existing_tags` is the current release.
            Only that one is examined.
        policy: how to increment it.

    Returns:
        The new tag, "vMAJOR.MINOR.PATCH".  With no existing tags, this is
        SEED_TAG.
    """
    if not existing_tags:
        return SEED_TAG
    if not 0 <= present_index < len(existing_tags):
        raise ValueError(
            f"present_index {present_index} is out of range for {len(existing_tags)} tags"
        )
    current = parse_tag(existing_tags[present_index])
    return current.bump(policy).to_tag()
