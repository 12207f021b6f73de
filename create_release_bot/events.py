"""
Decoding the pull request event that triggered a run.
"""

import json
from typing import List

from glom import Coalesce, GlomError, glom

from create_release_bot import logger
from create_release_bot.errors import EventParseError
from create_release_bot.types import Label, PrAction, PullRequest, PullRequestEvent

# What we need from a pull_request event payload.
EVENT_SPEC = {
    "action": "action",
    "number": "pull_request.number",
    "head_sha": "pull_request.head.sha",
    "merged": Coalesce("pull_request.merged", default=False),
    "labels": Coalesce("pull_request.labels", default=[]),
    "html_url": Coalesce("pull_request.html_url", default=None),
    "repo_full_name": Coalesce("repository.full_name", default=None),
}


def _label_names(labels) -> List[str]:
    """The names of the labels on the pull request, every one of them or an error."""
    if labels is None:
        return []
    if not isinstance(labels, list):
        raise EventParseError(f"pull request labels should be a list, not {type(labels).__name__}")
    names = []
    for label in labels:
        try:
            name = glom(label, "name")
        except GlomError as exc:
            raise EventParseError(f"pull request label {label!r} has no name") from exc
        if not isinstance(name, str):
            raise EventParseError(f"pull request label name {name!r} isn't a string")
        names.append(name)
    return names


def parse_pull_request_event(payload: str) -> PullRequestEvent:
    """
    Make a PullRequestEvent from the JSON text of a pull_request event.

    Raises EventParseError if the payload is empty, isn't JSON, or is
    missing something we need.
    """
    if not payload or not payload.strip():
        raise EventParseError("no payload found for pull request event")

    try:
        event = json.loads(payload)
    except ValueError as exc:
        raise EventParseError(f"event payload isn't valid JSON: {exc}") from exc
    if not isinstance(event, dict):
        raise EventParseError(f"event payload should be a JSON object, not {type(event).__name__}")

    try:
        data = glom(event, EVENT_SPEC)
    except GlomError as exc:
        raise EventParseError(f"event payload isn't a pull request event: {exc}") from exc

    try:
        number = int(data["number"])
    except (TypeError, ValueError) as exc:
        raise EventParseError(f"pull request number {data['number']!r} isn't a number") from exc
    if not isinstance(data["head_sha"], str) or not data["head_sha"]:
        raise EventParseError(f"pull request head sha {data['head_sha']!r} isn't a sha")

    labels = _label_names(data["labels"])

    raw_action = str(data["action"])
    action = PrAction.from_name(raw_action)
    if action is PrAction.UNHANDLED:
        logger.warning(f"Unknown pull request action {raw_action!r}, it won't be handled")

    pull_request = PullRequest(
        number=number,
        merged=bool(data["merged"]),
        head_sha=data["head_sha"],
        labels=frozenset(Label(name) for name in labels if name),
        html_url=data["html_url"],
    )
    return PullRequestEvent(
        action=action,
        pull_request=pull_request,
        raw_action=raw_action,
        repo_full_name=data["repo_full_name"],
    )
