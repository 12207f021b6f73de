#!/usr/bin/env python
"""
Handle the pull request event that triggered this run.
"""

import json
import os
import sys

import click
import sentry_sdk

from create_release_bot import logger
from create_release_bot.actions import DryRunReleaseActions, GitHubReleaseActions
from create_release_bot.auth import get_github_session
from create_release_bot.errors import ConfigError, EventParseError, ReleaseBotError
from create_release_bot.events import parse_pull_request_event
from create_release_bot.release import pull_request_event
from create_release_bot.settings import load_settings
from create_release_bot.utils import sentry_extra_context


def fail(doing, exc):
    """Report a failure on stderr and end the run with status 1."""
    click.echo(f"error {doing}: {exc}", err=True)
    sys.exit(1)


@click.command()
@click.option(
    '--dry-run',
    is_flag=True,
    help="Read from GitHub, but only print the changes that would be made",
)
def cli(dry_run):
    """
    Tag and release a pull request that merged with the
    "createrelease:pending" label.

    Configuration comes from the environment: INPUT_REPO_OWNER,
    INPUT_REPO_NAME, INPUT_BASE_BRANCH, INPUT_TARGET_BRANCH and
    INPUT_GITHUB_TOKEN are required.  The event is read from
    INPUT_GITHUB_EVENT, or the file named by GITHUB_EVENT_PATH.
    """
    try:
        settings = load_settings()
    except ConfigError as exc:
        fail("loading env", exc)

    if os.environ.get("SENTRY_DSN", ""):
        sentry_sdk.init()

    try:
        session = get_github_session(settings.token, settings.api_url, settings.request_timeout)
    except ValueError as exc:
        fail("creating github client", exc)

    if dry_run:
        actions = DryRunReleaseActions(settings.repo, session)
    else:
        actions = GitHubReleaseActions(settings.repo, session)

    try:
        event = parse_pull_request_event(settings.event_payload)
    except EventParseError as exc:
        fail("parsing event", exc)

    pr = event.pull_request
    where = pr.html_url or f"{settings.repo}#{pr.number}"
    logger.info(f"Event for {where}: {event.raw_action!r}, labels {sorted(lbl.name for lbl in pr.labels)}")
    if event.repo_full_name and event.repo_full_name.lower() != settings.repo.full_name.lower():
        logger.warning(f"Event is from {event.repo_full_name}, but releasing in {settings.repo}")
    sentry_extra_context({"repo": settings.repo.full_name, "pr_number": pr.number, "action": event.raw_action})

    try:
        result = pull_request_event(event, actions, policy=settings.tag_policy)
    except ReleaseBotError as exc:
        logger.exception(f"Couldn't handle the event for {settings.repo}#{pr.number}")
        sentry_sdk.capture_exception(exc)
        fail("handling pr event", exc)

    logger.info(f"Done with {settings.repo}#{pr.number}: {result.outcome.value}")
    if dry_run:
        click.echo(json.dumps(actions.action_calls, indent=4))


if __name__ == '__main__':
    cli()
