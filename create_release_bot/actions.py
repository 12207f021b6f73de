"""
The operations on GitHub that releasing a pull request needs.
"""

from __future__ import annotations

import datetime
import itertools
from typing import Dict, List, Tuple
from urllib.parse import quote

from create_release_bot import logger
from create_release_bot.errors import RemoteCallError
from create_release_bot.types import Release, RepoId
from create_release_bot.utils import paginated_get, response_json, send_request, text_summary

# How many releases to ask for.  Only the most recent one matters.
RELEASES_PAGE_SIZE = 10


def release_from_dict(data) -> Release:
    """
    Make a Release from GitHub's JSON, raising RemoteCallError if it isn't one.
    """
    try:
        return Release.from_release_dict(data)
    except (KeyError, TypeError) as exc:
        raise RemoteCallError(f"GitHub returned an unusable release: {data!r}") from exc


class GitHubReleaseActions:
    """
    Implementation of the release actions against the GitHub REST API.

    Every failure raises RemoteCallError: at the HTTP level or below it, or a
    successful response without the data we asked for.  Nothing is retried.

    """

    def __init__(self, repo: RepoId, session) -> None:
        self.repo = repo
        self.session = session

    def _url(self, path: str) -> str:
        # No leading slash: the session's base URL may have a path of its own.
        return f"repos/{self.repo.full_name}/{path}"

    def list_releases(self) -> List[Release]:
        """
        Get the releases of the repo, most recent first.

        Only the first page is fetched.
        """
        url = self._url("releases")
        releases = paginated_get(
            url,
            session=self.session,
            limit=RELEASES_PAGE_SIZE,
            per_page=RELEASES_PAGE_SIZE,
        )
        return [release_from_dict(rel) for rel in itertools.islice(releases, RELEASES_PAGE_SIZE)]

    def create_tag(
        self, *,
        tag_name: str,
        sha: str,
        message: str,
        tagger_name: str,
        tagger_email: str,
        timestamp: datetime.datetime,
    ) -> str:
        """
        Create an annotated tag on a commit.

        GitHub makes tags in two steps: the tag object, and then the ref
        pointing to it.

        Returns the name of the created tag.
        """
        tag_object = {
            "tag": tag_name,
            "message": message,
            "object": sha,
            "type": "commit",
            "tagger": {
                "name": tagger_name,
                "email": tagger_email,
                "date": timestamp.astimezone(datetime.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            },
        }
        logger.info(f"Creating tag {tag_name} on {self.repo}@{sha}")
        resp = send_request(self.session, "POST", self._url("git/tags"), json=tag_object)
        created = response_json(resp)
        try:
            created_tag, created_sha = created["tag"], created["sha"]
        except (KeyError, TypeError) as exc:
            raise RemoteCallError(f"GitHub returned an unusable tag object for {tag_name}: {created!r}") from exc

        ref = {
            "ref": f"refs/tags/{created_tag}",
            "sha": created_sha,
        }
        send_request(self.session, "POST", self._url("git/refs"), json=ref)
        return created_tag

    def create_release(self, *, tag_name: str, name: str) -> Release:
        """
        Create a release from an existing tag.
        """
        logger.info(f"Creating release {name!r} in {self.repo}")
        body = {
            "tag_name": tag_name,
            "name": name,
        }
        resp = send_request(self.session, "POST", self._url("releases"), json=body)
        return release_from_dict(response_json(resp))

    def add_label(self, *, number: int, label: str) -> None:
        """
        Add one label to a pull request, keeping the others.
        """
        logger.info(f"Adding label {label!r} to {self.repo}#{number}")
        url = self._url(f"issues/{number}/labels")
        send_request(self.session, "POST", url, json={"labels": [label]})

    def remove_label(self, *, number: int, label: str) -> None:
        """
        Remove one label from a pull request.
        """
        logger.info(f"Removing label {label!r} from {self.repo}#{number}")
        url = self._url(f"issues/{number}/labels/{quote(label, safe='')}")
        send_request(self.session, "DELETE", url)

    def create_comment(self, *, number: int, body: str) -> None:
        """
        Add a comment to a pull request.
        """
        logger.info(f"Commenting on {self.repo}#{number}: {text_summary(body, 90)!r}")
        url = self._url(f"issues/{number}/comments")
        send_request(self.session, "POST", url, json={"body": body})


class DryRunReleaseActions(GitHubReleaseActions):
    """
    Release actions for dry runs.

    Reads from GitHub for real, so the tag computed is the real next tag.
    Writes are only recorded in `action_calls`.

    """

    def __init__(self, repo: RepoId, session) -> None:
        super().__init__(repo, session)
        self.action_calls: List[Tuple[str, Dict]] = []

    def _record(self, name: str, /, **kwargs) -> None:
        self.action_calls.append((name, kwargs))

    def create_tag(self, **kwargs) -> str:
        # The timestamp is a datetime, keep the record JSON-friendly.
        self._record("create_tag", **dict(kwargs, timestamp=kwargs["timestamp"].isoformat()))
        return kwargs["tag_name"]

    def create_release(self, **kwargs) -> Release:
        self._record("create_release", **kwargs)
        return Release(
            tag_name=kwargs["tag_name"],
            name=kwargs["name"],
            html_url=f"https://github.com/{self.repo.full_name}/releases/tag/{kwargs['tag_name']}",
        )

    def add_label(self, **kwargs) -> None:
        self._record("add_label", **kwargs)

    def remove_label(self, **kwargs) -> None:
        self._record("remove_label", **kwargs)

    def create_comment(self, **kwargs) -> None:
        self._record("create_comment", **kwargs)
