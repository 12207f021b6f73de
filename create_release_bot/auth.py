"""
Create authenticated sessions for access to GitHub.
"""

import requests
from urlobject import URLObject

from create_release_bot.settings import DEFAULT_API_URL, DEFAULT_REQUEST_TIMEOUT


class BaseUrlSession(requests.Session):
    """
    A requests Session class that applies a base URL to the requested URL,
    and a timeout to requests that don't specify one.
    """
    def __init__(self, base_url, timeout=DEFAULT_REQUEST_TIMEOUT):
        super().__init__()
        self.base_url = URLObject(base_url)
        self.timeout = timeout

    def request(self, method, url, data=None, headers=None, **kwargs):
        kwargs.setdefault("timeout", self.timeout)
        return super().request(
            method=method,
            url=self.base_url.relative(url),
            data=data,
            headers=headers,
            **kwargs
        )


def get_github_session(token, api_url=DEFAULT_API_URL, timeout=DEFAULT_REQUEST_TIMEOUT):
    """
    Get the GitHub session to use.
    """
    if not token:
        raise ValueError("A GitHub token is required")
    # The base URL needs a trailing slash for relative paths to work under
    # a GitHub Enterprise API root like https://ghe.example.com/api/v3.
    session = BaseUrlSession(base_url=api_url.rstrip("/") + "/", timeout=timeout)
    session.headers["Authorization"] = f"token {token}"
    session.headers["Accept"] = "application/vnd.github+json"
    session.trust_env = False   # prevent reading the local .netrc
    return session
