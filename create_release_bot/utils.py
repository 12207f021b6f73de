"""
Generic utilities.
"""

import requests
from urlobject import URLObject

from create_release_bot import logger
from create_release_bot.errors import RemoteCallError


def log_check_response(response, raise_for_status=True):
    """
    Logs HTTP request and response at debug level and checks if it succeeded.

    Arguments:
        response (requests.Response)
        raise_for_status (bool): if True, call raise_for_status on the response
            also, raising RemoteCallError if it failed.
    """
    msg = "Request: {0.method} {0.url}: {0.body!r}".format(response.request)
    logger.debug(msg)
    msg = "Response: {0.status_code} {0.reason!r} for {0.url}: {0.content!r}".format(response)
    logger.debug(msg)
    if raise_for_status:
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            req = response.request
            raise RemoteCallError(
                f"HTTP request failed: {req.method} {req.url}. Response body: {response.content!r}"
            ) from exc


def send_request(session, method, url, **kwargs):
    """
    Make a request, turning transport failures into RemoteCallError.

    The response is checked with `log_check_response`, so a returned
    response always succeeded.
    """
    try:
        resp = session.request(method, url, **kwargs)
    except requests.RequestException as exc:
        raise RemoteCallError(f"HTTP request failed: {method} {url}: {exc}") from exc
    log_check_response(resp)
    return resp


def text_summary(text, length=40):
    """
    Make a summary of `text`, at most `length` chars long.

    The middle will be elided if needed.
    """
    if len(text) <= length:
        return text
    else:
        start = (length - 3) // 2
        end = length - 3 - start
        return text[:start] + "..." + text[-end:]


def response_json(response):
    """
    The JSON body of a successful response.

    A body that isn't JSON (an HTML page from a proxy, say) raises
    RemoteCallError, like any other failed call.
    """
    try:
        return response.json()
    except ValueError as exc:
        req = response.request
        raise RemoteCallError(
            f"HTTP request returned a body that isn't JSON: {req.method} {req.url}. "
            f"Response body: {response.content!r}"
        ) from exc


def paginated_get(url, session=None, limit=None, per_page=100, **kwargs):
    """
    Retrieve all objects from a paginated API.

    Assumes that the pagination is specified in the "link" header, like
    Github's v3 API.

    The `limit` describes how many results you'd like returned.  You might get
    more than this, but you won't make more requests to the server once this
    limit has been exceeded.

    """
    url = URLObject(url).set_query_param('per_page', str(per_page))
    limit = limit or 999999999
    session = session or requests.Session()
    returned = 0
    while url:
        resp = send_request(session, "GET", url, **kwargs)
        items = response_json(resp)
        if not isinstance(items, list):
            raise RemoteCallError(f"Expected a list from GET {url}, got {text_summary(repr(items), 90)}")
        for item in items:
            yield item
            returned += 1
        url = None
        if resp.links and returned < limit:
            url = resp.links.get("next", {}).get("url", "")


def sentry_extra_context(data_dict):
    """Apply the keys and values from data_dict to the Sentry extra context."""
    import sentry_sdk
    for key, value in data_dict.items():
        sentry_sdk.set_extra(key, value)
