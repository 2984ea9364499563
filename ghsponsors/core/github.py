"""GitHub GraphQL client used by the CLI.

A thin synchronous wrapper around `httpx.Client` that posts one query per
call and turns transport and application errors into `QueryError`s whose
messages are shown to the operator unchanged.

Example:
    ```python
    from ghsponsors.core.github import GraphQLClient

    with GraphQLClient(token="ghp_...") as client:
        data = client.query("Viewer", "query Viewer { viewer { login } }")
    ```
"""
from __future__ import annotations
from typing import Any, Dict, Optional
import logging

import httpx

from .. import __version__
from .config import DEFAULT_HOST, Settings, graphql_url
from .errors import GraphQLError, HTTPError, QueryError

logger = logging.getLogger(__name__)


def _headers(token: Optional[str]) -> Dict[str, str]:
    """Construct HTTP headers for GitHub GraphQL requests.

    Returns:
        Headers including Accept, User-Agent, and Authorization if a token
        is given.
    """
    h = {
        "Accept": "application/vnd.github+json",
        "Content-Type": "application/json; charset=utf-8",
        "User-Agent": f"ghsponsors/{__version__}",
    }
    if token:
        h["Authorization"] = f"bearer {token}"
    return h


class GraphQLClient:
    """Synchronous GitHub GraphQL client.

    Attributes:
        url: The GraphQL endpoint requests are posted to.
    """

    def __init__(self, host: str = DEFAULT_HOST, token: Optional[str] = None,
                 timeout: float = 20.0,
                 transport: Optional[httpx.BaseTransport] = None):
        """Initialize the client.

        Args:
            host: GitHub host; github.com or an enterprise host name.
            token: Optional token sent as a bearer credential.
            timeout: HTTP timeout in seconds.
            transport: Optional httpx transport, mostly for tests.
        """
        self.url = graphql_url(host)
        self._client = httpx.Client(timeout=timeout, headers=_headers(token), transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "GraphQLClient":
        """Build a client from loaded `Settings`."""
        return cls(host=settings.host, token=settings.token, timeout=settings.timeout, **kwargs)

    def __enter__(self) -> "GraphQLClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def query(self, name: str, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Execute a named query and return its ``data`` object.

        Args:
            name: Operation name, sent as ``operationName``.
            query: GraphQL document.
            variables: Query variables.

        Returns:
            The ``data`` member of the response (empty dict when null).

        Raises:
            HTTPError: On a non-2xx status.
            GraphQLError: When the response carries ``errors``.
            QueryError: On network failures, an invalid URL, or a body that
                is not a JSON object.
        """
        payload = {"query": query, "operationName": name, "variables": variables or {}}
        logger.debug("POST %s operation=%s", self.url, name)
        try:
            r = self._client.post(self.url, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise QueryError(str(e)) from e

        if r.is_error:
            raise HTTPError(r.status_code, str(r.request.url), _error_message(r))

        try:
            body = r.json()
        except ValueError as e:
            raise QueryError(f"invalid JSON response from {self.url}") from e
        if not isinstance(body, dict):
            raise QueryError(f"unexpected response from {self.url}: expected a JSON object")

        if body.get("errors"):
            raise GraphQLError(body["errors"])
        return body.get("data") or {}


def _error_message(r: httpx.Response) -> Optional[str]:
    """Extract the ``message`` GitHub puts in error bodies, if any."""
    try:
        body = r.json()
    except ValueError:
        return r.reason_phrase or None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return r.reason_phrase or None
