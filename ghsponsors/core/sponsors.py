"""Listing the sponsors of a GitHub account.

The pipeline is fetch -> normalize -> render:

    ```python
    from ghsponsors.core.sponsors import list_sponsors, render_sponsors

    sponsors = list_sponsors(client, "octocat")
    render_sponsors(sponsors, None, is_terminal=False, out=sys.stdout, err=sys.stderr)
    ```
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence, TextIO
import json
import logging

from rich.console import Console
from rich.json import JSON
from rich.table import Table

from .errors import InputRequiredError, UsageError
from .models import Sponsor, SponsorConnection
from .terminal import Prompter

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 30

LIST_FIELDS = ("login", "name")

SPONSORS_QUERY = """
query UserSponsorList($login: String!, $limit: Int!) {
  user(login: $login) {
    sponsors(first: $limit, orderBy: {direction: ASC, field: LOGIN}) {
      edges {
        node {
          __typename
          ... on User { login name }
          ... on Organization { login name }
        }
      }
    }
  }
}
""".strip()

USERNAME_PROMPT = "Which user do you want to target?"


def parse_json_fields(raw: Optional[str]) -> Optional[List[str]]:
    """Split and validate a ``--json`` value.

    Returns None when no value was given, so "no JSON" and "JSON" stay
    distinguishable.

    Raises:
        UsageError: On a field outside `LIST_FIELDS`.
    """
    if not raw:
        return None
    fields = raw.split(",")
    for f in fields:
        if f not in LIST_FIELDS:
            raise UsageError(
                f'unknown JSON field: "{f}" (available fields: {", ".join(LIST_FIELDS)})'
            )
    return fields


def resolve_username(username: Optional[str], is_terminal: bool,
                     prompter: Optional[Prompter]) -> str:
    """Return `username`, prompting for it on an interactive terminal.

    Raises:
        InputRequiredError: No username and no way to ask for one.
        PromptError: Whatever the prompter raised.
    """
    if username:
        return username
    if not is_terminal or prompter is None:
        raise InputRequiredError("username not provided")
    return prompter.input(USERNAME_PROMPT, "")


def list_sponsors(client: Any, username: str, limit: int = DEFAULT_LIST_LIMIT) -> List[Sponsor]:
    """Return the first `limit` sponsors of `username`, ordered by login.

    Args:
        client: Object with a ``query(name, query, variables)`` method
            returning the response ``data``.
        username: Login of the sponsored account.
        limit: Maximum number of sponsors to request.

    Returns:
        Sponsors in the order the server returned them.

    Raises:
        QueryError: If the request fails or the response carries errors.
        ValueError: If `limit` is not positive.
    """
    if limit < 1:
        raise ValueError(f"limit must be positive, got {limit}")

    data = client.query("UserSponsorList", SPONSORS_QUERY, {"login": username, "limit": limit})
    user = data.get("user") or {}
    connection = SponsorConnection.model_validate(user.get("sponsors") or {})
    sponsors = connection.sponsors()
    logger.debug("%d edges, %d sponsors for %s", len(connection.edges), len(sponsors), username)
    return sponsors


def project_fields(sponsors: Sequence[Sponsor], fields: Sequence[str]) -> List[Dict[str, str]]:
    """Map each sponsor to a dict holding exactly `fields`, keys sorted."""
    keys = sorted(set(fields))
    return [{f: getattr(s, f) for f in keys} for s in sponsors]


def render_sponsors(sponsors: Sequence[Sponsor], fields: Optional[Sequence[str]],
                    is_terminal: bool, out: TextIO, err: TextIO,
                    width: Optional[int] = None, color: bool = True) -> None:
    """Write `sponsors` as JSON, as a table, or report that there are none.

    Args:
        sponsors: Sponsors to render.
        fields: JSON fields to emit; None selects the table output.
        is_terminal: Whether `out` is an interactive terminal.
        out: Output stream for the payload.
        err: Error stream for the empty-result notice.
        width: Terminal width used for interactive output.
        color: Whether interactive output may be coloured.
    """
    if fields is not None:
        payload = json.dumps(project_fields(sponsors, fields), ensure_ascii=False,
                             separators=(",", ":"))
        if is_terminal:
            console = _console(out, width, color)
            console.print(JSON(payload, indent=2), soft_wrap=True)
        else:
            out.write(payload + "\n")
        return

    if not sponsors:
        if is_terminal:
            err.write("no sponsor found\n")
        return

    if is_terminal:
        table = Table(box=None, show_edge=False, pad_edge=False, header_style="bold")
        table.add_column("SPONSOR", overflow="ellipsis", no_wrap=True)
        for s in sponsors:
            table.add_row(s.login)
        _console(out, width, color).print(table)
    else:
        for s in sponsors:
            out.write(s.login + "\n")


def _console(out: TextIO, width: Optional[int], color: bool) -> Console:
    return Console(
        file=out,
        width=width,
        force_terminal=color,
        no_color=not color,
        highlight=False,
        soft_wrap=False,
    )
