"""Command-line interface for ghsponsors.

This module parses command-line arguments, resolves the target account,
fetches its sponsors through the GitHub GraphQL API, and prints them as a
table or as JSON.

Usage:
    ```bash
    # Table of sponsor logins
    ghsponsors list octocat

    # JSON with selected fields
    ghsponsors ls octocat --json login,name

    # Prompted for the username on a terminal
    ghsponsors list
    ```

Configuration:
    The CLI supports configuration via:
    - Command-line arguments (highest priority)
    - Environment variables
    - config.toml file (lowest priority)
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence
import argparse
import logging
import sys

from .. import __version__
from ..core.config import load_settings
from ..core.errors import SponsorsError, UsageError
from ..core.github import GraphQLClient
from ..core.sponsors import (
    DEFAULT_LIST_LIMIT,
    LIST_FIELDS,
    list_sponsors,
    parse_json_fields,
    render_sponsors,
    resolve_username,
)
from ..core.terminal import Prompter, RichPrompter, Terminal

logger = logging.getLogger(__name__)


@dataclass
class ListOptions:
    """Validated options of the `list` subcommand."""

    username: Optional[str] = None
    fields: Optional[List[str]] = None
    limit: int = DEFAULT_LIST_LIMIT


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the `ghsponsors` command."""
    p = argparse.ArgumentParser(prog="ghsponsors", description="Manage sponsors.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--config", help="Path to config.toml (defaults to ./config.toml if present)")
    p.add_argument("--hostname", help="GitHub host to query (default: github.com or $GH_HOST)")
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")

    sub = p.add_subparsers(dest="command", metavar="<command>")
    ls = sub.add_parser("list", aliases=["ls"], help="List sponsors",
                        description="List sponsors of a given user.")
    ls.add_argument("usernames", nargs="*", metavar="<user>", help="Account to list sponsors of")
    # a single --json value; repeated flags do not accumulate
    ls.add_argument("--json", dest="fields_raw", metavar="fields",
                    help=f"JSON fields ({', '.join(LIST_FIELDS)})")
    return p


def parse_list_options(args: argparse.Namespace) -> ListOptions:
    """Validate parsed `list` arguments.

    Raises:
        UsageError: On more than one username or an unknown JSON field.
    """
    if len(args.usernames) > 1:
        raise UsageError("too many arguments")
    opts = ListOptions()
    if args.usernames:
        opts.username = args.usernames[0]
    opts.fields = parse_json_fields(args.fields_raw)
    return opts


def list_run(opts: ListOptions, client: Any, terminal: Terminal,
             prompter: Optional[Prompter]) -> None:
    """Run the `list` subcommand against `client`, writing to `terminal`."""
    is_tty = terminal.is_terminal_output()
    username = resolve_username(opts.username, is_tty, prompter)

    sponsors = list_sponsors(client, username, opts.limit)

    width, _ = terminal.size()
    render_sponsors(sponsors, opts.fields, is_tty, terminal.stdout, terminal.stderr,
                    width=width, color=terminal.color)


def _configure_logging(verbose: bool, stream: Any) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=stream,
    )


def run(argv: Optional[Sequence[str]] = None, *, terminal: Optional[Terminal] = None,
        client: Any = None, prompter: Optional[Prompter] = None) -> int:
    """Parse `argv`, run the selected command, and return the exit code.

    Args:
        argv: Arguments without the program name; defaults to ``sys.argv[1:]``.
        terminal: Streams and capabilities; probed from the process if omitted.
        client: GraphQL client; built from settings if omitted.
        prompter: Username prompter; a rich prompt on interactive terminals.

    Returns:
        0 on success, 1 when an error was reported on stderr.
    """
    terminal = terminal or Terminal.from_env()
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose, terminal.stderr)

    if args.command is None:
        parser.print_help(terminal.stdout)
        return 0

    owns_client = client is None
    try:
        opts = parse_list_options(args)
        settings = load_settings(args.config, host=args.hostname)
        opts.limit = settings.list_limit

        if prompter is None and terminal.is_terminal_output():
            prompter = RichPrompter(terminal)
        if owns_client:
            client = GraphQLClient.from_settings(settings)
        list_run(opts, client, terminal, prompter)
    except SponsorsError as e:
        logger.debug("command failed", exc_info=True)
        terminal.stderr.write(f"{e}\n")
        return 1
    finally:
        if owns_client and client is not None:
            client.close()
    return 0


def main() -> None:
    """Entry point for the console script."""
    sys.exit(run())


if __name__ == "__main__":
    main()
