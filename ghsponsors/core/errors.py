"""Exceptions raised by ghsponsors.

Every error reaching the CLI is reported to the operator as ``str(exc)``,
so messages here are written to be shown verbatim.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional


class SponsorsError(Exception):
    """Base exception class for ghsponsors errors."""

    pass


class UsageError(SponsorsError):
    """Invalid command-line usage, detected before any network call."""

    pass


class InputRequiredError(SponsorsError):
    """A required value is missing and cannot be prompted for."""

    pass


class PromptError(SponsorsError):
    """Interactive input collection failed."""

    pass


class ConfigurationError(SponsorsError):
    """Exception raised for configuration errors."""

    pass


class QueryError(SponsorsError):
    """The remote GraphQL call failed."""

    pass


class GraphQLError(QueryError):
    """The server answered with application-level ``errors``."""

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        super().__init__(self._format(errors))

    @staticmethod
    def _format(errors: List[Dict[str, Any]]) -> str:
        messages = []
        for err in errors:
            msg = err.get("message", "")
            path = ".".join(str(p) for p in err.get("path") or [])
            if path:
                msg = f"{msg} ({path})"
            messages.append(msg)
        return "GraphQL: " + ", ".join(messages)


class HTTPError(QueryError):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, url: str, message: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        text = f"HTTP {status_code}"
        if message:
            text += f": {message}"
        super().__init__(f"{text} ({url})")
