"""Configuration management for ghsponsors.

This module handles loading and merging configuration from multiple sources:
1. Environment variables (highest priority)
2. TOML configuration file (medium priority)
3. Default values (lowest priority)

A ``.env`` file in the working directory is loaded into the environment
before anything else is read.

Example config.toml:
    ```toml
    [github]
    host = "github.example.com"
    timeout = 10

    [sponsors]
    limit = 50
    ```

Environment Variables:
    GH_HOST: Override the GitHub host
    GH_TOKEN / GITHUB_TOKEN: Token for github.com
    GH_ENTERPRISE_TOKEN / GITHUB_ENTERPRISE_TOKEN: Token for other hosts
    (without a token variable, `gh auth token` is consulted)
    GH_TIMEOUT: Override the HTTP timeout in seconds
    GHSPONSORS_LIMIT: Override the number of sponsors requested
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import logging
import os
import subprocess
import tomllib  # Python 3.11+

from dotenv import load_dotenv

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "github.com"


@dataclass
class Settings:
    """Runtime configuration derived from `config.toml` and environment.

    Values are merged with precedence: environment > config file > defaults.

    Attributes:
        host: GitHub host to query.
        token: Authentication token, if any.
        timeout: HTTP timeout in seconds.
        list_limit: Number of sponsors requested per invocation.
    """

    host: str = DEFAULT_HOST
    token: str | None = None
    timeout: float = 20.0
    list_limit: int = 30


def is_enterprise(host: str) -> bool:
    """Return True when `host` is not github.com."""
    return host.lower() != DEFAULT_HOST


def graphql_url(host: str) -> str:
    """Return the GraphQL endpoint for `host`.

    Example:
        ```python
        graphql_url("github.com")          # https://api.github.com/graphql
        graphql_url("ghe.example.com")     # https://ghe.example.com/api/graphql
        ```
    """
    if is_enterprise(host):
        return f"https://{host}/api/graphql"
    return "https://api.github.com/graphql"


def gh_auth_token(host: str) -> str | None:
    """Return the token the gh CLI stored for `host` with `gh auth login`.

    Returns None when gh is not installed or has no credentials for the host.
    """
    try:
        r = subprocess.run(
            ["gh", "auth", "token", "--hostname", host],
            capture_output=True, text=True, timeout=10, check=False,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("gh auth token unavailable: %s", e)
        return None
    if r.returncode != 0:
        logger.debug("gh auth token failed for %s: %s", host, r.stderr.strip())
        return None
    return r.stdout.strip() or None


def token_for_host(host: str) -> str | None:
    """Pick the token that applies to `host`.

    Environment variables win; otherwise the gh CLI credential store is asked.
    """
    if is_enterprise(host):
        names = ("GH_ENTERPRISE_TOKEN", "GITHUB_ENTERPRISE_TOKEN")
    else:
        names = ("GH_TOKEN", "GITHUB_TOKEN")
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return gh_auth_token(host)


def load_config(path: str = "config.toml") -> dict:
    """Load a TOML config file into a dictionary.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        Dictionary containing configuration data, or empty dict if file missing.

    Raises:
        ConfigurationError: If the file exists but is not valid TOML.
    """
    p = Path(path)
    if not p.exists():
        return {}
    try:
        with p.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"invalid config file {path}: {e}") from e


def load_settings(config_path: str | None = None, host: str | None = None) -> Settings:
    """Create a `Settings` object from config file and environment variables.

    Args:
        config_path: Path to TOML config file. Defaults to "config.toml".
        host: Host override that wins over every other source.

    Returns:
        Settings object with merged configuration from all sources.

    Raises:
        ConfigurationError: On a malformed file or non-numeric values.
    """
    load_dotenv()
    cfg = load_config(config_path or "config.toml")

    s = Settings()

    gh = cfg.get("github", {})
    s.host = host or os.getenv("GH_HOST", gh.get("host", s.host))
    s.token = token_for_host(s.host)

    sp = cfg.get("sponsors", {})
    try:
        s.timeout = float(os.getenv("GH_TIMEOUT", gh.get("timeout", s.timeout)))
        s.list_limit = int(os.getenv("GHSPONSORS_LIMIT", sp.get("limit", s.list_limit)))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"invalid configuration value: {e}") from e

    if s.list_limit < 1:
        raise ConfigurationError(f"sponsors limit must be positive, got {s.list_limit}")

    return s
