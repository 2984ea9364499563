"""List the sponsors of a GitHub account.

This package can be used both as a command-line tool and as a Python SDK.

Quick Start:
    ```python
    import ghsponsors

    with ghsponsors.GraphQLClient(token="ghp_...") as client:
        for sponsor in ghsponsors.list_sponsors(client, "octocat"):
            print(sponsor.login, sponsor.name)
    ```

CLI Usage:
    ```bash
    ghsponsors list octocat
    ghsponsors ls octocat --json login,name
    ```
"""

__version__ = "0.1.0"

# Re-export main functionality for easy importing
from .core import (
    GraphQLClient,
    Sponsor,
    list_sponsors,
    render_sponsors,
    load_settings,
    Settings,
)

__all__ = [
    "GraphQLClient",
    "Sponsor",
    "list_sponsors",
    "render_sponsors",
    "load_settings",
    "Settings",
]
