"""Core functionality for listing sponsors.

This module contains the core business logic for:
- GitHub GraphQL interactions
- Sponsor normalization and rendering
- Configuration management
"""

from .github import GraphQLClient
from .models import Sponsor
from .sponsors import list_sponsors, render_sponsors
from .config import load_settings, Settings

__all__ = [
    "GraphQLClient",
    "Sponsor",
    "list_sponsors",
    "render_sponsors",
    "load_settings",
    "Settings",
]
