"""
Content resolver - page view models from a learning platform's GraphQL API.

This package fetches CMS entities by alias, revision id or user path and
turns the `__typename`-tagged answer into one typed page view model:
redirect, error, single-entity, taxonomy, revision or user profile.

Main entry points are `PageResolver` and the `content-resolver` CLI.

Example:
    $ content-resolver page /mathe/zahlen --instance de
"""

__all__ = ["__version__", "PageResolver", "GraphQLClient", "load_config"]
__version__ = "0.1.0"

from .config import load_config
from .fetch import GraphQLClient
from .resolve import PageResolver
