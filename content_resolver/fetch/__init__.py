"""
GraphQL fetching.

This package handles the transport to the content API and the
query documents it sends.
"""

from .client import ContentSource, GraphQLClient

__all__ = [
    "ContentSource",
    "GraphQLClient",
]
