"""Reconciling resource layer for GitHub organizations, repositories and their parts."""

__version__ = "0.1.0"

__all__ = [
    "branches",
    "commits",
    "deploykeys",
    "errors",
    "models",
    "organizations",
    "orgrepos",
    "repositories",
    "teamaccess",
    "util",
]