"""Repogate: enable GitHub repositories with state kept in signed cookies."""

__version__ = "0.1.0"
