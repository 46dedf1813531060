"""Tyke: a small typed expression language front end."""

__version__ = "0.1.0"
