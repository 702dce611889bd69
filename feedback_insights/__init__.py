"""Mentor feedback soft-skill insights: analysis engine, API and CLI."""

__version__ = "0.1.0"
