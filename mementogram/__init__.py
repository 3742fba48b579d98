"""Mementogram: social networking REST API."""

__version__ = "0.1.0"
