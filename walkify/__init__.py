"""Walkify: Ukrainian walk requests turned into walkable routes."""

__version__ = "1.0.0"
