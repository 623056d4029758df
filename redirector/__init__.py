"""Hardened short-link redirector service."""

__version__ = "1.0.0"
