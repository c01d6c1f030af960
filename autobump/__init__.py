"""Autobump - changelog-driven release automation."""

__version__ = "0.1.0"
