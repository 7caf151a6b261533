"""Cycle breaker: circular dependency analysis and break planning."""

__version__ = "0.1.0"
