"""Candidate evaluation and matching engine."""

__version__ = "0.1.0"
