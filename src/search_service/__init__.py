"""Storefront product search, ranking and personalization engine."""

__version__ = "1.0.0"
