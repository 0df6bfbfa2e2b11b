"""Translate provider-agnostic analytics queries into GA4 report requests."""

__version__ = "0.1.0"
