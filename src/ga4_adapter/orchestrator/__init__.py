"""Orchestration package."""

from ga4_adapter.orchestrator.connector import QueryConnector, describe_predicate

__all__ = ["QueryConnector", "describe_predicate"]
