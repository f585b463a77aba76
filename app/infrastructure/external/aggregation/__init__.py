"""Aggregation API client (group-by and time histogram over HTTP)."""

from app.infrastructure.external.aggregation.client import HttpAggregationClient

__all__ = ["HttpAggregationClient"]
