"""
Weather Digest - reduces an ordered observation feed into current conditions
and a four-day outlook (high/low temperature and worst sky condition per day).

The fetch collaborator hands observations to DigestCoordinator, which runs one
aggregation pass per refresh and publishes an immutable AggregationResult.
"""
from .aggregator import AggregationResult, AggregationStatus, Observation, aggregate
from .coordinator import DigestCoordinator

__all__ = [
    "AggregationResult",
    "AggregationStatus",
    "DigestCoordinator",
    "Observation",
    "aggregate",
]
