from .progress_aggregator import ProgressAggregator

__all__ = ["ProgressAggregator"]
