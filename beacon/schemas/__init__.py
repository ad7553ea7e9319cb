from .stats import RecentView, StatsResponse

# Define the public API of this module
__all__ = [
    "RecentView",
    "StatsResponse",
]
