from vidshot.core.services.timestamp_planner import TimestampPlanner, plan

__all__ = [
    "TimestampPlanner",
    "plan",
]
