"""
Service layer helpers that orchestrate configuration and domain logic.
"""

from .planner import PlannerService, build_week

__all__ = ["PlannerService", "build_week"]
