"""
Terminal rendering for staffline timelines.
"""

from staffline.dashboard.renderer import TimelineRenderer

__all__ = ["TimelineRenderer"]
