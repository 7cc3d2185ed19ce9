"""Activity logging package."""

from money_manager.activity.logger import ActivityLogger

__all__ = ["ActivityLogger"]
