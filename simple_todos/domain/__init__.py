"""Domain layer - Pure business entities"""

from .models import Task, FilterMode, UserPreferences

__all__ = ["Task", "FilterMode", "UserPreferences"]
