#app/models/enums.py
from __future__ import annotations
from enum import Enum


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"


class ProjectStatus(str, Enum):
    # values used by dashboard aggregations; status column itself is free text
    ACTIVE = "Active"
    PIPELINE = "Pipeline"
    IMPLEMENTED = "Implemented"
    COMPLETED = "Completed"


class FeedbackPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"
