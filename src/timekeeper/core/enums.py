from __future__ import annotations

from enum import Enum


class SessionStatus(str, Enum):
    """Lifecycle state of an attendance session."""

    ACTIVE = "active"
    LATE = "late"
    COMPLETED = "completed"


class Department(str, Enum):
    """Closed set of organizational units an employee can clock in under."""

    TECH_TEAM_ALPHA = "Tech Team Alpha"
    TECH_TEAM_CHARLIE = "Tech Team Charlie"
    HUMAN_RESOURCES = "Human Resources Team"
    MARKETING = "Marketing Team"
    SALES = "Sales Team"
    FOUNDERS_OFFICE = "Founder's Office"
    CONTENT_FACTORY = "Content Factory"
    SOCIAL_MEDIA_CONTENT = "Social Media & Content"
    CUSTOMER_SUPPORT = "Customer Support"
    OTHER = "Other"


OPEN_STATUSES = (SessionStatus.ACTIVE, SessionStatus.LATE)
