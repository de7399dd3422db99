"""Domain Enumerations - All status and type definitions"""
from enum import Enum


class FieldType(str, Enum):
    """Configurable checklist field types"""
    CHECKBOX = "checkbox"
    TEXT = "text"
    TEXTAREA = "textarea"
    MULTI_INPUT = "multi_input"
    URL = "url"
    SELECT = "select"
    MULTI_SELECT = "multi_select"
    GROUP = "group"


class OptionsSource(str, Enum):
    """Where a multi_select field draws its options from"""
    INTEGRATIONS = "integrations"  # Integration ids from the catalog
    STATIC = "static"              # Static option strings from the schema


class ChecklistKind(str, Enum):
    """The two checklists carried by every project"""
    SALES = "sales"
    LAUNCH = "launch"


class ProjectStatus(str, Enum):
    """Development status of a project"""
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    ON_HOLD = "On HOLD"
    COMPLETED = "Completed"


class PublishingStatus(str, Enum):
    """Store publishing status of a project"""
    PENDING = "Pending"
    SUBSCRIBED = "Subscribed"
    UNDER_REVIEW = "Under Review"
    LIVE = "Live"


class ReleaseType(str, Enum):
    """Fresh app release or migration from an existing app"""
    FRESH = "fresh"
    MIGRATION = "migration"


class ProgressBand(str, Enum):
    """Coarse completion band used by dashboards"""
    LOW = "low"        # 0-33
    MEDIUM = "medium"  # 34-66
    HIGH = "high"      # 67-100
