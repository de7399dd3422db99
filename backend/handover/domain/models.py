"""Domain Models - Pydantic schemas for checklist configuration, projects and engine results"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict, PrivateAttr, field_validator, model_validator

from .enums import (
    FieldType, OptionsSource, ChecklistKind, ProjectStatus, PublishingStatus, ReleaseType
)


# ============================================================================
# Field Schema & Checklist Configuration
# ============================================================================

class FieldSchema(BaseModel):
    """
    One configurable checklist field.

    Stored in the admin-edited settings document using camelCase keys
    (optionsSource, hasStatus, ...); unknown keys are kept so the schema can
    grow without a code change.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., description="Field slug, unique within its list or group")
    label: str = Field(default="", description="Display label")
    type: FieldType = Field(..., description="Field type")
    optional: Optional[bool] = Field(None, description="True makes the field optional")
    required: Optional[bool] = Field(None, description="True forces the field mandatory, wins over optional")
    fields: Optional[List["FieldSchema"]] = Field(None, description="Sub-fields for group type")
    options: Optional[List[str]] = Field(None, description="Options for select/multi_select")
    options_source: Optional[OptionsSource] = Field(None, alias="optionsSource")
    requirements_field_id: Optional[str] = Field(None, alias="requirementsFieldId")
    has_status: bool = Field(default=False, alias="hasStatus")
    has_version: bool = Field(default=False, alias="hasVersion")
    placeholder: Optional[str] = None
    subtext: Optional[str] = None

    @property
    def is_required(self) -> bool:
        """required=True wins; optional=True opts out; neither set means mandatory"""
        if self.required is True:
            return True
        if self.optional is True:
            return False
        return True

    @property
    def is_group(self) -> bool:
        return self.type == FieldType.GROUP

    @property
    def uses_integrations(self) -> bool:
        return self.type == FieldType.MULTI_SELECT and self.options_source == OptionsSource.INTEGRATIONS


class FlattenedField(BaseModel):
    """A leaf field addressable in a checklist value bag"""
    model_config = ConfigDict(frozen=True)

    field: FieldSchema
    is_sub_field: bool = False
    group_id: Optional[str] = None
    group_label: Optional[str] = None

    @model_validator(mode="after")
    def _check_group_id(self) -> "FlattenedField":
        if self.is_sub_field != (self.group_id is not None):
            raise ValueError("group_id must be set exactly when is_sub_field is true")
        return self

    @property
    def id(self) -> str:
        return self.field.id

    @property
    def label(self) -> str:
        return self.field.label

    @property
    def type(self) -> FieldType:
        return self.field.type

    @property
    def is_required(self) -> bool:
        return self.field.is_required

    @property
    def path(self) -> str:
        """Dotted address inside the checklist (group.field or field)"""
        if self.is_sub_field:
            return f"{self.group_id}.{self.id}"
        return self.id


class ChecklistConfig(BaseModel):
    """Field schemas for both checklists"""
    model_config = ConfigDict(extra="allow")

    version: str = Field(..., description="Config version label")
    sales: List[FieldSchema] = Field(default_factory=list)
    launch: List[FieldSchema] = Field(default_factory=list)

    def fields_for(self, kind: ChecklistKind) -> List[FieldSchema]:
        """Top-level schema list for a checklist"""
        return self.launch if kind == ChecklistKind.LAUNCH else self.sales


class IntegrationRecord(BaseModel):
    """Integration catalog entry with its requirement checklist"""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str = ""
    category: str = ""
    scope: str = ""
    limitations: str = ""
    requirements: List[str] = Field(default_factory=list)
    documentation_link: str = Field(default="", alias="documentationLink")

    @field_validator("requirements", mode="before")
    @classmethod
    def _none_requirements(cls, value: Any) -> Any:
        return [] if value is None else value


# ============================================================================
# Checklist Values
# ============================================================================

class VersionedItem(BaseModel):
    """Object form of a list entry: {value, status?, version?, remark?}"""
    model_config = ConfigDict(extra="allow")

    value: str = ""
    status: Optional[str] = None
    version: Optional[int] = None
    remark: Optional[str] = None


class FieldMeta(BaseModel):
    """Side-channel state stored next to a field value as <id>_* sibling keys"""
    not_relevant: bool = False
    requirement_status: Dict[str, Dict[str, bool]] = Field(default_factory=dict)
    statuses_by_id: Dict[str, str] = Field(default_factory=dict)
    versions_by_id: Dict[str, int] = Field(default_factory=dict)


class EvaluationContext(BaseModel):
    """Inputs shared by every field evaluation of one checklist"""
    kind: ChecklistKind = ChecklistKind.SALES
    catalog: List[IntegrationRecord] = Field(default_factory=list)

    _by_id: Dict[str, IntegrationRecord] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        self._by_id = {integration.id: integration for integration in self.catalog}

    @property
    def is_launch(self) -> bool:
        return self.kind == ChecklistKind.LAUNCH

    @property
    def catalog_by_id(self) -> Dict[str, IntegrationRecord]:
        """Catalog indexed by integration id, built once per checklist"""
        return self._by_id


# ============================================================================
# Engine Results
# ============================================================================

class ProgressSnapshot(BaseModel):
    """Completion percentages written back to the project document"""
    sales_completion: int = Field(default=0, ge=0, le=100)
    launch_completion: int = Field(default=0, ge=0, le=100)
    overall: int = Field(default=0, ge=0, le=100)


class FieldVerdict(BaseModel):
    """Completion verdict for one flattened field, consumed by reports and emails"""
    field_id: str
    label: str
    type: FieldType
    group_id: Optional[str] = None
    group_label: Optional[str] = None
    required: bool = True
    not_relevant: bool = False
    complete: bool = False

    @property
    def counted(self) -> bool:
        """Whether the field takes part in the percentage"""
        return self.required and not self.not_relevant

    @property
    def missing(self) -> bool:
        return self.counted and not self.complete


class ReconciliationResult(BaseModel):
    """Canonical version list for a project"""
    versions: List[int]
    backfilled: bool = Field(default=False, description="True when computed from item data and not yet stored")
    observed: List[int] = Field(default_factory=list, description="Versions found on stored items (backfill only)")


class VersionDeletionResult(BaseModel):
    """Outcome of removing a version from the history"""
    deleted: bool
    versions: List[int]
    reason: Optional[str] = None


# ============================================================================
# Project
# ============================================================================

class POC(BaseModel):
    """Client point of contact"""
    name: str = ""
    email: str = ""
    phone: str = ""


class Checklists(BaseModel):
    """Raw value bags keyed by field id"""
    model_config = ConfigDict(extra="allow")

    sales: Dict[str, Any] = Field(default_factory=dict)
    launch: Dict[str, Any] = Field(default_factory=dict)


class Project(BaseModel):
    """Project handover document"""
    model_config = ConfigDict(extra="allow")

    project_id: str = Field(..., description="Unique project ID (PRJ-xxxx)")
    brand_name: str = Field(..., description="Client brand name")
    store_url_myshopify: str = ""
    store_public_url: str = ""
    collab_code: str = ""
    scope_of_work: str = ""
    release_type: Optional[ReleaseType] = None
    poc: POC = Field(default_factory=POC)

    status: ProjectStatus = Field(default=ProjectStatus.NOT_STARTED)
    publishing_status: PublishingStatus = Field(default=PublishingStatus.PENDING)

    version: int = Field(default=1, ge=1, description="Current version pointer")
    version_history: List[int] = Field(default_factory=lambda: [1])

    handover_date: Optional[str] = None
    completion_date: Optional[str] = None

    checklists: Checklists = Field(default_factory=Checklists)
    progress: ProgressSnapshot = Field(default_factory=ProgressSnapshot)

    created_at: datetime
    updated_at: datetime


class ProjectDetailsUpdate(BaseModel):
    """Descriptive fields a client may edit; only the keys sent are applied"""
    model_config = ConfigDict(extra="forbid")

    brand_name: str = Field(default="", min_length=1)
    store_url_myshopify: str = ""
    store_public_url: str = ""
    collab_code: str = ""
    scope_of_work: str = ""
    release_type: Optional[ReleaseType] = None
    poc: POC = Field(default_factory=POC)


FieldSchema.model_rebuild()
