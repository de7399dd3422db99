"""
Value Access - Read checklist value bags and their sibling metadata keys

Stored checklists mix shapes freely: list entries are plain strings or
{value, status, version, remark} objects, and per-field state lives in
sibling keys (<id>_notRelevant, <id>_requirementStatus, <id>_statuses,
<id>_versions) next to the value. Everything in the engine reads values
through this module so there is one coercion rule for each shape.
"""
from typing import Any, Dict, Iterable, List, Optional, Union

from ..domain.models import FieldMeta, FieldSchema, FlattenedField, VersionedItem

NOT_RELEVANT_SUFFIX = "_notRelevant"
REQUIREMENT_STATUS_SUFFIX = "_requirementStatus"
STATUSES_SUFFIX = "_statuses"
VERSIONS_SUFFIX = "_versions"

LEGACY_VERSION = 1


def coerce_version(raw: Any) -> Optional[int]:
    """
    Interpret a stored version tag

    Returns a positive int, or None when the tag is missing or unusable.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw > 0 else None
    if isinstance(raw, float) and raw.is_integer():
        return coerce_version(int(raw))
    if isinstance(raw, str) and raw.strip().isdigit():
        return coerce_version(int(raw.strip()))
    return None


def effective_value(item: Any) -> str:
    """String value of a list entry, plain or object form"""
    if isinstance(item, str):
        return item
    if isinstance(item, VersionedItem):
        return item.value
    if isinstance(item, dict):
        value = item.get("value")
        if value is None or value is False:
            return ""
        return str(value)
    return ""


def effective_version(item: Any) -> int:
    """Version of a list entry; plain (legacy) entries belong to version 1"""
    if isinstance(item, VersionedItem):
        return coerce_version(item.version) or LEGACY_VERSION
    if isinstance(item, dict):
        return coerce_version(item.get("version")) or LEGACY_VERSION
    return LEGACY_VERSION


def has_text(value: Any) -> bool:
    """True when a scalar, versioned entry or list of entries holds non-blank text"""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (dict, VersionedItem)):
        return bool(effective_value(value).strip())
    if isinstance(value, (list, tuple)):
        return any(effective_value(entry).strip() for entry in value)
    if isinstance(value, (int, float)):
        return value != 0
    return bool(str(value).strip())


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def get_container(checklist: Optional[Dict[str, Any]], field: FlattenedField) -> Dict[str, Any]:
    """The object that holds a field's value and sibling keys"""
    checklist = _as_dict(checklist)
    if field.is_sub_field:
        return _as_dict(checklist.get(field.group_id))
    return checklist


def get_field_value(checklist: Optional[Dict[str, Any]], field: FlattenedField) -> Any:
    """Stored value for a flattened field; None when absent"""
    return get_container(checklist, field).get(field.id)


def is_not_relevant(checklist: Optional[Dict[str, Any]], field: FlattenedField) -> bool:
    """Field flag, or for sub-fields the parent group's flag"""
    if field.is_sub_field and _as_dict(checklist).get(f"{field.group_id}{NOT_RELEVANT_SUFFIX}") is True:
        return True
    return get_container(checklist, field).get(f"{field.id}{NOT_RELEVANT_SUFFIX}") is True


def _requirement_status(raw: Any) -> Dict[str, Dict[str, bool]]:
    status: Dict[str, Dict[str, bool]] = {}
    for integration_id, checks in _as_dict(raw).items():
        if isinstance(checks, dict):
            status[str(integration_id)] = {str(req): checked is True for req, checked in checks.items()}
    return status


def _statuses(raw: Any) -> Dict[str, str]:
    return {str(key): value for key, value in _as_dict(raw).items() if isinstance(value, str)}


def _versions(raw: Any) -> Dict[str, int]:
    versions: Dict[str, int] = {}
    for key, value in _as_dict(raw).items():
        version = coerce_version(value)
        if version is not None:
            versions[str(key)] = version
    return versions


def read_field_meta(checklist: Optional[Dict[str, Any]], field: FlattenedField) -> FieldMeta:
    """Collect a field's sibling keys into a FieldMeta record"""
    container = get_container(checklist, field)
    return FieldMeta(
        not_relevant=is_not_relevant(checklist, field),
        requirement_status=_requirement_status(container.get(f"{field.id}{REQUIREMENT_STATUS_SUFFIX}")),
        statuses_by_id=_statuses(container.get(f"{field.id}{STATUSES_SUFFIX}")),
        versions_by_id=_versions(container.get(f"{field.id}{VERSIONS_SUFFIX}")),
    )


def find_value_by_id(
    checklist: Optional[Dict[str, Any]],
    schema_list: Iterable[FieldSchema],
    field_id: str
) -> Any:
    """
    Look a field up by id alone: top level first, then inside groups

    Used by consumers (email drafts) that only know the field slug.
    """
    checklist = _as_dict(checklist)
    if field_id in checklist:
        return checklist[field_id]

    for field in schema_list:
        if field.is_group and any(sub.id == field_id for sub in field.fields or []):
            group_value = checklist.get(field.id)
            if isinstance(group_value, dict):
                return group_value.get(field_id)
    return None


def normalize_versioned_entries(
    value: Any,
    default_version: int = LEGACY_VERSION
) -> List[VersionedItem]:
    """
    Turn any stored shape of a versioned text field into VersionedItems

    Accepts a plain string, a single {value, version} object, or a list of
    either. Entries without a usable version get default_version.
    """
    if value is None or value == "":
        return []

    raw_entries: List[Union[str, dict]] = value if isinstance(value, list) else [value]
    entries: List[VersionedItem] = []
    for entry in raw_entries:
        if isinstance(entry, str):
            entries.append(VersionedItem(value=entry, version=default_version))
        elif isinstance(entry, dict):
            entries.append(
                VersionedItem(
                    value=effective_value(entry),
                    version=coerce_version(entry.get("version")) or default_version,
                    status=entry.get("status") if isinstance(entry.get("status"), str) else None,
                    remark=entry.get("remark") if isinstance(entry.get("remark"), str) else None,
                )
            )
    return entries


def seed_launch_integrations(
    sales: Optional[Dict[str, Any]],
    launch: Optional[Dict[str, Any]],
    group_id: str = "integrations",
    field_id: str = "integrations"
) -> Dict[str, Any]:
    """
    Copy the sales integration selection into an empty launch checklist

    Returns a new launch dict; the launch selection is only filled when it
    is empty, other keys of the launch group are kept.
    """
    launch_data = dict(_as_dict(launch))
    sales_selection = _as_dict(_as_dict(sales).get(group_id)).get(field_id)
    if not isinstance(sales_selection, list) or not sales_selection:
        return launch_data

    launch_group = _as_dict(launch_data.get(group_id))
    current = launch_group.get(field_id)
    if isinstance(current, list) and current:
        return launch_data

    launch_data[group_id] = {**launch_group, field_id: list(sales_selection)}
    return launch_data
