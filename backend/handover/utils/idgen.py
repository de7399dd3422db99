"""Identifiers for projects and request tracing"""
import uuid

PROJECT_ID_PREFIX = "PRJ"


def generate_project_id() -> str:
    """Project id such as 'PRJ-3f2a9c1b7d04'"""
    return f"{PROJECT_ID_PREFIX}-{uuid.uuid4().hex[:12]}"


def generate_correlation_id() -> str:
    return str(uuid.uuid4())
