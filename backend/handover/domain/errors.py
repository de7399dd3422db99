"""
Errors raised by the handover engine, services and repositories

Each class carries the machine-readable code and HTTP status the API layer
answers with; the body shape is {"error": {"code", "message", "details"}}.
"""
from typing import Any, Dict, Optional


class DomainError(Exception):
    error_code: str = "DOMAIN_ERROR"
    http_status: int = 400

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details
            }
        }


class ValidationError(DomainError):
    """Bad request data: unknown fields, unparseable dates, non-positive versions"""
    error_code = "VALIDATION_ERROR"
    http_status = 400


class ConfigValidationError(ValidationError):
    """Checklist configuration or integrations catalog rejected on save"""
    error_code = "CONFIG_VALIDATION_ERROR"


class NotFoundError(DomainError):
    error_code = "NOT_FOUND"
    http_status = 404


class ProjectNotFoundError(NotFoundError):
    error_code = "PROJECT_NOT_FOUND"

    @classmethod
    def for_project(cls, project_id: str) -> "ProjectNotFoundError":
        return cls(f"Project {project_id} not found", details={"project_id": project_id})


class ConflictError(DomainError):
    error_code = "CONFLICT"
    http_status = 409


class AlreadyExistsError(ConflictError):
    """A project with the same id is already stored"""
    error_code = "ALREADY_EXISTS"


class EngineError(DomainError):
    """Failure inside the completion/progress/version engine"""
    error_code = "ENGINE_ERROR"
    http_status = 500


class EngineContractError(EngineError):
    """Engine called without a required argument (caller bug, not user input)"""
    error_code = "ENGINE_CONTRACT_VIOLATION"
