"""Error hierarchy for the prerequisite engine.

Invariants:
    - Every error carries a code (str), a category (ErrorCategory) and an http_status
    - Only operation failures are raised; advisory validation findings are
      returned as ValidationIssue records and never appear here
    - to_response() produces the REST envelope used by the API exception handler
"""

from enum import Enum


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    BUSINESS_RULE = "business_rule"
    INPUT = "input"


class CourseGraphError(Exception):
    """Base exception for every failure the engine reports to its caller."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 500,
        course_id: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status
        self.course_id = course_id

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "course_id": self.course_id,
            }
        }


class InvalidIdentifierError(CourseGraphError):
    """Course id does not match the letters-then-digits format."""
    def __init__(self, course_id: str):
        super().__init__(
            f"Invalid course ID format: {course_id!r}",
            "INVALID_IDENTIFIER", ErrorCategory.VALIDATION, 400, course_id,
        )


class DuplicateIdentifierError(CourseGraphError):
    """Course id already present and the catalog rejects duplicates."""
    def __init__(self, course_id: str):
        super().__init__(
            f"Course already exists: {course_id}",
            "DUPLICATE_IDENTIFIER", ErrorCategory.CONFLICT, 409, course_id,
        )


class CourseNotFoundError(CourseGraphError):
    def __init__(self, course_id: str):
        super().__init__(
            f"Course not found: {course_id}",
            "COURSE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND, 404, course_id,
        )


class CircularDependencyError(CourseGraphError):
    """Prerequisite order requested over a graph that contains a cycle."""
    def __init__(self, course_id: str | None = None, remaining: list[str] | None = None):
        if course_id is not None:
            message = f"Circular prerequisite dependency detected for: {course_id}"
        else:
            message = "Circular prerequisite dependency detected in catalog"
        super().__init__(
            message, "CIRCULAR_DEPENDENCY", ErrorCategory.BUSINESS_RULE, 409, course_id,
        )
        self.remaining = remaining or []


class StaleDependentsError(CourseGraphError):
    """Dependents read after an insert without an intervening rebuild."""
    def __init__(self):
        super().__init__(
            "Dependents are stale; rebuild_dependents() must run after inserts",
            "STALE_DEPENDENTS", ErrorCategory.CONFLICT, 409,
        )


class CatalogLoadError(CourseGraphError):
    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Unable to load catalog from {source}: {reason}",
            "CATALOG_LOAD_FAILED", ErrorCategory.INPUT, 400,
        )
        self.source = source
