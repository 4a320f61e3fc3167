from pydantic import BaseModel

from coursegraph.models.issue import IssueKind
from coursegraph.services.prerequisites import PrerequisiteStatus


class IssueResponse(BaseModel):
    course_id: str
    prerequisite_id: str
    kind: IssueKind
    message: str

    model_config = {
        "from_attributes": True,
    }


class RejectedRecordResponse(BaseModel):
    line_number: int
    course_id: str
    code: str
    reason: str

    model_config = {
        "from_attributes": True,
    }


class LoadReportResponse(BaseModel):
    loaded: list[str]
    rejected: list[RejectedRecordResponse] = []
    skipped_lines: list[int] = []
    issues: list[IssueResponse] = []

    model_config = {
        "from_attributes": True,
    }


class CycleResponse(BaseModel):
    course_id: str
    has_cycle: bool


class PrerequisiteCheckResponse(BaseModel):
    course_id: str
    status: PrerequisiteStatus
    prerequisites: list[str] = []

    model_config = {
        "from_attributes": True,
    }


class CatalogOrderResponse(BaseModel):
    order: list[str]
