from dataclasses import dataclass
from enum import Enum


class IssueKind(str, Enum):
    DANGLING_PREREQUISITE = "dangling_prerequisite"
    SELF_REFERENCE = "self_reference"
    DUPLICATE_PREREQUISITE = "duplicate_prerequisite"


@dataclass(frozen=True)
class ValidationIssue:
    course_id: str
    prerequisite_id: str
    kind: IssueKind

    @property
    def message(self) -> str:
        if self.kind is IssueKind.DANGLING_PREREQUISITE:
            return f"Invalid prerequisite: {self.prerequisite_id} for course {self.course_id}"
        if self.kind is IssueKind.SELF_REFERENCE:
            return f"Course {self.course_id} lists itself as a prerequisite"
        return f"Prerequisite {self.prerequisite_id} listed more than once for course {self.course_id}"
