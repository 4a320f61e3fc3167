import logging
from collections.abc import Iterable, Iterator

from coursegraph.core.errors import (
    CourseNotFoundError,
    DuplicateIdentifierError,
    InvalidIdentifierError,
    StaleDependentsError,
)
from coursegraph.models.course import Course
from coursegraph.models.issue import IssueKind, ValidationIssue
from coursegraph.services.graph import PrereqGraph, build_graph
from coursegraph.services.identifiers import MAX_ID_LENGTH, MIN_ID_LENGTH, is_valid_course_id

logger = logging.getLogger(__name__)

DUPLICATE_POLICIES = ("overwrite", "reject")


class CourseCatalog:
    """In-memory course records keyed by id.

    Load phase (insert, rebuild_dependents) must finish before the query
    phase starts; the catalog does no locking of its own.
    """

    def __init__(self, duplicate_policy: str = "overwrite", max_id_length: int = MAX_ID_LENGTH):
        if duplicate_policy not in DUPLICATE_POLICIES:
            raise ValueError(f"Unknown duplicate policy: {duplicate_policy!r}")
        if not MIN_ID_LENGTH <= max_id_length <= MAX_ID_LENGTH:
            raise ValueError(f"max_id_length must be between {MIN_ID_LENGTH} and {MAX_ID_LENGTH}")
        self.duplicate_policy = duplicate_policy
        self.max_id_length = max_id_length
        self._courses: dict[str, Course] = {}
        self._graph: PrereqGraph | None = None
        self._stale = False

    def __len__(self) -> int:
        return len(self._courses)

    def __contains__(self, course_id: object) -> bool:
        return course_id in self._courses

    def __iter__(self) -> Iterator[Course]:
        return iter(list(self._courses.values()))

    @property
    def needs_rebuild(self) -> bool:
        return self._stale

    def insert(self, course_id: str, title: str, prerequisites: Iterable[str] = ()) -> Course:
        if not is_valid_course_id(course_id, self.max_id_length):
            raise InvalidIdentifierError(course_id)
        if course_id in self._courses and self.duplicate_policy == "reject":
            raise DuplicateIdentifierError(course_id)

        course = Course(course_id=course_id, title=title, prerequisites=list(prerequisites))
        if course_id in self._courses:
            logger.info("Overwriting course %s", course_id, extra={"course_id": course_id})
        self._courses[course_id] = course
        self._stale = True
        return course

    def find(self, course_id: str) -> Course | None:
        return self._courses.get(course_id)

    def get(self, course_id: str) -> Course:
        course = self._courses.get(course_id)
        if course is None:
            raise CourseNotFoundError(course_id)
        return course

    def sorted_courses(self) -> list[Course]:
        return sorted(self._courses.values(), key=lambda c: c.course_id)

    def rebuild_dependents(self) -> PrereqGraph:
        graph = build_graph(self._courses.values())
        for course in self._courses.values():
            course.dependents = list(graph.edges.get(course.course_id, ()))
        self._graph = graph
        self._stale = False
        logger.debug(
            "Rebuilt dependency graph: %d courses, %d edges",
            len(graph.nodes), sum(len(v) for v in graph.prereqs.values()),
        )
        return graph

    def graph(self) -> PrereqGraph:
        if self._stale:
            raise StaleDependentsError()
        if self._graph is None:
            return self.rebuild_dependents()
        return self._graph

    def dependents_of(self, course_id: str) -> list[str]:
        course = self.get(course_id)
        if self._stale:
            raise StaleDependentsError()
        return list(course.dependents)

    def validate_all(self) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for course in self._courses.values():
            seen: set[str] = set()
            reported: set[str] = set()
            for req in course.prerequisites:
                if req in seen:
                    if req not in reported:
                        issues.append(ValidationIssue(course.course_id, req, IssueKind.DUPLICATE_PREREQUISITE))
                        reported.add(req)
                    continue
                seen.add(req)
                if req == course.course_id:
                    issues.append(ValidationIssue(course.course_id, req, IssueKind.SELF_REFERENCE))
                elif req not in self._courses:
                    issues.append(ValidationIssue(course.course_id, req, IssueKind.DANGLING_PREREQUISITE))

        for issue in issues:
            logger.warning("%s", issue.message, extra={"course_id": issue.course_id})
        return issues
