import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from coursegraph.core.errors import CircularDependencyError
from coursegraph.models.course import Course
from coursegraph.services.catalog import CourseCatalog

logger = logging.getLogger(__name__)


class PrerequisiteStatus(str, Enum):
    ENTRY_LEVEL = "entry_level"
    CIRCULAR = "circular"
    VALID = "valid"


@dataclass
class PrerequisiteCheck:
    course_id: str
    status: PrerequisiteStatus
    prerequisites: list[str] = field(default_factory=list)


def _resolved(catalog: CourseCatalog, course: Course) -> Iterator[Course]:
    # Dangling ids are leaves: skipped, never part of a cycle
    for req in course.prerequisites:
        prereq = catalog.find(req)
        if prereq is not None:
            yield prereq


def has_cycle(catalog: CourseCatalog, course_id: str) -> bool:
    """Depth-first search for a back edge reachable from ``course_id``.

    Uses an explicit work stack instead of recursion so long prerequisite
    chains cannot exhaust the interpreter stack. ``on_path`` holds the
    courses on the current path; ``visited`` the ones fully explored.
    A course listing itself is a cycle of length one because it is on the
    path before its own prerequisites are scanned.
    """
    start = catalog.get(course_id)

    visited: set[str] = set()
    on_path: set[str] = {start.course_id}
    stack = [(start.course_id, _resolved(catalog, start))]

    while stack:
        current_id, prereqs = stack[-1]
        for prereq in prereqs:
            if prereq.course_id in on_path:
                logger.warning(
                    "Circular prerequisite: %s -> %s", current_id, prereq.course_id,
                    extra={"course_id": course_id},
                )
                return True
            if prereq.course_id not in visited:
                on_path.add(prereq.course_id)
                stack.append((prereq.course_id, _resolved(catalog, prereq)))
                break
        else:
            stack.pop()
            on_path.discard(current_id)
            visited.add(current_id)

    return False


def prerequisite_order(catalog: CourseCatalog, course_id: str) -> list[Course]:
    """Courses to complete before ``course_id``, earliest first.

    Post-order over the prerequisite graph, rooted at each direct
    prerequisite in listed order. A course is emitted once all of its own
    prerequisites have been emitted, so shared prerequisites appear once.
    The target itself is never part of the result.
    """
    course = catalog.get(course_id)
    if has_cycle(catalog, course_id):
        raise CircularDependencyError(course_id)

    visited: set[str] = set()
    order: list[Course] = []

    for root in _resolved(catalog, course):
        if root.course_id in visited:
            continue
        visited.add(root.course_id)
        stack = [(root, _resolved(catalog, root))]
        while stack:
            current, prereqs = stack[-1]
            for prereq in prereqs:
                if prereq.course_id not in visited:
                    visited.add(prereq.course_id)
                    stack.append((prereq, _resolved(catalog, prereq)))
                    break
            else:
                stack.pop()
                order.append(current)

    return order


def check_prerequisites(catalog: CourseCatalog, course_id: str) -> PrerequisiteCheck:
    course = catalog.get(course_id)
    if not course.prerequisites:
        status = PrerequisiteStatus.ENTRY_LEVEL
    elif has_cycle(catalog, course_id):
        status = PrerequisiteStatus.CIRCULAR
    else:
        status = PrerequisiteStatus.VALID
    return PrerequisiteCheck(
        course_id=course.course_id,
        status=status,
        prerequisites=list(course.prerequisites),
    )
