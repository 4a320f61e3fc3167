from coursegraph.core.errors import DuplicateIdentifierError, InvalidIdentifierError
from coursegraph.models.course import Course
from coursegraph.schemas.course import CourseCreate
from coursegraph.services.catalog import CourseCatalog
from coursegraph.services.identifiers import is_valid_course_id


def bulk_create_courses(catalog: CourseCatalog, courses: list[CourseCreate]) -> list[Course]:
    # Check the whole batch first so a bad row leaves the catalog untouched
    seen: set[str] = set()
    for item in courses:
        if not is_valid_course_id(item.course_id, catalog.max_id_length):
            raise InvalidIdentifierError(item.course_id)
        if catalog.duplicate_policy == "reject" and (
            item.course_id in catalog or item.course_id in seen
        ):
            raise DuplicateIdentifierError(item.course_id)
        seen.add(item.course_id)

    items = [
        catalog.insert(item.course_id, item.title, item.prerequisites)
        for item in courses
    ]
    catalog.rebuild_dependents()
    return items
