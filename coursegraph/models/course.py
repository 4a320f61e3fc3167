from dataclasses import dataclass, field


@dataclass
class Course:
    course_id: str
    title: str
    prerequisites: list[str] = field(default_factory=list)
    # Derived by CourseCatalog.rebuild_dependents(), never authored
    dependents: list[str] = field(default_factory=list)
