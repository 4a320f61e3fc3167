import csv
import logging
from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path

from coursegraph.core.errors import CatalogLoadError, CourseGraphError
from coursegraph.models.issue import ValidationIssue
from coursegraph.services.catalog import CourseCatalog

logger = logging.getLogger(__name__)


@dataclass
class CourseRecord:
    course_id: str
    title: str
    prerequisites: list[str]
    line_number: int


@dataclass
class RejectedRecord:
    line_number: int
    course_id: str
    code: str
    reason: str


@dataclass
class LoadReport:
    loaded: list[str] = field(default_factory=list)
    rejected: list[RejectedRecord] = field(default_factory=list)
    skipped_lines: list[int] = field(default_factory=list)
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.rejected


def parse_catalog_lines(content: str) -> tuple[list[CourseRecord], list[int]]:
    """Split ``ID,Title[,Prereq...]`` lines into candidate records.

    Returns the records plus the line numbers that were skipped for having
    fewer than two fields. Blank lines are ignored without being counted.
    """
    records: list[CourseRecord] = []
    skipped: list[int] = []
    # One record per line; quotes are ordinary characters
    reader = csv.reader(StringIO(content), quoting=csv.QUOTE_NONE)
    for row in reader:
        fields = [value.strip() for value in row]
        if not any(fields):
            continue
        if len(fields) < 2:
            skipped.append(reader.line_num)
            continue
        records.append(
            CourseRecord(
                course_id=fields[0],
                title=fields[1],
                prerequisites=[value for value in fields[2:] if value],
                line_number=reader.line_num,
            )
        )
    return records, skipped


def load_catalog(content: str, catalog: CourseCatalog) -> LoadReport:
    records, skipped = parse_catalog_lines(content)
    report = LoadReport(skipped_lines=skipped)

    for record in records:
        try:
            catalog.insert(record.course_id, record.title, record.prerequisites)
        except CourseGraphError as exc:
            logger.warning(
                "Rejected line %d: %s", record.line_number, exc.message,
                extra={"course_id": record.course_id, "error_code": exc.code, "line_number": record.line_number},
            )
            report.rejected.append(
                RejectedRecord(
                    line_number=record.line_number,
                    course_id=record.course_id,
                    code=exc.code,
                    reason=exc.message,
                )
            )
            continue
        report.loaded.append(record.course_id)

    catalog.rebuild_dependents()
    report.issues = catalog.validate_all()

    logger.info(
        "Loaded %d course(s): %d rejected, %d skipped, %d issue(s)",
        len(report.loaded), len(report.rejected), len(report.skipped_lines), len(report.issues),
    )
    return report


def load_catalog_file(path: str | Path, catalog: CourseCatalog) -> LoadReport:
    p = Path(path)
    try:
        content = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CatalogLoadError(str(p), str(exc)) from exc
    return load_catalog(content, catalog)
