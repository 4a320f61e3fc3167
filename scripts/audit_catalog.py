"""
Audit a course catalog file before it is served.

Prints rejected rows, advisory prerequisite issues and every course whose
prerequisite graph contains a cycle. Exits non-zero when rows were
rejected or a cycle exists.

    python scripts/audit_catalog.py infile.txt --policy reject
"""
from __future__ import annotations

import argparse

from coursegraph.core.errors import CatalogLoadError
from coursegraph.core.observability import setup_logging
from coursegraph.services.catalog import CourseCatalog
from coursegraph.services.loader import load_catalog_file
from coursegraph.services.prerequisites import has_cycle


def audit(path: str, policy: str) -> bool:
    catalog = CourseCatalog(duplicate_policy=policy)
    report = load_catalog_file(path, catalog)

    print(f"Loaded {len(report.loaded)} course(s) from {path}")
    for row in report.rejected:
        print(f"  line {row.line_number}: rejected {row.course_id!r} ({row.code})")
    for line in report.skipped_lines:
        print(f"  line {line}: skipped, fewer than two fields")
    for issue in report.issues:
        print(f"  {issue.kind.value}: {issue.message}")

    cyclic = [c.course_id for c in catalog.sorted_courses() if has_cycle(catalog, c.course_id)]
    for course_id in cyclic:
        print(f"  circular prerequisites reachable from {course_id}")

    return report.ok and not cyclic


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check a course catalog file for bad rows and prerequisite cycles.")
    parser.add_argument("path", nargs="?", default="infile.txt", help="Catalog file (ID,Title[,Prereq...] per line).")
    parser.add_argument("--policy", choices=["overwrite", "reject"], default="overwrite", help="Duplicate id policy.")
    parser.add_argument("--log-level", default="ERROR", help="Log level for engine messages.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    setup_logging(args.log_level, "text")
    try:
        ok = audit(args.path, args.policy)
    except CatalogLoadError as exc:
        raise SystemExit(exc.message)
    if not ok:
        raise SystemExit(1)
    print("Catalog OK.")


if __name__ == "__main__":
    main()
