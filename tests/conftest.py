"""Shared fixtures: fresh catalogs and the two reference catalogs used across tests."""

import pytest

from coursegraph.services.catalog import CourseCatalog


def build_catalog(rows, policy="overwrite"):
    catalog = CourseCatalog(duplicate_policy=policy)
    for course_id, title, *prereqs in rows:
        catalog.insert(course_id, title, prereqs)
    catalog.rebuild_dependents()
    return catalog


@pytest.fixture
def catalog():
    return CourseCatalog()


@pytest.fixture
def intro_catalog():
    # Entry course, one dependent, one course listing itself
    return build_catalog([
        ("AA101", "Intro"),
        ("BB101", "Mid", "AA101"),
        ("CC101", "Circ", "CC101"),
    ])


@pytest.fixture
def diamond_catalog():
    return build_catalog([
        ("PHL100", "Final", "PHL200", "PHL300"),
        ("PHL200", "OptA", "PHL400"),
        ("PHL300", "OptB", "PHL400"),
        ("PHL400", "Common"),
    ])


@pytest.fixture
def make_catalog():
    return build_catalog
