import pytest
from fastapi.testclient import TestClient

from coursegraph.core.store import CatalogStore, get_store
from coursegraph.main import app
from coursegraph.services.catalog import CourseCatalog

CATALOG = b"""AA101,Intro
BB101,Mid,AA101
CC101,Circ,CC101
DD101,Late,BB101,MATH999
"""


@pytest.fixture
def store():
    return CatalogStore(catalog=CourseCatalog())


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def loaded(client):
    resp = client.post("/api/catalog/upload", files={"file": ("infile.txt", CATALOG, "text/plain")})
    assert resp.status_code == 200
    return client


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_upload_report(client):
    resp = client.post(
        "/api/catalog/upload",
        files={"file": ("infile.txt", CATALOG + b"X1,Bad\n", "text/plain")},
    )
    body = resp.json()
    assert resp.status_code == 200
    assert body["loaded"] == ["AA101", "BB101", "CC101", "DD101"]
    assert body["rejected"][0]["course_id"] == "X1"
    assert body["rejected"][0]["line_number"] == 5
    kinds = {issue["kind"] for issue in body["issues"]}
    assert kinds == {"self_reference", "dangling_prerequisite"}


def test_list_courses_sorted(loaded):
    resp = loaded.get("/api/courses")
    assert [c["course_id"] for c in resp.json()] == ["AA101", "BB101", "CC101", "DD101"]


def test_course_detail(loaded):
    resp = loaded.get("/api/courses/AA101")
    assert resp.status_code == 200
    assert resp.json() == {
        "course_id": "AA101",
        "title": "Intro",
        "prerequisites": [],
        "dependents": ["BB101"],
    }


def test_course_not_found(loaded):
    resp = loaded.get("/api/courses/ZZ999")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "COURSE_NOT_FOUND"


def test_prerequisite_order(loaded):
    resp = loaded.get("/api/courses/DD101/prerequisite-order")
    assert resp.status_code == 200
    assert [c["course_id"] for c in resp.json()] == ["AA101", "BB101"]


def test_prerequisite_order_cycle(loaded):
    resp = loaded.get("/api/courses/CC101/prerequisite-order")
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "CIRCULAR_DEPENDENCY"


def test_cycle_endpoint(loaded):
    assert loaded.get("/api/courses/CC101/cycle").json() == {"course_id": "CC101", "has_cycle": True}
    assert loaded.get("/api/courses/BB101/cycle").json() == {"course_id": "BB101", "has_cycle": False}


def test_check_endpoint(loaded):
    assert loaded.get("/api/courses/AA101/check").json()["status"] == "entry_level"
    assert loaded.get("/api/courses/CC101/check").json()["status"] == "circular"
    body = loaded.get("/api/courses/BB101/check").json()
    assert body == {"course_id": "BB101", "status": "valid", "prerequisites": ["AA101"]}


def test_issues_endpoint(loaded):
    issues = loaded.get("/api/catalog/issues").json()
    assert {(i["course_id"], i["kind"]) for i in issues} == {
        ("CC101", "self_reference"),
        ("DD101", "dangling_prerequisite"),
    }


def test_catalog_order_cycle(loaded):
    resp = loaded.get("/api/catalog/order")
    assert resp.status_code == 409


def test_bulk_create_and_catalog_order(client):
    resp = client.post("/api/courses", json={"courses": [
        {"course_id": "CSCI200", "title": "Next", "prerequisites": ["CSCI100"]},
        {"course_id": "CSCI100", "title": "Intro"},
    ]})
    assert resp.status_code == 200
    assert [c["course_id"] for c in resp.json()] == ["CSCI200", "CSCI100"]
    assert client.get("/api/courses/CSCI100").json()["dependents"] == ["CSCI200"]
    assert client.get("/api/catalog/order").json() == {"order": ["CSCI100", "CSCI200"]}


def test_bulk_create_invalid_id_is_atomic(client, store):
    resp = client.post("/api/courses", json={"courses": [
        {"course_id": "CSCI100", "title": "Intro"},
        {"course_id": "C1", "title": "Broken"},
    ]})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "INVALID_IDENTIFIER"
    assert len(store.catalog) == 0


def test_bulk_create_duplicate_rejected(client, store):
    store.catalog = CourseCatalog(duplicate_policy="reject")
    client.post("/api/courses", json={"courses": [{"course_id": "CSCI100", "title": "Intro"}]})
    resp = client.post("/api/courses", json={"courses": [{"course_id": "CSCI100", "title": "Again"}]})
    assert resp.status_code == 409
    assert store.catalog.find("CSCI100").title == "Intro"


def test_request_validation_envelope(client):
    resp = client.post("/api/courses", json={"courses": [{"title": "No id"}]})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_upload_invalid_utf8_rejected(client, store):
    resp = client.post(
        "/api/catalog/upload",
        files={"file": ("infile.txt", b"CS\xff300,Intro\n", "text/plain")},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "CATALOG_LOAD_FAILED"
    assert len(store.catalog) == 0
