from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from coursegraph.core.config import settings
from coursegraph.core.errors import CatalogLoadError
from coursegraph.core.store import CatalogStore, get_store
from coursegraph.schemas.catalog import (
    CatalogOrderResponse,
    CycleResponse,
    IssueResponse,
    LoadReportResponse,
    PrerequisiteCheckResponse,
)
from coursegraph.schemas.course import CourseCreateRequest, CourseDetailResponse, CourseResponse
from coursegraph.services.courses import bulk_create_courses
from coursegraph.services.graph import topo_sort
from coursegraph.services.loader import load_catalog
from coursegraph.services.prerequisites import check_prerequisites, has_cycle, prerequisite_order

router = APIRouter(prefix="/api")


@router.post("/catalog/upload", response_model=LoadReportResponse)
def upload_catalog_endpoint(
    file: UploadFile = File(...),
    store: CatalogStore = Depends(get_store),
):
    data = file.file.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="Catalog file is too large.")
    try:
        content = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CatalogLoadError(file.filename or "upload", str(exc)) from exc
    with store.lock:
        report = load_catalog(content, store.catalog)
    return LoadReportResponse.model_validate(report)


@router.get("/catalog/issues", response_model=list[IssueResponse])
def catalog_issues_endpoint(store: CatalogStore = Depends(get_store)):
    with store.lock:
        return [IssueResponse.model_validate(issue) for issue in store.catalog.validate_all()]


@router.get("/catalog/order", response_model=CatalogOrderResponse)
def catalog_order_endpoint(store: CatalogStore = Depends(get_store)):
    with store.lock:
        return CatalogOrderResponse(order=topo_sort(store.catalog.graph()))


@router.post("/courses", response_model=list[CourseResponse])
def bulk_create_courses_endpoint(
    payload: CourseCreateRequest,
    store: CatalogStore = Depends(get_store),
):
    with store.lock:
        return bulk_create_courses(store.catalog, payload.courses)


@router.get("/courses", response_model=list[CourseResponse])
def list_courses_endpoint(store: CatalogStore = Depends(get_store)):
    with store.lock:
        return store.catalog.sorted_courses()


@router.get("/courses/{course_id}", response_model=CourseDetailResponse)
def get_course_endpoint(course_id: str, store: CatalogStore = Depends(get_store)):
    with store.lock:
        course = store.catalog.get(course_id)
        return CourseDetailResponse(
            course_id=course.course_id,
            title=course.title,
            prerequisites=course.prerequisites,
            dependents=store.catalog.dependents_of(course_id),
        )


@router.get("/courses/{course_id}/cycle", response_model=CycleResponse)
def course_cycle_endpoint(course_id: str, store: CatalogStore = Depends(get_store)):
    with store.lock:
        return CycleResponse(course_id=course_id, has_cycle=has_cycle(store.catalog, course_id))


@router.get("/courses/{course_id}/prerequisite-order", response_model=list[CourseResponse])
def prerequisite_order_endpoint(course_id: str, store: CatalogStore = Depends(get_store)):
    with store.lock:
        return prerequisite_order(store.catalog, course_id)


@router.get("/courses/{course_id}/check", response_model=PrerequisiteCheckResponse)
def check_prerequisites_endpoint(course_id: str, store: CatalogStore = Depends(get_store)):
    with store.lock:
        return check_prerequisites(store.catalog, course_id)
