from pydantic import BaseModel


class CourseCreate(BaseModel):
    course_id: str
    title: str
    prerequisites: list[str] = []


class CourseCreateRequest(BaseModel):
    courses: list[CourseCreate]


class CourseResponse(CourseCreate):
    model_config = {
        "from_attributes": True,
    }


class CourseDetailResponse(CourseResponse):
    dependents: list[str] = []
