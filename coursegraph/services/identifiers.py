import re

MIN_ID_LENGTH = 5
MAX_ID_LENGTH = 20

# 2-4 letters followed by 3 or more digits, e.g. "CSCI300", "MTH215"
_COURSE_ID_RE = re.compile(r"[A-Za-z]{2,4}[0-9]{3,}")


def is_valid_course_id(course_id: str, max_length: int = MAX_ID_LENGTH) -> bool:
    if not isinstance(course_id, str):
        return False
    if not MIN_ID_LENGTH <= len(course_id) <= max_length:
        return False
    return _COURSE_ID_RE.fullmatch(course_id) is not None
