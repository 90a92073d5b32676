"""JSON import/export of courses and of the persisted store"""

import json
from typing import Any, Callable, Iterable, List, Optional, Tuple, Union

import structlog

from gradegoal.database.records import Course
from gradegoal.services.exceptions import InvalidCourseFileError, InvalidJSONError
from gradegoal.utils.constants import EXPORT_ALL_FILENAME
from gradegoal.utils.helpers import new_id, sanitize_filename

logger = structlog.get_logger(__name__)

FileContent = Union[str, bytes]


def export_course(course: Course) -> Tuple[str, str]:
    """
    Serialize a single course for download

    Returns:
        Tuple of (file name, pretty-printed JSON text)
    """
    filename = f"{sanitize_filename(course.name)}.json"
    text = json.dumps(course.to_dict(), indent=2)
    logger.debug("course_exported", course_id=course.id, filename=filename)
    return filename, text


def export_all(courses: Iterable[Course]) -> Tuple[str, str]:
    """Serialize every course as {"courses": [...]} for download"""
    payload = {"courses": [course.to_dict() for course in courses]}
    logger.debug("courses_exported", count=len(payload["courses"]))
    return EXPORT_ALL_FILENAME, json.dumps(payload, indent=2)


def _decode(content: FileContent) -> Any:
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidJSONError() from e
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise InvalidJSONError() from e


def parse_course_file(content: FileContent, id_factory: Callable[[], str] = new_id) -> Course:
    """
    Parse an exported single-course file

    Items without an id get one from id_factory.

    Raises:
        InvalidJSONError: the content is not valid JSON
        InvalidCourseFileError: the JSON value lacks an id or a name
    """
    data = _decode(content)
    if not isinstance(data, dict) or not data.get("id") or not data.get("name"):
        logger.warning("course_import_rejected", reason="missing id or name")
        raise InvalidCourseFileError()
    return Course.from_dict(data, id_factory)


def parse_all_file(content: FileContent, id_factory: Callable[[], str] = new_id) -> List[Course]:
    """
    Parse an "all courses" file

    Raises:
        InvalidJSONError: the content is not valid JSON
        InvalidCourseFileError: there is no non-empty courses array of objects
    """
    data = _decode(content)
    raw_courses = data.get("courses") if isinstance(data, dict) else None
    if not isinstance(raw_courses, list) or not raw_courses:
        logger.warning("courses_import_rejected", reason="missing courses array")
        raise InvalidCourseFileError("Invalid courses file")
    if not all(isinstance(raw, dict) for raw in raw_courses):
        logger.warning("courses_import_rejected", reason="non-object course entry")
        raise InvalidCourseFileError("Invalid courses file")
    return [Course.from_dict(raw, id_factory) for raw in raw_courses]


def encode_state(courses: Iterable[Course], selected_id: Optional[str]) -> str:
    """Serialize the store record written under the storage key"""
    return json.dumps({
        "courses": [course.to_dict() for course in courses],
        "selectedId": selected_id,
    })


def decode_state(
    text: Optional[str],
    id_factory: Callable[[], str] = new_id,
) -> Optional[Tuple[List[Course], Optional[str]]]:
    """
    Decode a persisted store record

    Returns:
        (courses, selected_id), or None when the value is absent, malformed
        or holds no courses
    """
    if text is None:
        return None
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        logger.warning("stored_state_unreadable", reason="invalid json")
        return None
    raw_courses = data.get("courses") if isinstance(data, dict) else None
    if not isinstance(raw_courses, list):
        logger.warning("stored_state_unreadable", reason="missing courses array")
        return None
    courses = [Course.from_dict(raw, id_factory) for raw in raw_courses if isinstance(raw, dict)]
    if not courses:
        return None
    selected_id = data.get("selectedId")
    return courses, str(selected_id) if selected_id else None
