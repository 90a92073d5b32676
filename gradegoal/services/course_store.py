"""Course store: the ordered course list, the selection and their persistence"""

from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

import structlog

from gradegoal.database.records import Course, Item
from gradegoal.database.repository import StateRepository
from gradegoal.services.exceptions import (
    CourseNotFoundError,
    ItemNotFoundError,
    LastCourseError,
    TransferError,
)
from gradegoal.services.transfer_service import decode_state, encode_state
from gradegoal.utils.constants import (
    COPY_SUFFIX,
    DEFAULT_COURSE_NAME,
    DEFAULT_ITEM_NAMES,
    DEFAULT_TARGET,
    SEED_COURSE_NAME,
    SEED_ITEM_VALUES,
    STORAGE_KEY,
)
from gradegoal.utils.helpers import clamp_percent, new_id

logger = structlog.get_logger(__name__)

EDITABLE_ITEM_FIELDS = ("name", "weight", "score")


def blank_item(id_factory: Callable[[], str] = new_id, name: str = "") -> Item:
    return Item(id=id_factory(), name=name)


def default_course(id_factory: Callable[[], str] = new_id) -> Course:
    """A fresh course with the default, ungraded item set"""
    return Course(
        id=id_factory(),
        name=DEFAULT_COURSE_NAME,
        target=DEFAULT_TARGET,
        items=tuple(blank_item(id_factory, name) for name in DEFAULT_ITEM_NAMES),
    )


def seed_course(id_factory: Callable[[], str] = new_id) -> Course:
    """The example course shown on first run"""
    course = default_course(id_factory)
    items = []
    for item in course.items:
        weight, score = SEED_ITEM_VALUES.get(item.name, (None, None))
        items.append(replace(item, weight=clamp_percent(weight), score=clamp_percent(score)))
    return replace(course, name=SEED_COURSE_NAME, items=tuple(items))


class CourseStore:
    """
    Owns the courses and the selected course id

    Every mutation builds new records, swaps them in and writes the whole
    store back to the repository, so readers never see a partial update.

    Args:
        repository: Where the serialized store is read from and written to
        id_factory: Source of fresh course and item identifiers
        storage_key: Repository key holding the serialized store
    """

    def __init__(
        self,
        repository: StateRepository,
        id_factory: Callable[[], str] = new_id,
        storage_key: str = STORAGE_KEY,
    ):
        self._repository = repository
        self._id_factory = id_factory
        self._storage_key = storage_key
        self._courses: Tuple[Course, ...] = ()
        self._selected_id: Optional[str] = None

    # Loading and persistence

    def load(self) -> "CourseStore":
        """Restore the stored courses, or seed the example course when none are usable"""
        restored = decode_state(self._repository.read(self._storage_key), self._id_factory)
        if restored is None:
            seed = seed_course(self._id_factory)
            logger.info("store_seeded", course_id=seed.id)
            self._commit((seed,), seed.id)
            return self

        courses, selected_id = restored
        self._courses = tuple(courses)
        self._selected_id = selected_id or courses[0].id
        logger.info("store_loaded", courses=len(courses), selected_id=self._selected_id)
        return self

    def snapshot(self) -> Dict[str, Any]:
        """The persisted record: {"courses": [...], "selectedId": ...}"""
        return {
            "courses": [course.to_dict() for course in self._courses],
            "selectedId": self._selected_id,
        }

    def _commit(self, courses: Iterable[Course], selected_id: Optional[str]) -> None:
        self._courses = tuple(courses)
        self._selected_id = selected_id
        self._repository.write(self._storage_key, encode_state(self._courses, self._selected_id))

    # Queries

    @property
    def id_factory(self) -> Callable[[], str]:
        return self._id_factory

    @property
    def courses(self) -> Tuple[Course, ...]:
        return self._courses

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected_course(self) -> Optional[Course]:
        """The selected course, falling back to the first one"""
        selected = self.find_course(self._selected_id) if self._selected_id else None
        if selected is None and self._courses:
            return self._courses[0]
        return selected

    def find_course(self, course_id: str) -> Optional[Course]:
        return next((c for c in self._courses if c.id == course_id), None)

    def get_course(self, course_id: str) -> Course:
        course = self.find_course(course_id)
        if course is None:
            raise CourseNotFoundError(course_id)
        return course

    def _replace_course(self, course_id: str, **changes: Any) -> Course:
        current = self.get_course(course_id)
        updated = replace(current, **changes)
        self._commit(
            (updated if c.id == course_id else c for c in self._courses),
            self._selected_id,
        )
        return updated

    # Course operations

    def select(self, course_id: str) -> Course:
        course = self.get_course(course_id)
        self._commit(self._courses, course.id)
        return course

    def add_course(self) -> Course:
        course = default_course(self._id_factory)
        self._commit(self._courses + (course,), course.id)
        logger.debug("course_added", course_id=course.id)
        return course

    def duplicate_course(self, course_id: str) -> Course:
        """Deep copy a course with fresh identifiers for it and every item"""
        source = self.get_course(course_id)
        copy = replace(
            source,
            id=self._id_factory(),
            name=f"{source.name}{COPY_SUFFIX}",
            items=tuple(replace(item, id=self._id_factory()) for item in source.items),
        )
        self._commit(self._courses + (copy,), copy.id)
        logger.debug("course_duplicated", source_id=course_id, course_id=copy.id)
        return copy

    def delete_course(self, course_id: str) -> None:
        """
        Delete a course and select the first remaining one

        Raises:
            LastCourseError: course_id is the only course left
            CourseNotFoundError: no course has this id
        """
        self.get_course(course_id)
        if len(self._courses) == 1:
            logger.info("course_delete_refused", course_id=course_id)
            raise LastCourseError()
        remaining = tuple(c for c in self._courses if c.id != course_id)
        self._commit(remaining, remaining[0].id)
        logger.debug("course_deleted", course_id=course_id)

    def rename_course(self, course_id: str, name: str) -> Course:
        return self._replace_course(course_id, name=str(name or ""))

    def set_target(self, course_id: str, target: Any) -> Course:
        return self._replace_course(course_id, target=clamp_percent(target))

    # Item operations

    def add_item(self, course_id: str, name: str = "") -> Item:
        course = self.get_course(course_id)
        item = blank_item(self._id_factory, name)
        self._replace_course(course_id, items=course.items + (item,))
        return item

    def update_item(self, course_id: str, item_id: str, **fields: Any) -> Item:
        """
        Patch an item's name, weight or score

        Weights and scores are clamped to [0, 100]; blank values unset them.
        """
        unknown = set(fields) - set(EDITABLE_ITEM_FIELDS)
        if unknown:
            raise TypeError(f"Unknown item fields: {sorted(unknown)}")

        course = self.get_course(course_id)
        current = course.find_item(item_id)
        if current is None:
            raise ItemNotFoundError(course_id, item_id)

        changes: Dict[str, Any] = {}
        if "name" in fields:
            changes["name"] = str(fields["name"] or "")
        for key in ("weight", "score"):
            if key in fields:
                changes[key] = clamp_percent(fields[key])

        updated = replace(current, **changes)
        self._replace_course(
            course_id,
            items=tuple(updated if item.id == item_id else item for item in course.items),
        )
        return updated

    def remove_item(self, course_id: str, item_id: str) -> None:
        course = self.get_course(course_id)
        if course.find_item(item_id) is None:
            raise ItemNotFoundError(course_id, item_id)
        self._replace_course(
            course_id,
            items=tuple(item for item in course.items if item.id != item_id),
        )

    # Imports

    def import_course(self, course: Course) -> Course:
        """
        Append an imported course and select it

        When its id is already taken, the course and all of its items get
        fresh identifiers.
        """
        if self.find_course(course.id) is not None:
            course = replace(
                course,
                id=self._id_factory(),
                items=tuple(replace(item, id=self._id_factory()) for item in course.items),
            )
            logger.info("course_import_reassigned_ids", course_id=course.id)
        self._commit(self._courses + (course,), course.id)
        logger.info("course_imported", course_id=course.id, items=len(course.items))
        return course

    def replace_all(self, courses: Iterable[Course]) -> None:
        """Replace the whole store and select the first course"""
        courses = tuple(courses)
        if not courses:
            raise TransferError("Invalid courses file")
        self._commit(courses, courses[0].id)
        logger.info("courses_replaced", count=len(courses))
