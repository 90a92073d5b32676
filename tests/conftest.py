import itertools

import pytest

from gradegoal.database.records import Course, Item
from gradegoal.database.repository import InMemoryStateRepository
from gradegoal.services.course_store import CourseStore


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def repository():
    return InMemoryStateRepository()


@pytest.fixture
def store(repository, id_factory):
    return CourseStore(repository, id_factory=id_factory).load()


@pytest.fixture
def scenario_course():
    """Six items, one pending, target 50"""
    values = [(10, 47), (10, 60), (10, 38), (20, None), (25, 95), (25, 90)]
    return Course(
        id="course-1",
        name="Man Acc 288",
        target=50,
        items=tuple(
            Item(id=f"item-{i}", name=f"I{i}", weight=weight, score=score)
            for i, (weight, score) in enumerate(values, start=1)
        ),
    )
