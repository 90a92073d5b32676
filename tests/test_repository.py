import pytest

from gradegoal.database.database import create_db_engine, create_session_factory, init_db
from gradegoal.database.repository import InMemoryStateRepository, SqlStateRepository
from gradegoal.services.course_store import CourseStore


@pytest.fixture
def sql_repository():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield SqlStateRepository(create_session_factory(engine))
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def any_repository(request, sql_repository):
    if request.param == "memory":
        return InMemoryStateRepository()
    return sql_repository


def test_missing_key_reads_none(any_repository):
    assert any_repository.read("absent") is None


def test_write_then_overwrite(any_repository):
    any_repository.write("key", "first")
    any_repository.write("key", "second")
    any_repository.write("other", "value")

    assert any_repository.read("key") == "second"
    assert any_repository.read("other") == "value"


def test_store_persists_through_sql(sql_repository, id_factory):
    store = CourseStore(sql_repository, id_factory=id_factory).load()
    course = store.add_course()
    store.update_item(course.id, course.items[0].id, weight=30, score=72.5)

    reloaded = CourseStore(sql_repository, id_factory=id_factory).load()

    assert reloaded.courses == store.courses
    assert reloaded.selected_course.items[0].score == 72.5
