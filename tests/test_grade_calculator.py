from dataclasses import replace
from types import SimpleNamespace

import pytest

from gradegoal.database.records import Course, Item
from gradegoal.services.grade_calculator import (
    NEED_ACHIEVED,
    NEED_IMPOSSIBLE,
    NEED_POSSIBLE,
    NEED_UNAVAILABLE,
    compute,
    describe_needed,
    item_need,
)


def test_empty_course_is_degenerate():
    results = compute(Course(id="c", name="Empty"))

    assert results.total_weight == 0
    assert results.completed_weight == 0
    assert results.remaining_weight == 0
    assert results.current_average == 0
    assert results.projected_final == 0
    assert results.needed_average_on_remaining is None
    assert results.rows == ()


def test_partially_graded_course(scenario_course):
    results = compute(scenario_course)

    assert results.total_weight == pytest.approx(100)
    assert results.completed_weight == pytest.approx(80)
    assert results.remaining_weight == pytest.approx(20)
    assert results.weighted_points_earned == pytest.approx(60.75)
    assert results.current_average == pytest.approx(75.9375)
    assert results.needed_average_on_remaining == pytest.approx(-53.75)
    assert results.projected_final == pytest.approx(60.75)


def test_need_pill_is_floored_at_zero_for_pending_items(scenario_course):
    results = compute(scenario_course)
    pending = [row for row in results.rows if row.pending]
    graded = [row for row in results.rows if not row.pending]

    assert [row.item.id for row in pending] == ["item-4"]
    assert item_need(results, pending[0]) == 0.0
    assert all(item_need(results, row) is None for row in graded)


def test_need_pill_is_shared_by_all_pending_items():
    course = Course(
        id="c",
        items=(
            Item(id="a", weight=40, score=50),
            Item(id="b", weight=30),
            Item(id="c", weight=30),
        ),
        target=80,
    )
    results = compute(course)

    # (0.8 * 100 - 20) / 60 * 100
    assert results.needed_average_on_remaining == pytest.approx(100.0)
    needs = {item_need(results, row) for row in results.pending_rows}
    assert len(needs) == 1


def test_blank_fields_do_not_divide_by_zero():
    course = Course(
        id="c",
        items=(Item(id="a", weight=None, score=None), Item(id="b", weight=None, score=None)),
    )
    results = compute(course)

    assert results.total_weight == 0
    assert results.needed_average_on_remaining is None
    assert results.current_average == 0
    assert results.projected_final == 0


def test_all_graded_has_no_needed_average_and_projection_matches_current():
    course = Course(
        id="c",
        target=100,
        items=(Item(id="a", weight=60, score=70), Item(id="b", weight=40, score=85)),
    )
    results = compute(course)

    assert results.remaining_weight == 0
    assert results.needed_average_on_remaining is None
    assert results.projected_final == pytest.approx(results.current_average)


@pytest.mark.parametrize("target", [0, 50, 100, None])
def test_fully_graded_needed_is_none_for_any_target(target):
    course = Course(id="c", target=target, items=(Item(id="a", weight=100, score=10),))
    assert compute(course).needed_average_on_remaining is None


def test_ungraded_item_does_not_change_current_average(scenario_course):
    before = compute(scenario_course).current_average
    extended = replace(
        scenario_course,
        items=scenario_course.items + (Item(id="extra", name="Exam", weight=60),),
    )

    assert compute(extended).current_average == before


def test_weights_are_not_normalized_to_100():
    course = Course(
        id="c",
        target=50,
        items=(Item(id="a", weight=40, score=50), Item(id="b", weight=40)),
    )
    results = compute(course)

    assert results.total_weight == pytest.approx(80)
    assert results.current_average == pytest.approx(50)
    # (0.5 * 80 - 20) / 40 * 100
    assert results.needed_average_on_remaining == pytest.approx(50)
    assert results.projected_final == pytest.approx(25)


def test_missing_target_leaves_needed_unset(scenario_course):
    results = compute(replace(scenario_course, target=None))
    assert results.needed_average_on_remaining is None


def test_malformed_values_are_treated_as_absent():
    course = SimpleNamespace(
        target="not a number",
        items=[
            SimpleNamespace(id="a", weight="10", score="n/a"),
            SimpleNamespace(id="b", weight=float("nan"), score=80),
            SimpleNamespace(id="c", weight=20, score="90"),
            SimpleNamespace(id="d"),
        ],
    )
    results = compute(course)

    assert results.total_weight == pytest.approx(30)
    assert results.completed_weight == pytest.approx(20)
    assert results.current_average == pytest.approx(90)
    assert results.needed_average_on_remaining is None
    assert [row.pending for row in results.rows] == [True, False, False, True]


def test_oversized_integer_weight_is_treated_as_absent():
    course = SimpleNamespace(
        target=50,
        items=[
            SimpleNamespace(weight=10 ** 400, score=50),
            SimpleNamespace(weight=20, score=10 ** 400),
        ],
    )
    results = compute(course)

    assert results.total_weight == pytest.approx(20)
    assert results.completed_weight == 0
    assert results.current_average == 0
    assert results.needed_average_on_remaining == pytest.approx(50)
    assert [row.pending for row in results.rows] == [False, True]


def test_remaining_weight_never_negative():
    course = SimpleNamespace(
        target=50,
        items=[
            SimpleNamespace(weight=30, score=60),
            SimpleNamespace(weight=-10, score=None),
        ],
    )
    results = compute(course)

    assert results.remaining_weight == 0
    assert results.needed_average_on_remaining is None


def test_compute_is_idempotent(scenario_course):
    assert compute(scenario_course) == compute(scenario_course)


def test_rows_keep_item_order_and_identity(scenario_course):
    results = compute(scenario_course)
    assert [row.item for row in results.rows] == list(scenario_course.items)


@pytest.mark.parametrize(
    "needed,expected",
    [
        (None, (NEED_UNAVAILABLE, None)),
        (float("inf"), (NEED_UNAVAILABLE, None)),
        (-53.75, (NEED_ACHIEVED, 0.0)),
        (0.0, (NEED_ACHIEVED, 0.0)),
        (72.5, (NEED_POSSIBLE, 72.5)),
        (100.0, (NEED_POSSIBLE, 100.0)),
        (130.0, (NEED_IMPOSSIBLE, 130.0)),
    ],
)
def test_describe_needed(needed, expected):
    assert describe_needed(needed) == expected
