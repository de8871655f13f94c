"""
목적: 구조적 차이 계산 규칙을 검증한다.
설명: 동일 트리의 빈 차이, 방향성, 타입 엄격 비교, 중첩 경로 표기를 확인한다.
디자인 패턴: 테스트 케이스
참조: src/es_tools/core/schema/diff.py
"""

from __future__ import annotations

import pytest

from es_tools.core.schema import SchemaDiff, missing_paths, structural_diff, values_equal


@pytest.mark.parametrize(
    "tree",
    [
        {},
        {"a": 1},
        {"a": {"b": {"c": {"d": "deep"}}}},
        {"a": [1, "2", None], "b": {"c": True, "d": 1.5}, "e": None},
    ],
)
def test_diff_of_identical_trees_is_empty(tree) -> None:
    """같은 트리의 차이는 비어 있어야 한다."""

    diff = structural_diff(tree, tree)

    assert diff.is_empty()
    assert not diff
    assert diff == SchemaDiff()


def test_diff_directionality() -> None:
    """desired에만 있는 키는 removed, actual에만 있는 키는 added에 기록된다."""

    desired = {"same": 1, "only_desired": "x", "nested": {"keep": True, "gone": 1}}
    actual = {"same": 1, "only_actual": "y", "nested": {"keep": True, "new": 2}}

    diff = structural_diff(desired, actual)

    assert diff.removed == {"only_desired": "x", "nested.gone": 1}
    assert diff.added == {"only_actual": "y", "nested.new": 2}


def test_changed_scalar_appears_on_both_sides() -> None:
    """값이 다른 스칼라는 양쪽에 각자의 값으로 기록된다."""

    diff = structural_diff({"analysis": {"max": "5"}}, {"analysis": {"max": "6"}})

    assert diff.removed == {"analysis.max": "5"}
    assert diff.added == {"analysis.max": "6"}
    assert diff.to_signed_dict() == {"+": {"analysis.max": "6"}, "-": {"analysis.max": "5"}}


def test_type_mismatch_between_map_and_scalar() -> None:
    """한쪽만 사전이면 값 전체가 차이로 기록된다."""

    diff = structural_diff({"a": {"b": 1}}, {"a": "flat"})

    assert diff.removed == {"a": {"b": 1}}
    assert diff.added == {"a": "flat"}


def test_scalar_comparison_is_type_strict() -> None:
    """문자열 "1"과 정수 1, True와 1은 서로 다른 값이다."""

    assert not values_equal("1", 1)
    assert not values_equal(True, 1)
    assert values_equal([1, "a"], [1, "a"])
    assert not values_equal([1], ["1"])
    assert structural_diff({"n": 1}, {"n": "1"}).removed == {"n": 1}


def test_missing_paths_ignores_extra_actual_entries() -> None:
    """missing_paths는 actual에만 있는 항목을 무시한다."""

    desired = {"properties": {"title": {"type": "text"}}}
    actual = {"properties": {"title": {"type": "text"}, "dynamic_field": {"type": "keyword"}}}

    assert missing_paths(desired, actual) == {}
    assert missing_paths({"properties": {"title": {"type": "keyword"}}}, actual) == {
        "properties.title.type": "keyword"
    }
