"""
목적: 중첩 키/값 트리의 구조적 차이를 계산한다.
설명: desired/actual 트리를 양방향으로 순회해 제거(removed)/추가(added) 경로를 점 표기로 기록한다.
디자인 패턴: 순수 함수
참조: src/es_tools/core/schema/models.py, src/es_tools/core/index/reconciler.py
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from es_tools.core.schema.models import SchemaDiff


def structural_diff(desired: Mapping[str, Any], actual: Mapping[str, Any]) -> SchemaDiff:
    """두 트리의 차이를 반환한다.

    - removed: desired에 있으나 actual에 없거나 값이 다른 경로와 desired 값.
    - added: actual에 있으나 desired에 없거나 값이 다른 경로와 actual 값.

    스칼라(리스트 포함)는 타입까지 같아야 같은 값으로 본다.
    """

    removed: Dict[str, Any] = {}
    added: Dict[str, Any] = {}
    _collect_missing(desired or {}, actual or {}, "", removed)
    _collect_missing(actual or {}, desired or {}, "", added)
    return SchemaDiff(added=added, removed=removed)


def missing_paths(desired: Mapping[str, Any], actual: Mapping[str, Any]) -> Dict[str, Any]:
    """desired 항목 중 actual과 일치하지 않는 경로만 반환한다.

    actual에만 있는 추가 항목은 무시한다.
    """

    result: Dict[str, Any] = {}
    _collect_missing(desired or {}, actual or {}, "", result)
    return result


def values_equal(left: Any, right: Any) -> bool:
    """타입까지 고려한 스칼라 비교 결과를 반환한다."""

    if type(left) is not type(right):
        return False
    if isinstance(left, list):
        return len(left) == len(right) and all(values_equal(a, b) for a, b in zip(left, right))
    return left == right


def _collect_missing(
    left: Mapping[str, Any],
    right: Mapping[str, Any],
    path: str,
    out: Dict[str, Any],
) -> None:
    for key, left_value in left.items():
        sub_path = f"{path}.{key}" if path else str(key)
        if key not in right:
            out[sub_path] = left_value
            continue
        right_value = right[key]
        left_is_map = isinstance(left_value, Mapping)
        right_is_map = isinstance(right_value, Mapping)
        if left_is_map and right_is_map:
            _collect_missing(left_value, right_value, sub_path, out)
        elif left_is_map != right_is_map or not values_equal(left_value, right_value):
            out[sub_path] = left_value
