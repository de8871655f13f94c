"""
목적: 인덱스 설정/매핑을 비교 가능한 정규형으로 바꾼다.
설명: settings/index 래퍼 제거, 점 경로 키 확장, 재인덱싱 민감 키 추출, 설정 값 문자열화,
      매핑 래퍼/레거시 매핑 타입 제거를 제공한다.
디자인 패턴: 순수 함수
참조: src/es_tools/core/schema/diff.py, src/es_tools/core/index/reconciler.py
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Mapping, MutableMapping, Optional, Sequence

from es_tools.shared.const import IndexConst
from es_tools.shared.exceptions import MappingDefinitionError

# 매핑 최상위에 올 수 있는 파라미터. 이 키들은 매핑 타입 이름으로 보지 않는다.
_MAPPING_ROOT_PARAMETERS = frozenset(
    {
        "properties",
        "dynamic",
        "dynamic_templates",
        "dynamic_date_formats",
        "date_detection",
        "numeric_detection",
        "runtime",
        "_source",
        "_routing",
        "_meta",
        "_all",
        "_field_names",
        "_size",
        "enabled",
        "subobjects",
    }
)


def expand_dot_paths(tree: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """점 경로 키를 중첩 사전으로 펼친다.

    `{"index.mapping.single_type": True}` 는 `{"index": {"mapping": {"single_type": True}}}` 가 된다.
    입력을 직접 수정하고 같은 객체를 반환한다. 점으로만 이루어진 키는 바꾸지 않는다.
    """

    for key in [key for key in tree.keys() if isinstance(key, str) and "." in key]:
        segments = [segment for segment in key.split(".") if segment]
        if not segments:
            # "." 처럼 점만 있는 키는 펼칠 경로가 없으므로 그대로 둔다.
            continue
        value = tree.pop(key)
        current = tree
        for segment in segments[:-1]:
            child = current.get(segment)
            if not isinstance(child, MutableMapping):
                child = {}
                current[segment] = child
            current = child
        _assign(current, segments[-1], value)
    for value in tree.values():
        if isinstance(value, MutableMapping):
            expand_dot_paths(value)
    return tree


def normalize_index_settings(raw: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """설정 트리를 정규형으로 바꾼 사본을 반환한다."""

    settings: Dict[str, Any] = copy.deepcopy(dict(raw or {}))
    if isinstance(settings.get("settings"), Mapping):
        settings = dict(settings["settings"])
    expand_dot_paths(settings)
    index_settings = settings.get("index")
    if isinstance(index_settings, Mapping):
        del settings["index"]
        for key, value in index_settings.items():
            _assign(settings, key, value)
    return expand_dot_paths(settings)


def extract_reindex_sensitive(
    settings: Mapping[str, Any],
    keys: Sequence[str] = IndexConst.REINDEX_SENSITIVE_SETTINGS,
) -> Dict[str, Any]:
    """재인덱싱에 영향을 주는 설정만 뽑는다. 없는 키는 빈 사전이 된다."""

    extracted: Dict[str, Any] = {}
    for key in keys:
        value = settings.get(key)
        extracted[key] = copy.deepcopy(value) if isinstance(value, Mapping) else {}
    return extracted


def canonicalize_setting_values(value: Any) -> Any:
    """설정 값을 Elasticsearch 응답 형태(문자열)로 바꾼다."""

    if isinstance(value, Mapping):
        return {key: canonicalize_setting_values(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [canonicalize_setting_values(item) for item in value]
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return None
    return str(value)


def mapping_type_of(raw: Optional[Mapping[str, Any]]) -> Optional[str]:
    """레거시 매핑 타입 이름을 반환한다. 타입 없는 매핑이면 None이다."""

    mappings = unwrap_mappings_envelope(raw)
    if not mappings:
        return None
    type_candidates = [key for key in mappings if key not in _MAPPING_ROOT_PARAMETERS]
    if not type_candidates:
        return None
    if len(mappings) > 1:
        # 루트 파라미터와 타입 후보가 섞인 경우 후보가 필드 정의인지 판단할 수 없다.
        if all(isinstance(mappings[key], Mapping) and "properties" in mappings[key] for key in type_candidates):
            raise MappingDefinitionError(type_candidates)
        return None
    only_key = type_candidates[0]
    candidate = mappings[only_key]
    if isinstance(candidate, Mapping) and (
        not candidate or any(key in _MAPPING_ROOT_PARAMETERS for key in candidate)
    ):
        return only_key
    return None


def normalize_mappings(raw: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """매핑을 타입 없는 정규형 사본으로 반환한다."""

    mappings = copy.deepcopy(unwrap_mappings_envelope(raw))
    mapping_type = mapping_type_of(mappings)
    if mapping_type is not None:
        mappings = dict(mappings[mapping_type])
    return mappings


def unwrap_mappings_envelope(raw: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """`{"mappings": {...}}` 래퍼를 벗긴 사본을 반환한다."""

    mappings = dict(raw or {})
    if len(mappings) == 1 and isinstance(mappings.get("mappings"), Mapping):
        mappings = dict(mappings["mappings"])
    return mappings


def _assign(target: MutableMapping[str, Any], key: str, value: Any) -> None:
    existing = target.get(key)
    if isinstance(existing, MutableMapping) and isinstance(value, Mapping):
        for child_key, child_value in value.items():
            _assign(existing, child_key, child_value)
        return
    target[key] = value
