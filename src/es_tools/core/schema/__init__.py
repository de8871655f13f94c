"""
목적: 스키마 비교/정규화 공개 API를 제공한다.
설명: 구조적 차이 계산과 설정/매핑 정규화 함수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/es_tools/core/schema/diff.py, src/es_tools/core/schema/normalizer.py
"""

from es_tools.core.schema.diff import missing_paths, structural_diff, values_equal
from es_tools.core.schema.models import SchemaDiff
from es_tools.core.schema.normalizer import (
    canonicalize_setting_values,
    expand_dot_paths,
    extract_reindex_sensitive,
    mapping_type_of,
    normalize_index_settings,
    normalize_mappings,
    unwrap_mappings_envelope,
)

__all__ = [
    "SchemaDiff",
    "structural_diff",
    "missing_paths",
    "values_equal",
    "canonicalize_setting_values",
    "expand_dot_paths",
    "extract_reindex_sensitive",
    "mapping_type_of",
    "normalize_index_settings",
    "normalize_mappings",
    "unwrap_mappings_envelope",
]
