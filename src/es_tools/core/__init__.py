"""
목적: 코어 모듈 공개 API를 제공한다.
설명: 인덱스 관리 퍼사드와 스키마 비교 함수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/es_tools/core/index/helper.py, src/es_tools/core/schema/diff.py
"""

from es_tools.core.index import Index, IndexHelper, PrepareOptions
from es_tools.core.schema import SchemaDiff, structural_diff

__all__ = ["Index", "IndexHelper", "PrepareOptions", "SchemaDiff", "structural_diff"]
