"""
목적: 스키마 비교 결과 모델을 정의한다.
설명: 점 경로 기준의 추가/제거 항목을 Pydantic 모델로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/es_tools/core/schema/diff.py
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field


class SchemaDiff(BaseModel):
    """스키마 차이 모델이다.

    Args:
        added: actual에만 있거나 값이 다른 경로와 actual 값.
        removed: desired에만 있거나 값이 다른 경로와 desired 값.
    """

    added: Dict[str, Any] = Field(default_factory=dict)
    removed: Dict[str, Any] = Field(default_factory=dict)

    def is_empty(self) -> bool:
        """차이가 없는지 여부를 반환한다."""

        return not self.added and not self.removed

    def __bool__(self) -> bool:
        return not self.is_empty()

    def to_signed_dict(self) -> Dict[str, Dict[str, Any]]:
        """비어 있지 않은 쪽만 담은 {"+": ..., "-": ...} 사전을 반환한다."""

        result: Dict[str, Dict[str, Any]] = {}
        if self.added:
            result["+"] = dict(self.added)
        if self.removed:
            result["-"] = dict(self.removed)
        return result
