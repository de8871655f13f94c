"""
목적: es_tools 예외의 공통 뼈대를 제공한다.
설명: 에러 코드를 클래스 속성으로 두고, 원인/힌트/관련 인덱스/메타데이터를 Pydantic 상세 모델로 묶는다.
디자인 패턴: 도메인 예외 객체, 데이터 전송 객체(DTO)
참조: src/es_tools/shared/exceptions/errors.py
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExceptionDetail(BaseModel):
    """예외 상세 정보 모델이다.

    Args:
        code: 예외 클래스의 에러 코드.
        cause: 직접 원인.
        hint: 운영자가 취할 조치.
        index: 관련 인덱스 또는 별칭 이름.
        metadata: 추가 구조화 정보.
    """

    model_config = ConfigDict(frozen=True)

    code: str
    cause: Optional[str] = None
    hint: Optional[str] = None
    index: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class BaseAppException(Exception):
    """es_tools 공통 예외 클래스이다.

    하위 클래스는 CODE를 정의한다. detail을 넘기지 않으면 CODE로 빈 상세 정보를 만든다.

    Args:
        message: 호출자에게 보일 메시지.
        detail: 예외 상세 정보.
        original: 감싼 원본 예외.
    """

    CODE = "ESTOOLS-ERROR"

    def __init__(
        self,
        message: str,
        detail: Optional[ExceptionDetail] = None,
        original: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail or ExceptionDetail(code=self.CODE)
        self.original = original

    @classmethod
    def build_detail(
        cls,
        cause: Optional[str] = None,
        hint: Optional[str] = None,
        index: Optional[str] = None,
        **metadata: Any,
    ) -> ExceptionDetail:
        """이 클래스의 CODE로 상세 정보를 만든다."""

        return ExceptionDetail(code=cls.CODE, cause=cause, hint=hint, index=index, metadata=metadata)

    @property
    def code(self) -> str:
        return self.detail.code

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """로그나 응답에 실을 수 있는 사전으로 변환한다."""

        return {
            "type": type(self).__name__,
            "message": self.message,
            "detail": self.detail.model_dump(),
            "original": repr(self.original) if self.original is not None else None,
        }
