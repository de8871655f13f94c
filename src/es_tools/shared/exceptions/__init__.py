"""
목적: 예외 모듈 공개 API를 제공한다.
설명: 외부에서 사용할 예외 모델과 베이스 클래스, 도메인 예외를 노출한다.
디자인 패턴: 퍼사드
참조: src/es_tools/shared/exceptions/base.py, src/es_tools/shared/exceptions/errors.py
"""

from es_tools.shared.exceptions.base import BaseAppException, ExceptionDetail
from es_tools.shared.exceptions.errors import (
    AmbiguousAliasError,
    DocumentOperationError,
    InvalidIndexArgumentError,
    MappingDefinitionError,
    ReindexFailedError,
)

__all__ = [
    "BaseAppException",
    "ExceptionDetail",
    "AmbiguousAliasError",
    "DocumentOperationError",
    "InvalidIndexArgumentError",
    "MappingDefinitionError",
    "ReindexFailedError",
]
