"""
목적: shared 패키지의 공개 API를 제공한다.
설명: 상수, 설정, 예외, 로깅 하위 모듈에 대한 접근 포인트를 제공한다.
디자인 패턴: 퍼사드
참조: src/es_tools/shared/config, src/es_tools/shared/exceptions, src/es_tools/shared/logging
"""

from __future__ import annotations

from es_tools.shared.config import ConfigLoader, IndexToolsConfig, RuntimeEnvironmentLoader, load_config
from es_tools.shared.const import IndexConst, SharedConst
from es_tools.shared.exceptions import (
    AmbiguousAliasError,
    BaseAppException,
    DocumentOperationError,
    ExceptionDetail,
    InvalidIndexArgumentError,
    MappingDefinitionError,
    ReindexFailedError,
)
from es_tools.shared.logging import (
    InMemoryLogger,
    LogContext,
    LogLevel,
    LogRecord,
    Logger,
    LogRepository,
    StandardLogRepository,
    create_default_logger,
    create_memory_logger,
    create_standard_logger,
)

__all__ = [
    "ConfigLoader",
    "IndexToolsConfig",
    "RuntimeEnvironmentLoader",
    "load_config",
    "IndexConst",
    "SharedConst",
    "BaseAppException",
    "ExceptionDetail",
    "AmbiguousAliasError",
    "DocumentOperationError",
    "InvalidIndexArgumentError",
    "MappingDefinitionError",
    "ReindexFailedError",
    "LogContext",
    "LogLevel",
    "LogRecord",
    "Logger",
    "LogRepository",
    "StandardLogRepository",
    "InMemoryLogger",
    "create_default_logger",
    "create_memory_logger",
    "create_standard_logger",
]
