"""
목적: 로깅 모듈 공개 API를 제공한다.
설명: 로거 구현과 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/es_tools/shared/logging/logger.py, src/es_tools/shared/logging/models.py
"""

import logging

from es_tools.shared.logging.logger import (
    PACKAGE_LOGGER_NAME,
    InMemoryLogger,
    InMemoryLogRepository,
    LogRepository,
    Logger,
    StandardLogRepository,
    create_default_logger,
    create_memory_logger,
    create_standard_logger,
)
from es_tools.shared.logging.models import LogContext, LogLevel, LogRecord

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())

__all__ = [
    "LogContext",
    "LogLevel",
    "LogRecord",
    "Logger",
    "LogRepository",
    "InMemoryLogRepository",
    "StandardLogRepository",
    "InMemoryLogger",
    "create_default_logger",
    "create_memory_logger",
    "create_standard_logger",
]
