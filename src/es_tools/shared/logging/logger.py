"""
목적: 로거 인터페이스와 기본 구현체를 제공한다.
설명: 크기 제한 인메모리 저장소와 표준 logging 전달 저장소를 포함하며 저장소 주입을 지원한다.
디자인 패턴: 전략 패턴, 저장소 패턴
참조: src/es_tools/shared/logging/models.py
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from datetime import datetime, timezone
from typing import Deque, List, Optional

from .models import LogContext, LogLevel, LogRecord


class LogRepository(ABC):
    """로그 저장소 인터페이스."""

    @abstractmethod
    def add(self, record: LogRecord) -> None:
        """로그 레코드를 저장한다."""

    @abstractmethod
    def list(self) -> List[LogRecord]:
        """저장된 로그를 반환한다."""


class InMemoryLogRepository(LogRepository):
    """인메모리 로그 저장소 구현체.

    Args:
        max_records: 보관할 최대 레코드 수. 넘치면 오래된 레코드부터 버린다. None이면 제한하지 않는다.
    """

    def __init__(self, max_records: Optional[int] = None) -> None:
        self._records: Deque[LogRecord] = deque(maxlen=max_records)

    def add(self, record: LogRecord) -> None:
        self._records.append(record)

    def list(self) -> List[LogRecord]:
        return list(self._records)


class StandardLogRepository(LogRepository):
    """표준 logging 모듈로 레코드를 전달하는 저장소이다.

    Args:
        keep_records: True이면 전달한 레코드를 메모리에도 보관한다.
        namespace: 표준 로거 이름 앞에 붙일 상위 로거 이름.
    """

    def __init__(self, keep_records: bool = False, namespace: Optional[str] = None) -> None:
        self._keep_records = keep_records
        self._namespace = namespace
        self._records: List[LogRecord] = []

    def add(self, record: LogRecord) -> None:
        std_logger = logging.getLogger(self._std_logger_name(record.logger_name))
        extra = {}
        if record.context is not None:
            extra["es_tools_context"] = record.context.model_dump()
        if record.metadata:
            extra["es_tools_metadata"] = dict(record.metadata)
        std_logger.log(record.level.to_std_level(), record.message, extra=extra)
        if self._keep_records:
            self._records.append(record)

    def list(self) -> List[LogRecord]:
        return list(self._records)

    def _std_logger_name(self, name: str) -> str:
        if not self._namespace:
            return name
        return f"{self._namespace}.{name}"


class Logger(ABC):
    """로거 인터페이스."""

    @abstractmethod
    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        """로그를 기록한다."""

    @abstractmethod
    def with_context(self, context: LogContext) -> "Logger":
        """컨텍스트가 합쳐진 새 로거를 반환한다."""

    def debug(self, message: str, context: Optional[LogContext] = None, metadata: Optional[dict] = None) -> None:
        self.log(LogLevel.DEBUG, message, context, metadata)

    def info(self, message: str, context: Optional[LogContext] = None, metadata: Optional[dict] = None) -> None:
        self.log(LogLevel.INFO, message, context, metadata)

    def warning(self, message: str, context: Optional[LogContext] = None, metadata: Optional[dict] = None) -> None:
        self.log(LogLevel.WARNING, message, context, metadata)

    def error(self, message: str, context: Optional[LogContext] = None, metadata: Optional[dict] = None) -> None:
        self.log(LogLevel.ERROR, message, context, metadata)

    def critical(self, message: str, context: Optional[LogContext] = None, metadata: Optional[dict] = None) -> None:
        self.log(LogLevel.CRITICAL, message, context, metadata)


class InMemoryLogger(Logger):
    """저장소 주입형 로거 구현체."""

    def __init__(
        self,
        name: str,
        repository: Optional[LogRepository] = None,
        base_context: Optional[LogContext] = None,
    ) -> None:
        self._name = name
        self._repository = repository or InMemoryLogRepository()
        self._base_context = base_context

    @property
    def name(self) -> str:
        """로거 이름을 반환한다."""

        return self._name

    @property
    def repository(self) -> LogRepository:
        """저장소를 반환한다."""

        return self._repository

    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        merged_context = self._merge_context(context)
        record = LogRecord(
            level=level,
            message=message,
            timestamp=datetime.now(timezone.utc),
            logger_name=self._name,
            context=merged_context,
            metadata=metadata or {},
        )
        self._repository.add(record)

    def with_context(self, context: LogContext) -> "Logger":
        merged = self._merge_context(context)
        return InMemoryLogger(
            name=self._name,
            repository=self._repository,
            base_context=merged,
        )

    def _merge_context(self, context: Optional[LogContext]) -> Optional[LogContext]:
        if self._base_context is None:
            return context
        if context is None:
            return self._base_context
        merged_tags = {**self._base_context.tags, **context.tags}
        return LogContext(
            index=context.index or self._base_context.index,
            operation=context.operation or self._base_context.operation,
            request_id=context.request_id or self._base_context.request_id,
            tags=merged_tags,
        )


PACKAGE_LOGGER_NAME = "es_tools"


def create_default_logger(name: str) -> InMemoryLogger:
    """로거를 주입받지 못한 구성 요소가 쓰는 기본 로거를 생성한다.

    레코드를 보관하지 않고 `es_tools.<name>` 표준 로거로 전달한다. 애플리케이션이
    logging을 설정하지 않으면 패키지 로거의 NullHandler가 받아 아무것도 출력하지 않는다.
    """

    return InMemoryLogger(name=name, repository=StandardLogRepository(namespace=PACKAGE_LOGGER_NAME))


def create_memory_logger(name: str, max_records: Optional[int] = None) -> InMemoryLogger:
    """레코드를 메모리에 보관하는 로거를 생성한다."""

    return InMemoryLogger(name=name, repository=InMemoryLogRepository(max_records=max_records))


def create_standard_logger(name: str, keep_records: bool = False) -> InMemoryLogger:
    """표준 logging 모듈로 출력하는 로거를 생성한다."""

    return InMemoryLogger(name=name, repository=StandardLogRepository(keep_records=keep_records))
