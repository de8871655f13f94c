"""
목적: 논리 인덱스 이름 단위 조정 잠금을 제공한다.
설명: prepare_index의 확인 후 실행 구간을 감싸는 잠금 인터페이스와 기본 구현체를 정의한다.
      분산 잠금이 필요하면 호출자가 같은 인터페이스로 구현해 주입한다.
디자인 패턴: 전략 패턴
참조: src/es_tools/core/index/reconciler.py
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import ContextManager, Dict, Iterator, List


class ReconcileLock(ABC):
    """논리 이름 단위 잠금 인터페이스."""

    @abstractmethod
    def hold(self, name: str) -> ContextManager[None]:
        """name에 대한 잠금을 잡는 컨텍스트 관리자를 반환한다.

        `with lock.hold(name):` 형태로 쓰이므로 구현체는 `@contextmanager` 제너레이터이거나
        `__enter__`/`__exit__`를 가진 객체를 반환해야 한다.
        """


class NullReconcileLock(ReconcileLock):
    """아무것도 잠그지 않는 기본 구현체."""

    @contextmanager
    def hold(self, name: str) -> Iterator[None]:
        yield


class _NamedLock:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.holders = 0


class ThreadReconcileLock(ReconcileLock):
    """한 프로세스 안에서 같은 이름의 조정을 직렬화하는 구현체.

    이름별 잠금은 기다리거나 잡고 있는 스레드가 없어지면 제거한다.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[str, _NamedLock] = {}

    @property
    def names(self) -> List[str]:
        """현재 잠금 항목이 있는 이름 목록을 반환한다."""

        with self._guard:
            return sorted(self._locks)

    @contextmanager
    def hold(self, name: str) -> Iterator[None]:
        with self._guard:
            entry = self._locks.setdefault(name, _NamedLock())
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._locks[name]
