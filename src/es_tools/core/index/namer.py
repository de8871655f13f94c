"""
목적: 다음 물리 버전 인덱스 이름을 만든다.
설명: `<논리 이름><구분자><번호>`를 번호를 올려가며 존재 여부를 확인하고, 처음 비어 있는 이름을 반환한다.
디자인 패턴: 순차 탐색
참조: src/es_tools/core/index/reconciler.py
"""

from __future__ import annotations

from typing import Any, Optional

from es_tools.shared.const import IndexConst
from es_tools.shared.logging import Logger, create_default_logger


class VersionNamer:
    """물리 버전 이름 생성기이다.

    이름을 예약하지 않으므로 같은 논리 이름에 대해 동시에 호출하면 같은 번호가 나올 수 있다.

    Args:
        client: Elasticsearch 클라이언트.
        separator: 논리 이름과 번호 사이 구분자.
        start: 첫 번호.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        client: Any,
        separator: str = IndexConst.VERSION_SEPARATOR,
        start: int = IndexConst.VERSION_START,
        logger: Optional[Logger] = None,
    ) -> None:
        self._client = client
        self._separator = separator
        self._start = start
        self._logger = logger or create_default_logger("VersionNamer")

    def version_name(self, name: str, number: int) -> str:
        """번호에 해당하는 물리 버전 이름을 반환한다."""

        return f"{name}{self._separator}{number}"

    def next_version(self, name: str) -> str:
        """아직 존재하지 않는 가장 작은 번호의 버전 이름을 반환한다."""

        number = self._start
        while self._client.indices.exists(index=self.version_name(name, number)):
            number += 1
        candidate = self.version_name(name, number)
        self._logger.debug(f"다음 버전 이름: {candidate}")
        return candidate
