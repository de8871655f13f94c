"""
목적: 논리 인덱스 이름을 물리 인덱스로 해석한다.
설명: 이름이 실제 인덱스인지, 별칭인지, 존재하지 않는지 판별하고 별칭이 가리키는 단일 버전을 찾는다.
디자인 패턴: 어댑터 패턴
참조: src/es_tools/core/index/models.py, src/es_tools/core/index/reconciler.py
"""

from __future__ import annotations

from typing import Any, List, Optional

from es_tools.core.index.models import IndexResolution, ResolutionKind
from es_tools.shared.exceptions import AmbiguousAliasError, InvalidIndexArgumentError
from es_tools.shared.logging import Logger, create_default_logger


class AliasResolver:
    """별칭/인덱스 이름 해석기이다.

    Args:
        client: Elasticsearch 클라이언트.
        logger: 주입 가능한 로거.
    """

    def __init__(self, client: Any, logger: Optional[Logger] = None) -> None:
        self._client = client
        self._logger = logger or create_default_logger("AliasResolver")

    def exists(self, name: str) -> bool:
        """같은 이름의 인덱스 또는 별칭이 있는지 반환한다."""

        return bool(self._client.indices.exists(index=name))

    def is_alias(self, name: str) -> bool:
        """같은 이름의 별칭이 있는지 반환한다. 대상 개수는 따지지 않는다."""

        return bool(self._client.indices.exists_alias(name=name))

    def is_real_index(self, name: str) -> bool:
        """같은 이름의 물리 인덱스가 있고 별칭은 아닌지 반환한다."""

        return self.exists(name) and not self.is_alias(name)

    def resolve(self, name: str) -> IndexResolution:
        """이름을 해석한다."""

        if not self.is_alias(name):
            if self.exists(name):
                return IndexResolution(name=name, kind=ResolutionKind.REAL_INDEX, targets=[name])
            return IndexResolution(name=name, kind=ResolutionKind.NOT_FOUND)

        response = self._client.indices.get_alias(name=name)
        targets = sorted(response.keys())
        if len(targets) == 1:
            return IndexResolution(name=name, kind=ResolutionKind.ALIAS, targets=targets)
        if not targets:
            return IndexResolution(name=name, kind=ResolutionKind.NOT_FOUND)
        self._logger.error(f"별칭 {name}이(가) 여러 인덱스를 가리킵니다: {', '.join(targets)}")
        return IndexResolution(name=name, kind=ResolutionKind.AMBIGUOUS, targets=targets)

    def get_current_version_name(self, name: str) -> Optional[str]:
        """논리 이름이 현재 가리키는 물리 인덱스 이름을 반환한다.

        별칭이 아직 없고 같은 이름의 실제 인덱스가 있으면 그 이름을 그대로 반환한다.
        존재하지 않으면 None, 모호하면 AmbiguousAliasError를 발생시킨다.
        """

        resolution = self.resolve(name)
        if resolution.kind == ResolutionKind.AMBIGUOUS:
            raise AmbiguousAliasError(name, resolution.targets)
        return resolution.physical_name

    def get_aliases(self, index: str) -> List[str]:
        """물리 인덱스에 붙은 별칭 목록을 반환한다."""

        if self.is_alias(index):
            raise InvalidIndexArgumentError(
                f"{index}은(는) 별칭입니다. 물리 인덱스 이름이 필요합니다.",
                name=index,
                hint="get_current_index_version_name으로 먼저 물리 이름을 구하세요.",
            )
        if not self.exists(index):
            return []
        response = self._client.indices.get_alias(index=index)
        entry = response.get(index) or {}
        return list((entry.get("aliases") or {}).keys())
