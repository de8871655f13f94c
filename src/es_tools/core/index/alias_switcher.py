"""
목적: 논리 이름 별칭을 새 물리 버전으로 원자적으로 전환한다.
설명: 기존 버전의 별칭 제거(또는 같은 이름 실제 인덱스 삭제), 새 버전 별칭 추가, 부가 별칭 이전을
      하나의 update_aliases 요청으로 묶어 보낸다.
디자인 패턴: 커맨드 패턴(액션 배치)
참조: src/es_tools/core/index/resolver.py, src/es_tools/core/index/reconciler.py
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from es_tools.core.index.models import ResolutionKind
from es_tools.core.index.resolver import AliasResolver
from es_tools.shared.logging import LogContext, Logger, create_default_logger


class AliasSwitcher:
    """별칭 전환기이다.

    Args:
        client: Elasticsearch 클라이언트.
        resolver: 이름 해석기.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        client: Any,
        resolver: Optional[AliasResolver] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._client = client
        self._logger = logger or create_default_logger("AliasSwitcher")
        self._resolver = resolver or AliasResolver(client, logger=self._logger)

    def build_actions(
        self,
        name: str,
        new_index: str,
        extra_aliases: Optional[Iterable[str]] = None,
    ) -> Optional[List[Dict[str, Dict[str, str]]]]:
        """전환에 필요한 별칭 액션 목록을 만든다. 전환할 수 없으면 None을 반환한다."""

        resolution = self._resolver.resolve(name)
        actions: List[Dict[str, Dict[str, str]]] = []
        carried: List[str] = []
        old_index: Optional[str] = None
        old_keeps_aliases = False

        if resolution.kind == ResolutionKind.AMBIGUOUS:
            self._logger.error(
                f"별칭 전환 불가: {name}이(가) 여러 인덱스를 가리킵니다 ({', '.join(resolution.targets)})"
            )
            return None
        if resolution.kind == ResolutionKind.ALIAS:
            old_index = resolution.targets[0]
            old_keeps_aliases = old_index != new_index
            carried = [alias for alias in self._resolver.get_aliases(old_index) if alias != name]
            if old_keeps_aliases:
                actions.append({"remove": {"index": old_index, "alias": name}})
        elif resolution.kind == ResolutionKind.REAL_INDEX:
            if name == new_index:
                self._logger.error(f"별칭 전환 불가: {name}은(는) 자기 자신에게 별칭을 붙일 수 없습니다.")
                return None
            # 논리 이름이 별칭이 되려면 같은 이름의 실제 인덱스가 사라져야 한다.
            old_index = name
            carried = self._resolver.get_aliases(name)
            actions.append({"remove_index": {"index": name}})

        if old_index != new_index:
            actions.append({"add": {"index": new_index, "alias": name}})

        carried_set = set(carried)
        for alias in dedupe_names([*carried, *(extra_aliases or [])]):
            if alias in (name, new_index):
                continue
            actions.append({"add": {"index": new_index, "alias": alias}})
            if old_keeps_aliases and alias in carried_set:
                actions.append({"remove": {"index": old_index, "alias": alias}})
        return actions

    def switch_alias(
        self,
        name: str,
        new_index: str,
        extra_aliases: Optional[Iterable[str]] = None,
    ) -> bool:
        """논리 이름 별칭을 new_index로 전환하고 성공 여부를 반환한다."""

        actions = self.build_actions(name, new_index, extra_aliases)
        if actions is None:
            return False
        context = LogContext(index=name, operation="switch_alias")
        self._logger.debug(f"별칭 액션 {len(actions)}건 전송: {actions}", context)
        response = self._client.indices.update_aliases(actions=actions)
        acknowledged = bool(response.get("acknowledged", False))
        if acknowledged:
            self._logger.info(f"별칭 전환 완료: {name} -> {new_index}", context)
        else:
            self._logger.error(f"별칭 전환이 승인되지 않았습니다: {name} -> {new_index}", context)
        return acknowledged

    def set_aliases(self, index: str, aliases: Iterable[str]) -> List[str]:
        """물리 인덱스에 없는 별칭만 추가하고 추가한 목록을 반환한다."""

        current = set(self._resolver.get_aliases(index))
        missing = [alias for alias in dedupe_names(aliases) if alias not in current]
        if not missing:
            return []
        actions = [{"add": {"index": index, "alias": alias}} for alias in missing]
        self._client.indices.update_aliases(actions=actions)
        self._logger.info(f"별칭 추가: {index} <- {', '.join(missing)}")
        return missing


def dedupe_names(values: Iterable[str]) -> List[str]:
    """처음 나온 순서를 유지하며 중복 이름을 제거한다."""

    seen = set()
    result = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result
