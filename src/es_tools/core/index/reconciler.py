"""
목적: 논리 인덱스의 스키마 조정(prepare_index) 절차를 제공한다.
설명: 현재 상태를 해석하고 설정/매핑 차이를 계산해 생성, 유지, 새 버전 생성, 재인덱싱 후 별칭 전환 중
      하나를 수행한다. 서버 상태는 매 호출마다 다시 조회하며 캐시하지 않는다.
디자인 패턴: 오케스트레이터, 템플릿 메서드
참조: src/es_tools/core/index/resolver.py, src/es_tools/core/index/namer.py,
      src/es_tools/core/index/alias_switcher.py, src/es_tools/core/schema/diff.py
"""

from __future__ import annotations

import time
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from elasticsearch import ApiError, TransportError

from es_tools.core.index.alias_switcher import AliasSwitcher, dedupe_names
from es_tools.core.index.bulk import BulkIndexer
from es_tools.core.index.locks import NullReconcileLock, ReconcileLock
from es_tools.core.index.models import PrepareOptions
from es_tools.core.index.namer import VersionNamer
from es_tools.core.index.resolver import AliasResolver
from es_tools.core.schema import (
    SchemaDiff,
    canonicalize_setting_values,
    extract_reindex_sensitive,
    missing_paths,
    normalize_index_settings,
    normalize_mappings,
    structural_diff,
    unwrap_mappings_envelope,
)
from es_tools.integrations.elasticsearch import SearchScrollHelper
from es_tools.shared.config import IndexToolsConfig
from es_tools.shared.exceptions import AmbiguousAliasError, ReindexFailedError
from es_tools.shared.logging import LogContext, Logger, create_default_logger


class IndexReconciler:
    """인덱스 스키마 조정기이다.

    Args:
        client: Elasticsearch 클라이언트.
        config: 실행 설정.
        resolver: 이름 해석기.
        namer: 버전 이름 생성기.
        switcher: 별칭 전환기.
        bulk_indexer: reindex API를 쓰지 않을 때 문서 복사에 사용할 bulk 색인기.
        scroll_helper: reindex API를 쓰지 않을 때 원본 문서 순회에 사용할 스크롤 도우미.
        lock: 논리 이름 단위 잠금.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        client: Any,
        config: Optional[IndexToolsConfig] = None,
        resolver: Optional[AliasResolver] = None,
        namer: Optional[VersionNamer] = None,
        switcher: Optional[AliasSwitcher] = None,
        bulk_indexer: Optional[BulkIndexer] = None,
        scroll_helper: Optional[SearchScrollHelper] = None,
        lock: Optional[ReconcileLock] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._client = client
        self._config = config or IndexToolsConfig()
        self._logger = logger or create_default_logger("IndexReconciler")
        self._resolver = resolver or AliasResolver(client, logger=self._logger)
        self._namer = namer or VersionNamer(
            client,
            separator=self._config.version_separator,
            start=self._config.version_start,
            logger=self._logger,
        )
        self._switcher = switcher or AliasSwitcher(client, resolver=self._resolver, logger=self._logger)
        self._bulk_indexer = bulk_indexer or BulkIndexer(
            client,
            batch_size=self._config.bulk_batch_size,
            legacy_api=self._config.legacy_api,
            logger=self._logger,
        )
        self._scroll_helper = scroll_helper or SearchScrollHelper(
            client,
            default_size=self._config.scroll_size,
            default_scroll=self._config.scroll_timeout,
            logger=self._logger,
        )
        self._lock = lock or NullReconcileLock()

    @property
    def resolver(self) -> AliasResolver:
        """이름 해석기를 반환한다."""

        return self._resolver

    @property
    def switcher(self) -> AliasSwitcher:
        """별칭 전환기를 반환한다."""

        return self._switcher

    def create_index(
        self,
        name: str,
        mappings: Optional[Mapping[str, Any]] = None,
        settings: Optional[Mapping[str, Any]] = None,
        aliases: Optional[Iterable[str]] = None,
    ) -> str:
        """인덱스를 생성하고 별칭을 같은 요청으로 붙인다."""

        params: Dict[str, Any] = {"index": name}
        body_mappings = self._mappings_for_create(mappings)
        if body_mappings:
            params["mappings"] = body_mappings
        body_settings = normalize_index_settings(settings)
        if body_settings:
            params["settings"] = body_settings
        alias_names = dedupe_names(aliases or [])
        if alias_names:
            params["aliases"] = {alias: {} for alias in alias_names}
        self._client.indices.create(**params)
        self._logger.info(
            f"인덱스 생성: {name}" + (f" (별칭: {', '.join(alias_names)})" if alias_names else ""),
            LogContext(index=name, operation="create_index"),
        )
        return name

    def create_new_index_version(
        self,
        name: str,
        mappings: Optional[Mapping[str, Any]] = None,
        settings: Optional[Mapping[str, Any]] = None,
        aliases: Optional[Iterable[str]] = None,
    ) -> str:
        """다음 버전 이름으로 새 물리 인덱스를 만들고 그 이름을 반환한다."""

        new_index = self._namer.next_version(name)
        return self.create_index(new_index, mappings, settings, aliases)

    def next_version_name(self, name: str) -> str:
        """다음 물리 버전 이름을 반환한다."""

        return self._namer.next_version(name)

    def diff_mappings(self, name: str, mappings: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """원하는 매핑 중 현재 인덱스와 다르거나 없는 항목을 점 경로로 반환한다."""

        return missing_paths(normalize_mappings(mappings), self._live_mappings(name))

    def diff_index_settings(self, name: str, settings: Optional[Mapping[str, Any]]) -> SchemaDiff:
        """재인덱싱 민감 설정(analysis, mapping)의 차이를 반환한다."""

        desired = canonicalize_setting_values(extract_reindex_sensitive(normalize_index_settings(settings)))
        actual = canonicalize_setting_values(extract_reindex_sensitive(self._live_settings(name)))
        return structural_diff(desired, actual)

    def check_settings_and_mappings(
        self,
        name: str,
        mappings: Optional[Mapping[str, Any]] = None,
        settings: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """인덱스가 없으면 None, 일치하면 빈 사전, 다르면 차이 사전을 반환한다."""

        if not self._resolver.exists(name):
            return None
        result: Dict[str, Any] = {}
        settings_diff = self.diff_index_settings(name, settings)
        if settings_diff:
            result["settings"] = settings_diff
        mappings_diff = self.diff_mappings(name, mappings)
        if mappings_diff:
            result["mappings"] = mappings_diff
        return result

    def prepare_index(
        self,
        name: str,
        mappings: Optional[Mapping[str, Any]] = None,
        settings: Optional[Mapping[str, Any]] = None,
        aliases: Optional[Iterable[str]] = None,
        options: Union[PrepareOptions, Mapping[str, Any], None] = None,
    ) -> Union[str, bool]:
        """논리 인덱스를 원하는 스키마에 맞추고 사용할 물리 인덱스 이름을 반환한다.

        조정할 수 없으면 False를 반환한다.
        """

        options = _coerce_options(options)
        aliases = dedupe_names(aliases or [])
        context = LogContext(index=name, operation="prepare_index")
        with self._lock.hold(name):
            try:
                return self._prepare(name, mappings, settings, aliases, options, context)
            except AmbiguousAliasError as exc:
                self._logger.error(exc.message, context)
                return False

    def reindex_to_new_version(
        self,
        name: str,
        mappings: Optional[Mapping[str, Any]] = None,
        settings: Optional[Mapping[str, Any]] = None,
        extra_aliases: Optional[Iterable[str]] = None,
    ) -> Union[str, bool]:
        """새 버전을 만들고 현재 버전 문서를 복사한 뒤 별칭을 전환한다.

        복사 실패는 ReindexFailedError로 전파된다. 별칭 전환에 실패하면 False를 반환한다.
        """

        context = LogContext(index=name, operation="reindex_to_new_version")
        source = self._resolver.get_current_version_name(name)
        new_index = self.create_new_index_version(name, mappings, settings)
        if source is not None:
            copied = self.copy_documents(source, new_index)
            self._logger.info(f"문서 복사 완료: {source} -> {new_index} ({copied}건)", context)
        if not self._switcher.switch_alias(name, new_index, extra_aliases):
            self._logger.error(f"새 버전 {new_index}을(를) 만들었지만 별칭 전환에 실패했습니다.", context)
            return False
        return new_index

    def switch_alias(
        self,
        name: str,
        new_index: str,
        extra_aliases: Optional[Iterable[str]] = None,
    ) -> bool:
        """논리 이름 별칭을 new_index로 원자적으로 전환한다."""

        with self._lock.hold(name):
            return self._switcher.switch_alias(name, new_index, extra_aliases)

    def set_aliases(self, index: str, aliases: Iterable[str]) -> List[str]:
        """물리 인덱스에 빠진 별칭을 추가하고 추가한 목록을 반환한다."""

        return self._switcher.set_aliases(index, aliases)

    def check_aliases(self, name: str, aliases: Iterable[str]) -> List[str]:
        """현재 버전에 빠진 별칭 목록을 반환한다."""

        current = self._resolver.get_current_version_name(name)
        if current is None:
            return dedupe_names(aliases)
        present = set(self._resolver.get_aliases(current)) | {name}
        return [alias for alias in dedupe_names(aliases) if alias not in present]

    def copy_documents(self, source: str, dest: str) -> int:
        """source의 모든 문서를 dest로 복사하고 복사한 문서 수를 반환한다."""

        if self._config.server_side_reindex:
            return self._server_side_reindex(source, dest)
        ids = self._bulk_indexer.bulk_index(dest, self._documents_of(source))
        if self._config.reindex_refresh:
            self._client.indices.refresh(index=dest)
        return len(ids)

    def _prepare(
        self,
        name: str,
        mappings: Optional[Mapping[str, Any]],
        settings: Optional[Mapping[str, Any]],
        aliases: List[str],
        options: PrepareOptions,
        context: LogContext,
    ) -> Union[str, bool]:
        if not self._resolver.exists(name):
            if options.use_alias:
                self._logger.info(f"{name}이(가) 없어 첫 버전을 생성합니다.", context)
                return self.create_new_index_version(name, mappings, settings, aliases=[name, *aliases])
            self._logger.info(f"{name}이(가) 없어 인덱스를 생성합니다.", context)
            return self.create_index(name, mappings, settings, aliases)

        drift = self.check_settings_and_mappings(name, mappings, settings) or {}
        if not drift:
            current = self._resolver.get_current_version_name(name)
            self._logger.debug(f"스키마 일치: {name} -> {current}", context)
            return current if current is not None else False

        self._logger.info(f"스키마 차이 발견: {_describe_drift(drift)}", context)
        if not options.use_alias:
            self._logger.error(
                f"{name}은(는) 별칭 없이 사용 중이라 분석/매핑 설정을 바꿀 수 없습니다.",
                context,
            )
            return False
        if options.reindex_data:
            return self.reindex_to_new_version(name, mappings, settings, aliases)

        new_index = self.create_new_index_version(name, mappings, settings)
        self._logger.warning(
            f"새 버전 {new_index}을(를) 만들었지만 별칭은 설정하지 않았습니다. "
            f"데이터를 채운 뒤 switch_alias를 호출하세요.",
            context,
        )
        return new_index

    def _server_side_reindex(self, source: str, dest: str) -> int:
        context = LogContext(index=dest, operation="reindex")
        try:
            started = self._client.reindex(
                source={"index": source},
                dest={"index": dest},
                wait_for_completion=False,
                refresh=self._config.reindex_refresh,
            )
            task_id = started["task"]
            self._logger.info(f"재인덱싱 작업 시작: {source} -> {dest} (task={task_id})", context)
            response = self._wait_for_reindex_task(task_id, source, dest, context)
        except (ApiError, TransportError) as exc:
            raise ReindexFailedError(source, dest, original=exc) from exc
        failures = list(response.get("failures") or [])
        if failures or response.get("timed_out"):
            raise ReindexFailedError(source, dest, failures=failures, task_id=task_id)
        return int(response.get("total") or 0)

    def _wait_for_reindex_task(
        self,
        task_id: str,
        source: str,
        dest: str,
        context: LogContext,
    ) -> Dict[str, Any]:
        deadline = time.monotonic() + self._config.reindex_timeout
        while True:
            status = self._client.tasks.get(task_id=task_id)
            if status.get("completed"):
                if status.get("error"):
                    raise ReindexFailedError(source, dest, failures=[status["error"]], task_id=task_id)
                return dict(status.get("response") or {})
            if time.monotonic() >= deadline:
                self._cancel_reindex_task(task_id, context)
                raise ReindexFailedError(source, dest, task_id=task_id, timed_out=True)
            task_status = (status.get("task") or {}).get("status") or {}
            self._logger.debug(
                f"재인덱싱 진행 중: {task_status.get('created', 0)}/{task_status.get('total', '?')} (task={task_id})",
                context,
            )
            time.sleep(self._config.reindex_poll_interval)

    def _cancel_reindex_task(self, task_id: str, context: LogContext) -> None:
        try:
            self._client.tasks.cancel(task_id=task_id)
        except (ApiError, TransportError) as exc:
            self._logger.warning(f"재인덱싱 작업 취소 실패: {task_id} ({exc})", context)
            return
        self._logger.warning(f"대기 한도를 넘어 재인덱싱 작업을 취소했습니다: {task_id}", context)

    def _documents_of(self, index: str) -> Iterator[Dict[str, Any]]:
        for hit in self._scroll_helper.scroll_search(index):
            document = dict(hit.get("_source") or {})
            document["_id"] = hit.get("_id")
            if hit.get("_routing") is not None:
                document["_routing"] = hit["_routing"]
            yield document

    def _mappings_for_create(self, mappings: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        if self._config.legacy_api:
            return unwrap_mappings_envelope(mappings)
        return normalize_mappings(mappings)

    def _live_mappings(self, name: str) -> Dict[str, Any]:
        physical = self._resolver.get_current_version_name(name) or name
        response = self._client.indices.get_mapping(index=physical)
        entry = response.get(physical) or next(iter(response.values()), {})
        return normalize_mappings(entry)

    def _live_settings(self, name: str) -> Dict[str, Any]:
        physical = self._resolver.get_current_version_name(name) or name
        response = self._client.indices.get_settings(index=physical)
        entry = response.get(physical) or next(iter(response.values()), {})
        return normalize_index_settings(entry)


def _coerce_options(options: Union[PrepareOptions, Mapping[str, Any], None]) -> PrepareOptions:
    if options is None:
        return PrepareOptions()
    if isinstance(options, PrepareOptions):
        return options
    return PrepareOptions.model_validate(dict(options))


def _describe_drift(drift: Mapping[str, Any]) -> str:
    parts = []
    settings_diff = drift.get("settings")
    if settings_diff:
        parts.append(f"settings={settings_diff.to_signed_dict()}")
    if drift.get("mappings"):
        parts.append(f"mappings={drift['mappings']}")
    return ", ".join(parts)

