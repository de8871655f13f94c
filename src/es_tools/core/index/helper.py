"""
목적: 인덱스 버전/별칭 관리 기능을 하나의 진입점으로 제공한다.
설명: 해석기, 버전 명명기, 별칭 전환기, 조정기, bulk 색인기, 정리기를 같은 클라이언트와 설정으로
      조립하고 공개 연산을 위임한다.
디자인 패턴: 퍼사드
참조: src/es_tools/core/index/reconciler.py, src/es_tools/core/index/index.py
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from es_tools.core.index.alias_switcher import AliasSwitcher
from es_tools.core.index.bulk import BulkIndexer
from es_tools.core.index.cleanup import CleanupSweeper
from es_tools.core.index.locks import ReconcileLock
from es_tools.core.index.models import CleanupReport, IndexResolution, PrepareOptions
from es_tools.core.index.namer import VersionNamer
from es_tools.core.index.reconciler import IndexReconciler
from es_tools.core.index.resolver import AliasResolver
from es_tools.core.schema import SchemaDiff, normalize_index_settings
from es_tools.integrations.elasticsearch import SearchScrollHelper, create_client
from es_tools.shared.config import IndexToolsConfig
from es_tools.shared.logging import Logger, create_default_logger


class IndexHelper:
    """인덱스 관리 퍼사드이다.

    사용 예:

        helper = IndexHelper(create_client())
        physical = helper.prepare_index("products", mappings, settings, aliases=["catalog"])

    Args:
        client: Elasticsearch 클라이언트. 없으면 config로 생성한다.
        config: 실행 설정.
        lock: 논리 이름 단위 잠금. 기본값은 잠금 없음.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        client: Any = None,
        config: Optional[IndexToolsConfig] = None,
        lock: Optional[ReconcileLock] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._config = config or IndexToolsConfig()
        self._logger = logger or create_default_logger("IndexHelper")
        self._client = client if client is not None else create_client(self._config, logger=self._logger)
        self._resolver = AliasResolver(self._client, logger=self._logger)
        self._namer = VersionNamer(
            self._client,
            separator=self._config.version_separator,
            start=self._config.version_start,
            logger=self._logger,
        )
        self._switcher = AliasSwitcher(self._client, resolver=self._resolver, logger=self._logger)
        self._scroll_helper = SearchScrollHelper(
            self._client,
            default_size=self._config.scroll_size,
            default_scroll=self._config.scroll_timeout,
            logger=self._logger,
        )
        self._bulk_indexer = BulkIndexer(
            self._client,
            batch_size=self._config.bulk_batch_size,
            legacy_api=self._config.legacy_api,
            logger=self._logger,
        )
        self._sweeper = CleanupSweeper(self._client, scroll_helper=self._scroll_helper, logger=self._logger)
        self._reconciler = IndexReconciler(
            self._client,
            config=self._config,
            resolver=self._resolver,
            namer=self._namer,
            switcher=self._switcher,
            bulk_indexer=self._bulk_indexer,
            scroll_helper=self._scroll_helper,
            lock=lock,
            logger=self._logger,
        )

    @property
    def client(self) -> Any:
        """Elasticsearch 클라이언트를 반환한다."""

        return self._client

    @property
    def config(self) -> IndexToolsConfig:
        """실행 설정을 반환한다."""

        return self._config

    @property
    def logger(self) -> Logger:
        """공유 로거를 반환한다."""

        return self._logger

    @property
    def scroll_helper(self) -> SearchScrollHelper:
        """스크롤 검색 도우미를 반환한다."""

        return self._scroll_helper

    def resolve(self, name: str) -> IndexResolution:
        return self._resolver.resolve(name)

    def exists(self, name: str) -> bool:
        return self._resolver.exists(name)

    def is_alias(self, name: str) -> bool:
        return self._resolver.is_alias(name)

    def is_real_index(self, name: str) -> bool:
        return self._resolver.is_real_index(name)

    def get_current_index_version_name(self, name: str) -> Optional[str]:
        """논리 이름이 가리키는 물리 인덱스 이름을 반환한다."""

        return self._resolver.get_current_version_name(name)

    def get_aliases(self, index: str) -> List[str]:
        return self._resolver.get_aliases(index)

    def next_version_name(self, name: str) -> str:
        return self._namer.next_version(name)

    def create_index(
        self,
        name: str,
        mappings: Optional[Mapping[str, Any]] = None,
        settings: Optional[Mapping[str, Any]] = None,
        aliases: Optional[Iterable[str]] = None,
    ) -> str:
        return self._reconciler.create_index(name, mappings, settings, aliases)

    def create_new_index_version(
        self,
        name: str,
        mappings: Optional[Mapping[str, Any]] = None,
        settings: Optional[Mapping[str, Any]] = None,
    ) -> str:
        return self._reconciler.create_new_index_version(name, mappings, settings)

    def diff_mappings(self, name: str, mappings: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        return self._reconciler.diff_mappings(name, mappings)

    def diff_index_settings(self, name: str, settings: Optional[Mapping[str, Any]]) -> SchemaDiff:
        return self._reconciler.diff_index_settings(name, settings)

    def check_settings_and_mappings(
        self,
        name: str,
        mappings: Optional[Mapping[str, Any]] = None,
        settings: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        return self._reconciler.check_settings_and_mappings(name, mappings, settings)

    def prepare_index(
        self,
        name: str,
        mappings: Optional[Mapping[str, Any]] = None,
        settings: Optional[Mapping[str, Any]] = None,
        aliases: Optional[Iterable[str]] = None,
        options: Union[PrepareOptions, Mapping[str, Any], None] = None,
    ) -> Union[str, bool]:
        """논리 인덱스를 원하는 스키마로 맞추고 물리 인덱스 이름 또는 False를 반환한다."""

        return self._reconciler.prepare_index(name, mappings, settings, aliases, options)

    def reindex_to_new_version(
        self,
        name: str,
        mappings: Optional[Mapping[str, Any]] = None,
        settings: Optional[Mapping[str, Any]] = None,
        extra_aliases: Optional[Iterable[str]] = None,
    ) -> Union[str, bool]:
        return self._reconciler.reindex_to_new_version(name, mappings, settings, extra_aliases)

    def switch_alias(
        self,
        name: str,
        new_index: str,
        extra_aliases: Optional[Iterable[str]] = None,
    ) -> bool:
        return self._reconciler.switch_alias(name, new_index, extra_aliases)

    def set_aliases(self, index: str, aliases: Iterable[str]) -> List[str]:
        return self._reconciler.set_aliases(index, aliases)

    def check_aliases(self, name: str, aliases: Iterable[str]) -> List[str]:
        return self._reconciler.check_aliases(name, aliases)

    def bulk_index(self, index: str, documents: Iterable[Mapping[str, Any]]) -> List[str]:
        """문서를 묶음 색인하고 성공한 ID 목록을 반환한다."""

        return self._bulk_indexer.bulk_index(index, documents)

    def cleanup(
        self,
        index: str,
        voter: Any,
        scroll_options: Optional[Mapping[str, Any]] = None,
    ) -> CleanupReport:
        """voter가 유지하지 않는 문서를 삭제한다."""

        return self._sweeper.cleanup(index, voter, scroll_options)

    @staticmethod
    def normalize_index_settings(settings: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        return normalize_index_settings(settings)
