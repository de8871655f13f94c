"""
목적: 논리 인덱스 하나에 대한 편의 객체를 제공한다.
설명: 원하는 매핑/설정/별칭을 들고 있으면서 prepare, 정리, 묶음 색인, 단일 문서 작업을 위임한다.
      문서 조회는 '없음'과 '전송 실패'를 구분해 돌려준다.
디자인 패턴: 퍼사드, 액티브 레코드 유사 객체
참조: src/es_tools/core/index/helper.py, src/es_tools/core/index/bulk.py
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from elasticsearch import ApiError, TransportError

from es_tools.core.index.bulk import split_document
from es_tools.core.index.cleanup import IdSetVoter
from es_tools.core.index.helper import IndexHelper
from es_tools.core.index.models import (
    CleanupReport,
    DocumentLookup,
    DocumentLookupStatus,
    PrepareOptions,
)
from es_tools.core.schema import mapping_type_of
from es_tools.shared.config import IndexToolsConfig
from es_tools.shared.exceptions import DocumentOperationError
from es_tools.shared.logging import LogContext, Logger, create_default_logger

_ACCEPTED_DELETE_RESULTS = ("deleted", "not_found")


class Index:
    """논리 인덱스 편의 객체이다.

    Args:
        client: Elasticsearch 클라이언트.
        name: 논리 인덱스 이름.
        mappings: 원하는 매핑.
        settings: 원하는 설정.
        aliases: 논리 이름 외에 붙일 별칭 목록.
        config: 실행 설정.
        logger: 주입 가능한 로거.
        helper: 공유할 IndexHelper. 없으면 새로 만든다.
    """

    def __init__(
        self,
        client: Any,
        name: str,
        mappings: Optional[Mapping[str, Any]] = None,
        settings: Optional[Mapping[str, Any]] = None,
        aliases: Optional[Iterable[str]] = None,
        config: Optional[IndexToolsConfig] = None,
        logger: Optional[Logger] = None,
        helper: Optional[IndexHelper] = None,
    ) -> None:
        # 매핑 타입이 둘 이상이면 여기서 MappingDefinitionError가 발생한다.
        mapping_type_of(mappings)
        self._client = client
        self._name = name
        self._mappings = dict(mappings or {})
        self._settings = dict(settings or {})
        self._aliases = list(aliases or [])
        self._logger = logger or create_default_logger("Index")
        self._helper = helper or IndexHelper(client, config=config, logger=self._logger)
        self._context = LogContext(index=name)

    @property
    def name(self) -> str:
        """논리 인덱스 이름을 반환한다."""

        return self._name

    @property
    def aliases(self) -> List[str]:
        return list(self._aliases)

    @property
    def helper(self) -> IndexHelper:
        return self._helper

    def exists(self) -> bool:
        return self._helper.exists(self._name)

    def check_settings_and_mappings(self) -> Optional[Dict[str, Any]]:
        """인덱스가 없으면 None, 일치하면 빈 사전, 다르면 차이를 반환한다."""

        return self._helper.check_settings_and_mappings(self._name, self._mappings, self._settings)

    def check_aliases(self) -> List[str]:
        """현재 버전에 빠진 별칭 목록을 반환한다."""

        return self._helper.check_aliases(self._name, self._aliases)

    def set_aliases(self) -> List[str]:
        """현재 버전에 빠진 별칭을 붙이고 추가한 목록을 반환한다."""

        current = self._helper.get_current_index_version_name(self._name)
        if current is None:
            return []
        return self._helper.set_aliases(current, self._aliases)

    def prepare(self, use_alias: bool = True, reindex_data: bool = True) -> Union[str, bool]:
        """인덱스를 준비하고 사용할 물리 인덱스 이름 또는 False를 반환한다."""

        return self._helper.prepare_index(
            self._name,
            self._mappings,
            self._settings,
            self._aliases,
            PrepareOptions(use_alias=use_alias, reindex_data=reindex_data),
        )

    def cleanup(self, existing_ids: Iterable[Any]) -> Optional[CleanupReport]:
        """existing_ids에 없는 문서를 모두 삭제한다. 목록이 비어 있으면 아무것도 하지 않는다."""

        existing_ids = list(existing_ids)
        if not existing_ids:
            self._logger.debug("유지할 ID 목록이 비어 있어 정리를 건너뜁니다.", self._context)
            return None
        return self._helper.cleanup(self._name, IdSetVoter(existing_ids), {"_source": False})

    def bulk_index(self, documents: Iterable[Mapping[str, Any]]) -> List[str]:
        return self._helper.bulk_index(self._name, documents)

    def index(self, data: Mapping[str, Any], id: Optional[Any] = None) -> Any:
        """문서 하나를 색인하고 응답을 반환한다. 본문의 메타 필드는 제거된다."""

        header, body = split_document(data)
        if id is None:
            id = header.get("_id")
        params: Dict[str, Any] = {"index": self._name, "document": body}
        if id is not None:
            params["id"] = str(id)
        if header.get("routing") is not None:
            params["routing"] = header["routing"]
        self._logger.debug(f"색인: {self._name}/{id}", self._context)
        return self._client.index(**params)

    def delete(self, id: Any) -> None:
        """현재 버전에서 문서 하나를 삭제한다. 이미 없는 문서도 성공으로 본다."""

        current = self._helper.get_current_index_version_name(self._name) or self._name
        response = self._client.options(ignore_status=404).delete(index=current, id=str(id))
        result = response.get("result")
        if result in _ACCEPTED_DELETE_RESULTS:
            self._logger.debug(f"문서 삭제: {current}/{id} ({result})", self._context)
            return
        self._logger.error(f"문서를 삭제하지 못했습니다: {current}/{id}", self._context)
        raise DocumentOperationError("delete", current, id, result=result)

    def get(self, id: Any) -> DocumentLookup:
        """문서 하나를 조회한다."""

        doc_id = str(id)
        try:
            response = self._client.options(ignore_status=404).get(index=self._name, id=doc_id)
        except (ApiError, TransportError) as exc:
            self._logger.warning(f"문서 조회 실패: {self._name}/{doc_id}: {exc}", self._context)
            return DocumentLookup(
                doc_id=doc_id,
                status=DocumentLookupStatus.TRANSPORT_FAILURE,
                error=str(exc),
            )
        return _lookup_from_doc(doc_id, response)

    def mget(self, ids: Iterable[Any]) -> List[DocumentLookup]:
        """여러 문서를 한 번에 조회한다. 결과 순서는 ids 순서를 따른다."""

        doc_ids = [str(doc_id) for doc_id in ids]
        if not doc_ids:
            return []
        try:
            response = self._client.mget(index=self._name, ids=doc_ids)
        except (ApiError, TransportError) as exc:
            self._logger.warning(f"문서 일괄 조회 실패: {self._name}: {exc}", self._context)
            return [
                DocumentLookup(doc_id=doc_id, status=DocumentLookupStatus.TRANSPORT_FAILURE, error=str(exc))
                for doc_id in doc_ids
            ]
        docs = list(response.get("docs") or [])
        return [_lookup_from_doc(doc_id, doc) for doc_id, doc in zip(doc_ids, docs)]

    def search(self, body: Optional[Mapping[str, Any]] = None) -> Any:
        """검색 요청 본문을 그대로 전달하고 응답을 반환한다."""

        return self._client.search(index=self._name, **dict(body or {}))

    def count(self, query: Optional[Mapping[str, Any]] = None) -> int:
        params: Dict[str, Any] = {"index": self._name}
        if query is not None:
            params["query"] = dict(query)
        response = self._client.count(**params)
        return int(response.get("count", 0))


def _lookup_from_doc(doc_id: str, doc: Mapping[str, Any]) -> DocumentLookup:
    if doc.get("found"):
        return DocumentLookup(
            doc_id=doc_id,
            status=DocumentLookupStatus.FOUND,
            index=doc.get("_index"),
            source=dict(doc.get("_source") or {}),
        )
    error = doc.get("error")
    if error is not None and not _is_missing_index_error(error):
        return DocumentLookup(doc_id=doc_id, status=DocumentLookupStatus.TRANSPORT_FAILURE, error=str(error))
    return DocumentLookup(doc_id=doc_id, status=DocumentLookupStatus.NOT_FOUND, index=doc.get("_index"))


def _is_missing_index_error(error: Any) -> bool:
    return isinstance(error, Mapping) and error.get("type") == "index_not_found_exception"
