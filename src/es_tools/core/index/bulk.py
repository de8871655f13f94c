"""
목적: 문서 묶음 색인(bulk write)을 수행한다.
설명: 문서 레코드에서 메타 필드를 분리해 액션 헤더로 올리고, 설정된 크기로 나눠 bulk 요청을 보낸 뒤
      성공한 문서 ID를 입력 순서대로 모은다.
디자인 패턴: 배치 처리기
참조: src/es_tools/core/index/reconciler.py, src/es_tools/core/index/index.py
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from es_tools.shared.const import IndexConst
from es_tools.shared.logging import LogContext, Logger, create_default_logger

# 본문 메타 필드 -> bulk 액션 헤더 키
_MODERN_HEADER_FIELDS = {"_id": "_id", "_routing": "routing"}
_LEGACY_HEADER_FIELDS = {"_type": "_type", "_parent": "parent", "_ttl": "ttl"}


def split_document(
    record: Mapping[str, Any],
    legacy_api: bool = False,
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """문서 레코드를 (헤더 메타, 본문)으로 나눈다."""

    body = dict(record)
    header: Dict[str, Any] = {}
    for field in IndexConst.DOCUMENT_META_FIELDS:
        if field not in body:
            continue
        value = body.pop(field)
        header_key = _MODERN_HEADER_FIELDS.get(field)
        if header_key is None and legacy_api:
            header_key = _LEGACY_HEADER_FIELDS.get(field)
        if header_key is not None and value is not None:
            header[header_key] = str(value) if header_key == "_id" else value
    return header, body


class BulkIndexer:
    """bulk 색인기이다.

    Args:
        client: Elasticsearch 클라이언트.
        batch_size: bulk 요청당 문서 수.
        legacy_api: 매핑 타입/parent/ttl 헤더를 보낼지 여부.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        client: Any,
        batch_size: int = IndexConst.BULK_BATCH_SIZE,
        legacy_api: bool = False,
        logger: Optional[Logger] = None,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size는 1 이상이어야 합니다.")
        self._client = client
        self._batch_size = batch_size
        self._legacy_api = legacy_api
        self._logger = logger or create_default_logger("BulkIndexer")

    def bulk_index(self, index: str, documents: Iterable[Mapping[str, Any]]) -> List[str]:
        """문서를 색인하고 성공한 문서 ID 목록을 반환한다."""

        context = LogContext(index=index, operation="bulk_index")
        indexed: List[str] = []
        operations: List[Dict[str, Any]] = []
        pending = 0
        batches = 0
        for record in documents:
            header, body = split_document(record, legacy_api=self._legacy_api)
            operations.append({"index": {"_index": index, **header}})
            operations.append(body)
            pending += 1
            if pending >= self._batch_size:
                batches += 1
                indexed.extend(self._flush(operations, context))
                operations = []
                pending = 0
        if pending:
            batches += 1
            indexed.extend(self._flush(operations, context))
        self._logger.info(f"bulk 색인 완료: index={index}, batches={batches}, indexed={len(indexed)}", context)
        return indexed

    def _flush(self, operations: List[Dict[str, Any]], context: LogContext) -> List[str]:
        response = self._client.bulk(operations=operations)
        items = response.get("items", [])
        if not response.get("errors"):
            ids = [_item_result(item).get("_id") for item in items]
            self._logger.debug(f"bulk 배치 성공: {len(ids)}건", context)
            return [str(doc_id) for doc_id in ids if doc_id is not None]

        ids: List[str] = []
        failed = 0
        for item in items:
            result = _item_result(item)
            shards = result.get("_shards") or {}
            if shards.get("successful", 0) > 0:
                ids.append(str(result.get("_id")))
                continue
            failed += 1
            error = result.get("error") or {}
            if not isinstance(error, Mapping):
                error = {"type": "unknown", "reason": str(error)}
            self._logger.warning(
                "문서 색인 실패: index={index}, id={doc_id}, type={etype}, reason={reason}".format(
                    index=result.get("_index"),
                    doc_id=result.get("_id"),
                    etype=error.get("type"),
                    reason=error.get("reason"),
                ),
                context,
                metadata={"status": result.get("status"), "error": dict(error)},
            )
        self._logger.debug(f"bulk 배치 부분 실패: 성공 {len(ids)}건, 실패 {failed}건", context)
        return ids


def _item_result(item: Mapping[str, Any]) -> Mapping[str, Any]:
    # 응답 항목은 {"index": {...}} 형태이며 키는 액션 이름이다.
    for value in item.values():
        if isinstance(value, Mapping):
            return value
    return {}
