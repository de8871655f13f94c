"""
목적: 인덱스 정리 작업을 제공한다.
설명: 스크롤로 모든 문서를 순회하며 판정자(voter)가 유지하지 않기로 한 문서를 하나씩 삭제한다.
      삭제 실패는 보고서에 모으고 나머지 문서 처리를 계속한다.
디자인 패턴: 전략 패턴(판정자), 이터레이터
참조: src/es_tools/integrations/elasticsearch/scroll.py, src/es_tools/core/index/models.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Collection, Mapping, Optional

from elasticsearch import ApiError, TransportError

from es_tools.core.index.models import CleanupFailure, CleanupReport
from es_tools.integrations.elasticsearch import SearchScrollHelper
from es_tools.shared.logging import LogContext, Logger, create_default_logger


class DocumentVoter(ABC):
    """문서 유지 여부 판정자 인터페이스."""

    @abstractmethod
    def keep(self, hit: Mapping[str, Any]) -> bool:
        """hit를 유지하면 True, 삭제하면 False를 반환한다."""


class CallableVoter(DocumentVoter):
    """함수를 판정자로 감싼다."""

    def __init__(self, func: Callable[[Mapping[str, Any]], bool]) -> None:
        self._func = func

    def keep(self, hit: Mapping[str, Any]) -> bool:
        return bool(self._func(hit))


class IdSetVoter(DocumentVoter):
    """주어진 ID 집합에 있는 문서만 유지한다."""

    def __init__(self, existing_ids: Collection[Any]) -> None:
        self._ids = {str(doc_id) for doc_id in existing_ids}

    def keep(self, hit: Mapping[str, Any]) -> bool:
        return str(hit.get("_id")) in self._ids


def as_voter(voter: Any) -> DocumentVoter:
    """판정자 또는 호출 가능한 객체를 DocumentVoter로 바꾼다."""

    if isinstance(voter, DocumentVoter):
        return voter
    if callable(voter):
        return CallableVoter(voter)
    raise TypeError("voter는 DocumentVoter 또는 호출 가능한 객체여야 합니다.")


class CleanupSweeper:
    """인덱스 정리기이다.

    Args:
        client: Elasticsearch 클라이언트.
        scroll_helper: 스크롤 검색 도우미.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        client: Any,
        scroll_helper: Optional[SearchScrollHelper] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._client = client
        self._logger = logger or create_default_logger("CleanupSweeper")
        self._scroll_helper = scroll_helper or SearchScrollHelper(client, logger=self._logger)

    def cleanup(
        self,
        index: str,
        voter: Any,
        scroll_options: Optional[Mapping[str, Any]] = None,
    ) -> CleanupReport:
        """판정자가 거부한 문서를 삭제하고 결과 보고서를 반환한다."""

        voter = as_voter(voter)
        context = LogContext(index=index, operation="cleanup")
        report = CleanupReport(index=index)
        self._logger.info("삭제할 문서를 확인합니다.", context)
        for hit in self._scroll_helper.scroll_search(index, scroll_options):
            report.scanned += 1
            if voter.keep(hit):
                continue
            hit_index = hit.get("_index", index)
            doc_id = hit.get("_id")
            try:
                self._client.delete(index=hit_index, id=doc_id)
            except (ApiError, TransportError) as exc:
                report.failures.append(CleanupFailure(index=hit_index, doc_id=str(doc_id), error=str(exc)))
                self._logger.error(f"문서 삭제 실패: {hit_index}/{doc_id}: {exc}", context)
                continue
            report.deleted += 1
            self._logger.debug(f"삭제: {hit_index}/{doc_id} (누적 {report.deleted}건)", context)
        self._logger.info(
            f"정리 완료: 확인 {report.scanned}건, 삭제 {report.deleted}건, 실패 {len(report.failures)}건",
            context,
        )
        return report
