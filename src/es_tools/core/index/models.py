"""
목적: 인덱스 버전/별칭 관리에서 사용하는 모델을 정의한다.
설명: 이름 해석 결과, prepare 옵션, 문서 조회 결과, 정리 작업 보고서를 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/es_tools/core/index/resolver.py, src/es_tools/core/index/reconciler.py
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ResolutionKind(str, Enum):
    """논리 인덱스 이름 해석 결과 종류."""

    REAL_INDEX = "REAL_INDEX"
    ALIAS = "ALIAS"
    NOT_FOUND = "NOT_FOUND"
    AMBIGUOUS = "AMBIGUOUS"


class IndexResolution(BaseModel):
    """논리 인덱스 이름 해석 결과이다.

    Args:
        name: 해석한 이름.
        kind: 해석 결과 종류.
        targets: 별칭이 가리키는 물리 인덱스 목록. 실제 인덱스면 자기 자신.
    """

    name: str
    kind: ResolutionKind
    targets: List[str] = Field(default_factory=list)

    @property
    def physical_name(self) -> Optional[str]:
        """단일 물리 인덱스 이름을 반환한다. 없거나 모호하면 None이다."""

        if self.kind == ResolutionKind.REAL_INDEX:
            return self.name
        if self.kind == ResolutionKind.ALIAS:
            return self.targets[0]
        return None


class PrepareOptions(BaseModel):
    """prepare_index 동작 옵션이다.

    Args:
        use_alias: 논리 이름을 별칭으로 두고 물리 버전 인덱스를 만든다.
        reindex_data: 스키마가 바뀌면 기존 문서를 새 버전으로 복사하고 별칭을 전환한다.
    """

    use_alias: bool = True
    reindex_data: bool = True


class DocumentLookupStatus(str, Enum):
    """문서 조회 결과 상태."""

    FOUND = "FOUND"
    NOT_FOUND = "NOT_FOUND"
    TRANSPORT_FAILURE = "TRANSPORT_FAILURE"


class DocumentLookup(BaseModel):
    """문서 조회 결과이다.

    Args:
        doc_id: 문서 ID.
        status: 조회 상태.
        index: 문서를 찾은 물리 인덱스.
        source: 문서 본문.
        error: 전송 실패 시 오류 설명.
    """

    doc_id: str
    status: DocumentLookupStatus
    index: Optional[str] = None
    source: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        """문서 존재 여부를 반환한다."""

        return self.status == DocumentLookupStatus.FOUND


class CleanupFailure(BaseModel):
    """정리 작업 중 삭제에 실패한 문서 정보이다."""

    index: str
    doc_id: str
    error: str


class CleanupReport(BaseModel):
    """정리 작업 결과 보고서이다.

    Args:
        index: 정리 대상 인덱스.
        scanned: 순회한 문서 수.
        deleted: 삭제한 문서 수.
        failures: 삭제 실패 목록.
    """

    index: str
    scanned: int = 0
    deleted: int = 0
    failures: List[CleanupFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """실패 없이 끝났는지 여부를 반환한다."""

        return not self.failures
