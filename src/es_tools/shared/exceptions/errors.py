"""
목적: 인덱스 관리 도메인 예외를 정의한다.
설명: 별칭 모호성, 잘못된 인자, 매핑 정의 오류, 재인덱싱 실패, 문서 작업 실패를 구분한다.
디자인 패턴: 도메인 예외 객체
참조: src/es_tools/shared/exceptions/base.py
"""

from __future__ import annotations

from typing import List, Optional

from es_tools.shared.exceptions.base import BaseAppException


class AmbiguousAliasError(BaseAppException):
    """별칭이 둘 이상의 물리 인덱스를 가리킬 때 발생한다."""

    CODE = "ESTOOLS-ALIAS-AMBIGUOUS"

    def __init__(self, alias: str, targets: List[str]) -> None:
        super().__init__(
            message=f"별칭 {alias}이(가) 여러 인덱스를 가리킵니다: {', '.join(targets)}",
            detail=self.build_detail(
                cause="버전 별칭은 물리 인덱스 하나만 가리켜야 합니다.",
                hint="별칭 목록을 확인하고 남은 별칭을 수동으로 정리하세요.",
                index=alias,
                alias=alias,
                targets=list(targets),
            ),
        )
        self.alias = alias
        self.targets = list(targets)


class InvalidIndexArgumentError(BaseAppException, ValueError):
    """물리 인덱스가 필요한 자리에 별칭 등 잘못된 이름이 전달될 때 발생한다."""

    CODE = "ESTOOLS-INVALID-ARGUMENT"

    def __init__(self, message: str, name: Optional[str] = None, hint: Optional[str] = None) -> None:
        metadata = {"name": name} if name else {}
        super().__init__(
            message=message,
            detail=self.build_detail(cause=message, hint=hint, index=name, **metadata),
        )


class MappingDefinitionError(BaseAppException, ValueError):
    """매핑 정의가 하나 이상의 매핑 타입을 포함할 때 발생한다."""

    CODE = "ESTOOLS-MAPPING-DEFINITION"

    def __init__(self, type_names: List[str]) -> None:
        super().__init__(
            message="매핑에는 매핑 타입이 정확히 하나만 있어야 합니다.",
            detail=self.build_detail(
                cause=f"매핑 타입 후보: {', '.join(type_names)}",
                hint="타입 없는 매핑(properties 최상위)을 사용하세요.",
                types=list(type_names),
            ),
        )


class ReindexFailedError(BaseAppException):
    """서버 측 재인덱싱이 실패하거나 대기 한도를 넘겼을 때 발생한다.

    새 버전 인덱스는 남고 별칭은 바뀌지 않은 상태이다.
    """

    CODE = "ESTOOLS-REINDEX-FAILED"

    def __init__(
        self,
        source: str,
        dest: str,
        failures: Optional[list] = None,
        original: Optional[BaseException] = None,
        task_id: Optional[str] = None,
        timed_out: bool = False,
    ) -> None:
        cause = (
            "재인덱싱 작업이 대기 한도 안에 끝나지 않았습니다."
            if timed_out
            else "reindex 응답에 실패 항목이 있거나 작업이 오류로 끝났습니다."
        )
        super().__init__(
            message=f"{source} -> {dest} 재인덱싱에 실패했습니다.",
            detail=self.build_detail(
                cause=cause,
                hint=f"{dest}을(를) 삭제한 뒤 다시 시도하세요. 별칭은 변경되지 않았습니다.",
                index=dest,
                source=source,
                dest=dest,
                failures=failures or [],
                task_id=task_id,
                timed_out=timed_out,
            ),
            original=original,
        )


class DocumentOperationError(BaseAppException):
    """단일 문서 작업(삭제 등)이 예상한 결과를 돌려주지 않을 때 발생한다."""

    CODE = "ESTOOLS-DOCUMENT-OPERATION"

    def __init__(self, operation: str, index: str, doc_id: object, result: Optional[str] = None) -> None:
        super().__init__(
            message=f"문서 {index}/{doc_id} {operation} 작업에 실패했습니다.",
            detail=self.build_detail(
                cause=f"응답 result={result}",
                index=index,
                operation=operation,
                id=str(doc_id),
                result=result,
            ),
        )
