"""
목적: 인덱스 버전/별칭 관리 공개 API를 제공한다.
설명: 퍼사드(IndexHelper, Index), 구성 요소, 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/es_tools/core/index/helper.py, src/es_tools/core/index/index.py
"""

from es_tools.core.index.alias_switcher import AliasSwitcher
from es_tools.core.index.bulk import BulkIndexer, split_document
from es_tools.core.index.cleanup import (
    CallableVoter,
    CleanupSweeper,
    DocumentVoter,
    IdSetVoter,
    as_voter,
)
from es_tools.core.index.helper import IndexHelper
from es_tools.core.index.index import Index
from es_tools.core.index.locks import NullReconcileLock, ReconcileLock, ThreadReconcileLock
from es_tools.core.index.models import (
    CleanupFailure,
    CleanupReport,
    DocumentLookup,
    DocumentLookupStatus,
    IndexResolution,
    PrepareOptions,
    ResolutionKind,
)
from es_tools.core.index.namer import VersionNamer
from es_tools.core.index.reconciler import IndexReconciler
from es_tools.core.index.resolver import AliasResolver

__all__ = [
    "AliasResolver",
    "AliasSwitcher",
    "BulkIndexer",
    "split_document",
    "CallableVoter",
    "CleanupSweeper",
    "DocumentVoter",
    "IdSetVoter",
    "as_voter",
    "IndexHelper",
    "Index",
    "IndexReconciler",
    "NullReconcileLock",
    "ReconcileLock",
    "ThreadReconcileLock",
    "VersionNamer",
    "CleanupFailure",
    "CleanupReport",
    "DocumentLookup",
    "DocumentLookupStatus",
    "IndexResolution",
    "PrepareOptions",
    "ResolutionKind",
]
