"""
목적: 스크롤 검색 도우미를 제공한다.
설명: elasticsearch.helpers.scan으로 인덱스 전체 문서를 지연 순회하며, 소진 시 서버 커서를 정리한다.
디자인 패턴: 이터레이터, 어댑터 패턴
참조: src/es_tools/core/index/cleanup.py, src/es_tools/core/index/reconciler.py
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Union

from elasticsearch import helpers

from es_tools.shared.const import IndexConst
from es_tools.shared.logging import Logger, create_default_logger


class SearchScrollHelper:
    """스크롤 검색 도우미이다.

    사용 예 (인덱스의 문서 ID만 나열):

        helper = SearchScrollHelper(client)
        for hit in helper.scroll_search("my_index", {"_source": False}):
            print(hit["_id"])

    Args:
        client: Elasticsearch 클라이언트.
        default_size: 기본 스크롤 페이지 크기.
        default_scroll: 기본 스크롤 유지 시간.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        client: Any,
        default_size: int = IndexConst.SCROLL_SIZE,
        default_scroll: str = IndexConst.SCROLL_TIMEOUT,
        logger: Optional[Logger] = None,
    ) -> None:
        self._client = client
        self._default_size = default_size
        self._default_scroll = default_scroll
        self._logger = logger or create_default_logger("SearchScrollHelper")

    def scroll_search(
        self,
        index: Union[str, Sequence[str]],
        options: Optional[Mapping[str, Any]] = None,
    ) -> Iterator[Dict[str, Any]]:
        """스크롤 검색 결과 hit를 하나씩 반환한다.

        Args:
            index: 대상 인덱스 이름 또는 이름 목록.
            options: query(기본 match_all), _source(기본 True), size, scroll.
        """

        options = dict(options or {})
        query = options.get("query") or {"match_all": {}}
        source = options.get("_source", True)
        size = int(options.get("size") or self._default_size)
        scroll = options.get("scroll") or self._default_scroll
        if not isinstance(index, str):
            index = ",".join(index)

        self._logger.debug(f"스크롤 검색 시작: index={index}, size={size}, scroll={scroll}")
        count = 0
        for hit in helpers.scan(
            self._client,
            query={"query": query, "_source": source},
            index=index,
            size=size,
            scroll=scroll,
        ):
            count += 1
            yield hit
        self._logger.debug(f"스크롤 검색 종료: index={index}, hits={count}")
