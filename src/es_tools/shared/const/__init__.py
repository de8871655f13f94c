"""
목적: 공통 상수 집합을 제공한다.
설명: 설정 로딩과 인덱스 버전 관리에서 사용하는 기본 상수 값을 정의한다.
디자인 패턴: 상수 객체
참조: src/es_tools/shared/config/loader.py, src/es_tools/shared/config/settings.py
"""


class SharedConst:
    """공통 상수 집합이다.

    Attributes:
        DEFAULT_ENCODING: 기본 파일 인코딩.
        ENV_PREFIX: es_tools 설정 환경 변수 접두사.
    """

    DEFAULT_ENCODING = "utf-8"
    ENV_PREFIX = "ESTOOLS__"


class IndexConst:
    """인덱스 버전/별칭 관리 상수 집합이다.

    Attributes:
        VERSION_SEPARATOR: 논리 이름과 버전 번호 사이 구분자.
        VERSION_START: 첫 물리 버전 번호.
        BULK_BATCH_SIZE: 벌크 요청 한 번에 담는 문서 수.
        SCROLL_SIZE: 스크롤 한 페이지 크기.
        SCROLL_TIMEOUT: 스크롤 커서 유지 시간.
        REINDEX_POLL_INTERVAL: 재인덱싱 작업 상태 확인 간격(초).
        REINDEX_TIMEOUT: 재인덱싱 작업 대기 한도(초).
        REINDEX_SENSITIVE_SETTINGS: 재인덱싱이 필요한 설정 최상위 키.
        DOCUMENT_META_FIELDS: 문서 본문에서 분리해 벌크 헤더로 올리는 메타 필드.
    """

    VERSION_SEPARATOR = "-"
    VERSION_START = 0
    BULK_BATCH_SIZE = 100
    SCROLL_SIZE = 100
    SCROLL_TIMEOUT = "10s"
    REINDEX_POLL_INTERVAL = 1.0
    REINDEX_TIMEOUT = 3600.0
    REINDEX_SENSITIVE_SETTINGS = ("analysis", "mapping")
    DOCUMENT_META_FIELDS = ("_id", "_type", "_routing", "_parent", "_ttl")


__all__ = ["SharedConst", "IndexConst"]
