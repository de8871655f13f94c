"""
목적: es_tools 실행 설정 모델과 로딩 함수를 제공한다.
설명: 접속 정보, 버전 명명 규칙, 벌크/스크롤 크기, 재인덱싱 방식을 Pydantic 모델로 정의한다.
디자인 패턴: 데이터 전송 객체(DTO), 빌더 패턴
참조: src/es_tools/shared/config/loader.py, src/es_tools/integrations/elasticsearch/client.py
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from es_tools.shared.config.loader import ConfigLoader
from es_tools.shared.const import IndexConst, SharedConst
from es_tools.shared.logging import Logger


class IndexToolsConfig(BaseModel):
    """es_tools 설정 모델이다.

    Args:
        hosts: 접속 URL 목록. 비어 있으면 host/port/scheme으로 조합한다.
        host: 단일 호스트 이름.
        port: 포트.
        scheme: http 또는 https.
        user: 기본 인증 사용자.
        password: 기본 인증 비밀번호.
        version_separator: 논리 이름과 버전 번호 사이 구분자.
        version_start: 첫 물리 버전 번호.
        bulk_batch_size: 벌크 요청당 문서 수.
        scroll_size: 스크롤 페이지 크기.
        scroll_timeout: 스크롤 커서 유지 시간.
        server_side_reindex: True이면 reindex API로 데이터를 복사한다.
        reindex_refresh: 재인덱싱 후 대상 인덱스를 refresh할지 여부.
        reindex_poll_interval: 서버 측 재인덱싱 작업 상태를 확인하는 간격(초).
        reindex_timeout: 서버 측 재인덱싱 작업을 기다리는 최대 시간(초).
        legacy_api: 매핑 타입/parent/ttl 헤더를 쓰는 6.x 이전 클러스터 여부.
    """

    hosts: List[str] = Field(default_factory=list)
    host: str = "127.0.0.1"
    port: int = 9200
    scheme: str = "http"
    user: Optional[str] = None
    password: Optional[str] = None
    version_separator: str = IndexConst.VERSION_SEPARATOR
    version_start: int = Field(default=IndexConst.VERSION_START, ge=0)
    bulk_batch_size: int = Field(default=IndexConst.BULK_BATCH_SIZE, gt=0)
    scroll_size: int = Field(default=IndexConst.SCROLL_SIZE, gt=0)
    scroll_timeout: str = IndexConst.SCROLL_TIMEOUT
    server_side_reindex: bool = True
    reindex_refresh: bool = True
    reindex_poll_interval: float = Field(default=IndexConst.REINDEX_POLL_INTERVAL, gt=0)
    reindex_timeout: float = Field(default=IndexConst.REINDEX_TIMEOUT, gt=0)
    legacy_api: bool = False

    @field_validator("hosts", mode="before")
    @classmethod
    def _split_hosts(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("user", "password", mode="before")
    @classmethod
    def _stringify_credentials(cls, value: Any) -> Any:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("version_separator")
    @classmethod
    def _check_separator(cls, value: str) -> str:
        if not value:
            raise ValueError("version_separator는 비어 있을 수 없습니다.")
        return value

    def resolve_hosts(self) -> List[str]:
        """접속 URL 목록을 반환한다."""

        if self.hosts:
            return list(self.hosts)
        return [f"{self.scheme}://{self.host}:{self.port}"]


def load_config(
    path: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    env_prefix: str = SharedConst.ENV_PREFIX,
    logger: Optional[Logger] = None,
) -> IndexToolsConfig:
    """기본값, JSON 파일, 환경 변수, overrides 순으로 병합한 설정을 반환한다."""

    loader = ConfigLoader(IndexToolsConfig.model_fields, logger=logger)
    if path:
        loader.add_json_file(path)
    loader.add_env(prefix=env_prefix)
    return IndexToolsConfig.model_validate(loader.build(overrides))
