"""
목적: Elasticsearch 클라이언트 생성 함수를 제공한다.
설명: 설정 모델의 접속 정보로 elasticsearch.Elasticsearch 인스턴스를 만든다.
디자인 패턴: 팩토리 함수
참조: src/es_tools/shared/config/settings.py
"""

from __future__ import annotations

from typing import Any, Optional

from elasticsearch import Elasticsearch

from es_tools.shared.config import IndexToolsConfig
from es_tools.shared.logging import Logger, create_default_logger


def create_client(
    config: Optional[IndexToolsConfig] = None,
    logger: Optional[Logger] = None,
    **client_kwargs: Any,
) -> Elasticsearch:
    """설정 기반 Elasticsearch 클라이언트를 생성한다.

    Args:
        config: 접속 설정. 없으면 기본값을 사용한다.
        logger: 주입 가능한 로거.
        **client_kwargs: Elasticsearch 생성자에 그대로 전달할 추가 인자(ca_certs 등).
    """

    config = config or IndexToolsConfig()
    logger = logger or create_default_logger("create_client")
    hosts = config.resolve_hosts()
    if config.user is not None and "basic_auth" not in client_kwargs:
        client_kwargs["basic_auth"] = (config.user, config.password or "")
    client = Elasticsearch(hosts, **client_kwargs)
    logger.info(f"Elasticsearch 클라이언트 생성: hosts={', '.join(hosts)}")
    return client
