"""
목적: pytest 공통 로깅 훅과 공용 픽스처를 제공한다.
설명: 테스트 시작/종료와 결과를 로깅하고, 인메모리 Elasticsearch 클라이언트와 인덱스 도우미를 제공한다.
      `.env`가 있으면 실제 Elasticsearch 테스트용 환경 변수를 읽는다.
디자인 패턴: 테스트 훅, 테스트 픽스처 패턴
참조: pyproject.toml, tests/_fake_elasticsearch.py
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from _fake_elasticsearch import FakeElasticsearch
from es_tools.core.index import IndexHelper
from es_tools.shared.config import IndexToolsConfig
from es_tools.shared.logging import create_memory_logger


_LOGGER = logging.getLogger("tests")


def _load_env_files() -> None:
    """환경 변수 파일이 있으면 로딩한다."""

    root = Path(__file__).resolve().parents[1]
    env_path = root / ".env"
    if not env_path.exists():
        return
    load_dotenv(env_path, override=False)


def _set_if_missing(key: str, value: str | None) -> None:
    """환경 변수가 없을 때만 값을 설정한다."""

    if not value:
        return
    if not os.getenv(key):
        os.environ[key] = value


def _build_elasticsearch_hosts() -> str | None:
    """ELASTICSEARCH_HOST가 있으면 HOSTS 문자열을 조합한다."""

    host = os.getenv("ELASTICSEARCH_HOST")
    port = os.getenv("ELASTICSEARCH_PORT", "9200")
    scheme = os.getenv("ELASTICSEARCH_SCHEME", "http")
    if not host:
        return None
    return f"{scheme}://{host}:{port}"


_load_env_files()
_set_if_missing("ELASTICSEARCH_HOSTS", _build_elasticsearch_hosts())


@pytest.fixture
def fake_es() -> FakeElasticsearch:
    """빈 인메모리 Elasticsearch 클라이언트를 반환한다."""

    return FakeElasticsearch()


@pytest.fixture
def test_logger():
    """레코드를 확인할 수 있는 인메모리 로거를 반환한다."""

    return create_memory_logger("tests")


@pytest.fixture
def index_config() -> IndexToolsConfig:
    """테스트 기본 설정을 반환한다."""

    return IndexToolsConfig(bulk_batch_size=2, scroll_size=2, reindex_poll_interval=0.001)


@pytest.fixture
def helper(fake_es, index_config, test_logger) -> IndexHelper:
    """인메모리 클라이언트에 연결한 IndexHelper를 반환한다."""

    return IndexHelper(fake_es, config=index_config, logger=test_logger)


def pytest_sessionstart(session) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 시작을 로깅한다."""

    _LOGGER.info("테스트 세션 시작")


def pytest_sessionfinish(session, exitstatus: int) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 종료를 로깅한다."""

    _LOGGER.info("테스트 세션 종료 (exitstatus=%s)", exitstatus)


def pytest_runtest_logstart(nodeid: str, location) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """각 테스트 시작을 로깅한다."""

    _LOGGER.info("테스트 시작: %s", nodeid)


def pytest_runtest_logreport(report) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 결과를 로깅한다."""

    if report.when != "call":
        return
    if report.passed:
        _LOGGER.info("테스트 완료: %s", report.nodeid)
        return
    if report.skipped:
        _LOGGER.warning("테스트 스킵: %s", report.nodeid)
        return
    _LOGGER.error("테스트 실패: %s", report.nodeid)
