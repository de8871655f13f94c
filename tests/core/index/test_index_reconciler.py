"""
목적: prepare_index 조정 절차와 재인덱싱/별칭 전환 흐름을 검증한다.
설명: 생성(별칭 사용/미사용), 스키마 일치 시 멱등성, 차이 발생 시 재인덱싱, 데이터 복사 없는 새 버전,
      별칭 없는 인덱스의 조정 실패, 재인덱싱 실패 전파를 인메모리 클라이언트로 확인한다.
디자인 패턴: 테스트 케이스
참조: src/es_tools/core/index/reconciler.py, src/es_tools/core/index/helper.py
"""

from __future__ import annotations

import pytest

from es_tools.core.index import IndexHelper, PrepareOptions, ResolutionKind, ThreadReconcileLock
from es_tools.shared.config import IndexToolsConfig
from es_tools.shared.exceptions import ReindexFailedError
from es_tools.shared.logging import LogLevel


MAPPINGS = {"properties": {"title": {"type": "text"}, "tag": {"type": "keyword"}}}
MAPPINGS_V2 = {"properties": {"title": {"type": "text", "analyzer": "folding"}, "tag": {"type": "keyword"}}}
SETTINGS = {
    "number_of_shards": 1,
    "analysis": {
        "analyzer": {"folding": {"tokenizer": "standard", "filter": ["lowercase", "asciifolding"]}},
    },
}


def _create_calls(fake_es) -> list:
    return [call for call in fake_es.calls if call[0] == "indices.create"]


def test_scenario_a_creates_real_index_without_alias(helper, fake_es) -> None:
    """별칭을 쓰지 않으면 논리 이름 그대로 실제 인덱스를 만든다."""

    result = helper.prepare_index("docs", MAPPINGS, SETTINGS, [], PrepareOptions(use_alias=False))

    assert result == "docs"
    assert helper.is_real_index("docs")
    assert not helper.is_alias("docs")


def test_scenario_b_creates_first_version_behind_alias(helper) -> None:
    """별칭을 쓰면 docs-0을 만들고 docs 별칭을 붙인다."""

    result = helper.prepare_index("docs", MAPPINGS, SETTINGS, ["catalog"])

    assert result == "docs-0"
    assert helper.get_current_index_version_name("docs") == "docs-0"
    assert sorted(helper.get_aliases("docs-0")) == ["catalog", "docs"]


def test_create_sends_aliases_in_create_request(helper, fake_es) -> None:
    helper.prepare_index("docs", MAPPINGS, SETTINGS, ["catalog"])

    (request,) = fake_es.create_requests
    assert request["index"] == "docs-0"
    assert request["aliases"] == {"docs": {}, "catalog": {}}
    assert request["mappings"] == MAPPINGS
    assert fake_es.alias_requests == []


def test_prepare_is_idempotent_without_drift(helper, fake_es) -> None:
    """스키마가 같으면 두 번째 호출은 같은 이름을 반환하고 아무것도 바꾸지 않는다."""

    first = helper.prepare_index("docs", MAPPINGS, SETTINGS)
    creates_before = len(_create_calls(fake_es))

    second = helper.prepare_index("docs", MAPPINGS, SETTINGS)

    assert first == second == "docs-0"
    assert len(_create_calls(fake_es)) == creates_before
    assert fake_es.alias_requests == []
    assert helper.check_settings_and_mappings("docs", MAPPINGS, SETTINGS) == {}


def test_scenario_c_reindexes_and_switches_alias(helper, fake_es) -> None:
    """매핑이 바뀌면 새 버전을 만들고 문서를 복사한 뒤 별칭을 전환한다."""

    helper.prepare_index("docs", MAPPINGS, SETTINGS)
    helper.bulk_index("docs", [{"_id": "1", "title": "a"}, {"_id": "2", "title": "b"}])

    result = helper.prepare_index(
        "docs",
        MAPPINGS_V2,
        SETTINGS,
        ["a1"],
        PrepareOptions(use_alias=True, reindex_data=True),
    )

    assert result == "docs-1"
    assert set(fake_es.store["docs-1"].docs) == {"1", "2"}
    assert helper.get_current_index_version_name("docs") == "docs-1"
    assert set(helper.get_aliases("docs-1")) >= {"docs", "a1"}
    assert helper.get_aliases("docs-0") == []
    assert fake_es.reindex_requests[0]["source"] == {"index": "docs-0"}
    assert fake_es.reindex_requests[0]["dest"] == {"index": "docs-1"}
    assert fake_es.reindex_requests[0]["wait_for_completion"] is False
    assert len(fake_es.tasks.get_calls) == 1


def test_scenario_d_missing_index_has_no_version(helper) -> None:
    assert helper.get_current_index_version_name("nonexistent") is None


def test_settings_drift_in_analysis_triggers_new_version(helper) -> None:
    helper.prepare_index("docs", MAPPINGS, SETTINGS)
    changed = {
        "analysis": {"analyzer": {"folding": {"tokenizer": "whitespace", "filter": ["lowercase"]}}},
    }

    diff = helper.diff_index_settings("docs", changed)

    assert diff.removed["analysis.analyzer.folding.tokenizer"] == "whitespace"
    assert diff.added["analysis.analyzer.folding.tokenizer"] == "standard"
    assert helper.prepare_index("docs", MAPPINGS, changed) == "docs-1"


def test_live_analysis_missing_from_desired_is_drift(helper) -> None:
    """원하는 설정에 analysis가 없어도 서버에 있으면 added 차이로 나타난다."""

    helper.prepare_index("docs", MAPPINGS, SETTINGS)

    diff = helper.diff_index_settings("docs", {"number_of_shards": 1})

    assert diff.removed == {}
    assert diff.added["analysis.analyzer"]["folding"]["tokenizer"] == "standard"


def test_non_sensitive_settings_are_ignored(helper) -> None:
    helper.prepare_index("docs", MAPPINGS, SETTINGS)

    assert not helper.diff_index_settings("docs", {**SETTINGS, "number_of_shards": 3, "refresh_interval": "5s"})


def test_dynamic_fields_are_not_mapping_drift(helper, fake_es) -> None:
    helper.prepare_index("docs", MAPPINGS, SETTINGS)
    fake_es.store["docs-0"].mappings["properties"]["dynamic_field"] = {"type": "long"}

    assert helper.diff_mappings("docs", MAPPINGS) == {}
    assert helper.diff_mappings("docs", MAPPINGS_V2) == {"properties.title.analyzer": "folding"}


def test_drift_without_reindex_leaves_alias_unchanged(helper, test_logger) -> None:
    """데이터 복사 없이 새 버전만 만들면 별칭은 이전 버전에 남고 경고가 기록된다."""

    helper.prepare_index("docs", MAPPINGS, SETTINGS)

    result = helper.prepare_index("docs", MAPPINGS_V2, SETTINGS, [], PrepareOptions(reindex_data=False))

    assert result == "docs-1"
    assert helper.get_current_index_version_name("docs") == "docs-0"
    assert helper.get_aliases("docs-1") == []
    warnings = [record for record in test_logger.repository.list() if record.level == LogLevel.WARNING]
    assert warnings

    assert helper.switch_alias("docs", "docs-1") is True
    assert helper.get_current_index_version_name("docs") == "docs-1"


def test_drift_without_alias_cannot_be_reconciled(helper, test_logger) -> None:
    """별칭 없이 쓰는 인덱스는 스키마가 달라지면 False를 반환한다."""

    helper.prepare_index("docs", MAPPINGS, SETTINGS, [], {"use_alias": False})

    result = helper.prepare_index("docs", MAPPINGS_V2, SETTINGS, [], {"use_alias": False})

    assert result is False
    assert helper.is_real_index("docs")
    assert any(record.level == LogLevel.ERROR for record in test_logger.repository.list())


def test_real_index_is_migrated_behind_alias(helper, fake_es) -> None:
    """같은 이름의 실제 인덱스는 재인덱싱 후 삭제되고 별칭으로 바뀐다."""

    helper.prepare_index("docs", MAPPINGS, SETTINGS, ["catalog"], {"use_alias": False})
    helper.bulk_index("docs", [{"_id": "1", "title": "a"}])

    result = helper.prepare_index("docs", MAPPINGS_V2, SETTINGS)

    assert result == "docs-0"
    assert helper.resolve("docs").kind == ResolutionKind.ALIAS
    assert sorted(helper.get_aliases("docs-0")) == ["catalog", "docs"]
    assert set(fake_es.store["docs-0"].docs) == {"1"}


def test_ambiguous_alias_fails_prepare(helper, fake_es) -> None:
    fake_es.indices.create(index="docs-0", aliases={"docs": {}})
    fake_es.indices.create(index="docs-1", aliases={"docs": {}})

    assert helper.prepare_index("docs", MAPPINGS, SETTINGS) is False


def test_reindex_failure_is_raised_and_alias_untouched(helper, fake_es) -> None:
    helper.prepare_index("docs", MAPPINGS, SETTINGS)
    fake_es.reindex_response = {"failures": [{"id": "1", "cause": {"type": "mapper_parsing_exception"}}]}

    with pytest.raises(ReindexFailedError) as exc_info:
        helper.prepare_index("docs", MAPPINGS_V2, SETTINGS)

    assert exc_info.value.detail.metadata["dest"] == "docs-1"
    assert helper.get_current_index_version_name("docs") == "docs-0"
    assert fake_es.alias_requests == []


def test_reindex_task_is_polled_until_completed(helper, fake_es) -> None:
    """reindex는 비동기 작업으로 시작하고 완료될 때까지 작업 상태를 조회한다."""

    helper.prepare_index("docs", MAPPINGS, SETTINGS)
    helper.bulk_index("docs", [{"_id": "1", "title": "a"}])
    fake_es.tasks.pending_polls = 2

    result = helper.prepare_index("docs", MAPPINGS_V2, SETTINGS)

    assert result == "docs-1"
    assert fake_es.reindex_requests[0]["wait_for_completion"] is False
    assert fake_es.tasks.get_calls == ["fake-node:1"] * 3
    assert helper.get_current_index_version_name("docs") == "docs-1"


def test_reindex_task_error_is_raised_and_alias_untouched(helper, fake_es) -> None:
    helper.prepare_index("docs", MAPPINGS, SETTINGS)
    fake_es.tasks.error = {"type": "search_phase_execution_exception", "reason": "all shards failed"}

    with pytest.raises(ReindexFailedError) as exc_info:
        helper.prepare_index("docs", MAPPINGS_V2, SETTINGS)

    assert exc_info.value.detail.metadata["failures"] == [fake_es.tasks.error]
    assert exc_info.value.detail.metadata["task_id"] == "fake-node:1"
    assert helper.get_current_index_version_name("docs") == "docs-0"
    assert fake_es.alias_requests == []


def test_reindex_task_past_timeout_is_cancelled(fake_es, test_logger) -> None:
    """대기 한도를 넘긴 작업은 취소하고 별칭은 그대로 둔다."""

    config = IndexToolsConfig(reindex_poll_interval=0.001, reindex_timeout=0.01)
    helper = IndexHelper(fake_es, config=config, logger=test_logger)
    helper.prepare_index("docs", MAPPINGS, SETTINGS)
    fake_es.tasks.pending_polls = None

    with pytest.raises(ReindexFailedError) as exc_info:
        helper.prepare_index("docs", MAPPINGS_V2, SETTINGS)

    assert exc_info.value.detail.metadata["timed_out"] is True
    assert fake_es.tasks.cancelled == ["fake-node:1"]
    assert helper.get_current_index_version_name("docs") == "docs-0"
    assert fake_es.alias_requests == []


def test_client_side_copy_when_server_reindex_disabled(fake_es, test_logger) -> None:
    """reindex API를 끄면 스크롤과 bulk로 문서를 복사한다."""

    config = IndexToolsConfig(server_side_reindex=False, bulk_batch_size=2, scroll_size=2)
    helper = IndexHelper(fake_es, config=config, logger=test_logger, lock=ThreadReconcileLock())
    helper.prepare_index("docs", MAPPINGS, SETTINGS)
    helper.bulk_index("docs", [{"_id": str(n), "title": f"t{n}", "_routing": "r"} for n in range(5)])
    bulk_before = len(fake_es.bulk_requests)

    result = helper.prepare_index("docs", MAPPINGS_V2, SETTINGS)

    assert result == "docs-1"
    assert fake_es.reindex_requests == []
    assert set(fake_es.store["docs-1"].docs) == {"0", "1", "2", "3", "4"}
    assert fake_es.store["docs-1"].routing["3"] == "r"
    assert len(fake_es.bulk_requests) - bulk_before == 3
    assert ("indices.refresh", "docs-1") in fake_es.calls


def test_legacy_typed_mapping_is_created_typeless(helper, fake_es) -> None:
    typed = {"_doc": MAPPINGS}

    helper.prepare_index("docs", typed, SETTINGS)

    assert fake_es.create_requests[0]["mappings"] == MAPPINGS
    assert helper.diff_mappings("docs", typed) == {}


def test_check_settings_and_mappings_on_missing_index(helper) -> None:
    assert helper.check_settings_and_mappings("docs", MAPPINGS, SETTINGS) is None


def test_check_aliases_lists_missing_aliases(helper) -> None:
    helper.prepare_index("docs", MAPPINGS, SETTINGS, ["a1"])

    assert helper.check_aliases("docs", ["a1", "a2"]) == ["a2"]
