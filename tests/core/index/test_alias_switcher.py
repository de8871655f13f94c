"""
목적: 별칭 전환의 원자성과 별칭 이전 규칙을 검증한다.
설명: 기존 별칭 인덱스, 같은 이름의 실제 인덱스, 처음 생성하는 경우의 액션 배치를 확인한다.
디자인 패턴: 테스트 케이스
참조: src/es_tools/core/index/alias_switcher.py
"""

from __future__ import annotations

from es_tools.core.index import AliasResolver, AliasSwitcher, ResolutionKind


def test_switch_from_old_version_moves_aliases(fake_es) -> None:
    """전환 후 논리 이름과 기존 별칭, 추가 별칭이 모두 새 버전으로 옮겨진다."""

    fake_es.indices.create(index="docs-0", aliases={"docs": {}, "catalog": {}})
    fake_es.indices.create(index="docs-1")
    switcher = AliasSwitcher(fake_es)
    resolver = AliasResolver(fake_es)

    assert switcher.switch_alias("docs", "docs-1", ["a1"]) is True

    resolution = resolver.resolve("docs")
    assert resolution.kind == ResolutionKind.ALIAS
    assert resolution.targets == ["docs-1"]
    assert set(resolver.get_aliases("docs-1")) >= {"docs", "catalog", "a1"}
    assert resolver.get_aliases("docs-0") == []
    assert len(fake_es.alias_requests) == 1


def test_switch_builds_one_batch_for_alias_case(fake_es) -> None:
    fake_es.indices.create(index="docs-0", aliases={"docs": {}, "catalog": {}})
    fake_es.indices.create(index="docs-1")

    actions = AliasSwitcher(fake_es).build_actions("docs", "docs-1", ["a1", "catalog"])

    assert actions == [
        {"remove": {"index": "docs-0", "alias": "docs"}},
        {"add": {"index": "docs-1", "alias": "docs"}},
        {"add": {"index": "docs-1", "alias": "catalog"}},
        {"remove": {"index": "docs-0", "alias": "catalog"}},
        {"add": {"index": "docs-1", "alias": "a1"}},
    ]


def test_switch_replaces_real_index_with_alias(fake_es) -> None:
    """같은 이름의 실제 인덱스는 같은 배치 안에서 삭제되고 별칭으로 대체된다."""

    fake_es.indices.create(index="docs", aliases={"catalog": {}})
    fake_es.indices.create(index="docs-0")
    switcher = AliasSwitcher(fake_es)

    actions = switcher.build_actions("docs", "docs-0")
    assert actions == [
        {"remove_index": {"index": "docs"}},
        {"add": {"index": "docs-0", "alias": "docs"}},
        {"add": {"index": "docs-0", "alias": "catalog"}},
    ]

    assert switcher.switch_alias("docs", "docs-0") is True
    assert "docs" not in fake_es.store
    assert AliasResolver(fake_es).get_current_version_name("docs") == "docs-0"


def test_switch_without_old_version_only_adds(fake_es) -> None:
    fake_es.indices.create(index="docs-0")

    actions = AliasSwitcher(fake_es).build_actions("docs", "docs-0", ["a1"])

    assert actions == [
        {"add": {"index": "docs-0", "alias": "docs"}},
        {"add": {"index": "docs-0", "alias": "a1"}},
    ]


def test_switch_to_current_target_adds_missing_aliases_only(fake_es) -> None:
    fake_es.indices.create(index="docs-0", aliases={"docs": {}})

    actions = AliasSwitcher(fake_es).build_actions("docs", "docs-0", ["a1"])

    assert actions == [{"add": {"index": "docs-0", "alias": "a1"}}]


def test_switch_fails_on_ambiguous_alias(fake_es) -> None:
    """모호한 별칭은 액션을 보내지 않고 False를 반환한다."""

    fake_es.indices.create(index="docs-0", aliases={"docs": {}})
    fake_es.indices.create(index="docs-1", aliases={"docs": {}})
    fake_es.indices.create(index="docs-2")

    assert AliasSwitcher(fake_es).switch_alias("docs", "docs-2") is False
    assert fake_es.alias_requests == []


def test_switch_reports_unacknowledged_batch(fake_es) -> None:
    fake_es.indices.create(index="docs-0")
    fake_es.acknowledge_aliases = False

    assert AliasSwitcher(fake_es).switch_alias("docs", "docs-0") is False


def test_set_aliases_adds_only_missing(fake_es) -> None:
    fake_es.indices.create(index="docs-0", aliases={"docs": {}})

    added = AliasSwitcher(fake_es).set_aliases("docs-0", ["docs", "a1", "a1", "a2"])

    assert added == ["a1", "a2"]
    assert fake_es.alias_requests == [
        [
            {"add": {"index": "docs-0", "alias": "a1"}},
            {"add": {"index": "docs-0", "alias": "a2"}},
        ]
    ]
