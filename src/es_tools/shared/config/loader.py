"""
목적: es_tools 설정 원본(JSON 파일, 환경 변수, overrides)을 모은다.
설명: 설정 모델의 필드 이름만 받아들이는 평면 키 사전을 만들고 형 변환은 모델 검증에 맡긴다.
디자인 패턴: 빌더 패턴
참조: src/es_tools/shared/config/settings.py, src/es_tools/shared/const/__init__.py
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Iterable, Mapping, Optional

from es_tools.shared.const import SharedConst
from es_tools.shared.logging import Logger, create_default_logger


class ConfigLoader:
    """평면 설정 키 로더이다.

    Args:
        known_keys: 허용할 설정 키 목록. 그 밖의 키는 경고 후 무시한다.
        logger: 주입 가능한 로거.
    """

    def __init__(self, known_keys: Iterable[str], logger: Optional[Logger] = None) -> None:
        self._known_keys = frozenset(known_keys)
        self._logger = logger or create_default_logger("ConfigLoader")
        self._values: Dict[str, Any] = {}

    def add_json_file(self, path: str, required: bool = False) -> "ConfigLoader":
        """JSON 파일의 최상위 키를 설정에 반영한다."""

        if not path:
            raise ValueError("path는 비어 있을 수 없습니다.")
        if not os.path.exists(path):
            if required:
                raise FileNotFoundError(path)
            self._logger.warning(f"설정 파일이 없어 건너뜁니다: {path}")
            return self
        with open(path, "r", encoding=SharedConst.DEFAULT_ENCODING) as handle:
            try:
                payload = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"JSON 설정 파일 파싱에 실패했습니다: {path}") from exc
        if not isinstance(payload, dict):
            raise ValueError("JSON 설정 파일은 최상위가 객체여야 합니다.")
        self._update(payload, source=path)
        return self

    def add_env(self, prefix: str = SharedConst.ENV_PREFIX) -> "ConfigLoader":
        """접두사가 붙은 환경 변수를 설정에 반영한다.

        `ESTOOLS__BULK_BATCH_SIZE=500`은 `bulk_batch_size`가 된다. 빈 값은 설정하지 않은 것으로 보고 기본값을 유지한다.
        """

        values = {
            key[len(prefix) :].lower(): value.strip()
            for key, value in os.environ.items()
            if key.startswith(prefix) and len(key) > len(prefix) and value.strip()
        }
        self._update(values, source="environment")
        return self

    def build(self, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """누적된 설정에 overrides를 덮어쓴 사전을 반환한다."""

        merged = dict(self._values)
        if overrides:
            merged.update(overrides)
        return merged

    def _update(self, values: Mapping[str, Any], source: str) -> None:
        for key, value in values.items():
            if key not in self._known_keys:
                self._logger.warning(f"알 수 없는 설정 키를 무시합니다: {key} ({source})")
                continue
            self._values[key] = value

