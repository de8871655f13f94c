"""
목적: `.env` 파일 로딩을 제공한다.
설명: 작업 디렉터리 또는 지정 경로의 `.env`를 읽어 ESTOOLS__ 환경 변수를 채운다.
디자인 패턴: 전략 패턴
참조: src/es_tools/shared/config/loader.py, src/es_tools/shared/config/settings.py
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from es_tools.shared.logging import Logger, create_default_logger


class RuntimeEnvironmentLoader:
    """`.env` 로더이다.

    동작 순서:
    1. `env_path`가 주어지면 해당 파일을, 아니면 `project_root/.env`를 로드한다.
    2. 파일이 없으면 경고만 남기고 기존 환경 변수를 그대로 사용한다.
    """

    _ENV_FILENAME = ".env"

    def __init__(
        self,
        logger: Optional[Logger] = None,
        project_root: Optional[Path] = None,
        env_path: Optional[Path] = None,
    ) -> None:
        self._project_root = Path(project_root or Path.cwd())
        self._env_path = Path(env_path) if env_path else self._project_root / self._ENV_FILENAME
        self._logger = logger or create_default_logger("RuntimeEnvironmentLoader")

    @property
    def env_path(self) -> Path:
        """로드 대상 `.env` 경로를 반환한다."""

        return self._env_path

    def load(self, override: bool = False) -> bool:
        """`.env`를 로드하고 로드 여부를 반환한다.

        Args:
            override: `.env` 값이 기존 환경 변수를 덮어쓸지 여부.
        """

        if not self._env_path.exists():
            self._logger.warning(f".env 파일이 없어 건너뜁니다: {self._env_path}")
            return False
        load_dotenv(dotenv_path=self._env_path, override=override)
        self._logger.info(f".env 로드 완료: {self._env_path}")
        return True
