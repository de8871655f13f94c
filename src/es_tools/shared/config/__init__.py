"""
목적: 설정 로더 공개 API를 제공한다.
설명: 일반 설정 병합 로더, `.env` 로더, 설정 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/es_tools/shared/config/loader.py, src/es_tools/shared/config/runtime_env_loader.py
"""

from es_tools.shared.config.loader import ConfigLoader
from es_tools.shared.config.runtime_env_loader import RuntimeEnvironmentLoader
from es_tools.shared.config.settings import IndexToolsConfig, load_config

__all__ = ["ConfigLoader", "RuntimeEnvironmentLoader", "IndexToolsConfig", "load_config"]
