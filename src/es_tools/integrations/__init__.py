"""
목적: 외부 시스템 연동 패키지를 제공한다.
설명: Elasticsearch 클라이언트 생성과 스크롤 도우미를 묶는다.
디자인 패턴: 퍼사드
참조: src/es_tools/integrations/elasticsearch
"""

from es_tools.integrations.elasticsearch import SearchScrollHelper, create_client

__all__ = ["SearchScrollHelper", "create_client"]
