"""
목적: Elasticsearch 연동 공개 API를 제공한다.
설명: 클라이언트 팩토리와 스크롤 검색 도우미를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/es_tools/integrations/elasticsearch/client.py, src/es_tools/integrations/elasticsearch/scroll.py
"""

from es_tools.integrations.elasticsearch.client import create_client
from es_tools.integrations.elasticsearch.scroll import SearchScrollHelper

__all__ = ["create_client", "SearchScrollHelper"]
