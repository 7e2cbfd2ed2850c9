# community_board/utils/__init__.py
"""
유틸리티 모듈 패키지

게시판 전체에서 공통으로 사용되는 시간 처리 함수들을 포함합니다.
"""

from .datetime_utils import (
    DateTimeUtils,
    now, to_iso, from_firestore
)

__all__ = [
    'DateTimeUtils',
    'now', 'to_iso', 'from_firestore'
]
