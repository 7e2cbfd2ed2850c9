# community_board/utils/test_datetime_utils.py
"""
시간 유틸리티 테스트

사용법: python -m pytest community_board/utils/test_datetime_utils.py -v
"""

import pytest
from datetime import datetime, timezone, timedelta
from community_board.utils.datetime_utils import DateTimeUtils

def test_parse_iso_datetime():
    """ISO 포맷 파싱 테스트"""
    test_cases = [
        "2024-01-15T10:30:00Z",
        "2024-01-15T10:30:00+09:00",
        "2024-01-15T10:30:00.123456Z",
        "2024-01-15T10:30:00"
    ]

    for iso_string in test_cases:
        dt = DateTimeUtils.parse_iso_datetime(iso_string)
        assert isinstance(dt, datetime)
        assert dt.tzinfo == timezone.utc  # UTC로 정규화되어야 함

def test_to_iso_string_uses_z_suffix():
    kst = timezone(timedelta(hours=9))
    assert DateTimeUtils.to_iso_string(datetime(2024, 1, 15, 19, 30, tzinfo=kst)) == "2024-01-15T10:30:00Z"
    assert DateTimeUtils.to_iso_string(datetime(2024, 1, 15, 10, 30)) == "2024-01-15T10:30:00Z"

def test_from_firestore_nested():
    """Firestore 읽기 변환 테스트"""
    data = {
        'createdAt': datetime(2024, 1, 15, 10, 30),
        'likedBy': ['a', 'b'],
        'likes': 2,
    }

    converted = DateTimeUtils.from_firestore(data)

    assert converted['createdAt'].tzinfo == timezone.utc
    assert converted['likedBy'] == ['a', 'b']
    assert converted['likes'] == 2

def test_coerce_pending_server_timestamp():
    """서버 타임스탬프가 아직 없는 문서는 기본값을 사용"""
    fallback = DateTimeUtils.now()
    assert DateTimeUtils.coerce(None, fallback) is fallback
    assert DateTimeUtils.coerce("2024-01-15T10:30:00Z") == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

def test_error_handling():
    """오류 처리 테스트"""
    with pytest.raises(ValueError):
        DateTimeUtils.parse_iso_datetime("invalid-date")

    with pytest.raises(ValueError):
        DateTimeUtils.parse_iso_datetime("")
