# community_board/core/errors.py
"""
게시판 코어에서 발생하는 오류 종류.

- ValidationError: 입력값 검증 실패. 네트워크 호출 전에 발생합니다. (marshmallow의 예외를 그대로 사용)
- AuthError: 로그인/회원가입 실패, 세션 없음 등 인증 관련 오류.
- StoreError: Firestore 통신 실패, 권한 거부, 필수 문서 없음.
"""
from typing import Optional

from marshmallow import ValidationError


class AuthError(Exception):
    """인증 제공자가 거부했거나 로그인된 사용자가 없을 때 발생합니다."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class StoreError(Exception):
    """문서 저장소 요청이 실패했을 때 발생합니다."""

    def __init__(self, message: str, collection: Optional[str] = None, doc_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.collection = collection
        self.doc_id = doc_id


__all__ = ['AuthError', 'StoreError', 'ValidationError']
