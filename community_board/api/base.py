# community_board/api/base.py
"""
게시글/댓글 서비스의 기본 클래스
좋아요 토글과 작성자 정보 생성 등 공통 기능 제공
"""

import logging
from typing import Any, Dict

from community_board.api.auth.services import SessionManager
from community_board.models.post import ANONYMOUS_AUTHOR, ANONYMOUS_AUTHOR_ID
from community_board.services.firestore_service import Increment, ArrayUnion, ArrayRemove

logger = logging.getLogger(__name__)


class RecordService:
    """
    좋아요를 받을 수 있는 문서(게시글, 댓글) 서비스의 기본 클래스
    하위 클래스는 collection 이름만 지정합니다.
    """
    collection: str = ''

    def __init__(self, store, session: SessionManager, collection: str = None):
        self.store = store
        self.session = session
        if collection:
            self.collection = collection

    def _authorship(self) -> Dict[str, Any]:
        """작성자 스냅샷. 로그인하지 않은 경우 익명으로 기록합니다."""
        user = self.session.current_user()
        if user is None:
            return {'author': ANONYMOUS_AUTHOR, 'authorId': ANONYMOUS_AUTHOR_ID}
        return {'author': user.name, 'authorId': user.uid}

    def _new_record(self, **fields) -> Dict[str, Any]:
        record = dict(fields)
        record.update(self._authorship())
        record['likes'] = 0
        record['likedBy'] = []
        return record

    def toggle_like(self, record_id: str) -> None:
        """
        현재 사용자의 좋아요 상태를 토글합니다.
        - likedBy에 있으면 likes -1 과 함께 제거, 없으면 likes +1 과 함께 추가
        - 조회와 변경은 하나의 트랜잭션에서 처리되어 연속 탭에도 likes == len(likedBy)가 유지됩니다.
        - 결과는 반환하지 않습니다. 호출자가 다시 조회해야 합니다.
        """
        uid = self.session.require_user().uid

        def _toggle(record: Dict[str, Any]) -> Dict[str, Any]:
            if uid in (record.get('likedBy') or []):
                return {'likes': Increment(-1), 'likedBy': ArrayRemove([uid])}
            return {'likes': Increment(1), 'likedBy': ArrayUnion([uid])}

        try:
            applied = self.store.update_in_transaction(self.collection, record_id, _toggle)
        except Exception as e:
            logger.error(f"좋아요 토글 실패 ({self.collection}/{record_id}, uid: {uid}): {e}", exc_info=True)
            raise
        action = "취소" if isinstance(applied['likedBy'], ArrayRemove) else "추가"
        logger.info(f"좋아요 {action} ({self.collection}/{record_id}, uid: {uid})")

    def delete(self, record_id: str) -> None:
        """문서를 삭제합니다. 소유권 확인은 Firestore 보안 규칙에 맡깁니다."""
        self.store.delete(self.collection, record_id)
