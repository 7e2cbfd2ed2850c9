# community_board/api/comments/services.py

import logging
from typing import List, Optional

from community_board.api.base import RecordService
from community_board.api.comments.schemas import CommentCreateSchema
from community_board.models.comment import Comment
from community_board.services.firestore_service import ASCENDING

class CommentService(RecordService):
    """
    댓글 관련 비즈니스 로직을 담당하는 서비스 클래스.
    - 댓글은 postId로 게시글에 묶이며, 작성 순서(오래된 것 먼저)로 조회됩니다.
    """
    collection = 'comments'

    def create(self, post_id: str, content: str) -> str:
        """게시글에 새 댓글을 작성하고 문서 ID를 반환합니다."""
        data = CommentCreateSchema().load({"content": content})
        record = self._new_record(postId=post_id, content=data["content"])
        try:
            comment_id = self.store.insert(self.collection, record)
        except Exception as e:
            logging.error(f"댓글 생성 실패 (post_id: {post_id}): {e}", exc_info=True)
            raise
        logging.info(f"댓글 생성 완료 (comment_id: {comment_id}, post_id: {post_id})")
        return comment_id

    def list(self, post_id: str) -> List[Comment]:
        """특정 게시글의 댓글 전체를 작성 시간 오름차순으로 조회합니다."""
        records = self.store.list_ordered(self.collection, 'createdAt', ASCENDING, filters={'postId': post_id})
        return [Comment.from_document(r['id'], r) for r in records]

    def get(self, comment_id: str) -> Optional[Comment]:
        record = self.store.get_one(self.collection, comment_id)
        if record is None:
            return None
        return Comment.from_document(comment_id, record)
