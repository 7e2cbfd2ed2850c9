# community_board/api/posts/services.py
import logging
from typing import List, Optional

from community_board.api.base import RecordService
from community_board.api.posts.schemas import PostCreateSchema
from community_board.models.post import Post
from community_board.services.firestore_service import DESCENDING

class PostService(RecordService):
    """
    게시글 관련 비즈니스 로직을 담당하는 서비스 클래스.
    작성/목록/상세/삭제/좋아요 토글을 제공합니다.
    """
    collection = 'posts'

    def create(self, title: str, content: str) -> str:
        """새 게시글을 저장하고 문서 ID를 반환합니다. 검증에 실패하면 저장소를 호출하지 않습니다."""
        data = PostCreateSchema().load({"title": title, "content": content})
        record = self._new_record(title=data["title"], content=data["content"])
        try:
            post_id = self.store.insert(self.collection, record)
        except Exception as e:
            logging.error(f"게시글 생성 실패 (authorId: {record['authorId']}): {e}", exc_info=True)
            raise
        logging.info(f"게시글 생성 완료 (post_id: {post_id}, authorId: {record['authorId']})")
        return post_id

    def list(self) -> List[Post]:
        """최신 글이 먼저 오도록 전체 게시글을 조회합니다. 호출할 때마다 새로 조회합니다."""
        records = self.store.list_ordered(self.collection, 'createdAt', DESCENDING)
        return [Post.from_document(r['id'], r) for r in records]

    def get(self, post_id: str) -> Optional[Post]:
        record = self.store.get_one(self.collection, post_id)
        if record is None:
            return None
        return Post.from_document(post_id, record)

