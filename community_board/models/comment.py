# community_board/models/comment.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Dict, Any

from community_board.models.post import ANONYMOUS_AUTHOR, ANONYMOUS_AUTHOR_ID
from community_board.utils.datetime_utils import DateTimeUtils

@dataclass
class Comment:
    """
    Firestore 'comments' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    post_id로 상위 게시글을 가리킵니다. (게시글 삭제 시 댓글은 남습니다)
    """
    id: str
    post_id: str
    content: str
    author: str
    author_id: str
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)
    likes: int = 0
    liked_by: List[str] = field(default_factory=list)

    def is_liked_by(self, uid: Optional[str]) -> bool:
        return bool(uid) and uid in self.liked_by

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "Comment":
        now = DateTimeUtils.now()
        return cls(
            id=doc_id,
            post_id=data.get('postId', ''),
            content=data.get('content', ''),
            author=data.get('author') or ANONYMOUS_AUTHOR,
            author_id=data.get('authorId') or ANONYMOUS_AUTHOR_ID,
            created_at=DateTimeUtils.coerce(data.get('createdAt'), now),
            updated_at=DateTimeUtils.coerce(data.get('updatedAt'), now),
            likes=int(data.get('likes') or 0),
            liked_by=list(data.get('likedBy') or []),
        )
