# community_board/models/post.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Dict, Any

from community_board.utils.datetime_utils import DateTimeUtils

ANONYMOUS_AUTHOR = "익명"
ANONYMOUS_AUTHOR_ID = "anonymous"

@dataclass
class Post:
    """
    Firestore 'posts' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    문서 필드는 camelCase(authorId, likedBy ...)로 저장됩니다.
    - author: 작성 시점의 표시 이름 스냅샷. 이후 프로필 변경과 동기화하지 않습니다.
    - likes == len(liked_by) 를 항상 유지해야 합니다.
    """
    id: str
    title: str
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
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "Post":
        now = DateTimeUtils.now()
        return cls(
            id=doc_id,
            title=data.get('title', ''),
            content=data.get('content', ''),
            author=data.get('author') or ANONYMOUS_AUTHOR,
            author_id=data.get('authorId') or ANONYMOUS_AUTHOR_ID,
            # 서버 타임스탬프가 아직 반영되지 않은 문서는 현재 시각으로 대체
            created_at=DateTimeUtils.coerce(data.get('createdAt'), now),
            updated_at=DateTimeUtils.coerce(data.get('updatedAt'), now),
            likes=int(data.get('likes') or 0),
            liked_by=list(data.get('likedBy') or []),
        )
