# community_board/models/user.py
from dataclasses import dataclass, field
from typing import Optional

from community_board.models.post import ANONYMOUS_AUTHOR

@dataclass
class Principal:
    """
    로그인된 사용자(Firebase Auth 계정)의 신원 정보.
    토큰은 세션 복원/갱신에만 사용되며 repr에 노출하지 않습니다.
    """
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    id_token: Optional[str] = field(default=None, repr=False)
    refresh_token: Optional[str] = field(default=None, repr=False)

    @property
    def name(self) -> str:
        """게시글/댓글 작성자로 표시될 이름 (닉네임 > 이메일 > 익명)"""
        return self.display_name or self.email or ANONYMOUS_AUTHOR
