# community_board/api/context.py
"""요청 단위 세션과 서비스 생성 헬퍼."""
from flask import current_app, g, request
from marshmallow import ValidationError

from community_board.api.auth.services import SessionManager
from community_board.api.comments.services import CommentService
from community_board.api.posts.services import PostService


def request_session() -> SessionManager:
    """
    요청마다 새 SessionManager를 만들고, Authorization: Bearer <ID 토큰>이 있으면 세션을 복원합니다.
    같은 요청 안에서는 같은 세션을 재사용합니다.
    """
    if 'session' not in g:
        provider = current_app.services['auth_provider_factory']()
        session = SessionManager(provider)
        header = request.headers.get('Authorization', '')
        if header.startswith('Bearer '):
            session.restore(header[len('Bearer '):].strip())
        g.session = session
    return g.session


def json_body() -> dict:
    """요청 본문 JSON을 dict로 반환합니다. 본문이 없으면 빈 dict, 객체가 아니면 ValidationError입니다."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError({"_schema": ["요청 본문은 JSON 객체여야 합니다."]})
    return data


def post_service() -> PostService:
    return PostService(current_app.services['store'], request_session(),
                       collection=current_app.config['POSTS_COLLECTION'])


def comment_service() -> CommentService:
    return CommentService(current_app.services['store'], request_session(),
                          collection=current_app.config['COMMENTS_COLLECTION'])


def current_uid():
    user = request_session().current_user()
    return user.uid if user else None
