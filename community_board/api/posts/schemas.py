# community_board/api/posts/schemas.py
from marshmallow import Schema, fields, validate

from community_board.api.fields import TrimmedStr

_NOT_BLANK = validate.Length(min=1, error="제목과 내용을 모두 입력해주세요.")
_REQUIRED = {"required": "제목과 내용을 모두 입력해주세요."}


class PostCreateSchema(Schema):
    """게시글 작성 요청. 제목/내용은 공백을 제거한 뒤 비어 있으면 안 됩니다."""
    title = TrimmedStr(required=True, validate=_NOT_BLANK, error_messages=_REQUIRED)
    content = TrimmedStr(required=True, validate=_NOT_BLANK, error_messages=_REQUIRED)


class PostResponseSchema(Schema):
    """게시글 정보 응답 형식. 필드 이름은 Firestore 문서와 같은 camelCase를 사용합니다."""
    id = fields.Str(required=True)
    title = fields.Str(required=True)
    content = fields.Str(required=True)
    author = fields.Str(required=True)
    author_id = fields.Str(data_key='authorId', required=True)
    created_at = fields.DateTime(data_key='createdAt', required=True)
    updated_at = fields.DateTime(data_key='updatedAt', required=True)
    likes = fields.Int(required=True)
    liked_by = fields.List(fields.Str(), data_key='likedBy', required=True)

    # 라우트에서 현재 사용자 기준으로 채워주는 응답 전용 필드
    is_liked = fields.Bool(data_key='isLiked', dump_only=True, dump_default=False)
