# community_board/api/comments/schemas.py
from marshmallow import Schema, fields, validate

from community_board.api.fields import TrimmedStr


class CommentCreateSchema(Schema):
    """
    POST /api/posts/{post_id}/comments
    댓글 작성 요청. 공백만 있는 댓글은 허용하지 않습니다.
    """
    content = TrimmedStr(required=True, validate=validate.Length(min=1, error="댓글 내용을 입력해주세요."),
                         error_messages={"required": "댓글 내용을 입력해주세요."})


class CommentResponseSchema(Schema):
    """댓글 정보 응답을 위한 JSON 형식을 정의합니다."""
    id = fields.Str(required=True)
    post_id = fields.Str(data_key='postId', required=True)
    content = fields.Str(required=True)
    author = fields.Str(required=True)
    author_id = fields.Str(data_key='authorId', required=True)
    created_at = fields.DateTime(data_key='createdAt', required=True)
    updated_at = fields.DateTime(data_key='updatedAt', required=True)
    likes = fields.Int(required=True)
    liked_by = fields.List(fields.Str(), data_key='likedBy', required=True)

    is_liked = fields.Bool(data_key='isLiked', dump_only=True, dump_default=False)
