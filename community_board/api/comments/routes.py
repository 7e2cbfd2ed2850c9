# community_board/api/comments/routes.py
from flask import Blueprint, jsonify

from community_board.api.comments.schemas import CommentResponseSchema
from community_board.api.context import comment_service, current_uid, request_session, json_body

comments_bp = Blueprint('comments_bp', __name__)


def _dump(comment, uid):
    payload = CommentResponseSchema().dump(comment)
    payload['isLiked'] = comment.is_liked_by(uid)
    return payload


@comments_bp.route('/posts/<string:post_id>/comments', methods=['GET'])
def get_comments(post_id: str):
    """특정 게시글의 댓글 목록을 작성 순서대로 조회합니다."""
    comments = comment_service().list(post_id)
    uid = current_uid()
    return jsonify({"comments": [_dump(c, uid) for c in comments]}), 200


@comments_bp.route('/posts/<string:post_id>/comments', methods=['POST'])
def create_comment(post_id: str):
    data = json_body()
    service = comment_service()
    comment_id = service.create(post_id, data.get('content'))
    comment = service.get(comment_id)
    if comment is None:
        return jsonify({"id": comment_id}), 201
    return jsonify(_dump(comment, current_uid())), 201


@comments_bp.route('/comments/<string:comment_id>', methods=['DELETE'])
def delete_comment(comment_id: str):
    request_session().require_user()
    comment_service().delete(comment_id)
    return jsonify({"message": "댓글이 삭제되었습니다."}), 200


@comments_bp.route('/comments/<string:comment_id>/like', methods=['POST'])
def toggle_comment_like(comment_id: str):
    """댓글 좋아요를 토글하고 갱신된 댓글을 반환합니다."""
    service = comment_service()
    service.toggle_like(comment_id)
    comment = service.get(comment_id)
    if comment is None:
        return jsonify({"error_code": "RESOURCE_NOT_FOUND", "message": "댓글을 찾을 수 없습니다."}), 404
    return jsonify(_dump(comment, current_uid())), 200
