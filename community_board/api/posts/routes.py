# community_board/api/posts/routes.py
from flask import Blueprint, jsonify

from community_board.api.context import post_service, current_uid, request_session, json_body
from community_board.api.posts.schemas import PostResponseSchema

posts_bp = Blueprint('posts_bp', __name__)


def _dump(post, uid):
    payload = PostResponseSchema().dump(post)
    payload['isLiked'] = post.is_liked_by(uid)
    return payload


def _not_found():
    return jsonify({"error_code": "RESOURCE_NOT_FOUND", "message": "게시글을 찾을 수 없습니다."}), 404


@posts_bp.route('', methods=['GET'])
def get_posts():
    """전체 게시글 목록을 최신순으로 조회합니다."""
    posts = post_service().list()
    uid = current_uid()
    return jsonify({"posts": [_dump(p, uid) for p in posts]}), 200


@posts_bp.route('', methods=['POST'])
def create_post():
    """
    새 게시글을 작성합니다.
    - 로그인하지 않았으면 익명으로 기록됩니다.
    - 성공 시 저장된 게시글을 201 Created와 함께 반환합니다.
    """
    data = json_body()
    service = post_service()
    post_id = service.create(data.get('title'), data.get('content'))
    post = service.get(post_id)
    if post is None:
        return jsonify({"id": post_id}), 201
    return jsonify(_dump(post, current_uid())), 201


@posts_bp.route('/<string:post_id>', methods=['GET'])
def get_post(post_id: str):
    post = post_service().get(post_id)
    if post is None:
        return _not_found()
    return jsonify(_dump(post, current_uid())), 200


@posts_bp.route('/<string:post_id>', methods=['DELETE'])
def delete_post(post_id: str):
    request_session().require_user()
    post_service().delete(post_id)
    return jsonify({"message": "게시글이 삭제되었습니다."}), 200


@posts_bp.route('/<string:post_id>/like', methods=['POST'])
def toggle_post_like(post_id: str):
    """좋아요를 토글한 뒤 게시글을 다시 조회하여 반환합니다."""
    service = post_service()
    service.toggle_like(post_id)
    post = service.get(post_id)
    if post is None:
        return _not_found()
    return jsonify(_dump(post, current_uid())), 200
