# community_board/models/test_models.py
from datetime import datetime, timezone

from community_board.models.comment import Comment
from community_board.models.post import Post
from community_board.models.user import Principal


def test_post_from_document_with_pending_timestamps():
    post = Post.from_document('p1', {'title': 't', 'content': 'c', 'author': 'nick', 'authorId': 'u1'})

    assert post.id == 'p1'
    assert post.likes == 0
    assert post.liked_by == []
    assert post.created_at.tzinfo == timezone.utc


def test_comment_from_document_maps_camel_case_fields():
    created = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    comment = Comment.from_document('c1', {
        'postId': 'p1', 'content': 'hi', 'author': 'nick', 'authorId': 'u1',
        'createdAt': created, 'updatedAt': created, 'likes': 1, 'likedBy': ['u2'],
    })

    assert comment.post_id == 'p1'
    assert comment.created_at == created
    assert comment.is_liked_by('u2')
    assert not comment.is_liked_by('u1')
    assert not comment.is_liked_by(None)


def test_principal_name_fallbacks():
    assert Principal(uid='u', email='a@b.com', display_name='nick').name == 'nick'
    assert Principal(uid='u', email='a@b.com').name == 'a@b.com'
    assert Principal(uid='u').name == '익명'
