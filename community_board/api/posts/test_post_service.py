# community_board/api/posts/test_post_service.py
"""
게시글 서비스 테스트

사용법: python -m pytest community_board/api/posts/test_post_service.py -v
"""

import pytest

from community_board.api.auth.services import SessionManager
from community_board.api.posts.services import PostService
from community_board.conftest import FakeAuthProvider, make_principal
from community_board.core.errors import AuthError, StoreError, ValidationError


def _session_for(uid):
    provider = FakeAuthProvider({f"{uid}@example.com": ("secret1", make_principal(uid))})
    session = SessionManager(provider)
    session.sign_in(f"{uid}@example.com", "secret1")
    return session


def _seed_post(store, post_id='p1', liked_by=()):
    store.collections.setdefault('posts', {})[post_id] = {
        'title': '제목', 'content': '내용', 'author': '작성자', 'authorId': 'owner',
        'likes': len(liked_by), 'likedBy': list(liked_by),
    }


def test_create_stamps_author_and_initial_likes(post_service, store):
    post_id = post_service.create("  첫 글  ", "안녕하세요")

    post = post_service.get(post_id)
    assert post.title == "첫 글"
    assert post.content == "안녕하세요"
    assert post.author == "앨리스"
    assert post.author_id == "alice"
    assert post.likes == 0
    assert post.liked_by == []


@pytest.mark.parametrize("title, content", [("", "x"), ("x", ""), ("  ", "  ")])
def test_create_rejects_blank_fields_without_store_calls(post_service, store, title, content):
    with pytest.raises(ValidationError):
        post_service.create(title, content)
    assert store.calls == []


def test_create_without_user_falls_back_to_anonymous(store, session):
    service = PostService(store, session)
    post = service.get(service.create("제목", "내용"))
    assert post.author == "익명"
    assert post.author_id == "anonymous"


def test_list_orders_newest_first(post_service):
    first = post_service.create("t1", "c")
    second = post_service.create("t2", "c")
    third = post_service.create("t3", "c")

    assert [p.id for p in post_service.list()] == [third, second, first]


def test_list_reflects_changes_between_calls(post_service):
    assert post_service.list() == []
    post_service.create("t", "c")
    assert len(post_service.list()) == 1


def test_get_missing_returns_none(post_service):
    assert post_service.get("nope") is None


def test_delete_removes_post(post_service):
    post_id = post_service.create("t", "c")
    post_service.delete(post_id)
    assert post_service.get(post_id) is None


def test_like_then_unlike_scenario(store):
    _seed_post(store, liked_by=["a", "b", "c"])
    service = PostService(store, _session_for("d"))

    service.toggle_like('p1')
    post = service.get('p1')
    assert post.likes == 4
    assert post.liked_by == ["a", "b", "c", "d"]

    service.toggle_like('p1')
    post = service.get('p1')
    assert post.likes == 3
    assert post.liked_by == ["a", "b", "c"]


def test_toggle_twice_restores_original_state(post_service):
    post_id = post_service.create("t", "c")
    before = post_service.get(post_id)

    post_service.toggle_like(post_id)
    assert post_service.get(post_id).is_liked_by("alice")
    post_service.toggle_like(post_id)

    after = post_service.get(post_id)
    assert after.likes == before.likes
    assert after.liked_by == before.liked_by


def test_counter_matches_likers_after_mixed_toggles(store):
    _seed_post(store)
    services = {uid: PostService(store, _session_for(uid)) for uid in ("a", "b", "c")}

    for uid in ["a", "b", "a", "c", "b", "b", "c", "a"]:
        services[uid].toggle_like('p1')
        post = services[uid].get('p1')
        assert post.likes == len(post.liked_by)
        assert len(set(post.liked_by)) == len(post.liked_by)

    assert sorted(services["a"].get('p1').liked_by) == ["a", "b"]


def test_toggle_requires_signed_in_user(store, session):
    _seed_post(store)
    service = PostService(store, session)

    with pytest.raises(AuthError):
        service.toggle_like('p1')
    assert store.calls == []


def test_toggle_missing_post_raises_store_error(post_service):
    with pytest.raises(StoreError):
        post_service.toggle_like("missing")
