# community_board/conftest.py
"""
테스트 공용 픽스처

- MemoryStore: FirestoreStore와 같은 인터페이스를 가진 메모리 저장소
- FakeAuthProvider: FirebaseAuthProvider와 같은 인터페이스를 가진 가짜 인증 제공자
"""
import copy
import itertools
from datetime import datetime, timedelta, timezone

import pytest

from community_board.api.auth.services import SessionManager
from community_board.api.comments.services import CommentService
from community_board.api.posts.services import PostService
from community_board.core.errors import AuthError, StoreError
from community_board.models.user import Principal
from community_board.services.firestore_service import (
    ASCENDING, Increment, ArrayUnion, ArrayRemove
)


class MemoryStore:
    """문서를 dict로 보관하는 저장소. 호출 횟수를 기록합니다."""

    def __init__(self):
        self.collections = {}
        self.calls = []
        self._ids = itertools.count(1)
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _tick(self):
        self._clock += timedelta(seconds=1)
        return self._clock

    def _docs(self, collection):
        return self.collections.setdefault(collection, {})

    def insert(self, collection, record):
        self.calls.append(('insert', collection))
        doc_id = f"{collection}-{next(self._ids)}"
        data = copy.deepcopy(record)
        data['createdAt'] = data['updatedAt'] = self._tick()
        self._docs(collection)[doc_id] = data
        return doc_id

    def get_one(self, collection, doc_id):
        self.calls.append(('get_one', collection))
        data = self._docs(collection).get(doc_id)
        if data is None:
            return None
        return dict(copy.deepcopy(data), id=doc_id)

    def list_ordered(self, collection, order_field, direction=ASCENDING, filters=None):
        self.calls.append(('list_ordered', collection))
        records = [
            dict(copy.deepcopy(data), id=doc_id)
            for doc_id, data in self._docs(collection).items()
            if all(data.get(k) == v for k, v in (filters or {}).items())
        ]
        return sorted(records, key=lambda r: r[order_field], reverse=direction != ASCENDING)

    def _apply(self, data, partial):
        for key, value in partial.items():
            if isinstance(value, Increment):
                data[key] = data.get(key, 0) + value.amount
            elif isinstance(value, ArrayUnion):
                current = data.setdefault(key, [])
                current.extend(v for v in value.values if v not in current)
            elif isinstance(value, ArrayRemove):
                data[key] = [v for v in data.get(key, []) if v not in value.values]
            else:
                data[key] = value

    def update(self, collection, doc_id, partial):
        self.calls.append(('update', collection))
        data = self._docs(collection).get(doc_id)
        if data is None:
            raise StoreError("수정할 문서를 찾을 수 없습니다.", collection, doc_id)
        self._apply(data, partial)

    def update_in_transaction(self, collection, doc_id, mutator):
        self.calls.append(('update_in_transaction', collection))
        data = self._docs(collection).get(doc_id)
        if data is None:
            raise StoreError("문서를 찾을 수 없습니다.", collection, doc_id)
        partial = mutator(dict(copy.deepcopy(data), id=doc_id))
        self._apply(data, partial)
        return partial

    def delete(self, collection, doc_id):
        self.calls.append(('delete', collection))
        self._docs(collection).pop(doc_id, None)


class FakeAuthProvider:
    """이메일/비밀번호 계정을 메모리에 보관하는 인증 제공자."""

    def __init__(self, accounts=None, revoked=None):
        # email -> (password, Principal)
        self.accounts = accounts if accounts is not None else {}
        # 로그아웃으로 무효화된 ID 토큰 (요청마다 만든 제공자끼리 공유)
        self.revoked = revoked if revoked is not None else set()
        self.calls = []
        self._principal = None
        self._listeners = []

    def on_state_change(self, listener):
        self._listeners.append(listener)
        listener(self._principal)
        return lambda: self._listeners.remove(listener)

    def _set(self, principal):
        self._principal = principal
        for listener in list(self._listeners):
            listener(principal)

    def current_principal(self):
        return self._principal

    def sign_in_with_credentials(self, email, password):
        self.calls.append('sign_in')
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise AuthError("이메일 또는 비밀번호가 올바르지 않습니다.", code="INVALID_LOGIN_CREDENTIALS")
        self._set(account[1])
        return account[1]

    def create_account(self, email, password):
        self.calls.append('create_account')
        if email in self.accounts:
            raise AuthError("이미 사용 중인 이메일입니다.", code="EMAIL_EXISTS")
        principal = Principal(uid=f"uid-{len(self.accounts) + 1}", email=email,
                              id_token=f"token-{email}")
        self.accounts[email] = (password, principal)
        self._principal = principal
        return principal

    def set_display_name(self, principal, name):
        self.calls.append('set_display_name')
        principal.display_name = name
        self._set(principal)
        return principal

    def verify_id_token(self, id_token):
        self.calls.append('verify_id_token')
        if id_token in self.revoked:
            raise AuthError("로그아웃된 세션입니다. 다시 로그인해주세요.", code="TOKEN_REVOKED")
        for _, principal in self.accounts.values():
            if principal.id_token == id_token:
                self._set(principal)
                return principal
        raise AuthError("로그인이 만료되었습니다. 다시 로그인해주세요.", code="INVALID_ID_TOKEN")

    def sign_out(self):
        self.calls.append('sign_out')
        if self._principal is not None:
            self.revoked.add(self._principal.id_token)
        self._set(None)


def make_principal(uid, name=None):
    return Principal(uid=uid, email=f"{uid}@example.com", display_name=name, id_token=f"token-{uid}")


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def accounts():
    return {
        "alice@example.com": ("password1", make_principal("alice", "앨리스")),
        "bob@example.com": ("password2", make_principal("bob", "밥")),
    }


@pytest.fixture
def provider(accounts):
    return FakeAuthProvider(accounts)


@pytest.fixture
def session(provider):
    return SessionManager(provider)


@pytest.fixture
def signed_in_session(session):
    session.sign_in("alice@example.com", "password1")
    return session


@pytest.fixture
def post_service(store, signed_in_session):
    return PostService(store, signed_in_session)


@pytest.fixture
def comment_service(store, signed_in_session):
    return CommentService(store, signed_in_session)
