# community_board/services/firestore_service.py
"""
Firestore 문서 저장소 어댑터.

컬렉션 이름을 인자로 받는 범용 CRUD/쿼리 파사드입니다.
게시글/댓글 서비스는 firebase_admin을 직접 다루지 않고 이 어댑터만 사용합니다.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions
from google.cloud.firestore_v1.base_query import FieldFilter

from community_board.core.errors import StoreError
from community_board.utils.datetime_utils import DateTimeUtils

ASCENDING = 'asc'
DESCENDING = 'desc'

# --- 원자적 변경 연산 (update의 값으로 사용) ---

@dataclass(frozen=True)
class Increment:
    """숫자 필드를 원자적으로 증감합니다."""
    amount: int

@dataclass(frozen=True)
class ArrayUnion:
    """배열 필드에 값이 없을 때만 추가합니다. (중복 없음)"""
    values: Sequence[Any]

@dataclass(frozen=True)
class ArrayRemove:
    """배열 필드에서 해당 값을 모두 제거합니다."""
    values: Sequence[Any]


def _to_firestore_value(value: Any) -> Any:
    if isinstance(value, Increment):
        return firestore.Increment(value.amount)
    if isinstance(value, ArrayUnion):
        return firestore.ArrayUnion(list(value.values))
    if isinstance(value, ArrayRemove):
        return firestore.ArrayRemove(list(value.values))
    return value


def _to_firestore_direction(direction: str) -> str:
    if direction == ASCENDING:
        return firestore.Query.ASCENDING
    if direction == DESCENDING:
        return firestore.Query.DESCENDING
    raise ValueError(f"지원하지 않는 정렬 방향입니다: {direction}")


class FirestoreStore:
    """
    firebase_admin Firestore 클라이언트 위에서 동작하는 문서 저장소.
    - insert 시 createdAt/updatedAt은 서버 타임스탬프로 채워집니다.
    - 모든 Google API 오류는 StoreError로 변환되어 호출자에게 전달됩니다.
    """
    def __init__(self, db=None):
        self.db = db or firestore.client()

    def _doc_ref(self, collection: str, doc_id: str):
        return self.db.collection(collection).document(doc_id)

    @staticmethod
    def _to_record(snapshot) -> Dict[str, Any]:
        record = DateTimeUtils.from_firestore(snapshot.to_dict() or {})
        record['id'] = snapshot.id
        return record

    def insert(self, collection: str, record: Dict[str, Any]) -> str:
        """새 문서를 생성하고 저장소가 부여한 문서 ID를 반환합니다."""
        data = {k: _to_firestore_value(v) for k, v in record.items() if k != 'id'}
        data['createdAt'] = firestore.SERVER_TIMESTAMP
        data['updatedAt'] = firestore.SERVER_TIMESTAMP
        try:
            doc_ref = self.db.collection(collection).document()
            doc_ref.set(data)
            logging.info(f"Firestore 저장 성공 (Collection: {collection}, Doc ID: {doc_ref.id})")
            return doc_ref.id
        except google_exceptions.GoogleAPIError as e:
            logging.error(f"Firestore 저장 실패 (Collection: {collection}): {e}", exc_info=True)
            raise StoreError(f"문서를 저장하지 못했습니다: {e}", collection=collection) from e

    def get_one(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            snapshot = self._doc_ref(collection, doc_id).get()
        except google_exceptions.GoogleAPIError as e:
            logging.error(f"Firestore 조회 실패 ({collection}/{doc_id}): {e}", exc_info=True)
            raise StoreError(f"문서를 조회하지 못했습니다: {e}", collection, doc_id) from e
        if not snapshot.exists:
            return None
        return self._to_record(snapshot)

    def list_ordered(self, collection: str, order_field: str, direction: str = ASCENDING,
                     filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        동등 조건(filters)과 단일 필드 정렬로 문서를 조회합니다.
        페이지네이션 없이 조건에 맞는 문서 전체를 반환합니다.
        """
        query = self.db.collection(collection)
        for field_name, value in (filters or {}).items():
            query = query.where(filter=FieldFilter(field_name, '==', value))
        query = query.order_by(order_field, direction=_to_firestore_direction(direction))
        try:
            return [self._to_record(doc) for doc in query.stream()]
        except google_exceptions.GoogleAPIError as e:
            logging.error(f"Firestore 목록 조회 실패 (Collection: {collection}, filters: {filters}): {e}", exc_info=True)
            raise StoreError(f"목록을 조회하지 못했습니다: {e}", collection=collection) from e

    def update(self, collection: str, doc_id: str, partial: Dict[str, Any]) -> None:
        """지정한 필드만 병합합니다. Increment/ArrayUnion/ArrayRemove 값은 원자적으로 적용됩니다."""
        data = {k: _to_firestore_value(v) for k, v in partial.items()}
        try:
            self._doc_ref(collection, doc_id).update(data)
        except google_exceptions.NotFound as e:
            logging.error(f"Firestore 수정 대상 없음 ({collection}/{doc_id}): {e}", exc_info=True)
            raise StoreError("수정할 문서를 찾을 수 없습니다.", collection, doc_id) from e
        except google_exceptions.GoogleAPIError as e:
            logging.error(f"Firestore 수정 실패 ({collection}/{doc_id}): {e}", exc_info=True)
            raise StoreError(f"문서를 수정하지 못했습니다: {e}", collection, doc_id) from e

    def update_in_transaction(self, collection: str, doc_id: str,
                              mutator: Callable[[Dict[str, Any]], Dict[str, Any]]) -> Dict[str, Any]:
        """
        트랜잭션 안에서 문서를 읽고, mutator가 돌려준 변경 내용을 같은 트랜잭션으로 기록합니다.
        - 동시 수정으로 충돌하면 SDK가 트랜잭션 전체를 재시도합니다.
        - 적용한 변경 내용(partial)을 반환합니다.
        """
        doc_ref = self._doc_ref(collection, doc_id)
        transaction = self.db.transaction()

        @firestore.transactional
        def _update_in_transaction(transaction, doc_ref):
            snapshot = doc_ref.get(transaction=transaction)
            if not snapshot.exists:
                raise StoreError("문서를 찾을 수 없습니다.", collection, doc_id)
            partial = mutator(self._to_record(snapshot))
            transaction.update(doc_ref, {k: _to_firestore_value(v) for k, v in partial.items()})
            return partial

        try:
            return _update_in_transaction(transaction, doc_ref)
        except google_exceptions.GoogleAPIError as e:
            logging.error(f"Firestore 트랜잭션 실패 ({collection}/{doc_id}): {e}", exc_info=True)
            raise StoreError(f"문서를 수정하지 못했습니다: {e}", collection, doc_id) from e

    def delete(self, collection: str, doc_id: str) -> None:
        try:
            self._doc_ref(collection, doc_id).delete()
            logging.info(f"Firestore 삭제 성공 ({collection}/{doc_id})")
        except google_exceptions.GoogleAPIError as e:
            logging.error(f"Firestore 삭제 실패 ({collection}/{doc_id}): {e}", exc_info=True)
            raise StoreError(f"문서를 삭제하지 못했습니다: {e}", collection, doc_id) from e
