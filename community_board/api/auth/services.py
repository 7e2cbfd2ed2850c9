# community_board/api/auth/services.py
import logging
from typing import Callable, List, Optional

from community_board.api.auth.schemas import SignInSchema, SignUpSchema, RestoreSessionSchema
from community_board.core.errors import AuthError
from community_board.models.user import Principal

SessionListener = Callable[[Optional[Principal]], None]


class SessionManager:
    """
    현재 로그인한 사용자를 추적하는 세션 관리자.
    - 전역 상태 대신 서비스 생성자에 명시적으로 주입됩니다.
    - 인증 제공자의 상태 변경 이벤트를 구독하여 current_user를 갱신하고,
      등록된 리스너들에게 다시 전달합니다.
    - 첫 상태 이벤트를 받기 전까지 is_loading이 True입니다.
    """
    def __init__(self, provider):
        self.provider = provider
        self._user: Optional[Principal] = None
        self._listeners: List[SessionListener] = []
        self.is_loading = True
        self._detach = provider.on_state_change(self._handle_state_change)

    def _handle_state_change(self, principal: Optional[Principal]) -> None:
        self._user = principal
        self.is_loading = False
        for listener in list(self._listeners):
            listener(principal)

    def current_user(self) -> Optional[Principal]:
        return self._user

    def require_user(self) -> Principal:
        """로그인한 사용자를 반환합니다. 없으면 AuthError를 발생시킵니다."""
        if self._user is None:
            raise AuthError("로그인이 필요합니다.", code="NOT_SIGNED_IN")
        return self._user

    def subscribe(self, callback: SessionListener) -> Callable[[], None]:
        """세션 변경 리스너를 등록하고 해제 함수를 반환합니다."""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)
        return unsubscribe

    def sign_in(self, email: str, password: str) -> Principal:
        payload = {"email": email, "password": password}
        data = SignInSchema().load({k: v for k, v in payload.items() if v is not None})
        return self.provider.sign_in_with_credentials(data["email"], data["password"])

    def sign_up(self, email: str, password: str, display_name: str,
                password_confirm: Optional[str] = None) -> Principal:
        """새 계정을 만들고 닉네임을 설정합니다. 검증 실패 시 네트워크 호출 없이 ValidationError가 발생합니다."""
        payload = {"email": email, "password": password, "display_name": display_name,
                   "password_confirm": password_confirm}
        data = SignUpSchema().load({k: v for k, v in payload.items() if v is not None})

        principal = self.provider.create_account(data["email"], data["password"])
        principal = self.provider.set_display_name(principal, data["display_name"])
        logging.info(f"신규 사용자 등록 완료 (uid: {principal.uid}, nickname: {principal.display_name})")
        return principal

    def sign_out(self) -> None:
        self.provider.sign_out()

    def restore(self, id_token: str) -> Principal:
        """이미 발급된 ID 토큰으로 세션을 복원합니다. (HTTP 요청마다 사용)"""
        data = RestoreSessionSchema().load({"id_token": id_token})
        return self.provider.verify_id_token(data["id_token"])

    def close(self) -> None:
        """인증 제공자 구독을 해제합니다."""
        self._detach()
