# 파일 경로: community_board/services/firebase_auth_service.py

import logging
from typing import Callable, Dict, List, Optional

import requests
from firebase_admin import auth as firebase_auth
from firebase_admin import exceptions as firebase_exceptions

from community_board.core.errors import AuthError
from community_board.models.user import Principal

StateListener = Callable[[Optional[Principal]], None]

# Identity Toolkit 오류 코드 -> 사용자에게 보여줄 메시지
_ERROR_MESSAGES = {
    "EMAIL_EXISTS": "이미 사용 중인 이메일입니다.",
    "EMAIL_NOT_FOUND": "이메일 또는 비밀번호가 올바르지 않습니다.",
    "INVALID_PASSWORD": "이메일 또는 비밀번호가 올바르지 않습니다.",
    "INVALID_LOGIN_CREDENTIALS": "이메일 또는 비밀번호가 올바르지 않습니다.",
    "INVALID_EMAIL": "유효한 이메일 형식을 입력해주세요.",
    "WEAK_PASSWORD": "비밀번호는 최소 6자 이상이어야 합니다.",
    "USER_DISABLED": "비활성화된 계정입니다.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "요청이 너무 많습니다. 잠시 후 다시 시도해주세요.",
    "TOKEN_EXPIRED": "로그인이 만료되었습니다. 다시 로그인해주세요.",
    "INVALID_REFRESH_TOKEN": "로그인이 만료되었습니다. 다시 로그인해주세요.",
    "INVALID_ID_TOKEN": "로그인이 만료되었습니다. 다시 로그인해주세요.",
}


class FirebaseAuthProvider:
    """
    Firebase Authentication과의 실제 통신을 담당하는 인증 제공자입니다.
    - 이메일/비밀번호 로그인, 회원가입, 닉네임 설정은 Identity Toolkit REST API를 사용합니다.
    - ID 토큰 검증과 토큰 무효화는 firebase_admin.auth를 사용합니다.
    - 인스턴스마다 현재 로그인한 사용자 한 명을 보관합니다.
    """
    _identity_url = "https://identitytoolkit.googleapis.com/v1/accounts:{method}"
    _token_url = "https://securetoken.googleapis.com/v1/token"

    def __init__(self, api_key: str, http: Optional[requests.Session] = None,
                 timeout: float = 10, revoke_on_sign_out: bool = False):
        self.api_key = api_key
        self.http = http or requests.Session()
        self.timeout = timeout
        self.revoke_on_sign_out = revoke_on_sign_out
        self._principal: Optional[Principal] = None
        self._listeners: List[StateListener] = []

    # --- 상태 변경 알림 ---
    def on_state_change(self, listener: StateListener) -> Callable[[], None]:
        """
        인증 상태 변경 리스너를 등록하고 해제 함수를 반환합니다.
        등록 즉시 현재 상태로 한 번 호출됩니다. (Firebase onAuthStateChanged와 동일)
        """
        self._listeners.append(listener)
        listener(self._principal)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _set_principal(self, principal: Optional[Principal]) -> None:
        self._principal = principal
        for listener in list(self._listeners):
            listener(principal)

    def current_principal(self) -> Optional[Principal]:
        return self._principal

    # --- Identity Toolkit REST 호출 ---
    def _post(self, url: str, **kwargs) -> Dict:
        try:
            response = self.http.post(url, params={"key": self.api_key}, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logging.error(f"Firebase Auth 요청 실패: {e}", exc_info=True)
            raise AuthError("인증 서버에 연결할 수 없습니다.", code="NETWORK_ERROR") from e

        if response.status_code >= 400:
            raise self._to_auth_error(response)
        return response.json()

    @staticmethod
    def _to_auth_error(response: requests.Response) -> AuthError:
        try:
            raw = response.json().get("error", {}).get("message", "")
        except ValueError:
            raw = response.text
        # 'WEAK_PASSWORD : Password should be at least 6 characters' 형태도 있음
        code = raw.split(" ")[0].strip() if raw else "UNKNOWN"
        message = _ERROR_MESSAGES.get(code, raw or "인증에 실패했습니다.")
        logging.warning(f"Firebase Auth 거부 (status: {response.status_code}, code: {code})")
        return AuthError(message, code=code)

    def _call(self, method: str, payload: Dict) -> Dict:
        return self._post(self._identity_url.format(method=method), json=payload)

    @staticmethod
    def _principal_from(data: Dict, fallback: Optional[Principal] = None) -> Principal:
        return Principal(
            uid=data.get("localId") or data.get("user_id") or (fallback.uid if fallback else ""),
            email=data.get("email") or (fallback.email if fallback else None),
            display_name=data.get("displayName") or (fallback.display_name if fallback else None),
            id_token=data.get("idToken") or data.get("id_token") or (fallback.id_token if fallback else None),
            refresh_token=data.get("refreshToken") or data.get("refresh_token") or (fallback.refresh_token if fallback else None),
        )

    def sign_in_with_credentials(self, email: str, password: str) -> Principal:
        data = self._call("signInWithPassword", {"email": email, "password": password, "returnSecureToken": True})
        principal = self._principal_from(data)
        self._set_principal(principal)
        logging.info(f"로그인 성공 (uid: {principal.uid})")
        return principal

    def create_account(self, email: str, password: str) -> Principal:
        """계정을 만들고 새 계정으로 로그인된 상태가 됩니다. (상태 알림은 닉네임 설정 후 호출자가 처리)"""
        data = self._call("signUp", {"email": email, "password": password, "returnSecureToken": True})
        principal = self._principal_from(data)
        self._principal = principal
        logging.info(f"회원가입 성공 (uid: {principal.uid})")
        return principal

    def set_display_name(self, principal: Principal, name: str) -> Principal:
        data = self._call("update", {"idToken": principal.id_token, "displayName": name, "returnSecureToken": True})
        updated = self._principal_from(data, fallback=principal)
        updated.display_name = name
        self._set_principal(updated)
        return updated

    def refresh(self) -> Optional[Principal]:
        """Refresh Token으로 ID 토큰을 재발급합니다. 사용자가 바뀐 경우에만 상태 변경을 알립니다."""
        current = self._principal
        if current is None or not current.refresh_token:
            return current
        data = self._post(self._token_url, data={"grant_type": "refresh_token", "refresh_token": current.refresh_token})
        refreshed = self._principal_from(data, fallback=current)
        if refreshed.uid != current.uid:
            self._set_principal(refreshed)
        else:
            self._principal = refreshed
        return refreshed

    # --- firebase_admin 기반 기능 ---
    def verify_id_token(self, id_token: str) -> Principal:
        """클라이언트가 보낸 ID 토큰을 검증하고 해당 사용자를 현재 세션으로 설정합니다."""
        try:
            # 로그아웃으로 무효화된 토큰도 거부합니다.
            claims = firebase_auth.verify_id_token(id_token, check_revoked=True)
        except firebase_auth.RevokedIdTokenError as e:
            logging.warning(f"무효화된 ID 토큰 사용: {e}")
            raise AuthError("로그아웃된 세션입니다. 다시 로그인해주세요.", code="TOKEN_REVOKED") from e
        except (ValueError, firebase_exceptions.FirebaseError) as e:
            logging.warning(f"ID 토큰 검증 실패: {e}")
            raise AuthError("로그인이 만료되었습니다. 다시 로그인해주세요.", code="INVALID_ID_TOKEN") from e

        principal = Principal(
            uid=claims["uid"],
            email=claims.get("email"),
            display_name=claims.get("name"),
            id_token=id_token,
        )
        self._set_principal(principal)
        return principal

    def sign_out(self) -> None:
        principal = self._principal
        if principal is not None and self.revoke_on_sign_out:
            try:
                firebase_auth.revoke_refresh_tokens(principal.uid)
            except firebase_exceptions.FirebaseError as e:
                logging.error(f"Refresh 토큰 무효화 실패 (uid: {principal.uid}): {e}", exc_info=True)
                raise AuthError("로그아웃 처리 중 오류가 발생했습니다.", code="SIGN_OUT_FAILED") from e
        self._set_principal(None)
        if principal is not None:
            logging.info(f"로그아웃 완료 (uid: {principal.uid})")
