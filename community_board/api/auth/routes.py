# community_board/api/auth/routes.py

from flask import Blueprint, jsonify

from community_board.api.auth.schemas import PrincipalResponseSchema, SessionResponseSchema
from community_board.api.context import request_session, json_body

auth_bp = Blueprint('auth_bp', __name__)

@auth_bp.route('/signup', methods=['POST'])
def sign_up():
    """이메일 회원가입. 성공 시 새 계정으로 로그인된 토큰을 201과 함께 반환합니다."""
    data = json_body()
    principal = request_session().sign_up(
        data.get('email'), data.get('password'), data.get('display_name'),
        password_confirm=data.get('password_confirm')
    )
    return jsonify(PrincipalResponseSchema().dump(principal)), 201


@auth_bp.route('/signin', methods=['POST'])
def sign_in():
    """이메일/비밀번호 로그인. 실패 시 인증 제공자의 메시지를 그대로 전달합니다 (401)."""
    data = json_body()
    principal = request_session().sign_in(data.get('email'), data.get('password'))
    return jsonify(PrincipalResponseSchema().dump(principal)), 200


@auth_bp.route('/signout', methods=['POST'])
def sign_out():
    session = request_session()
    session.require_user()
    session.sign_out()
    return jsonify({"message": "로그아웃 되었습니다."}), 200


@auth_bp.route('/me', methods=['GET'])
def me():
    """Bearer 토큰에 해당하는 현재 사용자 정보를 반환합니다."""
    principal = request_session().require_user()
    return jsonify(SessionResponseSchema().dump(principal)), 200
