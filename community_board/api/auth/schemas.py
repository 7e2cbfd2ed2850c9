# community_board/api/auth/schemas.py
from marshmallow import Schema, fields, validate, validates_schema, ValidationError

from community_board.api.fields import TrimmedStr

# 이메일 형식: 공백과 @가 없는 문자열 + @ + 도메인.최상위도메인
EMAIL_PATTERN = r'^[^\s@]+@[^\s@]+\.[^\s@]+$'
MIN_PASSWORD_LENGTH = 6

_REQUIRED = {"required": "모든 필드를 입력해주세요."}


class SignInSchema(Schema):
    """로그인 요청: 이메일과 비밀번호가 모두 있어야 합니다."""
    email = TrimmedStr(required=True, error_messages=_REQUIRED,
                       validate=validate.Length(min=1, error="이메일과 비밀번호를 모두 입력해주세요."))
    password = fields.Str(required=True, error_messages=_REQUIRED,
                          validate=validate.Length(min=1, error="이메일과 비밀번호를 모두 입력해주세요."))

    @validates_schema
    def validate_password_not_blank(self, data, **kwargs):
        if not data['password'].strip():
            raise ValidationError("이메일과 비밀번호를 모두 입력해주세요.", field_name='password')


class SignUpSchema(Schema):
    """
    회원가입 요청의 유효성을 검사합니다.
    - 위반한 규칙이 여러 개면 필드별로 모두 보고합니다.
    - password_confirm은 선택 항목이며, 주어진 경우 password와 같아야 합니다.
    """
    email = TrimmedStr(required=True, error_messages=_REQUIRED,
                       validate=validate.Regexp(EMAIL_PATTERN, error="유효한 이메일 형식을 입력해주세요."))
    password = fields.Str(required=True, error_messages=_REQUIRED,
                          validate=validate.Length(min=MIN_PASSWORD_LENGTH, error="비밀번호는 최소 6자 이상이어야 합니다."))
    password_confirm = fields.Str(load_default=None)
    display_name = TrimmedStr(required=True, error_messages=_REQUIRED,
                              validate=validate.Length(min=1, error="모든 필드를 입력해주세요."))

    @validates_schema(skip_on_field_errors=False, pass_original=True)
    def validate_password_match(self, data, original_data, **kwargs):
        # 다른 필드가 실패해도 함께 보고하도록 원본 입력끼리 비교합니다.
        confirm = original_data.get('password_confirm')
        if confirm is not None and confirm != original_data.get('password'):
            raise ValidationError("비밀번호가 일치하지 않습니다.", field_name='password_confirm')


class RestoreSessionSchema(Schema):
    """Authorization 헤더에서 꺼낸 ID 토큰."""
    id_token = fields.Str(required=True, validate=validate.Length(min=1))


class PrincipalResponseSchema(Schema):
    """로그인/회원가입 응답. 토큰은 클라이언트가 이후 요청의 Bearer 토큰으로 사용합니다."""
    uid = fields.Str(required=True)
    email = fields.Str(allow_none=True)
    display_name = fields.Str(allow_none=True)
    name = fields.Str(dump_only=True)
    id_token = fields.Str(allow_none=True)
    refresh_token = fields.Str(allow_none=True)


class SessionResponseSchema(Schema):
    """현재 세션 조회 응답. 토큰은 포함하지 않습니다."""
    uid = fields.Str(required=True)
    email = fields.Str(allow_none=True)
    display_name = fields.Str(allow_none=True)
    name = fields.Str(dump_only=True)
