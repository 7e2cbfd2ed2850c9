# community_board/api/fields.py
from marshmallow import fields


class TrimmedStr(fields.Str):
    """앞뒤 공백을 제거한 뒤 검증하는 문자열 필드. 공백만 있는 입력은 빈 문자열이 됩니다."""

    def _deserialize(self, value, attr, data, **kwargs):
        return super()._deserialize(value, attr, data, **kwargs).strip()
