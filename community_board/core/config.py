# community_board/core/config.py

import os

class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # Identity Toolkit REST API 호출에 사용하는 Firebase 웹 API 키입니다. (이메일/비밀번호 로그인)
    FIREBASE_API_KEY = os.getenv('FIREBASE_API_KEY')
    FIREBASE_PROJECT_ID = os.getenv('FIREBASE_PROJECT_ID')

    # 게시판 데이터가 저장되는 Firestore 컬렉션 이름
    POSTS_COLLECTION = os.getenv('POSTS_COLLECTION', 'posts')
    COMMENTS_COLLECTION = os.getenv('COMMENTS_COLLECTION', 'comments')

    # 인증 서버 요청 타임아웃(초)
    AUTH_HTTP_TIMEOUT = float(os.getenv('AUTH_HTTP_TIMEOUT', 10))

class DevelopmentConfig(Config):
    """개발 환경을 위한 설정 클래스입니다."""
    DEBUG = True
    # 개발용 Firebase 프로젝트의 서비스 계정 키 파일 경로
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH')

class TestingConfig(Config):
    """테스트 환경을 위한 설정 클래스입니다."""
    TESTING = True
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('TEST_FIREBASE_CREDENTIALS_PATH')

class ProductionConfig(Config):
    """운영 환경 설정. 디버그 모드를 끄고 운영용 서비스 계정 키를 사용합니다."""
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')

# FLASK_ENV 값에 따라 create_app에서 적절한 설정 클래스를 선택합니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
