# community_board/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from functools import partial
import requests
from flask import Flask, jsonify, g
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
import firebase_admin
from firebase_admin import credentials

# - 설정 / 오류
from community_board.core.config import config_by_name
from community_board.core.errors import AuthError, StoreError

# - API 블루프린트
from community_board.api.auth.routes import auth_bp
from community_board.api.posts.routes import posts_bp
from community_board.api.comments.routes import comments_bp

# - 서비스 모듈
from community_board.services.firestore_service import FirestoreStore
from community_board.services.firebase_auth_service import FirebaseAuthProvider


def create_app(config_name=None, store=None, auth_provider_factory=None):
    """
    Flask 애플리케이션 팩토리 함수.
    - store / auth_provider_factory를 넘기면 Firebase 초기화 없이 해당 구현을 사용합니다. (테스트용)
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    # =====================================================================================
    # 4. 외부 서비스 초기화
    # =====================================================================================
    if store is None and not firebase_admin._apps:
        cred_path = app.config['FIREBASE_CREDENTIALS_PATH']
        if not cred_path or not os.path.exists(cred_path):
            raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
        cred = credentials.Certificate(cred_path)
        firebase_admin.initialize_app(cred, {'projectId': app.config['FIREBASE_PROJECT_ID']})

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {}
    app.services['store'] = store or FirestoreStore()
    # Identity Toolkit 호출용 HTTP 커넥션 풀은 앱 전체에서 하나만 사용합니다.
    app.services['http'] = requests.Session()
    # 인증 제공자는 요청마다 새로 만들어 요청 단위 세션을 구성합니다.
    app.services['auth_provider_factory'] = auth_provider_factory or partial(
        FirebaseAuthProvider,
        api_key=app.config['FIREBASE_API_KEY'],
        http=app.services['http'],
        timeout=app.config['AUTH_HTTP_TIMEOUT'],
        revoke_on_sign_out=True
    )
    logging.info("Board services initialized successfully")

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(posts_bp, url_prefix='/api/posts')
    app.register_blueprint(comments_bp, url_prefix='/api')

    @app.teardown_appcontext
    def close_request_session(exc):
        # 요청 단위 세션의 인증 제공자 구독을 해제합니다.
        session = g.pop('session', None)
        if session is not None:
            session.close()

    # =====================================================================================
    # 7. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(AuthError)
    def handle_auth_error(err):
        response = {"error_code": "AUTH_ERROR", "code": err.code, "message": err.message}
        return jsonify(response), 401

    @app.errorhandler(StoreError)
    def handle_store_error(err):
        logging.error(f"저장소 오류 ({err.collection}/{err.doc_id}): {err.message}")
        response = {"error_code": "STORE_ERROR", "message": "데이터를 처리하지 못했습니다. 잠시 후 다시 시도해주세요."}
        return jsonify(response), 502

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        if isinstance(err, HTTPException):
            return err
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": "서버 내부에서 예상치 못한 오류가 발생했습니다."}
        return jsonify(response), 500

    # =====================================================================================
    # 8. 로깅 및 앱 반환
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
