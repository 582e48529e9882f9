"""
This module contains centralized constants used throughout the application,
ensuring a single source of truth for collection paths, validation limits and
the user-facing messages shown by both views.
"""

# Firestore location of member documents, scoped by the deployment app id.
USERS_COLLECTION_TEMPLATE = "artifacts/{app_id}/public/data/users"
DEFAULT_APP_ID = "default-app-id"

MIN_PASSWORD_LENGTH = 6
ID_PREFIX_LENGTH = 8

# View selector values
VIEW_REGISTER = "register"
VIEW_LIST = "list"

# Validation messages
MSG_REQUIRED_FIELDS = "이름, 이메일, 비밀번호를 모두 입력해 주세요."
MSG_INVALID_EMAIL = "유효하지 않은 이메일 형식입니다."
MSG_PASSWORD_TOO_SHORT = f"비밀번호는 {MIN_PASSWORD_LENGTH}자 이상이어야 합니다."

# Registration view
MSG_SERVICE_NOT_READY = "데이터베이스 서비스가 준비되지 않았습니다. 잠시 후 다시 시도해 주세요."
MSG_WRITE_FAILED = "데이터 저장 오류: {message}"
MSG_REGISTER_SUCCESS = "[TEST] 등록 성공! 생성된 ID: {short_id}..."
MSG_TEST_ONLY_WARNING = "🚨 경고: 이 버전은 테스트 목적으로만 인증을 우회합니다. 실제 운영 시 Firebase Auth를 활성화해야 합니다."
MSG_INITIALIZING = "서비스 초기화 중..."
MSG_AUTHENTICATING = "인증 중..."

# Member list view
MSG_LIST_LOADING = "목록을 불러오는 중입니다..."
MSG_LIST_FAILED = "회원 목록을 불러오는 중 오류가 발생했습니다."
MSG_LIST_EMPTY = "아직 등록된 회원이 없습니다. 가입해 보세요!"
MSG_DATE_UNAVAILABLE = "날짜 정보 없음"

# Root controller
MSG_INIT_FAILED = "Firebase 연결에 문제가 발생했습니다. 콘솔을 확인해 주세요."
MSG_AUTH_FAILED = "초기 인증 중 문제가 발생했습니다."
MSG_FATAL_BANNER = "심각한 오류: {message}"
