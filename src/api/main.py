"""
FastAPI 애플리케이션 메인 파일
"""
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from config.settings import settings
from src.utils.logger import setup_logging, get_logger
from src.api.deps import get_db_manager
from src.api.middleware import LoggingMiddleware
from src.db.connection import DatabaseManager
from src.api.error_handler import (
    request_validation_handler,
    assessment_not_found_handler,
    invalid_input_handler,
    validation_error_handler,
    database_error_handler,
    general_exception_handler
)
from src.utils.exceptions import (
    AssessmentNotFoundError,
    InvalidInputError,
    ValidationError,
    DatabaseError
)

# 로깅 초기화
setup_logging(log_to_file=settings.environment == "production")
logger = get_logger(__name__)

app = FastAPI(
    title="인과관계 평가 코멘트 생성 API",
    description="이상사례 인과관계 평가 기록 및 표준 코멘트 생성",
    version="0.1.0"
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 로깅 미들웨어
app.add_middleware(LoggingMiddleware)

# 에러 핸들러 등록
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(AssessmentNotFoundError, assessment_not_found_handler)
app.add_exception_handler(InvalidInputError, invalid_input_handler)
app.add_exception_handler(ValidationError, validation_error_handler)
app.add_exception_handler(DatabaseError, database_error_handler)
app.add_exception_handler(Exception, general_exception_handler)


@app.on_event("startup")
async def startup_event():
    """애플리케이션 시작 시 실행"""
    logger.info("애플리케이션 시작")

    from src.db.connection import db_manager
    db_manager.init_db()
    if db_manager.health_check():
        logger.info("데이터베이스 연결 확인 완료")
    else:
        logger.warning("데이터베이스 연결 확인 실패")


@app.on_event("shutdown")
async def shutdown_event():
    """애플리케이션 종료 시 실행"""
    logger.info("애플리케이션 종료")

    from src.db.connection import db_manager
    db_manager.close()


@app.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "message": "인과관계 평가 코멘트 생성 API",
        "version": "0.1.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check(manager: DatabaseManager = Depends(get_db_manager)):
    """헬스 체크 엔드포인트"""
    db_healthy = manager.health_check()
    return {
        "status": "healthy" if db_healthy else "unhealthy",
        "database": "healthy" if db_healthy else "unhealthy"
    }


# 라우터 등록
from src.api.routers import assessments, vocabulary
app.include_router(assessments.router)
app.include_router(vocabulary.router)
