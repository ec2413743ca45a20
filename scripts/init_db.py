"""
데이터베이스 초기화 스크립트 (assessment, product, event 테이블 생성)
"""
import sys
import os

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config.settings import settings
from src.db.connection import db_manager
from src.utils.logger import setup_logging, get_logger

setup_logging()
logger = get_logger(__name__)


def init_database():
    """데이터베이스 초기화"""
    try:
        db_manager.init_db()
        if not db_manager.health_check():
            raise RuntimeError("데이터베이스 연결 확인 실패")
        logger.info(f"데이터베이스 초기화 완료: {settings.database_url}")
    except Exception as e:
        logger.error(f"데이터베이스 초기화 오류: {str(e)}")
        raise
    finally:
        db_manager.close()


if __name__ == "__main__":
    init_database()
