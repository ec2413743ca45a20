"""
데이터베이스 연결 관리 모듈
"""
from sqlalchemy import create_engine, Engine, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool
from contextlib import contextmanager
from typing import Generator, Optional
from config.settings import settings
from src.utils.logger import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """데이터베이스 연결 관리 클래스"""

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.database_url
        self.engine: Engine = None
        self.SessionLocal: sessionmaker = None
        self._initialize()

    def _initialize(self):
        """데이터베이스 연결 초기화"""
        try:
            if self.database_url.startswith("sqlite"):
                engine_options = {
                    "connect_args": {"check_same_thread": False},
                }
                # 메모리 DB는 연결 하나를 공유해야 테이블이 유지된다
                if ":memory:" in self.database_url or self.database_url in ("sqlite://", "sqlite:///"):
                    engine_options["poolclass"] = StaticPool
            else:
                engine_options = {
                    "poolclass": QueuePool,
                    "pool_size": 5,
                    "max_overflow": 10,
                    "pool_pre_ping": True,  # 연결 유효성 사전 확인
                }

            self.engine = create_engine(
                self.database_url,
                echo=settings.database_echo,
                **engine_options
            )

            self.SessionLocal = sessionmaker(
                autocommit=False,
                autoflush=False,
                expire_on_commit=False,
                bind=self.engine
            )

            logger.info("데이터베이스 연결 초기화 완료")
        except Exception as e:
            logger.error(f"데이터베이스 연결 초기화 실패: {str(e)}")
            raise

    def init_db(self):
        """테이블 생성 (assessment, product, event)"""
        from src.db.base import Base
        import src.db.models  # noqa: F401  모델 등록

        Base.metadata.create_all(bind=self.engine)
        logger.info("데이터베이스 테이블 생성 완료")

    def get_session(self) -> Session:
        """
        데이터베이스 세션 획득

        Returns:
            Session 인스턴스
        """
        return self.SessionLocal()

    @contextmanager
    def get_db_session(self) -> Generator[Session, None, None]:
        """
        컨텍스트 매니저를 사용한 데이터베이스 세션 획득

        Yields:
            Session 인스턴스

        Example:
            with db_manager.get_db_session() as session:
                # DB 작업 수행
                pass
        """
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"데이터베이스 세션 오류: {str(e)}")
            raise
        finally:
            session.close()

    def health_check(self) -> bool:
        """
        데이터베이스 연결 상태 확인

        Returns:
            연결 상태 (True: 정상, False: 오류)
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.debug("데이터베이스 연결 상태: 정상")
            return True
        except Exception as e:
            logger.error(f"데이터베이스 연결 상태 확인 실패: {str(e)}")
            return False

    def close(self):
        """데이터베이스 연결 종료"""
        if self.engine:
            self.engine.dispose()
            logger.info("데이터베이스 연결 종료")


# 전역 데이터베이스 매니저 인스턴스
db_manager = DatabaseManager()
