"""
용어 사전 저장소 모듈
평가 기록의 제품명/이벤트명을 자동완성용 사전으로 관리한다.
"""
from typing import Dict, List, Optional, Type
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from src.db.base import BaseModel
from src.db.connection import DatabaseManager
from src.db.models.vocabulary import Product, Event
from src.utils.constants import VocabularyKind
from src.utils.exceptions import DatabaseError, InvalidInputError
from src.utils.helpers import split_terms, unique_in_order
from src.utils.logger import get_logger

logger = get_logger(__name__)

VOCABULARY_MODELS: Dict[str, Type[BaseModel]] = {
    VocabularyKind.PRODUCT.value: Product,
    VocabularyKind.EVENT.value: Event,
}


class VocabularyStore:
    """이름을 유일 키로 하는 용어 사전 (추가만 가능)"""

    def __init__(self, db_manager: DatabaseManager, kind: str):
        if kind not in VOCABULARY_MODELS:
            raise InvalidInputError(f"지원하지 않는 용어 사전입니다: {kind}", "kind")
        self.db_manager = db_manager
        self.kind = kind
        self.model = VOCABULARY_MODELS[kind]

    def upsert(self, name: Optional[str]) -> bool:
        """
        용어 추가 (이미 있으면 아무것도 하지 않음)

        Args:
            name: 용어

        Returns:
            새로 추가되었으면 True
        """
        return self.upsert_names([name]) > 0

    def upsert_many(self, items_string: Optional[str]) -> int:
        """
        쉼표 구분 문자열의 모든 용어 추가

        Args:
            items_string: 쉼표 구분 문자열

        Returns:
            새로 추가된 용어 수
        """
        return self.upsert_names(split_terms(items_string))

    def upsert_names(self, names: List[Optional[str]]) -> int:
        """용어 목록 추가 (공백/중복 제외), 새로 추가된 수 반환"""
        cleaned = unique_in_order([name.strip() for name in names if name and name.strip()])
        if not cleaned:
            return 0

        try:
            with self.db_manager.get_db_session() as session:
                added = self.add_names(session, cleaned)
            if added:
                logger.debug(f"{self.kind} 사전 추가: {added}건")
            return added
        except SQLAlchemyError as e:
            raise DatabaseError(f"{self.kind} 사전 저장 실패 - {str(e)}") from e

    def add_names(self, session: Session, names: List[str]) -> int:
        """
        열린 세션에 용어 추가 (평가 저장과 같은 트랜잭션에서 사용)

        Args:
            session: DB 세션
            names: 정리된 용어 목록

        Returns:
            새로 추가된 용어 수
        """
        added = 0
        for name in unique_in_order(names):
            if session.get(self.model, name) is None:
                session.add(self.model(name=name))
                # 같은 트랜잭션 안의 다음 조회가 보도록 즉시 반영
                session.flush()
                added += 1
        return added

    def list_all_sorted(self) -> List[str]:
        """전체 용어를 사전순으로 반환"""
        try:
            with self.db_manager.get_db_session() as session:
                names = [row.name for row in session.query(self.model).all()]
        except SQLAlchemyError as e:
            raise DatabaseError(f"{self.kind} 사전 조회 실패 - {str(e)}") from e
        return sorted(names)

    def search(self, query: Optional[str] = None) -> List[str]:
        """
        부분 문자열 검색 (대소문자 무시)

        Args:
            query: 검색어 (비어 있으면 전체)

        Returns:
            사전순 용어 목록
        """
        names = self.list_all_sorted()
        if not query:
            return names
        lower_query = query.lower()
        return [name for name in names if lower_query in name.lower()]
