"""
API 의존성 주입 모듈
"""
from fastapi import Depends
from src.db.connection import DatabaseManager, db_manager
from src.services.assessment_store import AssessmentStore
from src.services.vocabulary_store import VocabularyStore


def get_db_manager() -> DatabaseManager:
    """데이터베이스 매니저 (테스트에서 override)"""
    return db_manager


def get_assessment_store(manager: DatabaseManager = Depends(get_db_manager)) -> AssessmentStore:
    """평가 기록 저장소"""
    return AssessmentStore(manager)


def get_vocabulary_store(kind: str, manager: DatabaseManager = Depends(get_db_manager)) -> VocabularyStore:
    """경로의 kind (product, event) 에 해당하는 용어 사전"""
    return VocabularyStore(manager, kind)
