"""
Pytest 설정 및 픽스처
"""
import pytest
from fastapi.testclient import TestClient
from src.api.main import app
from src.api.deps import get_db_manager
from src.db.connection import DatabaseManager
from src.services.assessment_store import AssessmentStore


@pytest.fixture
def db(tmp_path):
    """임시 SQLite 데이터베이스 픽스처"""
    manager = DatabaseManager(f"sqlite:///{tmp_path / 'test.db'}")
    manager.init_db()
    yield manager
    manager.close()


@pytest.fixture
def store(db):
    """평가 기록 저장소 픽스처"""
    return AssessmentStore(db)


@pytest.fixture
def client(db):
    """테스트 클라이언트 픽스처 (임시 DB 사용)"""
    app.dependency_overrides[get_db_manager] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_record():
    """샘플 평가 기록 픽스처"""
    return {
        "case_id": "CASE-001",
        "case_type": "pms",
        "is_license_partner": False,
        "follow_up_consent": False,
        "product_names": "DrugX, DrugY",
        "events": "fever, rash",
        "relatedness": "positive",
        "justifications": ["temporalRelationship"],
        "additional_notes": "",
        "free_text_comment": "",
        "generated_comment": "",
        "timestamp": 1700000000000,
        "sub_comments": None,
    }
