"""
평가 기록 저장소 모듈
"""
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from config.comment_templates import get_base_template
from src.db.connection import DatabaseManager
from src.db.models.assessment import Assessment
from src.services import record_query
from src.services.comment_generator import regenerate_comment
from src.services.vocabulary_store import VocabularyStore
from src.types import AssessmentDict
from src.utils.constants import CaseType, Relatedness, VocabularyKind
from src.utils.exceptions import DatabaseError, ValidationError
from src.utils.helpers import current_timestamp_ms, is_blank, is_valid_timestamp, split_terms
from src.utils.logger import get_logger

logger = get_logger(__name__)

_CASE_TYPES = {case_type.value for case_type in CaseType}
_RELATEDNESS = {value.value for value in Relatedness}


def validate_record(record: Dict[str, Any]) -> None:
    """
    저장 전 평가 기록 검증

    Raises:
        ValidationError: 케이스 유형, 판정, 템플릿 조합 또는 타임스탬프가 올바르지 않을 때
    """
    if record.get("case_type") not in _CASE_TYPES:
        raise ValidationError(f"알 수 없는 케이스 유형: {record.get('case_type')!r}", "case_type")
    if record.get("relatedness") not in _RELATEDNESS:
        raise ValidationError(f"알 수 없는 판정: {record.get('relatedness')!r}", "relatedness")

    # 서브 코멘트가 있으면 단위별 판정, 없으면 대표 판정에 템플릿이 있어야 한다
    units = record.get("sub_comments") or [{"relatedness": record["relatedness"]}]
    for unit in units:
        if get_base_template(record["case_type"], unit.get("relatedness") or "") is None:
            raise ValidationError(
                f"케이스 유형과 판정 조합이 올바르지 않습니다: {record['case_type']} / {unit.get('relatedness')!r}",
                "relatedness"
            )

    timestamp = record.get("timestamp")
    if timestamp is not None and not is_valid_timestamp(timestamp):
        raise ValidationError(f"타임스탬프 범위를 벗어났습니다: {timestamp!r}", "timestamp")


class AssessmentStore:
    """평가 기록 저장소 (생성/조회/삭제, 기록은 수정하지 않음)"""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager
        self.products = VocabularyStore(db_manager, VocabularyKind.PRODUCT.value)
        self.events = VocabularyStore(db_manager, VocabularyKind.EVENT.value)

    def create(self, record: AssessmentDict) -> int:
        """
        평가 기록 저장

        제품명/이벤트의 각 용어를 같은 트랜잭션에서 용어 사전에 추가한다.
        입력의 id 는 무시하고 새로 부여한다.

        Args:
            record: 평가 기록 (id 제외)

        Returns:
            부여된 id

        Raises:
            ValidationError: 케이스 유형/판정 오류
            DatabaseError: 저장 실패
        """
        validate_record(record)

        assessment = Assessment(
            case_id=(record.get("case_id") or "").strip(),
            case_type=record["case_type"],
            is_license_partner=bool(record.get("is_license_partner")),
            follow_up_consent=bool(record.get("follow_up_consent")),
            product_names=record.get("product_names") or "",
            events=record.get("events") or "",
            relatedness=record["relatedness"],
            justifications=list(record.get("justifications") or []),
            additional_notes=record.get("additional_notes") or "",
            free_text_comment=record.get("free_text_comment") or "",
            generated_comment=record.get("generated_comment") or "",
            timestamp=current_timestamp_ms() if record.get("timestamp") is None else record["timestamp"],
            sub_comments=record.get("sub_comments") or None,
        )
        if is_blank(assessment.generated_comment):
            assessment.generated_comment = regenerate_comment(assessment.to_record())

        try:
            with self.db_manager.get_db_session() as session:
                session.add(assessment)
                session.flush()
                self.products.add_names(session, split_terms(assessment.product_names))
                self.events.add_names(session, split_terms(assessment.events))
                assessment_id = assessment.id
        except SQLAlchemyError as e:
            raise DatabaseError(f"평가 기록 저장 실패 - {str(e)}") from e

        logger.info(f"평가 기록 저장 완료: id={assessment_id}, case_id={assessment.case_id}")
        return assessment_id

    def list_all(self) -> List[AssessmentDict]:
        """전체 평가 기록 (id 순)"""
        try:
            with self.db_manager.get_db_session() as session:
                rows = session.query(Assessment).order_by(Assessment.id).all()
                return [row.to_record() for row in rows]
        except SQLAlchemyError as e:
            raise DatabaseError(f"평가 기록 목록 조회 실패 - {str(e)}") from e

    def get_by_id(self, assessment_id: int) -> Optional[AssessmentDict]:
        """
        평가 기록 조회

        Args:
            assessment_id: 평가 기록 id

        Returns:
            평가 기록 또는 None
        """
        try:
            with self.db_manager.get_db_session() as session:
                row = session.get(Assessment, assessment_id)
                return row.to_record() if row else None
        except SQLAlchemyError as e:
            raise DatabaseError(f"평가 기록 조회 실패: {assessment_id} - {str(e)}") from e

    def delete(self, assessment_id: int) -> bool:
        """
        평가 기록 삭제 (용어 사전은 유지)

        Args:
            assessment_id: 평가 기록 id

        Returns:
            삭제했으면 True, 없으면 False
        """
        try:
            with self.db_manager.get_db_session() as session:
                row = session.get(Assessment, assessment_id)
                if row is None:
                    return False
                session.delete(row)
        except SQLAlchemyError as e:
            raise DatabaseError(f"평가 기록 삭제 실패: {assessment_id} - {str(e)}") from e

        logger.info(f"평가 기록 삭제 완료: id={assessment_id}")
        return True

    def list_latest_per_case(self) -> List[AssessmentDict]:
        """케이스 ID별 최신 평가 기록 (케이스 ID 순)"""
        return record_query.latest_per_case(self.list_all())

    def search_case_ids(self, query: Optional[str] = None) -> List[AssessmentDict]:
        """케이스 ID 자동완성 검색"""
        return record_query.search_case_ids(self.list_all(), query)
