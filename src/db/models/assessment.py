"""
Assessment 모델
"""
from sqlalchemy import Column, Integer, BigInteger, String, Text, Boolean, JSON, CheckConstraint
from src.db.base import BaseModel
from src.types import AssessmentDict


class Assessment(BaseModel):
    """인과관계 평가 기록 테이블"""
    __tablename__ = "assessment"
    __table_args__ = (
        CheckConstraint(
            "case_type IN ('pms', 'clinicalTrial', 'spontaneous')",
            name="check_case_type"
        ),
        CheckConstraint(
            "relatedness IN ('positive', 'negative', 'lpNotAssessable', "
            "'notApplicable', 'unblindingPlacebo', 'multiple')",
            name="check_relatedness"
        ),
    )

    # SQLite 자동 증가를 위해 Integer 사용
    id = Column(Integer, primary_key=True, autoincrement=True)
    case_id = Column(String(100), nullable=False, default="", index=True)
    case_type = Column(String(30), nullable=False, index=True)
    is_license_partner = Column(Boolean, nullable=False, default=False)
    follow_up_consent = Column(Boolean, nullable=False, default=False)
    product_names = Column(Text, nullable=False, default="")
    events = Column(Text, nullable=False, default="")
    relatedness = Column(String(30), nullable=False, index=True)
    justifications = Column(JSON, nullable=False, default=list)
    additional_notes = Column(Text, nullable=False, default="")
    free_text_comment = Column(Text, nullable=False, default="")
    generated_comment = Column(Text, nullable=False, default="")
    # epoch 밀리초
    timestamp = Column(BigInteger, nullable=False, index=True)
    sub_comments = Column(JSON)

    def to_record(self) -> AssessmentDict:
        """세션 밖에서 사용할 평가 기록 딕셔너리로 변환"""
        record = self.to_dict()
        record["justifications"] = list(self.justifications or [])
        record["sub_comments"] = [dict(unit) for unit in self.sub_comments] if self.sub_comments else None
        return record
