"""
상수 정의 모듈
하드코딩된 값들을 한 곳에 모아 관리
"""
from enum import Enum
from typing import Dict, List


# ============================================================================
# 케이스 유형
# ============================================================================

class CaseType(str, Enum):
    """케이스 유형 Enum"""
    PMS = "pms"
    CLINICAL_TRIAL = "clinicalTrial"
    SPONTANEOUS = "spontaneous"


# 화면 표시용 라벨
CASE_TYPE_LABELS: Dict[str, str] = {
    CaseType.PMS.value: "Post-Marketing Study",
    CaseType.CLINICAL_TRIAL.value: "Clinical Trial",
    CaseType.SPONTANEOUS.value: "Spontaneous",
}

# 라이선스 파트너 라벨 접두사
LICENSE_PARTNER_LABEL_PREFIX: str = "LP - "

# 구 버전 스키마의 LP 케이스 유형 → (케이스 유형, LP 여부)
LEGACY_LP_CASE_TYPES: Dict[str, str] = {
    "lpPms": CaseType.PMS.value,
    "lpClinicalTrial": CaseType.CLINICAL_TRIAL.value,
    "lpSpontaneous": CaseType.SPONTANEOUS.value,
}


# ============================================================================
# 인과관계 판정
# ============================================================================

class Relatedness(str, Enum):
    """인과관계 판정 Enum"""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    LP_NOT_ASSESSABLE = "lpNotAssessable"
    NOT_APPLICABLE = "notApplicable"
    UNBLINDING_PLACEBO = "unblindingPlacebo"
    # 서로 다른 판정의 서브 코멘트를 합친 경우에만 사용
    MULTIPLE = "multiple"


RELATEDNESS_LABELS: Dict[str, str] = {
    Relatedness.POSITIVE.value: "Positive",
    Relatedness.NEGATIVE.value: "Negative",
    Relatedness.MULTIPLE.value: "Multiple Assessments",
    Relatedness.LP_NOT_ASSESSABLE.value: "LP Not Assessable",
    Relatedness.NOT_APPLICABLE.value: "Not Applicable",
    Relatedness.UNBLINDING_PLACEBO.value: "Unblinding Placebo",
}

# 근거 문구를 붙일 수 있는 판정
JUSTIFIABLE_RELATEDNESS: List[str] = [
    Relatedness.POSITIVE.value,
    Relatedness.NEGATIVE.value,
]


# ============================================================================
# 근거 문구 키
# ============================================================================

class Justification(str, Enum):
    """근거 문구 키 Enum"""
    # positive
    TEMPORAL_RELATIONSHIP = "temporalRelationship"
    DECHALLENGE_RECHALLENGE = "dechallengeRechallenge"
    KNOWN_SAFETY_PROFILE = "knownSafetyProfile"
    BIOLOGICAL_PLAUSIBILITY = "biologicalPlausibility"
    # negative
    MEDICAL_HISTORY = "medicalHistory"
    ALTERNATIVE_ETIOLOGIES = "alternativeEtiologies"
    INSUFFICIENT_INFORMATION = "insufficientInformation"
    NO_TEMPORAL_RELATIONSHIP = "noTemporalRelationship"
    UNDERLYING_CONDITION = "underlyingCondition"


# ============================================================================
# 코멘트 생성
# ============================================================================

# 케이스 유형/판정 조합에 템플릿이 없을 때 반환하는 값
INVALID_SELECTION_MESSAGE: str = "Error: Invalid case type or relatedness selection."

# 서브 코멘트 구분자
SUB_COMMENT_SEPARATOR: str = "\n\n"

# 추가 메모 구분자 (통합 평가)
NOTES_SEPARATOR: str = " | "

# 제품/이벤트 목록 구분자 (통합 평가)
TERMS_SEPARATOR: str = ", "


# ============================================================================
# 용어 사전
# ============================================================================

class VocabularyKind(str, Enum):
    """용어 사전 종류 Enum"""
    PRODUCT = "product"
    EVENT = "event"


# ============================================================================
# 가져오기/내보내기
# ============================================================================

class ExportFormat(str, Enum):
    """내보내기 형식 Enum"""
    CSV = "csv"
    JSON = "json"


# 내부 필드명 → 교환 형식 필드명
INTERCHANGE_FIELDS: Dict[str, str] = {
    "id": "id",
    "case_id": "caseId",
    "case_type": "caseType",
    "is_license_partner": "isLicensePartner",
    "follow_up_consent": "followUpConsent",
    "product_names": "productNames",
    "events": "events",
    "relatedness": "relatedness",
    "justifications": "justifications",
    "additional_notes": "additionalNotes",
    "free_text_comment": "freeTextComment",
    "generated_comment": "generatedComment",
    "timestamp": "timestamp",
    "sub_comments": "subComments",
}

# 서브 코멘트 내부 필드명 → 교환 형식 필드명
SUB_COMMENT_INTERCHANGE_FIELDS: Dict[str, str] = {
    "product_names": "productNames",
    "events": "events",
    "relatedness": "relatedness",
    "free_text": "freeText",
    "additional_notes": "additionalNotes",
    "justifications": "justifications",
}

VOCABULARY_CSV_HEADER: str = "name"
