"""
코멘트 템플릿 설정
케이스 유형/판정별 기본 문장과 판정별 근거 문구를 정의
"""
from types import MappingProxyType
from typing import Mapping, Optional
from src.utils.constants import CaseType, Relatedness, Justification


_POSITIVE = "{companyName} considers that there is a possibility that the {events} related to the {productNames}."
_NEGATIVE = "{companyName} has determined that it is unlikely that the {events} related to the {productNames}."
_STUDY_POSITIVE = "{companyName} considers that there is a possibility that the {events} related to the study {productNames}."
_STUDY_NEGATIVE = "{companyName} has determined that it is unlikely that the {events} related to the study {productNames}."
_LP_NOT_ASSESSABLE = "LP not assesable case, no comment provided."
_NOT_APPLICABLE = "Not applicable events for assessment in relation to the product. no comment provided."
_UNBLINDING_PLACEBO = "Blinding broken for study termination, placebo case, no comment provided."


# 케이스 유형 → 판정 → 기본 문장
COMMENT_TEMPLATES: Mapping[CaseType, Mapping[Relatedness, str]] = MappingProxyType({
    CaseType.PMS: MappingProxyType({
        Relatedness.POSITIVE: _POSITIVE,
        Relatedness.NEGATIVE: _NEGATIVE,
        Relatedness.LP_NOT_ASSESSABLE: _LP_NOT_ASSESSABLE,
        Relatedness.NOT_APPLICABLE: _NOT_APPLICABLE,
    }),
    CaseType.CLINICAL_TRIAL: MappingProxyType({
        Relatedness.POSITIVE: _STUDY_POSITIVE,
        Relatedness.NEGATIVE: _STUDY_NEGATIVE,
        Relatedness.LP_NOT_ASSESSABLE: _LP_NOT_ASSESSABLE,
        Relatedness.NOT_APPLICABLE: _NOT_APPLICABLE,
        Relatedness.UNBLINDING_PLACEBO: _UNBLINDING_PLACEBO,
    }),
    CaseType.SPONTANEOUS: MappingProxyType({
        Relatedness.POSITIVE: _POSITIVE,
        Relatedness.NEGATIVE: _NEGATIVE,
        Relatedness.LP_NOT_ASSESSABLE: _LP_NOT_ASSESSABLE,
        Relatedness.NOT_APPLICABLE: _NOT_APPLICABLE,
    }),
})


# 판정 → 근거 키 → 근거 문구
JUSTIFICATION_TEMPLATES: Mapping[Relatedness, Mapping[Justification, str]] = MappingProxyType({
    Relatedness.POSITIVE: MappingProxyType({
        Justification.TEMPORAL_RELATIONSHIP: (
            "The temporal relationship between product administration and event onset "
            "is compatible with a causal association."
        ),
        Justification.DECHALLENGE_RECHALLENGE: (
            "Information regarding dechallenge and rechallenge supports a possible "
            "causal relationship."
        ),
        Justification.KNOWN_SAFETY_PROFILE: (
            "The reported event is consistent with the known safety profile of the product."
        ),
        Justification.BIOLOGICAL_PLAUSIBILITY: (
            "A causal relationship is biologically plausible given the pharmacological "
            "properties of the product."
        ),
    }),
    Relatedness.NEGATIVE: MappingProxyType({
        Justification.MEDICAL_HISTORY: (
            "The subject's medical history, including pre-existing conditions and "
            "concomitant medications, has been reviewed and considered in the assessment "
            "of the reported event."
        ),
        Justification.ALTERNATIVE_ETIOLOGIES: (
            "Potential alternative etiologies for the reported event have been explored "
            "and documented."
        ),
        Justification.INSUFFICIENT_INFORMATION: (
            "The available information is insufficient to draw definitive conclusions "
            "regarding the relationship between the product and the reported event, "
            "{followUpStatus}."
        ),
        Justification.NO_TEMPORAL_RELATIONSHIP: (
            "The temporal relationship between product administration and event onset "
            "does not support a causal association."
        ),
        Justification.UNDERLYING_CONDITION: (
            "The reported event is more likely explained by the subject's underlying condition."
        ),
    }),
})


# 추적 조사 동의 여부 → insufficientInformation 문구 치환값
FOLLOW_UP_STATUS_TEXT: Mapping[bool, str] = MappingProxyType({
    True: "and follow-up information has been requested",
    False: "and no follow-up is possible as the reporter did not consent to be contacted",
})


def get_base_template(case_type: str, relatedness: str) -> Optional[str]:
    """
    케이스 유형/판정 조합의 기본 문장 반환

    Args:
        case_type: 케이스 유형 값 (pms, clinicalTrial, spontaneous)
        relatedness: 판정 값

    Returns:
        기본 문장 또는 None (지원하지 않는 조합)
    """
    try:
        return COMMENT_TEMPLATES[CaseType(case_type)].get(Relatedness(relatedness))
    except ValueError:
        return None


def get_justification_text(relatedness: str, key: str) -> Optional[str]:
    """
    판정에 허용된 근거 문구 반환

    Args:
        relatedness: 판정 값 (positive, negative)
        key: 근거 키

    Returns:
        근거 문구 또는 None (해당 판정에 허용되지 않는 키)
    """
    try:
        table = JUSTIFICATION_TEMPLATES.get(Relatedness(relatedness))
        if table is None:
            return None
        return table.get(Justification(key))
    except ValueError:
        return None


def get_allowed_justifications(relatedness: str) -> list:
    """판정에 허용된 근거 키 목록 반환"""
    try:
        table = JUSTIFICATION_TEMPLATES.get(Relatedness(relatedness), {})
    except ValueError:
        return []
    return [key.value for key in table]
