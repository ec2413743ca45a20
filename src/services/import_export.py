"""
가져오기/내보내기 모듈
평가 기록과 용어 사전을 CSV/JSON 텍스트로 변환하고,
교환 형식(구 버전 브라우저 앱 데이터 포함)을 다시 저장한다.
"""
import csv
import io
import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional
from src.services.assessment_builder import normalize_sub_comment
from src.services.assessment_store import AssessmentStore, validate_record
from src.services.comment_generator import is_error_comment, regenerate_comment
from src.services.vocabulary_store import VocabularyStore
from src.types import AssessmentDict
from src.utils.constants import (
    INTERCHANGE_FIELDS,
    LEGACY_LP_CASE_TYPES,
    SUB_COMMENT_INTERCHANGE_FIELDS,
    VOCABULARY_CSV_HEADER,
)
from src.utils.exceptions import AssessmentAppError, ImportParseError, ValidationError
from src.utils.helpers import current_timestamp_ms, is_blank, parse_timestamp, to_bool
from src.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)

# CSV 셀 안에 JSON 으로 저장하는 필드
_STRUCTURED_FIELDS = ("justifications", "sub_comments")


@dataclass
class ImportResult:
    """가져오기 결과"""
    imported: int = 0
    skipped: int = 0

    @property
    def message(self) -> str:
        return f"{self.imported}건 가져오기 완료 ({self.skipped}건 건너뜀)"


# ============================================================================
# 내보내기
# ============================================================================

def _sub_comment_to_interchange(unit: Dict[str, Any]) -> Dict[str, Any]:
    return {
        external: unit.get(internal, [] if internal == "justifications" else "")
        for internal, external in SUB_COMMENT_INTERCHANGE_FIELDS.items()
    }


def to_interchange(record: AssessmentDict) -> Dict[str, Any]:
    """평가 기록을 교환 형식(camelCase) 딕셔너리로 변환"""
    data = {external: record.get(internal) for internal, external in INTERCHANGE_FIELDS.items()}
    if record.get("sub_comments"):
        data["subComments"] = [_sub_comment_to_interchange(unit) for unit in record["sub_comments"]]
    data["justifications"] = list(record.get("justifications") or [])
    return data


def export_assessments_json(records: Iterable[AssessmentDict]) -> str:
    """평가 기록을 JSON 배열 텍스트로 변환"""
    return json.dumps([to_interchange(record) for record in records], ensure_ascii=False, indent=2)


def export_assessments_csv(records: Iterable[AssessmentDict]) -> str:
    """
    평가 기록을 CSV 텍스트로 변환

    목록/구조 필드는 셀 안에 JSON 으로 넣는다.
    구분자, 따옴표, 줄바꿈이 있는 셀은 큰따옴표로 감싸고
    내부 큰따옴표는 두 번 쓴다.

    Args:
        records: 평가 기록

    Returns:
        CSV 텍스트 (헤더 포함)
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(list(INTERCHANGE_FIELDS.values()))

    for record in records:
        data = to_interchange(record)
        row = []
        for internal, external in INTERCHANGE_FIELDS.items():
            value = data.get(external)
            if internal in _STRUCTURED_FIELDS:
                row.append(json.dumps(value, ensure_ascii=False) if value is not None else "")
            elif isinstance(value, bool):
                row.append("true" if value else "false")
            elif value is None:
                row.append("")
            else:
                row.append(value)
        writer.writerow(row)

    return output.getvalue()


def export_vocabulary_json(names: Iterable[str]) -> str:
    """용어 목록을 JSON 배열 텍스트로 변환"""
    return json.dumps([{"name": name} for name in names], ensure_ascii=False, indent=2)


def export_vocabulary_csv(names: Iterable[str]) -> str:
    """용어 목록을 CSV 텍스트로 변환"""
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow([VOCABULARY_CSV_HEADER])
    for name in names:
        writer.writerow([name])
    return output.getvalue()


# ============================================================================
# 구 버전 스키마 변환
# ============================================================================

def _parse_structured(value: Any, field: str) -> Any:
    """CSV 셀의 JSON 문자열 해석 (이미 구조 데이터면 그대로)"""
    if value is None or isinstance(value, (list, dict)):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ImportParseError(f"{field} JSON 해석 실패 - {e.msg}") from e


def _split_keys(text: str) -> List[str]:
    return [key.strip() for key in text.split(",") if key.strip()]


def _parse_justifications(value: Any) -> List[str]:
    # 구 버전 CSV 는 "a, b" 형태의 평문으로 저장했다
    if isinstance(value, str) and not value.strip().startswith(("[", '"')):
        return _split_keys(value)

    parsed = _parse_structured(value, "justifications")
    if parsed is None:
        return []
    if isinstance(parsed, str):
        return _split_keys(parsed)
    if not isinstance(parsed, list):
        raise ImportParseError("justifications 는 목록이어야 합니다")
    return [str(key) for key in parsed]


def _parse_sub_comments(value: Any) -> Optional[List[Dict[str, Any]]]:
    parsed = _parse_structured(value, "subComments")
    if not parsed:
        return None
    if not isinstance(parsed, list) or not all(isinstance(unit, dict) for unit in parsed):
        raise ImportParseError("subComments 는 객체 목록이어야 합니다")

    units = []
    for unit in parsed:
        internal = {
            name: unit.get(external, unit.get(name))
            for name, external in SUB_COMMENT_INTERCHANGE_FIELDS.items()
        }
        internal["justifications"] = _parse_justifications(internal.get("justifications"))
        units.append(normalize_sub_comment(internal))
    return units


def _field(raw: Dict[str, Any], internal: str) -> Any:
    """교환 형식 필드명 우선, 없으면 내부 필드명으로 조회"""
    external = INTERCHANGE_FIELDS[internal]
    if external in raw:
        return raw[external]
    return raw.get(internal)


def migrate_legacy_record(raw: Dict[str, Any]) -> AssessmentDict:
    """
    교환 형식(구 버전 포함) 한 건을 현재 평가 기록 형식으로 변환

    - lpPms 등 LP 케이스 유형은 기본 유형 + is_license_partner 로 분리
    - followUpConsent 누락 시 False, subComments 누락 시 None
    - timestamp 는 epoch 밀리초 또는 ISO-8601 문자열
    - generatedComment 누락 시 다시 생성

    Args:
        raw: 교환 형식 딕셔너리

    Returns:
        평가 기록 (id 제외)

    Raises:
        ImportParseError: 해석할 수 없는 행
        ValidationError: 케이스 유형/판정 값 또는 템플릿 조합 오류
    """
    if not isinstance(raw, dict):
        raise ImportParseError("평가 기록은 객체여야 합니다")

    try:
        case_type = str(_field(raw, "case_type") or "").strip()
        is_license_partner = to_bool(_field(raw, "is_license_partner"))
        if case_type in LEGACY_LP_CASE_TYPES:
            case_type = LEGACY_LP_CASE_TYPES[case_type]
            is_license_partner = True

        raw_timestamp = _field(raw, "timestamp")
        timestamp = current_timestamp_ms() if raw_timestamp in (None, "") else parse_timestamp(raw_timestamp)

        record = AssessmentDict(
            case_id=str(_field(raw, "case_id") or "").strip(),
            case_type=case_type,
            is_license_partner=is_license_partner,
            follow_up_consent=to_bool(_field(raw, "follow_up_consent")),
            product_names=str(_field(raw, "product_names") or "").strip(),
            events=str(_field(raw, "events") or "").strip(),
            relatedness=str(_field(raw, "relatedness") or "").strip(),
            justifications=_parse_justifications(_field(raw, "justifications")),
            additional_notes=str(_field(raw, "additional_notes") or ""),
            free_text_comment=str(_field(raw, "free_text_comment") or ""),
            generated_comment=str(_field(raw, "generated_comment") or ""),
            timestamp=timestamp,
            sub_comments=_parse_sub_comments(_field(raw, "sub_comments")),
        )
    except ValueError as e:
        raise ImportParseError(str(e)) from e

    validate_record(record)
    if is_blank(record["generated_comment"]):
        record["generated_comment"] = regenerate_comment(record)
    # 구 버전 앱은 오류 문구를 코멘트로 저장하기도 했다
    if is_error_comment(record["generated_comment"]):
        raise ValidationError("케이스 유형과 판정 조합이 올바르지 않습니다", "generated_comment")
    return record


# ============================================================================
# 가져오기
# ============================================================================

def _import_rows(rows: Iterable[Any], store: AssessmentStore) -> ImportResult:
    result = ImportResult()
    for index, raw in enumerate(rows, start=1):
        try:
            store.create(migrate_legacy_record(raw))
            result.imported += 1
        except AssessmentAppError as e:
            logger.warning(f"가져오기 {index}행 건너뜀: {str(e)}")
            result.skipped += 1
    return result


@log_execution_time()
def import_assessments_json(text: str, store: AssessmentStore) -> ImportResult:
    """
    JSON 배열 텍스트의 평가 기록 가져오기

    잘못된 레코드는 건너뛰고 개수만 센다.
    문서 전체를 해석할 수 없으면 0건으로 끝난다.

    Args:
        text: JSON 텍스트
        store: 평가 기록 저장소

    Returns:
        ImportResult
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"JSON 가져오기 실패: {e.msg}")
        return ImportResult()

    if isinstance(data, dict):
        data = data.get("assessments", [data])
    if not isinstance(data, list):
        logger.error("JSON 가져오기 실패: 평가 기록 배열이 아닙니다")
        return ImportResult()

    result = _import_rows(data, store)
    logger.info(f"JSON 가져오기 - {result.message}")
    return result


@log_execution_time()
def import_assessments_csv(text: str, store: AssessmentStore) -> ImportResult:
    """
    CSV 텍스트의 평가 기록 가져오기 (헤더 필수)

    Args:
        text: CSV 텍스트
        store: 평가 기록 저장소

    Returns:
        ImportResult
    """
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    result = ImportResult()
    try:
        rows = list(reader)
    except csv.Error as e:
        logger.error(f"CSV 가져오기 실패: {str(e)}")
        return result

    # 열 개수가 맞지 않는 행은 DictReader 가 None 키/값으로 채운다
    well_formed = []
    for row in rows:
        if None in row or None in row.values():
            result.skipped += 1
            continue
        well_formed.append(row)

    imported = _import_rows(well_formed, store)
    result.imported += imported.imported
    result.skipped += imported.skipped
    logger.info(f"CSV 가져오기 - {result.message}")
    return result


def _import_names(names: Iterable[Any], vocabulary: VocabularyStore) -> ImportResult:
    result = ImportResult()
    for name in names:
        if not isinstance(name, str) or is_blank(name):
            result.skipped += 1
            continue
        vocabulary.upsert(name)
        result.imported += 1
    return result


def import_vocabulary_json(text: str, vocabulary: VocabularyStore) -> ImportResult:
    """JSON 배열 ([{"name": ...}] 또는 ["..."]) 의 용어 가져오기"""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"{vocabulary.kind} JSON 가져오기 실패: {e.msg}")
        return ImportResult()
    if not isinstance(data, list):
        logger.error(f"{vocabulary.kind} JSON 가져오기 실패: 배열이 아닙니다")
        return ImportResult()

    names = [item.get("name") if isinstance(item, dict) else item for item in data]
    result = _import_names(names, vocabulary)
    logger.info(f"{vocabulary.kind} JSON 가져오기 - {result.message}")
    return result


def import_vocabulary_csv(text: str, vocabulary: VocabularyStore) -> ImportResult:
    """name 헤더를 가진 CSV 의 용어 가져오기"""
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    try:
        names = [row.get(VOCABULARY_CSV_HEADER) for row in reader]
    except csv.Error as e:
        logger.error(f"{vocabulary.kind} CSV 가져오기 실패: {str(e)}")
        return ImportResult()

    result = _import_names(names, vocabulary)
    logger.info(f"{vocabulary.kind} CSV 가져오기 - {result.message}")
    return result
