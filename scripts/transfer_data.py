"""
평가 기록/용어 사전 일괄 가져오기·내보내기 스크립트
"""
import sys
import os
import argparse
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.db.connection import db_manager
from src.services.assessment_store import AssessmentStore
from src.services.vocabulary_store import VocabularyStore
from src.services import import_export
from src.utils.constants import ExportFormat, VocabularyKind
from src.utils.logger import setup_logging, get_logger

setup_logging()
logger = get_logger(__name__)

TARGETS = ["assessments"] + [kind.value for kind in VocabularyKind]


def _format_of(path: Path, explicit: str = None) -> str:
    """파일 확장자로 형식 결정 (명시값 우선)"""
    if explicit:
        return explicit
    return ExportFormat.JSON.value if path.suffix.lower() == ".json" else ExportFormat.CSV.value


def export_data(target: str, path: Path, fmt: str) -> int:
    """대상 데이터를 파일로 내보내기, 건수 반환"""
    if target == "assessments":
        records = AssessmentStore(db_manager).list_all()
        content = (
            import_export.export_assessments_json(records)
            if fmt == ExportFormat.JSON.value
            else import_export.export_assessments_csv(records)
        )
        count = len(records)
    else:
        names = VocabularyStore(db_manager, target).list_all_sorted()
        content = (
            import_export.export_vocabulary_json(names)
            if fmt == ExportFormat.JSON.value
            else import_export.export_vocabulary_csv(names)
        )
        count = len(names)

    path.write_text(content, encoding="utf-8")
    return count


def import_data(target: str, path: Path, fmt: str) -> import_export.ImportResult:
    """파일의 데이터를 가져오기"""
    text = path.read_text(encoding="utf-8")
    if target == "assessments":
        store = AssessmentStore(db_manager)
        if fmt == ExportFormat.JSON.value:
            return import_export.import_assessments_json(text, store)
        return import_export.import_assessments_csv(text, store)

    vocabulary = VocabularyStore(db_manager, target)
    if fmt == ExportFormat.JSON.value:
        return import_export.import_vocabulary_json(text, vocabulary)
    return import_export.import_vocabulary_csv(text, vocabulary)


def main():
    """가져오기/내보내기 메인 함수"""
    parser = argparse.ArgumentParser(description="평가 기록 일괄 가져오기/내보내기")
    parser.add_argument("action", choices=["import", "export"])
    parser.add_argument("target", choices=TARGETS)
    parser.add_argument("path", type=Path)
    parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in ExportFormat],
        help="파일 형식 (기본값: 확장자로 판단)"
    )
    args = parser.parse_args()

    db_manager.init_db()
    fmt = _format_of(args.path, args.format)

    try:
        if args.action == "export":
            count = export_data(args.target, args.path, fmt)
            logger.info(f"{args.target} 내보내기 완료: {count}건 → {args.path}")
        else:
            result = import_data(args.target, args.path, fmt)
            logger.info(f"{args.target} 가져오기 - {result.message}")
    finally:
        db_manager.close()


if __name__ == "__main__":
    main()
