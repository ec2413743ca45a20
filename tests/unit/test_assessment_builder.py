"""
통합 평가 생성 단위 테스트
"""
import pytest
from src.services.assessment_builder import (
    aggregate_relatedness,
    build_combined_assessment,
    collect_valid_sub_comments,
    generate_combined_comment,
    generate_sub_comment_preview,
    hydrate_sub_comments,
)
from src.services.comment_generator import generate_comment


def _unit(product_names="DrugX", events="fever", relatedness="positive", **kwargs):
    unit = {
        "product_names": product_names,
        "events": events,
        "relatedness": relatedness,
        "free_text": "",
        "additional_notes": "",
        "justifications": [],
    }
    unit.update(kwargs)
    return unit


class TestCollectValidSubComments:
    """유효 서브 코멘트 수집 테스트"""

    @pytest.mark.unit
    def test_incomplete_units_are_dropped(self):
        units = [
            _unit(),
            _unit(product_names="  "),
            _unit(events=""),
            _unit(relatedness=""),
            _unit(product_names="DrugY", events="rash", relatedness="negative"),
        ]
        valid = collect_valid_sub_comments(units)
        assert [unit["product_names"] for unit in valid] == ["DrugX", "DrugY"]

    @pytest.mark.unit
    def test_values_are_trimmed(self):
        valid = collect_valid_sub_comments([_unit(product_names="  DrugX ", additional_notes=" note ")])
        assert valid[0]["product_names"] == "DrugX"
        assert valid[0]["additional_notes"] == "note"


class TestAggregateRelatedness:
    """대표 판정 테스트"""

    @pytest.mark.unit
    def test_same_relatedness(self):
        units = collect_valid_sub_comments([_unit(), _unit(product_names="DrugY")])
        assert aggregate_relatedness(units) == "positive"

    @pytest.mark.unit
    def test_mixed_relatedness(self):
        units = collect_valid_sub_comments([_unit(), _unit(relatedness="negative")])
        assert aggregate_relatedness(units) == "multiple"


class TestBuildCombinedAssessment:
    """통합 평가 생성 테스트"""

    @pytest.mark.unit
    def test_requires_case_type(self):
        assert build_combined_assessment("CASE-1", "", False, False, [_unit()]) is None

    @pytest.mark.unit
    def test_requires_valid_unit(self):
        assert build_combined_assessment("CASE-1", "pms", False, False, [_unit(events="")]) is None
        assert build_combined_assessment("CASE-1", "pms", False, False, []) is None

    @pytest.mark.unit
    def test_combines_units(self):
        units = [
            _unit(justifications=["temporalRelationship"], additional_notes="first note"),
            _unit(product_names="DrugY", events="rash, itch", relatedness="negative",
                  justifications=["medicalHistory", "temporalRelationship"]),
            _unit(product_names="DrugZ", events="", relatedness="negative"),
        ]
        record = build_combined_assessment(" CASE-1 ", "pms", True, False, units, timestamp=1700000000000)

        assert record["case_id"] == "CASE-1"
        assert record["is_license_partner"] is True
        assert record["product_names"] == "DrugX, DrugY"
        assert record["events"] == "fever, rash, itch"
        assert record["relatedness"] == "multiple"
        assert record["justifications"] == ["temporalRelationship", "medicalHistory"]
        assert record["additional_notes"] == "first note"
        assert record["free_text_comment"] == ""
        assert record["timestamp"] == 1700000000000
        assert len(record["sub_comments"]) == 2

    @pytest.mark.unit
    def test_generated_comment_joins_units_with_blank_line(self):
        units = [_unit(), _unit(product_names="DrugY", events="rash", relatedness="negative")]
        record = build_combined_assessment("CASE-1", "spontaneous", False, False, units)

        expected = "\n\n".join([
            generate_comment("spontaneous", False, "DrugX", "fever", "positive"),
            generate_comment("spontaneous", False, "DrugY", "rash", "negative"),
        ])
        assert record["generated_comment"] == expected
        assert generate_combined_comment("spontaneous", False, units) == expected

    @pytest.mark.unit
    def test_notes_joined_with_pipe(self):
        units = [
            _unit(additional_notes="a"),
            _unit(product_names="DrugY", additional_notes=""),
            _unit(product_names="DrugZ", additional_notes="b"),
        ]
        record = build_combined_assessment("CASE-1", "pms", False, False, units)
        assert record["additional_notes"] == "a | b"

    @pytest.mark.unit
    def test_timestamp_defaults_to_now(self):
        record = build_combined_assessment("CASE-1", "pms", False, False, [_unit()])
        assert record["timestamp"] > 1700000000000


class TestSubCommentPreview:
    """서브 코멘트 미리보기 테스트"""

    @pytest.mark.unit
    def test_preview_complete_unit(self):
        preview = generate_sub_comment_preview("pms", False, _unit())
        assert preview == generate_comment("pms", False, "DrugX", "fever", "positive")

    @pytest.mark.unit
    def test_preview_incomplete_unit(self):
        assert generate_sub_comment_preview("pms", False, _unit(relatedness="")) is None
        assert generate_sub_comment_preview("", False, _unit()) is None


class TestHydrateSubComments:
    """이전 평가 복원 테스트"""

    @pytest.mark.unit
    def test_hydrate_combined_record(self):
        units = [_unit(), _unit(product_names="DrugY", relatedness="negative")]
        record = build_combined_assessment("CASE-1", "pms", False, False, units)
        hydrated = hydrate_sub_comments(record)
        assert [unit["product_names"] for unit in hydrated] == ["DrugX", "DrugY"]

    @pytest.mark.unit
    def test_hydrate_legacy_record(self, sample_record):
        sample_record["free_text_comment"] = "Old wording."
        hydrated = hydrate_sub_comments(sample_record)
        assert len(hydrated) == 1
        assert hydrated[0]["product_names"] == "DrugX, DrugY"
        assert hydrated[0]["free_text"] == "Old wording."
        assert hydrated[0]["justifications"] == ["temporalRelationship"]
