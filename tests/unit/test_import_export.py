"""
가져오기/내보내기 변환 단위 테스트
"""
import csv
import io
import json
import pytest
from src.services.import_export import (
    export_assessments_csv,
    export_assessments_json,
    export_vocabulary_csv,
    migrate_legacy_record,
    to_interchange,
)
from src.utils.exceptions import ImportParseError, ValidationError


class TestExport:
    """내보내기 테스트"""

    @pytest.mark.unit
    def test_interchange_uses_camel_case(self, sample_record):
        data = to_interchange(sample_record)
        assert data["caseId"] == "CASE-001"
        assert data["productNames"] == "DrugX, DrugY"
        assert data["isLicensePartner"] is False
        assert "case_id" not in data

    @pytest.mark.unit
    def test_csv_quotes_special_cells(self, sample_record):
        sample_record["product_names"] = 'Drug "X", extended'
        sample_record["additional_notes"] = "line one\nline two"
        text = export_assessments_csv([sample_record])

        assert '"Drug ""X"", extended"' in text
        rows = list(csv.DictReader(io.StringIO(text)))
        assert rows[0]["productNames"] == 'Drug "X", extended'
        assert rows[0]["additionalNotes"] == "line one\nline two"

    @pytest.mark.unit
    def test_csv_encodes_lists_and_flags(self, sample_record):
        rows = list(csv.DictReader(io.StringIO(export_assessments_csv([sample_record]))))
        assert json.loads(rows[0]["justifications"]) == ["temporalRelationship"]
        assert rows[0]["isLicensePartner"] == "false"
        assert rows[0]["subComments"] == ""

    @pytest.mark.unit
    def test_csv_header_only_when_empty(self):
        text = export_assessments_csv([])
        assert text.count("\n") == 1
        assert text.startswith("id,caseId,caseType")

    @pytest.mark.unit
    def test_json_export_sub_comments(self, sample_record):
        sample_record["sub_comments"] = [{
            "product_names": "DrugX", "events": "fever", "relatedness": "positive",
            "free_text": "Own words.", "additional_notes": "", "justifications": [],
        }]
        data = json.loads(export_assessments_json([sample_record]))
        assert data[0]["subComments"][0]["freeText"] == "Own words."

    @pytest.mark.unit
    def test_vocabulary_csv(self):
        assert export_vocabulary_csv(["Aspirin", "Drug, Extended"]) == 'name\nAspirin\n"Drug, Extended"\n'


class TestMigrateLegacyRecord:
    """구 버전 기록 변환 테스트"""

    @pytest.mark.unit
    def test_lp_case_type_split(self):
        record = migrate_legacy_record({
            "caseId": "OLD-1",
            "caseType": "lpPms",
            "productNames": "DrugX",
            "events": "fever",
            "relatedness": "negative",
            "timestamp": "1700000000000",
        })
        assert record["case_type"] == "pms"
        assert record["is_license_partner"] is True
        assert record["follow_up_consent"] is False
        assert record["sub_comments"] is None
        assert record["timestamp"] == 1700000000000
        assert record["generated_comment"].startswith("Similares has determined")

    @pytest.mark.unit
    def test_existing_comment_kept(self):
        record = migrate_legacy_record({
            "caseType": "pms", "relatedness": "positive",
            "generatedComment": "Stored text.", "timestamp": 5,
        })
        assert record["generated_comment"] == "Stored text."

    @pytest.mark.unit
    def test_iso_timestamp(self):
        record = migrate_legacy_record({
            "caseType": "spontaneous", "relatedness": "positive",
            "timestamp": "2023-11-14T22:13:20Z",
        })
        assert record["timestamp"] == 1700000000000

    @pytest.mark.unit
    def test_plain_justification_string(self):
        record = migrate_legacy_record({
            "caseType": "pms", "relatedness": "negative",
            "justifications": "medicalHistory, alternativeEtiologies",
        })
        assert record["justifications"] == ["medicalHistory", "alternativeEtiologies"]

    @pytest.mark.unit
    def test_sub_comments_from_json_cell(self):
        cell = json.dumps([{"productNames": "DrugX", "events": "fever", "relatedness": "positive", "freeText": ""}])
        record = migrate_legacy_record({"caseType": "pms", "relatedness": "positive", "subComments": cell})
        assert record["sub_comments"][0]["product_names"] == "DrugX"
        assert record["sub_comments"][0]["justifications"] == []

    @pytest.mark.unit
    def test_snake_case_fields_accepted(self):
        record = migrate_legacy_record({"case_type": "clinicalTrial", "relatedness": "positive", "case_id": "S-1"})
        assert record["case_id"] == "S-1"
        assert record["case_type"] == "clinicalTrial"

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", [
        {"caseType": "pms", "relatedness": "positive", "timestamp": "yesterday"},
        {"caseType": "pms", "relatedness": "positive", "isLicensePartner": "maybe"},
        {"caseType": "pms", "relatedness": "positive", "subComments": "[not json"},
        "not a record",
    ])
    def test_unparseable_rows(self, raw):
        with pytest.raises(ImportParseError):
            migrate_legacy_record(raw)

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", [
        {"caseType": "hospital", "relatedness": "positive"},
        {"caseType": "pms", "relatedness": "probable"},
    ])
    def test_unknown_values_rejected(self, raw):
        with pytest.raises(ValidationError):
            migrate_legacy_record(raw)

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", [
        {"caseType": "pms", "relatedness": "unblindingPlacebo", "productNames": "X", "events": "Y"},
        {"caseType": "spontaneous", "relatedness": "multiple", "productNames": "X", "events": "Y"},
        {"caseType": "pms", "relatedness": "multiple", "subComments": [
            {"productNames": "X", "events": "Y", "relatedness": "positive"},
            {"productNames": "Z", "events": "Y", "relatedness": "unblindingPlacebo"},
        ]},
        {"caseType": "pms", "relatedness": "positive",
         "generatedComment": "Error: Invalid case type or relatedness selection."},
    ])
    def test_combination_without_template_rejected(self, raw):
        with pytest.raises(ValidationError):
            migrate_legacy_record(raw)

    @pytest.mark.unit
    @pytest.mark.parametrize("timestamp", [float("inf"), "9" * 25])
    def test_out_of_range_timestamp(self, timestamp):
        with pytest.raises(ImportParseError):
            migrate_legacy_record({"caseType": "pms", "relatedness": "positive", "timestamp": timestamp})
