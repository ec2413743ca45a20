"""
평가 기록 조회/필터 단위 테스트
"""
import pytest
from src.services.record_query import (
    filter_assessments,
    latest_per_case,
    paginate,
    search_case_ids,
)


def _record(case_id, timestamp, relatedness="positive", case_type="pms", product_names="DrugX", events="fever"):
    return {
        "case_id": case_id,
        "case_type": case_type,
        "is_license_partner": False,
        "product_names": product_names,
        "events": events,
        "relatedness": relatedness,
        "timestamp": timestamp,
    }


@pytest.fixture
def records():
    return [
        _record("CASE-1", 100),
        _record("CASE-2", 300, relatedness="negative", product_names="Aspirin"),
        _record("case-3", 200, case_type="clinicalTrial", events="Headache"),
        _record("CASE-1", 400, relatedness="negative"),
    ]


class TestFilterAssessments:
    """검색/필터 테스트"""

    @pytest.mark.unit
    def test_no_filter_sorts_newest_first(self, records):
        result = filter_assessments(records)
        assert [record["timestamp"] for record in result] == [400, 300, 200, 100]

    @pytest.mark.unit
    def test_search_is_case_insensitive(self, records):
        assert [r["case_id"] for r in filter_assessments(records, "aspirin")] == ["CASE-2"]
        assert [r["case_id"] for r in filter_assessments(records, "HEADACHE")] == ["case-3"]

    @pytest.mark.unit
    def test_search_matches_case_type_label(self, records):
        result = filter_assessments(records, "clinical trial")
        assert [r["case_id"] for r in result] == ["case-3"]

    @pytest.mark.unit
    def test_relatedness_filter(self, records):
        result = filter_assessments(records, relatedness="negative")
        assert [r["timestamp"] for r in result] == [400, 300]

    @pytest.mark.unit
    def test_search_and_relatedness_combined(self, records):
        result = filter_assessments(records, "case-1", "positive")
        assert [r["timestamp"] for r in result] == [100]

    @pytest.mark.unit
    def test_no_match(self, records):
        assert filter_assessments(records, "nothing") == []


class TestPaginate:
    """페이지 처리 테스트"""

    @pytest.mark.unit
    def test_first_page(self):
        page = paginate(list(range(45)), 1, 20)
        assert page.items == list(range(20))
        assert page.total == 45
        assert page.has_more is True

    @pytest.mark.unit
    def test_show_more_extends_window(self):
        page = paginate(list(range(45)), 3, 20)
        assert len(page.items) == 45
        assert page.has_more is False

    @pytest.mark.unit
    def test_invalid_page_count_clamped(self):
        page = paginate(list(range(5)), 0, 2)
        assert page.visible_pages == 1
        assert page.items == [0, 1]

    @pytest.mark.unit
    def test_default_page_size(self):
        page = paginate(list(range(25)))
        assert page.page_size == 20
        assert len(page.items) == 20


class TestLatestPerCase:
    """케이스별 최신 기록 테스트"""

    @pytest.mark.unit
    def test_keeps_latest_per_case(self, records):
        result = latest_per_case(records)
        assert [(r["case_id"], r["timestamp"]) for r in result] == [
            ("CASE-1", 400), ("CASE-2", 300), ("case-3", 200)
        ]

    @pytest.mark.unit
    def test_case_id_search(self, records):
        assert [r["case_id"] for r in search_case_ids(records, "case-")] == ["CASE-1", "CASE-2", "case-3"]
        assert [r["case_id"] for r in search_case_ids(records, "2")] == ["CASE-2"]
        assert len(search_case_ids(records, "")) == 3
