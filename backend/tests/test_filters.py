"""
Tests for list filtering
"""
import pytest

from app.applicants.filters import filter_applicants, is_unset, parse_age_range
from app.applicants.schemas import ApplicantFilter
from app.core.exceptions import ValidationError


@pytest.fixture
def roster(make_record):
    return [
        make_record(first_name="ANA", last_name="REYES", gender="FEMALE", status="APPROVED",
                    barangay="DITA", age=22, tertiary_education="COLLEGE GRADUATE"),
        make_record(first_name="BEN", last_name="SANTOS", gender="MALE", status="APPROVED",
                    barangay="POOC", age=27, archived=True),
        make_record(first_name="CARLA", last_name="DIAZ", gender="FEMALE", status="PENDING",
                    barangay="MARKET AREA", age=46, tertiary_education="COLLEGE UNDERGRADUATE"),
        make_record(first_name="DANTE", last_name="REYNA", gender="MALE", status="REJECTED",
                    barangay="DITA", age=35),
    ]


class TestSentinels:
    @pytest.mark.parametrize("value", [None, "", "  ", "All Status", "ALL GENDERS", "All Barangays", "all ages", "All"])
    def test_unset_values(self, value):
        assert is_unset(value)

    @pytest.mark.parametrize("value", ["APPROVED", "DITA", "18-25", "ALLOWED"])
    def test_real_values(self, value):
        assert not is_unset(value)

    def test_sentinel_criteria_return_everything(self, roster):
        criteria = ApplicantFilter(
            status="All Status",
            barangay="All Barangays",
            gender="All Genders",
            age_range="All Ages",
            education="All Education Levels",
        )
        assert filter_applicants(roster, criteria) == roster


class TestFilterApplicants:
    def test_status_filter_ignores_archive_flag(self, roster):
        result = filter_applicants(roster, ApplicantFilter(status="APPROVED"))
        assert [a.first_name for a in result] == ["ANA", "BEN"]

    def test_status_and_gender_intersect(self, roster):
        result = filter_applicants(roster, ApplicantFilter(status="APPROVED", gender="MALE"))
        assert [a.first_name for a in result] == ["BEN"]

    def test_search_is_case_insensitive_substring(self, roster):
        result = filter_applicants(roster, ApplicantFilter(search_term="rey"))
        assert [a.first_name for a in result] == ["ANA", "DANTE"]

    def test_search_matches_code_and_barangay(self, roster):
        assert len(filter_applicants(roster, ApplicantFilter(search_term=roster[2].code.lower()))) == 1
        result = filter_applicants(roster, ApplicantFilter(search_term="market"))
        assert [a.first_name for a in result] == ["CARLA"]

    def test_barangay_filter(self, roster):
        result = filter_applicants(roster, ApplicantFilter(barangay="dita"))
        assert [a.first_name for a in result] == ["ANA", "DANTE"]

    def test_bounded_age_range(self, roster):
        result = filter_applicants(roster, ApplicantFilter(age_range="18-25"))
        assert [a.first_name for a in result] == ["ANA"]

    def test_open_age_range(self, roster):
        result = filter_applicants(roster, ApplicantFilter(age_range="46+"))
        assert [a.first_name for a in result] == ["CARLA"]

    def test_education_matches_tertiary_attainment(self, roster):
        result = filter_applicants(roster, ApplicantFilter(education="COLLEGE GRADUATE"))
        assert [a.first_name for a in result] == ["ANA"]

    def test_education_never_matches_tupad(self, make_record):
        tupad = [make_record("TUPAD"), make_record("TUPAD")]
        assert filter_applicants(tupad, ApplicantFilter(education="COLLEGE GRADUATE")) == []

    def test_order_is_preserved(self, roster):
        result = filter_applicants(list(reversed(roster)), ApplicantFilter(gender="FEMALE"))
        assert [a.first_name for a in result] == ["CARLA", "ANA"]


class TestAgeRange:
    def test_parse(self):
        assert parse_age_range("26-35") == (26, 35)
        assert parse_age_range("46+") == (46, None)

    @pytest.mark.parametrize("value", ["abc", "18-", "-25", "30-20", "18 to 25"])
    def test_malformed_range_is_rejected(self, value):
        with pytest.raises(ValidationError):
            parse_age_range(value)
