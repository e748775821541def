"""
Tests for report aggregations
"""
from datetime import date

import pytest

from app.applicants.constants import BARANGAYS, STATUSES
from app.core.exceptions import ValidationError
from app.reports import statistics


@pytest.fixture
def applicants(make_record):
    return [
        make_record(gender="MALE", status="PENDING", barangay="DITA"),
        make_record(gender="FEMALE", status="APPROVED", barangay="DITA", interviewed=True),
        make_record(gender="FEMALE", status="DEPLOYED", barangay="POOC", interviewed=True),
        make_record(gender="MALE", status="COMPLETED", barangay="TAGAPO", interviewed=True,
                    date_submitted=date(2024, 11, 3)),
        make_record(gender="MALE", status="REJECTED", barangay="LABAS", interviewed=True),
        make_record(gender="FEMALE", status="APPROVED", barangay="IBABA", interviewed=True,
                    archived=True, archived_date=date(2025, 3, 1), date_submitted=date(2023, 5, 5)),
    ]


class TestStatistics:
    def test_archived_records_are_excluded(self, applicants):
        stats = statistics.compute_statistics(applicants)
        assert stats.total_applicants == 5
        assert stats.approved == 1
        assert stats.female_count == 2

    def test_status_counts_sum_to_total(self, applicants):
        stats = statistics.compute_statistics(applicants)
        status_sum = sum(getattr(stats, s.lower()) for s in STATUSES)
        assert status_sum == stats.total_applicants == stats.male_count + stats.female_count

    def test_gendered_status_counts(self, applicants):
        stats = statistics.compute_statistics(applicants)
        assert stats.pending_male == 1
        assert stats.approved_female == 1
        assert stats.approved_male == 0
        assert stats.rejected_male == 1
        for status in STATUSES:
            key = status.lower()
            assert getattr(stats, f"{key}_male") + getattr(stats, f"{key}_female") == getattr(stats, key)

    def test_interviewed_and_barangays(self, applicants):
        stats = statistics.compute_statistics(applicants)
        assert stats.interviewed == 4
        assert stats.interviewed_male == 2
        assert stats.interviewed_female == 2
        assert stats.barangays_covered == 4

    def test_year_filter(self, applicants):
        stats = statistics.compute_statistics(applicants, year=2024)
        assert stats.total_applicants == 1
        assert stats.completed == 1

    def test_empty_snapshot(self):
        stats = statistics.compute_statistics([])
        assert stats.total_applicants == 0
        assert stats.barangays_covered == 0


class TestBreakdowns:
    def test_barangay_rows_cover_every_barangay(self, applicants):
        rows = statistics.compute_barangay_statistics(applicants)
        assert [r.barangay for r in rows] == BARANGAYS
        dita = next(r for r in rows if r.barangay == "DITA")
        assert (dita.total, dita.male, dita.female, dita.pending, dita.approved) == (2, 1, 1, 1, 1)
        ibaba = next(r for r in rows if r.barangay == "IBABA")
        assert ibaba.total == 0

    def test_status_rows_carry_colors(self, applicants):
        rows = statistics.compute_status_statistics(applicants)
        assert [r.status for r in rows] == STATUSES
        pending = rows[0]
        assert pending.color == "bg-yellow-100 text-yellow-800"
        assert rows[-1].color == "bg-gray-100 text-gray-800"
        assert sum(r.total for r in rows) == 5

    def test_gender_rows(self, applicants):
        male, female = statistics.compute_gender_statistics(applicants)
        assert (male.gender, male.total, male.pending, male.completed) == ("MALE", 3, 1, 1)
        assert (female.gender, female.total, female.approved, female.deployed) == ("FEMALE", 2, 1, 1)

    def test_available_years_include_archived(self, applicants):
        assert statistics.available_years(applicants) == [2025, 2024, 2023]


class TestDrillDown:
    def test_total_type_returns_active(self, applicants):
        assert len(statistics.applicants_by_type(applicants, "total")) == 5

    def test_status_type(self, applicants):
        result = statistics.applicants_by_type(applicants, "APPROVED")
        assert len(result) == 1 and not result[0].archived

    def test_by_barangay_with_year(self, applicants):
        assert len(statistics.applicants_by_barangay(applicants, "dita", year=2025)) == 2
        assert statistics.applicants_by_barangay(applicants, "DITA", year=2024) == []

    def test_by_gender_and_status(self, applicants):
        result = statistics.applicants_by_gender_and_status(applicants, "MALE", "REJECTED")
        assert [a.status for a in result] == ["REJECTED"]

    def test_unknown_status_rejected(self, applicants):
        with pytest.raises(ValidationError):
            statistics.applicants_by_status(applicants, "ON HOLD")


class TestYearScopedBreakdowns:
    """Archived records and other submission years drop out of every breakdown"""

    @pytest.fixture
    def snapshot(self, make_record):
        return {
            "pending_2025": make_record(gender="MALE", status="PENDING", barangay="DITA"),
            "approved_2025": make_record(gender="FEMALE", status="APPROVED", barangay="DITA"),
            "approved_2024": make_record(gender="FEMALE", status="APPROVED", barangay="DITA",
                                         date_submitted=date(2024, 8, 1)),
            "archived_2025": make_record(gender="FEMALE", status="APPROVED", barangay="DITA",
                                         archived=True, archived_date=date(2025, 5, 1)),
            "rejected_2024": make_record(gender="MALE", status="REJECTED", barangay="POOC",
                                         date_submitted=date(2024, 9, 9)),
        }

    @staticmethod
    def ids(applicants):
        return [a.id for a in applicants]

    def test_barangay_rows(self, snapshot):
        rows = {r.barangay: r for r in statistics.compute_barangay_statistics(snapshot.values(), year=2025)}
        assert (rows["DITA"].total, rows["DITA"].male, rows["DITA"].female) == (2, 1, 1)
        assert (rows["DITA"].pending, rows["DITA"].approved) == (1, 1)
        assert rows["POOC"].total == 0

        rows = {r.barangay: r for r in statistics.compute_barangay_statistics(snapshot.values(), year=2024)}
        assert (rows["DITA"].total, rows["POOC"].total, rows["POOC"].rejected) == (1, 1, 1)

    def test_status_rows(self, snapshot):
        rows = {r.status: r for r in statistics.compute_status_statistics(snapshot.values(), year=2025)}
        assert (rows["APPROVED"].total, rows["APPROVED"].female) == (1, 1)
        assert rows["REJECTED"].total == 0

    def test_gender_rows(self, snapshot):
        rows = {r.gender: r for r in statistics.compute_gender_statistics(snapshot.values(), year=2025)}
        assert (rows["FEMALE"].total, rows["FEMALE"].approved) == (1, 1)
        assert (rows["MALE"].total, rows["MALE"].pending, rows["MALE"].rejected) == (1, 1, 0)

    def test_drill_downs(self, snapshot):
        applicants = list(snapshot.values())
        assert self.ids(statistics.applicants_by_type(applicants, "total", year=2025)) == [
            snapshot["pending_2025"].id,
            snapshot["approved_2025"].id,
        ]
        assert self.ids(statistics.applicants_by_type(applicants, "approved", year=2024)) == [
            snapshot["approved_2024"].id
        ]
        assert self.ids(statistics.applicants_by_status(applicants, "APPROVED", year=2025)) == [
            snapshot["approved_2025"].id
        ]
        assert self.ids(statistics.applicants_by_gender_and_status(applicants, "MALE", "REJECTED", year=2024)) == [
            snapshot["rejected_2024"].id
        ]
        assert statistics.applicants_by_gender_and_status(applicants, "MALE", "REJECTED", year=2025) == []
