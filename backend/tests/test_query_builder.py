"""Tests for the declarative filters, sort resolution and page window math."""

from datetime import UTC, date, datetime, timedelta

import pytest

from healthcare_platform.core.filtering import (
    FieldFilter,
    FilterOp,
    build_predicate,
    contains,
    date_range,
    exact,
    value_range,
)
from healthcare_platform.core.pagination import PageWindow, page_count, resolve_window
from healthcare_platform.core.sorting import resolve_sort
from healthcare_platform.models.organization import Organization, OrganizationStatus
from healthcare_platform.models.patient import Patient
from healthcare_platform.repositories.organization_repository import OrganizationRepository
from healthcare_platform.schemas.organization import OrganizationSearch


class TestFilterDeclarations:
    def test_exact_defaults_param_to_column(self):
        assert exact("status") == FieldFilter("status", "status", FilterOp.EQ)

    def test_contains_case_sensitivity(self):
        assert contains("code").op is FilterOp.CONTAINS
        assert contains("name", case_sensitive=False).op is FilterOp.ICONTAINS

    def test_date_range_param_names(self):
        lower, upper = date_range("created_at")
        assert (lower.param, lower.op) == ("created_at_from", FilterOp.GTE)
        assert (upper.param, upper.op) == ("created_at_to", FilterOp.LTE)

    def test_date_range_custom_params(self):
        lower, upper = date_range("coverage_start_date", "coverage_start_from", "coverage_start_to")
        assert lower.param == "coverage_start_from"
        assert upper.column == "coverage_start_date"

    def test_value_range_param_names(self):
        lower, upper = value_range("quantity")
        assert (lower.param, upper.param) == ("quantity_min", "quantity_max")


class TestBuildPredicate:
    FILTERS = (
        exact("status"),
        contains("name", case_sensitive=False),
        *date_range("created_at"),
    )

    def test_absent_values_add_nothing(self):
        assert build_predicate(Organization, self.FILTERS, {}) == []
        assert build_predicate(Organization, self.FILTERS, {"status": None}) == []

    def test_one_criterion_per_set_value(self):
        request = {
            "status": "active",
            "name": "clinic",
            "created_at_from": datetime(2026, 1, 1, tzinfo=UTC),
        }
        assert len(build_predicate(Organization, self.FILTERS, request)) == 3

    def test_reads_attributes_and_unwraps_enums(self):
        request = OrganizationSearch(status=OrganizationStatus.SUSPENDED)
        (criterion,) = build_predicate(Organization, self.FILTERS, request)
        assert criterion.right.value == "suspended"

    def test_contains_escapes_wildcards(self, db_session):
        db_session.add_all(
            [
                Patient(email="a@example.com", full_name="100% Cotton", date_of_birth=date(1990, 1, 1)),
                Patient(email="b@example.com", full_name="1000 Cotton", date_of_birth=date(1990, 1, 1)),
            ]
        )
        db_session.commit()
        criteria = build_predicate(Patient, (contains("full_name"),), {"full_name": "100%"})
        names = [p.full_name for p in db_session.query(Patient).filter(*criteria)]
        assert names == ["100% Cotton"]


class TestResolveSort:
    ALLOWED = ("created_at", "name", "code")

    def test_default_when_absent(self):
        assert resolve_sort(None, None, self.ALLOWED) == ("created_at", "desc")
        assert resolve_sort("  ", None, self.ALLOWED) == ("created_at", "desc")

    @pytest.mark.parametrize(
        "sort,expected",
        [
            ("name", ("name", "desc")),
            ("name:asc", ("name", "asc")),
            ("name asc", ("name", "asc")),
            ("name:DESC", ("name", "desc")),
            ("-name", ("name", "desc")),
            ("+name", ("name", "asc")),
        ],
    )
    def test_accepted_formats(self, sort, expected):
        assert resolve_sort(sort, None, self.ALLOWED) == expected

    def test_order_overrides_embedded_direction(self):
        assert resolve_sort("name:asc", "desc", self.ALLOWED) == ("name", "desc")
        assert resolve_sort("-code", "asc", self.ALLOWED) == ("code", "asc")

    def test_unknown_field_falls_back_to_default(self):
        assert resolve_sort("password", None, self.ALLOWED) == ("created_at", "desc")

    def test_unknown_field_keeps_requested_direction(self):
        assert resolve_sort("password", "asc", self.ALLOWED) == ("created_at", "asc")
        assert resolve_sort("password:asc", None, self.ALLOWED) == ("created_at", "asc")
        assert resolve_sort("+password", None, self.ALLOWED) == ("created_at", "asc")

    def test_invalid_direction_keeps_default(self):
        assert resolve_sort("name:sideways", None, self.ALLOWED) == ("name", "desc")

    def test_custom_default_field(self):
        assert resolve_sort(None, None, ("start_time",), "start_time") == ("start_time", "desc")
        assert resolve_sort(None, "asc", ("start_time",), "start_time") == ("start_time", "asc")


class TestPageWindow:
    def test_defaults(self):
        assert resolve_window(None, None) == PageWindow(page=1, limit=20)

    def test_non_positive_values_normalized(self):
        assert resolve_window(0, 0) == PageWindow(page=1, limit=20)
        assert resolve_window(-3, -1, default_limit=100) == PageWindow(page=1, limit=100)

    def test_limit_clamped(self):
        assert resolve_window(1, 5000).limit == 1000
        assert resolve_window(1, 50, max_limit=25).limit == 25

    def test_skip(self):
        assert PageWindow(page=3, limit=10).skip == 20

    @pytest.mark.parametrize(
        "records,limit,expected",
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (25, 10, 3), (5, 0, 0)],
    )
    def test_page_count(self, records, limit, expected):
        assert page_count(records, limit) == expected


class TestRepositorySearch:
    def _seed(self, db_session, count):
        base = datetime(2026, 1, 1, tzinfo=UTC)
        for i in range(count):
            db_session.add(
                Organization(
                    code=f"ORG{i:02d}",
                    name=f"Clinic {i:02d}",
                    created_at=base + timedelta(minutes=i),
                    updated_at=base + timedelta(minutes=i),
                )
            )
        db_session.commit()

    def test_count_matches_predicate(self, db_session):
        self._seed(db_session, 5)
        rows, total, window = OrganizationRepository(db_session).search(
            OrganizationSearch(code="ORG0", limit=2)
        )
        assert total == 5
        assert len(rows) == 2
        assert window == PageWindow(page=1, limit=2)

    def test_ties_broken_by_id(self, db_session):
        same = datetime(2026, 1, 1, tzinfo=UTC)
        for i in range(4):
            db_session.add(Organization(code=f"TIE{i}", name="Tie", created_at=same, updated_at=same))
        db_session.commit()
        repo = OrganizationRepository(db_session)
        first, _, _ = repo.search(OrganizationSearch(name="Tie", limit=2, page=1))
        second, _, _ = repo.search(OrganizationSearch(name="Tie", limit=2, page=2))
        ids = [o.id for o in first + second]
        assert len(set(ids)) == 4
        assert ids == sorted(ids)

    def test_page_past_end_is_empty(self, db_session):
        self._seed(db_session, 3)
        rows, total, _ = OrganizationRepository(db_session).search(
            OrganizationSearch(code="ORG", page=5, limit=10)
        )
        assert rows == []
        assert total == 3
