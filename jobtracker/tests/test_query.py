import pytest

from jobtracker.query import apply_filters, filter_by_status, search_text
from jobtracker.record import validate_create


@pytest.fixture()
def records():
    return [
        validate_create({"company": "Acme Corp", "position": "Engineer", "status": "applied", "tags": "python, remote"}),
        validate_create({"company": "Globex", "position": "Data Scientist", "status": "interviewing", "notes": "Recruiter said ACME alumni welcome"}),
        validate_create({"company": "Initech", "position": "Platform Engineer", "status": "rejected"}),
        validate_create({"company": "Umbrella", "position": "Analyst", "status": "applied", "tags": ["Biotech"]}),
    ]


def _companies(rs):
    return [r.company for r in rs]


@pytest.mark.parametrize("empty", [None, ""])
def test_status_filter_passes_everything_when_empty(records, empty):
    assert filter_by_status(records, empty) == records


def test_status_filter_keeps_exact_matches_in_order(records):
    result = filter_by_status(records, "applied")
    assert _companies(result) == ["Acme Corp", "Umbrella"]
    assert all(r.status == "applied" for r in result)


def test_status_filter_is_case_sensitive(records):
    assert filter_by_status(records, "Applied") == []


@pytest.mark.parametrize("empty", [None, "", "   "])
def test_search_passes_everything_when_empty(records, empty):
    assert search_text(records, empty) == records


def test_search_is_case_insensitive(records):
    upper = search_text(records, "ACME")
    lower = search_text(records, "acme")
    assert upper == lower
    # company on one record, notes on another
    assert _companies(upper) == ["Acme Corp", "Globex"]


def test_search_matches_position_and_tags(records):
    assert _companies(search_text(records, "engineer")) == ["Acme Corp", "Initech"]
    assert _companies(search_text(records, "biotech")) == ["Umbrella"]
    assert _companies(search_text(records, "remo")) == ["Acme Corp"]


def test_search_does_not_look_at_other_fields(records):
    # status and location are not searched
    assert search_text(records, "rejected") == []


def test_filters_are_a_conjunction(records):
    assert _companies(apply_filters(records, "applied", "engineer")) == ["Acme Corp"]
    assert apply_filters(records, "rejected", "acme") == []
    assert apply_filters(records) == records


def test_filters_accept_any_iterable(records):
    assert _companies(apply_filters(iter(records), "interviewing")) == ["Globex"]
