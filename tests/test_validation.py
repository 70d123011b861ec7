import json
from datetime import date, datetime, timezone

import pytest

from newspulse.errors import NewsValidationError, ValidationErrorKind
from newspulse.models.news import NO_LINK, Category
from newspulse.validation import validate_payload

NOW = datetime(2025, 1, 12, 15, 30, tzinfo=timezone.utc)


def _record(**overrides):
    record = {
        "id": 1,
        "title": "EU finalises AI Act guidance",
        "url": "https://example.com/eu-ai-act",
        "source": "Example Times",
        "date": "2025-01-10",
        "category": "Policy",
        "abstract": "Regulators published guidance. It clarifies obligations.",
    }
    record.update(overrides)
    return record


def _payload(*records) -> str:
    return json.dumps({"news": list(records)})


def test_valid_records_become_age_stamped_items() -> None:
    items = validate_payload(_payload(_record()), NOW)

    assert len(items) == 1
    item = items[0]
    assert item.title == "EU finalises AI Act guidance"
    assert item.date == date(2025, 1, 10)
    assert item.category is Category.POLICY
    assert item.days_ago == 2


def test_one_malformed_record_is_dropped_not_fatal() -> None:
    records = [_record(id=i, title=f"Story {i}") for i in range(1, 5)]
    del records[2]["abstract"]

    items = validate_payload(_payload(*records), NOW)

    assert [item.title for item in items] == ["Story 1", "Story 2", "Story 4"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": ""},
        {"title": "   "},
        {"title": 42},
        {"source": None},
        {"abstract": ["not", "text"]},
        {"url": 7},
        {"category": 3},
        {"date": "not a date"},
        {"date": "2025-02-30"},
        {"date": "2025-01-13"},
        {"date": 20250110},
    ],
)
def test_invalid_records_are_rejected(overrides) -> None:
    payload = _payload(_record(title="Keeper"), _record(**overrides))

    items = validate_payload(payload, NOW)

    assert [item.title for item in items] == ["Keeper"]


def test_non_object_records_are_dropped() -> None:
    payload = _payload("just a string", _record(), None)
    assert len(validate_payload(payload, NOW)) == 1


def test_every_returned_item_has_all_required_fields() -> None:
    records = [_record(id=i) for i in range(5)] + [{"id": 99}, {}]
    for item in validate_payload(_payload(*records), NOW):
        assert item.title and item.source and item.abstract
        assert item.url
        assert isinstance(item.category, Category)
        assert item.date <= NOW.date()


def test_unknown_categories_become_uncategorized() -> None:
    items = validate_payload(
        _payload(
            _record(category="Quantum"),
            _record(category="System"),
            _record(category="generative ai"),
            _record(category="IA Generativa"),
            _record(category="Robotica"),
        ),
        NOW,
    )

    assert [item.category for item in items] == [
        Category.UNCATEGORIZED,
        Category.UNCATEGORIZED,
        Category.GENERATIVE_AI,
        Category.GENERATIVE_AI,
        Category.ROBOTICS,
    ]


def test_empty_url_becomes_no_link_placeholder() -> None:
    items = validate_payload(_payload(_record(url="  "), _record(url="#")), NOW)
    assert [item.url for item in items] == [NO_LINK, NO_LINK]
    assert not items[0].has_link


def test_ids_are_kept_or_assigned_by_position() -> None:
    items = validate_payload(
        _payload(_record(id="a-1"), _record(id=None), _record(id=True)),
        NOW,
    )
    assert [item.id for item in items] == ["a-1", 2, 3]


def test_order_is_preserved_and_duplicates_are_kept() -> None:
    records = [_record(title="Same"), _record(title="Other"), _record(title="Same")]
    items = validate_payload(_payload(*records), NOW)
    assert [item.title for item in items] == ["Same", "Other", "Same"]


def test_datetime_strings_are_reduced_to_their_day() -> None:
    items = validate_payload(_payload(_record(date="2025-01-09T08:15:00Z")), NOW)
    assert items[0].date == date(2025, 1, 9)
    assert items[0].days_ago == 3


@pytest.mark.parametrize(
    "partial", ["2025", "March", "2025-01", "Jan 10, 2025", "10/01/2025", "2025-1-9"]
)
def test_partial_or_free_form_dates_are_rejected(partial) -> None:
    late_now = datetime(2025, 12, 31, tzinfo=timezone.utc)
    payload = _payload(_record(title="Keeper"), _record(date=partial))

    items = validate_payload(payload, late_now)

    assert [item.title for item in items] == ["Keeper"]


def test_space_separated_datetimes_are_accepted() -> None:
    items = validate_payload(_payload(_record(date="2025-01-11 23:00:00")), NOW)
    assert items[0].date == date(2025, 1, 11)


def test_today_is_accepted_and_zero_days_old() -> None:
    items = validate_payload(_payload(_record(date="2025-01-12")), NOW)
    assert items[0].days_ago == 0


def test_extra_fields_are_ignored() -> None:
    items = validate_payload(_payload(_record(daysAgo=99, tags=["x"])), NOW)
    assert items[0].days_ago == 2


@pytest.mark.parametrize(
    ("payload", "kind"),
    [
        ('{"news": [', ValidationErrorKind.MALFORMED_JSON),
        ("{news: []}", ValidationErrorKind.MALFORMED_JSON),
        ('["not", "an", "object"]', ValidationErrorKind.MISSING_NEWS_ARRAY),
        ('{"items": []}', ValidationErrorKind.MISSING_NEWS_ARRAY),
        ('{"news": {"title": "x"}}', ValidationErrorKind.MISSING_NEWS_ARRAY),
        ('{"news": []}', ValidationErrorKind.ALL_RECORDS_INVALID),
        ('{"news": [{"title": "x"}, 3]}', ValidationErrorKind.ALL_RECORDS_INVALID),
    ],
)
def test_batch_failures_carry_their_kind(payload, kind) -> None:
    with pytest.raises(NewsValidationError) as excinfo:
        validate_payload(payload, NOW)
    assert excinfo.value.error_kind is kind
