"""Timeline — merging audit rows, activities and notes into one newest-first feed."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from uuid import uuid4

from app.core.timeline import merge_timeline

T0 = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)


def _audit(at, action="CREATE"):
    return SimpleNamespace(
        id=uuid4(), action=action, entity_name="candidate",
        performed_at=at, performed_by="auth-1", changed_fields=None,
    )


def _activity(at, title="Status Updated"):
    return SimpleNamespace(
        id=uuid4(), title=title, description=None, created_at=at,
        created_by="auth-2", metadata_json={"field": "status"},
    )


def _note(at, content="Called, left voicemail"):
    return SimpleNamespace(id=uuid4(), content=content, created_at=at, created_by="auth-3")


def test_items_sorted_newest_first():
    items = merge_timeline(
        [_audit(T0)],
        [_activity(T0 + timedelta(hours=2))],
        [_note(T0 + timedelta(hours=1))],
    )
    assert [i["type"] for i in items] == ["activity", "note", "audit"]


def test_every_item_has_the_same_shape():
    items = merge_timeline([_audit(T0)], [_activity(T0)], [_note(T0)])
    for item in items:
        assert set(item) == {
            "id", "type", "title", "description", "timestamp", "user_id", "metadata",
        }


def test_audit_item_titles_and_descriptions():
    (item,) = merge_timeline([_audit(T0, "UPDATE")], [], [])
    assert item["title"] == "UPDATE Action"
    assert item["description"] == "UPDATE candidate record"
    assert item["user_id"] == "auth-1"


def test_note_item_uses_content_as_description():
    (item,) = merge_timeline([], [], [_note(T0, "Great fit")])
    assert item["title"] == "Note"
    assert item["description"] == "Great fit"


def test_output_is_json_safe():
    (item,) = merge_timeline([], [_activity(T0)], [])
    assert item["timestamp"] == T0.isoformat()
    assert isinstance(item["id"], str)


def test_naive_timestamps_treated_as_utc():
    naive_later = (T0 + timedelta(minutes=5)).replace(tzinfo=None)
    items = merge_timeline([_audit(T0)], [], [_note(naive_later)])
    assert items[0]["type"] == "note"


def test_empty_sources_give_empty_timeline():
    assert merge_timeline([], [], []) == []
