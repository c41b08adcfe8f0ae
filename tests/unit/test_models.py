"""Unit tests for activity models."""

import pytest

from tracklog.activities import (
    Activity,
    ActivityType,
    MenuItem,
    MenuStatus,
    merge_activity_type_update,
)


class TestActivityType:
    """Tests for ActivityType serialization."""

    def test_from_dict_mongo_document(self) -> None:
        """Test creation from a stored document."""
        data = {
            "_id": "abc123",
            "name": "work",
            "toggle": True,
            "start_label": "Start work",
            "end_label": "End work",
            "category_id": 2,
        }

        activity_type = ActivityType.from_dict(data)

        assert activity_type.id == "abc123"
        assert activity_type.toggle is True
        assert activity_type.start_label == "Start work"
        assert activity_type.end_label == "End work"
        assert activity_type.category_id == 2
        assert activity_type.description is None

    def test_from_dict_camel_case(self) -> None:
        """Test request-style camelCase keys are accepted."""
        activity_type = ActivityType.from_dict(
            {"id": 7, "name": "read", "toggle": 1, "startLabel": "Open", "endLabel": "Close"}
        )

        assert activity_type.id == "7"
        assert activity_type.toggle is True
        assert activity_type.start_label == "Open"
        assert activity_type.end_label == "Close"

    def test_to_dict_excludes_id(self) -> None:
        """Test the storage document leaves the ID to MongoDB."""
        doc = ActivityType(id="x", name="Meal").to_dict()

        assert "_id" not in doc
        assert "id" not in doc
        assert doc["name"] == "Meal"
        assert doc["toggle"] is False


class TestActivity:
    """Tests for Activity serialization."""

    def test_round_trip(self) -> None:
        """Test document round trip keeps the raw status."""
        activity = Activity(type_id="t1", timestamp=1_000, status="paused", description="x")

        restored = Activity.from_dict({"_id": "a1", **activity.to_dict()})

        assert restored.id == "a1"
        assert restored.status == "paused"
        assert restored.timestamp == 1_000

    def test_missing_timestamp_is_zero(self) -> None:
        """Test absent timestamp becomes 0."""
        assert Activity.from_dict({"type_id": "t1"}).timestamp == 0


class TestMenuItem:
    """Tests for MenuItem rendering."""

    def test_flat_item_to_dict(self) -> None:
        """Test flat items omit enrichment fields."""
        menu_item = MenuItem(name="Meal", id="m", status=MenuStatus.NONE, last_logged="N/A")

        assert menu_item.to_dict() == {
            "name": "Meal",
            "id": "m",
            "status": "none",
            "lastLogged": "N/A",
        }
        assert menu_item.label == "Meal (N/A)"

    def test_enriched_label_uses_time_elapsed(self) -> None:
        """Test enriched items label with elapsed time, not timestamp."""
        menu_item = MenuItem(
            name="End work",
            id="w",
            status=MenuStatus.END,
            last_logged=1_700_000_000_000,
            time_elapsed="3h 12m",
            description="",
        )

        assert menu_item.label == "End work (3h 12m)"


class TestMergeActivityTypeUpdate:
    """Tests for partial activity type updates."""

    @pytest.fixture
    def original(self) -> ActivityType:
        return ActivityType(
            id="w",
            name="work",
            toggle=True,
            start_label="Start work",
            end_label="End work",
            category_id=1,
        )

    def test_only_given_fields_change(self, original: ActivityType) -> None:
        """Test unspecified fields keep stored values."""
        updated = merge_activity_type_update(original, {"endLabel": "Stop work"})

        assert updated.end_label == "Stop work"
        assert updated.start_label == "Start work"
        assert updated.name == "work"
        assert updated.id == "w"

    def test_empty_values_ignored(self, original: ActivityType) -> None:
        """Test empty strings do not overwrite stored values."""
        updated = merge_activity_type_update(original, {"name": "", "category_id": 4})

        assert updated.name == "work"
        assert updated.category_id == 4

    def test_no_fields_raises(self, original: ActivityType) -> None:
        """Test an update without fields is rejected."""
        with pytest.raises(ValueError, match="Missing name"):
            merge_activity_type_update(original, {"unrelated": "x"})
