"""Tests for menu analysis models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from menusnap.models import (
    DEFAULT_HEALTH_REASON,
    AnalysisState,
    AnalysisStatus,
    HealthCategory,
    MenuItem,
    MenuScanRecord,
)


class TestMenuItem:
    """Tests for MenuItem construction and derived values."""

    @pytest.mark.parametrize("score", [-100, -1, 0, 1, 5, 10, 11, 42])
    def test_score_is_clamped(self, score):
        item = MenuItem(name="Soup", health_score=score)
        assert item.health_score == max(1, min(10, score))

    @pytest.mark.parametrize(
        "score,category",
        [
            (1, HealthCategory.LESS_HEALTHY),
            (4, HealthCategory.LESS_HEALTHY),
            (5, HealthCategory.MODERATE),
            (7, HealthCategory.MODERATE),
            (8, HealthCategory.HEALTHY),
            (10, HealthCategory.HEALTHY),
        ],
    )
    def test_category_boundaries(self, score, category):
        assert MenuItem(name="Soup", health_score=score).health_category is category

    def test_every_score_has_exactly_one_category(self):
        buckets = {c: [] for c in HealthCategory}
        for score in range(1, 11):
            buckets[HealthCategory.from_score(score)].append(score)

        assert buckets[HealthCategory.HEALTHY] == [8, 9, 10]
        assert buckets[HealthCategory.MODERATE] == [5, 6, 7]
        assert buckets[HealthCategory.LESS_HEALTHY] == [1, 2, 3, 4]

    def test_defaults(self):
        item = MenuItem(name="Soup", health_score=6)

        assert item.description is None
        assert item.calories is None
        assert item.health_reason == DEFAULT_HEALTH_REASON

    def test_ids_are_unique(self):
        assert MenuItem(name="A", health_score=5).id != MenuItem(name="A", health_score=5).id

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            MenuItem(name="", health_score=5)

    def test_items_are_immutable(self):
        item = MenuItem(name="Soup", health_score=6)
        with pytest.raises(ValidationError):
            item.health_score = 1

    def test_accepts_wire_aliases(self):
        item = MenuItem.model_validate(
            {"name": "Soup", "healthScore": 12, "healthReason": "broth"}
        )
        assert item.health_score == 10
        assert item.health_reason == "broth"

    def test_category_display_values(self):
        assert HealthCategory.HEALTHY.label == "Healthy"
        assert HealthCategory.LESS_HEALTHY.label == "Less Healthy"
        assert HealthCategory.MODERATE.color == "yellow"


class TestAnalysisState:
    """Tests for AnalysisState constructors."""

    def test_initial_state_is_idle(self):
        state = AnalysisState()
        assert state.status is AnalysisStatus.IDLE
        assert state.items == ()
        assert state.error_message is None
        assert not state.is_terminal

    def test_success_carries_items(self):
        items = [MenuItem(name="Soup", health_score=6)]
        state = AnalysisState.success(items)

        assert state.status is AnalysisStatus.SUCCESS
        assert state.items == tuple(items)
        assert state.error_message is None
        assert state.is_terminal

    def test_failure_carries_message(self):
        state = AnalysisState.failure("boom")

        assert state.status is AnalysisStatus.ERROR
        assert state.items == ()
        assert state.error_message == "boom"


class TestMenuScanRecord:
    """Tests for saved scan records."""

    def test_create_trims_name_and_stamps_date(self):
        before = datetime.now(timezone.utc)
        record = MenuScanRecord.create("  Joe's Diner ", b"jpeg", [MenuItem(name="Soup", health_score=6)])

        assert record.restaurant_name == "Joe's Diner"
        assert record.scan_date >= before
        assert record.id
        assert len(record.items) == 1

    @pytest.mark.parametrize("name", ["", "   ", "\n"])
    def test_blank_name_rejected(self, name):
        with pytest.raises(ValidationError):
            MenuScanRecord.create(name, b"jpeg", [])

    def test_record_is_immutable(self):
        record = MenuScanRecord.create("Joe's", b"jpeg", [])
        with pytest.raises(ValidationError):
            record.restaurant_name = "Other"

    def test_document_round_trip(self, menu_items):
        record = MenuScanRecord.create("Joe's", b"\xff\xd8jpeg", menu_items)

        doc = record.to_document()
        assert doc["scan_id"] == record.id
        assert doc["items"][0]["healthScore"] == menu_items[0].health_score
        assert isinstance(doc["items"][0]["id"], str)

        restored = MenuScanRecord.from_document(doc)
        assert restored == record

    def test_from_document_treats_naive_dates_as_utc(self):
        doc = MenuScanRecord.create("Joe's", b"", []).to_document()
        doc["scan_date"] = datetime(2026, 1, 10, 18, 42)

        restored = MenuScanRecord.from_document(doc)

        assert restored.scan_date.tzinfo is timezone.utc
        assert restored.formatted_date == "Jan 10, 2026, 6:42 PM"
