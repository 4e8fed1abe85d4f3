"""Tests for the learned-pattern stores."""

import json
import threading

import pytest

from donor_parser.schemas import LearnedPattern, PatternType
from donor_parser.storage import (
    FilePatternStore,
    InMemoryPatternStore,
    PatternNotFoundError,
    PatternStore,
)


def _pattern(pattern="Managed by", field="referrer", pattern_type=PatternType.KEYWORD, rate=1.0, used=1):
    return LearnedPattern(
        pattern_type=pattern_type,
        pattern=pattern,
        field=field,
        confidence=rate,
        success_rate=rate,
        usage_count=used,
        is_enabled=rate > 0.3,
    )


class TestUpsert:

    def test_insert(self, memory_pattern_store):
        pattern = _pattern()
        stored = memory_pattern_store.upsert(pattern)
        assert stored.id == pattern.id
        assert memory_pattern_store.get(pattern.id).pattern == "Managed by"

    def test_update_keeps_id(self, memory_pattern_store):
        first = memory_pattern_store.upsert(_pattern(rate=1.0, used=1))
        second = memory_pattern_store.upsert(_pattern(rate=0.25, used=4))
        assert second.id == first.id
        assert len(memory_pattern_store) == 1
        assert second.usage_count == 4
        assert second.success_rate == 0.25
        assert second.is_enabled is False

    def test_same_pattern_different_field_is_new_row(self, memory_pattern_store):
        memory_pattern_store.upsert(_pattern(field="referrer"))
        memory_pattern_store.upsert(_pattern(field="name"))
        assert len(memory_pattern_store) == 2

    def test_concurrent_upserts_of_one_key(self, memory_pattern_store):
        threads = [
            threading.Thread(target=memory_pattern_store.upsert, args=(_pattern(used=i + 1),))
            for i in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(memory_pattern_store) == 1


class TestList:

    @pytest.fixture
    def populated(self, memory_pattern_store):
        memory_pattern_store.upsert(_pattern("Mobile:", "phone", rate=0.5, used=2))
        memory_pattern_store.upsert(_pattern("Date:", "date", rate=1.0, used=1))
        memory_pattern_store.upsert(_pattern("Phone:", "phone", rate=1.0, used=3))
        memory_pattern_store.upsert(
            _pattern(r"\d{2}[ -]\d{2}", "batch", PatternType.REGEX, rate=0.2, used=5)
        )
        return memory_pattern_store

    def test_sorted_by_success_then_usage(self, populated):
        assert [p.pattern for p in populated.list()] == ["Phone:", "Date:", "Mobile:", r"\d{2}[ -]\d{2}"]

    def test_filter_by_field(self, populated):
        assert [p.pattern for p in populated.list(field="phone")] == ["Phone:", "Mobile:"]

    def test_filter_by_type(self, populated):
        assert [p.field for p in populated.list(pattern_type="regex")] == ["batch"]

    def test_enabled_only(self, populated):
        assert len(populated.list(enabled_only=True)) == 3


class TestOverrides:

    def test_set_enabled(self, memory_pattern_store):
        stored = memory_pattern_store.upsert(_pattern())
        disabled = memory_pattern_store.set_enabled(stored.id, False)
        assert not disabled.is_enabled
        assert not memory_pattern_store.get(stored.id).is_enabled

    def test_set_enabled_unknown(self, memory_pattern_store):
        with pytest.raises(PatternNotFoundError):
            memory_pattern_store.set_enabled("missing", True)

    def test_delete(self, memory_pattern_store):
        stored = memory_pattern_store.upsert(_pattern())
        memory_pattern_store.delete(stored.id)
        assert memory_pattern_store.get(stored.id) is None

    def test_delete_unknown(self, memory_pattern_store):
        with pytest.raises(PatternNotFoundError):
            memory_pattern_store.delete("missing")


class TestFilePatternStore:

    def test_persists_across_instances(self, pattern_store, tmp_path):
        stored = pattern_store.upsert(_pattern())
        reopened = FilePatternStore(tmp_path / "patterns")
        assert reopened.get(stored.id) == stored

    def test_document_uses_wire_names(self, pattern_store):
        pattern_store.upsert(_pattern())
        payload = json.loads(pattern_store.path.read_text(encoding="utf-8"))
        row = payload["patterns"][0]
        assert row["patternType"] == "keyword"
        assert row["successRate"] == 1.0
        assert "saved_at" in payload

    def test_no_temp_file_left(self, pattern_store):
        pattern_store.upsert(_pattern())
        assert [p.name for p in pattern_store.root.iterdir()] == ["patterns.json"]

    def test_missing_file_is_empty(self, pattern_store):
        assert pattern_store.list() == []

    def test_corrupt_file_is_empty(self, pattern_store):
        pattern_store.root.mkdir(parents=True)
        pattern_store.path.write_text("{not json", encoding="utf-8")
        assert pattern_store.list() == []
        pattern_store.upsert(_pattern())
        assert len(pattern_store) == 1

    def test_invalid_rows_skipped(self, pattern_store):
        pattern_store.upsert(_pattern())
        payload = json.loads(pattern_store.path.read_text(encoding="utf-8"))
        payload["patterns"].append({"pattern": ""})
        pattern_store.path.write_text(json.dumps(payload), encoding="utf-8")
        assert len(pattern_store) == 1


@pytest.mark.parametrize("store_class", [InMemoryPatternStore, FilePatternStore])
def test_satisfies_protocol(store_class, tmp_path):
    store = store_class() if store_class is InMemoryPatternStore else store_class(tmp_path)
    assert isinstance(store, PatternStore)
