import json
import random
import re

import pytest

from prizewheel.core.segments import load_segments, make_uid, shuffled, to_entry
from prizewheel.core.state import SegmentEntry, label_of


def test_make_uid_format():
    uid = make_uid(random.Random(7))
    assert re.fullmatch(r"[0-9a-z]+-[0-9a-z]+", uid)
    assert make_uid() != make_uid()


def test_shuffled_returns_permutation_copy():
    items = list(range(20))
    result = shuffled(items, random.Random(3))
    assert items == list(range(20))
    assert sorted(result) == items
    assert result != items


def test_shuffled_handles_short_lists():
    assert shuffled([]) == []
    assert shuffled(["only"]) == ["only"]


def test_to_entry_variants():
    assert to_entry("  Hello  ").text == "Hello"
    entry = to_entry({"text": "Q", "id": "q1", "points": 10})
    assert entry == SegmentEntry(text="Q", id="q1")
    assert entry.data == {"points": 10}
    same = SegmentEntry(text="x")
    assert to_entry(same) is same


@pytest.mark.parametrize("bad", [42, {"label": "no text"}, None])
def test_to_entry_rejects_items_without_text(bad):
    with pytest.raises(ValueError):
        to_entry(bad)


@pytest.mark.parametrize(
    "entry, expected",
    [
        (None, ""),
        ("  plain ", "plain"),
        ({"text": " mapped "}, "mapped"),
        ({"other": 1}, ""),
        (SegmentEntry(text="entry"), "entry"),
    ],
)
def test_label_of(entry, expected):
    assert label_of(entry) == expected


def test_load_segments_yaml_list(tmp_path):
    path = tmp_path / "segments.yaml"
    path.write_text("- First\n- text: Second\n  id: two\n", encoding="utf-8")
    entries = load_segments(path)
    assert [e.text for e in entries] == ["First", "Second"]
    assert entries[1].id == "two"


def test_load_segments_questions_mapping_json(tmp_path):
    path = tmp_path / "segments.json"
    path.write_text(json.dumps({"questions": ["A", {"text": "B"}]}), encoding="utf-8")
    assert [e.text for e in load_segments(path)] == ["A", "B"]


@pytest.mark.parametrize("content", ["just a string\n", "segments: 3\n", "- [unclosed\n"])
def test_load_segments_rejects_bad_content(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError):
        load_segments(path)


def test_load_segments_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_segments(tmp_path / "nope.yaml")
