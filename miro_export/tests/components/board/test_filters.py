from miro_export.components.board.filters import apply_filter, object_filter_matches

RECORDS = [
    {"id": "1", "type": "frame", "title": "Frame 1"},
    {"id": "2", "type": "frame", "title": "Frame 2"},
    {"id": "3", "type": "sticky_note", "content": "<p>Test 1</p>"},
    {"id": "4", "type": "shape", "title": None, "shape": "star"},
]


def test_empty_filter_matches_everything():
    assert all(object_filter_matches({}, record) for record in RECORDS)
    assert apply_filter(RECORDS, {}) is RECORDS
    assert apply_filter(RECORDS, None) is RECORDS


def test_scalar_value_matches_by_equality():
    assert object_filter_matches({"title": "Frame 1"}, RECORDS[0])
    assert not object_filter_matches({"title": "Frame 1"}, RECORDS[1])


def test_list_value_matches_any_member():
    matched = apply_filter(RECORDS, {"title": ["Frame 2", "Frame 1"]})
    assert [r["id"] for r in matched] == ["1", "2"]


def test_missing_key_never_matches():
    # The sticky note has no title at all, so even a list containing None does not match it.
    assert not object_filter_matches({"title": [None]}, RECORDS[2])
    assert object_filter_matches({"title": [None]}, RECORDS[3])


def test_all_keys_must_match():
    assert object_filter_matches({"type": "frame", "title": "Frame 2"}, RECORDS[1])
    assert not object_filter_matches({"type": "shape", "title": "Frame 2"}, RECORDS[1])


def test_apply_filter_preserves_order_and_does_not_mutate():
    snapshot = [dict(r) for r in RECORDS]
    matched = apply_filter(RECORDS, {"type": ["shape", "frame"]})
    assert [r["id"] for r in matched] == ["1", "2", "4"]
    assert RECORDS == snapshot


def test_booleans_never_equal_numbers():
    locked = [{"id": "5", "locked": True}, {"id": "6", "locked": 1}, {"id": "7", "locked": 0}]
    assert [r["id"] for r in apply_filter(locked, {"locked": 1})] == ["6"]
    assert [r["id"] for r in apply_filter(locked, {"locked": True})] == ["5"]
    assert [r["id"] for r in apply_filter(locked, {"locked": [False, 1]})] == ["6"]


def test_numbers_compare_by_value_and_strings_do_not_coerce():
    positioned = [{"id": "8", "x": 100}, {"id": "9", "x": 100.5}, {"id": "10", "x": "100"}]
    assert [r["id"] for r in apply_filter(positioned, {"x": 100.0})] == ["8"]
    assert [r["id"] for r in apply_filter(positioned, {"x": [100.5, "100"]})] == ["9", "10"]
