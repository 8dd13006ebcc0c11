import pytest
from pydantic import ValidationError

from miro_export.models.board_objects import (
    BOARD_OBJECT_TYPES,
    BoardObject,
    BoardQuery,
    CardBoardObject,
    FrameBoardObject,
    GroupBoardObject,
    ShapeBoardObject,
    parse_board_object,
    parse_board_objects,
)


def test_frame_record_parses_camel_case_fields():
    frame = parse_board_object({
        "id": "3458764513820540000",
        "type": "frame",
        "title": "Frame 1",
        "childrenIds": ["a", "b"],
        "x": 10, "y": -20.5, "width": 800, "height": 600,
        "parentId": None,
    })
    assert isinstance(frame, FrameBoardObject)
    assert frame.children_ids == ["a", "b"]
    assert frame.x == 10.0
    assert frame.parent_id is None


def test_group_and_card_variants():
    group = parse_board_object({"id": "g", "type": "group", "itemsIds": ["1", "2"]})
    assert isinstance(group, GroupBoardObject)
    assert group.items_ids == ["1", "2"]

    card = parse_board_object({"id": "c", "type": "card", "title": "Card text", "tagIds": ["t1"], "dueDate": "2024-01-01"})
    assert isinstance(card, CardBoardObject)
    assert card.tag_ids == ["t1"]
    assert card.due_date == "2024-01-01"


def test_unknown_type_falls_back_to_base_model():
    obj = parse_board_object({"id": "x", "type": "hologram", "glow": True})
    assert type(obj) is BoardObject
    assert obj.is_known_type is False
    assert obj.to_record() == {"id": "x", "type": "hologram", "glow": True}


def test_known_types_without_variant_use_base_model():
    obj = parse_board_object({"id": "c1", "type": "connector", "start": {"item": "1"}})
    assert type(obj) is BoardObject
    assert obj.is_known_type is True


def test_to_record_reproduces_wire_shape():
    record = {
        "id": "s1",
        "type": "shape",
        "content": "<p>STAR</p>",
        "shape": "star",
        "style": {"fillColor": "#ffffff"},
        "parentId": "f1",
        "origin": "center",
    }
    shape = parse_board_object(record)
    assert isinstance(shape, ShapeBoardObject)
    assert shape.to_record() == record


def test_records_are_immutable():
    frame = parse_board_object({"id": "1", "type": "frame", "title": "Frame 1"})
    with pytest.raises(ValidationError):
        frame.title = "Renamed"


def test_missing_id_is_rejected():
    with pytest.raises(ValidationError):
        parse_board_object({"type": "text"})


def test_parse_board_objects_keeps_order():
    objects = parse_board_objects([
        {"id": "2", "type": "text", "content": "b"},
        {"id": "1", "type": "sticky_note", "content": "a"},
    ])
    assert [o.id for o in objects] == ["2", "1"]


def test_type_catalogue_contains_core_types():
    for tag in ("frame", "group", "sticky_note", "text", "shape", "image", "table", "card", "mindmap_node"):
        assert tag in BOARD_OBJECT_TYPES
    assert len(set(BOARD_OBJECT_TYPES)) == len(BOARD_OBJECT_TYPES)


def test_board_query_omits_unset_keys():
    assert BoardQuery().to_runtime_filter() == {}
    assert BoardQuery(type="frame").to_runtime_filter() == {"type": "frame"}
    assert BoardQuery(id=["1", "2"], tags="t").to_runtime_filter() == {"id": ["1", "2"], "tags": "t"}
