"""
Pydantic models for Miro board object records.

Records are read-only snapshots of the remote board returned by
`window.miro.board.get()`. Field names follow Python conventions; the wire
names are the camelCase ones used by the Miro runtime (`childrenIds`,
`parentId`, ...). Attributes without a declared field are kept untouched so a
record can be dumped back to exactly what the runtime returned.
"""
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

BOARD_OBJECT_TYPES = (
    "text",
    "sticky_note",
    "shape",
    "image",
    "frame",
    "preview",
    "card",
    "app_card",
    "usm",
    "kanban",
    "document",
    "mockup",
    "curve",
    "webscreen",
    "table",
    "svg",
    "emoji",
    "embed",
    "connector",
    "unsupported",
    "table_text",
    "rallycard",
    "stencil",
    "tag",
    "code",
    "red",
    "stamp",
    "pipmatrix",
    "demo_1d_layout",
    "page",
    "action_button",
    "external_diagram",
    "slide_container",
    "sdk_custom_widget",
    "group",
    "struct_doc",
    "mindmap_node",
)


class BoardObject(BaseModel):
    """
    Common attributes shared by every board object.

    `type` is a plain string so tags introduced by newer Miro clients still parse.
    """
    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
        frozen=True,
    )

    id: str
    type: str
    title: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    rotation: Optional[float] = None
    parent_id: Optional[str] = None
    group_id: Optional[str] = None

    @property
    def is_known_type(self) -> bool:
        return self.type in BOARD_OBJECT_TYPES

    def to_record(self) -> Dict[str, Any]:
        """Dump back to the runtime's wire shape, keeping only attributes that were present."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class FrameBoardObject(BoardObject):
    """A container grouping child objects by id."""
    children_ids: List[str] = []


class GroupBoardObject(BoardObject):
    items_ids: List[str] = []


class StickyNoteBoardObject(BoardObject):
    content: Optional[str] = None
    shape: Optional[str] = None
    style: Optional[Dict[str, Any]] = None


class TextBoardObject(BoardObject):
    content: Optional[str] = None
    style: Optional[Dict[str, Any]] = None


class ShapeBoardObject(BoardObject):
    content: Optional[str] = None
    shape: Optional[str] = None
    style: Optional[Dict[str, Any]] = None


class ImageBoardObject(BoardObject):
    url: Optional[str] = None
    alt: Optional[str] = None


class CardBoardObject(BoardObject):
    description: Optional[str] = None
    assignee: Optional[Any] = None
    due_date: Optional[str] = None
    tag_ids: List[str] = []
    style: Optional[Dict[str, Any]] = None


class TableBoardObject(BoardObject):
    pass


BOARD_OBJECT_MODELS: Dict[str, Type[BoardObject]] = {
    "frame": FrameBoardObject,
    "group": GroupBoardObject,
    "sticky_note": StickyNoteBoardObject,
    "text": TextBoardObject,
    "shape": ShapeBoardObject,
    "image": ImageBoardObject,
    "card": CardBoardObject,
    "table": TableBoardObject,
}


def parse_board_object(record: Dict[str, Any]) -> BoardObject:
    """
    Builds the model matching the record's type tag.

    Tags without a dedicated model fall back to `BoardObject`.
    """
    model = BOARD_OBJECT_MODELS.get(record.get("type"), BoardObject)
    return model.model_validate(record)


def parse_board_objects(records: List[Dict[str, Any]]) -> List[BoardObject]:
    return [parse_board_object(record) for record in records]


FilterValue = Union[str, List[str]]


class BoardQuery(BaseModel):
    """
    Filter understood by `window.miro.board.get()`.

    Each field takes a single value or a list of accepted values.
    """
    model_config = ConfigDict(extra="forbid")

    type: Optional[FilterValue] = None
    id: Optional[FilterValue] = None
    tags: Optional[FilterValue] = None

    def to_runtime_filter(self) -> Dict[str, FilterValue]:
        return self.model_dump(exclude_none=True)
