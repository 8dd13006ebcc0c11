import json

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from miro_export.core.exceptions import ExportError, FrameCountMismatchError, OutputTemplateError
from miro_export.core.manager import ExportManager, ExportResult
from miro_export.models.board_objects import BoardQuery, parse_board_objects

FRAME_1 = {"id": "f1", "type": "frame", "title": "Frame 1", "childrenIds": ["s1", "g1"]}
FRAME_2 = {"id": "f2", "type": "frame", "title": "Frame 2", "childrenIds": ["s2"]}
STICKY_1 = {"id": "s1", "type": "sticky_note", "content": "<p>Test 1</p>", "parentId": "f1"}
GROUP_1 = {"id": "g1", "type": "group", "itemsIds": ["t1"], "parentId": "f1"}
TEXT_1 = {"id": "t1", "type": "text", "content": "grouped", "groupId": "g1"}
STICKY_2 = {"id": "s2", "type": "sticky_note", "content": "<p>STAR</p>", "parentId": "f2"}
ALL_RECORDS = [FRAME_1, FRAME_2, STICKY_1, GROUP_1, TEXT_1, STICKY_2]


class FakeBoard:
    """In-memory stand-in for MiroBoard answering queries from a fixed record list."""

    def __init__(self, records=ALL_RECORDS):
        self.records = records
        self.queries = []
        self.get_svg = AsyncMock(side_effect=lambda ids=None: f"<svg data-ids='{','.join(ids or [])}'/>")

    async def get_board_objects(self, query=None, additional_filter=None):
        query = query or BoardQuery()
        runtime_filter = query.to_runtime_filter()
        self.queries.append((runtime_filter, additional_filter))
        matched = self.records
        for key, value in runtime_filter.items():
            accepted = value if isinstance(value, list) else [value]
            matched = [r for r in matched if r.get(key) in accepted]
        for key, value in (additional_filter or {}).items():
            accepted = value if isinstance(value, list) else [value]
            matched = [r for r in matched if key in r and r[key] in accepted]
        return parse_board_objects(matched)


@pytest.fixture
def manager():
    return ExportManager(config=None, file_storage=MagicMock())


@pytest.mark.asyncio
async def test_resolve_frames_queries_frames_by_title(manager):
    board = FakeBoard()
    frames = await manager.resolve_frames(board, ["Frame 2", "Frame 1"])

    assert {f.id for f in frames} == {"f1", "f2"}
    assert board.queries == [({"type": "frame"}, {"title": ["Frame 2", "Frame 1"]})]


@pytest.mark.asyncio
async def test_resolve_frames_more_names_than_frames_raises(manager):
    with pytest.raises(FrameCountMismatchError) as excinfo:
        await manager.resolve_frames(FakeBoard(), ["Frame 1", "Frame 3", "Frame 4"])
    assert "2 frame(s) could not be found on the board." in str(excinfo.value)
    assert excinfo.value.found == ["Frame 1"]


@pytest.mark.asyncio
async def test_resolve_frames_duplicate_titles_raises(manager):
    records = [FRAME_1, dict(FRAME_2, title="Frame 1")]
    with pytest.raises(FrameCountMismatchError):
        await manager.resolve_frames(FakeBoard(records), ["Frame 1"])


@pytest.mark.asyncio
async def test_render_svg_entire_board_and_frames(manager):
    board = FakeBoard()
    assert await manager.render_svg(board) == "<svg data-ids=''/>"
    board.get_svg.assert_awaited_with()

    frames = await manager.resolve_frames(board, ["Frame 2"])
    assert await manager.render_svg(board, frames) == "<svg data-ids='f2'/>"


@pytest.mark.asyncio
async def test_render_json_entire_board(manager):
    output = await manager.render_json(FakeBoard())
    assert json.loads(output) == ALL_RECORDS


@pytest.mark.asyncio
async def test_render_json_frame_includes_children_and_group_members(manager):
    board = FakeBoard()
    frames = await manager.resolve_frames(board, ["Frame 1"])

    output = json.loads(await manager.render_json(board, frames))

    assert [r["id"] for r in output] == ["f1", "s1", "g1", "t1"]
    assert output[0] == FRAME_1
    assert STICKY_2 not in output


@pytest.mark.asyncio
async def test_render_json_frame_without_children_skips_id_queries(manager):
    board = FakeBoard([dict(FRAME_2, childrenIds=[])])
    frames = await manager.resolve_frames(board, ["Frame 2"])
    board.queries.clear()

    output = json.loads(await manager.render_json(board, frames))

    assert [r["id"] for r in output] == ["f2"]
    assert board.queries == []


@pytest.mark.asyncio
async def test_render_unknown_format_raises(manager):
    with pytest.raises(ExportError):
        await manager.render(FakeBoard(), "png")


@pytest.mark.asyncio
async def test_export_board_to_stdout(manager):
    result = await manager.export_board(FakeBoard(), export_format="svg")
    assert result == ExportResult(written_paths=[], output="<svg data-ids=''/>")
    manager.file_storage.write_text.assert_not_called()


@pytest.mark.asyncio
async def test_export_board_selected_frames_to_single_file(manager):
    manager.file_storage.write_text.return_value = "/abs/frames.svg"

    result = await manager.export_board(FakeBoard(), ["Frame 1", "Frame 2"], "frames.svg", "svg")

    manager.file_storage.write_text.assert_called_once_with("<svg data-ids='f1,f2'/>", "frames.svg")
    assert result.written_paths == ["/abs/frames.svg"]
    assert result.output is None


@pytest.mark.asyncio
async def test_export_board_one_file_per_frame(manager):
    manager.file_storage.write_text.side_effect = lambda content, path: f"/abs/{path}"

    result = await manager.export_board(FakeBoard(), ["Frame 1", "Frame 2"], "out/{frameName}.json", "json")

    calls = manager.file_storage.write_text.call_args_list
    assert [c.args[1] for c in calls] == ["out/Frame 1.json", "out/Frame 2.json"]
    assert [r["id"] for r in json.loads(calls[1].args[0])] == ["f2", "s2"]
    assert result.written_paths == ["/abs/out/Frame 1.json", "/abs/out/Frame 2.json"]


@pytest.mark.asyncio
async def test_export_board_template_without_frame_names_raises(manager):
    with pytest.raises(OutputTemplateError):
        await manager.export_board(FakeBoard(), None, "out/{frameName}.svg", "svg")


@pytest.mark.asyncio
async def test_export_board_missing_frame_writes_nothing(manager):
    with pytest.raises(FrameCountMismatchError):
        await manager.export_board(FakeBoard(), ["Nope"], "out.svg", "svg")
    manager.file_storage.write_text.assert_not_called()


@pytest.mark.asyncio
async def test_export_opens_and_closes_board(manager):
    mock_board_cm = MagicMock()
    mock_board_cm.__aenter__ = AsyncMock(return_value=mock_board_cm)
    mock_board_cm.__aexit__ = AsyncMock(return_value=False)

    with patch("miro_export.core.manager.MiroBoard", return_value=mock_board_cm) as PatchedBoard:
        with patch.object(manager, "export_board", AsyncMock(return_value=ExportResult(output="x"))) as mock_export_board:
            result = await manager.export("board-1", token="tok", export_format="json", board_load_timeout_ms=500)

    PatchedBoard.assert_called_once_with("board-1", token="tok", config=None, board_load_timeout_ms=500)
    mock_board_cm.__aenter__.assert_awaited_once()
    mock_board_cm.__aexit__.assert_awaited_once()
    mock_export_board.assert_awaited_once_with(mock_board_cm, None, None, "json")
    assert result.output == "x"


@pytest.mark.asyncio
async def test_export_validates_template_before_launching_browser(manager):
    with patch("miro_export.core.manager.MiroBoard") as PatchedBoard:
        with pytest.raises(OutputTemplateError):
            await manager.export("board-1", output_file="{frameName}.svg")
    PatchedBoard.assert_not_called()
