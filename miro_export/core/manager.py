"""
Export orchestration.

`ExportManager` ties a `MiroBoard` session to file output: it resolves frame
names to frames, renders SVG or JSON for them (or for the entire board), and
writes the result to one file, one file per frame, or returns it for stdout.
"""
import json
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TYPE_CHECKING

from miro_export.components.board.miro_board import MiroBoard
from miro_export.components.storage.file_storage import FileStorage, is_frame_template, resolve_output_path
from miro_export.core.exceptions import ExportError, FrameCountMismatchError, OutputTemplateError
from miro_export.core.logger import get_logger
from miro_export.models.board_objects import BoardObject, BoardQuery, FrameBoardObject, GroupBoardObject

if TYPE_CHECKING:
    from miro_export.core.config import ConfigurationManager

logger = get_logger(__name__)

EXPORT_FORMATS = ("svg", "json")


@dataclass
class ExportResult:
    """Outcome of an export: files written, or text meant for stdout."""
    written_paths: List[str] = field(default_factory=list)
    output: Optional[str] = None


class ExportManager:
    """
    Runs a complete export against one board.
    """
    def __init__(self, config: Optional['ConfigurationManager'] = None,
                 file_storage: Optional[FileStorage] = None):
        self.config = config
        self.file_storage = file_storage if file_storage is not None else FileStorage(config=config)

    async def resolve_frames(self, board: MiroBoard, frame_names: Sequence[str]) -> List[FrameBoardObject]:
        """
        Looks up frames by title.

        Raises:
            FrameCountMismatchError: If the number of frames found differs from
                the number of names requested.
        """
        names = list(frame_names)
        frames = await board.get_board_objects(BoardQuery(type="frame"), {"title": names})
        if len(frames) != len(names):
            found = [frame.title or "" for frame in frames]
            logger.error(f"Requested frames {names}, found {found}.")
            raise FrameCountMismatchError(requested=names, found=found)
        return frames

    async def render_svg(self, board: MiroBoard, frames: Optional[Sequence[FrameBoardObject]] = None) -> str:
        if frames is None:
            return await board.get_svg()
        return await board.get_svg([frame.id for frame in frames])

    async def render_json(self, board: MiroBoard, frames: Optional[Sequence[FrameBoardObject]] = None) -> str:
        """
        Serializes board objects as a JSON array.

        With frames: the frames, their direct children, and the members of any
        group among those children. Without frames: every object on the board.
        """
        if frames is None:
            objects = await board.get_board_objects()
            return self._to_json(objects)

        child_ids = [child_id for frame in frames for child_id in frame.children_ids]
        frame_children = await self._get_by_ids(board, child_ids)

        group_item_ids = [
            item_id
            for child in frame_children if isinstance(child, GroupBoardObject)
            for item_id in child.items_ids
        ]
        group_children = await self._get_by_ids(board, group_item_ids)

        return self._to_json([*frames, *frame_children, *group_children])

    async def _get_by_ids(self, board: MiroBoard, ids: List[str]) -> List[BoardObject]:
        # An empty id filter would match the whole board.
        if not ids:
            return []
        return await board.get_board_objects(BoardQuery(id=ids))

    @staticmethod
    def _to_json(objects: Sequence[BoardObject]) -> str:
        return json.dumps([obj.to_record() for obj in objects], ensure_ascii=False)

    async def render(self, board: MiroBoard, export_format: str,
                     frames: Optional[Sequence[FrameBoardObject]] = None) -> str:
        if export_format == "svg":
            return await self.render_svg(board, frames)
        if export_format == "json":
            return await self.render_json(board, frames)
        raise ExportError(f"Unsupported export format: {export_format}. Must be one of {', '.join(EXPORT_FORMATS)}.")

    async def export_board(self, board: MiroBoard, frame_names: Optional[Sequence[str]] = None,
                           output_file: Optional[str] = None, export_format: str = "svg") -> ExportResult:
        """
        Exports from an already open board session.

        If `output_file` contains `{frameName}`, every frame is rendered on its
        own and written to its own file. Otherwise a single export is written
        to `output_file`, or returned in `ExportResult.output` if no file is given.
        """
        if export_format not in EXPORT_FORMATS:
            raise ExportError(f"Unsupported export format: {export_format}. Must be one of {', '.join(EXPORT_FORMATS)}.")

        result = ExportResult()

        if is_frame_template(output_file):
            if not frame_names:
                raise OutputTemplateError()
            for frame_name in frame_names:
                frames = await self.resolve_frames(board, [frame_name])
                content = await self.render(board, export_format, frames)
                path = self.file_storage.write_text(content, resolve_output_path(output_file, frame_name))
                result.written_paths.append(path)
            return result

        frames = await self.resolve_frames(board, frame_names) if frame_names else None
        content = await self.render(board, export_format, frames)
        if output_file:
            result.written_paths.append(self.file_storage.write_text(content, output_file))
        else:
            result.output = content
        return result

    async def export(self, board_id: str, token: Optional[str] = None,
                     frame_names: Optional[Sequence[str]] = None,
                     output_file: Optional[str] = None, export_format: str = "svg",
                     board_load_timeout_ms: Optional[int] = None) -> ExportResult:
        """
        Opens the board, runs `export_board`, and always closes the browser.
        """
        # Fail on bad input before paying for a browser launch.
        if is_frame_template(output_file) and not frame_names:
            raise OutputTemplateError()

        logger.info(f"Exporting board {board_id} as {export_format}.")
        board = MiroBoard(
            board_id,
            token=token,
            config=self.config,
            board_load_timeout_ms=board_load_timeout_ms,
        )
        async with board:
            return await self.export_board(board, frame_names, output_file, export_format)
