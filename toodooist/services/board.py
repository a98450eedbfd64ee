"""
Board Service.

The board's owned state object: the note repository, the single drag
session and the placement resolver, wired together. The render surface
forwards pointer-down events here; move and up/cancel reach the drag
session through the listeners it captures on the surface.

Usage:
    from toodooist.interaction.geometry import Viewport
    from toodooist.interaction.surface import HeadlessSurface
    from toodooist.services.board import Board

    board = Board.from_config(HeadlessSurface(Viewport(1280, 800)))
    result = board.add_note("Call the plumber", color="mint")
    board.pointer_down(result.note.id, 100, 100)
"""

from dataclasses import dataclass
from datetime import date

from toodooist.core.config import AppConfig, get_app_config
from toodooist.core.exceptions import ValidationError
from toodooist.interaction.drag import DragSession, DragSnapshot
from toodooist.interaction.geometry import ORIGIN, Point, TrashZone
from toodooist.interaction.placement import (
    DEFAULT_DELETION_DELAY,
    Placement,
    PlacementResolver,
)
from toodooist.interaction.scheduling import Scheduler
from toodooist.interaction.surface import RenderSurface
from toodooist.repositories.note import MutationResult, NoteRepository, Outcome
from toodooist.schemas.note import DEFAULT_COLOR, Note, NoteColor
from toodooist.services.base import BaseService
from toodooist.services.due_dates import DueStatus, classify, format_due_date
from toodooist.storage.factory import get_note_store
from toodooist.storage.note_store import NoteStore


@dataclass(frozen=True)
class NoteView:
    """Everything a render pass needs to draw one note."""

    note: Note
    due_status: DueStatus
    due_label: str
    dragging: bool = False
    drag_offset: Point = ORIGIN
    over_trash: bool = False


class Board(BaseService):
    """
    Single sticky-note board.

    All note mutation goes through the repository; render code only reads
    notes(), drag_snapshot() and views().
    """

    def __init__(
        self,
        repository: NoteRepository,
        surface: RenderSurface,
        trash_zone: TrashZone | None = None,
        scheduler: Scheduler | None = None,
        deletion_delay: float = DEFAULT_DELETION_DELAY,
        default_color: NoteColor = DEFAULT_COLOR,
    ) -> None:
        super().__init__()
        self.repository = repository
        self.surface = surface
        self.default_color = default_color
        self.resolver = PlacementResolver(repository, scheduler, deletion_delay)
        self.drag = DragSession(surface, trash_zone or TrashZone(), self._on_drag_end)
        self.last_placement: Placement | None = None

    @classmethod
    def from_config(
        cls,
        surface: RenderSurface,
        scheduler: Scheduler | None = None,
        store: NoteStore | None = None,
        config: AppConfig | None = None,
    ) -> "Board":
        """Build a board from board.yaml / storage.yaml and load stored notes."""
        config = config or get_app_config()
        settings = config.board

        repository = NoteRepository(store or get_note_store(config.storage))
        repository.load()

        return cls(
            repository,
            surface,
            trash_zone=TrashZone(settings.trash_zone.width, settings.trash_zone.height),
            scheduler=scheduler,
            deletion_delay=settings.deletion_delay_ms / 1000,
            default_color=NoteColor.parse(settings.default_color),
        )

    def notes(self) -> tuple[Note, ...]:
        return self.repository.list()

    def drag_snapshot(self) -> DragSnapshot | None:
        return self.drag.snapshot

    def add_note(
        self,
        description: str,
        due_date: date | None = None,
        color: NoteColor | str | None = None,
    ) -> MutationResult:
        """
        Create a note from form input.

        Returns:
            SAVED/UNSAVED with the note, or REJECTED when the input is invalid
        """
        try:
            result = self.repository.create(
                description, due_date, color if color is not None else self.default_color,
            )
        except ValidationError as e:
            self._log_debug("Note input rejected", details=e.details)
            return MutationResult(Outcome.REJECTED, error=e)

        self._log_operation(
            "Note added",
            note_id=result.note.id if result.note else None,
            outcome=result.outcome.value,
        )
        return result

    def pointer_down(self, note_id: int, x: float, y: float, interactive: bool = True) -> bool:
        """
        Forward a pointer/touch-down on a note.

        Args:
            note_id: Note under the pointer
            x: Client x coordinate
            y: Client y coordinate
            interactive: Whether the hit lies in the note's draggable region

        Returns:
            True if a drag session started
        """
        if self.repository.get(note_id) is None:
            self._log_debug("Pointer-down on unknown note", note_id=note_id)
            return False
        return self.drag.begin(note_id, Point(x, y), interactive=interactive)

    def views(self, today: date) -> list[NoteView]:
        """Per-note render data for the current pass, in insertion order."""
        live = self.drag.snapshot
        views = []
        for note in self.repository.list():
            dragging = live is not None and live.target_id == note.id
            views.append(
                NoteView(
                    note=note,
                    due_status=classify(note.due_date, today),
                    due_label=format_due_date(note.due_date),
                    dragging=dragging,
                    drag_offset=live.live_offset if dragging else ORIGIN,
                    over_trash=dragging and live.over_trash,
                )
            )
        return views

    def _on_drag_end(self, snapshot: DragSnapshot) -> None:
        self.last_placement = self.resolver.settle(snapshot)
