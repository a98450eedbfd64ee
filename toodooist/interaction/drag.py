"""
Drag Session State Machine.

Tracks one pointer interaction with a single note, from pointer-down on
the note's interactive region to pointer-up or cancel.

States:
    IDLE   -> ACTIVE  pointer-down on a note (ignored while ACTIVE)
    ACTIVE -> ACTIVE  pointer-move: offset and trash membership recomputed
    ACTIVE -> IDLE    pointer-up / cancel: snapshot handed off, session cleared

The global move/up listeners are acquired from the render surface on
IDLE -> ACTIVE and released on ACTIVE -> IDLE, including when the hand-off
raises.
"""

from collections.abc import Callable
from contextlib import ExitStack
from dataclasses import dataclass
from enum import Enum

from toodooist.core.logging import get_logger
from toodooist.interaction.geometry import ORIGIN, Point, TrashZone
from toodooist.interaction.surface import RenderSurface

logger = get_logger(__name__)


class DragState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"


@dataclass(frozen=True)
class DragSnapshot:
    """
    State of an active or just-finished drag.

    start_anchor is where the surface rendered the note when the drag
    began, or None if it was not laid out.
    """

    target_id: int
    origin: Point
    pointer: Point
    live_offset: Point
    over_trash: bool
    start_anchor: Point | None = None


class DragSession:
    """
    The single drag session of a board.

    on_end receives the terminal snapshot when the session ends.
    """

    def __init__(
        self,
        surface: RenderSurface,
        trash_zone: TrashZone,
        on_end: Callable[[DragSnapshot], object],
    ) -> None:
        self._surface = surface
        self._trash_zone = trash_zone
        self._on_end = on_end
        self._listeners: ExitStack | None = None
        self._reset()

    def _reset(self) -> None:
        self._state = DragState.IDLE
        self._target_id: int | None = None
        self._origin = ORIGIN
        self._pointer = ORIGIN
        self._live_offset = ORIGIN
        self._over_trash = False
        self._start_anchor: Point | None = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state is DragState.ACTIVE

    @property
    def trash_zone(self) -> TrashZone:
        return self._trash_zone

    @property
    def snapshot(self) -> DragSnapshot | None:
        """Live session state for rendering, or None when idle."""
        if not self.is_active or self._target_id is None:
            return None
        return DragSnapshot(
            target_id=self._target_id,
            origin=self._origin,
            pointer=self._pointer,
            live_offset=self._live_offset,
            over_trash=self._over_trash,
            start_anchor=self._start_anchor,
        )

    def begin(self, note_id: int, pointer: Point, interactive: bool = True) -> bool:
        """
        Start dragging a note.

        Args:
            note_id: Target note
            pointer: Client coordinate of the pointer-down
            interactive: Whether the pointer hit the note's draggable region

        Returns:
            True if a session started
        """
        if self.is_active:
            logger.debug(
                "Pointer-down ignored, drag already active",
                extra={"active_id": self._target_id, "note_id": note_id},
            )
            return False
        if not interactive:
            return False

        self._state = DragState.ACTIVE
        self._target_id = note_id
        self._origin = pointer
        self._pointer = pointer
        self._live_offset = ORIGIN
        self._over_trash = False

        listeners = ExitStack()
        try:
            self._start_anchor = self._surface.rendered_anchor(note_id)
            listeners.enter_context(self._surface.capture_pointer(self.move, self.end))
        except BaseException:
            listeners.close()
            self._reset()
            raise
        self._listeners = listeners

        logger.debug("Drag started", extra={"note_id": note_id, "x": pointer.x, "y": pointer.y})
        return True

    def move(self, pointer: Point) -> None:
        """Track the pointer. No-op when idle."""
        if not self.is_active:
            return
        self._pointer = pointer
        self._live_offset = pointer.minus(self._origin)
        self._over_trash = self._trash_zone.contains(pointer, self._surface.viewport())

    def end(self, pointer: Point | None = None) -> DragSnapshot | None:
        """
        Finish the session on pointer-up or cancel.

        Args:
            pointer: Final pointer position, or None on cancel

        Returns:
            The terminal snapshot, or None when no session was active
        """
        if not self.is_active:
            return None
        if pointer is not None:
            self.move(pointer)

        final = self.snapshot
        try:
            if final is not None:
                logger.debug(
                    "Drag ended",
                    extra={
                        "note_id": final.target_id,
                        "dx": final.live_offset.x,
                        "dy": final.live_offset.y,
                        "over_trash": final.over_trash,
                    },
                )
                self._on_end(final)
        finally:
            listeners, self._listeners = self._listeners, None
            self._reset()
            if listeners is not None:
                listeners.close()
        return final
