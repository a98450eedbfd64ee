"""
Render Surface Contract.

The presentation layer the engine talks to. The surface reports the
viewport size and where an unplaced note currently renders, and owns the
global pointer listeners that a drag session holds while it is active.

HeadlessSurface is an in-process implementation with a fixed viewport and
explicit slot anchors, used by the CLI and tests.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass

from toodooist.core.logging import get_logger
from toodooist.interaction.geometry import Point, Viewport

logger = get_logger(__name__)

MoveHandler = Callable[[Point], None]
EndHandler = Callable[[Point | None], object]


class RenderSurface(ABC):
    """Base class for render surfaces driving the drag engine."""

    @abstractmethod
    def viewport(self) -> Viewport:
        """Current viewport size."""
        ...

    @abstractmethod
    def rendered_anchor(self, note_id: int) -> Point | None:
        """
        Top-left of the note's default flow-layout slot.

        Queried once when a drag starts on an unplaced note. Returns None
        when the note is not laid out.
        """
        ...

    @abstractmethod
    def capture_pointer(
        self, on_move: MoveHandler, on_end: EndHandler,
    ) -> AbstractContextManager[None]:
        """
        Register global pointer move and up/cancel listeners.

        The listeners stay attached exactly as long as the returned
        context is open.
        """
        ...


@dataclass
class _Listeners:
    on_move: MoveHandler
    on_end: EndHandler


class HeadlessSurface(RenderSurface):
    """
    Render surface without a display.

    Slot anchors stand in for the flow layout; dispatch_* deliver pointer
    events to whichever listeners are attached at the time.
    """

    def __init__(
        self,
        viewport: Viewport,
        anchors: dict[int, Point] | None = None,
    ) -> None:
        self._viewport = viewport
        self.anchors: dict[int, Point] = dict(anchors or {})
        self._attached: list[_Listeners] = []

    def viewport(self) -> Viewport:
        return self._viewport

    def resize(self, viewport: Viewport) -> None:
        self._viewport = viewport

    def rendered_anchor(self, note_id: int) -> Point | None:
        return self.anchors.get(note_id)

    @contextmanager
    def _capture(self, on_move: MoveHandler, on_end: EndHandler) -> Iterator[None]:
        listeners = _Listeners(on_move, on_end)
        self._attached.append(listeners)
        logger.debug("Pointer listeners attached", extra={"attached": len(self._attached)})
        try:
            yield
        finally:
            self._attached.remove(listeners)
            logger.debug("Pointer listeners detached", extra={"attached": len(self._attached)})

    def capture_pointer(
        self, on_move: MoveHandler, on_end: EndHandler,
    ) -> AbstractContextManager[None]:
        return self._capture(on_move, on_end)

    @property
    def listener_count(self) -> int:
        return len(self._attached)

    def dispatch_move(self, x: float, y: float) -> None:
        for listeners in list(self._attached):
            listeners.on_move(Point(x, y))

    def dispatch_end(self, x: float | None = None, y: float | None = None) -> None:
        """Pointer-up at (x, y), or a cancel when no coordinate is given."""
        pointer = Point(x, y) if x is not None and y is not None else None
        for listeners in list(self._attached):
            listeners.on_end(pointer)
