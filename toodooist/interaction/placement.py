"""
Placement Resolver.

Turns a finished drag into either a deletion (released over the trash zone)
or a new explicit position (anchor + drag offset). Final positions are not
clamped to the viewport.
"""

from dataclasses import dataclass

from toodooist.core.logging import get_logger
from toodooist.interaction.drag import DragSnapshot
from toodooist.interaction.geometry import Point
from toodooist.interaction.scheduling import ImmediateScheduler, Scheduler
from toodooist.repositories.note import MutationResult, NoteRepository
from toodooist.schemas.note import Position

logger = get_logger(__name__)

DEFAULT_DELETION_DELAY = 0.2


@dataclass(frozen=True)
class Reposition:
    note_id: int
    position: Position


@dataclass(frozen=True)
class Discard:
    note_id: int


Placement = Reposition | Discard


def resolve_placement(snapshot: DragSnapshot, base_position: Position) -> Placement:
    """
    Decide where a dragged note ends up.

    An unplaced note is anchored at the slot it was rendered in when the
    drag started; a placed note at its stored position.

    Args:
        snapshot: Terminal drag state
        base_position: The note's position before the drag

    Returns:
        Discard when released over the trash, otherwise Reposition
    """
    if snapshot.over_trash:
        return Discard(snapshot.target_id)

    if base_position.is_unplaced:
        anchor = snapshot.start_anchor or Point(0.0, 0.0)
        base = Position(x=anchor.x, y=anchor.y)
    else:
        base = base_position

    return Reposition(
        snapshot.target_id,
        base.translated(snapshot.live_offset.x, snapshot.live_offset.y),
    )


class PlacementResolver:
    """Applies resolved placements to the repository."""

    def __init__(
        self,
        repository: NoteRepository,
        scheduler: Scheduler | None = None,
        deletion_delay: float = DEFAULT_DELETION_DELAY,
    ) -> None:
        self._repository = repository
        self._scheduler = scheduler or ImmediateScheduler()
        self.deletion_delay = deletion_delay

    def settle(self, snapshot: DragSnapshot) -> Placement | None:
        """
        Resolve and apply a finished drag.

        Returns:
            The placement applied or scheduled, or None if the note vanished
        """
        note = self._repository.get(snapshot.target_id)
        if note is None:
            logger.debug("Drag target no longer exists", extra={"note_id": snapshot.target_id})
            return None

        placement = resolve_placement(snapshot, note.position)
        if isinstance(placement, Discard):
            logger.info(
                "Note dropped on trash",
                extra={"note_id": placement.note_id, "delay": self.deletion_delay},
            )
            self._scheduler.call_later(
                self.deletion_delay,
                lambda: self._discard(placement.note_id),
            )
        else:
            self._repository.update_position(placement.note_id, placement.position)
        return placement

    def _discard(self, note_id: int) -> MutationResult:
        result = self._repository.delete(note_id)
        if not result.found:
            logger.debug("Deferred delete found nothing to remove", extra={"note_id": note_id})
        return result
