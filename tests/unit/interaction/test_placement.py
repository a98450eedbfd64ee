"""
Unit Tests for the Placement Resolver.
"""

import asyncio

import pytest

from toodooist.interaction.drag import DragSnapshot
from toodooist.interaction.geometry import Point
from toodooist.interaction.placement import (
    Discard,
    PlacementResolver,
    Reposition,
    resolve_placement,
)
from toodooist.interaction.scheduling import ImmediateScheduler, LoopScheduler, Scheduler
from toodooist.repositories.note import Outcome
from toodooist.schemas.note import UNPLACED, Position


def _snapshot(target_id=1, origin=(100, 100), pointer=(130, 160), over_trash=False, anchor=None):
    origin_point = Point(*origin)
    pointer_point = Point(*pointer)
    return DragSnapshot(
        target_id=target_id,
        origin=origin_point,
        pointer=pointer_point,
        live_offset=pointer_point.minus(origin_point),
        over_trash=over_trash,
        start_anchor=Point(*anchor) if anchor else None,
    )


class RecordingScheduler(Scheduler):
    """Holds callbacks until run() is called."""

    def __init__(self):
        self.pending = []

    def call_later(self, delay, callback):
        self.pending.append((delay, callback))

    def run(self):
        pending, self.pending = self.pending, []
        for _, callback in pending:
            callback()


class TestResolvePlacement:
    """Tests for the pure placement decision."""

    def test_placed_note_moves_by_offset(self):
        placement = resolve_placement(_snapshot(), Position(x=50, y=50))
        assert placement == Reposition(1, Position(x=80, y=110))

    def test_unplaced_note_uses_rendered_anchor(self):
        placement = resolve_placement(_snapshot(anchor=(40, 60)), UNPLACED)
        assert placement == Reposition(1, Position(x=70, y=120))

    def test_unplaced_without_anchor_starts_at_origin(self):
        placement = resolve_placement(_snapshot(), UNPLACED)
        assert placement == Reposition(1, Position(x=30, y=60))

    def test_anchor_ignored_for_placed_note(self):
        placement = resolve_placement(_snapshot(anchor=(999, 999)), Position(x=50, y=50))
        assert placement.position == Position(x=80, y=110)

    def test_release_over_trash_discards(self):
        placement = resolve_placement(_snapshot(over_trash=True), Position(x=50, y=50))
        assert placement == Discard(1)

    def test_position_is_not_clamped(self):
        placement = resolve_placement(
            _snapshot(origin=(10, 10), pointer=(-200, -50)), Position(x=20, y=20),
        )
        assert placement.position == Position(x=-190, y=-40)


class TestPlacementResolver:
    """Tests for applying placements to the repository."""

    def test_reposition_updates_note(self, repository):
        note = repository.create("a").note
        repository.update_position(note.id, Position(x=50, y=50))

        placement = PlacementResolver(repository).settle(_snapshot(target_id=note.id))

        assert placement == Reposition(note.id, Position(x=80, y=110))
        assert repository.get(note.id).position == Position(x=80, y=110)

    def test_discard_with_immediate_scheduler(self, repository):
        note = repository.create("a").note

        PlacementResolver(repository, ImmediateScheduler()).settle(
            _snapshot(target_id=note.id, over_trash=True),
        )

        assert repository.get(note.id) is None

    def test_discard_is_deferred_by_delay(self, repository):
        note = repository.create("a").note
        scheduler = RecordingScheduler()
        resolver = PlacementResolver(repository, scheduler, deletion_delay=0.2)

        resolver.settle(_snapshot(target_id=note.id, over_trash=True))

        assert repository.get(note.id) is not None
        assert scheduler.pending[0][0] == 0.2
        scheduler.run()
        assert repository.get(note.id) is None

    def test_deferred_delete_of_vanished_note_is_harmless(self, repository):
        note = repository.create("a").note
        scheduler = RecordingScheduler()
        resolver = PlacementResolver(repository, scheduler)

        resolver.settle(_snapshot(target_id=note.id, over_trash=True))
        assert repository.delete(note.id).outcome is Outcome.SAVED
        scheduler.run()

        assert len(repository) == 0

    def test_missing_target_is_a_no_op(self, repository):
        repository.create("a")
        assert PlacementResolver(repository).settle(_snapshot(target_id=404)) is None


class TestLoopScheduler:
    """Tests for asyncio-backed deferred deletion."""

    @pytest.mark.asyncio
    async def test_callback_runs_after_delay(self):
        calls = []
        LoopScheduler().call_later(0.01, lambda: calls.append("done"))

        assert calls == []
        await asyncio.sleep(0.05)
        assert calls == ["done"]

    @pytest.mark.asyncio
    async def test_deferred_discard_on_loop(self, repository):
        note = repository.create("a").note
        resolver = PlacementResolver(repository, LoopScheduler(), deletion_delay=0.01)

        resolver.settle(_snapshot(target_id=note.id, over_trash=True))

        assert repository.get(note.id) is not None
        await asyncio.sleep(0.05)
        assert repository.get(note.id) is None
