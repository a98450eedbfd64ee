"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Boards under test use an in-memory key/value backend, a fixed clock and a
seeded random source so ids and rotations are reproducible.
"""

import random
from collections.abc import Callable
from datetime import datetime

import pytest

from toodooist.interaction.geometry import TrashZone, Viewport
from toodooist.interaction.surface import HeadlessSurface
from toodooist.repositories.note import NoteRepository
from toodooist.services.board import Board
from toodooist.storage.backends import MemoryBackend
from toodooist.storage.note_store import NoteStore


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def memory_backend() -> MemoryBackend:
    """Empty in-memory key/value backend."""
    return MemoryBackend()


@pytest.fixture
def note_store(memory_backend: MemoryBackend) -> NoteStore:
    """Note store over the in-memory backend."""
    return NoteStore(memory_backend)


# =============================================================================
# Repository Fixtures
# =============================================================================


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 10, 12, 0, 0)


@pytest.fixture
def clock(fixed_now: datetime) -> Callable[[], datetime]:
    """Clock frozen at fixed_now."""
    return lambda: fixed_now


@pytest.fixture
def repository(note_store: NoteStore, clock: Callable[[], datetime]) -> NoteRepository:
    """Empty repository with deterministic ids and rotations."""
    return NoteRepository(note_store, clock=clock, rng=random.Random(7))


# =============================================================================
# Interaction Fixtures
# =============================================================================


@pytest.fixture
def viewport() -> Viewport:
    return Viewport(1280, 800)


@pytest.fixture
def surface(viewport: Viewport) -> HeadlessSurface:
    """Headless render surface with no laid-out notes."""
    return HeadlessSurface(viewport)


@pytest.fixture
def trash_zone() -> TrashZone:
    return TrashZone(120, 120)


@pytest.fixture
def board(
    repository: NoteRepository,
    surface: HeadlessSurface,
    trash_zone: TrashZone,
) -> Board:
    """Board with immediate deletion."""
    return Board(repository, surface, trash_zone=trash_zone)
