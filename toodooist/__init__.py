"""
Toodooist.

Single-board sticky-note manager.

- core/: Configuration, logging, exceptions, shared utilities
- schemas/: Note data model and validated input
- models/: SQLAlchemy tables backing the key/value store
- storage/: Persistent store adapter and key/value backends
- repositories/: Canonical in-memory note collection
- interaction/: Drag session, trash zone, placement resolution
- services/: Board state object and due-date classification
"""

__version__ = "1.0.0"
