"""HTTP endpoints for chord lookups (FastAPI).

Routes:

- ``GET /chords/{name}``: the primary record for a chord name.
- ``GET /chords?name=...``: the same lookup with the name as a query parameter.
- ``GET /fingers/{pattern}``: records using a fret pattern (exact or prefix).
- ``GET /search/{query}``: free-form search, chord name or fret pattern.
- ``GET /health``: liveness and store size.

Serve with any ASGI server, e.g. the app factory
``chord_lookup.api:create_app_from_env``.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from chord_lookup.config import Settings, configure_logging
from chord_lookup.dataset import load_dataset
from chord_lookup.errors import InvalidQuery
from chord_lookup.models import ChordRecord
from chord_lookup.resolver import find_chord, resolve_by_fingering, search
from chord_lookup.store import ChordStore, StoreHandle

logger = logging.getLogger(__name__)


def _serialize(records: tuple[ChordRecord, ...], not_found: str) -> list[dict[str, Any]]:
    if not records:
        raise HTTPException(status_code=404, detail=not_found)
    return [r.to_dict() for r in records]


def create_app(handle: StoreHandle | ChordStore) -> FastAPI:
    """Build the FastAPI app serving a chord store.

    Parameters
    ----------
    handle : StoreHandle | ChordStore
        The store to serve. A bare store is wrapped in a handle; pass a
        handle to be able to reload the data while serving.

    Returns
    -------
    FastAPI
        The app, with permissive CORS. ``app.state.store_handle`` holds
        the handle.
    """
    if isinstance(handle, ChordStore):
        handle = StoreHandle(handle)

    app = FastAPI(title="Chord Lookup")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.state.store_handle = handle

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {"status": "ok", "chords": len(handle.store)}

    def lookup_chord(name: str) -> dict[str, Any]:
        try:
            record = find_chord(handle.store, name)
        except InvalidQuery as e:
            raise HTTPException(status_code=400, detail="Chord name required") from e
        if record is None:
            raise HTTPException(status_code=404, detail="Chord not found")
        return record.to_dict()

    @app.get("/chords")
    def get_chord_by_query(name: str = "") -> dict[str, Any]:
        return lookup_chord(name)

    @app.get("/chords/{name:path}")
    def get_chord(name: str) -> dict[str, Any]:
        return lookup_chord(name)

    @app.get("/fingers/{pattern:path}")
    def get_chords_by_fingering(pattern: str) -> list[dict[str, Any]]:
        pattern = pattern.strip()
        if not pattern:
            raise HTTPException(status_code=400, detail="Fingering pattern required")
        return _serialize(
            resolve_by_fingering(handle.store, pattern),
            "No chords found with this fingering",
        )

    @app.get("/search/{query:path}")
    def search_chords(query: str) -> list[dict[str, Any]]:
        try:
            results = search(handle.store, query)
        except InvalidQuery as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        return _serialize(results, "No results found")

    return app


def create_app_from_env() -> FastAPI:
    """Load the dataset named by the environment and build the app.

    Raises
    ------
    LoadError
        If the dataset cannot be read or yields no chords; the service
        must not start without data.
    """
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    store = ChordStore.load(load_dataset(settings.data_path))
    logger.info("Serving %d chords from %s", len(store), settings.data_path)
    return create_app(store)
