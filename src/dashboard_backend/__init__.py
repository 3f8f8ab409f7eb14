"""
Dashboard Content Backend - REST API and session library for website content

This package stores the editable content of a small website (header,
navigation links and footer contact details) and provides:

- A FastAPI service exposing ``/api/components`` and ``/api/health``
- Validation of content payloads before they are saved
- Single-document persistence keyed by a fixed discriminator
- A client session that mirrors every save to a local cache and falls back
  to it when the API cannot be reached

Key Components:
    - main: FastAPI application and HTTP endpoint definitions
    - validation: Content rules applied before any write
    - content_store: Upsert-by-discriminator persistence of the document
    - database: SQLite document table backing the content store
    - local_cache: File-backed mirror of the last submitted document
    - client: HTTP client for the content API
    - tiered_store: Remote-first storage with local cache fallback
    - dashboard: Operator session state (loading/ready/saving)
    - configuration: Config loading and merging logic

Usage:
    Run the API server with:
        uvicorn dashboard_backend.main:app --reload --host 0.0.0.0 --port 5000

    Or with the configured host and port:
        python -m dashboard_backend

Design Notes:
    - Exactly one content document exists; it is created with defaults on first read
    - Saves are last-write-wins upserts, atomic per call
    - The API copy is authoritative, the local cache is advisory
"""
