"""Codedeck - FastAPI HTTP layer.

This package contains the FastAPI application, the Pydantic response
models, and the helper that packs the project source for ``GET /source``.

Modules
-------
main
    FastAPI application factory, route handlers, error mapping, and the
    ``main()`` CLI entry point.
models
    Pydantic models for API responses.
source_archive
    In-memory tar archive of the package source tree.
"""
