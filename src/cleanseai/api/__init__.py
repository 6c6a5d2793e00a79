"""CleanseAI — FastAPI REST API layer.

This package contains the FastAPI application and the Pydantic request and
response models of the removal proxy.

Modules
-------
main
    FastAPI application with the ``/api/generate`` proxy endpoint and the
    ``main()`` CLI entry point.
models
    Pydantic models for API request and response validation.
"""
