"""Gradio front end for CleanseAI.

Modules
-------
models
    Session state (``AppState``, ``FileInfo``, ``SessionState``) and UI text.
state
    Upload / submit / download / reset transitions over ``SessionState``.
validation
    Submission guard and download filename derivation.
proxy_client
    httpx client for the ``/api/generate`` endpoint.
handlers
    Gradio event handlers that render ``SessionState`` into components.
app
    ``create_ui()`` and the mounting / launch helpers.
"""
