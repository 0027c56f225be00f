"""Quaint — FastAPI HTTP layer.

Modules
-------
main
    Application factory, the ``GET /{text}.png`` request pipeline and the
    ``main()`` CLI entry point.
models
    Pydantic models for the resolved render request and health response.
"""
