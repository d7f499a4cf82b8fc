"""
Quillpost Backend — API Schemas
=================================

Pydantic models for request bodies and response payloads. Python attributes
are snake_case; the JSON contract is camelCase (`userId`, `dateCreated`),
produced by the shared `CAMEL_CASE` model config.
"""
