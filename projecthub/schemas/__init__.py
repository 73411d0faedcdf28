"""
ProjectHub Backend — Pydantic Request/Response Schemas
=======================================================

What:  The API contract between clients and the backend, one model per
       request body and per response envelope.
How:   Request models only check JSON types; the format rules (lengths,
       vocabulary, URL shape) run in projecthub.validation through the
       request pipeline so that every failure maps to the same 400
       `invalid_input` error. Field names are snake_case in Python and
       camelCase on the wire.
"""
