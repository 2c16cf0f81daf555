"""Decode the response envelopes different relays wrap page markup in.

Known shapes, tried in order:

  {"contents": "<html>..."}   AllOrigins style
  {"data": "<html>..."}       nested payload
  "<html>..."                 JSON string
  <html>...                   raw (non-JSON) body

Any other JSON value is rejected rather than stringified.
"""

from __future__ import annotations

import json

from pydantic import BaseModel, ValidationError


class EnvelopeError(ValueError):
    """Raised when a relay body matches none of the known envelope shapes."""


class ContentsEnvelope(BaseModel):
    contents: str


class DataEnvelope(BaseModel):
    data: str


_ENVELOPES: tuple[type[BaseModel], ...] = (ContentsEnvelope, DataEnvelope)


def decode_envelope(body: str) -> str:
    """Return the markup carried by a relay response body."""
    text = body.strip()
    if not text or text[0] not in "{[\"":
        return body

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        # Markup that happens to start with a brace or quote.
        return body

    if isinstance(parsed, str):
        return parsed

    if isinstance(parsed, dict):
        for envelope in _ENVELOPES:
            try:
                model = envelope.model_validate(parsed)
            except ValidationError:
                continue
            return getattr(model, next(iter(envelope.model_fields)))

    raise EnvelopeError(f"Unrecognised relay envelope: {text[:80]}")
