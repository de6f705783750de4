"""Structured response consumption.

A constrained backend claims its payload already conforms to the artifact
it was given. This module performs one revalidation pass at that trust
boundary and raises SchemaViolation when the claim does not hold. It never
falls back to freeform extraction: a backend ignoring its declared
constraints is a configuration problem the caller must see.
"""

import json
import logging
from typing import Optional, Union

from pydantic import ValidationError

from commitgate.analysis import ChangeAnalysis
from commitgate.diagnostics import DebugSink, emit
from commitgate.exceptions import SchemaViolation
from commitgate.models import CommitContent, build_content_model

logger = logging.getLogger(__name__)

COMPONENT = "structured"


def parse_structured_payload(payload: Union[str, dict, None]) -> dict:
    """Turn a backend payload into a dictionary.

    Args:
        payload: A dict, or the JSON text returned by the backend.

    Returns:
        The payload as a dictionary.

    Raises:
        SchemaViolation: If the payload is missing, not JSON, or not an object.
    """
    if payload is None:
        raise SchemaViolation("Backend returned no structured payload", payload)

    if isinstance(payload, dict):
        return payload

    if not isinstance(payload, str):
        raise SchemaViolation(
            f"Backend returned a {type(payload).__name__} instead of a JSON object", payload
        )

    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError as e:
        raise SchemaViolation(
            f"Backend payload is not valid JSON.\n"
            f"Error: {e}\n"
            f"Raw response:\n{payload}",
            payload,
        )

    if not isinstance(parsed, dict):
        raise SchemaViolation("Backend payload is not a JSON object", payload)
    return parsed


def consume_structured_payload(
    payload: Union[str, dict, None],
    analysis: Optional[ChangeAnalysis] = None,
    debug_sink: Optional[DebugSink] = None,
) -> CommitContent:
    """Revalidate a constrained backend's payload against the request's constraints.

    Args:
        payload: The payload returned by the backend.
        analysis: The analysis the artifact was generated from (None means
            the static 1-5 bullet fallback).
        debug_sink: Optional diagnostics sink.

    Returns:
        The validated CommitContent.

    Raises:
        SchemaViolation: If the payload breaks the declared constraints.
    """
    try:
        parsed = parse_structured_payload(payload)
        content_model = build_content_model(analysis)
        try:
            content = content_model.model_validate(parsed)
        except ValidationError as e:
            raise SchemaViolation(
                f"Backend payload does not match the declared schema.\n"
                f"Error: {e}\n"
                f"Parsed JSON: {parsed}",
                payload,
            )
    except SchemaViolation as e:
        logger.debug("Structured payload rejected: %s", e)
        emit(debug_sink, COMPONENT, "revalidate", False, str(e).split("\n")[0])
        raise

    emit(
        debug_sink,
        COMPONENT,
        "revalidate",
        True,
        f"{len(content.body.bullet_points)} bullet point(s)",
    )
    return content
