"""Freeform extraction pipeline.

Runs the extraction stages in order over a raw model/CLI output and returns
the first candidate that passes the validator. A stage only runs when every
earlier stage failed, so a valid sentinel-delimited message is returned as
is. When all stages fail, EmptyOrInvalidOutput is raised; no placeholder
message is ever produced.
"""

import logging
from typing import Optional

from commitgate.config import SENTINEL_END, SENTINEL_START
from commitgate.diagnostics import DebugSink, emit
from commitgate.exceptions import EmptyOrInvalidOutput
from commitgate.extraction.stages import EXTRACTION_STAGES, NotApplicable, Stage
from commitgate.formatters import normalize_message
from commitgate.validator import check_commit_message

logger = logging.getLogger(__name__)

COMPONENT = "extraction"


def extract_commit_message(
    raw_output: str,
    debug_sink: Optional[DebugSink] = None,
    stages: Optional[list[tuple[str, Stage]]] = None,
) -> str:
    """Recover a valid conventional commit message from raw model output.

    Args:
        raw_output: The unconstrained backend output.
        debug_sink: Optional sink receiving one event per stage.
        stages: Stage list override. Defaults to EXTRACTION_STAGES.

    Returns:
        The normalized, validated commit message (no emoji injection).

    Raises:
        EmptyOrInvalidOutput: If no stage yields a valid message.
    """
    if not raw_output or not raw_output.strip():
        emit(debug_sink, COMPONENT, "input", False, "raw output is empty")
        raise EmptyOrInvalidOutput("Backend returned an empty response", raw_output or "")

    has_start = SENTINEL_START in raw_output
    has_end = SENTINEL_END in raw_output
    logger.debug("Sentinel markers found: start=%s, end=%s", has_start, has_end)
    if has_start != has_end:
        logger.warning("Mismatched sentinel markers in backend output; extraction may be unreliable")

    last_reason = "no stage produced a candidate"

    for name, stage in stages or EXTRACTION_STAGES:
        result = stage(raw_output)

        if isinstance(result, NotApplicable):
            emit(debug_sink, COMPONENT, name, False, result.reason)
            continue

        if result.note:
            logger.debug("Stage %s: %s", name, result.note)

        candidate = normalize_message(result.candidate)
        reason = check_commit_message(candidate)

        if reason is None:
            emit(debug_sink, COMPONENT, name, True, result.note, candidate)
            logger.debug("Extracted commit message with stage %s", name)
            return candidate

        last_reason = reason
        emit(debug_sink, COMPONENT, name, False, reason, candidate)

    raise EmptyOrInvalidOutput(
        f"Backend returned an empty or invalid commit message ({last_reason})",
        raw_output,
    )
