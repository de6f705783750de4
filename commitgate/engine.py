"""Commit message conformance engine.

Routes a request through the path matching the backend's capability:

- constrained: artifact -> backend -> structured consumer -> render -> validate
- freeform: backend -> extraction pipeline -> enhance -> validate

Contains:
- EngineOptions: Per-call options (artifact dialect override, debug sink)
- generate_commit_message: Produce one validated commit message
"""

import logging
from dataclasses import dataclass
from typing import Optional

from commitgate.analysis import ChangeAnalysis, describe_analysis
from commitgate.constraints import ArtifactKind, build_constraint_artifact
from commitgate.diagnostics import DebugSink, emit
from commitgate.exceptions import EmptyOrInvalidOutput
from commitgate.extraction import extract_commit_message
from commitgate.formatters import enhance_message, render_commit_content
from commitgate.llm.base import BaseBackend, ConstrainedBackend, FreeformBackend
from commitgate.llm.prompts import build_system_prompt, build_user_prompt
from commitgate.llm.structured import consume_structured_payload
from commitgate.validator import check_commit_message

logger = logging.getLogger(__name__)

COMPONENT = "engine"


@dataclass
class EngineOptions:
    """Options for a single generation call.

    Attributes:
        artifact_kind: Constraint dialect to build. None uses the backend's own.
        debug_sink: Receives diagnostic events. None disables diagnostics.
    """

    artifact_kind: Optional[ArtifactKind] = None
    debug_sink: Optional[DebugSink] = None


def _final_check(message: str, raw_output: str, sink: Optional[DebugSink]) -> str:
    reason = check_commit_message(message)
    if reason is not None:
        emit(sink, COMPONENT, "validate", False, reason, message)
        raise EmptyOrInvalidOutput(
            f"Generated message failed validation: {reason}", raw_output
        )
    emit(sink, COMPONENT, "validate", True, candidate=message)
    return message


def _generate_constrained(
    backend: ConstrainedBackend,
    analysis: Optional[ChangeAnalysis],
    context: str,
    options: EngineOptions,
) -> str:
    kind = options.artifact_kind or backend.artifact_kind
    artifact = build_constraint_artifact(kind, analysis)
    emit(options.debug_sink, COMPONENT, "artifact", True, f"{kind.value} artifact built")

    response = backend.generate_structured(
        build_system_prompt(analysis, constrained=True),
        build_user_prompt(context),
        artifact,
    )
    emit(
        options.debug_sink,
        COMPONENT,
        "backend",
        True,
        f"{response.input_tokens} input / {response.output_tokens} output tokens",
    )

    content = consume_structured_payload(response.content, analysis, options.debug_sink)
    message = render_commit_content(content)
    raw = response.content if isinstance(response.content, str) else str(response.content)
    return _final_check(message, raw, options.debug_sink)


def _generate_freeform(
    backend: FreeformBackend,
    analysis: Optional[ChangeAnalysis],
    context: str,
    options: EngineOptions,
) -> str:
    response = backend.generate_text(
        build_system_prompt(analysis, constrained=False),
        build_user_prompt(context),
    )
    raw_output = response.content or ""
    emit(
        options.debug_sink,
        COMPONENT,
        "backend",
        True,
        f"{len(raw_output)} characters received",
        raw_output,
    )

    extracted = extract_commit_message(raw_output, options.debug_sink)
    message = enhance_message(extracted)
    return _final_check(message, raw_output, options.debug_sink)


def generate_commit_message(
    backend: BaseBackend,
    analysis: Optional[ChangeAnalysis],
    context: str,
    options: Optional[EngineOptions] = None,
) -> str:
    """Generate one validated commit message.

    Args:
        backend: The generation backend.
        analysis: The staged change analysis (None uses the static fallback
            bullet bounds).
        context: The git context bundle sent to the model.
        options: Per-call options.

    Returns:
        The final commit message.

    Raises:
        SchemaViolation: If a constrained backend broke its constraints.
        EmptyOrInvalidOutput: If no valid message could be produced.
        BackendError: For transport failures.
        TypeError: If the backend has neither capability.
        ValueError: If options.artifact_kind is a dialect the backend cannot take.
    """
    options = options or EngineOptions()

    if analysis is not None:
        logger.debug("Change analysis: %s", describe_analysis(analysis))

    if isinstance(backend, ConstrainedBackend):
        logger.debug("Using constrained path with %s", backend.name)
        return _generate_constrained(backend, analysis, context, options)

    if isinstance(backend, FreeformBackend):
        logger.debug("Using freeform path with %s", backend.name)
        return _generate_freeform(backend, analysis, context, options)

    raise TypeError(f"Backend {type(backend).__name__} is neither constrained nor freeform")
