"""Generation backend module for commitgate.

This module provides the backend interface (constrained and freeform
variants), the backend factory and the structured payload consumer.
"""

from commitgate.config import BackendConfig, BackendKind
from commitgate.constraints import ArtifactKind
from commitgate.llm.base import (
    BackendResponse,
    BaseBackend,
    ConstrainedBackend,
    FreeformBackend,
)
from commitgate.llm.errors import classify_backend_error
from commitgate.llm.structured import consume_structured_payload


def get_backend(config: BackendConfig) -> BaseBackend:
    """Get a backend instance for the configuration.

    Args:
        config: The resolved backend configuration.

    Returns:
        An instance of the appropriate backend.

    Raises:
        ValueError: If the backend kind is not supported.
    """
    if config.kind == BackendKind.SCHEMA:
        from commitgate.llm.openai_backend import OpenAICompatibleBackend

        return OpenAICompatibleBackend(config, artifact_kind=ArtifactKind.SCHEMA)

    elif config.kind == BackendKind.GRAMMAR:
        from commitgate.llm.openai_backend import OpenAICompatibleBackend

        return OpenAICompatibleBackend(config, artifact_kind=ArtifactKind.GRAMMAR)

    elif config.kind == BackendKind.FREEFORM:
        from commitgate.llm.openai_backend import ChatCompletionBackend

        return ChatCompletionBackend(config)

    elif config.kind == BackendKind.CLI:
        from commitgate.llm.cli_backend import CliToolBackend

        return CliToolBackend(config)

    else:
        raise ValueError(f"Unsupported backend: {config.kind}")


__all__ = [
    "BackendResponse",
    "BaseBackend",
    "ConstrainedBackend",
    "FreeformBackend",
    "classify_backend_error",
    "consume_structured_payload",
    "get_backend",
]
