"""OpenAI-compatible local server backends.

LM Studio, the llama.cpp server and similar tools expose an OpenAI-compatible
chat completions API. Schema-guided decoding goes through `response_format`,
grammar-constrained decoding through the `grammar` request field.

Contains:
- OpenAICompatibleBackend: Constrained backend (schema or grammar)
- ChatCompletionBackend: Freeform backend on the same server
"""

import logging
from typing import Any

from openai import OpenAI

from commitgate.config import DEFAULT_API_KEY, BackendConfig
from commitgate.constraints import ArtifactKind, ConstraintArtifact
from commitgate.llm.base import (
    BackendResponse,
    ConstrainedBackend,
    FreeformBackend,
)
from commitgate.llm.errors import classify_backend_error

logger = logging.getLogger(__name__)


class _OpenAIClientMixin:
    """Shared client creation and chat completion call."""

    config: BackendConfig
    model: str

    def _create_client(self) -> OpenAI:
        return OpenAI(
            api_key=self.config.api_key or DEFAULT_API_KEY,
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            max_retries=0,
        )

    def _complete(self, system_prompt: str, user_prompt: str, **extra: Any) -> BackendResponse:
        """Send one chat completion request.

        Raises:
            BackendError: For any transport or server failure.
        """
        client = self._create_client()
        logger.debug("Requesting completion from %s (model %s)", self.config.base_url, self.model)

        try:
            response = client.chat.completions.create(
                model=self.model,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                **extra,
            )
        except Exception as e:
            raise classify_backend_error(e, self.config) from e

        if not response.choices:
            return BackendResponse(content=None, model=self.model)

        content = response.choices[0].message.content
        input_tokens = response.usage.prompt_tokens if response.usage else 0
        output_tokens = response.usage.completion_tokens if response.usage else 0
        logger.debug("Received %d characters", len(content or ""))

        return BackendResponse(
            content=content,
            model=self.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )


class OpenAICompatibleBackend(_OpenAIClientMixin, ConstrainedBackend):
    """Constrained backend for an OpenAI-compatible local server."""

    def __init__(self, config: BackendConfig, artifact_kind: ArtifactKind = ArtifactKind.SCHEMA):
        """Initialize the backend.

        Args:
            config: Connection and sampling settings.
            artifact_kind: Whether the server receives a JSON schema or a GBNF grammar.
        """
        super().__init__(model=config.model, artifact_kind=artifact_kind)
        self.config = config

    def generate_structured(
        self,
        system_prompt: str,
        user_prompt: str,
        artifact: ConstraintArtifact,
    ) -> BackendResponse:
        """Generate a commit payload decoded under the artifact.

        Args:
            system_prompt: The system prompt.
            user_prompt: The user prompt with the git context.
            artifact: The schema or grammar for this request.

        Returns:
            BackendResponse with the JSON text of the payload.

        Raises:
            ValueError: If the artifact dialect does not match the backend.
            BackendError: For transport failures.
        """
        if artifact.kind != self.artifact_kind:
            raise ValueError(
                f"{self.name} expects a {self.artifact_kind.value} artifact, "
                f"got {artifact.kind.value}"
            )

        if artifact.kind == ArtifactKind.SCHEMA:
            extra = {"response_format": artifact.value}
        else:
            extra = {"extra_body": {"grammar": artifact.value}}

        return self._complete(system_prompt, user_prompt, **extra)


class ChatCompletionBackend(_OpenAIClientMixin, FreeformBackend):
    """Freeform backend for an OpenAI-compatible server, no decoding constraints."""

    def __init__(self, config: BackendConfig):
        super().__init__(model=config.model)
        self.config = config

    def generate_text(self, system_prompt: str, user_prompt: str) -> BackendResponse:
        """Generate raw commit message text.

        Raises:
            BackendError: For transport failures.
        """
        response = self._complete(system_prompt, user_prompt)
        if response.content is None:
            response.content = ""
        return response
