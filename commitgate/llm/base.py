"""Base classes for generation backends.

Backends come in two capability variants:
- ConstrainedBackend: honors a grammar/schema artifact and returns a
  payload that should already conform to it
- FreeformBackend: returns raw text that must go through extraction
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union

from commitgate.constraints import ArtifactKind, ConstraintArtifact


@dataclass
class BackendResponse:
    """Result of a single backend call, including token usage."""

    content: Union[str, dict, None]
    model: str
    input_tokens: int = 0
    output_tokens: int = 0


class BaseBackend(ABC):
    """Abstract base class for generation backends."""

    # Whether the backend enforces a constraint artifact during generation
    honors_constraints: bool = False

    def __init__(self, model: str):
        self.model = model

    @property
    def name(self) -> str:
        return type(self).__name__


class ConstrainedBackend(BaseBackend):
    """Backend that accepts a grammar or schema and decodes under it."""

    honors_constraints = True

    def __init__(self, model: str, artifact_kind: ArtifactKind):
        super().__init__(model)
        self.artifact_kind = artifact_kind

    @abstractmethod
    def generate_structured(
        self,
        system_prompt: str,
        user_prompt: str,
        artifact: ConstraintArtifact,
    ) -> BackendResponse:
        """Generate a payload constrained by the artifact.

        Args:
            system_prompt: The system prompt.
            user_prompt: The user prompt with the git context.
            artifact: The grammar or schema for this request.

        Returns:
            A BackendResponse whose content is a dict or JSON text.

        Raises:
            BackendError: For transport failures.
        """
        pass


class FreeformBackend(BaseBackend):
    """Backend that only produces unconstrained text."""

    @abstractmethod
    def generate_text(self, system_prompt: str, user_prompt: str) -> BackendResponse:
        """Generate raw text.

        Args:
            system_prompt: The system prompt.
            user_prompt: The user prompt with the git context.

        Returns:
            A BackendResponse whose content is the raw output text.

        Raises:
            BackendError: For transport failures.
        """
        pass
