"""Shell-spawned CLI tool backend.

Runs a chat CLI (by default `q chat --trust-all-tools --no-interactive`)
with the prompt on stdin and returns whatever it prints. The output is
decorated with banners, menus and commentary, so it always goes through
the freeform extraction pipeline.
"""

import logging
import subprocess

from commitgate.config import BackendConfig
from commitgate.exceptions import BackendError, BackendTimeoutError
from commitgate.llm.base import BackendResponse, FreeformBackend

logger = logging.getLogger(__name__)


class CliToolBackend(FreeformBackend):
    """Freeform backend that shells out to a chat CLI."""

    def __init__(self, config: BackendConfig):
        self.config = config
        self.command = config.get_cli_command()
        super().__init__(model=self.command[0])

    def generate_text(self, system_prompt: str, user_prompt: str) -> BackendResponse:
        """Run the CLI with both prompts on stdin.

        Args:
            system_prompt: The system prompt.
            user_prompt: The user prompt with the git context.

        Returns:
            BackendResponse with the raw stdout.

        Raises:
            BackendTimeoutError: If the command exceeds the configured timeout.
            BackendError: If the command is missing or exits non-zero.
        """
        prompt = f"{system_prompt}\n\n{user_prompt}"
        logger.debug("Running %s", " ".join(self.command))

        try:
            result = subprocess.run(
                self.command,
                input=prompt,
                capture_output=True,
                text=True,
                timeout=self.config.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise BackendTimeoutError(self.config.timeout) from e
        except FileNotFoundError as e:
            raise BackendError(
                f"Command not found: {self.command[0]}. Is it installed and in PATH?"
            ) from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise BackendError(
                f"{self.command[0]} exited with code {result.returncode}"
                + (f": {stderr}" if stderr else "")
            )

        logger.debug("Received %d characters", len(result.stdout or ""))
        return BackendResponse(content=result.stdout or "", model=self.model)
