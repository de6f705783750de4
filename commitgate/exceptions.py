"""Exception classes for commitgate.

Contains all exception classes raised by the conformance engine:
- LLMError: Base exception for generation-related errors
- SchemaViolation: Backend payload broke the declared grammar/schema
- EmptyOrInvalidOutput: Freeform extraction found no usable message
- MalformedConstraintInput: Change counts are negative or not finite
- BackendError: Transport-level failures talking to a backend
"""


class LLMError(Exception):
    """Base exception for LLM-related errors."""

    pass


class SchemaViolation(LLMError):
    """Raised when a constrained backend returns a payload that fails revalidation."""

    def __init__(self, message: str, payload=None):
        super().__init__(message)
        self.payload = payload


class EmptyOrInvalidOutput(LLMError):
    """Raised when no extraction stage produced a valid commit message."""

    def __init__(self, message: str, raw_output: str = ""):
        super().__init__(message)
        self.raw_output = raw_output


class MalformedConstraintInput(LLMError, ValueError):
    """Raised when the change analyzer receives an invalid count."""

    pass


class BackendError(LLMError):
    """Raised when a generation backend call fails."""

    pass


class BackendConnectionError(BackendError):
    """Raised when the backend server cannot be reached."""

    def __init__(self, host: str, port: int):
        super().__init__(
            f"Cannot connect to the generation backend at {host}:{port}. "
            f"Please ensure the server is running."
        )
        self.host = host
        self.port = port


class BackendTimeoutError(BackendError):
    """Raised when the backend does not answer within the configured timeout."""

    def __init__(self, timeout: float):
        super().__init__(
            f"Request timed out after {timeout:g}s. The model may be taking too long to respond."
        )
        self.timeout = timeout


class ModelNotLoadedError(BackendError):
    """Raised when the configured model is not available on the backend."""

    def __init__(self, model: str):
        super().__init__(
            f'Model "{model}" is not loaded on the backend. Please load the model and try again.'
        )
        self.model = model
