"""Classification of backend transport failures.

Contains:
- classify_backend_error: Map an arbitrary client exception to a BackendError
"""

import openai

from commitgate.config import BackendConfig
from commitgate.exceptions import (
    BackendConnectionError,
    BackendError,
    BackendTimeoutError,
    ModelNotLoadedError,
)

_MODEL_MISSING_MARKERS = ("model not found", "model not loaded", "no models loaded")
_CONNECTION_MARKERS = ("connection", "econnrefused", "connection refused")


def classify_backend_error(error: Exception, config: BackendConfig) -> BackendError:
    """Turn a client exception into the matching BackendError.

    SDK exception types are checked first; anything else is classified by
    its message text.

    Args:
        error: The exception raised by the client.
        config: The backend configuration used for the request.

    Returns:
        A BackendError subclass instance describing the failure.
    """
    if isinstance(error, BackendError):
        return error

    # APITimeoutError is a subclass of APIConnectionError
    if isinstance(error, openai.APITimeoutError):
        return BackendTimeoutError(config.timeout)
    if isinstance(error, openai.APIConnectionError):
        return BackendConnectionError(config.host, config.port)

    message = str(error).lower()

    if any(marker in message for marker in _MODEL_MISSING_MARKERS):
        return ModelNotLoadedError(config.model)
    if isinstance(error, openai.NotFoundError) and "model" in message:
        return ModelNotLoadedError(config.model)
    if any(marker in message for marker in _CONNECTION_MARKERS):
        return BackendConnectionError(config.host, config.port)
    if "timeout" in message or "timed out" in message:
        return BackendTimeoutError(config.timeout)

    return BackendError(f"Backend request failed: {error}")
