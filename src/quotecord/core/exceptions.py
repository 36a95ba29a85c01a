"""Custom exceptions for quotecord."""

MISSING_MESSAGE_MESSAGE = "No message was supplied to render"
EMPTY_MESSAGE_MESSAGE = (
    "Message has no text, embeds, attachments or stickers to render"
)


class QuoteRenderError(RuntimeError):
    """Base class for failures surfaced to callers of the renderer."""


class MissingMessageError(QuoteRenderError, ValueError):
    """Raised when no message is supplied."""

    def __init__(self, message: str = MISSING_MESSAGE_MESSAGE) -> None:
        """Initialize the error with a default message."""
        super().__init__(message)


class EmptyMessageError(QuoteRenderError, ValueError):
    """Raised when a message has nothing that could be rendered."""

    def __init__(
        self,
        message: str = EMPTY_MESSAGE_MESSAGE,
        *,
        message_id: int | None = None,
    ) -> None:
        """Initialize the error, optionally tagging the refused message id."""
        self.message_id = message_id
        super().__init__(message)


class RenderServiceError(QuoteRenderError):
    """Raised when the rendering service fails to produce an image."""

    def __init__(
        self,
        reason: str,
        *,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        """Initialize the error with the downstream failure reason."""
        self.reason = reason
        self.status_code = status_code
        self.url = url
        if status_code is not None:
            resolved_message = f"Render service returned HTTP {status_code}: {reason}"
        else:
            resolved_message = f"Render service request failed: {reason}"
        super().__init__(resolved_message)
