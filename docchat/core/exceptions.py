"""
Exception hierarchy for the document chat assistant.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DocChatException(Exception):
    """Base exception for all document chat application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(DocChatException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class DocumentNotFoundError(DocChatException):
    """Raised when a document cannot be found."""

    def __init__(self, document_id: int, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["document_id"] = document_id
        super().__init__(f"Document not found: {document_id}", details)


class LLMProviderError(DocChatException):
    """Raised when the LLM provider call fails or times out."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize LLM provider error.

        Args:
            message: Error message
            operation: Provider operation that failed (complete, chat)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class DiagramError(DocChatException):
    """Base exception for diagram pipeline errors."""

    pass


class MarkupGenerationError(DiagramError):
    """Raised when markup from the LLM is missing or unusable. Recoverable."""

    def __init__(
        self,
        message: str,
        language: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if language:
            details["language"] = language
        super().__init__(message, details)


class RendererError(DiagramError):
    """Raised when a renderer subprocess fails or times out. Recoverable."""

    def __init__(
        self,
        message: str,
        renderer: str | None = None,
        returncode: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize renderer error.

        Args:
            message: Error message
            renderer: Renderer that failed (binary or wrapper name)
            returncode: Process exit status, None on timeout or missing binary
            details: Additional context
        """
        details = details or {}
        if renderer:
            details["renderer"] = renderer
        if returncode is not None:
            details["returncode"] = returncode
        super().__init__(message, details)


class DiagramRenderError(DiagramError):
    """Raised when every rendering tier is exhausted. Surfaced to callers."""

    def __init__(
        self,
        message: str = "Diagram generation failed",
        unique_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if unique_id:
            details["unique_id"] = unique_id
        super().__init__(message, details)


class NotADiagramRequestError(DiagramError):
    """Raised when a prompt does not ask for a diagram."""

    def __init__(self, prompt: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["prompt"] = prompt[:120]
        super().__init__("Not a diagram generation request", details)
