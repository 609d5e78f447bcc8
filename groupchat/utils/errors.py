"""Error types for the group chat system."""

from dataclasses import dataclass
from typing import Optional, Dict, Any
from enum import Enum


class ErrorType(Enum):
    """Enumeration of error types in the group chat system."""

    # Completion provider (Bedrock) errors
    BEDROCK_RATE_LIMIT = "BEDROCK_RATE_LIMIT"
    BEDROCK_TIMEOUT = "BEDROCK_TIMEOUT"
    BEDROCK_AUTH_ERROR = "BEDROCK_AUTH_ERROR"
    BEDROCK_MODEL_ERROR = "BEDROCK_MODEL_ERROR"
    BEDROCK_INVALID_REQUEST = "BEDROCK_INVALID_REQUEST"
    BEDROCK_SERVICE_ERROR = "BEDROCK_SERVICE_ERROR"

    # Orchestration errors
    CHAT_ALREADY_COMPLETE = "CHAT_ALREADY_COMPLETE"
    CHAT_NOT_SEEDED = "CHAT_NOT_SEEDED"

    # Configuration errors
    CONFIG_MISSING = "CONFIG_MISSING"
    CONFIG_INVALID = "CONFIG_INVALID"

    UNKNOWN_ERROR = "UNKNOWN_ERROR"


# Remediation shown to the operator when a required setting is missing.
CONFIG_REMEDIATION = (
    "Set it in your shell or in a .env file next to config.yaml, for example:\n"
    "\n"
    "  export AWS_REGION=us-east-1\n"
    "  export BEDROCK_MODEL_ID=amazon.nova-pro-v1:0\n"
    "\n"
    "Credentials come from AWS_BEARER_TOKEN_BEDROCK (Bedrock API key) or the\n"
    "standard AWS credential chain (aws configure, AWS_PROFILE, role)."
)


@dataclass
class ErrorContext:
    """
    Context information for errors in the group chat system.

    Attributes:
        error_type: Type of error from ErrorType enum
        message: Human-readable error message
        recoverable: Whether the error can be recovered from
        remediation: Optional guidance for the operator
        details: Optional additional error details
        original_exception: Optional original exception that caused this error
    """

    error_type: ErrorType
    message: str
    recoverable: bool
    remediation: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    original_exception: Optional[Exception] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert error context to dictionary for logging/serialization."""
        return {
            "error_type": self.error_type.value,
            "message": self.message,
            "recoverable": self.recoverable,
            "remediation": self.remediation,
            "details": self.details or {},
            "original_exception": str(self.original_exception) if self.original_exception else None
        }


class GroupChatError(Exception):
    """
    Base exception for all group chat errors.

    Attributes:
        context: ErrorContext with detailed error information
    """

    def __init__(self, context: ErrorContext):
        self.context = context
        super().__init__(context.message)

    def __str__(self) -> str:
        return f"{self.context.error_type.value}: {self.context.message}"

    def to_dict(self) -> Dict[str, Any]:
        return self.context.to_dict()


class ConfigurationError(GroupChatError):
    """Exception for missing or invalid configuration values."""

    @classmethod
    def missing_value(cls, key: str) -> "ConfigurationError":
        """
        Create error for a required setting that has no value.

        Args:
            key: Environment variable / config key that is missing

        Returns:
            ConfigurationError instance
        """
        context = ErrorContext(
            error_type=ErrorType.CONFIG_MISSING,
            message=f"Environment variable {key} is not set.",
            recoverable=False,
            remediation=CONFIG_REMEDIATION,
            details={"key": key}
        )
        return cls(context)

    @classmethod
    def invalid_value(cls, key: str, value: Any, reason: str) -> "ConfigurationError":
        """
        Create error for a setting whose value cannot be used.

        Args:
            key: Environment variable / config key
            value: Offending value
            reason: Why the value was rejected

        Returns:
            ConfigurationError instance
        """
        context = ErrorContext(
            error_type=ErrorType.CONFIG_INVALID,
            message=f"Invalid value for {key}: {value!r} ({reason})",
            recoverable=False,
            details={"key": key, "value": value}
        )
        return cls(context)


class CompletionProviderError(GroupChatError):
    """Exception raised when a completion call fails. Never retried by the chat."""


class BedrockAPIError(CompletionProviderError):
    """Exception for AWS Bedrock API errors."""

    @classmethod
    def from_client_error(
        cls,
        error: Exception,
        operation: str,
    ) -> "BedrockAPIError":
        """
        Create BedrockAPIError from boto3 ClientError.

        Args:
            error: Original boto3 ClientError
            operation: Description of operation that failed

        Returns:
            BedrockAPIError instance
        """
        error_code = "Unknown"
        error_message = str(error)

        if hasattr(error, 'response'):
            error_info = error.response.get("Error", {})
            error_code = error_info.get("Code", "Unknown")
            error_message = error_info.get("Message", str(error))

        error_type_map = {
            "ThrottlingException": ErrorType.BEDROCK_RATE_LIMIT,
            "TooManyRequestsException": ErrorType.BEDROCK_RATE_LIMIT,
            "RequestTimeout": ErrorType.BEDROCK_TIMEOUT,
            "RequestTimeoutException": ErrorType.BEDROCK_TIMEOUT,
            "UnauthorizedException": ErrorType.BEDROCK_AUTH_ERROR,
            "AccessDeniedException": ErrorType.BEDROCK_AUTH_ERROR,
            "ValidationException": ErrorType.BEDROCK_INVALID_REQUEST,
            "ModelNotReadyException": ErrorType.BEDROCK_MODEL_ERROR,
            "ModelTimeoutException": ErrorType.BEDROCK_TIMEOUT,
            "ServiceUnavailableException": ErrorType.BEDROCK_SERVICE_ERROR,
            "InternalServerException": ErrorType.BEDROCK_SERVICE_ERROR,
        }

        error_type = error_type_map.get(error_code, ErrorType.BEDROCK_SERVICE_ERROR)

        # Throttling and transient service errors can succeed if the caller asks again.
        recoverable = error_type in (
            ErrorType.BEDROCK_RATE_LIMIT,
            ErrorType.BEDROCK_TIMEOUT,
            ErrorType.BEDROCK_SERVICE_ERROR,
        )

        context = ErrorContext(
            error_type=error_type,
            message=f"Bedrock API error during {operation}: {error_message}",
            recoverable=recoverable,
            details={
                "error_code": error_code,
                "operation": operation
            },
            original_exception=error
        )

        return cls(context)


class AgentError(GroupChatError):
    """Exception for misuse of the group chat orchestrator."""

    @classmethod
    def chat_already_complete(cls, reason: Optional[str] = None) -> "AgentError":
        """Create error for invoking a chat that has already terminated."""
        context = ErrorContext(
            error_type=ErrorType.CHAT_ALREADY_COMPLETE,
            message="Group chat is already complete; start a new session",
            recoverable=False,
            details={"completion_reason": reason}
        )
        return cls(context)

    @classmethod
    def chat_not_seeded(cls) -> "AgentError":
        """Create error for invoking a chat before any user input was added."""
        context = ErrorContext(
            error_type=ErrorType.CHAT_NOT_SEEDED,
            message="Group chat has no user input; call add_user_message first",
            recoverable=False
        )
        return cls(context)
