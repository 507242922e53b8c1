"""
Error classification and user notifications for optimization runs.

A run can fail in three places: the input check before it starts, the
executive summary request, and scenario generation. Each failure is turned
into an ErrorInfo, logged at the level matching its severity, and can be
rendered by the dashboard as a notification.
"""

import logging
from collections import Counter
from typing import Dict, Any, Optional
from enum import Enum
from dataclasses import dataclass, field
from datetime import datetime, timedelta
import openai

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """How serious a failure is; also selects the notification style."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Where a failure came from."""
    API_ERROR = "api_error"
    VALIDATION_ERROR = "validation_error"
    NETWORK_ERROR = "network_error"
    SYSTEM_ERROR = "system_error"


NOTIFICATION_TITLES = {
    ErrorCategory.API_ERROR: "AI Service Error",
    ErrorCategory.VALIDATION_ERROR: "Input Validation Error",
    ErrorCategory.NETWORK_ERROR: "Connection Error",
    ErrorCategory.SYSTEM_ERROR: "System Error",
}

NOTIFICATION_TYPES = {
    ErrorSeverity.INFO: "info",
    ErrorSeverity.WARNING: "warning",
    ErrorSeverity.ERROR: "error",
    ErrorSeverity.CRITICAL: "error",
}

LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


@dataclass
class ErrorInfo:
    """A classified failure with text for the log and text for the user."""
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    user_message: str
    technical_details: Optional[str] = None
    suggested_action: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)


class InputValidationError(ValueError):
    """Raised when campaign inputs block a run from starting."""
    pass


class ErrorHandler:
    """
    Turns exceptions into ErrorInfo and keeps a bounded history of them
    for the System Information panel.
    """

    max_history = 100

    def __init__(self):
        self.error_history = []

    def handle_openai_error(self, error: Exception, context: str = "") -> ErrorInfo:
        """
        Classify a failure of the executive summary request.

        Args:
            error: Exception raised by the OpenAI client
            context: Operation that failed

        Returns:
            ErrorInfo for the failure
        """
        if isinstance(error, (openai.APITimeoutError, openai.APIConnectionError)):
            return self.handle_network_error(error, context)

        if isinstance(error, openai.AuthenticationError):
            severity = ErrorSeverity.ERROR
            user_message = "The executive summary is unavailable because the AI service rejected the API key."
            action = "Verify OPENAI_API_KEY in the Streamlit secrets or environment."
        elif isinstance(error, openai.RateLimitError):
            severity = ErrorSeverity.WARNING
            user_message = "The AI service is rate limiting requests. The numeric results are still available."
            action = "Wait a moment and rerun the engine."
        else:
            severity = ErrorSeverity.ERROR
            user_message = "The AI service could not write the executive summary."
            action = "Rerun the engine. The numeric results do not depend on the summary."

        return ErrorInfo(
            category=ErrorCategory.API_ERROR,
            severity=severity,
            message=f"Summary request failed in {context}: {error}",
            user_message=user_message,
            technical_details=str(error),
            suggested_action=action
        )

    def handle_network_error(self, error: Exception, context: str = "") -> ErrorInfo:
        """Classify a timeout or connection failure."""
        timed_out = isinstance(error, (TimeoutError, openai.APITimeoutError)) or "timeout" in str(error).lower()

        return ErrorInfo(
            category=ErrorCategory.NETWORK_ERROR,
            severity=ErrorSeverity.WARNING if timed_out else ErrorSeverity.ERROR,
            message=f"{'Timeout' if timed_out else 'Connection failure'} in {context}: {error}",
            user_message=(
                "The AI service did not answer in time." if timed_out
                else "Could not reach the AI service."
            ),
            technical_details=str(error),
            suggested_action="Check your internet connection and rerun the engine."
        )

    def handle_validation_error(self, error: Exception, context: str = "") -> ErrorInfo:
        # The validator already phrases its messages for the user
        return ErrorInfo(
            category=ErrorCategory.VALIDATION_ERROR,
            severity=ErrorSeverity.WARNING,
            message=f"Run rejected in {context}: {error}",
            user_message=str(error),
            suggested_action="Complete the campaign parameters and channel selection, then run again."
        )

    def classify_error(self, error: Exception, context: str = "") -> ErrorInfo:
        """
        Pick the handler for an exception.

        Anything not recognised as a validation, OpenAI or network failure
        is reported as a system error.
        """
        if isinstance(error, InputValidationError):
            return self.handle_validation_error(error, context)
        if isinstance(error, openai.OpenAIError):
            return self.handle_openai_error(error, context)
        if isinstance(error, (ConnectionError, TimeoutError)):
            return self.handle_network_error(error, context)

        return ErrorInfo(
            category=ErrorCategory.SYSTEM_ERROR,
            severity=ErrorSeverity.ERROR,
            message=f"Unexpected {type(error).__name__} in {context}: {error}",
            user_message="Something went wrong while preparing the results.",
            technical_details=str(error),
            suggested_action="Rerun the engine. If the problem persists, reset the inputs."
        )

    def create_user_notification(self, error_info: ErrorInfo) -> Dict[str, Any]:
        """
        Build the notification dict rendered by the dashboard.

        Keys: type, title, message, timestamp, plus action when a suggested
        action exists and technical_details for critical failures.
        """
        notification = {
            'type': NOTIFICATION_TYPES[error_info.severity],
            'title': NOTIFICATION_TITLES.get(error_info.category, "Error"),
            'message': error_info.user_message,
            'timestamp': error_info.timestamp.isoformat(),
        }

        if error_info.suggested_action:
            notification['action'] = error_info.suggested_action
        if error_info.severity == ErrorSeverity.CRITICAL and error_info.technical_details:
            notification['technical_details'] = error_info.technical_details

        return notification

    def log_error(self, error_info: ErrorInfo, context: str = ""):
        """Record the error in the history and write it to the log."""
        self.error_history.append(error_info)
        del self.error_history[:-self.max_history]

        logger.log(LOG_LEVELS[error_info.severity], f"{context}: {error_info.message}")

    def get_error_statistics(self) -> Dict[str, Any]:
        """Counts of logged errors, with a per-category breakdown of the last 24 hours."""
        if not self.error_history:
            return {'total_errors': 0}

        cutoff = datetime.now() - timedelta(hours=24)
        recent = [info for info in self.error_history if info.timestamp > cutoff]

        return {
            'total_errors': len(self.error_history),
            'recent_errors_24h': len(recent),
            'category_breakdown': dict(Counter(info.category.value for info in recent)),
            'severity_breakdown': dict(Counter(info.severity.value for info in recent)),
        }


# Shared by the controller, the summary generator and the app
error_handler = ErrorHandler()
