"""
Run-start validation for campaign inputs.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from models.data_models import CampaignInputs

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class ValidationSeverity(Enum):
    """Severity levels for validation issues."""
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ValidationIssue:
    """A single problem found in the campaign inputs."""
    severity: ValidationSeverity
    message: str
    field: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of validating campaign inputs before a run."""
    is_valid: bool
    issues: List[ValidationIssue]

    @property
    def errors(self) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == ValidationSeverity.WARNING]


class InputValidator:
    """Checks that a run can start; only blocking errors are reported."""

    def validate(self, inputs: CampaignInputs) -> ValidationResult:
        """
        Validate campaign inputs.

        Args:
            inputs: Campaign inputs from the form

        Returns:
            ValidationResult; is_valid is False when any error is present
        """
        issues = []

        if not inputs.channel_selection:
            issues.append(ValidationIssue(
                severity=ValidationSeverity.ERROR,
                message="Please select at least one channel.",
                field='channel_selection'
            ))
        elif inputs.total_budget is None or inputs.target_reach is None:
            issues.append(ValidationIssue(
                severity=ValidationSeverity.ERROR,
                message="Please fill in the Total Budget and Target Reach.",
                field='total_budget' if inputs.total_budget is None else 'target_reach'
            ))

        if inputs.max_channels and len(inputs.channel_selection) > inputs.max_channels:
            issues.append(ValidationIssue(
                severity=ValidationSeverity.WARNING,
                message=(
                    f"{len(inputs.channel_selection)} channels selected; "
                    f"the plan is capped at {inputs.max_channels}."
                ),
                field='max_channels'
            ))

        if inputs.age_min and inputs.age_max and inputs.age_min > inputs.age_max:
            issues.append(ValidationIssue(
                severity=ValidationSeverity.WARNING,
                message="Min Age is greater than Max Age.",
                field='age_min'
            ))

        is_valid = not any(issue.severity == ValidationSeverity.ERROR for issue in issues)
        if not is_valid:
            logger.info(f"Run rejected: {issues[0].message}")
        for warning in [issue for issue in issues if issue.severity == ValidationSeverity.WARNING]:
            logger.info(f"Input warning: {warning.message}")

        return ValidationResult(is_valid=is_valid, issues=issues)
