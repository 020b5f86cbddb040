"""Application services for the mure CLI.

Services implement the business logic of the application, coordinating
between the domain layer (core/, store/) and infrastructure (git/, github/).
"""

from mure.services.clone import CloneError, CloneResult
from mure.services.refresh import (
    RefreshError,
    RefreshOutcome,
    SkipReason,
    Skipped,
    Updated,
)
from mure.services.refresh_all import RefreshAllService, RefreshReport, RefreshSummary

__all__ = [
    # clone
    "CloneError",
    "CloneResult",
    # refresh
    "RefreshError",
    "RefreshOutcome",
    "SkipReason",
    "Skipped",
    "Updated",
    # refresh all
    "RefreshAllService",
    "RefreshReport",
    "RefreshSummary",
]
