#!/usr/bin/env python3
"""
Error taxonomy for the recipe analysis pipeline.
Only reference data problems ever reach the caller; remote failures are
absorbed by the orchestrator and degrade to the local pipeline.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    VALIDATION = "validation"
    PROCESSING = "processing"
    EXTERNAL_API = "external_api"
    TIMEOUT = "timeout"
    REFERENCE_DATA = "reference_data"
    UNKNOWN = "unknown"


class RecipeProcessingError(Exception):
    """Base exception for recipe processing errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None,
                 category: ErrorCategory = ErrorCategory.PROCESSING):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.category = category
        self.timestamp = datetime.now(timezone.utc)
        self.trace_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
            "trace_id": self.trace_id,
        }


class RemoteAnalysisError(RecipeProcessingError):
    """The remote analysis service could not produce a result."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 timed_out: bool = False, **kwargs):
        category = ErrorCategory.TIMEOUT if timed_out else ErrorCategory.EXTERNAL_API
        super().__init__(message, category=category, **kwargs)
        self.status_code = status_code
        self.timed_out = timed_out


class MalformedResponseError(RemoteAnalysisError):
    """Remote payload did not have the AnalyzeResult shape."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.category = ErrorCategory.VALIDATION
        self.field = field


class ReferenceDataError(RecipeProcessingError):
    """Knowledge base, taste table or keyword rules missing or corrupt."""

    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.REFERENCE_DATA, **kwargs)
        self.path = path
