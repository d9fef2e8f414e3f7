# sanitizr/errors.py
"""
Failures raised inside the engine. The dispatcher turns every one of them
into a failed SanitizationResult; none of them reach the caller.
"""
from __future__ import annotations
from pathlib import Path
from sanitizr.models import FailureKind


class SanitizeError(Exception):
    kind = FailureKind.INTERNAL


class ClassificationUnknown(SanitizeError):
    kind = FailureKind.CLASSIFICATION_UNKNOWN


class DecodeFailure(SanitizeError):
    kind = FailureKind.DECODE_FAILURE


class ExternalToolFailure(SanitizeError):
    kind = FailureKind.EXTERNAL_TOOL_FAILURE

    def __init__(self, message: str, log: str = "") -> None:
        super().__init__(message)
        self.log = log


class ReplaceFailure(SanitizeError):
    kind = FailureKind.REPLACE_FAILURE


class OriginalLost(ReplaceFailure):
    kind = FailureKind.ORIGINAL_LOST

    def __init__(self, message: str, temp_path: Path) -> None:
        super().__init__(message)
        self.temp_path = temp_path
