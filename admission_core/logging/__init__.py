"""
Admission Core Logging
======================
Structured JSON logging shared by the admissions services.
"""

from .structured import (
    JSONFormatter,
    setup_logging,
    log_audit,
    log_error,
)

__all__ = [
    "JSONFormatter",
    "setup_logging",
    "log_audit",
    "log_error",
]
