"""
Services layer for talking to the CyberTipline web service.

``CyberTiplineClient`` performs single protocol calls; ``ReportSubmission``
sequences them for one report.
"""

from .client import CyberTiplineClient
from .submission import ReportSubmission, SubmissionState

__all__ = [
    "CyberTiplineClient",
    "ReportSubmission",
    "SubmissionState",
]
