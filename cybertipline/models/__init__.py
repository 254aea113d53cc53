"""Models package - settings, exceptions, enumerations and document models.

Document models live in their own modules (``report``, ``file_details``,
``responses``, ``common``) and are imported from there.
"""

from .enums import ENUMERATIONS
from .exceptions import (
    ApplicationRejectionException,
    CyberTiplineException,
    DecodingException,
    DomainException,
    EncodingException,
    HttpStatusException,
    TransportException,
    ValidationException,
)

__all__ = [
    "ENUMERATIONS",
    "ApplicationRejectionException",
    "CyberTiplineException",
    "DecodingException",
    "DomainException",
    "EncodingException",
    "HttpStatusException",
    "TransportException",
    "ValidationException",
]
