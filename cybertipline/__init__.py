"""Client for the CyberTipline incident reporting web service."""

from cybertipline.models.common import (
    AccountPermanentlyDisabled,
    AccountTemporarilyDisabled,
    Address,
    AssociatedAccount,
    ContactPerson,
    DeviceId,
    Email,
    EstimatedLocation,
    IpCaptureEvent,
    Person,
    Phone,
    Platform,
)
from cybertipline.models.config import Environment, Settings, get_settings
from cybertipline.models.enums import (
    AddressType,
    AssociatedAccountType,
    BatchedReportReason,
    Country,
    EmailType,
    FileClassification,
    FileRelevance,
    IncidentType,
    IpCaptureType,
    PhoneType,
    State,
)
from cybertipline.models.exceptions import (
    ApplicationRejectionException,
    CyberTiplineException,
    DecodingException,
    DomainException,
    EncodingException,
    HttpStatusException,
    IdentifierAlreadyAssignedException,
    InvalidSubmissionStateException,
    TransportException,
    ValidationException,
)
from cybertipline.models.file_details import (
    Details,
    FileAnnotations,
    FileDetails,
    Hash,
    NameValue,
)
from cybertipline.models.report import (
    BatchedReport,
    CellPhoneIncident,
    ChatImIncident,
    EmailIncident,
    IncidentSummary,
    IntendedRecipient,
    InternetDetails,
    LawEnforcement,
    NewsgroupIncident,
    NonInternetIncident,
    OnlineGamingIncident,
    Peer2peerIncident,
    PersonOrUserReported,
    Report,
    ReportAnnotations,
    Reporter,
    ServedLegalProcessInternational,
    Victim,
    WebPageIncident,
)
from cybertipline.models.responses import ReportDoneResponse, ReportResponse
from cybertipline.services import CyberTiplineClient, ReportSubmission, SubmissionState

__all__ = [
    "AccountPermanentlyDisabled",
    "AccountTemporarilyDisabled",
    "Address",
    "AddressType",
    "ApplicationRejectionException",
    "AssociatedAccount",
    "AssociatedAccountType",
    "BatchedReport",
    "BatchedReportReason",
    "CellPhoneIncident",
    "ChatImIncident",
    "ContactPerson",
    "Country",
    "CyberTiplineClient",
    "CyberTiplineException",
    "DecodingException",
    "Details",
    "DeviceId",
    "DomainException",
    "Email",
    "EmailIncident",
    "EmailType",
    "EncodingException",
    "Environment",
    "EstimatedLocation",
    "FileAnnotations",
    "FileClassification",
    "FileDetails",
    "FileRelevance",
    "Hash",
    "HttpStatusException",
    "IdentifierAlreadyAssignedException",
    "IncidentSummary",
    "IncidentType",
    "IntendedRecipient",
    "InternetDetails",
    "InvalidSubmissionStateException",
    "IpCaptureEvent",
    "IpCaptureType",
    "LawEnforcement",
    "NameValue",
    "NewsgroupIncident",
    "NonInternetIncident",
    "OnlineGamingIncident",
    "Peer2peerIncident",
    "Person",
    "PersonOrUserReported",
    "Phone",
    "PhoneType",
    "Platform",
    "Report",
    "ReportAnnotations",
    "ReportDoneResponse",
    "ReportResponse",
    "ReportSubmission",
    "Reporter",
    "ServedLegalProcessInternational",
    "Settings",
    "State",
    "SubmissionState",
    "TransportException",
    "ValidationException",
    "Victim",
    "WebPageIncident",
    "get_settings",
]
