"""
Report document submitted to ``/submit``.

Field order in each class is the element order on the wire.
"""

from datetime import datetime
from typing import Annotated, ClassVar

from pydantic import Field, model_validator

from cybertipline.helpers.xml_document import XML_ATTRIBUTE, XML_TEXT, XmlModel
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
)
from cybertipline.models.enums import BatchedReportReason, Country, IncidentType


class ReportAnnotations(XmlModel):
    """Independent flags; any combination may be set."""

    sextortion: bool | None = None
    csam_solicitation: bool | None = None
    minor_to_minor_interaction: bool | None = None
    spam: bool | None = None
    sadistic_online_exploitation: bool | None = None


class IncidentSummary(XmlModel):
    incident_type: IncidentType
    platform: str | None = None
    escalate_to_high_priority: str | None = None
    report_annotations: ReportAnnotations | None = None
    incident_date_time: datetime
    incident_date_time_description: str | None = None


class WebPageIncident(XmlModel):
    third_party_hosted_content: Annotated[bool | None, XML_ATTRIBUTE] = None
    url: list[str] = Field(default_factory=list)
    additional_info: str | None = None


class EmailIncident(XmlModel):
    email_address: list[Email] = Field(default_factory=list)
    content: str | None = None
    additional_info: str | None = None


class NewsgroupIncident(XmlModel):
    name: str | None = None
    email_address: list[Email] = Field(default_factory=list)
    content: str | None = None
    additional_info: str | None = None


class ChatImIncident(XmlModel):
    chat_client: str | None = None
    chat_room_name: str | None = None
    content: str | None = None
    additional_info: str | None = None


class OnlineGamingIncident(XmlModel):
    game_name: str | None = None
    console: str | None = None
    content: str | None = None
    additional_info: str | None = None


class CellPhoneIncident(XmlModel):
    phone_number: Phone | None = None
    latitude: float | None = None
    longitude: float | None = None
    additional_info: str | None = None


class NonInternetIncident(XmlModel):
    location_name: str | None = None
    incident_address: list[Address] = Field(default_factory=list)
    additional_info: str | None = None


class Peer2peerIncident(XmlModel):
    client: str | None = None
    ip_capture_event: list[IpCaptureEvent] = Field(default_factory=list)
    file_names: str | None = None
    additional_info: str | None = None


class InternetDetails(XmlModel):
    """
    Where an incident happened. Exactly one variant must be set.

    The service defines no behavior for entries carrying several variants,
    so such entries are refused at construction.
    """

    VARIANTS: ClassVar[tuple[str, ...]] = (
        "web_page_incident",
        "email_incident",
        "newsgroup_incident",
        "chat_im_incident",
        "online_gaming_incident",
        "cell_phone_incident",
        "non_internet_incident",
        "peer2peer_incident",
    )

    web_page_incident: WebPageIncident | None = None
    email_incident: EmailIncident | None = None
    newsgroup_incident: NewsgroupIncident | None = None
    chat_im_incident: ChatImIncident | None = None
    online_gaming_incident: OnlineGamingIncident | None = None
    cell_phone_incident: CellPhoneIncident | None = None
    non_internet_incident: NonInternetIncident | None = None
    peer2peer_incident: Peer2peerIncident | None = Field(
        default=None, alias="peer2peerIncident"
    )

    @model_validator(mode="after")
    def check_single_variant(self) -> "InternetDetails":
        populated = [name for name in self.VARIANTS if getattr(self, name) is not None]
        if len(populated) != 1:
            raise ValueError(
                f"exactly one incident variant must be set, got {len(populated)}"
                + (f" ({', '.join(populated)})" if populated else "")
            )
        return self

    @property
    def variant(self) -> XmlModel:
        """The populated incident block."""
        for name in self.VARIANTS:
            value = getattr(self, name)
            if value is not None:
                return value
        raise AssertionError("unreachable: validated at construction")


class ServedLegalProcessInternational(XmlModel):
    value: Annotated[bool | None, XML_TEXT] = None
    flea_country: Annotated[Country | None, XML_ATTRIBUTE] = None


class LawEnforcement(XmlModel):
    agency_name: str | None = None
    case_number: str | None = None
    officer_contact: ContactPerson | None = None
    reported_to_le: bool | None = None
    served_legal_process_domestic: bool | None = None
    served_legal_process_international: ServedLegalProcessInternational | None = None


class Reporter(XmlModel):
    reporting_person: Person | None = None
    contact_person: ContactPerson | None = None
    company_template: str | None = None
    terms_of_service: str | None = None
    legal_url: str | None = Field(default=None, alias="legalURL")


class PersonOrUserReported(XmlModel):
    """The subject of the report."""

    person_or_user_reported_person: Person | None = None
    vehicle_description: str | None = None
    esp_identifier: str | None = None
    esp_service: str | None = None
    compromised_account: bool | None = None
    screen_name: str | None = None
    display_name: list[str] = Field(default_factory=list)
    profile_url: list[str] = Field(default_factory=list)
    profile_bio: str | None = None
    ip_capture_event: list[IpCaptureEvent] = Field(default_factory=list)
    device_id: list[DeviceId] = Field(default_factory=list)
    prior_ct_reports: list[int] = Field(default_factory=list, alias="priorCTReports")
    group_identifier: str | None = None
    account_temporarily_disabled: AccountTemporarilyDisabled | None = None
    account_permanently_disabled: AccountPermanentlyDisabled | None = None
    estimated_location: EstimatedLocation | None = None
    all_emails_reported: bool | None = None
    additional_info: str | None = None


class IntendedRecipient(XmlModel):
    intended_recipient_person: Person | None = None
    esp_identifier: str | None = None
    esp_service: str | None = None
    compromised_account: bool | None = None
    screen_name: str | None = None
    display_name: list[str] = Field(default_factory=list)
    profile_url: list[str] = Field(default_factory=list)
    profile_bio: str | None = None
    ip_capture_event: list[IpCaptureEvent] = Field(default_factory=list)
    device_id: list[DeviceId] = Field(default_factory=list)
    prior_ct_reports: list[int] = Field(default_factory=list, alias="priorCTReports")
    group_identifier: str | None = None
    account_temporarily_disabled: AccountTemporarilyDisabled | None = None
    account_permanently_disabled: AccountPermanentlyDisabled | None = None
    estimated_location: EstimatedLocation | None = None
    all_emails_reported: bool | None = None
    additional_info: list[str] = Field(default_factory=list)


class Victim(XmlModel):
    victim_person: Person | None = None
    esp_identifier: str | None = None
    esp_service: str | None = None
    compromised_account: bool | None = None
    screen_name: str | None = None
    display_name: list[str] = Field(default_factory=list)
    profile_url: list[str] = Field(default_factory=list)
    profile_bio: str | None = None
    ip_capture_event: list[IpCaptureEvent] = Field(default_factory=list)
    device_id: list[DeviceId] = Field(default_factory=list)
    school_name: str | None = None
    prior_ct_reports: list[int] = Field(default_factory=list, alias="priorCTReports")
    account_temporarily_disabled: AccountTemporarilyDisabled | None = None
    account_permanently_disabled: AccountPermanentlyDisabled | None = None
    estimated_location: EstimatedLocation | None = None
    all_emails_reported: bool | None = None
    associated_account: list[AssociatedAccount] = Field(default_factory=list)
    additional_info: str | None = None


class BatchedReport(XmlModel):
    """Marks a report shell shared by several near-duplicate files."""

    reason: BatchedReportReason


class Report(XmlModel):
    """Root report document."""

    xml_tag: ClassVar[str] = "report"

    incident_summary: IncidentSummary
    internet_details: list[InternetDetails] = Field(default_factory=list)
    law_enforcement: LawEnforcement | None = None
    reporter: Reporter
    person_or_user_reported: PersonOrUserReported | None = None
    intended_recipient: list[IntendedRecipient] = Field(default_factory=list)
    victim: list[Victim] = Field(default_factory=list)
    batched_report: BatchedReport | None = None
    additional_info: str | None = None
