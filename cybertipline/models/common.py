"""
Document blocks shared by reports and file details.

People, contact channels, addresses, capture history and account state.
"""

from datetime import date, datetime
from typing import Annotated

from pydantic import Field, model_validator

from cybertipline.helpers.xml_document import XML_ATTRIBUTE, XML_TEXT, XmlModel
from cybertipline.models.enums import (
    AddressType,
    AssociatedAccountType,
    Country,
    EmailType,
    IpCaptureType,
    PhoneType,
    State,
)


class Phone(XmlModel):
    value: Annotated[str | None, XML_TEXT] = None
    type: Annotated[PhoneType | None, XML_ATTRIBUTE] = None
    verified: Annotated[bool | None, XML_ATTRIBUTE] = None
    # Only meaningful when verified is true; left to the service to enforce
    verification_date: Annotated[datetime | None, XML_ATTRIBUTE] = None
    country_calling_code: Annotated[str | None, XML_ATTRIBUTE] = None
    extension: Annotated[str | None, XML_ATTRIBUTE] = None


class Email(XmlModel):
    value: Annotated[str | None, XML_TEXT] = None
    type: Annotated[EmailType | None, XML_ATTRIBUTE] = None
    verified: Annotated[bool | None, XML_ATTRIBUTE] = None
    verification_date: Annotated[datetime | None, XML_ATTRIBUTE] = None


class Address(XmlModel):
    """Postal address; ``state`` and ``non_usa_state`` are mutually exclusive."""

    type: Annotated[AddressType | None, XML_ATTRIBUTE] = None
    address: str | None = None
    city: str | None = None
    zip_code: str | None = None
    state: State | None = None
    non_usa_state: str | None = None
    country: Country | None = None

    @model_validator(mode="after")
    def check_state_choice(self) -> "Address":
        if self.state is not None and self.non_usa_state is not None:
            raise ValueError("state and non_usa_state cannot both be set")
        return self


class ContactPerson(XmlModel):
    first_name: str | None = None
    last_name: str | None = None
    phone: list[Phone] = Field(default_factory=list)
    email: list[Email] = Field(default_factory=list)
    address: list[Address] = Field(default_factory=list)


class Person(ContactPerson):
    age: int | None = None
    date_of_birth: date | None = None


class IpCaptureEvent(XmlModel):
    """A timestamped IP observation for a user, account or file."""

    ip_address: str | None = None
    event_name: IpCaptureType | None = None
    date_time: datetime | None = None
    possible_proxy: bool | None = None
    port: int | None = None


class DeviceId(XmlModel):
    id_type: str | None = None
    id_value: str | None = None
    event_name: IpCaptureType | None = None
    date_time: datetime | None = None


class AccountPermanentlyDisabled(XmlModel):
    value: Annotated[bool | None, XML_TEXT] = None
    disabled_date: Annotated[datetime | None, XML_ATTRIBUTE] = None
    user_notified: Annotated[bool | None, XML_ATTRIBUTE] = None
    user_notified_date: Annotated[datetime | None, XML_ATTRIBUTE] = None


class AccountTemporarilyDisabled(AccountPermanentlyDisabled):
    reenabled_date: Annotated[datetime | None, XML_ATTRIBUTE] = None


class EstimatedLocation(XmlModel):
    verified: Annotated[bool | None, XML_ATTRIBUTE] = None
    timestamp: Annotated[datetime | None, XML_ATTRIBUTE] = None
    city: str | None = None
    # Free text; US callers usually pass a State token
    region: str | None = None
    country_code: Country | None = None


class Platform(XmlModel):
    value: Annotated[str | None, XML_TEXT] = None
    third_party_user: Annotated[bool | None, XML_ATTRIBUTE] = None


class AssociatedAccount(XmlModel):
    """Another account held by a victim, e.g. on a third-party platform."""

    type: Annotated[AssociatedAccountType | None, XML_ATTRIBUTE] = None
    platform: Platform | None = None
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    approximate_age: int | None = None
    date_of_birth: date | None = None
    phone: list[Phone] = Field(default_factory=list)
    email: list[Email] = Field(default_factory=list)
    all_emails_reported: bool | None = None
    address: list[Address] = Field(default_factory=list)
    esp_service: str | None = None
    esp_identifier: str | None = None
    profile_url: list[str] = Field(default_factory=list)
    screen_name: str | None = None
    display_name: list[str] = Field(default_factory=list)
    profile_bio: str | None = None
    group_identifier: str | None = None
    compromised_account: bool | None = None
    account_temporarily_disabled: AccountTemporarilyDisabled | None = None
    account_permanently_disabled: AccountPermanentlyDisabled | None = None
    ip_capture_event: list[IpCaptureEvent] = Field(default_factory=list)
    device_id: list[DeviceId] = Field(default_factory=list)
    prior_ct_report: list[int] = Field(default_factory=list, alias="priorCTReport")
    additional_info: str | None = None
