"""
File metadata document sent to ``/fileinfo``.

One ``FileDetails`` describes one uploaded evidence file. Its report and file
identifiers come from the service (``submit`` and ``upload``) and are set
once with ``assign_identifiers``.
"""

from datetime import datetime
from typing import Annotated, ClassVar

from pydantic import Field, TypeAdapter, ValidationError

from cybertipline.helpers.xml_document import XML_ATTRIBUTE, XML_TEXT, XmlModel
from cybertipline.models.common import DeviceId, IpCaptureEvent
from cybertipline.models.enums import FileClassification, FileRelevance
from cybertipline.models.exceptions import (
    IdentifierAlreadyAssignedException,
    ValidationException,
)

# Report identifiers are signed 64-bit integers on the service side
ReportId = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]

_report_id_adapter = TypeAdapter(ReportId)

_IDENTIFIER_FIELDS = ("report_id", "file_id")


class FileAnnotations(XmlModel):
    """Independent flags describing file content; not mutually exclusive."""

    anime_drawing_virtual_hentai: bool | None = None
    potential_meme: bool | None = None
    viral: bool | None = None
    possible_self_production: bool | None = None
    physical_harm: bool | None = None
    violence_gore: bool | None = None
    bestiality: bool | None = None
    live_streaming: bool | None = None
    infant: bool | None = None
    generative_ai: bool | None = None


class Hash(XmlModel):
    """A content hash; any algorithm name is accepted."""

    value: Annotated[str | None, XML_TEXT] = None
    hash_type: Annotated[str | None, XML_ATTRIBUTE] = None


class NameValue(XmlModel):
    name: str | None = None
    value: str | None = None


class Details(XmlModel):
    name_value_pair: list[NameValue] = Field(default_factory=list)


class FileDetails(XmlModel):
    xml_tag: ClassVar[str] = "fileDetails"

    report_id: ReportId | None = None
    file_id: str | None = None
    file_name: str | None = None
    original_file_name: str | None = None
    uploaded_to_esp_timestamp: datetime | None = None
    location_of_file: str | None = None
    file_viewed_by_esp: bool | None = None
    exif_viewed_by_esp: bool | None = None
    publicly_available: bool | None = None
    file_relevance: FileRelevance | None = None
    file_annotations: FileAnnotations | None = None
    industry_classification: FileClassification | None = None
    original_file_hash: list[Hash] = Field(default_factory=list)
    ip_capture_event: IpCaptureEvent | None = None
    device_id: list[DeviceId] = Field(default_factory=list)
    details: list[Details] = Field(default_factory=list)
    additional_info: list[str] = Field(default_factory=list)
    # Superseded by file_annotations.potential_meme, still accepted
    potential_meme: bool | None = None

    def __setattr__(self, name: str, value: object) -> None:
        # Identifiers are write-once, whichever way they are set
        if name in _IDENTIFIER_FIELDS:
            if getattr(self, name, None) is not None:
                raise IdentifierAlreadyAssignedException(name)
            if name == "report_id" and value is not None:
                value = _validate_report_id(value)
        super().__setattr__(name, value)

    @property
    def has_identifiers(self) -> bool:
        return self.report_id is not None and self.file_id is not None

    def assign_identifiers(self, report_id: int, file_id: str) -> "FileDetails":
        """
        Back-fill the identifiers returned by ``submit`` and ``upload``.

        Identifiers can be assigned once; a second assignment raises and
        leaves both identifiers untouched.

        Raises:
            IdentifierAlreadyAssignedException: Either identifier is already set.
            ValidationException: report_id is not a signed 64-bit integer.

        Returns:
            self, for chaining.
        """
        for name in _IDENTIFIER_FIELDS:
            if getattr(self, name) is not None:
                raise IdentifierAlreadyAssignedException(name)
        report_id = _validate_report_id(report_id)
        self.report_id = report_id
        self.file_id = file_id
        return self


def _validate_report_id(value: object) -> int:
    try:
        return _report_id_adapter.validate_python(value)
    except ValidationError as e:
        raise ValidationException(
            f"report_id must be a signed 64-bit integer, got {value!r}"
        ) from e
