"""Response documents returned by the CyberTipline service."""

from typing import ClassVar

from pydantic import Field

from cybertipline.helpers.xml_document import XmlModel

# responseCode value meaning "no error"
RESPONSE_CODE_SUCCESS = 0


class ServiceResponse(XmlModel):
    """
    Fields common to every response.

    ``response_code`` is None when the element was absent, which is different
    from a present ``0`` (success).
    """

    response_code: int | None = None
    response_description: str | None = None

    @property
    def is_success(self) -> bool:
        return self.response_code == RESPONSE_CODE_SUCCESS


class ReportResponse(ServiceResponse):
    """Answer to submit, upload, fileinfo and retract."""

    xml_tag: ClassVar[str] = "reportResponse"

    report_id: int | None = None
    file_id: str | None = None
    hash: str | None = None


class ReportFiles(XmlModel):
    file_id: list[str] = Field(default_factory=list)


class ReportDoneResponse(ServiceResponse):
    """Answer to finish."""

    xml_tag: ClassVar[str] = "reportDoneResponse"

    report_id: int | None = None
    files: ReportFiles | None = None
