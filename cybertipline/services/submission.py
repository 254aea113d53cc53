"""
Per-report submission workflow.

Walks one report through the protocol:

    DRAFT -> SUBMITTED -> FILES_ATTACHED* -> FINISHED
                      \\-> RETRACTED (from SUBMITTED or FILES_ATTACHED)

and threads the identifiers returned by the service into later calls.
Out-of-order calls are refused locally; the service applies its own rules on
top of this.
"""

from enum import Enum
from typing import BinaryIO

from loguru import logger

from cybertipline.core.correlation import correlation_scope, generate_correlation_id
from cybertipline.models.exceptions import (
    InvalidSubmissionStateException,
    ValidationException,
)
from cybertipline.models.file_details import FileDetails
from cybertipline.models.report import Report
from cybertipline.services.client import CyberTiplineClient


class SubmissionState(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    FILES_ATTACHED = "files_attached"
    FINISHED = "finished"
    RETRACTED = "retracted"

    @property
    def is_open(self) -> bool:
        """True while files can be attached and the report closed."""
        return self in (SubmissionState.SUBMITTED, SubmissionState.FILES_ATTACHED)

    @property
    def is_terminal(self) -> bool:
        return self in (SubmissionState.FINISHED, SubmissionState.RETRACTED)


class ReportSubmission:
    """
    One report's trip through the service.

    A failed call leaves the state unchanged: a failed ``submit`` keeps the
    submission in DRAFT with no report ID.
    """

    def __init__(self, client: CyberTiplineClient, report: Report) -> None:
        self.client = client
        self.report = report
        self.state = SubmissionState.DRAFT
        self.report_id: int | None = None
        self.file_ids: list[str] = []
        # All calls for one report share a correlation ID
        self.correlation_id = generate_correlation_id()

    def _require_open(self, action: str) -> int:
        if not self.state.is_open or self.report_id is None:
            raise InvalidSubmissionStateException(action, self.state.value)
        return self.report_id

    async def submit(self, timeout: float | None = None) -> int:
        if self.state is not SubmissionState.DRAFT:
            raise InvalidSubmissionStateException("submit", self.state.value)
        with correlation_scope(self.correlation_id):
            self.report_id = await self.client.submit(self.report, timeout=timeout)
        self.state = SubmissionState.SUBMITTED
        return self.report_id

    async def attach(
        self,
        filename: str,
        data: bytes | BinaryIO,
        details: FileDetails | None = None,
        timeout: float | None = None,
    ) -> str:
        """
        Upload a file and, when ``details`` is given, send its metadata.

        ``details`` receives the report and file IDs before it is sent.

        Returns:
            The file ID assigned by the service.
        """
        report_id = self._require_open("attach a file to")
        with correlation_scope(self.correlation_id):
            file_id = await self.client.upload(
                report_id, filename, data, timeout=timeout
            )
        self.file_ids.append(file_id)
        self.state = SubmissionState.FILES_ATTACHED
        if details is not None:
            await self.annotate(file_id, details, timeout=timeout)
        return file_id

    async def annotate(
        self, file_id: str, details: FileDetails, timeout: float | None = None
    ) -> None:
        """Send (more) metadata for a file already uploaded to this report."""
        report_id = self._require_open("annotate a file of")
        if file_id not in self.file_ids:
            raise ValidationException(f"File {file_id} was not uploaded to this report")
        if not details.has_identifiers:
            details.assign_identifiers(report_id, file_id)
        elif (details.report_id, details.file_id) != (report_id, file_id):
            raise ValidationException(
                f"FileDetails belongs to report {details.report_id} "
                f"file {details.file_id}"
            )
        with correlation_scope(self.correlation_id):
            await self.client.file_info(details, timeout=timeout)

    async def finish(self, timeout: float | None = None) -> None:
        report_id = self._require_open("finish")
        with correlation_scope(self.correlation_id):
            await self.client.finish(report_id, timeout=timeout)
        self.state = SubmissionState.FINISHED
        logger.debug(f"Report {report_id} closed with {len(self.file_ids)} file(s)")

    async def retract(self, timeout: float | None = None) -> None:
        report_id = self._require_open("retract")
        with correlation_scope(self.correlation_id):
            await self.client.retract(report_id, timeout=timeout)
        self.state = SubmissionState.RETRACTED
