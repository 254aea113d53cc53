"""
CyberTipline web service client.

Each method is one request/response exchange with the service. The client
keeps no state between calls apart from the pooled ``httpx.AsyncClient``,
so one instance can serve many reports and concurrent tasks.
"""

import os
from typing import BinaryIO, TypeVar

import httpx
from loguru import logger

from cybertipline.core.correlation import correlation_scope
from cybertipline.helpers.xml_document import XML_CONTENT_TYPE, XmlModel, from_xml, to_xml
from cybertipline.models.config import Environment, Settings, get_settings
from cybertipline.models.exceptions import (
    ApplicationRejectionException,
    DecodingException,
    EncodingException,
    HttpStatusException,
    TransportException,
    ValidationException,
)
from cybertipline.models.file_details import FileDetails
from cybertipline.models.report import Report
from cybertipline.models.responses import (
    ReportDoneResponse,
    ReportResponse,
    ServiceResponse,
)

R = TypeVar("R", bound=ServiceResponse)

DEFAULT_TIMEOUT = httpx.Timeout(60.0, connect=30.0)
DEFAULT_LIMITS = httpx.Limits(
    max_connections=100,
    max_keepalive_connections=(os.cpu_count() or 1) + 1,
    keepalive_expiry=90.0,
)


class CyberTiplineClient:
    """
    Async client for the CyberTipline reporting API.

    Usage::

        async with CyberTiplineClient(user, password, Environment.TESTING) as client:
            report_id = await client.submit(report)
            file_id = await client.upload(report_id, "image.png", data)
            await client.file_info(details.assign_identifiers(report_id, file_id))
            await client.finish(report_id)

    Every method accepts an optional ``timeout`` (seconds) acting as the call
    deadline. Task cancellation propagates as ``asyncio.CancelledError``.
    """

    def __init__(
        self,
        username: str,
        password: str,
        environment: Environment = Environment.TESTING,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: httpx.Timeout | None = None,
        limits: httpx.Limits | None = None,
    ) -> None:
        self.environment = environment
        self._auth = httpx.BasicAuth(username, password)
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout or DEFAULT_TIMEOUT,
            limits=limits or DEFAULT_LIMITS,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> "CyberTiplineClient":
        """
        Build a client from credentials and transport settings.

        The timeout and connection-limit settings only shape a pool the
        client creates itself. When ``http_client`` is given, its own
        timeouts and limits apply instead.
        """
        settings = settings or get_settings()
        if not settings.has_credentials:
            raise ValidationException(
                "CYBERTIPLINE_USERNAME and CYBERTIPLINE_PASSWORD must be set"
            )
        if http_client is not None:
            logger.debug(
                "Using supplied HTTP client; CyberTipline timeout and "
                "connection settings are not applied"
            )
        return cls(
            settings.CYBERTIPLINE_USERNAME,
            settings.CYBERTIPLINE_PASSWORD,
            settings.CYBERTIPLINE_ENVIRONMENT,
            http_client=http_client,
            timeout=httpx.Timeout(
                settings.CYBERTIPLINE_TIMEOUT,
                connect=settings.CYBERTIPLINE_CONNECT_TIMEOUT,
            ),
            limits=httpx.Limits(
                max_connections=settings.CYBERTIPLINE_MAX_CONNECTIONS,
                max_keepalive_connections=DEFAULT_LIMITS.max_keepalive_connections,
                keepalive_expiry=settings.CYBERTIPLINE_KEEPALIVE_EXPIRY,
            ),
        )

    async def __aenter__(self) -> "CyberTiplineClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the connection pool unless it was supplied by the caller."""
        if self._owns_http_client:
            await self._http.aclose()

    # =========================================================================
    # Protocol operations
    # =========================================================================

    async def submit(self, report: Report, timeout: float | None = None) -> int:
        """
        Submit a report and return the report ID assigned by the service.

        The ID is the only valid input to every later call for this report.
        """
        with correlation_scope():
            body = self._encode("submit", report)
            response = await self._post(
                "submit",
                "/submit",
                timeout,
                content=body,
                headers={"Content-Type": XML_CONTENT_TYPE},
            )
            decoded = self._decode("submit", response, ReportResponse)
            if decoded.report_id is None:
                raise DecodingException(
                    "submit", "response has no reportId", response.status_code
                )
            logger.info(f"Report {decoded.report_id} submitted")
            return decoded.report_id

    async def upload(
        self,
        report_id: int,
        filename: str,
        data: bytes | BinaryIO,
        timeout: float | None = None,
    ) -> str:
        """
        Upload one evidence file for a submitted report.

        Returns:
            The file ID to put in the matching ``FileDetails``.
        """
        with correlation_scope():
            response = await self._post(
                "upload",
                "/upload",
                timeout,
                data={"id": str(report_id)},
                files={"file": (filename, data)},
            )
            decoded = self._decode("upload", response, ReportResponse)
            if decoded.file_id is None:
                raise DecodingException(
                    "upload", "response has no fileId", response.status_code
                )
            logger.info(f"File {decoded.file_id} uploaded to report {report_id}")
            return decoded.file_id

    async def file_info(
        self, details: FileDetails, timeout: float | None = None
    ) -> None:
        """Send metadata for an uploaded file."""
        with correlation_scope():
            if not details.has_identifiers:
                raise ValidationException(
                    "FileDetails needs report_id and file_id from submit and upload"
                )
            body = self._encode("fileinfo", details)
            response = await self._post(
                "fileinfo",
                "/fileinfo",
                timeout,
                content=body,
                headers={"Content-Type": XML_CONTENT_TYPE},
            )
            self._decode("fileinfo", response, ReportResponse)
            logger.info(
                f"File details sent for file {details.file_id} "
                f"of report {details.report_id}"
            )

    async def finish(self, report_id: int, timeout: float | None = None) -> None:
        """Tell the service no further files or metadata will be attached."""
        with correlation_scope():
            response = await self._post(
                "finish", "/finish", timeout, data={"id": str(report_id)}
            )
            self._decode("finish", response, ReportDoneResponse)
            logger.info(f"Report {report_id} finished")

    async def retract(self, report_id: int, timeout: float | None = None) -> None:
        """Withdraw a submitted report."""
        with correlation_scope():
            response = await self._post(
                "retract", "/retract", timeout, data={"id": str(report_id)}
            )
            self._decode("retract", response, ReportResponse)
            logger.info(f"Report {report_id} retracted")

    # =========================================================================
    # Internals
    # =========================================================================

    @staticmethod
    def _encode(operation: str, document: XmlModel) -> bytes:
        try:
            return to_xml(document)
        except (TypeError, ValueError) as e:
            raise EncodingException(operation, f"error encoding document: {e}") from e

    async def _post(
        self,
        operation: str,
        path: str,
        timeout: float | None,
        **kwargs: object,
    ) -> httpx.Response:
        if timeout is not None:
            kwargs["timeout"] = timeout
        url = f"{self.environment.base_url}{path}"
        logger.debug(f"CyberTipline {operation} request to {self.environment.name.lower()}")
        try:
            return await self._http.post(url, auth=self._auth, **kwargs)  # type: ignore[arg-type]
        except httpx.TimeoutException as e:
            logger.warning(f"CyberTipline {operation} timed out")
            raise TransportException(operation, f"request timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.warning(f"CyberTipline {operation} request failed: {e}")
            raise TransportException(operation, f"error making request: {e}") from e

    @staticmethod
    def _decode(
        operation: str, response: httpx.Response, model: type[R]
    ) -> R:
        """
        Decode a response and check it for success.

        Success needs a present responseCode of 0 and HTTP 200.
        """
        status_code = response.status_code
        decoded = from_xml(model, response.content, operation, status_code)
        if decoded.response_code is None:
            raise DecodingException(operation, "response has no responseCode", status_code)
        if not decoded.is_success:
            logger.warning(
                f"CyberTipline rejected {operation} "
                f"with response code {decoded.response_code}"
            )
            raise ApplicationRejectionException(
                operation, decoded.response_code, decoded.response_description
            )
        if status_code != httpx.codes.OK:
            raise HttpStatusException(operation, status_code, response.reason_phrase)
        return decoded
