"""
Pytest configuration and fixtures for client tests.
"""

import re
import sys
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from pathlib import Path
from urllib.parse import parse_qs

import httpx
import pytest
import pytest_asyncio

# Add project root to path for imports
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from cybertipline.core.correlation import set_correlation_id  # noqa: E402
from cybertipline.models.config import Environment  # noqa: E402
from cybertipline.models.enums import IncidentType  # noqa: E402
from cybertipline.models.report import (  # noqa: E402
    IncidentSummary,
    Report,
    Reporter,
)
from cybertipline.models.common import Person  # noqa: E402
from cybertipline.services.client import CyberTiplineClient  # noqa: E402

INCIDENT_TIME = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

_MULTIPART_ID_RE = re.compile(rb'name="id"\r\n\r\n(-?\d+)\r\n')


def report_response(code: int = 0, description: str | None = None, **fields: object) -> bytes:
    """Build a reportResponse body the way the service does."""
    parts = [f"<responseCode>{code}</responseCode>"]
    if description is not None:
        parts.append(f"<responseDescription>{description}</responseDescription>")
    for name, value in fields.items():
        parts.append(f"<{name}>{value}</{name}>")
    return f"<reportResponse>{''.join(parts)}</reportResponse>".encode()


class FakeCyberTipline:
    """
    In-process stand-in for the CyberTipline service.

    Tracks reports and uploaded files so stale or mismatched identifiers are
    rejected like the real service does.
    """

    def __init__(self) -> None:
        self.next_report_id = 5000
        self.next_file_id = 1
        self.reports: dict[int, str] = {}
        self.files: dict[str, int] = {}
        self.requests: list[httpx.Request] = []
        self.file_infos: list[ET.Element] = []
        self.submitted: list[ET.Element] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not request.headers.get("Authorization", "").startswith("Basic "):
            return httpx.Response(401, text="Unauthorized")
        operation = request.url.path.rsplit("/", 1)[-1]
        handler = getattr(self, f"_handle_{operation}", None)
        if handler is None:
            return httpx.Response(404, text="Not Found")
        return handler(request)

    @staticmethod
    def _reject(code: int, description: str) -> httpx.Response:
        return httpx.Response(200, content=report_response(code, description))

    def _form_id(self, request: httpx.Request) -> int | None:
        values = parse_qs(request.content.decode()).get("id")
        return int(values[0]) if values else None

    def _handle_submit(self, request: httpx.Request) -> httpx.Response:
        try:
            root = ET.fromstring(request.content)
        except ET.ParseError:
            return self._reject(1000, "Malformed XML")
        if root.tag != "report" or root.find("incidentSummary/incidentType") is None:
            return self._reject(1000, "Invalid report")
        report_id = self.next_report_id
        self.next_report_id += 1
        self.reports[report_id] = "open"
        self.submitted.append(root)
        return httpx.Response(
            200, content=report_response(0, "Success", reportId=report_id)
        )

    def _handle_upload(self, request: httpx.Request) -> httpx.Response:
        match = _MULTIPART_ID_RE.search(request.content)
        report_id = int(match.group(1)) if match else None
        if report_id is None or self.reports.get(report_id) != "open":
            return self._reject(4100, "Invalid report id")
        file_id = f"file-{self.next_file_id:04d}"
        self.next_file_id += 1
        self.files[file_id] = report_id
        return httpx.Response(
            200, content=report_response(0, "Success", reportId=report_id, fileId=file_id)
        )

    def _handle_fileinfo(self, request: httpx.Request) -> httpx.Response:
        root = ET.fromstring(request.content)
        report_id = int(root.findtext("reportId", "-1"))
        file_id = root.findtext("fileId", "")
        if self.files.get(file_id) != report_id or self.reports.get(report_id) != "open":
            return self._reject(4200, "Invalid file id")
        self.file_infos.append(root)
        return httpx.Response(200, content=report_response(0, "Success"))

    def _handle_finish(self, request: httpx.Request) -> httpx.Response:
        report_id = self._form_id(request)
        if report_id is None or self.reports.get(report_id) != "open":
            return httpx.Response(
                200,
                content=b"<reportDoneResponse><responseCode>4100</responseCode>"
                b"</reportDoneResponse>",
            )
        self.reports[report_id] = "finished"
        file_ids = "".join(
            f"<fileId>{f}</fileId>" for f, r in self.files.items() if r == report_id
        )
        body = (
            "<reportDoneResponse><responseCode>0</responseCode>"
            f"<reportId>{report_id}</reportId><files>{file_ids}</files>"
            "</reportDoneResponse>"
        )
        return httpx.Response(200, content=body.encode())

    def _handle_retract(self, request: httpx.Request) -> httpx.Response:
        report_id = self._form_id(request)
        if report_id is None or self.reports.get(report_id) != "open":
            return self._reject(4100, "Report cannot be retracted")
        self.reports[report_id] = "retracted"
        return httpx.Response(200, content=report_response(0, "Success"))


@pytest.fixture(autouse=True)
def reset_correlation_id():
    """Start every test without a correlation ID in context."""
    set_correlation_id("")
    yield
    set_correlation_id("")


@pytest.fixture
def fake_service() -> FakeCyberTipline:
    return FakeCyberTipline()


@pytest_asyncio.fixture
async def client(fake_service):
    """Client wired to the fake service."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_service))
    async with http_client:
        yield CyberTiplineClient(
            "user", "secret", Environment.TESTING, http_client=http_client
        )


@pytest_asyncio.fixture
async def make_client():
    """Factory for clients whose transport answers with ``handler``."""
    http_clients: list[httpx.AsyncClient] = []

    def _make(handler) -> CyberTiplineClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        http_clients.append(http_client)
        return CyberTiplineClient(
            "user", "secret", Environment.TESTING, http_client=http_client
        )

    yield _make

    for http_client in http_clients:
        await http_client.aclose()


@pytest.fixture
def minimal_report() -> Report:
    """Smallest report the service accepts."""
    return Report(
        incident_summary=IncidentSummary(
            incident_type=IncidentType.CHILD_PORNOGRAPHY,
            incident_date_time=INCIDENT_TIME,
        ),
        reporter=Reporter(
            reporting_person=Person(first_name="John", last_name="Smith"),
        ),
    )
