"""Tests for the XML document codec."""

import xml.etree.ElementTree as ET
from datetime import date, datetime, timezone

import pytest

from cybertipline.helpers.xml_document import from_xml, to_element, to_xml
from cybertipline.models.common import Address, Email, IpCaptureEvent, Person, Phone
from cybertipline.models.enums import (
    AddressType,
    Country,
    EmailType,
    FileRelevance,
    IncidentType,
    IpCaptureType,
    PhoneType,
    State,
)
from cybertipline.models.exceptions import DecodingException
from cybertipline.models.file_details import FileAnnotations, FileDetails, Hash
from cybertipline.models.report import (
    IncidentSummary,
    InternetDetails,
    Peer2peerIncident,
    PersonOrUserReported,
    Report,
    Reporter,
    WebPageIncident,
)
from cybertipline.models.responses import ReportDoneResponse, ReportResponse


def _xml(model) -> str:
    return ET.tostring(to_element(model), encoding="unicode")


class TestOmission:
    """Unset fields never reach the wire."""

    def test_minimal_report_exact_document(self, minimal_report: Report) -> None:
        assert _xml(minimal_report) == (
            "<report>"
            "<incidentSummary>"
            "<incidentType>Child Pornography (possession, manufacture, and distribution)</incidentType>"
            "<incidentDateTime>2024-01-15T10:30:00+00:00</incidentDateTime>"
            "</incidentSummary>"
            "<reporter><reportingPerson>"
            "<firstName>John</firstName><lastName>Smith</lastName>"
            "</reportingPerson></reporter>"
            "</report>"
        )

    def test_empty_file_details(self) -> None:
        assert _xml(FileDetails()) == "<fileDetails />"

    def test_unset_attributes_are_omitted(self) -> None:
        elem = to_element(Email(value="a@example.com"), "email")
        assert elem.attrib == {}
        assert elem.text == "a@example.com"

    def test_explicit_empty_string_is_present(self) -> None:
        """An empty string is a value, unlike None."""
        root = to_element(Report.model_validate({
            "incident_summary": {
                "incident_type": "Child Sex Tourism",
                "incident_date_time": datetime(2024, 1, 1, tzinfo=timezone.utc),
            },
            "reporter": {},
            "additional_info": "",
        }))
        assert root.find("additionalInfo") is not None
        assert root.find("additionalInfo").text in (None, "")
        assert root.find("reporter") is not None
        assert list(root.find("reporter")) == []

    def test_false_and_zero_are_present(self) -> None:
        root = to_element(FileDetails(file_viewed_by_esp=False, report_id=0))
        assert root.findtext("fileViewedByEsp") == "false"
        assert root.findtext("reportId") == "0"


class TestPlacement:
    """Attributes, text content, repeated elements and wire names."""

    def test_phone_attributes_and_text(self) -> None:
        phone = Phone(
            value="1234567890",
            type=PhoneType.MOBILE,
            verified=True,
            verification_date=datetime(2024, 2, 1, 12, 0, tzinfo=timezone.utc),
            country_calling_code="+1",
            extension="123",
        )
        elem = to_element(phone, "phoneNumber")
        assert elem.text == "1234567890"
        assert elem.attrib == {
            "type": "Mobile",
            "verified": "true",
            "verificationDate": "2024-02-01T12:00:00+00:00",
            "countryCallingCode": "+1",
            "extension": "123",
        }

    def test_address_type_attribute_and_children(self) -> None:
        address = Address(
            type=AddressType.HOME,
            address="123 Test St",
            city="Test City",
            zip_code="90001",
            state=State.CA,
            country=Country.US,
        )
        elem = to_element(address, "address")
        assert elem.get("type") == "Home"
        assert [child.tag for child in elem] == [
            "address", "city", "zipCode", "state", "country",
        ]
        assert elem.findtext("state") == "CA"

    def test_repeated_fields_emit_one_element_each(self) -> None:
        subject = PersonOrUserReported(
            display_name=["Display Name 1", "Display Name 2"],
            prior_ct_reports=[101, 102],
        )
        elem = to_element(subject, "personOrUserReported")
        assert [e.text for e in elem.findall("displayName")] == [
            "Display Name 1", "Display Name 2",
        ]
        assert [e.text for e in elem.findall("priorCTReports")] == ["101", "102"]

    def test_explicit_wire_names(self) -> None:
        reporter = Reporter(legal_url="https://www.example.com/legal")
        assert to_element(reporter, "reporter").findtext("legalURL") == (
            "https://www.example.com/legal"
        )
        details = InternetDetails(
            peer2peer_incident=Peer2peerIncident(
                client="Test Client",
                ip_capture_event=[
                    IpCaptureEvent(ip_address="192.168.1.1", event_name=IpCaptureType.UPLOAD, port=12345),
                ],
            )
        )
        elem = to_element(details, "internetDetails")
        assert elem.find("peer2peerIncident") is not None
        assert elem.findtext("peer2peerIncident/ipCaptureEvent/eventName") == "Upload"
        assert elem.findtext("peer2peerIncident/ipCaptureEvent/port") == "12345"

    def test_web_page_incident(self) -> None:
        details = InternetDetails(
            web_page_incident=WebPageIncident(
                third_party_hosted_content=True,
                url=["bad1.example.com", "bad2.example.com"],
            )
        )
        elem = to_element(details, "internetDetails").find("webPageIncident")
        assert elem.get("thirdPartyHostedContent") == "true"
        assert [u.text for u in elem.findall("url")] == ["bad1.example.com", "bad2.example.com"]

    def test_date_of_birth_is_calendar_date(self) -> None:
        elem = to_element(Person(date_of_birth=date(2000, 1, 1), age=25), "person")
        assert elem.findtext("dateOfBirth") == "2000-01-01"
        assert elem.findtext("age") == "25"

    def test_file_details_identifiers_and_hashes(self) -> None:
        details = FileDetails(
            file_relevance=FileRelevance.REPORTED,
            file_annotations=FileAnnotations(potential_meme=True),
            original_file_hash=[
                Hash(hash_type="MD5", value="d41d8cd98f00b204e9800998ecf8427e"),
            ],
        ).assign_identifiers(5001, "file-0001")
        root = to_element(details)
        assert [child.tag for child in root][:2] == ["reportId", "fileId"]
        assert root.findtext("reportId") == "5001"
        assert root.findtext("fileId") == "file-0001"
        assert root.findtext("fileAnnotations/potentialMeme") == "true"
        hash_elem = root.find("originalFileHash")
        assert hash_elem.get("hashType") == "MD5"
        assert hash_elem.text == "d41d8cd98f00b204e9800998ecf8427e"

    def test_email_type(self) -> None:
        elem = to_element(Email(value="x@example.com", type=EmailType.WORK, verified=False), "email")
        assert elem.attrib == {"type": "Work", "verified": "false"}


class TestToXml:
    """Tests for to_xml."""

    def test_declares_utf8(self, minimal_report: Report) -> None:
        body = to_xml(minimal_report)
        assert body.startswith(b"<?xml version='1.0' encoding='utf-8'?>")
        assert ET.fromstring(body).tag == "report"

    def test_non_ascii_text_survives(self) -> None:
        report_body = to_xml(FileDetails(file_name="fichier-été.png"))
        assert ET.fromstring(report_body).findtext("fileName") == "fichier-été.png"

    def test_nested_block_cannot_be_root(self) -> None:
        with pytest.raises(ValueError):
            to_xml(Person(first_name="John"))


class TestFromXml:
    """Tests for decoding responses."""

    def test_report_response(self) -> None:
        body = (
            b"<?xml version='1.0' encoding='UTF-8'?>"
            b"<reportResponse><responseCode>0</responseCode>"
            b"<responseDescription>Success</responseDescription>"
            b"<reportId>9223372036854775807</reportId></reportResponse>"
        )
        response = from_xml(ReportResponse, body)
        assert response.response_code == 0
        assert response.is_success
        assert response.report_id == 2**63 - 1
        assert response.file_id is None

    def test_absent_response_code_differs_from_zero(self) -> None:
        response = from_xml(ReportResponse, b"<reportResponse><fileId>f</fileId></reportResponse>")
        assert response.response_code is None
        assert not response.is_success

    def test_done_response_with_files(self) -> None:
        body = (
            b"<reportDoneResponse><responseCode>0</responseCode><reportId>7</reportId>"
            b"<files><fileId>a</fileId><fileId>b</fileId></files></reportDoneResponse>"
        )
        response = from_xml(ReportDoneResponse, body)
        assert response.report_id == 7
        assert response.files.file_id == ["a", "b"]

    def test_unknown_elements_ignored(self) -> None:
        body = b"<reportResponse><responseCode>0</responseCode><extra>1</extra></reportResponse>"
        assert from_xml(ReportResponse, body).response_code == 0

    def test_malformed_body(self) -> None:
        with pytest.raises(DecodingException) as exc_info:
            from_xml(ReportResponse, b"<html><body>Bad gateway", "submit", 502)
        assert exc_info.value.status_code == 502
        assert exc_info.value.operation == "submit"

    def test_empty_body(self) -> None:
        with pytest.raises(DecodingException):
            from_xml(ReportResponse, b"")

    def test_wrong_value_type(self) -> None:
        body = b"<reportResponse><responseCode>zero</responseCode></reportResponse>"
        with pytest.raises(DecodingException):
            from_xml(ReportResponse, body)


class TestInvalidText:
    """Free text that cannot be represented in XML fails before sending."""

    def test_control_character_in_description(self) -> None:
        summary = IncidentSummary(
            incident_type=IncidentType.CHILD_SEX_TOURISM,
            incident_date_time=datetime(2024, 1, 1, tzinfo=timezone.utc),
            incident_date_time_description="a\x0bb",
        )
        report = Report(incident_summary=summary, reporter=Reporter())
        with pytest.raises(ValueError, match="not allowed in XML"):
            to_xml(report)

    def test_control_character_in_attribute(self) -> None:
        with pytest.raises(ValueError):
            to_element(Hash(value="abc", hash_type="MD\x005"), "originalFileHash")
