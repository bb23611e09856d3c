"""Unit tests for the Flask conversion service."""

import json

import pytest

from fhir_r4_mapper import __version__
from fhir_r4_mapper.codec import encode
from fhir_r4_mapper.config.schema import Config
from fhir_r4_mapper.logging_audit import configure_logging
from fhir_r4_mapper.mapper.patient_mapper import map_row
from fhir_r4_mapper.service.app import create_app, operation_outcome


@pytest.fixture
def app():
    """Create application for testing."""
    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


class TestHealthEndpoint:
    """Test GET /health."""

    def test_health_check(self, client):
        """Test health check reports status and version."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.get_json()
        assert data["status"] == "healthy"
        assert data["version"] == __version__
        assert data["uptime_seconds"] >= 0
        assert "timestamp" in data


class TestConvertEndpoint:
    """Test POST /patients/convert."""

    def test_convert_rows(self, client, make_line, csv_text):
        """Test well-formed rows come back as Patient resources in order."""
        # Act
        response = client.post(
            "/patients/convert",
            data=csv_text(make_line(id="p1"), make_line(id="p2")),
            content_type="text/csv",
        )

        # Assert
        assert response.status_code == 200
        data = response.get_json()
        assert data["totalRows"] == 2
        assert [p["id"] for p in data["patients"]] == ["p1", "p2"]
        assert data["patients"][0]["resourceType"] == "Patient"
        assert data["patients"][0]["birthDate"] == "1980-05-12"
        assert data["malformedRows"] == []
        assert data["readError"] is None

    def test_convert_reports_malformed_rows(self, client, make_line, csv_text):
        """Test malformed rows are listed and skipped."""
        response = client.post(
            "/patients/convert",
            data=csv_text(make_line(id="p1"), ",".join(["x"] * 10), make_line(id="p3")),
        )

        assert response.status_code == 200
        data = response.get_json()
        assert [p["id"] for p in data["patients"]] == ["p1", "p3"]
        assert data["malformedRows"] == [
            {"lineNumber": 3, "reason": "Expected at least 25 fields, found 10"}
        ]

    def test_convert_empty_body(self, client):
        """Test an empty body converts to no patients."""
        response = client.post("/patients/convert", data="")

        assert response.status_code == 200
        assert response.get_json()["patients"] == []
        assert response.get_json()["totalRows"] == 0

    def test_convert_fail_fast(self, client, make_line, csv_text):
        """Test failFast=true rejects the request with an OperationOutcome."""
        # Act
        response = client.post(
            "/patients/convert?failFast=true",
            data=csv_text(make_line(), "bad,row"),
        )

        # Assert
        assert response.status_code == 422
        assert response.mimetype == "application/fhir+json"
        outcome = json.loads(response.data)
        assert outcome["resourceType"] == "OperationOutcome"
        assert outcome["issue"][0]["code"] == "processing"
        assert "Line 3" in outcome["issue"][0]["diagnostics"]

    def test_convert_uses_configured_date_mode(self, make_line, csv_text):
        """Test the loader date mode from config applies to requests."""
        config = Config.model_validate({"loader": {"date_mode": "legacy-minutes"}})
        client = create_app(config).test_client()

        response = client.post("/patients/convert", data=csv_text(make_line()))

        assert response.get_json()["patients"][0]["birthDate"] == "1980-01-12"

    def test_convert_body_too_large(self, make_line, csv_text):
        """Test bodies above max_content_length are rejected with 413."""
        config = Config.model_validate({"service": {"max_content_length": 100}})
        client = create_app(config).test_client()

        response = client.post("/patients/convert", data=csv_text(make_line()))

        assert response.status_code == 413
        assert json.loads(response.data)["resourceType"] == "OperationOutcome"


class TestParseEndpoint:
    """Test POST /patients/parse."""

    def test_parse_returns_canonical_encoding(self, client, make_row):
        """Test a Patient body is decoded and re-encoded."""
        # Arrange
        patient = map_row(make_row())
        body = json.loads(encode(patient))
        body["telecom"] = [{"system": "phone", "value": "555-0100"}]

        # Act
        response = client.post(
            "/patients/parse",
            data=json.dumps(body, indent=4),
            content_type="application/fhir+json",
        )

        # Assert
        assert response.status_code == 200
        assert response.mimetype == "application/fhir+json"
        assert response.get_data(as_text=True) == encode(patient)

    def test_parse_invalid_json(self, client):
        """Test invalid JSON returns a 400 OperationOutcome."""
        response = client.post("/patients/parse", data="{not json")

        assert response.status_code == 400
        outcome = json.loads(response.data)
        assert outcome["issue"][0]["severity"] == "error"
        assert outcome["issue"][0]["code"] == "invalid"

    def test_parse_wrong_resource_type(self, client):
        """Test other resource types are rejected."""
        response = client.post("/patients/parse", data='{"resourceType": "Observation"}')

        assert response.status_code == 400

    def test_parse_incomplete_patient(self, client):
        """Test a Patient missing mapped elements cannot be re-encoded."""
        response = client.post("/patients/parse", data='{"resourceType": "Patient", "id": "p1"}')

        assert response.status_code == 500
        assert json.loads(response.data)["issue"][0]["code"] == "exception"

    def test_parse_error_log_is_redacted(self, client, tmp_path):
        """Test rejected field values do not reach a redacting log file."""
        # Arrange
        log_file = tmp_path / "service.log"
        configure_logging(level="INFO", log_file=log_file, redact_pii=True)

        # Act
        response = client.post(
            "/patients/parse",
            data='{"resourceType": "Patient", "name": [{"given": "Jane"}]}',
        )

        # Assert
        assert response.status_code == 400
        content = log_file.read_text(encoding="utf-8")
        assert "OperationOutcome 400: invalid" in content
        assert "Jane" not in content


class TestErrorHandling:
    """Test generic HTTP errors."""

    def test_unknown_route(self, client):
        """Test unknown paths return a 404 OperationOutcome."""
        response = client.get("/patients/unknown")

        assert response.status_code == 404
        assert json.loads(response.data)["resourceType"] == "OperationOutcome"

    def test_wrong_method(self, client):
        """Test GET on a POST endpoint returns 405."""
        response = client.get("/patients/convert")

        assert response.status_code == 405

    def test_operation_outcome_shape(self, app):
        """Test OperationOutcome helper output."""
        with app.app_context():
            response, status = operation_outcome("not-found", "Missing", http_status=404)

        assert status == 404
        assert json.loads(response.data) == {
            "resourceType": "OperationOutcome",
            "issue": [{"severity": "error", "code": "not-found", "diagnostics": "Missing"}],
        }
