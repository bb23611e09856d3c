"""Flask application exposing the CSV-to-FHIR mapper over HTTP.

Endpoints:
    GET  /health             Server status
    POST /patients/convert   patients.csv text in, FHIR Patient JSON out
    POST /patients/parse     FHIR Patient JSON in, canonical FHIR JSON out

Errors are returned as FHIR OperationOutcome resources.
"""

import io
import json
import logging
from datetime import datetime, timezone
from typing import Optional

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from fhir_r4_mapper import __version__
from fhir_r4_mapper.codec.json_codec import JsonPatientCodec, PatientCodec
from fhir_r4_mapper.config.schema import Config
from fhir_r4_mapper.csv_parser.parser import load_patients
from fhir_r4_mapper.utils.exceptions import DecodeError, EncodeError, MalformedRowError


logger = logging.getLogger(__name__)

FHIR_JSON_MIMETYPE = "application/fhir+json"


def operation_outcome(
    code: str,
    diagnostics: str,
    http_status: int = 400,
    severity: str = "error",
) -> tuple[Response, int]:
    """Generate a FHIR OperationOutcome error response.

    Args:
        code: FHIR issue-type code (e.g. 'invalid', 'processing', 'exception')
        diagnostics: Human-readable error description
        http_status: HTTP status code (default: 400)
        severity: FHIR issue severity

    Returns:
        Tuple of (Response object, HTTP status code)
    """
    outcome = {
        "resourceType": "OperationOutcome",
        "issue": [
            {
                "severity": severity,
                "code": code,
                "diagnostics": diagnostics,
            }
        ],
    }
    logger.warning(f"OperationOutcome {http_status}: {code} - {diagnostics}")
    response = Response(json.dumps(outcome), mimetype=FHIR_JSON_MIMETYPE)
    return response, http_status


def create_app(
    config: Optional[Config] = None,
    codec: Optional[PatientCodec] = None,
) -> Flask:
    """Create the Flask application.

    Args:
        config: Application configuration (defaults used when omitted)
        codec: Patient codec; defaults to JsonPatientCodec honoring
            config.codec.pretty_print

    Returns:
        Configured Flask app
    """
    config = config or Config()
    codec = codec or JsonPatientCodec(pretty_print=config.codec.pretty_print)
    started_at = datetime.now(timezone.utc)

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.service.max_content_length

    @app.before_request
    def log_request():
        """Log all incoming requests."""
        logger.info(
            f"Request: {request.method} {request.path} "
            f"(Content-Length: {request.content_length or 0})"
        )

    @app.route("/health", methods=["GET"])
    def health_check():
        uptime_seconds = int((datetime.now(timezone.utc) - started_at).total_seconds())
        return jsonify(
            {
                "status": "healthy",
                "version": __version__,
                "uptime_seconds": uptime_seconds,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        ), 200

    @app.route("/patients/convert", methods=["POST"])
    def convert_patients():
        """Convert a patients.csv body to FHIR Patient resources.

        Query parameters:
            failFast: "true" to reject the request on the first malformed row
        """
        fail_fast = request.args.get("failFast", "").lower() in ("true", "1", "yes")
        text = request.get_data(as_text=True)

        result = load_patients(
            io.StringIO(text),
            fail_fast=fail_fast or config.loader.fail_fast,
            date_mode=config.loader.date_mode,
        )

        body = {
            "totalRows": result.total_rows,
            "patients": [json.loads(codec.encode(patient)) for patient in result.patients],
            "malformedRows": [
                {"lineNumber": error.line_number, "reason": error.reason}
                for error in result.malformed_rows
            ],
            "readError": result.read_error,
        }
        return jsonify(body), 200

    @app.route("/patients/parse", methods=["POST"])
    def parse_patient():
        """Decode a FHIR Patient body and return its canonical encoding."""
        patient = codec.decode(request.get_data(as_text=True))
        return Response(codec.encode(patient), mimetype=FHIR_JSON_MIMETYPE), 200

    @app.errorhandler(DecodeError)
    def handle_decode_error(error):
        return operation_outcome("invalid", str(error), http_status=400)

    @app.errorhandler(MalformedRowError)
    def handle_malformed_row(error):
        return operation_outcome("processing", str(error), http_status=422)

    @app.errorhandler(EncodeError)
    def handle_encode_error(error):
        return operation_outcome("exception", str(error), http_status=500)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return operation_outcome(
            "exception" if error.code >= 500 else "invalid",
            error.description or error.name,
            http_status=error.code,
        )

    logger.info("Mapper service application initialized")
    return app


def run_server(config: Optional[Config] = None, debug: bool = False) -> None:
    """Run the Flask development server.

    Args:
        config: Application configuration (defaults used when omitted)
        debug: Enable debug mode (default: False)
    """
    config = config or Config()
    app = create_app(config)

    host = config.service.host
    port = config.service.port
    logger.info(f"Starting FHIR R4 mapper service on http://{host}:{port}")
    logger.info(f"Health check available at: http://{host}:{port}/health")

    app.run(
        host=host,
        port=port,
        debug=debug,
        use_reloader=False,  # Disable reloader to avoid duplicate startup
    )
