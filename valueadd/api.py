"""
Flask front end for the value add report service.

Endpoints:
    POST /generate-report                      generate, upload and return a report
    POST /.netlify/functions/generate-report   same, for existing form integrations
    GET  /health                               configured integrations
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from flask_cors import CORS
from pydantic import ValidationError

from valueadd.errors import InvalidRequestError, ValueAddError
from valueadd.service import ReportService, run_report
from valueadd.types import ReportRequest


logger = logging.getLogger(__name__)

GENERATE_ROUTES = ('/generate-report', '/.netlify/functions/generate-report')


def _validation_message(exc: ValidationError) -> str:
    fields = []
    for error in exc.errors():
        location = '.'.join(str(part) for part in error.get('loc', ()) if part != '__root__')
        fields.append(f'{location}: {error.get("msg")}' if location else str(error.get('msg')))
    return 'Invalid request: ' + '; '.join(fields)


def create_app(service: ReportService | None = None) -> Flask:
    app = Flask(__name__)
    CORS(app, methods=['POST', 'OPTIONS', 'GET'], allow_headers=['Content-Type'])
    app.config['REPORT_SERVICE'] = service

    def get_service() -> ReportService:
        if app.config['REPORT_SERVICE'] is None:
            app.config['REPORT_SERVICE'] = ReportService.from_settings()
        return app.config['REPORT_SERVICE']

    @app.errorhandler(400)
    def bad_request(exc):
        return jsonify({'message': 'Bad Request', 'error': str(getattr(exc, 'description', exc))}), 400

    @app.errorhandler(404)
    def not_found(exc):
        return jsonify({'message': 'Not Found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(exc):
        return jsonify({'message': 'Method Not Allowed'}), 405

    @app.errorhandler(500)
    def internal_error(exc):
        return jsonify({'message': 'Error generating report', 'error': 'Internal server error'}), 500

    @app.route('/health', methods=['GET'])
    def health():
        current = get_service()
        settings = current.settings
        return jsonify(
            {
                'status': 'healthy',
                'service': settings.app_name,
                'model': settings.report_model,
                'sections': settings.section_titles(),
                'integrations': {
                    'llm': bool(settings.openai_api_key),
                    'google_drive': settings.drive_configured,
                    'hubspot': settings.hubspot_configured,
                },
            }
        )

    def generate_report():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'message': 'Invalid JSON request'}), 400

        try:
            report_request = ReportRequest.model_validate(data)
        except ValidationError as exc:
            return jsonify({'message': _validation_message(exc)}), 400

        try:
            result = run_report(get_service(), report_request)
        except InvalidRequestError as exc:
            return jsonify({'message': str(exc)}), 400
        except ValueAddError as exc:
            logger.exception('Report generation failed for %s', report_request.email)
            return jsonify({'message': 'Error generating report', 'error': str(exc)}), 500

        return jsonify(result.to_payload()), 200

    for index, rule in enumerate(GENERATE_ROUTES):
        app.add_url_rule(rule, endpoint=f'generate_report_{index}', view_func=generate_report, methods=['POST'])

    return app
