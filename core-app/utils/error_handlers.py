from flask import jsonify
from werkzeug.exceptions import HTTPException

from utils.errors import InventoryError, WorkflowAborted


def register_error_handlers(app):
    """Answer every error as ``{"error": message}`` JSON."""

    @app.errorhandler(InventoryError)
    def handle_inventory_error(exc):
        if isinstance(exc, WorkflowAborted):
            app.logger.error('Workflow aborted: %s', exc.message)
        elif exc.status_code >= 500:
            app.logger.error('Store error: %s', exc.message)
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({'error': exc.description or exc.name}), exc.code

    # Catch all unhandled exceptions
    @app.errorhandler(Exception)
    def handle_unexpected(exc):
        app.logger.exception('Unhandled exception')
        return jsonify({'error': 'Internal server error'}), 500
