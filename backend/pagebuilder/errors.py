from flask import jsonify
from pagebuilder.domain.exceptions import ContentValidationError, DomainError

def register_error_handlers(app):
    @app.errorhandler(DomainError)
    def handle_domain_error(error):
        body = {
            "error": type(error).__name__,
            "message": error.message,
            "details": error.details,
        }
        if isinstance(error, ContentValidationError):
            body["fields"] = error.fields

        if error.status_code >= 500:
            app.logger.error(f"{type(error).__name__}: {error.message}")

        response = jsonify(body)
        response.status_code = error.status_code
        return response
