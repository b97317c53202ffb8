# src/api/app.py

"""Flask application exposing the catalog and detail endpoints."""

import json
import logging
import time
from typing import Any

from flask import Flask, Response, g, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from src.config.settings import Settings
from src.models.errors import ExtractionError, SerializationError
from src.scrapers.storefront_scraper import StorefrontScraper
from src.services.catalog_orchestrator import CatalogOrchestrator
from src.services.detail_orchestrator import DetailOrchestrator
from src.services.request_context import RequestContext

logger = logging.getLogger("storefront_feed.api")
access_logger = logging.getLogger("storefront_feed.access")

JSON_CONTENT_TYPE = "application/json; charset=UTF-8"


def json_response(payload: dict[str, Any], status: int = 200) -> Response:
    """Encode ``payload`` with the service's JSON content type."""
    try:
        body = json.dumps(payload, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise SerializationError(str(exc)) from exc
    return Response(body, status=status, content_type=JSON_CONTENT_TYPE)


def error_response(kind: str, status: int) -> Response:
    return Response(
        json.dumps({"error": kind}),
        status=status,
        content_type=JSON_CONTENT_TYPE,
    )


def _new_context() -> RequestContext:
    context = RequestContext.with_timeout(Settings.REQUEST_DEADLINE)
    g.request_context = context
    return context


def create_app() -> Flask:
    """Build the Flask app with CORS, access logging and error mapping."""
    app = Flask(__name__)
    CORS(
        app,
        origins=Settings.CORS_ORIGINS,
        methods=Settings.CORS_METHODS,
        allow_headers=Settings.CORS_HEADERS,
        send_wildcard=Settings.CORS_ORIGINS == "*",
    )

    @app.before_request
    def _start_timer() -> None:
        g.started_at = time.monotonic()

    @app.after_request
    def _log_access(response: Response) -> Response:
        started = g.get("started_at", time.monotonic())
        access_logger.info(
            '%s "%s %s" %d %.0fms',
            request.remote_addr or "-",
            request.method,
            request.full_path.rstrip("?"),
            response.status_code,
            (time.monotonic() - started) * 1000,
        )
        return response

    @app.teardown_request
    def _close_context(exc: BaseException | None) -> None:
        """Mark the request context done once the response exists.

        This runs after the handler has returned, so it never interrupts
        a fetch. WSGI gives no disconnect signal; fetches are bounded by
        the context deadline alone.
        """
        context: RequestContext | None = g.get("request_context")
        if context is not None:
            context.cancel()

    @app.errorhandler(ExtractionError)
    def _handle_extraction_error(exc: ExtractionError) -> Response:
        logger.warning(
            "%s %s failed: %s (%s)",
            request.method,
            request.path,
            exc.kind,
            exc.message,
        )
        return error_response(exc.kind, exc.status)

    @app.errorhandler(404)
    def _handle_not_found(exc: Exception) -> Response:
        return error_response("NotFound", 404)

    @app.errorhandler(405)
    def _handle_method_not_allowed(exc: Exception) -> Response:
        return error_response("MethodNotAllowed", 405)

    @app.errorhandler(HTTPException)
    def _handle_http_error(exc: HTTPException) -> Response:
        return error_response(exc.name.replace(" ", ""), exc.code or 500)

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception) -> Response:
        logger.error(
            "Unhandled error serving %s %s",
            request.method,
            request.path,
            exc_info=exc,
        )
        return error_response("InternalError", 500)

    @app.route("/products/<shop>", methods=["GET", "POST"])
    def products(shop: str) -> Response:
        """Catalog of one storefront."""
        scraper = StorefrontScraper(_new_context())
        response = CatalogOrchestrator(scraper).run(shop)
        return json_response(response.to_dict())

    @app.route("/product/<product_id>", methods=["GET", "POST"])
    def product(product_id: str) -> Response:
        """Detail record of one product."""
        scraper = StorefrontScraper(_new_context())
        detail = DetailOrchestrator(scraper).run(product_id)
        return json_response(detail.to_dict())

    return app
