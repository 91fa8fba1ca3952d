"""Observability configuration using Logfire.

Services open a span per operation and emit structured events on outcomes:

    import logfire

    with logfire.span("comment_service.reply", parent_id=str(parent_id)):
        ...
        logfire.info("Reply created", comment_id=str(comment.id))

FastAPI requests and SQLAlchemy queries are traced automatically once the
app and engine are instrumented here.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from murmur.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Telemetry is sent to Logfire cloud when OBSERVABILITY__SEND_TO_LOGFIRE
    says so, or otherwise when OBSERVABILITY__LOGFIRE_TOKEN is set. Without
    either, output is console-only.

    Args:
        settings: Application settings
    """
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    else:
        send_to_logfire = bool(settings.observability.logfire_token)

    config_kwargs = {
        "service_name": "murmur-api",
        "service_version": settings.git_sha,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request handled by the FastAPI app except health probes.

    Query parameters that page through threads (cursor, limit, max_depth) are
    recorded as span attributes so slow listings can be told apart.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        result = {**attributes}
        for name in ("cursor", "limit", "max_depth", "cascade"):
            value = request.query_params.get(name)
            if value is not None:
                result[name] = value
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=False,  # auth_token cookie must not end up in traces
        request_attributes_mapper=_map_request_attributes,
        excluded_urls="/health",
    )
    logfire.info("FastAPI instrumented", app=app.title)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every query run through the engine.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,
    )
    logfire.info("SQLAlchemy instrumented")
