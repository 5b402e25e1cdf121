# =============================================================================
# Sentry Error Tracking Integration
# =============================================================================
#
# Setup:
#   1. Create a Python project at sentry.io
#   2. Copy DSN to .env: SENTRY_DSN=https://...@sentry.io/...
#
# Usage:
#   Call init_sentry() at app startup (in medihub/api/app.py)
#
# Translation failures are logged at ERROR, so the logging integration
# turns them into Sentry events. The Google API key rides in the query
# string of every request and is scrubbed before anything is sent.
#
# =============================================================================

from __future__ import annotations

import logging
import re
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from medihub.config import Settings, get_settings

logger = logging.getLogger(__name__)

_API_KEY_PARAM = re.compile(r"(key=)[^&\s\"']+")

# Client errors the API raises on purpose (bad language code, validation)
_EXPECTED_STATUS = (400, 404, 422)

_QUIET_TRANSACTIONS = ("/health", "/translate/status")


def init_sentry(settings: Settings | None = None) -> bool:
    """
    Initialize Sentry error tracking.
    
    Returns True if initialized, False if skipped.
    """
    settings = settings or get_settings()
    
    if not settings.sentry_dsn:
        logger.info("SENTRY_DSN not set - error tracking disabled")
        return False
    
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        
        # Sample 10% of transactions in prod
        traces_sample_rate=0.1 if settings.is_production else 1.0,
        
        integrations=[
            FastApiIntegration(transaction_style="url"),
            StarletteIntegration(transaction_style="url"),
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR,
            ),
        ],
        
        # Translated texts can contain patient data
        send_default_pii=False,
        
        before_send=filter_event,
        before_send_transaction=filter_transaction,
    )
    
    logger.info(f"Sentry initialized for {settings.environment}")
    return True


def scrub_api_key(value: str) -> str:
    """Mask the translation API key in a URL or message."""
    return _API_KEY_PARAM.sub(r"\1[Filtered]", value)


def _scrub(value: Any) -> Any:
    if isinstance(value, str):
        return scrub_api_key(value)
    if isinstance(value, dict):
        return {k: _scrub(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_scrub(v) for v in value]
    return value


def filter_event(event: dict, hint: dict) -> dict | None:
    """Drop expected client errors and scrub credentials."""
    if "exc_info" in hint:
        _, exc_value, _ = hint["exc_info"]
        
        from fastapi import HTTPException
        if isinstance(exc_value, HTTPException) and exc_value.status_code in _EXPECTED_STATUS:
            return None
    
    if "request" in event:
        request = event["request"]
        headers = request.get("headers", {})
        for key in list(headers):
            if key.lower() in ("authorization", "cookie", "x-api-key"):
                headers[key] = "[Filtered]"
    
    for field_name in ("request", "breadcrumbs", "logentry", "message", "exception"):
        if field_name in event:
            event[field_name] = _scrub(event[field_name])
    
    return event


def filter_transaction(event: dict, hint: dict) -> dict | None:
    """Filter out noisy transactions."""
    transaction = event.get("transaction", "")
    if transaction in _QUIET_TRANSACTIONS:
        return None
    return event
