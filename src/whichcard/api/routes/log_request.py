import logging

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from whichcard.api.dependencies import get_usage_sink
from whichcard.schemas.requests import LogCardRequest
from whichcard.usage.consent import allows_logging, parse_consent_from_cookie
from whichcard.usage.request_meta import RequestMetadata
from whichcard.usage.sink import LogOutcome, UsageSink, log_card_request

logger = logging.getLogger(__name__)

router = APIRouter(tags=["usage"])


@router.post("/log-card-request", response_model=LogOutcome)
async def log_request(
    request: Request,
    sink: UsageSink | None = Depends(get_usage_sink),
) -> LogOutcome:
    # The cookie, not the body, is the source of truth for consent.
    consent = parse_consent_from_cookie(request.headers.get("cookie"))
    if not allows_logging(consent):
        return LogOutcome(ok=True, skipped=True, reason="no_consent")

    # Body errors are reported in the outcome; this endpoint always answers 200.
    try:
        payload = LogCardRequest.model_validate(await request.json())
    except (ValueError, ValidationError) as exc:
        logger.warning("Rejected card request log body: %s", exc)
        return LogOutcome(ok=False, error="Invalid request body")

    return await run_in_threadpool(
        log_card_request,
        sink,
        consent,
        payload.purchase,
        payload.compute_result(),
        payload.settings,
        RequestMetadata.from_headers(request.headers, payload.gps_location),
    )
