import logging
from typing import Any, Protocol

import httpx
from pydantic import BaseModel

from whichcard.config import Settings
from whichcard.domain.models import CardResult, CardSettings, ComputeResult, PurchaseInput
from whichcard.exceptions import UsageLogError
from whichcard.usage.consent import ConsentLevel, allows_logging
from whichcard.usage.request_meta import RequestMetadata

logger = logging.getLogger(__name__)


class CardRequestRecord(BaseModel):
    """One row of the card_requests table."""

    amount_aed: float
    category: str
    channel: str

    best_card_id: str | None = None
    best_card_name: str | None = None
    best_card_effective_rate: float | None = None
    best_card_reward_value_aed: float | None = None

    all_results: list[dict[str, Any]]
    card_settings_snapshot: dict[str, Any]

    user_agent: str | None = None
    ip: str | None = None
    referer: str | None = None
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    headers: dict[str, str]

    @classmethod
    def build(
        cls,
        purchase: PurchaseInput,
        result: ComputeResult,
        card_settings: CardSettings,
        meta: RequestMetadata | None = None,
    ) -> "CardRequestRecord":
        meta = meta or RequestMetadata()
        best: CardResult | None = result.best_card
        return cls(
            amount_aed=purchase.amount_aed,
            category=purchase.category.value,
            channel=purchase.channel.value,
            best_card_id=best.card_id.value if best else None,
            best_card_name=best.card_name if best else None,
            best_card_effective_rate=best.effective_rate if best else None,
            best_card_reward_value_aed=best.reward_value_aed if best else None,
            all_results=[item.model_dump(mode="json") for item in result.results],
            card_settings_snapshot=card_settings.model_dump(mode="json"),
            user_agent=meta.user_agent,
            ip=meta.ip,
            referer=meta.referer,
            location=meta.location,
            latitude=meta.latitude,
            longitude=meta.longitude,
            headers=meta.headers,
        )


class UsageSink(Protocol):
    def insert(self, record: CardRequestRecord) -> None:
        """Deliver one record or raise UsageLogError."""


class SupabaseUsageSink:
    """Inserts card_requests rows through the Supabase REST API."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        table: str = "card_requests",
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.endpoint = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self.client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={
                "apikey": service_key,
                "Authorization": f"Bearer {service_key}",
                "Content-Type": "application/json",
                "Prefer": "return=minimal",
            },
        )

    def insert(self, record: CardRequestRecord) -> None:
        try:
            response = self.client.post(self.endpoint, json=record.model_dump(mode="json"))
        except httpx.HTTPError as exc:
            raise UsageLogError(f"Network error calling {self.endpoint}: {exc}") from exc

        if response.status_code >= 400:
            raise UsageLogError(f"Insert failed with HTTP {response.status_code}: {response.text[:500]}")

    def close(self) -> None:
        self.client.close()


def build_usage_sink(config: Settings) -> SupabaseUsageSink | None:
    if not config.usage_log_url or not config.usage_log_service_key:
        logger.warning("Usage log sink not configured. Card requests will not be logged.")
        return None
    return SupabaseUsageSink(
        base_url=config.usage_log_url,
        service_key=config.usage_log_service_key,
        table=config.usage_log_table,
        timeout=config.usage_log_timeout_seconds,
    )


class LogOutcome(BaseModel):
    ok: bool
    skipped: bool = False
    reason: str | None = None
    error: str | None = None


def log_card_request(
    sink: UsageSink | None,
    consent: ConsentLevel | None,
    purchase: PurchaseInput,
    result: ComputeResult,
    card_settings: CardSettings,
    meta: RequestMetadata | None = None,
) -> LogOutcome:
    """Best-effort delivery of one evaluation to the usage sink.

    Never raises: consent and configuration gaps are reported as skips and
    delivery failures are logged and reported with ok=False.
    """
    if not allows_logging(consent):
        return LogOutcome(ok=True, skipped=True, reason="no_consent")
    if sink is None:
        return LogOutcome(ok=True, skipped=True, reason="no_supabase")

    try:
        record = CardRequestRecord.build(purchase, result, card_settings, meta)
        sink.insert(record)
    except UsageLogError as exc:
        logger.error("Failed to log card request: %s", exc)
        return LogOutcome(ok=False, error=str(exc))
    except Exception:
        logger.exception("Unexpected error while logging card request")
        return LogOutcome(ok=False, error="Internal error")

    return LogOutcome(ok=True)
