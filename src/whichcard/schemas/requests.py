from pydantic import BaseModel

from whichcard.domain.models import CardResult, CardSettings, ComputeResult, PurchaseInput
from whichcard.usage.request_meta import GpsLocation


class RecommendRequest(BaseModel):
    purchase: PurchaseInput
    settings: CardSettings | None = None
    gps_location: GpsLocation | None = None


class LogCardRequest(BaseModel):
    purchase: PurchaseInput
    best_card: CardResult | None = None
    results: list[CardResult] = []
    settings: CardSettings
    gps_location: GpsLocation | None = None

    def compute_result(self) -> ComputeResult:
        return ComputeResult(best_card=self.best_card, results=self.results)
