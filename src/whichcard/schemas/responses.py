from pydantic import BaseModel

from whichcard.domain.catalog import CategoryOption
from whichcard.domain.models import CardId, CardResult, CardSettings, PurchaseInput, RewardType


class RecommendResponse(BaseModel):
    best_card: CardResult | None
    ranked_cards: list[CardResult]
    purchase: PurchaseInput
    settings: CardSettings


class CardRulesResponse(BaseModel):
    card_id: CardId
    card_name: str
    reward_type: RewardType
    enabled: bool
    rules: list[str]


class CategoriesResponse(BaseModel):
    query: str
    categories: list[CategoryOption]
