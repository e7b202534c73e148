from whichcard.domain.catalog import search_categories
from whichcard.domain.models import CardSettings, ComputeResult
from whichcard.engine.evaluator import CARD_RULES
from whichcard.engine.selectors import compute_best_card
from whichcard.repository.settings_store import SettingsStore
from whichcard.schemas.requests import RecommendRequest
from whichcard.schemas.responses import CardRulesResponse, CategoriesResponse, RecommendResponse


class RecommendationOrchestrator:
    def __init__(self, settings_store: SettingsStore):
        self.settings_store = settings_store

    def _resolve_settings(self, request: RecommendRequest) -> CardSettings:
        if request.settings is not None:
            return request.settings
        return self.settings_store.load()

    def evaluate(self, request: RecommendRequest) -> tuple[CardSettings, ComputeResult]:
        card_settings = self._resolve_settings(request)
        return card_settings, compute_best_card(request.purchase, card_settings)

    def recommend(self, request: RecommendRequest) -> RecommendResponse:
        card_settings, result = self.evaluate(request)
        return RecommendResponse(
            best_card=result.best_card,
            ranked_cards=result.results,
            purchase=request.purchase,
            settings=card_settings,
        )

    def describe_cards(self) -> list[CardRulesResponse]:
        card_settings = self.settings_store.load()
        described = []
        for rule in CARD_RULES:
            card = card_settings.for_card(rule.card_id)
            described.append(
                CardRulesResponse(
                    card_id=rule.card_id,
                    card_name=rule.card_name,
                    reward_type=rule.reward_type,
                    enabled=card.enabled,
                    rules=rule.describe(card),
                )
            )
        return described

    def categories(self, query: str = "") -> CategoriesResponse:
        return CategoriesResponse(query=query, categories=search_categories(query))
