from conftest import make_purchase
from whichcard.agents.orchestrator import RecommendationOrchestrator
from whichcard.domain.catalog import DEFAULT_SETTINGS
from whichcard.domain.models import CardSettings, PurchaseCategory
from whichcard.integrations.telegram_bot import format_categories, format_reply
from whichcard.schemas.requests import RecommendRequest


def test_format_reply_lists_best_and_all_cards(settings_store) -> None:
    orchestrator = RecommendationOrchestrator(settings_store)
    response = orchestrator.recommend(RecommendRequest(purchase=make_purchase(200, PurchaseCategory.DINING)))

    reply = format_reply(response)

    assert "Best card: ADCB 365" in reply
    assert "Reward: AED 12.00 (6.00% back)" in reply
    assert "pts)" in reply
    assert reply.count("\n- ") == 6


def test_format_reply_without_best_card(settings_store) -> None:
    disabled = CardSettings(**{name: field.model_copy(update={"enabled": False}) for name, field in DEFAULT_SETTINGS})
    orchestrator = RecommendationOrchestrator(settings_store)

    response = orchestrator.recommend(RecommendRequest(purchase=make_purchase(50), settings=disabled))

    assert "No enabled card earns a reward" in format_reply(response)


def test_format_categories() -> None:
    assert format_categories("salik").startswith("utilities - Utilities / Telecom")
    assert format_categories("zzz") == "No categories match 'zzz'."
