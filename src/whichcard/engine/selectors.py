import logging

from whichcard.domain.models import CardResult, CardSettings, ComputeResult, PurchaseInput
from whichcard.engine.evaluator import CARD_RULES, evaluate_card
from whichcard.engine.flags import derive_flags

logger = logging.getLogger(__name__)


def rank_cards(purchase: PurchaseInput, settings: CardSettings) -> list[CardResult]:
    flags = derive_flags(purchase)
    evaluations = [evaluate_card(rule, purchase, flags, settings) for rule in CARD_RULES]
    # list.sort is stable, so equal rates keep CARD_RULES order.
    evaluations.sort(key=lambda item: item.effective_rate, reverse=True)
    return evaluations


def compute_best_card(purchase: PurchaseInput, settings: CardSettings) -> ComputeResult:
    if purchase.amount_aed <= 0:
        return ComputeResult(best_card=None, results=[])

    ranked = rank_cards(purchase, settings)
    best = next((item for item in ranked if item.effective_rate > 0), None)

    logger.debug(
        "evaluated %s AED %s/%s/%s -> %s",
        purchase.amount_aed,
        purchase.category.value,
        purchase.channel.value,
        purchase.location.value,
        best.card_id.value if best else "none",
    )
    return ComputeResult(best_card=best, results=ranked)
