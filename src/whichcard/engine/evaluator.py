from collections.abc import Sequence

from whichcard.domain.models import (
    AdcbSettings,
    AjmanCategory,
    AjmanSettings,
    CardId,
    CardResult,
    CardSettings,
    CitiSettings,
    DibSettings,
    EiSwitchSettings,
    PurchaseInput,
    RewardType,
    SibSettings,
)
from whichcard.engine.flags import DerivedFlags
from whichcard.engine.rules import CardRule, RateRule, always

_ADCB_RULES = (
    RateRule(lambda f: f.is_international, 0.01, "1% international"),
    RateRule(lambda f: f.is_dining, 0.06, "6% dining"),
    RateRule(lambda f: f.is_grocery, 0.05, "5% grocery"),
    RateRule(lambda f: f.is_fuel or f.is_utilities, 0.03, "3% fuel/utilities"),
    RateRule(always, 0.01, "1% base rate"),
)

_EI_LIFESTYLE_RULES = (
    RateRule(lambda f: f.is_fuel and f.is_domestic, 0.08, "8% domestic fuel (Lifestyle)"),
    RateRule(lambda f: f.is_grocery and f.is_domestic, 0.04, "4% domestic grocery (Lifestyle)"),
    RateRule(lambda f: f.is_dining, 0.04, "4% dining (Lifestyle)"),
    RateRule(lambda f: f.is_education, 0.04, "4% education (Lifestyle)"),
    RateRule(lambda f: f.is_utilities or f.is_government, 0.005, "0.5% utilities/government (Lifestyle)"),
    RateRule(always, 0.01, "1% base rate (Lifestyle)"),
)

_EI_TRAVEL_RULES = (
    RateRule(lambda f: f.is_travel_air, 0.04, "4% airline tickets (Travel)"),
    RateRule(lambda f: f.is_travel_hotel, 0.04, "4% hotels (Travel)"),
    RateRule(lambda f: f.is_dining, 0.04, "4% dining (Travel)"),
    RateRule(lambda f: f.is_utilities or f.is_government, 0.005, "0.5% utilities/government (Travel)"),
    RateRule(always, 0.01, "1% base rate (Travel)"),
)

_SIB_EXCLUDED = RateRule(
    lambda f: f.is_grocery or f.is_utilities or f.is_government or f.is_education,
    0.005,
    "0.5% on utilities/telecom/supermarket/govt/education",
)
_SIB_FUEL_WALLET_INTERNATIONAL = RateRule(
    lambda f: f.is_fuel and f.is_wallet and f.is_international,
    0.02,
    "Conservative: fuel with wallet treated as international retail (no 10%)",
)
_SIB_FUEL_WALLET_DOMESTIC = RateRule(
    lambda f: f.is_fuel and f.is_wallet,
    0.01,
    "Conservative: fuel with wallet treated as domestic retail (no 10%)",
)
_SIB_TAIL = (
    RateRule(lambda f: f.is_online_or_wallet, 0.1, "10% online/digital wallet"),
    RateRule(lambda f: f.is_international, 0.02, "2% international"),
    RateRule(always, 0.01, "1% domestic retail"),
)

_DIB_RULES = (
    RateRule(
        lambda f: f.is_grocery or f.is_fuel or f.is_education or f.is_utilities or f.is_government,
        0.2,
        "0.2 pts/AED (suppressed: grocery/fuel/telecom/education/government/utility)",
    ),
    RateRule(lambda f: f.is_international, 3.5, "3.5 pts/AED international"),
    RateRule(always, 3.0, "3 pts/AED domestic"),
)

_CITI_RULES = (
    RateRule(lambda f: f.is_dining or f.is_grocery or f.is_fuel, 3, "3 TY pts/USD (dining/grocery/fuel)"),
    RateRule(lambda f: f.is_international, 2, "2 TY pts/USD (international)"),
    RateRule(always, 1, "1 TY pt/USD (base rate)"),
)


def ajman_category(flags: DerivedFlags) -> AjmanCategory | None:
    # Online/wallet takes precedence over the merchant type.
    if flags.is_online_or_wallet:
        return AjmanCategory.ONLINE
    if flags.is_fuel:
        return AjmanCategory.FUEL
    if flags.is_grocery:
        return AjmanCategory.SUPERMARKET
    if flags.is_education:
        return AjmanCategory.SCHOOL
    return None


class Adcb365Rule(CardRule):
    card_id = CardId.ADCB_365
    note_suffix = " cashback (ignoring monthly caps; assumes AED 5k min spend met)."

    def is_eligible(self, settings: AdcbSettings) -> bool:
        return settings.enabled and settings.min_spend_met

    def gated_note(self, settings: AdcbSettings) -> str:
        if not settings.enabled:
            return "Card disabled."
        return "Requires AED 5,000 monthly spend for cashback."

    def rules(self, settings: AdcbSettings) -> Sequence[RateRule]:
        return _ADCB_RULES


class EiSwitchRule(CardRule):
    card_id = CardId.EI_SWITCH
    note_suffix = " (category caps ignored)."

    def is_eligible(self, settings: EiSwitchSettings) -> bool:
        return settings.enabled and settings.min_spend_met

    def gated_note(self, settings: EiSwitchSettings) -> str:
        if not settings.enabled:
            return "Card disabled."
        return "Requires AED 2,500 monthly spend for cashback."

    def rules(self, settings: EiSwitchSettings) -> Sequence[RateRule]:
        if settings.plan == "lifestyle":
            return _EI_LIFESTYLE_RULES
        return _EI_TRAVEL_RULES


class AjmanUltracashRule(CardRule):
    card_id = CardId.AJMAN_ULTRACASH
    note_suffix = " (monthly caps per category not tracked)."

    def rules(self, settings: AjmanSettings) -> Sequence[RateRule]:
        # The chosen set is used as given; its size is the settings editor's concern.
        chosen = set(settings.active_categories)
        return (
            RateRule(lambda f: ajman_category(f) in chosen, 0.05, "5% on your selected '{category}' category"),
            RateRule(
                lambda f: ajman_category(f) is not None,
                0.01,
                "1% base rate; '{category}' not in your chosen 5% categories",
            ),
            RateRule(always, 0.01, "1% base rate; category not eligible for 5%"),
        )

    def note_context(self, flags: DerivedFlags, settings: AjmanSettings) -> dict[str, str]:
        category = ajman_category(flags)
        return {"category": category.value if category else ""}


class SibCashbackRule(CardRule):
    card_id = CardId.SIB_CASHBACK
    note_suffix = " cashback (up to AED 300/month; not tracked)."

    def rules(self, settings: SibSettings) -> Sequence[RateRule]:
        if settings.apply_10_on_fuel_wallet:
            return (_SIB_EXCLUDED, *_SIB_TAIL)
        return (_SIB_EXCLUDED, _SIB_FUEL_WALLET_INTERNATIONAL, _SIB_FUEL_WALLET_DOMESTIC, *_SIB_TAIL)


class DibWalaaRule(CardRule):
    card_id = CardId.DIB_WALAA
    reward_type = RewardType.POINTS

    def rules(self, settings: DibSettings) -> Sequence[RateRule]:
        return _DIB_RULES

    def reward(self, amount: float, rate: float, settings: DibSettings) -> tuple[float, float | None]:
        points = amount * rate
        return points * settings.walaa_value_per_point_aed, points

    def format_note(self, rule_note: str, value: float, points: float | None, effective_rate: float) -> str:
        return f"{rule_note}; {points:.0f} Wala'a Rewards (~AED {value:.2f} equivalent)."


class CitiPremierRule(CardRule):
    card_id = CardId.CITI_PREMIER
    reward_type = RewardType.POINTS

    def rules(self, settings: CitiSettings) -> Sequence[RateRule]:
        return _CITI_RULES

    def reward(self, amount: float, rate: float, settings: CitiSettings) -> tuple[float, float | None]:
        points_per_aed = rate / settings.aed_per_usd
        points = amount * points_per_aed
        return points * settings.ty_value_per_point_aed, points

    def format_note(self, rule_note: str, value: float, points: float | None, effective_rate: float) -> str:
        return f"~{effective_rate * 100:.2f}% equivalent; {rule_note}; {points:.0f} ThankYou Points."


# Invocation order doubles as the tie-break order.
CARD_RULES: tuple[CardRule, ...] = (
    Adcb365Rule(),
    EiSwitchRule(),
    AjmanUltracashRule(),
    SibCashbackRule(),
    DibWalaaRule(),
    CitiPremierRule(),
)


def evaluate_card(
    rule: CardRule, purchase: PurchaseInput, flags: DerivedFlags, settings: CardSettings
) -> CardResult:
    return rule.evaluate(purchase, flags, settings.for_card(rule.card_id))
