import pytest

from conftest import make_purchase
from whichcard.domain.catalog import DEFAULT_SETTINGS
from whichcard.domain.models import (
    AdcbSettings,
    AjmanCategory,
    AjmanSettings,
    Channel,
    CitiSettings,
    EiSwitchSettings,
    Location,
    PurchaseCategory,
)
from whichcard.engine.evaluator import (
    Adcb365Rule,
    AjmanUltracashRule,
    CARD_RULES,
    CitiPremierRule,
    DibWalaaRule,
    EiSwitchRule,
    SibCashbackRule,
    ajman_category,
)
from whichcard.engine.flags import derive_flags
from whichcard.engine.rules import always


def _evaluate(rule, purchase, card_settings):
    return rule.evaluate(purchase, derive_flags(purchase), card_settings)


@pytest.mark.parametrize(
    ("category", "location", "rate"),
    [
        (PurchaseCategory.DINING, Location.INTERNATIONAL, 0.01),
        (PurchaseCategory.DINING, Location.DOMESTIC, 0.06),
        (PurchaseCategory.ONLINE_GROCERY, Location.DOMESTIC, 0.05),
        (PurchaseCategory.FUEL, Location.DOMESTIC, 0.03),
        (PurchaseCategory.UTILITIES, Location.DOMESTIC, 0.03),
        (PurchaseCategory.EDUCATION, Location.DOMESTIC, 0.01),
    ],
)
def test_adcb_rate_table(category, location, rate) -> None:
    result = _evaluate(Adcb365Rule(), make_purchase(100, category, location=location), DEFAULT_SETTINGS.adcb_365)

    assert result.effective_rate == pytest.approx(rate)


def test_adcb_min_spend_gate() -> None:
    result = _evaluate(
        Adcb365Rule(), make_purchase(100, PurchaseCategory.DINING), AdcbSettings(min_spend_met=False)
    )

    assert result.reward_value_aed == 0
    assert result.note == "Requires AED 5,000 monthly spend for cashback."


@pytest.mark.parametrize(
    ("category", "location", "rate"),
    [
        (PurchaseCategory.FUEL, Location.DOMESTIC, 0.08),
        (PurchaseCategory.FUEL, Location.INTERNATIONAL, 0.01),
        (PurchaseCategory.GROCERY, Location.DOMESTIC, 0.04),
        (PurchaseCategory.GROCERY, Location.INTERNATIONAL, 0.01),
        (PurchaseCategory.EDUCATION, Location.DOMESTIC, 0.04),
        (PurchaseCategory.GOVERNMENT, Location.DOMESTIC, 0.005),
        (PurchaseCategory.TRAVEL_HOTEL, Location.DOMESTIC, 0.01),
    ],
)
def test_ei_switch_lifestyle_table(category, location, rate) -> None:
    result = _evaluate(EiSwitchRule(), make_purchase(100, category, location=location), DEFAULT_SETTINGS.ei_switch)

    assert result.effective_rate == pytest.approx(rate)


def test_ei_switch_travel_plan_and_gate() -> None:
    travel = EiSwitchSettings(plan="travel")
    hotel = _evaluate(EiSwitchRule(), make_purchase(100, PurchaseCategory.TRAVEL_HOTEL), travel)
    fuel = _evaluate(EiSwitchRule(), make_purchase(100, PurchaseCategory.FUEL), travel)
    gated = _evaluate(
        EiSwitchRule(), make_purchase(100, PurchaseCategory.FUEL), EiSwitchSettings(min_spend_met=False)
    )

    assert hotel.effective_rate == pytest.approx(0.04)
    assert hotel.note == "4% hotels (Travel) (category caps ignored)."
    assert fuel.effective_rate == pytest.approx(0.01)
    assert gated.effective_rate == 0


def test_ajman_online_takes_precedence_over_merchant_type() -> None:
    purchase = make_purchase(100, PurchaseCategory.GROCERY, Channel.WALLET)

    assert ajman_category(derive_flags(purchase)) == AjmanCategory.ONLINE
    result = _evaluate(AjmanUltracashRule(), purchase, DEFAULT_SETTINGS.ajman_ultracash)
    assert result.effective_rate == pytest.approx(0.01)


def test_ajman_selected_category_earns_five_percent() -> None:
    settings = AjmanSettings(active_categories=(AjmanCategory.SCHOOL, AjmanCategory.ONLINE))
    result = _evaluate(AjmanUltracashRule(), make_purchase(1000, PurchaseCategory.EDUCATION), settings)

    assert result.reward_value_aed == pytest.approx(50)
    assert result.note == "5% on your selected 'school' category (monthly caps per category not tracked)."


def test_ajman_ineligible_category_note() -> None:
    result = _evaluate(AjmanUltracashRule(), make_purchase(100, PurchaseCategory.DINING), DEFAULT_SETTINGS.ajman_ultracash)

    assert result.note.startswith("1% base rate; category not eligible for 5%")


@pytest.mark.parametrize(
    ("category", "channel", "location", "rate"),
    [
        (PurchaseCategory.ONLINE_GROCERY, Channel.ONLINE, Location.DOMESTIC, 0.005),
        (PurchaseCategory.EDUCATION, Channel.WALLET, Location.DOMESTIC, 0.005),
        (PurchaseCategory.FUEL, Channel.WALLET, Location.INTERNATIONAL, 0.02),
        (PurchaseCategory.FUEL, Channel.ONLINE, Location.DOMESTIC, 0.1),
        (PurchaseCategory.DINING, Channel.WALLET, Location.DOMESTIC, 0.1),
        (PurchaseCategory.INSTORE_SHOPPING, Channel.POS, Location.INTERNATIONAL, 0.02),
        (PurchaseCategory.FUEL, Channel.POS, Location.DOMESTIC, 0.01),
    ],
)
def test_sib_rate_table(category, channel, location, rate) -> None:
    purchase = make_purchase(100, category, channel, location)

    result = _evaluate(SibCashbackRule(), purchase, DEFAULT_SETTINGS.sib_cashback)

    assert result.effective_rate == pytest.approx(rate)


@pytest.mark.parametrize(
    ("category", "location", "points"),
    [
        (PurchaseCategory.UTILITIES, Location.INTERNATIONAL, 20),
        (PurchaseCategory.TRAVEL_AIR, Location.INTERNATIONAL, 350),
        (PurchaseCategory.TRAVEL_AIR, Location.DOMESTIC, 300),
    ],
)
def test_dib_points_table(category, location, points) -> None:
    result = _evaluate(DibWalaaRule(), make_purchase(100, category, location=location), DEFAULT_SETTINGS.dib_walaa)

    assert result.raw_points == pytest.approx(points)
    assert result.reward_value_aed == pytest.approx(points * 0.005)


def test_citi_converts_usd_points_to_aed() -> None:
    settings = CitiSettings(aed_per_usd=4.0, ty_value_per_point_aed=0.04)

    dining = _evaluate(CitiPremierRule(), make_purchase(400, PurchaseCategory.DINING), settings)
    abroad = _evaluate(
        CitiPremierRule(), make_purchase(400, PurchaseCategory.TRAVEL_AIR, location=Location.INTERNATIONAL), settings
    )
    local = _evaluate(CitiPremierRule(), make_purchase(400, PurchaseCategory.OTHER), settings)

    assert dining.raw_points == pytest.approx(300)
    assert dining.reward_value_aed == pytest.approx(12)
    assert dining.effective_rate == pytest.approx(0.03)
    assert dining.note == "~3.00% equivalent; 3 TY pts/USD (dining/grocery/fuel); 300 ThankYou Points."
    assert abroad.raw_points == pytest.approx(200)
    assert local.raw_points == pytest.approx(100)


def test_every_rate_table_ends_with_a_fallback() -> None:
    for rule in CARD_RULES:
        card_settings = DEFAULT_SETTINGS.for_card(rule.card_id)
        assert rule.rules(card_settings)[-1].when is always
        described = rule.describe(card_settings)
        assert described
        assert all("{" not in line for line in described)


def test_ajman_describe_fills_placeholders() -> None:
    described = AjmanUltracashRule().describe(DEFAULT_SETTINGS.ajman_ultracash)

    assert described[0] == "5% on your selected '<category>' category"
