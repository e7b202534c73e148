from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Location(str, Enum):
    DOMESTIC = "domestic"
    INTERNATIONAL = "international"


class Channel(str, Enum):
    POS = "pos"
    ONLINE = "online"
    WALLET = "wallet"


class PurchaseCategory(str, Enum):
    GROCERY = "grocery"
    ONLINE_GROCERY = "online_grocery"
    DINING = "dining"
    ONLINE_FOOD = "online_food"
    FUEL = "fuel"
    UTILITIES = "utilities"
    GOVERNMENT = "government"
    EDUCATION = "education"
    ONLINE_SHOPPING = "online_shopping"
    INSTORE_SHOPPING = "instore_shopping"
    TRAVEL_AIR = "travel_air"
    TRAVEL_HOTEL = "travel_hotel"
    OTHER = "other"


class CardId(str, Enum):
    ADCB_365 = "ADCB_365"
    EI_SWITCH = "EI_SWITCH"
    AJMAN_ULTRACASH = "AJMAN_ULTRACASH"
    SIB_CASHBACK = "SIB_CASHBACK"
    DIB_WALAA = "DIB_WALAA"
    CITI_PREMIER = "CITI_PREMIER"


class RewardType(str, Enum):
    CASHBACK = "cashback"
    POINTS = "points"


class AjmanCategory(str, Enum):
    FUEL = "fuel"
    SUPERMARKET = "supermarket"
    ONLINE = "online"
    SCHOOL = "school"


class PurchaseInput(BaseModel):
    """One transaction to evaluate. Amounts are in AED."""

    model_config = ConfigDict(frozen=True)

    amount_aed: float
    location: Location = Location.DOMESTIC
    channel: Channel = Channel.POS
    category: PurchaseCategory = PurchaseCategory.OTHER


class BaseCardSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = True


class AdcbSettings(BaseCardSettings):
    # AED 5,000 monthly spend
    min_spend_met: bool = True


class EiSwitchSettings(BaseCardSettings):
    plan: Literal["lifestyle", "travel"] = "lifestyle"
    # AED 2,500 monthly spend
    min_spend_met: bool = True


class AjmanSettings(BaseCardSettings):
    active_categories: tuple[AjmanCategory, ...] = (AjmanCategory.FUEL, AjmanCategory.SUPERMARKET)


class SibSettings(BaseCardSettings):
    apply_10_on_fuel_wallet: bool = False


class DibSettings(BaseCardSettings):
    walaa_value_per_point_aed: float = Field(0.005, gt=0)


class CitiSettings(BaseCardSettings):
    aed_per_usd: float = Field(3.67, gt=0)
    ty_value_per_point_aed: float = Field(500 / 15000, gt=0)


class CardSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    adcb_365: AdcbSettings = Field(default_factory=AdcbSettings)
    ei_switch: EiSwitchSettings = Field(default_factory=EiSwitchSettings)
    ajman_ultracash: AjmanSettings = Field(default_factory=AjmanSettings)
    sib_cashback: SibSettings = Field(default_factory=SibSettings)
    dib_walaa: DibSettings = Field(default_factory=DibSettings)
    citi_premier: CitiSettings = Field(default_factory=CitiSettings)

    def for_card(self, card_id: CardId) -> BaseCardSettings:
        return getattr(self, card_id.value.lower())


class CardResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    card_id: CardId
    card_name: str
    reward_type: RewardType
    reward_value_aed: float
    raw_points: float | None = None
    effective_rate: float
    note: str


class ComputeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    best_card: CardResult | None = None
    results: list[CardResult] = Field(default_factory=list)
