from types import MappingProxyType
from typing import Literal

from pydantic import BaseModel, ConfigDict

from whichcard.domain.models import CardId, CardSettings, PurchaseCategory

CategoryGroup = Literal["food", "bills", "shopping", "travel"]

CARD_NAMES = MappingProxyType(
    {
        CardId.ADCB_365: "ADCB 365",
        CardId.EI_SWITCH: "Emirates Islamic SWITCH",
        CardId.AJMAN_ULTRACASH: "Ajman Bank ULTRACASH",
        CardId.SIB_CASHBACK: "SIB Cashback",
        CardId.DIB_WALAA: "DIB Wala'a",
        CardId.CITI_PREMIER: "Citi Premier",
    }
)

CATEGORY_LABELS = MappingProxyType(
    {
        PurchaseCategory.GROCERY: "Grocery / Supermarket / Hypermarket",
        PurchaseCategory.ONLINE_GROCERY: "Online groceries (Talabat Mart, Careem, Instashop)",
        PurchaseCategory.DINING: "Dining / Cafes / Restaurants",
        PurchaseCategory.ONLINE_FOOD: "Online food delivery (Talabat, Deliveroo, etc.)",
        PurchaseCategory.FUEL: "Fuel / Petrol station",
        PurchaseCategory.UTILITIES: "Utilities / Telecom / Salik",
        PurchaseCategory.GOVERNMENT: "Government fees / Real estate / Traffic fines",
        PurchaseCategory.EDUCATION: "Education / School / University fees",
        PurchaseCategory.ONLINE_SHOPPING: "Online shopping (Amazon, Noon, etc.)",
        PurchaseCategory.INSTORE_SHOPPING: "In-store shopping (malls, clothes, electronics, etc.)",
        PurchaseCategory.TRAVEL_AIR: "Travel - airline tickets",
        PurchaseCategory.TRAVEL_HOTEL: "Travel - hotels",
        PurchaseCategory.OTHER: "Other / I'm not sure",
    }
)

GROUP_LABELS = MappingProxyType(
    {
        "food": "Food & Groceries",
        "bills": "Bills & Services",
        "shopping": "Shopping",
        "travel": "Travel",
    }
)


class CategoryOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: PurchaseCategory
    label: str
    keywords: tuple[str, ...]
    group: CategoryGroup

    def matches(self, query: str) -> bool:
        needle = query.strip().lower()
        if not needle:
            return True
        if needle in self.value.value or needle in self.label.lower():
            return True
        return any(needle in keyword for keyword in self.keywords)


CATEGORY_OPTIONS: tuple[CategoryOption, ...] = (
    CategoryOption(
        value=PurchaseCategory.ONLINE_FOOD,
        label="Food delivery - Talabat / Deliveroo / Careem Food",
        keywords=(
            "talabat",
            "careem",
            "careem food",
            "deliveroo",
            "zomato",
            "food",
            "delivery",
            "restaurant",
            "order",
            "app",
        ),
        group="food",
    ),
    CategoryOption(
        value=PurchaseCategory.ONLINE_GROCERY,
        label="Online groceries - Talabat Mart / Careem / Instashop",
        keywords=(
            "talabat mart",
            "talabat grocery",
            "careem",
            "careem mart",
            "careem market",
            "careem quik",
            "instashop",
            "grocery app",
            "online grocery",
            "noon minutes",
        ),
        group="food",
    ),
    CategoryOption(
        value=PurchaseCategory.GROCERY,
        label="Groceries - supermarket / hypermarket (Carrefour, Lulu, etc.)",
        keywords=("carrefour", "lulu", "supermarket", "hypermarket", "grocery", "spinneys", "waitrose", "union coop"),
        group="food",
    ),
    CategoryOption(
        value=PurchaseCategory.DINING,
        label="Dining in-store - restaurants / cafes",
        keywords=("restaurant", "cafe", "dine in", "eat out", "coffee", "brunch", "dinner", "lunch"),
        group="food",
    ),
    CategoryOption(
        value=PurchaseCategory.FUEL,
        label="Fuel / Petrol station",
        keywords=("fuel", "petrol", "gas station", "adnoc", "enoc", "epco", "emarat", "gas"),
        group="bills",
    ),
    CategoryOption(
        value=PurchaseCategory.UTILITIES,
        label="Utilities / Telecom / Salik / Etisalat / Du",
        keywords=("utility", "utilities", "etisalat", "du", "salik", "bill", "dewa", "fewa", "sewa", "telecom", "phone"),
        group="bills",
    ),
    CategoryOption(
        value=PurchaseCategory.GOVERNMENT,
        label="Government / Real estate / Traffic fines",
        keywords=("rta", "tasheel", "government", "traffic fine", "ejari", "visa", "emirates id", "amer", "typsa"),
        group="bills",
    ),
    CategoryOption(
        value=PurchaseCategory.EDUCATION,
        label="Education / School / University fees",
        keywords=("school", "university", "tuition", "education", "college", "nursery", "fees"),
        group="bills",
    ),
    CategoryOption(
        value=PurchaseCategory.ONLINE_SHOPPING,
        label="Online shopping - Amazon / Noon / websites",
        keywords=("amazon", "noon", "online shopping", "ecommerce", "namshi", "ounass", "shein", "aliexpress"),
        group="shopping",
    ),
    CategoryOption(
        value=PurchaseCategory.INSTORE_SHOPPING,
        label="In-store shopping - clothes / electronics / malls",
        keywords=("mall", "clothes", "electronics", "shop", "store", "dubai mall", "moe", "zara", "h&m", "sharaf dg"),
        group="shopping",
    ),
    CategoryOption(
        value=PurchaseCategory.TRAVEL_AIR,
        label="Travel - airline tickets",
        keywords=("flight", "airline", "emirates", "etihad", "flydubai", "air arabia", "ticket", "booking"),
        group="travel",
    ),
    CategoryOption(
        value=PurchaseCategory.TRAVEL_HOTEL,
        label="Travel - hotels",
        keywords=("hotel", "booking.com", "airbnb", "stay", "agoda", "expedia", "resort", "accommodation"),
        group="travel",
    ),
    CategoryOption(
        value=PurchaseCategory.OTHER,
        label="Other / not sure",
        keywords=("other", "misc", "unknown", "not sure"),
        group="shopping",
    ),
)

# Shared read-only defaults; copy with model_copy(update=...) before editing.
DEFAULT_SETTINGS = CardSettings()


def search_categories(query: str = "") -> list[CategoryOption]:
    return [option for option in CATEGORY_OPTIONS if option.matches(query)]
