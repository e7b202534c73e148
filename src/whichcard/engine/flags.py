from dataclasses import dataclass

from whichcard.domain.models import Channel, Location, PurchaseCategory, PurchaseInput

_DINING = {PurchaseCategory.DINING, PurchaseCategory.ONLINE_FOOD}
_GROCERY = {PurchaseCategory.GROCERY, PurchaseCategory.ONLINE_GROCERY}
_GENERAL_RETAIL = {PurchaseCategory.ONLINE_SHOPPING, PurchaseCategory.INSTORE_SHOPPING, PurchaseCategory.OTHER}


@dataclass(frozen=True, slots=True)
class DerivedFlags:
    is_domestic: bool
    is_international: bool
    is_online: bool
    is_wallet: bool
    is_online_or_wallet: bool
    is_dining: bool
    is_grocery: bool
    is_fuel: bool
    is_education: bool
    is_government: bool
    is_utilities: bool
    is_travel_air: bool
    is_travel_hotel: bool
    is_general_retail: bool


def derive_flags(purchase: PurchaseInput) -> DerivedFlags:
    category = purchase.category
    is_online = purchase.channel == Channel.ONLINE
    is_wallet = purchase.channel == Channel.WALLET

    return DerivedFlags(
        is_domestic=purchase.location == Location.DOMESTIC,
        is_international=purchase.location == Location.INTERNATIONAL,
        is_online=is_online,
        is_wallet=is_wallet,
        is_online_or_wallet=is_online or is_wallet,
        is_dining=category in _DINING,
        is_grocery=category in _GROCERY,
        is_fuel=category == PurchaseCategory.FUEL,
        is_education=category == PurchaseCategory.EDUCATION,
        is_government=category == PurchaseCategory.GOVERNMENT,
        is_utilities=category == PurchaseCategory.UTILITIES,
        is_travel_air=category == PurchaseCategory.TRAVEL_AIR,
        is_travel_hotel=category == PurchaseCategory.TRAVEL_HOTEL,
        is_general_retail=category in _GENERAL_RETAIL,
    )
