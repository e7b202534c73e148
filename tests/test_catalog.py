from whichcard.domain.catalog import CATEGORY_LABELS, CATEGORY_OPTIONS, GROUP_LABELS, search_categories
from whichcard.domain.models import PurchaseCategory


def test_catalog_covers_every_category() -> None:
    assert {option.value for option in CATEGORY_OPTIONS} == set(PurchaseCategory)
    assert set(CATEGORY_LABELS) == set(PurchaseCategory)
    assert {option.group for option in CATEGORY_OPTIONS} == set(GROUP_LABELS)


def test_empty_query_returns_catalog_order() -> None:
    assert search_categories("") == list(CATEGORY_OPTIONS)


def test_search_matches_keywords_and_labels() -> None:
    assert [option.value for option in search_categories("talabat mart")] == [PurchaseCategory.ONLINE_GROCERY]
    assert [option.value for option in search_categories("HOTELS")] == [PurchaseCategory.TRAVEL_HOTEL]
    assert search_categories("no such merchant") == []
