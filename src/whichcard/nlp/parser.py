from whichcard.domain.catalog import search_categories
from whichcard.domain.models import Channel, Location, PurchaseCategory, PurchaseInput
from whichcard.exceptions import PurchaseParseError

_CHANNEL_WORDS = {
    "pos": Channel.POS,
    "instore": Channel.POS,
    "card": Channel.POS,
    "online": Channel.ONLINE,
    "web": Channel.ONLINE,
    "wallet": Channel.WALLET,
    "applepay": Channel.WALLET,
    "gpay": Channel.WALLET,
}

_INTERNATIONAL_WORDS = {"intl", "international", "abroad", "foreign"}
_DOMESTIC_WORDS = {"uae", "domestic", "local"}


def resolve_category(text: str) -> PurchaseCategory:
    """Map a category word to an enum value, falling back to a unique catalog match."""
    needle = text.strip().lower()
    try:
        return PurchaseCategory(needle)
    except ValueError:
        pass

    matches = search_categories(needle)
    if len(matches) == 1:
        return matches[0].value
    if not matches:
        raise PurchaseParseError(f"Unknown category '{text}'. Try /categories to list them.")
    options = ", ".join(option.value.value for option in matches)
    raise PurchaseParseError(f"'{text}' matches several categories: {options}")


def parse_purchase_command(text: str) -> PurchaseInput:
    """Parse "<amount> <category words...> [online|wallet|pos] [intl]".

    Amounts may carry an AED prefix or thousands separators.
    """
    tokens = text.split()
    if tokens and tokens[0].startswith("/"):
        tokens = tokens[1:]
    if not tokens:
        raise PurchaseParseError("Usage: /best <amount> <category> [online|wallet|pos] [intl]")

    raw_amount = tokens[0].lower().removeprefix("aed").replace(",", "")
    try:
        amount = float(raw_amount)
    except ValueError as exc:
        raise PurchaseParseError(f"Could not parse amount from '{tokens[0]}'.") from exc
    if amount <= 0:
        raise PurchaseParseError("Amount must be positive.")

    channel = Channel.POS
    location = Location.DOMESTIC
    category_words: list[str] = []

    for token in tokens[1:]:
        word = token.lower()
        if word in _CHANNEL_WORDS:
            channel = _CHANNEL_WORDS[word]
        elif word in _INTERNATIONAL_WORDS:
            location = Location.INTERNATIONAL
        elif word in _DOMESTIC_WORDS:
            location = Location.DOMESTIC
        else:
            category_words.append(word)

    category = resolve_category(" ".join(category_words)) if category_words else PurchaseCategory.OTHER
    return PurchaseInput(amount_aed=amount, location=location, channel=channel, category=category)
