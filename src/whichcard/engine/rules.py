from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import ClassVar

from whichcard.domain.catalog import CARD_NAMES
from whichcard.domain.models import BaseCardSettings, CardId, CardResult, PurchaseInput, RewardType
from whichcard.engine.flags import DerivedFlags

Predicate = Callable[[DerivedFlags], bool]


def always(_flags: DerivedFlags) -> bool:
    return True


@dataclass(frozen=True, slots=True)
class RateRule:
    """One row of a card's decision table.

    ``rate`` is a cashback fraction for cashback cards and a points-per-unit
    figure for points cards. ``note`` may reference keys returned by
    ``CardRule.note_context``.
    """

    when: Predicate
    rate: float
    note: str


class _Placeholders(dict):
    def __missing__(self, key: str) -> str:
        return f"<{key}>"


class CardRule:
    """Base calculator: eligibility gate, ordered rate table, reward conversion.

    Subclasses declare ``card_id``, override ``rules`` and, where needed,
    ``is_eligible``, ``gated_note``, ``reward`` and ``format_note``. The last
    rule of every table must match unconditionally.
    """

    card_id: ClassVar[CardId]
    reward_type: ClassVar[RewardType] = RewardType.CASHBACK
    note_suffix: ClassVar[str] = ""

    @property
    def card_name(self) -> str:
        return CARD_NAMES[self.card_id]

    def is_eligible(self, settings: BaseCardSettings) -> bool:
        return settings.enabled

    def gated_note(self, settings: BaseCardSettings) -> str:
        return "Card disabled."

    def rules(self, settings: BaseCardSettings) -> Sequence[RateRule]:
        raise NotImplementedError

    def note_context(self, flags: DerivedFlags, settings: BaseCardSettings) -> dict[str, str]:
        return {}

    def select_rule(self, flags: DerivedFlags, settings: BaseCardSettings) -> RateRule:
        for rule in self.rules(settings):
            if rule.when(flags):
                return rule
        raise LookupError(f"{self.card_id.value} rate table has no fallback rule")

    def reward(self, amount: float, rate: float, settings: BaseCardSettings) -> tuple[float, float | None]:
        """Return (value in AED, raw points or None)."""
        return amount * rate, None

    def format_note(self, rule_note: str, value: float, points: float | None, effective_rate: float) -> str:
        return f"{rule_note}{self.note_suffix}"

    def evaluate(self, purchase: PurchaseInput, flags: DerivedFlags, settings: BaseCardSettings) -> CardResult:
        if not self.is_eligible(settings):
            return CardResult(
                card_id=self.card_id,
                card_name=self.card_name,
                reward_type=self.reward_type,
                reward_value_aed=0.0,
                raw_points=0.0 if self.reward_type == RewardType.POINTS else None,
                effective_rate=0.0,
                note=self.gated_note(settings),
            )

        rule = self.select_rule(flags, settings)
        value, points = self.reward(purchase.amount_aed, rule.rate, settings)
        effective_rate = value / purchase.amount_aed
        rule_note = rule.note.format(**self.note_context(flags, settings))

        return CardResult(
            card_id=self.card_id,
            card_name=self.card_name,
            reward_type=self.reward_type,
            reward_value_aed=value,
            raw_points=points,
            effective_rate=effective_rate,
            note=self.format_note(rule_note, value, points, effective_rate),
        )

    def describe(self, settings: BaseCardSettings) -> list[str]:
        return [rule.note.format_map(_Placeholders()) for rule in self.rules(settings)]
