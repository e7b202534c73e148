import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from whichcard.domain.catalog import CARD_NAMES, DEFAULT_SETTINGS
from whichcard.domain.models import CardId, CardSettings
from whichcard.exceptions import SettingsStoreError, SettingsValidationError

logger = logging.getLogger(__name__)

AJMAN_CHOSEN_CATEGORY_COUNT = 2


def validate_card_settings(card_settings: CardSettings) -> None:
    """Apply the settings editor's rules before a bundle is saved.

    The reward engine does not call this; it evaluates whatever it is given.
    """
    chosen = card_settings.ajman_ultracash.active_categories
    if len(chosen) != AJMAN_CHOSEN_CATEGORY_COUNT or len(set(chosen)) != len(chosen):
        raise SettingsValidationError(
            f"Please select exactly {AJMAN_CHOSEN_CATEGORY_COUNT} categories for "
            f"{CARD_NAMES[CardId.AJMAN_ULTRACASH]}"
        )


class SettingsStore:
    def __init__(self, settings_file: str):
        self.settings_file = Path(settings_file)

    def load(self) -> CardSettings:
        if not self.settings_file.exists():
            return DEFAULT_SETTINGS

        try:
            with self.settings_file.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
            return CardSettings.model_validate(data)
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning("Ignoring unreadable card settings at %s: %s", self.settings_file, exc)
            return DEFAULT_SETTINGS

    def save(self, card_settings: CardSettings) -> CardSettings:
        validate_card_settings(card_settings)
        self.settings_file.parent.mkdir(parents=True, exist_ok=True)

        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                suffix=".json",
                prefix="card_settings_",
                dir=self.settings_file.parent,
                delete=False,
                encoding="utf-8",
            ) as fp:
                tmp_name = fp.name
                json.dump(card_settings.model_dump(mode="json"), fp, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.settings_file)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise SettingsStoreError(f"Could not save card settings to {self.settings_file}") from exc

        logger.info("Saved card settings to %s", self.settings_file)
        return card_settings

    def reset(self) -> CardSettings:
        try:
            self.settings_file.unlink(missing_ok=True)
        except OSError as exc:
            raise SettingsStoreError(f"Could not remove {self.settings_file}") from exc
        return DEFAULT_SETTINGS
