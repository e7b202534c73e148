from functools import lru_cache

from whichcard.agents.orchestrator import RecommendationOrchestrator
from whichcard.config import settings
from whichcard.repository.settings_store import SettingsStore
from whichcard.usage.sink import UsageSink, build_usage_sink


@lru_cache
def get_settings_store() -> SettingsStore:
    return SettingsStore(settings.card_settings_file)


@lru_cache
def get_orchestrator() -> RecommendationOrchestrator:
    return RecommendationOrchestrator(get_settings_store())


@lru_cache
def get_usage_sink() -> UsageSink | None:
    return build_usage_sink(settings)
