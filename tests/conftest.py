import pytest
from fastapi.testclient import TestClient

from whichcard.agents.orchestrator import RecommendationOrchestrator
from whichcard.api.app import app
from whichcard.api.dependencies import get_orchestrator, get_settings_store, get_usage_sink
from whichcard.domain.models import Channel, Location, PurchaseCategory, PurchaseInput
from whichcard.repository.settings_store import SettingsStore


class RecordingSink:
    def __init__(self) -> None:
        self.records = []

    def insert(self, record) -> None:
        self.records.append(record)


def make_purchase(
    amount: float = 100,
    category: PurchaseCategory = PurchaseCategory.OTHER,
    channel: Channel = Channel.POS,
    location: Location = Location.DOMESTIC,
) -> PurchaseInput:
    return PurchaseInput(amount_aed=amount, category=category, channel=channel, location=location)


@pytest.fixture
def settings_store(tmp_path) -> SettingsStore:
    return SettingsStore(str(tmp_path / "card_settings.json"))


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def client(settings_store, sink):
    orchestrator = RecommendationOrchestrator(settings_store)
    app.dependency_overrides[get_settings_store] = lambda: settings_store
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_usage_sink] = lambda: sink
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
