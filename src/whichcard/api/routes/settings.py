from fastapi import APIRouter, Depends, HTTPException

from whichcard.api.dependencies import get_settings_store
from whichcard.domain.catalog import DEFAULT_SETTINGS
from whichcard.domain.models import CardSettings
from whichcard.exceptions import SettingsStoreError, SettingsValidationError
from whichcard.repository.settings_store import SettingsStore

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=CardSettings)
def read_settings(store: SettingsStore = Depends(get_settings_store)) -> CardSettings:
    return store.load()


@router.get("/defaults", response_model=CardSettings)
def read_default_settings() -> CardSettings:
    return DEFAULT_SETTINGS


@router.put("", response_model=CardSettings)
def save_settings(payload: CardSettings, store: SettingsStore = Depends(get_settings_store)) -> CardSettings:
    try:
        return store.save(payload)
    except SettingsValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except SettingsStoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.delete("", response_model=CardSettings)
def reset_settings(store: SettingsStore = Depends(get_settings_store)) -> CardSettings:
    try:
        return store.reset()
    except SettingsStoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
