from typing import Any, Callable, Dict, Optional

from flask import current_app

from contenthub.sync.adapter import RepositorySync
from contenthub.sync.settings import (
    JsonFileSettingsStore,
    SettingsStore,
    SyncSettings,
    load_settings,
    save_settings,
)

STORE_KEY = "contenthub.sync_store"
CLIENT_FACTORY_KEY = "contenthub.github_client_factory"

ClientFactory = Callable[[SyncSettings], Any]


def init_sync(
    app,
    store: Optional[SettingsStore] = None,
    client_factory: Optional[ClientFactory] = None,
) -> None:
    """
    Register the settings store (and optionally a client factory) on the app.

    Tests pass an InMemorySettingsStore and a fake client factory here.
    """
    app.extensions[STORE_KEY] = store or JsonFileSettingsStore(app.config["SYNC_SETTINGS_PATH"])
    app.extensions[CLIENT_FACTORY_KEY] = client_factory


def get_store() -> SettingsStore:
    return current_app.extensions[STORE_KEY]


def current_settings() -> SyncSettings:
    return load_settings(get_store())


def update_settings(data: Dict[str, Any]) -> SyncSettings:
    settings = current_settings().merge(data)
    save_settings(get_store(), settings)
    current_app.logger.info(
        "Sync settings saved for %s/%s@%s",
        settings.owner or "-",
        settings.repo or "-",
        settings.branch,
    )
    return settings


def build_sync(settings: Optional[SyncSettings] = None) -> RepositorySync:
    settings = settings or current_settings()
    factory = current_app.extensions.get(CLIENT_FACTORY_KEY)

    return RepositorySync(
        settings,
        client=factory(settings) if factory else None,
        api_url=current_app.config["GITHUB_API_URL"],
        timeout=current_app.config["GITHUB_TIMEOUT"],
    )
