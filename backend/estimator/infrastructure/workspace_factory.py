"""Editor-side wiring: a workspace bound to the configured record API and local state file."""

import httpx

from estimator.application.services import EstimateStateStore, EstimateWorkspace
from estimator.config import Settings, get_settings
from estimator.infrastructure.api import EstimateApiClient
from estimator.infrastructure.storage import JsonFileLocalStore


def build_workspace(
    access_token: str | None = None,
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> EstimateWorkspace:
    """Create a workspace with a fresh estimate numbered from the local sequence."""
    settings = settings or get_settings()
    local_store = JsonFileLocalStore(settings.local_store_file)
    api = EstimateApiClient(
        base_url=settings.estimate_api_url,
        timeout=settings.estimate_api_timeout,
        http_client=http_client,
    )
    return EstimateWorkspace(
        EstimateStateStore(local_store),
        api,
        local_store,
        access_token=access_token,
    )
