from .key_value_store import KeyValueStore
from .identity_provider import IdentityProvider
from .local_state_store import LocalStateStore
from .estimate_api import EstimateApi

__all__ = [
    "KeyValueStore",
    "IdentityProvider",
    "LocalStateStore",
    "EstimateApi",
]
