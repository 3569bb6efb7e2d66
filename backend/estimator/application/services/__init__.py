from .account_service import AccountService
from .estimate_numbering import EstimateNumberGenerator
from .estimate_record_service import EstimateRecordService
from .estimate_state_store import EstimateStateStore, create_initial_estimate
from .estimate_workspace import EstimateWorkspace
from .record_collection_service import RecordCollectionService

__all__ = [
    "AccountService",
    "EstimateNumberGenerator",
    "EstimateRecordService",
    "EstimateStateStore",
    "create_initial_estimate",
    "EstimateWorkspace",
    "RecordCollectionService",
]
