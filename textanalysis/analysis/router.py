from textanalysis.analysis.models import AnalysisKind, ProcessingPath
from textanalysis.logging.logger import Log

# Payload limit of the service's synchronous detection API.
SYNC_PAYLOAD_LIMIT_BYTES = 5000


def requires_job(payload: bytes) -> bool:
    """True when the payload is too large for synchronous detection."""
    return len(payload) >= SYNC_PAYLOAD_LIMIT_BYTES


def select_path(kind: AnalysisKind, payload: bytes) -> ProcessingPath:
    """Choose the synchronous or job-based path for one analysis kind."""
    if requires_job(payload):
        Log.info(
            f"{kind.value}: file size is over {SYNC_PAYLOAD_LIMIT_BYTES} bytes "
            f"({len(payload)}), using asynchronous job"
        )
        return ProcessingPath.ASYNC
    Log.info(
        f"{kind.value}: file size is under {SYNC_PAYLOAD_LIMIT_BYTES} bytes "
        f"({len(payload)}), using synchronous detection"
    )
    return ProcessingPath.SYNC
