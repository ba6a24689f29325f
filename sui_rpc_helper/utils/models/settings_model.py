from typing import Dict
from typing import Optional

from pydantic import BaseModel

from sui_rpc_helper.utils.models.data_model import ProbeKind


class ConnectionLimits(BaseModel):
    """Connection limits configuration model."""

    max_connections: int = 100
    max_keepalive_connections: int = 50
    keepalive_expiry: int = 300


class RPCConfigBase(BaseModel):
    """
    Configuration for a single-endpoint Sui RPC client.

    ``retry`` is the total number of attempts per call, so the default of 1
    performs exactly one request and never retries.
    """

    retry: int = 1
    request_time_out: float = 15.0
    connection_limits: ConnectionLimits = ConnectionLimits()


class ProbeSettings(BaseModel):
    """Latency probe configuration model."""

    probe_kind: ProbeKind = ProbeKind.SYSTEM_STATE
    timeout: Optional[float] = None
    rpc: RPCConfigBase = RPCConfigBase()


class LoggingConfig(BaseModel):
    """Logging configuration model for the library-scoped logger."""

    log_dir: Optional[str] = None
    file_levels: Dict[str, bool] = {
        'INFO': True,
        'WARNING': True,
        'ERROR': True,
        'CRITICAL': True,
    }
    console_levels: Dict[str, str] = {
        'INFO': 'stdout',
        'WARNING': 'stderr',
        'ERROR': 'stderr',
    }
    enable_console_logging: bool = False
    format: str = '{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[module]} | {message}'
    rotation: str = '20 MB'
    retention: str = '7 days'
    compression: str = 'zip'
