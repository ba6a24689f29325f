from enum import Enum
from typing import Any
from typing import Dict
from typing import List
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import model_validator


class ProbeKind(str, Enum):
    """Read-only RPC operation issued to measure an endpoint's responsiveness."""

    SYSTEM_STATE = 'suix_getLatestSuiSystemState'
    ALL_BALANCES = 'suix_getAllBalances'
    ALL_COINS = 'suix_getAllCoins'
    GET_OBJECT = 'sui_getObject'


class ProbeRequest(BaseModel):
    """A batch of endpoints to probe with a single kind of call."""

    model_config = ConfigDict(frozen=True)

    endpoints: List[str]
    probe_kind: ProbeKind = ProbeKind.SYSTEM_STATE
    target: Optional[str] = None
    timeout: Optional[float] = Field(default=None, gt=0)


class ProbeResult(BaseModel):
    """
    Outcome of probing one endpoint.

    Exactly one of ``latency`` (milliseconds) and ``error`` is set.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: str
    latency: Optional[float] = Field(default=None, ge=0)
    error: Optional[str] = None

    @model_validator(mode='after')
    def _check_outcome(self):
        if (self.latency is None) == (self.error is None):
            raise ValueError('exactly one of latency and error must be set')
        return self

    @property
    def succeeded(self) -> bool:
        return self.latency is not None


class ConsolidationRequest(BaseModel):
    """Request for a single coin of at least ``coin_value`` owned by ``owner_address``."""

    model_config = ConfigDict(frozen=True)

    owner_address: str
    coin_type: str
    coin_value: int = Field(ge=0)


class CoinStruct(BaseModel):
    """A coin object as returned by ``suix_getCoins``."""

    model_config = ConfigDict(populate_by_name=True, extra='allow')

    coin_type: str = Field(alias='coinType')
    coin_object_id: str = Field(alias='coinObjectId')
    version: str
    digest: str
    balance: int
    previous_transaction: Optional[str] = Field(default=None, alias='previousTransaction')


class PaginatedCoins(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data: List[CoinStruct]
    next_cursor: Optional[str] = Field(default=None, alias='nextCursor')
    has_next_page: bool = Field(alias='hasNextPage')


class DynamicFieldInfo(BaseModel):
    """A dynamic field entry as returned by ``suix_getDynamicFields``."""

    model_config = ConfigDict(populate_by_name=True, extra='allow')

    name: Dict[str, Any]
    bcs_name: Optional[str] = Field(default=None, alias='bcsName')
    type: str
    object_type: str = Field(alias='objectType')
    object_id: str = Field(alias='objectId')
    version: int
    digest: str


class PaginatedDynamicFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data: List[DynamicFieldInfo]
    next_cursor: Optional[str] = Field(default=None, alias='nextCursor')
    has_next_page: bool = Field(alias='hasNextPage')
