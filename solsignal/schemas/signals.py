"""Signal schema: attribute names are internal, aliases are the external camelCase names."""
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictBool, StrictFloat, StrictInt, StrictStr

from solsignal.schemas.fields import REVERSE_FIELD_MAP

# Values are stored as sent: numbers stay numbers, text stays text.
Number = Optional[Union[StrictInt, StrictFloat]]
NumberOrText = Optional[Union[StrictInt, StrictFloat, StrictStr]]
Text = Optional[StrictStr]


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class SignalType(str, Enum):
    BUY = "buy"
    SELL = "sell"
    ALERT = "alert"


class SignalPayload(BaseModel):
    """
    A signal as accepted from producers.

    Every field is optional at ingestion: the service is a collection sink and
    stores what it gets. ``REQUIRED_FIELDS`` in ``solsignal.schemas.fields``
    lists the fields a complete signal carries; gaps are logged, not rejected.
    Unknown keys are ignored here and reported by the service. Values are
    never converted: a mistyped value is rejected, not coerced.
    """

    model_config = ConfigDict(
        alias_generator=lambda name: REVERSE_FIELD_MAP[name],
        extra='ignore',
        use_enum_values=True,
        allow_inf_nan=False,
    )

    # identity
    id: Text = None
    timestamp: Optional[StrictInt] = None

    # required for a complete signal
    token_symbol: Text = None
    token_address: Text = None
    wallet_address: Text = None
    win_percentage: Number = None
    buy_size: Number = None
    entry_market_cap: Number = None
    current_roi: Number = None

    # token details
    token_name: Text = None
    token_image: Text = None
    has_image: Optional[StrictBool] = None
    market_cap: Number = None
    fdv: Number = None
    price_usd: Number = None
    volume_24h: Number = None
    percent_change_1h: NumberOrText = None
    buys_24h: NumberOrText = None
    sells_24h: NumberOrText = None
    liquidity_amount: Number = None
    liquidity_ratio: NumberOrText = None
    age: NumberOrText = None  # free-form ("2h") or minutes
    total_holders: Optional[StrictInt] = None

    # risk
    risk_level: Optional[RiskLevel] = None
    fresh_wallet_percentage: Number = None
    fresh_wallets_1d: NumberOrText = None
    fresh_wallets_7d: NumberOrText = None
    lp_percentage: Number = None

    # links
    twitter_url: Text = None
    website_url: Text = None
    dexscreener_url: Text = None
    defined_url: Text = None

    # classification
    signal_type: Optional[SignalType] = None
    alert_type: Text = None
    source: Text = None

    analysis: Optional[Dict[str, Any]] = None


class CreateResult(BaseModel):
    signal_id: str
    total_signals: int
