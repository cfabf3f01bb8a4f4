"""
Field-name translation between the external (camelCase) signal schema and
the internal (snake_case) storage schema.

The table below is the only place field names are paired. Both the read and
write paths go through it, and it is total over the documented schema.
Internal names are always ``to_snake_case(external)``.
"""
import re
from typing import Any, Dict, List, Mapping, Tuple

FIELD_MAP: Dict[str, str] = {
    # identity
    'id': 'id',
    'timestamp': 'timestamp',
    # required
    'tokenSymbol': 'token_symbol',
    'tokenAddress': 'token_address',
    'walletAddress': 'wallet_address',
    'winPercentage': 'win_percentage',
    'buySize': 'buy_size',
    'entryMarketCap': 'entry_market_cap',
    'currentROI': 'current_roi',
    # token details
    'tokenName': 'token_name',
    'tokenImage': 'token_image',
    'hasImage': 'has_image',
    'marketCap': 'market_cap',
    'fdv': 'fdv',
    'priceUSD': 'price_usd',
    'volume24h': 'volume_24h',
    'percentChange1h': 'percent_change_1h',
    'buys24h': 'buys_24h',
    'sells24h': 'sells_24h',
    'liquidityAmount': 'liquidity_amount',
    'liquidityRatio': 'liquidity_ratio',
    'age': 'age',
    'totalHolders': 'total_holders',
    # risk
    'riskLevel': 'risk_level',
    'freshWalletPercentage': 'fresh_wallet_percentage',
    'freshWallets1d': 'fresh_wallets_1d',
    'freshWallets7d': 'fresh_wallets_7d',
    'lpPercentage': 'lp_percentage',
    # links
    'twitterUrl': 'twitter_url',
    'websiteUrl': 'website_url',
    'dexscreenerUrl': 'dexscreener_url',
    'definedUrl': 'defined_url',
    # classification
    'signalType': 'signal_type',
    'alertType': 'alert_type',
    'source': 'source',
    # provider analysis blobs, keyed by provider name
    'analysis': 'analysis',
}

REVERSE_FIELD_MAP: Dict[str, str] = {v: k for k, v in FIELD_MAP.items()}

EXTERNAL_FIELDS: Tuple[str, ...] = tuple(FIELD_MAP)
INTERNAL_FIELDS: Tuple[str, ...] = tuple(REVERSE_FIELD_MAP)

REQUIRED_FIELDS: Tuple[str, ...] = (
    'tokenSymbol',
    'tokenAddress',
    'walletAddress',
    'winPercentage',
    'buySize',
    'entryMarketCap',
    'currentROI',
)

_LOWER_UPPER = re.compile(r'([a-z0-9])([A-Z])')
_ACRONYM_WORD = re.compile(r'([A-Z]+)([A-Z][a-z])')
_LETTER_DIGIT = re.compile(r'([A-Za-z])([0-9])')


def to_snake_case(name: str) -> str:
    """currentROI -> current_roi, volume24h -> volume_24h."""
    name = _LOWER_UPPER.sub(r'\1_\2', name)
    name = _ACRONYM_WORD.sub(r'\1_\2', name)
    name = _LETTER_DIGIT.sub(r'\1_\2', name)
    return name.lower()


def unknown_fields(payload: Mapping[str, Any]) -> List[str]:
    """External keys that have no internal counterpart."""
    return sorted(k for k in payload if k not in FIELD_MAP)


def missing_required(payload: Mapping[str, Any]) -> List[str]:
    return [k for k in REQUIRED_FIELDS if payload.get(k) is None]


def to_internal(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate an external record to internal names; every column present, absent -> None."""
    return {internal: record.get(external) for external, internal in FIELD_MAP.items()}


def to_external(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate an internal row back to external names."""
    return {external: row.get(internal) for internal, external in REVERSE_FIELD_MAP.items()}
