"""Smart-wallet leaderboard and community feed, served from static fixtures."""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from config.settings import get_fixtures
from solsignal.utils.constants import HIGH_WIN_PERCENTAGE
from solsignal.utils.formatting import now_ms


class LeaderboardFilter(str, Enum):
    ALL = "All"
    HIGH_WIN = "High Win %"
    TRENDING = "Trending"
    VERIFIED = "Verified"


class FeedItemType(str, Enum):
    TAG = "tag"
    TRADE = "trade"
    ALERT = "alert"


class _Camel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SmartWallet(_Camel):
    id: str
    address: str
    win_percentage: float
    volume: float
    trade_count: int
    verified: bool
    rank: int


class CommunityFeedItem(_Camel):
    id: str
    type: FeedItemType
    username: str
    content: str
    timestamp: int
    wallet_address: Optional[str] = None
    token_symbol: Optional[str] = None
    likes: Optional[int] = None


def smart_wallets(
    tab: LeaderboardFilter = LeaderboardFilter.ALL,
    query: Optional[str] = None,
) -> List[SmartWallet]:
    """
    Leaderboard rows for a tab and optional address search.

    ``Trending`` orders by volume; every other tab keeps rank order.
    """
    wallets = [SmartWallet(**w) for w in get_fixtures().get('smart_wallets', [])]
    wallets.sort(key=lambda w: w.rank)

    if query:
        needle = query.lower()
        wallets = [w for w in wallets if needle in w.address.lower()]

    if tab == LeaderboardFilter.HIGH_WIN:
        wallets = [w for w in wallets if w.win_percentage >= HIGH_WIN_PERCENTAGE]
    elif tab == LeaderboardFilter.VERIFIED:
        wallets = [w for w in wallets if w.verified]
    elif tab == LeaderboardFilter.TRENDING:
        wallets.sort(key=lambda w: w.volume, reverse=True)
    return wallets


def community_feed(now: Optional[int] = None) -> List[CommunityFeedItem]:
    """Feed items newest first; fixture ages are relative to ``now`` (ms)."""
    now = now if now is not None else now_ms()
    items = []
    for raw in get_fixtures().get('community_feed', []):
        raw = dict(raw)
        raw['timestamp'] = now - int(raw.pop('age_minutes', 0)) * 60000
        items.append(CommunityFeedItem(**raw))
    items.sort(key=lambda i: i.timestamp, reverse=True)
    return items
