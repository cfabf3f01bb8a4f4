"""
Leaderboard and community feed endpoints (static fixtures).
"""
from typing import List, Optional

from fastapi import APIRouter, Query

from solsignal.fixtures import (
    CommunityFeedItem,
    LeaderboardFilter,
    SmartWallet,
    community_feed,
    smart_wallets,
)

router = APIRouter()


@router.get("/wallets/leaderboard", response_model=List[SmartWallet])
def leaderboard(
    tab: LeaderboardFilter = Query(LeaderboardFilter.ALL, alias="filter", description="All, High Win %, Trending, Verified"),
    q: Optional[str] = Query(None, description="Search wallet addresses"),
):
    return smart_wallets(tab, q)


@router.get("/community/feed", response_model=List[CommunityFeedItem])
def feed():
    return community_feed()
