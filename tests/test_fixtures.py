"""
Tests for the leaderboard and community feed fixtures.
"""
from solsignal.fixtures import FeedItemType, LeaderboardFilter, community_feed, smart_wallets


class TestLeaderboard:

    def test_rank_order(self):
        assert [w.rank for w in smart_wallets()] == [1, 2, 3, 4, 5]

    def test_high_win(self):
        wallets = smart_wallets(LeaderboardFilter.HIGH_WIN)
        assert [w.address for w in wallets] == ["0x7e3f...8a21", "WhalHuntr4", "MemeKing"]

    def test_verified(self):
        assert all(w.verified for w in smart_wallets(LeaderboardFilter.VERIFIED))

    def test_trending_by_volume(self):
        volumes = [w.volume for w in smart_wallets(LeaderboardFilter.TRENDING)]
        assert volumes == sorted(volumes, reverse=True)

    def test_search_is_case_insensitive(self):
        assert [w.address for w in smart_wallets(query="memek")] == ["MemeKing"]
        assert [w.id for w in smart_wallets(query="0X")] == ["1", "3", "5"]

    def test_search_and_filter(self):
        assert [w.id for w in smart_wallets(LeaderboardFilter.VERIFIED, "0x")] == ["1"]

    def test_camel_case_output(self):
        dumped = smart_wallets()[0].model_dump(by_alias=True)
        assert dumped["winPercentage"] == 92
        assert dumped["tradeCount"] == 34


class TestCommunityFeed:

    def test_newest_first(self):
        now = 1_754_321_968_000
        items = community_feed(now=now)
        assert [i.id for i in items] == ["1", "2", "3"]
        assert items[0].timestamp == now - 3 * 60000
        assert items[2].timestamp == now - 43 * 60000

    def test_types(self):
        assert {i.type for i in community_feed()} == {FeedItemType.TAG, FeedItemType.TRADE}
