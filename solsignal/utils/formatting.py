"""Display formatting helpers shared by the dashboard and API consumers."""
import time
from typing import Optional


def now_ms() -> int:
    """Current time in milliseconds since epoch."""
    return int(time.time() * 1000)


def format_time_ago(timestamp_ms: int, now: Optional[int] = None) -> str:
    """Render a millisecond timestamp as 'Just now', '5m ago', '3h ago' or '2d ago'."""
    diff = (now if now is not None else now_ms()) - timestamp_ms
    minutes = diff // 60000
    hours = diff // 3600000
    days = diff // 86400000

    if minutes < 1:
        return 'Just now'
    if minutes < 60:
        return f'{minutes}m ago'
    if hours < 24:
        return f'{hours}h ago'
    return f'{days}d ago'


def format_usd(num: Optional[float]) -> str:
    """Abbreviate a dollar amount: $1.2B, $3.4M, $56K, $7.89."""
    if num is None:
        return 'N/A'
    if num >= 1_000_000_000:
        return f'${num / 1_000_000_000:.1f}B'
    if num >= 1_000_000:
        return f'${num / 1_000_000:.1f}M'
    if num >= 1_000:
        return f'${num / 1_000:.0f}K'
    return f'${num:.2f}'


def format_volume(volume: float) -> str:
    """Leaderboard volume: $2.1M, $950K, or the raw dollar figure."""
    if volume >= 1_000_000:
        return f'${volume / 1_000_000:.1f}M'
    if volume >= 1_000:
        return f'${volume / 1_000:.0f}K'
    return f'${volume:g}'


def format_sol(amount: Optional[float]) -> str:
    if amount is None:
        return 'N/A'
    return f'{amount:.2f} SOL'


def format_roi(roi: Optional[float]) -> str:
    roi = roi or 0.0
    sign = '+' if roi >= 0 else ''
    return f'{sign}{roi:.1f}%'


def format_price(price: Optional[float]) -> str:
    if price is None:
        return '$N/A'
    return f'${price:.6f}'


def format_address(address: str) -> str:
    """Shorten a wallet address to its first and last four characters."""
    if len(address) <= 11:
        return address
    return f'{address[:4]}...{address[-4:]}'
