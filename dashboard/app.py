"""Streamlit dashboard for SolSignal."""

import streamlit as st
import pandas as pd
import requests
from datetime import datetime

from config.settings import get_settings
from solsignal.errors import QuoteError
from solsignal.feed import FeedError, fetch_signals
from solsignal.quickbuy import ApiQuoteClient, QuoteDebouncer, QuoteRequest, is_valid_amount
from solsignal.utils.constants import PRESET_AMOUNTS_SOL, SLIPPAGE_OPTIONS_PERCENT, MAX_BUY_SOL
from solsignal.utils.formatting import (
    format_address,
    format_price,
    format_roi,
    format_sol,
    format_time_ago,
    format_usd,
    format_volume,
    now_ms,
)

settings = get_settings()
API_URL = settings.API_URL

SIGNAL_FILTERS = ["All Signals", "Buy Signals", "Sell Signals", "High ROI", "New Tokens"]
LEADERBOARD_TABS = ["All", "High Win %", "Trending", "Verified"]


# Helper function to apply the feed filter client-side
def filter_signals(signals, selected):
    """Filter the polled signal list for display"""
    if selected == "Buy Signals":
        return [s for s in signals if s.get("signalType") == "buy"]
    if selected == "Sell Signals":
        return [s for s in signals if s.get("signalType") == "sell"]
    if selected == "High ROI":
        return [s for s in signals if (s.get("currentROI") or 0) >= 100]
    if selected == "New Tokens":
        cutoff = now_ms() - 3600000
        return [s for s in signals if (s.get("timestamp") or 0) >= cutoff]
    return signals


# Helper function to format risk levels consistently
def format_risk(level):
    """Format risk levels for consistent display"""
    risk_mapping = {"LOW": "🟢 Low", "MEDIUM": "🟡 Medium", "HIGH": "🔴 High"}
    return risk_mapping.get(level, "⚪ Unknown")


# Helper function to format signal types consistently
def format_signal_type(signal_type):
    """Format signal types for consistent display"""
    type_mapping = {"buy": "📈 BUY", "sell": "📉 SELL", "alert": "⚠️ ALERT"}
    return type_mapping.get(signal_type, "📊 SIGNAL")


def render_signal_card(signal):
    """One signal as a bordered card with a quick-buy button"""
    with st.container(border=True):
        col1, col2, col3 = st.columns([3, 2, 1])
        with col1:
            name = signal.get("tokenName") or ""
            st.markdown(f"**${signal.get('tokenSymbol') or '???'}** {name}")
            st.caption(
                f"{format_signal_type(signal.get('signalType'))} · "
                f"{format_time_ago(signal.get('timestamp') or now_ms())} · "
                f"wallet {format_address(signal.get('walletAddress') or '')}"
            )
        with col2:
            st.metric("ROI", format_roi(signal.get("currentROI")))
        with col3:
            if st.button("⚡ Buy", key=f"buy_{signal.get('id')}"):
                st.session_state.quick_buy_signal = signal

        c1, c2, c3, c4 = st.columns(4)
        c1.write(f"MC {format_usd(signal.get('marketCap'))}")
        c2.write(f"Entry {format_usd(signal.get('entryMarketCap'))}")
        c3.write(f"Size {format_sol(signal.get('buySize'))}")
        c4.write(f"Win {signal.get('winPercentage') or 0:.0f}%")

        c1, c2, c3, c4 = st.columns(4)
        c1.write(f"Price {format_price(signal.get('priceUSD'))}")
        c2.write(f"Vol {format_usd(signal.get('volume24h'))}")
        c3.write(f"Liq {format_usd(signal.get('liquidityAmount'))}")
        c4.write(format_risk(signal.get("riskLevel")))

        links = [
            (label, signal.get(key))
            for label, key in [("Twitter", "twitterUrl"), ("Website", "websiteUrl"),
                               ("DexScreener", "dexscreenerUrl"), ("Defined", "definedUrl")]
            if signal.get(key)
        ]
        if links:
            st.markdown(" · ".join(f"[{label}]({url})" for label, url in links))


@st.fragment(run_every=settings.FEED_POLL_SECONDS)
def signal_feed(selected):
    """Live feed, re-polled on a fixed interval"""
    try:
        signals = fetch_signals(API_URL)
        st.session_state.signals = signals
        st.session_state.feed_error = None
    except FeedError as e:
        st.session_state.feed_error = str(e)
        signals = st.session_state.get("signals", [])

    if st.session_state.get("feed_error"):
        st.error("Failed to load signals")

    visible = filter_signals(signals, selected)
    if not visible:
        st.info("Waiting for signals...")
    for signal in visible:
        render_signal_card(signal)


def leaderboard():
    st.subheader("🏆 Smart Wallet Leaderboard")
    query = st.text_input("Search wallets...", key="wallet_search")
    tab = st.radio("Filter", LEADERBOARD_TABS, horizontal=True, label_visibility="collapsed")
    try:
        response = requests.get(f"{API_URL}/wallets/leaderboard",
                                params={"filter": tab, "q": query or None}, timeout=5)
        response.raise_for_status()
        wallets = response.json()
    except (requests.RequestException, ValueError) as e:
        st.error(f"❌ Leaderboard unavailable: {str(e)[:100]}")
        return

    if not wallets:
        st.caption("No wallets match")
        return
    df = pd.DataFrame(wallets)
    df["volume"] = df["volume"].map(format_volume)
    df["winPercentage"] = df["winPercentage"].map(lambda v: f"{v:.0f}%")
    df["verified"] = df["verified"].map(lambda v: "✅" if v else "")
    st.dataframe(
        df[["rank", "address", "winPercentage", "volume", "tradeCount", "verified"]],
        hide_index=True,
        use_container_width=True,
    )


def community():
    st.subheader("👥 Community Feed")
    try:
        response = requests.get(f"{API_URL}/community/feed", timeout=5)
        response.raise_for_status()
        items = response.json()
    except (requests.RequestException, ValueError) as e:
        st.error(f"❌ Feed unavailable: {str(e)[:100]}")
        return

    for item in items:
        with st.container(border=True):
            st.markdown(f"**{item['username']}** · `{item['type']}` · {format_time_ago(item['timestamp'])}")
            st.write(item["content"])
            st.caption(f"❤️ {item.get('likes') or 0}")


def get_quote_debouncer():
    """One debouncer per browser session; survives reruns"""
    if "quote_debouncer" not in st.session_state:
        st.session_state.quote_debouncer = QuoteDebouncer(ApiQuoteClient(API_URL))
    return st.session_state.quote_debouncer


def quick_buy(signal):
    """Quote panel; signing happens in the user's wallet"""
    st.subheader(f"⚡ Quick Buy ${signal.get('tokenSymbol')}")
    st.caption(f"Price: {format_price(signal.get('priceUSD'))}")

    preset = st.radio("Amount (SOL)", [*PRESET_AMOUNTS_SOL, "Custom"], horizontal=True, index=1)
    if preset == "Custom":
        amount = st.number_input("Custom amount", min_value=0.0, max_value=MAX_BUY_SOL, value=0.5)
    else:
        amount = float(preset)
    slippage = st.radio("Slippage %", SLIPPAGE_OPTIONS_PERCENT, horizontal=True, index=1)

    debouncer = get_quote_debouncer()
    if not is_valid_amount(amount):
        debouncer.cancel()
        st.session_state.quote_request = None
        st.warning(f"Amount must be between 0 and {MAX_BUY_SOL:g} SOL")
    else:
        request = QuoteRequest(signal.get("tokenAddress"), amount, slippage)
        if st.session_state.get("quote_request") != request:
            st.session_state.quote_request = request
            st.session_state.swap_transaction = None
            debouncer.submit(request)
        quote_panel(debouncer)

    if st.button("Close"):
        debouncer.cancel()
        st.session_state.quick_buy_signal = None
        st.session_state.quote_request = None
        st.rerun()


@st.fragment(run_every=settings.QUOTE_DEBOUNCE_SECONDS)
def quote_panel(debouncer):
    """Shows the latest debounced quote; refreshed while a quote is pending"""
    if debouncer.loading:
        st.info("⏳ Fetching quote...")
        return
    if debouncer.error:
        st.error(f"❌ {debouncer.error}")
        return
    quote = debouncer.quote
    if quote is None:
        return

    col1, col2, col3 = st.columns(3)
    col1.metric("You receive", f"{quote.out_amount:,.6f}")
    col2.metric("Tokens / SOL", f"{quote.price:,.6f}")
    col3.metric("Price impact", f"{quote.price_impact_pct:.2f}%")

    public_key = st.text_input("Wallet public key", key="wallet_public_key")
    if st.button("Build transaction", type="primary", disabled=not public_key):
        try:
            st.session_state.swap_transaction = debouncer.client.build_swap_transaction(quote.raw, public_key)
        except QuoteError as e:
            st.error(f"❌ Swap failed: {e.details}")
            return
    if st.session_state.get("swap_transaction"):
        st.success("✅ Unsigned transaction ready. Sign and send it from your wallet.")
        st.code(st.session_state.swap_transaction, language=None)


st.set_page_config(page_title="SolSignal", layout="wide")
st.title("📡 SolSignal")

try:
    health = requests.get(f"{API_URL}/health", timeout=5).json()
    status = "🟢 API healthy" if health.get("status") == "healthy" else "🔴 API unhealthy"
except (requests.RequestException, ValueError):
    status = "🔴 API unreachable"
st.sidebar.markdown(f"**Status:** {status}")
st.sidebar.caption(f"Updated {datetime.now().strftime('%H:%M:%S')}")

left, center, right = st.columns([1, 2, 1])
with left:
    leaderboard()
with center:
    st.subheader("🟢 Live Signal Feed")
    selected_filter = st.selectbox("Filter", SIGNAL_FILTERS, label_visibility="collapsed")
    if st.session_state.get("quick_buy_signal"):
        quick_buy(st.session_state.quick_buy_signal)
        st.divider()
    signal_feed(selected_filter)
with right:
    community()
