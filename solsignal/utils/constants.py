"""
Application constants to replace magic numbers throughout the codebase.
"""

# Signal store
MAX_SIGNALS = 100

# Solana units
SOL_MINT = 'So11111111111111111111111111111111111111112'
LAMPORTS_PER_SOL = 1_000_000_000
DEFAULT_TOKEN_DECIMALS = 6

# Quick buy
DEFAULT_SLIPPAGE_PERCENT = 1.0
MAX_BUY_SOL = 100.0
PRESET_AMOUNTS_SOL = (0.1, 0.5, 1.0, 5.0)
SLIPPAGE_OPTIONS_PERCENT = (0.5, 1.0, 3.0)

# CORS
CORS_ALLOW_HEADERS = ['authorization', 'x-client-info', 'apikey', 'content-type']
CORS_ALLOW_METHODS = ['GET', 'POST', 'OPTIONS']
CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': ', '.join(CORS_ALLOW_HEADERS),
    'Access-Control-Allow-Methods': ', '.join(CORS_ALLOW_METHODS),
}

# Leaderboard
HIGH_WIN_PERCENTAGE = 85
