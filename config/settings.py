import os
from dotenv import load_dotenv

load_dotenv()

# CheapShark deals API
CHEAPSHARK_API_URL = os.getenv("CHEAPSHARK_API_URL", "https://www.cheapshark.com/api/1.0")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "30"))

# Retry policy: total attempts = DEFAULT_RETRIES + 1
DEFAULT_RETRIES = 3
RETRY_BACKOFF = float(os.getenv("RETRY_BACKOFF", "0"))  # max jitter in seconds, 0 = no delay

# Fixed exchange rate (USD to EUR)
USD_TO_EUR_RATE = 0.85
DISPLAY_CURRENCY_SYMBOL = "€"

# Favorites persistence
DATABASE_PATH = os.getenv("DATABASE_PATH", "data/game_price_tracker.db")
FAVORITES_KEY = "favorites"

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR")

# Web dashboard
PORT = int(os.getenv("PORT", "8080"))
