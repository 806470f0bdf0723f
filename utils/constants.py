APP_NAME = "Bitcoin Wallet"
APP_WIDTH = 480
APP_HEIGHT = 720
DB_FILE = "transactions.db"

PRICE_ENDPOINT = "https://api.coindesk.com/v1/bpi/currentprice.json"
PRICE_UPDATED_FORMAT = "%b %d, %Y %H:%M:%S %Z"
PRICE_REFRESH_HOURS = 1
REQUEST_TIMEOUT = 30

PAGE_SIZE = 20
BTC_FRACTION_DIGITS = 8

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

TRANSACTION_TYPES = ("income", "expense")
EXPENSE_CATEGORIES = ("groceries", "taxi", "electronics", "restaurant", "other")

DEFAULT_SETTINGS = [
    ("appearance_mode", "system"),
]
