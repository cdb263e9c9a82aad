import os

# Loaded from environment variables; defaults suit local development.
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://./salesdesk.sqlite3")
API_PREFIX: str = os.getenv("API_PREFIX", "")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_NAMESPACES: list[str] = [
    ns.strip() for ns in os.getenv("LOG_NAMESPACES", "").split(",") if ns.strip()
]

DEFAULT_PAGE: int = 1
DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))

# Share of a customer's due amount booked as delivery expense
CUSTOMER_EXPENSE_RATE: float = float(os.getenv("CUSTOMER_EXPENSE_RATE", "0.10"))
