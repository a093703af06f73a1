import os

# Settings are read from the environment once, at import time.
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://./chai_adda.sqlite3")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
# Comma separated logger prefixes, e.g. "chai_adda.features.reports,chai_adda.main".
# Empty means every namespace is logged.
LOG_NAMESPACES: list[str] = [
    ns.strip() for ns in os.getenv("LOG_NAMESPACES", "").split(",") if ns.strip()
]

# Upper bound for a single report build when served over HTTP.
REPORT_TIMEOUT_SECONDS: float = float(os.getenv("REPORT_TIMEOUT_SECONDS", "30"))

MODEL_MODULES: list[str] = [
    "chai_adda.features.stores.models",
    "chai_adda.features.ledger.models",
    "chai_adda.features.inventory.models",
    "chai_adda.features.orders.models",
]

TORTOISE_ORM_CONFIG = {
    "connections": {"default": DATABASE_URL},
    "apps": {
        "models": {
            "models": MODEL_MODULES,
            "default_connection": "default",
        }
    },
    # Day buckets in reports are UTC dates, so timestamps are stored aware.
    "use_tz": True,
    "timezone": "UTC",
}
