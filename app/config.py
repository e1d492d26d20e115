import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    # Remote ERP (Frappe/ERPNext) connection
    erp_api_url: str = os.getenv("ERP_API_URL", os.getenv("NEXT_PUBLIC_ERP_API_URL", ""))
    erp_api_key: str = os.getenv("ERP_API_KEY", "")
    erp_api_secret: str = os.getenv("ERP_API_SECRET", "")
    erp_timeout_seconds: float = float(os.getenv("ERP_TIMEOUT_SECONDS", "30"))

    # Two-step listing: page size for name listings, worker pool for detail fetches
    erp_list_limit: int = int(os.getenv("ERP_LIST_LIMIT", "1000"))
    erp_fetch_concurrency: int = int(os.getenv("ERP_FETCH_CONCURRENCY", "8"))

    # Document defaults
    default_company: str = os.getenv("ERP_DEFAULT_COMPANY", "")
    default_currency: str = os.getenv("ERP_DEFAULT_CURRENCY", "ETB")
    default_country: str = os.getenv("ERP_DEFAULT_COUNTRY", "Ethiopia")
    maintenance_team: str = os.getenv("ASSET_MAINTENANCE_TEAM", "PC Maintainers")

    # Point of sale
    pos_item_group: str = os.getenv("POS_ITEM_GROUP", "Finished Goods")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_format: str = os.getenv("LOG_FORMAT", "text")


settings = Settings()
