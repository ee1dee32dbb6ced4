from typing import Literal

from ..settings import Settings

class DevelopmentSettings(Settings):
    debug: bool = True
    database_url: str = "duckdb://./data/cartoffer_dev.duckdb"
    offer_store: Literal["memory", "duckdb"] = "duckdb"
