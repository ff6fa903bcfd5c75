from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).parent.parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="PACKODDS_")

    app_name: str = "PackOdds"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/packodds"

    # Booster reference feed (loaded once at startup)
    booster_data_path: Path = DATA_DIR / "sealed_basic_data.json"
    booster_data_url: str = (
        "https://raw.githubusercontent.com/taw/magic-sealed-data/master/sealed_basic_data.json"
    )

    # Scryfall card catalog
    scryfall_api_url: str = "https://api.scryfall.com"
    card_cache_dir: Path = DATA_DIR / "cards"
    scryfall_page_limit: int = 50
    http_timeout: float = 30.0


settings = Settings()


# =============================================================================
# PAPER-ONLY PRODUCT FILTER
# =============================================================================

# Products whose display name contains any of these (case-sensitive) are
# not sold as paper booster packs and are left out of the results
EXCLUDED_PRODUCT_CATEGORIES = ("Arena", "Promo", "Tournament", "Topper", "Sample")


# =============================================================================
# BOOSTER FEED SAFETY LIMITS
# =============================================================================

# Checked once when the feed is loaded; a product over any limit is rejected
MAX_SHEETS_PER_PRODUCT = 64
MAX_BOOSTERS_PER_PRODUCT = 512
MAX_ENTRIES_PER_SHEET = 10_000
MAX_ROLLS_PER_SHEET = 30
