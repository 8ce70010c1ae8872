from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="POKEBINDER_")

    app_name: str = "PokeBinder"
    debug: bool = False

    catalog_api_url: str = "https://api.pokemontcg.io/v2"

    # Requests still work without a key, but the provider rate-limits them hard
    catalog_api_key: str = ""

    catalog_timeout: float = 30.0

    storage_path: str = ".pokebinder/collection.json"


settings = Settings()


# =============================================================================
# LIST VIEW DEFAULTS
# =============================================================================

# Page size requested from the catalog (and assumed when a response omits it)
API_PAGE_SIZE = 40

# Page size for views over locally held lists (collection, wishlist)
CLIENT_SIDE_PAGE_SIZE = 20

# Quiescence window before a typed search term is committed
SEARCH_DEBOUNCE_MS = 500

DEFAULT_SIBLING_COUNT = 1

DEFAULT_BROWSE_SORT = "-releaseDate"
DEFAULT_LOCAL_SORT = "name"
