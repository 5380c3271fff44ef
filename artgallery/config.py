from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "Art Gallery"
    debug: bool = False

    # Local state records (one row per browsing session and key)
    database_url: str = "postgresql+asyncpg://localhost:5432/artgallery"

    # Hosted backend: catalog rows, identity, file storage
    supabase_url: str = "https://your-project-url.supabase.co"
    supabase_anon_key: str = ""
    supabase_service_key: str = ""

    # Hosted payment processor
    stripe_secret_key: str = ""
    stripe_api_base: str = "https://api.stripe.com"
    checkout_currency: str = "usd"

    # Where the payment page sends the shopper back to
    frontend_url: str = "http://localhost:5173"

    placeholder_image_url: str = "https://via.placeholder.com/300x300?text=No+Image"
    session_cookie_name: str = "gallery_session"

    # Users treated as administrators regardless of their profile role
    admin_user_ids: list[str] = []

    # Shared secret expected on catalog change webhooks; empty disables the check
    webhook_secret: str = ""

    http_timeout: float = 30.0


settings = Settings()


# =============================================================================
# REMOTE CATALOG LAYOUT
# =============================================================================

ARTWORKS_TABLE = "artworks"
PROFILES_TABLE = "profiles"
ORDERS_TABLE = "orders"
SITE_SETTINGS_TABLE = "site_settings"

# Storage bucket and folder for uploaded artwork images
ARTWORKS_BUCKET = "artworks"
ARTWORK_IMAGES_FOLDER = "artwork-images"

# Home page shows this many featured (or most recent) artworks
FEATURED_LIMIT = 3

# Admin dashboard "recently added" list
DASHBOARD_RECENT_LIMIT = 3
