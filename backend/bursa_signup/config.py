from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    environment: str = "development"
    debug: bool = True
    allowed_origins: str = "http://localhost:3000,http://localhost:3001"
    site_url: str = "http://localhost:3001"

    # Front-end routes the API redirects to
    signin_path: str = "/signup"
    wizard_path: str = "/submit"
    manage_path: str = "/already-submitted"
    success_path: str = "/success"

    # Bursa API (status + submission services)
    bursa_api_url: str = "http://localhost:3000"
    bursa_api_timeout_seconds: float = 15.0

    # Supabase (auth + storage)
    supabase_url: str = "https://placeholder.supabase.co"
    supabase_anon_key: str = "placeholder-key"
    supabase_jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_audience: str = "authenticated"
    oauth_provider: str = "google"

    # Session cookies
    session_cookie_name: str = "bursa_session"
    pkce_cookie_name: str = "bursa_pkce"
    pkce_cookie_max_age_seconds: int = 600

    # Media store
    storage_bucket: str = "umkm-images"
    storage_folder: str = "submissions"
    storage_cache_control: str = "3600"
    max_upload_bytes: int = 5 * 1024 * 1024
    max_photos: int = 5

    # Wizard
    wizard_variant: str = "full"  # "full" | "simple"
    max_submissions_full: int = 5
    max_submissions_simple: int = 1
    # Abandoned drafts are dropped after this long without a request.
    wizard_idle_timeout_seconds: int = 2 * 60 * 60

    # Redis (token revocation)
    redis_url: str = "redis://localhost:6379/0"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
