from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Mapbox configuration (geocoding fallback + walking directions)
    mapbox_token: str = ""
    mapbox_base_url: str = "https://api.mapbox.com"

    # OpenStreetMap Nominatim configuration
    nominatim_url: str = "https://nominatim.openstreetmap.org/search"
    user_agent: str = "WalkifyApp/1.0"
    language: str = "uk"

    # API configuration
    api_version: str = "1.0"
    request_timeout_s: float = 10.0
    log_level: str = "INFO"

    # API call limits
    max_api_calls_per_day: int = 1000

    # Search radii
    waypoint_search_radius_m: int = 2000
    exploration_search_radius_m: int = 3000
    name_search_radius_km: float = 50.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
