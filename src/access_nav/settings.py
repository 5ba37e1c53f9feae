"""Environment-driven settings for the access-nav server."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_reports_path() -> str:
    return str(Path.home() / ".cache" / "access-nav" / "reports.json")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ACCESS_NAV_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    user_agent: str = "access-nav/1.0"
    log_level: str = "INFO"

    osrm_base_url: str = "https://router.project-osrm.org"
    osrm_profile: str = "foot"
    routing_timeout_s: float = Field(default=15.0, gt=0)

    nominatim_url: str = "https://nominatim.openstreetmap.org"
    geocode_timeout_s: float = Field(default=10.0, gt=0)
    search_country: str = "np"
    search_debounce_s: float = Field(default=0.4, ge=0)
    reverse_geocode_interval_s: float = Field(default=1.0, ge=0)

    overpass_servers: list[str] = [
        "https://overpass-api.de/api/interpreter",
        "https://overpass.kumi.systems/api/interpreter",
        "https://overpass.openstreetmap.ru/api/interpreter",
    ]
    overpass_timeout_s: float = Field(default=45.0, gt=0)
    hazard_radius_m: float = Field(default=3000.0, gt=0, le=20_000)

    reports_path: str = Field(default_factory=_default_reports_path)
    report_ttl_hours: float = Field(default=48.0, gt=0)

    base_elevation_m: float = 780.0
    elevation_amplitude_m: float = 15.0
    elevation_frequency: float = 0.3
    gpx_placeholder_elevation_m: float = 1300.0


settings = Settings()
