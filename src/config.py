from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "EcoScore"
    debug: bool = False
    log_level: str = "INFO"

    # Timeouts
    http_timeout: int = 30
    lighthouse_timeout: int = 120

    # Lighthouse
    lighthouse_binary: str = "lighthouse"
    chrome_flags: str = "--headless --no-sandbox --disable-gpu"

    # External lookups
    green_check_url: str = "https://api.thegreenwebfoundation.org/api/v3/greencheck/{domain}"
    user_agent_identifier: str = "littleforestwebsitecarbon"
    geoip_url: str = "https://freegeoip.app/json/{ip}"

    # Domains without a scheme get this one
    default_scheme: str = "http://"

    # Data centre grid intensity overrides (ISO alpha-3 -> gCO2e/kWh)
    grid_intensity: dict[str, float] = {}


settings = Settings()
