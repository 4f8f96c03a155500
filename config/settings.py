from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Rugcheck.xyz (free, no key)
    rugcheck_base_url: str = "https://api.rugcheck.xyz/v1"
    rugcheck_max_rps: float = 2.0
    rugcheck_timeout_sec: float = 15.0

    # gmgn.ai holder analytics
    gmgn_max_rps: float = 1.5
    gmgn_proxy_url: str = ""  # SOCKS5 or HTTP proxy, helps against Cloudflare blocks
    gmgn_holders_limit: int = 100

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False
    log_file: str = "logs/screen_{time:YYYY-MM-DD}.log"  # empty string disables file sink


settings = Settings()
