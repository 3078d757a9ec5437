"""Application configuration via pydantic-settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DEPLOYHOOK_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # App
    debug: bool = False

    # Tenant store: apps file lists tenants, webhooks file holds {"<tenant>": {"secret": "..."}}
    apps_file: Path = Path("/etc/deployhook/apps.json")
    webhooks_file: Path = Path("/etc/deployhook/webhooks.json")

    # Log sink
    log_file: Path = Path("/var/log/deployhook/webhook.log")
    log_level: str = "INFO"

    # Deployments run as /home/<tenant>/deploy.sh under the tenant's own user
    home_root: Path = Path("/home")
    deploy_script: str = "deploy.sh"
    sudo_path: str = "sudo"

    # Request limits
    max_payload_bytes: int = 10 * 1024 * 1024
    rate_limit_enabled: bool = True
    webhook_rate_limit: str = "60/minute"


settings = Settings()
