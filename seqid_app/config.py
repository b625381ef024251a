from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """
    
    # Environment
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    
    # Application
    app_name: str = "Sequential ID Tracker"
    app_version: str = "1.0.0"
    
    # Storage settings
    storage_backend: str = "sql"  # Options: "sql", "redis", "memory"
    database_url: str = "sqlite:///./seqid.db"
    redis_url: str = "redis://localhost:6379/0"
    redis_key_prefix: str = "seqid:"
    
    # Write lock shared by every process on one backend
    storage_lock_ttl_seconds: float = 30.0
    storage_lock_wait_seconds: float = 10.0
    storage_lock_poll_seconds: float = 0.05
    
    # Blob names (one JSON document each)
    users_store_name: str = "PA_USERS"
    records_store_name: str = "PA_RECORDS"
    analytics_store_name: str = "PA_ANALYTICS"
    
    # Clock. None means the zone of the running process
    timezone: Optional[str] = None
    
    # Sessions
    heartbeat_interval_seconds: int = 30
    user_id_prefix: str = "MINDA"
    user_id_digits: int = 3
    
    # Admin role. Disabled until a password is configured
    admin_user_id: str = "MINDA077"
    admin_password: Optional[SecretStr] = None
    
    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
