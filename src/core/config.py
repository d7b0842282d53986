from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Log level: DEBUG, INFO, WARNING, ERROR")
    LOG_JSON: bool = Field(default=True, description="Render logs as JSON (False = console renderer)")
    
    # ========================================================================
    # Azure Storage (data plane)
    # ========================================================================
    # Sent as x-ms-version on every request; pins the service behaviour
    STORAGE_API_VERSION: str = "2018-11-09"
    # Endpoint suffix for the public cloud. Sovereign clouds use e.g.
    # core.chinacloudapi.cn or core.usgovcloudapi.net
    STORAGE_BASE_URI: str = "core.windows.net"
    STORAGE_REQUEST_TIMEOUT: float = Field(default=30.0, description="Per-request timeout in seconds")
    
    # Retrying sender
    STORAGE_RETRY_ATTEMPTS: int = Field(default=3, ge=1, description="Total attempts including the first")
    STORAGE_RETRY_DELAY: float = Field(default=1.0, ge=0, description="Base backoff, doubled per retry")
    STORAGE_RETRY_MAX_DELAY: float = Field(default=30.0, ge=0)
    
    # Optional override for the User-Agent header
    STORAGE_USER_AGENT: Optional[str] = None
    
    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
