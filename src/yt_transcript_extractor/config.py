"""Configuration via environment variables."""

from enum import Enum
from pydantic_settings import BaseSettings


class Transport(str, Enum):
    STDIO = "stdio"
    STREAMABLE_HTTP = "streamable-http"


class Settings(BaseSettings):
    model_config = {"env_prefix": "YT_EXTRACTOR_"}

    youtube_base_url: str = "https://www.youtube.com"
    client_name: str = "WEB"
    client_version: str = "2.20240101.00.00"
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    accept_language: str = "en-US,en;q=0.9"
    http_timeout: float = 30.0
    dom_enabled: bool = False
    dom_ready_timeout: float = 10.0
    dom_poll_interval: float = 0.25
    browser_headless: bool = True
    rate_limit_per_minute: int = 30
    transport: Transport = Transport.STDIO
