"""Configuration via environment variables."""

from enum import Enum
from pydantic_settings import BaseSettings

from caption_search.models import DisplayMode, MarkerOptions


class Transport(str, Enum):
    STDIO = "stdio"
    STREAMABLE_HTTP = "streamable-http"


class Settings(BaseSettings):
    model_config = {"env_prefix": "CAPTION_SEARCH_"}

    min_query_length: int = 3
    marker_color: str = "#ffffff"
    marker_width: int = 2
    marker_display: DisplayMode = "line"
    marker_height: str | None = None
    ready_timeout_seconds: float = 10.0
    ready_poll_interval_seconds: float = 0.1
    http_timeout_seconds: float = 30.0
    cache_max_size: int = 100
    cache_ttl_seconds: int = 3600
    rate_limit_per_minute: int = 30
    transport: Transport = Transport.STDIO

    def marker_options(self, **overrides) -> MarkerOptions:
        values = {
            "color": self.marker_color,
            "width": self.marker_width,
            "display": self.marker_display,
            "height": self.marker_height,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return MarkerOptions(**values)
