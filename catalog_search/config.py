"""Application configuration for catalog search."""

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SPREADSHEET_ID = "1k5U_YwloyQsad7PT_DmXobkNycJ6bsV0zhE00TLmSIg"


class CatalogConfig(BaseSettings):  # type: ignore[misc]
    """Settings controlling the catalog source, local cache and search behavior."""

    spreadsheet_id: str = Field(
        DEFAULT_SPREADSHEET_ID, description="Key of the public Google Sheets spreadsheet"
    )
    sheet_name: str = Field("REPORTAN", description="Named sheet tried when the default view fails")
    default_gid: int = Field(0, description="Grid id of the default sheet view")
    cache_path: Path = Field(
        Path("~/.cache/catalog-search/store.json"),
        description="JSON file backing the local key/value store",
    )
    request_timeout_s: float = Field(
        10.0, description="Timeout (in seconds) for outbound HTTP requests"
    )
    debounce_s: float = Field(0.3, description="Quiet period before a query edit is ranked")
    fuzzy_threshold: int = Field(60, description="Minimum similarity accepted as a fuzzy match")
    user_agent: str = Field("catalog-search", description="User-Agent sent with HTTP requests")

    model_config = SettingsConfigDict(env_prefix="CATALOG_", env_file=".env", extra="ignore")

    def model_post_init(self, __context: Any) -> None:
        """Normalize the cache path to an absolute location."""

        self.cache_path = self.cache_path.expanduser().resolve()

    @field_validator("spreadsheet_id")
    @classmethod
    def validate_spreadsheet_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("spreadsheet_id must not be blank")
        return value

    @field_validator("request_timeout_s", "debounce_s")
    @classmethod
    def validate_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("durations must be positive")
        return value

    @field_validator("fuzzy_threshold")
    @classmethod
    def validate_threshold(cls, value: int) -> int:
        if not 0 <= value <= 100:
            raise ValueError("fuzzy_threshold must be between 0 and 100")
        return value
