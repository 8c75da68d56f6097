"""Configuration models for the launcher core."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IntentConfig(BaseModel):
    """Configures query intent classification."""

    auto_detect_math: bool = True
    max_exponent: int = Field(default=1000, ge=1)
    max_expression_length: int = Field(default=256, ge=1)


class SearchConfig(BaseModel):
    """Configures source fan-out, traversal bounds and result limits."""

    max_results: int = Field(default=20, ge=1)
    directory_depth: int = Field(default=3, ge=1)
    directory_result_cap: int = Field(default=50, ge=1)
    app_index_depth: int = Field(default=2, ge=1)
    app_index_ttl_seconds: float = Field(default=60.0, ge=0.0)
    include_cwd: bool = False
    extra_directories: list[str] = Field(default_factory=list)
    parallel_sources: bool = True
    max_workers: int = Field(default=4, ge=1, le=16)
    target_latency_ms: float = Field(default=200.0, gt=0.0)


class ClipboardConfig(BaseModel):
    """Configures the clipboard history and its background poller."""

    capacity: int = Field(default=30, ge=1)
    poll_interval_seconds: float = Field(default=0.8, gt=0.0)
    preview_chars: int = Field(default=45, ge=4)
    sensitive_length_threshold: int = Field(default=24, ge=1)
    masked_label: str = "[sensitive content hidden]"


class ActivationConfig(BaseModel):
    """Configures how chosen results are dispatched."""

    copy_results_to_clipboard: bool = False


class LauncherSettings(BaseSettings):
    """Process-level settings with `CLAUNCHER_` environment overrides.

    Nested sections use `__` as delimiter, e.g.
    `CLAUNCHER_SEARCH__INCLUDE_CWD=true`.
    """

    model_config = SettingsConfigDict(
        env_prefix="CLAUNCHER_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = "INFO"
    platform: str | None = None
    clipboard_poller_enabled: bool = True
    intent: IntentConfig = Field(default_factory=IntentConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    clipboard: ClipboardConfig = Field(default_factory=ClipboardConfig)
    activation: ActivationConfig = Field(default_factory=ActivationConfig)
