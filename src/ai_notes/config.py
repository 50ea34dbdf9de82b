"""
Configuration management for AI Notes.

Uses Pydantic for validation and pydantic-settings for environment variable support.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


VALID_STYLES = ("concise", "bullet", "detailed")


class ProviderConfig(BaseSettings):
    """Network summarization provider configuration.

    Credentials are read from the conventional unprefixed environment
    variables (HUGGINGFACE_API_KEY, OPENAI_API_KEY).
    """

    model_config = SettingsConfigDict(env_prefix="")

    # Hugging Face Inference API (provider-a)
    huggingface_api_key: Optional[str] = Field(default=None, description="Hugging Face API token")
    huggingface_models: list[str] = Field(
        default_factory=lambda: ["facebook/bart-large-cnn", "sshleifer/distilbart-cnn-12-6"],
        description="Models tried in order",
    )
    huggingface_base_url: str = Field(
        default="https://api-inference.huggingface.co/models",
        description="Inference API base URL",
    )

    # OpenAI chat completions (provider-b)
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    openai_model: str = Field(default="gpt-3.5-turbo", description="OpenAI model for summarization")
    openai_base_url: str = Field(default="https://api.openai.com/v1", description="OpenAI API base URL")

    timeout_seconds: float = Field(default=30.0, gt=0, le=300, description="Request timeout")

    @field_validator("huggingface_api_key", "openai_api_key")
    @classmethod
    def blank_key_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty credentials as not configured."""
        if v is None:
            return None
        v = v.strip()
        return v or None


class SummarizerConfig(BaseSettings):
    """Summarization engine configuration."""

    model_config = SettingsConfigDict(env_prefix="SUMMARIZER_")

    default_max_length: int = Field(default=150, ge=10, le=2000, description="Default summary size")
    default_style: str = Field(default="concise", description="Style: concise, bullet, detailed")

    # Input bounds (trimmed characters)
    min_input_length: int = Field(default=100, ge=1, description="Minimum input length")
    max_input_length: int = Field(default=50_000, ge=1, description="Maximum input length")

    # Retry settings
    max_attempts: int = Field(default=2, ge=1, le=10, description="Attempts for the primary provider")
    backoff_base_ms: int = Field(default=1000, ge=0, description="Base backoff delay")
    backoff_max_ms: int = Field(default=10_000, ge=0, description="Backoff delay ceiling")

    # Extractive engine weighting
    first_sentence_bonus: float = Field(default=1.8, gt=0, description="First sentence multiplier")
    last_sentence_bonus: float = Field(default=1.3, gt=0, description="Last sentence multiplier")
    max_candidate_sentences: int = Field(default=20, ge=1, le=500, description="Sentences considered")

    @field_validator("default_style")
    @classmethod
    def validate_style(cls, v: str) -> str:
        """Validate summary style."""
        v = v.lower().strip()
        if v not in VALID_STYLES:
            raise ValueError(f"Invalid style: {v!r}. Must be one of {list(VALID_STYLES)}")
        return v

    @model_validator(mode="after")
    def validate_bounds(self) -> "SummarizerConfig":
        """Ensure the input bounds are ordered."""
        if self.min_input_length >= self.max_input_length:
            raise ValueError("min_input_length must be smaller than max_input_length")
        return self


class DatabaseConfig(BaseSettings):
    """SQLite database configuration."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    path: str = Field(default="data/ai_notes.db", description="Database file path")
    echo: bool = Field(default=False, description="Echo SQL statements")

    @field_validator("path")
    @classmethod
    def ensure_directory_exists(cls, v: str) -> str:
        """Ensure the database directory exists."""
        if v != ":memory:":
            Path(v).parent.mkdir(parents=True, exist_ok=True)
        return v


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        description="Log format"
    )

    # File logging
    file_enabled: bool = Field(default=True, description="Enable file logging")
    file_path: str = Field(default="logs/ai_notes.log", description="Log file path")
    rotation: str = Field(default="100 MB", description="Log rotation size")
    retention: str = Field(default="30 days", description="Log retention period")

    # Console logging
    console_enabled: bool = Field(default=True, description="Enable console logging")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v

    @field_validator("file_path")
    @classmethod
    def ensure_directory_exists(cls, v: str) -> str:
        """Ensure the log directory exists."""
        Path(v).parent.mkdir(parents=True, exist_ok=True)
        return v


class WebConfig(BaseSettings):
    """Web API configuration."""

    model_config = SettingsConfigDict(env_prefix="WEB_")

    host: str = Field(default="127.0.0.1", description="Web server host")
    port: int = Field(default=5000, ge=1, le=65535, description="Web server port")
    debug: bool = Field(default=False, description="Debug mode")
    secret_key: str = Field(default="dev-secret-key", description="Secret key for sessions")
    admin_token: Optional[str] = Field(default=None, description="Token required by admin endpoints")

    # Per-user summarization quota
    rate_limit_max_requests: int = Field(default=20, ge=1, description="Summaries per window")
    rate_limit_window_seconds: int = Field(default=3600, ge=1, description="Quota window")

    # Summary reuse
    summary_cache_minutes: int = Field(default=60, ge=0, description="Reuse summaries younger than this")
    summary_max_length: int = Field(default=150, ge=10, le=2000, description="max_length sent to the summarizer")

    # Batch summarization
    batch_max_notes: int = Field(default=10, ge=1, le=100, description="Notes per batch request")
    batch_request_cost: int = Field(default=2, ge=1, description="Quota cost per batched note")


class Config(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="NOTES_",
        case_sensitive=False,
    )

    # Application
    version: str = Field(default="0.1.0", description="Application version")
    app_name: str = Field(default="AI Notes", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    # Sub-configurations
    providers: ProviderConfig = Field(default_factory=ProviderConfig)
    summarizer: SummarizerConfig = Field(default_factory=SummarizerConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    web: WebConfig = Field(default_factory=WebConfig)


# Global configuration instance
_config: Optional[Config] = None

_SECTION_CLASSES = {
    "providers": ProviderConfig,
    "summarizer": SummarizerConfig,
    "database": DatabaseConfig,
    "logging": LoggingConfig,
    "web": WebConfig,
}


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def load_config_from_yaml(yaml_path: str) -> Config:
    """Load configuration from a YAML file.

    Note: Values loaded from YAML take precedence over environment variables.

    Args:
        yaml_path: Path to the YAML configuration file.

    Returns:
        Config instance loaded from the file.
    """
    import yaml

    yaml_file = Path(yaml_path)
    if not yaml_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

    with yaml_file.open("r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}

    main_config = {}
    for key, value in config_dict.items():
        if key not in _SECTION_CLASSES:
            main_config[key] = value

    # Nested sections are built individually so env vars still fill the gaps
    for key, config_class in _SECTION_CLASSES.items():
        main_config[key] = config_class(**(config_dict.get(key) or {}))

    return Config(**main_config)


def reload_config() -> Config:
    """Reload configuration from environment and YAML files."""
    global _config
    _config = None

    config_yaml = Path("config/config.yaml")
    if config_yaml.exists():
        _config = load_config_from_yaml(str(config_yaml))
    else:
        _config = Config()

    return _config


def set_config(config: Optional[Config]) -> None:
    """Replace the global configuration instance (None resets it)."""
    global _config
    _config = config
