# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to cloud project, model names, crawl tuning and logging settings

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="MUNICIPALITY_CRAWLER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
        populate_by_name=True,
    )

    # Google Cloud / Vertex AI
    google_cloud_project: str = Field(
        default="pan-lab-x",
        validation_alias=AliasChoices("GOOGLE_CLOUD_PROJECT", "MUNICIPALITY_CRAWLER_GOOGLE_CLOUD_PROJECT"),
        description="Google Cloud project used for Vertex AI Gemini calls",
    )
    google_cloud_location: str = Field(
        default="global",
        validation_alias=AliasChoices("GOOGLE_CLOUD_LOCATION", "MUNICIPALITY_CRAWLER_GOOGLE_CLOUD_LOCATION"),
        description="Vertex AI region for Gemini models",
    )
    text_model: str = Field(default="gemini-2.0-flash-exp", description="Gemini model used for fact extraction")
    image_model: str = Field(
        default="gemini-3-pro-image-preview", description="Gemini model used for stylized image generation"
    )

    # Scraping target
    wiki_base_url: str = Field(default="https://de.wikipedia.org", description="Base URL of the wiki")
    municipalities_list_url: str = Field(
        default="https://de.wikipedia.org/wiki/Liste_Schweizer_Gemeinden",
        description="Index page listing every Swiss municipality",
    )
    user_agent: str = Field(
        default="municipality-crawler/0.1 (Swiss municipality dataset builder)",
        description="User-Agent header sent with wiki requests",
    )

    # Output
    output_dir: Path = Field(default=Path("output"), description="Directory for the dataset and generated images")
    results_filename: str = Field(default="municipalities.json", description="Dataset file name inside output_dir")
    images_subdir: str = Field(default="images", description="Sub directory of output_dir for stylized images")

    # Crawl behaviour
    batch_size: int = Field(default=5, ge=1, description="Municipalities processed concurrently per batch")
    batch_delay_seconds: float = Field(default=1.0, ge=0.0, description="Pause between batches")
    max_image_attempts: int = Field(default=3, ge=1, description="Attempts per stylized image generation")
    extract_flag: bool = Field(default=True, description="Extract the coat of arms and use it as a reference image")
    skip_processed: bool = Field(default=True, description="Skip municipalities already present in the dataset")
    stylize_images: bool = Field(default=True, description="Generate a stylized diorama for each municipality")

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )
    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")

    @property
    def results_path(self) -> Path:
        return self.output_dir / self.results_filename

    @property
    def images_dir(self) -> Path:
        return self.output_dir / self.images_subdir


# Global config instance - lazy loaded when first accessed by the CLI.
# Components never read it directly; they receive a Config in their constructor.
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
