"""Application configuration models with Pydantic validation."""

from pydantic import BaseModel, Field


class SummarizerConfig(BaseModel):
    """Extractive summarizer tuning."""

    target_length: int = Field(
        default=1500,
        ge=50,
        le=100_000,
        description="Maximum summary length in characters",
    )
    quick_mode_threshold: int = Field(
        default=10_000,
        ge=1000,
        description="Inputs longer than this skip sentence scoring",
    )
    max_sentences: int = Field(
        default=500,
        ge=1,
        description="Sentence count above which quick mode is used",
    )
    min_sentence_length: int = Field(
        default=10,
        ge=0,
        description="Sentences this short or shorter are dropped as noise",
    )
    batch_size: int = Field(
        default=50,
        ge=1,
        description="Sentences scored per batch",
    )
    keyword_score_multiplier: int = Field(
        default=2,
        ge=0,
        description="Points per matched importance keyword",
    )
    max_keyword_score: int = Field(
        default=10,
        ge=0,
        description="Cap on keyword points per sentence",
    )
    cache_capacity: int = Field(
        default=128,
        ge=1,
        le=10_000,
        description="Maximum cached summaries before LRU eviction",
    )


class AppConfig(BaseModel):
    """Root application configuration.

    Loaded from config.yaml and validated with Pydantic.
    """

    prioritization_config_path: str = Field(
        default="config/prioritization.yaml",
        description="YAML or JSON file with weights, risk matrices and keyword tables",
    )
    summarizer: SummarizerConfig = Field(
        default_factory=SummarizerConfig,
        description="Summarizer settings",
    )
    port: int = Field(
        default=5050,
        ge=1024,
        le=65535,
        description="Port for the Flask server",
    )
    debug: bool = Field(
        default=False,
        description="Enable Flask debug mode",
    )
