from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PLATTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Paths
    project_root: Path = Field(
        default_factory=lambda: Path(__file__).parent.parent,
    )
    data_dir: Path | None = Field(default=None)

    @field_validator("data_dir", mode="before")
    @classmethod
    def detect_data_dir(cls, v):
        if v is not None:
            return Path(v)
        return Path(__file__).parent / "data"

    # Parsing
    max_items: int = Field(default=12, ge=1, le=50)
    max_intake_items: int = Field(default=24, ge=1, le=100)
    min_token_length: int = Field(default=3, ge=1)
    max_token_length: int = Field(default=40, ge=2)

    # Fuzzy matching
    fuzzy_max_distance: int = Field(default=2, ge=0)
    fuzzy_min_length: int = Field(default=3, ge=1)

    # Template selection
    chaos_threshold: int = Field(default=12, ge=2)
    bento_threshold: int = Field(default=15, ge=2)
    chaos_max_anchors: int = Field(default=2, ge=0)
    chaos_max_flow: int = Field(default=4, ge=0)
    chaos_max_pops: int = Field(default=5, ge=0)

    # Dinner matcher (subset search bounds)
    max_combination_items: int = Field(default=10, ge=1, le=12)
    max_combination_length: int = Field(default=5, ge=1, le=12)

    # Prompts / collaborators
    min_prompt_length: int = Field(default=200, ge=1)
    min_vibe_score: int = Field(default=65, ge=0, le=100)
    fallback_svg_items: int = Field(default=4, ge=1)

    # LLM (only used by the namer)
    openai_api_key: str | None = Field(default=None)
    llm_model: str = Field(default="gpt-4o-mini")
    llm_temperature: float = Field(default=0.9, ge=0.0, le=2.0)

    # Logging
    log_level: str = Field(default="INFO")

    @property
    def ingredients_path(self) -> Path:
        return self.data_dir / "ingredients.json"

    @property
    def combinations_path(self) -> Path:
        return self.data_dir / "combinations.json"

    @property
    def output_dir(self) -> Path:
        return self.project_root / "outputs"


settings = Settings()
