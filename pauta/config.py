"""Configuration management using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pauta.llm_providers import OpenAIModel, RecencyFilter

logger = logging.getLogger(__name__)


class ModelsConfig(BaseModel):
    """Model names used by each kind of text-generation call."""

    default: str = OpenAIModel.GPT_4O.value  # outlines, drafts, enrichment
    analysis: str = OpenAIModel.GPT_4O_MINI.value  # insights, claims, metadata
    fallback: str = OpenAIModel.GPT_35_TURBO.value  # retried once when a call fails


class ResearchConfig(BaseModel):
    """Research aggregation parameters."""

    backend: Literal["perplexity", "exa"] = "perplexity"
    include_technical_data: bool = True
    include_cost_estimates: bool = True
    include_local_context: bool = True  # Brazilian market context
    max_sources: int = Field(default=5, ge=1)
    recency_filter: RecencyFilter | None = RecencyFilter.MONTH


class GenerationConfig(BaseModel):
    """Article generation defaults."""

    tone: str = "informativo"
    audience: str = "intermediário"
    min_words: int = 800
    max_words: int = 1500
    include_sources: bool = True
    include_faqs: bool = True
    include_metadata: bool = True
    include_fact_check: bool = False
    enrich: bool = False
    max_secondary_questions: int = 3
    parallel_secondary_research: bool = False


class FactCheckConfig(BaseModel):
    """Fact-check parameters."""

    max_claims: int = Field(default=8, ge=1)


class ProviderLimitsConfig(BaseModel):
    """Per-call timeouts and concurrency caps for external providers."""

    text_timeout_seconds: float = 120.0
    research_timeout_seconds: float = 60.0
    max_concurrent_text_calls: int = Field(default=4, ge=1)
    max_concurrent_research_calls: int = Field(default=2, ge=1)


class ContentSlot(BaseModel):
    """One daily publication slot."""

    hour: int = Field(ge=0, le=23)
    minute: int = Field(default=0, ge=0, le=59)
    focus: list[str] = Field(default_factory=list)


def _default_slots() -> dict[str, ContentSlot]:
    return {
        "morning": ContentSlot(
            hour=10,
            focus=["dicas-reformas", "tendencias-design", "materiais-construcao"],
        ),
        "afternoon": ContentSlot(
            hour=15,
            focus=["antes-depois", "inspiracoes-decoracao", "reformas-economicas"],
        ),
        "evening": ContentSlot(
            hour=19,
            minute=49,
            focus=["projetos-destaque", "dicas-interiores", "reformas-modernas"],
        ),
    }


class SchedulerConfig(BaseModel):
    """Daily content slots."""

    timezone: str = "America/Sao_Paulo"
    slots: dict[str, ContentSlot] = Field(default_factory=_default_slots)


class StorageConfig(BaseModel):
    """Where generated articles are written."""

    articles_subdir: str = "articles"
    slug_max_length: int = 60


class SiteConfig(BaseModel):
    """Public blog identity used in meta tags and structured data."""

    name: str = "Casabranca Reformas"
    base_url: str = "https://casabrancareformas.com.br"
    blog_path: str = "/blog"
    logo_path: str = "/logo.png"


class Settings(BaseSettings):
    """Main configuration class."""

    # Paths
    data_dir: Path = Path("data")

    # API Keys
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    perplexity_api_key: str = ""
    exa_api_key: str = ""
    logfire_token: str = ""

    environment: str = "development"

    # Nested configuration sections
    models: ModelsConfig = Field(default_factory=ModelsConfig)
    research: ResearchConfig = Field(default_factory=ResearchConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    fact_check: FactCheckConfig = Field(default_factory=FactCheckConfig)
    providers: ProviderLimitsConfig = Field(default_factory=ProviderLimitsConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("data_dir", mode="after")
    @classmethod
    def resolve_data_dir(cls, v: Path) -> Path:
        """Resolve data directory to absolute path."""
        return v.resolve()

    @property
    def articles_dir(self) -> Path:
        return self.data_dir / self.storage.articles_subdir

    def load_yaml_config(self) -> None:
        """Load and merge YAML configuration."""
        config_path = self.data_dir / "config.yaml"

        if not config_path.exists():
            logger.warning(
                f"Config file not found: {config_path}. "
                "Using defaults. Run 'python -m pauta init' to create it."
            )
            return

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)

            if not yaml_config:
                logger.warning(f"Empty config file: {config_path}")
                return

            for section_name in [
                "models",
                "research",
                "generation",
                "fact_check",
                "providers",
                "scheduler",
                "storage",
                "site",
            ]:
                if section_name in yaml_config:
                    section = getattr(self, section_name)
                    yaml_section = yaml_config[section_name] or {}

                    section_dict = section.model_dump()
                    section_dict.update(yaml_section)

                    new_section = section.__class__(**section_dict)
                    setattr(self, section_name, new_section)

            logger.info(f"Loaded configuration from {config_path}")

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise


@lru_cache()
def get_settings() -> Settings:
    """Get the Settings instance used by the command line."""
    settings = Settings()
    settings.load_yaml_config()
    return settings
