"""Configuration models using Pydantic for validation."""
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
import os
import re


DEFAULT_TAG_PATTERN = r"^[A-Za-z0-9_.\-/:]+$"


class TagRules(BaseModel):
    """Character-set rules applied to tag keys and values."""
    key_pattern: str = DEFAULT_TAG_PATTERN
    value_pattern: str = DEFAULT_TAG_PATTERN
    max_tags: Optional[int] = Field(default=None, ge=0)

    @field_validator('key_pattern', 'value_pattern')
    @classmethod
    def validate_pattern(cls, v):
        """Reject patterns that do not compile."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid tag pattern {v!r}: {e}")
        return v


class MetricsConfig(BaseModel):
    """Self-metrics configuration."""
    enabled: bool = True
    prefix: str = "tagstore_"


class GlobalConfig(BaseModel):
    """Global configuration settings."""
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "text"


class Config(BaseModel):
    """Root configuration model."""
    model_config = ConfigDict(populate_by_name=True)

    global_: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    tags: TagRules = Field(default_factory=TagRules)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)


def load_config(config_path: str) -> Config:
    """Load and validate configuration from YAML file."""
    import yaml

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r') as f:
        raw_config = yaml.safe_load(f) or {}

    if env_log_level := os.getenv('LOG_LEVEL'):
        if 'global' not in raw_config:
            raw_config['global'] = {}
        raw_config['global']['log_level'] = env_log_level

    try:
        config = Config(**raw_config)
        return config
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")
