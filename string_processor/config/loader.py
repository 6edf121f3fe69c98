"""
Configuration loading for string processor pipelines.

Supports loading pipeline configurations from YAML, JSON, and Python dictionaries.

Example YAML::

    pipeline_type: sync
    pipeline:
      - normalize_whitespace
      - name: censor
        params:
          words: [darn]
      - name: shout
        disabled: [exclaim]
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from ..core.errors import ConfigurationError, StringProcessorError
from ..core.helper import create_pipeline_from_config
from ..core.logger import logger
from ..core.pipeline import Pipeline


class ProcessorConfig(BaseModel):
    """Configuration for a single processor"""
    name: str
    processor_id: Optional[str] = None
    disabled: List[str] = []
    params: Dict[str, Any] = {}

    @model_validator(mode="before")
    @classmethod
    def _from_name(cls, data: Any) -> Any:
        # "slugify" is shorthand for {"name": "slugify"}
        if isinstance(data, str):
            return {"name": data}
        return data


class PipelineConfig(BaseModel):
    """Complete pipeline configuration"""
    pipeline: List[ProcessorConfig] = Field(min_length=1)
    pipeline_type: Literal["sync", "async"] = "sync"
    max_concurrent_tasks: int = Field(default=10, ge=1)


class ConfigLoader:
    """
    Loads and parses pipeline configurations from various sources.
    """

    SUPPORTED_SUFFIXES = (".yaml", ".yml", ".json")

    def load_from_file(self, config_path: Union[str, Path]) -> PipelineConfig:
        """Load configuration from a file (YAML or JSON)"""
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()
        if suffix not in self.SUPPORTED_SUFFIXES:
            raise ConfigurationError(f"Unsupported file format: {config_path.suffix}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if suffix == '.json':
                    config_data = json.load(f)
                else:
                    config_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to load configuration from {config_path}: {e}", cause=e) from e

        logger.bind(object_name="ConfigLoader").debug(f"Loaded configuration from {config_path}")
        return self.load_from_dict(config_data)

    def load_from_dict(self, config_data: Any) -> PipelineConfig:
        """Load configuration from a dictionary"""
        if not isinstance(config_data, dict):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(config_data).__name__}"
            )
        try:
            return PipelineConfig.model_validate(config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Failed to parse configuration: {e}", cause=e) from e

    def create_pipeline(self, config: PipelineConfig) -> Pipeline:
        """Create a Pipeline or AsyncPipeline from configuration"""
        processor_configs = [proc.model_dump() for proc in config.pipeline]
        pipeline_kwargs = {}
        if config.pipeline_type == "async":
            pipeline_kwargs["max_concurrent_tasks"] = config.max_concurrent_tasks
        try:
            return create_pipeline_from_config(processor_configs, config.pipeline_type, **pipeline_kwargs)
        except StringProcessorError:
            raise
        except KeyError as e:
            raise ConfigurationError(str(e.args[0]), config_section="pipeline", cause=e) from e
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid processor parameters: {e}", config_section="pipeline", cause=e) from e

    def load_pipeline(self, config_path: Union[str, Path]) -> Pipeline:
        """Load a configuration file and build its pipeline"""
        return self.create_pipeline(self.load_from_file(config_path))
