"""
String Processor

Classes whose decorated filter methods are collected by a metaclass in
definition order and applied one after another to a string.
"""

from .core.decorators import filter_method, is_filter, get_filter_spec, FilterSpec
from .core.errors import (
    StringProcessorError,
    ProcessorError,
    FilterError,
    FilterDefinitionError,
    ConfigurationError,
)
from .core.processor import StringProcessor, StringProcessorMeta, ProcessorStatistics, ProcessingTrace, StepRecord
from .core.pipeline import Pipeline, AsyncPipeline, OutputStrategy
from .core.helper import (
    generate_execution_id,
    default_callback,
    list_registered_processors,
    create_processor_from_registry,
    create_pipeline_from_config,
)
from .core.logger import configure_logging

# Register the built-in processors
from . import processors

__version__ = "1.0.0"

__all__ = [
    # Core classes
    "StringProcessor",
    "StringProcessorMeta",
    "filter_method",
    "is_filter",
    "get_filter_spec",
    "FilterSpec",

    # Results and statistics
    "ProcessorStatistics",
    "ProcessingTrace",
    "StepRecord",

    # Pipeline classes
    "Pipeline",
    "AsyncPipeline",
    "OutputStrategy",

    # Errors
    "StringProcessorError",
    "ProcessorError",
    "FilterError",
    "FilterDefinitionError",
    "ConfigurationError",

    # Helper functions
    "generate_execution_id",
    "default_callback",
    "list_registered_processors",
    "create_processor_from_registry",
    "create_pipeline_from_config",
    "configure_logging",
]
