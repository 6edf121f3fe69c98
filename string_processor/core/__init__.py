from .decorators import filter_method, is_filter, get_filter_spec, FilterSpec
from .errors import (
    StringProcessorError,
    ProcessorError,
    FilterError,
    FilterDefinitionError,
    ConfigurationError,
)
from .processor import StringProcessor, StringProcessorMeta, ProcessorStatistics, ProcessingTrace, StepRecord
from .pipeline import Pipeline, AsyncPipeline, OutputStrategy
from .helper import (
    generate_execution_id,
    default_callback,
    list_registered_processors,
    create_processor_from_registry,
    create_pipeline_from_config,
)
from .logger import logger, configure_logging
