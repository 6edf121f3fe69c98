import datetime
from typing import Any, Dict, List

from .logger import logger

# --- Execution Tracking ---

def generate_execution_id() -> str:
    """Generate a unique execution ID for pipeline runs."""
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    return f"{timestamp}"

def default_callback(processor: Any, input_data: Any, output_data: Any,
                     execution_id: str, step_index: int, *args, **kwargs) -> None:
    """
    Default callback function logging what each processor did.

    Args:
        processor: The processor instance
        input_data: Input string of the processor
        output_data: Output string of the processor
        execution_id: Unique execution identifier
        step_index: Index of the processor in the pipeline
    """
    save_data = processor.get_save_data(input_data, output_data, execution_id, step_index)
    logger.bind(object_name=processor.processor_id, execution_id=execution_id).debug(
        f"Callback: processing data for processor {processor.get_meta().get('name', 'unknown')} \n{save_data}"
    )

# --- Runtime Processor Creation ---

def list_registered_processors() -> Dict[str, Dict[str, Any]]:
    """
    List all registered processors with their filters.

    Returns:
        Dictionary mapping processor names to their metadata
    """
    from .processor import StringProcessorMeta

    processors_info = {}
    for name, processor_class in StringProcessorMeta.registry.items():
        meta = processor_class.get_meta()
        processors_info[name] = {
            "class_name": processor_class.__name__,
            "filters": processor_class.declared_filters(),
            "description": meta.get("description") or (processor_class.__doc__ or "No description available").strip(),
        }

    return processors_info

def create_processor_from_registry(name: str, **kwargs) -> Any:
    """
    Create a processor instance from the registry.

    Args:
        name: Name of the registered processor
        **kwargs: Arguments to pass to the processor constructor

    Returns:
        Processor instance

    Raises:
        KeyError: If processor name is not found in registry
    """
    from .processor import StringProcessorMeta

    if name not in StringProcessorMeta.registry:
        available = sorted(StringProcessorMeta.registry.keys())
        raise KeyError(f"Processor '{name}' not found. Available processors: {available}")

    processor_class = StringProcessorMeta.registry[name]
    return processor_class(**kwargs)

def create_pipeline_from_config(processor_configs: List[Dict[str, Any]], pipeline_type: str = "sync", **pipeline_kwargs) -> Any:
    """
    Create a pipeline from a list of processor configurations.

    Args:
        processor_configs: List of dictionaries, each containing:
            - "name": processor name from registry
            - "processor_id": optional processor id
            - "disabled": optional list of filter names to skip
            - "params": optional dictionary of parameters for processor constructor
        pipeline_type: "sync" for Pipeline or "async" for AsyncPipeline

    Returns:
        Pipeline instance

    Example:
        configs = [
            {"name": "normalize_whitespace"},
            {"name": "censor", "params": {"words": ["darn"]}},
        ]
        pipeline = create_pipeline_from_config(configs, "async")
    """
    from .pipeline import Pipeline, AsyncPipeline

    processors = []
    for config in processor_configs:
        name = config["name"]
        params = dict(config.get("params") or {})
        if config.get("processor_id"):
            params["processor_id"] = config["processor_id"]
        if config.get("disabled"):
            params["disabled"] = config["disabled"]
        processor = create_processor_from_registry(name, **params)
        processors.append(processor)

    if pipeline_type.lower() == "async":
        return AsyncPipeline(processors, **pipeline_kwargs)
    else:
        return Pipeline(processors)
