from .loader import ConfigLoader, PipelineConfig, ProcessorConfig

__all__ = ["ConfigLoader", "PipelineConfig", "ProcessorConfig"]
