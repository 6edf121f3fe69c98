"""
Error hierarchy for string processors and pipelines
"""

from typing import Optional, Dict, Any
from datetime import datetime


class StringProcessorError(Exception):
    """Base exception for all string processor errors"""

    def __init__(self, message: str, processor_id: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.processor_id = processor_id
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "processor_id": self.processor_id,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None
        }


class ProcessorError(StringProcessorError):
    """Error raised by a processor outside of any single filter"""


class FilterError(ProcessorError):
    """Error that occurred within a filter method"""

    def __init__(self, message: str, processor_id: Optional[str], filter_name: str, input_data: Any = None,
                 context: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, processor_id, context, cause)
        self.filter_name = filter_name
        self.input_data = input_data

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["filter_name"] = self.filter_name
        data["input_data_summary"] = str(self.input_data)[:200] if self.input_data is not None else None
        return data


class FilterDefinitionError(StringProcessorError, TypeError):
    """A filter method was declared with an unusable signature or target"""

    def __init__(self, message: str, class_name: Optional[str] = None, filter_name: Optional[str] = None):
        super().__init__(message)
        self.class_name = class_name
        self.filter_name = filter_name

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["class_name"] = self.class_name
        data["filter_name"] = self.filter_name
        return data


class ConfigurationError(StringProcessorError):
    """Error in configuration or setup"""

    def __init__(self, message: str, config_section: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, None, context, cause)
        self.config_section = config_section

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["config_section"] = self.config_section
        return data
