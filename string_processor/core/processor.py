import inspect
import time
import uuid
from abc import ABCMeta
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type

from pydantic import BaseModel, computed_field

from .decorators import FilterSpec, get_filter_spec
from .errors import ConfigurationError, FilterDefinitionError, FilterError, ProcessorError
from .logger import logger


class StringProcessorMeta(ABCMeta):
    """
    Metaclass collecting the filter methods of a StringProcessor class.

    Filters are gathered from the class body in definition order, after the
    filters inherited from the bases. Redefining an inherited filter keeps its
    position; redefining it without the decorator drops it. Classes declaring
    ``meta = {"name": ...}`` in their own body are added to ``registry``.
    """
    registry: Dict[str, Type["StringProcessor"]] = {}

    def __new__(mcs, name, bases, namespace, **kwargs):
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)

        filters: List[str] = []
        for base in bases:
            for attr in getattr(base, "_filters", ()):
                if attr not in filters:
                    filters.append(attr)

        for attr, value in namespace.items():
            spec = get_filter_spec(value)
            if spec is not None:
                mcs._validate_filter(name, attr, value)
                if attr not in filters:
                    filters.append(attr)
            elif attr in filters:
                filters.remove(attr)

        # a sibling base may have shadowed an inherited filter
        filters = [attr for attr in filters if get_filter_spec(getattr(cls, attr, None)) is not None]

        # disabled, statistics and traces address filters by spec name
        seen: Dict[str, str] = {}
        for attr in filters:
            filter_name = get_filter_spec(getattr(cls, attr)).name
            if filter_name in seen:
                raise FilterDefinitionError(
                    f"Filters {name}.{seen[filter_name]} and {name}.{attr} share the name '{filter_name}'",
                    class_name=name, filter_name=filter_name,
                )
            seen[filter_name] = attr

        cls._filters = tuple(filters)
        cls._has_async_filters = any(get_filter_spec(getattr(cls, attr)).is_async for attr in filters)

        if "meta" in namespace:
            meta = namespace["meta"]
            registry_name = meta.get("name")
            if registry_name:
                previous = mcs.registry.get(registry_name)
                if previous is not None and previous is not cls:
                    logger.warning(f"Processor name '{registry_name}' re-registered: "
                                   f"{previous.__qualname__} replaced by {cls.__qualname__}")
                mcs.registry[registry_name] = cls

        return cls

    @staticmethod
    def _validate_filter(class_name: str, attr: str, func: Callable) -> None:
        # a filter is called as method(text), so it must bind (self, text)
        try:
            sig = inspect.signature(func)
        except (TypeError, ValueError) as e:
            raise FilterDefinitionError(f"Cannot inspect filter {class_name}.{attr}: {e}",
                                        class_name=class_name, filter_name=attr) from e
        try:
            sig.bind(None, "")
        except TypeError:
            raise FilterDefinitionError(
                f"Filter {class_name}.{attr} must accept exactly one argument besides self. "
                f"Current signature: {sig}. "
                f"Please define it as: def {attr}(self, text: str) -> str:",
                class_name=class_name, filter_name=attr,
            ) from None

    @classmethod
    def get(mcs, name: str) -> Type["StringProcessor"]:
        return mcs.registry[name]


class FilterStatistics(BaseModel):
    """
    Timings of a single filter.
    """
    historic_process_count: int = 0
    historic_process_time: List[float] = []

    @computed_field
    def mean_process_time(self) -> float:
        if not self.historic_process_time:
            return 0.0
        return sum(self.historic_process_time) / len(self.historic_process_time)


class ProcessorStatistics(BaseModel):
    """
    Statistics about the processor.
    """
    historic_process_count: int = 0
    historic_process_time: List[float] = []
    error_count: int = 0
    filters: Dict[str, FilterStatistics] = {}

    @computed_field
    def mean_process_time(self) -> float:
        if not self.historic_process_time:
            return 0.0
        return sum(self.historic_process_time) / len(self.historic_process_time)

    def record_filter(self, filter_name: str, elapsed: float) -> None:
        stats = self.filters.setdefault(filter_name, FilterStatistics())
        stats.historic_process_count += 1
        stats.historic_process_time.append(elapsed)

    def record_call(self, elapsed: float) -> None:
        self.historic_process_count += 1
        self.historic_process_time.append(elapsed)


class StepRecord(BaseModel):
    """One filter application recorded by StringProcessor.trace"""
    filter_name: str
    input: str
    output: str
    duration: float


class ProcessingTrace(BaseModel):
    processor_id: str
    input: str
    output: str
    steps: List[StepRecord] = []


class StringProcessor(metaclass=StringProcessorMeta):
    """
    Base class for string processors.

    Subclasses declare filter methods with ``@filter_method``; calling the
    processor feeds the input string through every filter in definition
    order, each filter receiving the previous filter's output.

    Attributes:
        processor_id (str): The unique identifier for the processor.
        disabled (frozenset): Filter names skipped by this instance.
    """
    meta: Dict[str, Any] = {
        "name": None,
        "description": None,
    }

    _filters: Tuple[str, ...] = ()
    _has_async_filters: bool = False

    def __init__(self, processor_id: Optional[str] = None, disabled: Optional[Iterable[str]] = None):
        meta = self.get_meta()

        self.processor_id = processor_id
        if self.processor_id is None:
            self.processor_id = f"{meta.get('name') or type(self).__name__}_{uuid.uuid4()}"

        disabled = frozenset(disabled or ())
        unknown = disabled - set(self.declared_filters())
        if unknown:
            raise ConfigurationError(
                f"Cannot disable unknown filters {sorted(unknown)} on {type(self).__name__}; "
                f"available filters: {self.declared_filters()}",
                config_section="disabled",
            )
        self.disabled = disabled

        self._statistics = ProcessorStatistics()

        self.logger = logger.bind(object_name=self.processor_id)
        self.logger.debug(f"Initialized processor {self.processor_id} with filters {self.filter_names()}")

    @classmethod
    def get_meta(cls) -> Dict[str, Any]:
        return cls.meta

    @classmethod
    def declared_filters(cls) -> List[str]:
        """Names of every filter of the class, in execution order"""
        return [cls._spec(attr).name for attr in cls._filters]

    @classmethod
    def _spec(cls, attr: str) -> FilterSpec:
        return get_filter_spec(getattr(cls, attr))

    def _active_filters(self) -> List[Tuple[str, Callable]]:
        active = []
        for attr in self._filters:
            filter_name = self._spec(attr).name
            if filter_name not in self.disabled:
                active.append((filter_name, getattr(self, attr)))
        return active

    @property
    def filters(self) -> List[Callable]:
        return [method for _, method in self._active_filters()]

    def filter_names(self) -> List[str]:
        return [filter_name for filter_name, _ in self._active_filters()]

    def _check_input(self, text: Any) -> None:
        if not isinstance(text, str):
            raise TypeError(f"{type(self).__name__} expects a str, got {type(text).__name__}")

    def _check_output(self, filter_name: str, text: str, result: Any) -> str:
        if not isinstance(result, str):
            self._statistics.error_count += 1
            raise FilterError(
                f"Filter '{filter_name}' returned {type(result).__name__} instead of str",
                self.processor_id, filter_name, input_data=text,
            )
        return result

    def _filter_failed(self, filter_name: str, text: str, e: Exception) -> FilterError:
        self._statistics.error_count += 1
        self.logger.error(f"Filter '{filter_name}' failed: {e}")
        return FilterError(
            f"Filter '{filter_name}' of {self.processor_id} failed: {e}",
            self.processor_id, filter_name, input_data=text, cause=e,
        )

    def _apply(self, filter_name: str, method: Callable, text: str) -> str:
        start = time.perf_counter()
        try:
            result = method(text)
        except Exception as e:
            raise self._filter_failed(filter_name, text, e) from e
        result = self._check_output(filter_name, text, result)
        self._statistics.record_filter(filter_name, time.perf_counter() - start)
        return result

    async def _aapply(self, filter_name: str, method: Callable, text: str) -> str:
        start = time.perf_counter()
        try:
            result = method(text)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            raise self._filter_failed(filter_name, text, e) from e
        result = self._check_output(filter_name, text, result)
        self._statistics.record_filter(filter_name, time.perf_counter() - start)
        return result

    def _require_sync(self) -> None:
        if self._has_async_filters:
            raise ProcessorError(
                f"{type(self).__name__} has async filters; use 'await processor.aprocess(text)'",
                self.processor_id,
            )

    def process(self, text: str) -> str:
        """Apply every active filter in order and return the final string"""
        self._require_sync()
        self._check_input(text)
        start = time.perf_counter()
        for filter_name, method in self._active_filters():
            text = self._apply(filter_name, method, text)
        self._statistics.record_call(time.perf_counter() - start)
        return text

    def __call__(self, text: str) -> str:
        return self.process(text)

    async def aprocess(self, text: str) -> str:
        """Like process, awaiting the filters declared with ``async def``"""
        self._check_input(text)
        start = time.perf_counter()
        for filter_name, method in self._active_filters():
            text = await self._aapply(filter_name, method, text)
        self._statistics.record_call(time.perf_counter() - start)
        return text

    def trace(self, text: str) -> ProcessingTrace:
        """Run the filters like process and record every intermediate value"""
        self._require_sync()
        self._check_input(text)
        original = text
        steps = []
        start = time.perf_counter()
        for filter_name, method in self._active_filters():
            step_start = time.perf_counter()
            output = self._apply(filter_name, method, text)
            steps.append(StepRecord(
                filter_name=filter_name,
                input=text,
                output=output,
                duration=time.perf_counter() - step_start,
            ))
            text = output
        self._statistics.record_call(time.perf_counter() - start)
        return ProcessingTrace(processor_id=self.processor_id, input=original, output=text, steps=steps)

    def statistics(self) -> ProcessorStatistics:
        return self._statistics

    def get_save_data(self, input_data: Any, output_data: Any, execution_id: str, step_index: int) -> Dict[str, Any]:
        """
        Override this method to define what data should be reported for this processor.

        Args:
            input_data: The input string passed to this processor
            output_data: The output string produced by this processor
            execution_id: Unique identifier for this pipeline execution
            step_index: Index of this processor in the pipeline (0-based)

        Returns:
            Dict passed to the pipeline callback
        """
        return {
            "processor_name": self.get_meta().get("name"),
            "processor_id": self.processor_id,
            "step_index": step_index,
            "execution_id": execution_id,
            "filters": self.filter_names(),
            "input_summary": str(input_data)[:100] if input_data else None,
            "output_summary": str(output_data)[:100] if output_data else None,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(processor_id={self.processor_id!r}, filters={self.filter_names()!r})"
