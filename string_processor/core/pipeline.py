import asyncio
from enum import Enum
from typing import AsyncGenerator, Callable, Iterable, List, Optional, Tuple

from .errors import ConfigurationError
from .helper import generate_execution_id, default_callback
from .logger import logger
from .processor import StringProcessor


class OutputStrategy(Enum):
    """
    Output strategy.
    """
    ASAP = "asap"
    ORDERED = "ordered"

    @classmethod
    def from_string(cls, value: str) -> "OutputStrategy":
        """Create an OutputStrategy from a string value."""
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(f"Invalid output strategy: {value}")


class Pipeline:
    """
    Feeds a string through several processors, the output of one being the
    input of the next.
    """

    def __init__(self, processors: List[StringProcessor]):
        self.processors = list(processors)
        self._check_compatibility()

    def _check_compatibility(self):
        for index, processor in enumerate(self.processors):
            if not isinstance(processor, StringProcessor):
                raise ConfigurationError(
                    f"Pipeline step {index} is a {type(processor).__name__}, not a StringProcessor",
                    config_section="pipeline",
                )

    def run(self, data: str, execution_id: Optional[str] = None,
            callback: Optional[Callable] = None, *args, **kwargs) -> str:
        """
        Run the pipeline with optional callback and execution tracking.

        Args:
            data: Input string for the pipeline
            execution_id: Optional execution ID (auto-generated if not provided)
            callback: Optional callback function called after each processor
                     Signature: callback(processor, input_data, output_data, execution_id, step_index)

        Returns:
            Final output from the pipeline
        """
        if execution_id is None:
            execution_id = generate_execution_id()

        if callback is None:
            callback = default_callback

        # processor loggers pick the execution_id up from the context
        with logger.contextualize(execution_id=execution_id):
            logger.bind(object_name="Pipeline").debug(f"Running {len(self.processors)} processors")
            for step_index, processor in enumerate(self.processors):
                input_data = data
                data = processor.process(data)
                callback(processor, input_data, data, execution_id, step_index, *args, **kwargs)

        return data

    def __call__(self, data: str) -> str:
        return self.run(data)


class AsyncPipeline(Pipeline):
    """
    Pipeline awaiting async filters, able to process many strings concurrently.

    Each string still goes through the processors one after another; only
    separate strings are processed concurrently, bounded by max_concurrent_tasks.
    """

    def __init__(self, processors: List[StringProcessor], max_concurrent_tasks: int = 10):
        super().__init__(processors)
        if max_concurrent_tasks < 1:
            raise ConfigurationError("max_concurrent_tasks must be at least 1", config_section="max_concurrent_tasks")
        self.max_concurrent_tasks = max_concurrent_tasks

    async def run(self, input_data: str, execution_id: Optional[str] = None,
                  callback: Optional[Callable] = None, *args, **kwargs) -> str:
        """
        Run the async pipeline on one string.

        Args:
            input_data: Input string for the pipeline
            execution_id: Optional execution ID (auto-generated if not provided)
            callback: Optional callback function called after each processor step
                     Signature: callback(processor, input_data, output_data, execution_id, step_index)

        Returns:
            Final output from the pipeline
        """
        if execution_id is None:
            execution_id = generate_execution_id()

        if callback is None:
            callback = default_callback

        data = input_data
        with logger.contextualize(execution_id=execution_id):
            for step_index, processor in enumerate(self.processors):
                step_input = data
                data = await processor.aprocess(data)
                callback(processor, step_input, data, execution_id, step_index, *args, **kwargs)

        return data

    async def _run_with_semaphore(self, semaphore: asyncio.Semaphore, index: int, text: str,
                                  execution_id: str, callback: Optional[Callable]) -> Tuple[int, str]:
        async with semaphore:
            return index, await self.run(text, f"{execution_id}_{index}", callback)

    async def run_many(self, texts: Iterable[str], execution_id: Optional[str] = None,
                       callback: Optional[Callable] = None) -> List[str]:
        """Process every string concurrently; results keep the input order"""
        return [result async for _, result in self.astream(texts, execution_id, callback)]

    async def astream(self, texts: Iterable[str], execution_id: Optional[str] = None,
                      callback: Optional[Callable] = None,
                      output_strategy: str = "ordered") -> AsyncGenerator[Tuple[int, str], None]:
        """
        Async generator yielding ``(index, result)`` for every input string.

        Args:
            texts: Input strings
            execution_id: Optional execution ID prefix
            callback: Optional callback passed to every run
            output_strategy: "ordered" yields in input order, "asap" in completion order
        """
        strategy = OutputStrategy.from_string(output_strategy)
        if execution_id is None:
            execution_id = generate_execution_id()

        # one semaphore per call, bound to the loop running this call
        semaphore = asyncio.Semaphore(self.max_concurrent_tasks)
        tasks = [
            asyncio.create_task(self._run_with_semaphore(semaphore, index, text, execution_id, callback))
            for index, text in enumerate(texts)
        ]
        try:
            if strategy is OutputStrategy.ORDERED:
                for task in tasks:
                    yield await task
            else:
                for completed in asyncio.as_completed(tasks):
                    yield await completed
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            # collect the remaining results so no task exception goes unretrieved
            await asyncio.gather(*tasks, return_exceptions=True)
