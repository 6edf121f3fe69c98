"""
Tests for filter collection by the metaclass and for StringProcessor execution
"""
import pytest

from ..decorators import filter_method, get_filter_spec, is_filter
from ..errors import ConfigurationError, FilterDefinitionError, FilterError, ProcessorError
from ..helper import default_callback
from ..processor import StringProcessor, StringProcessorMeta


class Cleaner(StringProcessor):
    """Strips, lowercases, then replaces spaces"""

    @filter_method
    def strip(self, text):
        return text.strip()

    @filter_method
    def lower(self, text):
        return text.lower()

    def helper(self, text):
        return "not a filter"

    @filter_method
    def dashes(self, text):
        return text.replace(" ", "-")


def test_filters_collected_in_definition_order():
    assert Cleaner._filters == ("strip", "lower", "dashes")
    assert Cleaner.declared_filters() == ["strip", "lower", "dashes"]


def test_process_composes_filters_left_to_right():
    cleaner = Cleaner()
    text = "  Hello World  "
    expected = text
    for step in (str.strip, str.lower, lambda s: s.replace(" ", "-")):
        expected = step(expected)
    assert cleaner.process(text) == expected == "hello-world"
    assert cleaner(text) == "hello-world"


def test_order_matters():
    class Appender(StringProcessor):
        @filter_method
        def add_a(self, text):
            return text + "a"

        @filter_method
        def add_b(self, text):
            return text + "b"

    assert Appender()("") == "ab"


def test_processor_without_filters_returns_input():
    class Empty(StringProcessor):
        pass

    assert Empty()("unchanged") == "unchanged"


def test_decorator_keeps_function_callable():
    def shout(self, text):
        return text.upper()

    decorated = filter_method(shout)
    assert decorated is shout
    assert decorated(None, "hi") == "HI"
    assert is_filter(decorated)
    assert get_filter_spec(decorated).name == "shout"


def test_decorator_with_name():
    @filter_method(name="trim")
    def strip(self, text):
        return text.strip()

    assert get_filter_spec(strip).name == "trim"


def test_decorator_rejects_non_callables():
    with pytest.raises(FilterDefinitionError):
        filter_method(42)


def test_bad_filter_signature_rejected_at_class_creation():
    with pytest.raises(FilterDefinitionError) as exc_info:
        class Broken(StringProcessor):
            @filter_method
            def join(self, left, right):
                return left + right

    assert exc_info.value.filter_name == "join"
    assert isinstance(exc_info.value, TypeError)


def test_subclass_inherits_filters_before_its_own():
    class Shouting(Cleaner):
        @filter_method
        def upper(self, text):
            return text.upper()

    assert Shouting.declared_filters() == ["strip", "lower", "dashes", "upper"]
    assert Shouting()(" a b ") == "A-B"


def test_overriding_filter_keeps_its_position():
    class Underscores(Cleaner):
        @filter_method
        def dashes(self, text):
            return text.replace(" ", "_")

        @filter_method
        def lower(self, text):
            return text

    assert Underscores.declared_filters() == ["strip", "lower", "dashes"]
    assert Underscores()(" A B ") == "A_B"


def test_overriding_without_decorator_drops_filter():
    class KeepCase(Cleaner):
        def lower(self, text):
            return text

    assert KeepCase.declared_filters() == ["strip", "dashes"]
    assert KeepCase()(" A B ") == "A-B"


def test_registry_uses_meta_name():
    class Registered(StringProcessor):
        meta = {"name": "test_processor_registered", "description": "registered in tests"}

        @filter_method
        def identity(self, text):
            return text

    assert StringProcessorMeta.get("test_processor_registered") is Registered

    class Unnamed(Registered):
        pass

    assert StringProcessorMeta.get("test_processor_registered") is Registered
    assert Unnamed.get_meta()["name"] == "test_processor_registered"


def test_disabled_filters_are_skipped():
    cleaner = Cleaner(disabled=["lower"])
    assert cleaner.filter_names() == ["strip", "dashes"]
    assert cleaner(" A B ") == "A-B"
    assert len(cleaner.filters) == 2


def test_disabling_unknown_filter_fails():
    with pytest.raises(ConfigurationError):
        Cleaner(disabled=["nope"])


def test_non_string_input_rejected():
    with pytest.raises(TypeError):
        Cleaner().process(b"bytes")


def test_filter_exception_wrapped():
    class Failing(StringProcessor):
        @filter_method
        def explode(self, text):
            raise ValueError("boom")

    processor = Failing(processor_id="failing")
    with pytest.raises(FilterError) as exc_info:
        processor("input")

    error = exc_info.value
    assert error.filter_name == "explode"
    assert error.processor_id == "failing"
    assert error.input_data == "input"
    assert isinstance(error.cause, ValueError)
    assert error.to_dict()["filter_name"] == "explode"
    assert processor.statistics().error_count == 1


def test_filter_returning_non_string_fails():
    class Counting(StringProcessor):
        @filter_method
        def length(self, text):
            return len(text)

    with pytest.raises(FilterError):
        Counting()("abc")


def test_trace_records_every_step():
    trace = Cleaner(processor_id="cleaner").trace(" Hi There ")
    assert trace.processor_id == "cleaner"
    assert trace.output == "hi-there"
    assert [step.filter_name for step in trace.steps] == ["strip", "lower", "dashes"]
    assert trace.steps[0].input == " Hi There "
    assert trace.steps[1].input == trace.steps[0].output == "Hi There"
    assert trace.steps[-1].output == trace.output


def test_statistics_count_calls_and_filters():
    cleaner = Cleaner()
    cleaner("a")
    cleaner("b")
    stats = cleaner.statistics()
    assert stats.historic_process_count == 2
    assert stats.filters["strip"].historic_process_count == 2
    dumped = stats.model_dump()
    assert "mean_process_time" in dumped
    assert dumped["filters"]["dashes"]["historic_process_count"] == 2


def test_default_processor_id_uses_class_name():
    assert Cleaner().processor_id.startswith("Cleaner_")
    assert Cleaner(processor_id="fixed").processor_id == "fixed"


class AsyncCleaner(StringProcessor):
    @filter_method
    def strip(self, text):
        return text.strip()

    @filter_method
    async def upper(self, text):
        return text.upper()


async def test_aprocess_awaits_async_filters():
    assert AsyncCleaner._has_async_filters
    assert await AsyncCleaner().aprocess("  quiet ") == "QUIET"


async def test_aprocess_runs_sync_only_processors():
    assert await Cleaner().aprocess(" A B ") == "a-b"


def test_sync_process_rejects_async_filters():
    with pytest.raises(ProcessorError):
        AsyncCleaner().process("text")


def test_duplicate_filter_names_rejected():
    with pytest.raises(FilterDefinitionError) as exc_info:
        class Duplicate(StringProcessor):
            @filter_method(name="strip")
            def first(self, text):
                return text.strip()

            @filter_method
            def strip(self, text):
                return text.strip()

    assert exc_info.value.filter_name == "strip"


def test_filter_name_clashing_with_inherited_filter_rejected():
    with pytest.raises(FilterDefinitionError):
        class Clash(Cleaner):
            @filter_method(name="lower")
            def casefold(self, text):
                return text.casefold()


def test_reregistering_name_logs_warning(log_records):
    class First(StringProcessor):
        meta = {"name": "test_processor_reused_name"}

    class Second(StringProcessor):
        meta = {"name": "test_processor_reused_name"}

    assert StringProcessorMeta.get("test_processor_reused_name") is Second
    warnings = [record["message"] for record in log_records if record["level"].name == "WARNING"]
    assert any("test_processor_reused_name" in message and "Second" in message for message in warnings)


class BrokenAsync(StringProcessor):
    @filter_method
    async def explode(self, text):
        raise ValueError("boom")


class AsyncLength(StringProcessor):
    @filter_method
    async def length(self, text):
        return len(text)


async def test_aprocess_wraps_async_filter_errors():
    processor = BrokenAsync(processor_id="broken")
    with pytest.raises(FilterError) as exc_info:
        await processor.aprocess("input")

    assert exc_info.value.filter_name == "explode"
    assert exc_info.value.processor_id == "broken"
    assert isinstance(exc_info.value.cause, ValueError)
    assert processor.statistics().error_count == 1


async def test_aprocess_rejects_non_string_from_async_filter():
    with pytest.raises(FilterError) as exc_info:
        await AsyncLength().aprocess("abc")
    assert exc_info.value.filter_name == "length"


def test_default_callback_logs_save_data(log_records):
    cleaner = Cleaner(processor_id="cleaner")

    assert cleaner.get_save_data(" A ", "a", "run-1", 2) == {
        "processor_name": None,
        "processor_id": "cleaner",
        "step_index": 2,
        "execution_id": "run-1",
        "filters": ["strip", "lower", "dashes"],
        "input_summary": " A ",
        "output_summary": "a",
    }

    default_callback(cleaner, " A ", "a", "run-1", 2)

    record = [record for record in log_records if record["message"].startswith("Callback")][-1]
    assert record["extra"]["execution_id"] == "run-1"
    assert record["extra"]["object_name"] == "cleaner"
    assert "'filters': ['strip', 'lower', 'dashes']" in record["message"]
