from string_processor import StringProcessor, filter_method, configure_logging


class TalkTitle(StringProcessor):
    """
    Cleans up a submitted talk title.
    """
    meta = {
        "name": "talk_title",
        "description": "Normalize a conference talk title",
    }

    @filter_method
    def strip(self, text: str) -> str:
        return text.strip()

    @filter_method
    def capitalize_words(self, text: str) -> str:
        return " ".join(word[:1].upper() + word[1:] for word in text.split())

    @filter_method
    def drop_trailing_period(self, text: str) -> str:
        return text.rstrip(".")


class ShortTalkTitle(TalkTitle):
    """Same filters, then truncates to 40 characters"""

    @filter_method
    def truncate(self, text: str) -> str:
        return text if len(text) <= 40 else text[:39] + "…"


# python -m examples.talk_example
if __name__ == "__main__":
    configure_logging("DEBUG")

    title = "  metaclasses and decorators: building an extensible string processor. "
    print(TalkTitle.declared_filters())
    print(TalkTitle()(title))

    trace = ShortTalkTitle().trace(title)
    for step in trace.steps:
        print(f"{step.filter_name:>22}: {step.output!r}")
