import asyncio
import time

from string_processor import AsyncPipeline, StringProcessor, filter_method, create_processor_from_registry, configure_logging


class SlowLookup(StringProcessor):
    """Pretends to call a remote spell checker"""

    @filter_method
    async def lookup(self, text: str) -> str:
        await asyncio.sleep(0.2)
        return text.replace("teh", "the")


# python -m examples.async_pipeline
if __name__ == "__main__":
    configure_logging("INFO")

    async def main():
        pipeline = AsyncPipeline([
            create_processor_from_registry("normalize_whitespace"),
            SlowLookup(),
            create_processor_from_registry("shout"),
        ], max_concurrent_tasks=5)

        texts = [f"  teh  talk number {i} " for i in range(10)]

        start_time = time.time()
        async for index, result in pipeline.astream(texts, output_strategy="asap"):
            print(index, result)
        print(f"Time taken: {time.time() - start_time:.2f} seconds")

    asyncio.run(main())
