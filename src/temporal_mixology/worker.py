"""
Temporal worker: polls the cocktail-session task queue.

Registers the session workflow and the two generation activities. The same
pydantic data converter must be used here and in the client, otherwise the
domain models will not round-trip.

Run with:
    python -m temporal_mixology.worker
"""

import asyncio
import logging

from temporalio.client import Client
from temporalio.contrib.pydantic import pydantic_data_converter
from temporalio.worker import Worker

from temporal_mixology.activities import generate_image, generate_recipe
from temporal_mixology.config import configure_logging, get_settings
from temporal_mixology.workflows import CocktailSessionWorkflow


async def run_worker() -> None:
    settings = get_settings()
    configure_logging(settings)
    logger = logging.getLogger(__name__)

    # The same data_converter must be used by the client, otherwise the
    # pydantic models (SubmitRequest, SessionSnapshot, ...) fail to decode.
    client = await Client.connect(settings.temporal_address, data_converter=pydantic_data_converter)
    logger.info("Connected to Temporal at %s, starting worker on queue %r", settings.temporal_address, settings.task_queue)

    # Polls the task queue for:
    #   1. Workflow tasks for CocktailSessionWorkflow (updates, signals, queries).
    #   2. Activity tasks for generate_recipe / generate_image (model calls).
    worker = Worker(
        client,
        task_queue=settings.task_queue,
        workflows=[CocktailSessionWorkflow],
        activities=[generate_recipe, generate_image],
    )
    # Blocks until the worker is shut down (e.g., via Ctrl+C).
    await worker.run()


def main() -> None:
    asyncio.run(run_worker())


if __name__ == "__main__":
    main()
