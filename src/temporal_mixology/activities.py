"""
Temporal activities: thin wrappers delegating to the service layer.

An **activity** is where side-effects happen. Here both are long-latency
network calls to the generative models:
  - Decorated with ``@activity.defn``; the function name becomes the
    activity type name on the server ("generate_recipe", "generate_image").
  - Executed by the worker outside the deterministic workflow sandbox.
  - Never retried: the workflow dispatches them with ``maximum_attempts=1``.
  - Domain errors raised by the services propagate unchanged. Temporal turns
    them into an ApplicationError whose ``type`` is the exception class name,
    which the workflow maps back to the domain error.
"""

import logging

from temporalio import activity

from temporal_mixology.domain.models import CocktailRecipe, ImageInput, RecipeInput
from temporal_mixology.services.factory import ServiceFactory

logger = logging.getLogger(__name__)


@activity.defn
async def generate_recipe(input: RecipeInput) -> CocktailRecipe:
    """Ask the text model for a structured recipe.

    Raises RecipeGenerationFailed on an empty reply and RecipeParseFailed
    when the reply does not fit the CocktailRecipe shape.
    """
    logger.info("Activity generate_recipe started (%d chars of instruction)", len(input.instruction))
    recipe = await ServiceFactory.get_recipe_service().generate(input.instruction)
    logger.info("Activity generate_recipe completed: %s", recipe.name)
    # Serialized back to the workflow via pydantic_data_converter (camelCase aliases)
    return recipe


@activity.defn
async def generate_image(input: ImageInput) -> str:
    """Ask the image model for a picture of the drink; returns a data URI.

    Raises ImageGenerationFailed when the reply carries no inline image.
    """
    logger.info("Activity generate_image started")
    uri = await ServiceFactory.get_image_service().generate(input.instruction)
    logger.info("Activity generate_image completed")
    return uri
