"""
Recipe generation service.

Calls the Gemini text model in JSON mode with a response schema mirroring
CocktailRecipe, so the reply is validated structurally instead of being
scraped out of prose. No retries here: failures propagate to the activity
and from there to the orchestrator.
"""

import json
import logging

from google import genai
from google.genai import types
from pydantic import ValidationError

from temporal_mixology.domain.errors import RecipeGenerationFailed, RecipeParseFailed
from temporal_mixology.domain.models import CocktailRecipe
from temporal_mixology.domain.prompts import BARTENDER_PERSONA

logger = logging.getLogger(__name__)

RECIPE_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "name": {"type": "STRING", "description": "Creative name of the cocktail"},
        "tagline": {"type": "STRING", "description": "A short, catchy slogan for the drink"},
        "story": {
            "type": "STRING",
            "description": "A short paragraph explaining why this drink matches the user's personality and mood.",
        },
        "ingredients": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "item": {"type": "STRING", "description": "Name of ingredient (liquor, mixer, fruit, etc)"},
                    "amount": {"type": "STRING", "description": "Quantity with units (e.g., 60ml, 1 dash, top up)"},
                },
                "required": ["item", "amount"],
            },
        },
        "glassware": {"type": "STRING", "description": "Type of glass to serve in"},
        "garnish": {"type": "STRING", "description": "Garnish details"},
        "instructions": {"type": "STRING", "description": "Step-by-step preparation instructions"},
        "visualDescription": {
            "type": "STRING",
            "description": (
                "A highly detailed visual description of the final cocktail for an image "
                "generation AI. Describe colors, layers, condensation, lighting, the glass "
                "shape, and garnish."
            ),
        },
    },
    "required": ["name", "story", "ingredients", "glassware", "garnish", "instructions", "visualDescription"],
}


def parse_recipe(text: str) -> CocktailRecipe:
    """Validate a JSON reply against the CocktailRecipe shape."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as err:
        raise RecipeParseFailed(f"The recipe was not valid JSON: {err.msg}") from err
    if not isinstance(payload, dict):
        raise RecipeParseFailed("The recipe was not a JSON object.")
    try:
        return CocktailRecipe.model_validate(payload)
    except ValidationError as err:
        fields = sorted({".".join(str(p) for p in e["loc"]) for e in err.errors()})
        raise RecipeParseFailed(f"The recipe is malformed: {', '.join(fields)}") from err


class GeminiRecipeService:
    """Implements RecipeGenerator against ``client.aio.models.generate_content``."""

    def __init__(self, client: genai.Client, model: str) -> None:
        self.client = client
        self.model = model

    async def generate(self, instruction: str) -> CocktailRecipe:
        logger.info("Requesting recipe from %s", self.model)
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=instruction,
            config=types.GenerateContentConfig(
                system_instruction=BARTENDER_PERSONA,
                response_mime_type="application/json",
                response_schema=RECIPE_SCHEMA,
            ),
        )
        text = response.text
        if not text:
            raise RecipeGenerationFailed()
        recipe = parse_recipe(text)
        logger.info("Recipe ready: %s", recipe.name)
        return recipe
