"""
Simple factory for service singletons.

Activities call ``ServiceFactory.get_*()`` instead of building services
themselves, so the Gemini client is created once per worker process and
tests can swap in fakes by assigning the class-level cache.
"""

from google import genai

from temporal_mixology.config import get_settings
from temporal_mixology.services.images import GeminiImageService
from temporal_mixology.services.recipes import GeminiRecipeService


class ServiceFactory:
    """Lazily creates and caches service instances (class-level singletons)."""

    _client: genai.Client | None = None
    _recipes: GeminiRecipeService | None = None
    _images: GeminiImageService | None = None

    @classmethod
    def get_client(cls) -> genai.Client:
        if cls._client is None:
            api_key = get_settings().gemini_api_key
            if not api_key:
                raise ValueError("GEMINI_API_KEY environment variable not set")
            cls._client = genai.Client(api_key=api_key)
        return cls._client

    @classmethod
    def get_recipe_service(cls) -> GeminiRecipeService:
        if cls._recipes is None:
            cls._recipes = GeminiRecipeService(cls.get_client(), get_settings().recipe_model)
        return cls._recipes

    @classmethod
    def get_image_service(cls) -> GeminiImageService:
        if cls._images is None:
            cls._images = GeminiImageService(cls.get_client(), get_settings().image_model)
        return cls._images

    @classmethod
    def clear(cls) -> None:
        cls._client = None
        cls._recipes = None
        cls._images = None
