from collections.abc import Iterator

import pytest
from temporalio.exceptions import ApplicationError
from temporalio.testing import ActivityEnvironment

from conftest import RecordingImages, RecordingRecipes
from temporal_mixology.activities import generate_image, generate_recipe
from temporal_mixology.domain.errors import (
    ImageGenerationFailed,
    RecipeGenerationFailed,
    RecipeParseFailed,
)
from temporal_mixology.domain.models import ImageInput, RecipeInput
from temporal_mixology.services.factory import ServiceFactory
from temporal_mixology.workflows import domain_error_from


@pytest.fixture(autouse=True)
def clean_factory() -> Iterator[None]:
    ServiceFactory.clear()
    yield
    ServiceFactory.clear()


@pytest.mark.asyncio
async def test_generate_recipe_activity() -> None:
    recipes = RecordingRecipes()
    ServiceFactory._recipes = recipes

    got = await ActivityEnvironment().run(generate_recipe, RecipeInput(instruction="a drink please"))

    assert got == recipes.recipe
    assert recipes.instructions == ["a drink please"]


@pytest.mark.asyncio
async def test_generate_image_activity() -> None:
    ServiceFactory._images = RecordingImages(uri="data:image/png;base64,QUJD")
    got = await ActivityEnvironment().run(generate_image, ImageInput(instruction="a photo"))
    assert got == "data:image/png;base64,QUJD"


@pytest.mark.asyncio
async def test_activity_failure_propagates() -> None:
    ServiceFactory._images = RecordingImages(error=ImageGenerationFailed())
    with pytest.raises(ImageGenerationFailed):
        await ActivityEnvironment().run(generate_image, ImageInput(instruction="a photo"))


def test_missing_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    from temporal_mixology.config import get_settings

    for name in ("MIXOLOGY_GEMINI_API_KEY", "GEMINI_API_KEY", "API_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir("/")
    get_settings.cache_clear()
    try:
        with pytest.raises(ValueError, match="GEMINI_API_KEY"):
            ServiceFactory.get_recipe_service()
    finally:
        get_settings.cache_clear()


def test_domain_error_from_application_error() -> None:
    err = domain_error_from(
        ApplicationError("The recipe is malformed: glassware", type="RecipeParseFailed"),
        RecipeGenerationFailed,
    )
    assert type(err) is RecipeParseFailed
    assert str(err) == "The recipe is malformed: glassware"


def test_domain_error_from_unknown_cause() -> None:
    err = domain_error_from(ApplicationError("quota exhausted", type="ClientError"), ImageGenerationFailed)
    assert type(err) is ImageGenerationFailed
    assert str(err) == "quota exhausted"
    assert str(domain_error_from(None, ImageGenerationFailed)) == "No image generated in the response"
