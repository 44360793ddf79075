import json
from types import SimpleNamespace
from typing import Any

import pytest
from google.genai import types

from temporal_mixology.domain.errors import ImageGenerationFailed
from temporal_mixology.domain.models import MBTI, AgeGroup, CocktailRecipe, UserProfile, Zodiac

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


def recipe_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "name": "Midnight Ledger",
        "tagline": "Plans, then chaos.",
        "story": "A rye sour for a strategist who secretly likes surprises.",
        "ingredients": [
            {"item": "Rye whiskey", "amount": "50ml"},
            {"item": "Lemon juice", "amount": "25ml"},
            {"item": "Honey syrup", "amount": "15ml"},
        ],
        "glassware": "Coupe",
        "garnish": "Expressed lemon peel",
        "instructions": "Shake hard with ice and double strain.",
        "visualDescription": "Amber liquid in a frosted coupe, lemon twist, low moody light",
    }
    payload.update(overrides)
    return payload


def text_response(text: str) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=[types.Part(text=text)]))]
    )


def image_response(*parts: types.Part) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=list(parts)))]
    )


class FakeModels:
    """Stands in for ``genai.Client().aio.models``."""

    def __init__(self, *responses: types.GenerateContentResponse) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    async def generate_content(self, *, model: str, contents: Any, config: Any = None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        return self.responses.pop(0)


def fake_client(models: FakeModels) -> Any:
    return SimpleNamespace(aio=SimpleNamespace(models=models))


class RecordingRecipes:
    def __init__(self, recipe: CocktailRecipe | None = None) -> None:
        self.recipe = recipe or CocktailRecipe.model_validate(recipe_payload())
        self.instructions: list[str] = []

    async def generate(self, instruction: str) -> CocktailRecipe:
        self.instructions.append(instruction)
        return self.recipe


class RecordingImages:
    def __init__(self, uri: str = "data:image/png;base64,AAAA", error: Exception | None = None) -> None:
        self.uri = uri
        self.error = error
        self.instructions: list[str] = []

    async def generate(self, instruction: str) -> str:
        self.instructions.append(instruction)
        if self.error is not None:
            raise self.error
        return self.uri


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(
        name="Ada",
        age_group=AgeGroup.ELDER_MILLENNIAL,
        mbti=MBTI.INTJ,
        zodiac=Zodiac.SCORPIO,
        mood="Restless but hopeful",
        preferences="No cream, loves citrus",
    )


@pytest.fixture
def recipes() -> RecordingRecipes:
    return RecordingRecipes()


@pytest.fixture
def images() -> RecordingImages:
    return RecordingImages()


@pytest.fixture
def blank_images() -> RecordingImages:
    return RecordingImages(error=ImageGenerationFailed())


def dumps(payload: dict[str, Any]) -> str:
    return json.dumps(payload)
