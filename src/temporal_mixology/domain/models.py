"""
Domain models for the cocktail generation workflow.

All models use Pydantic v2 BaseModel for validation and serialization.
Temporal transmits workflow/activity inputs and outputs as JSON payloads, so
every model here must round-trip through the pydantic_data_converter that
both the worker and the client are configured with.

Wire names are camelCase (``visualDescription``, ``imageUrl``) to match the
structured-output schema sent to the text model; Python attributes stay
snake_case via the ``to_camel`` alias generator.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class AgeGroup(str, Enum):
    """Generational eras offered by the profile form.

    The values are what the text model sees, so they carry the age range.
    """

    UNDERAGE = "underage"  # Reserved tag: never allowed to generate
    GEN_Z = "Gen Z (Ages 21-25)"
    ZENNIAL = "Zennial (Ages 26-30)"
    CORE_MILLENNIAL = "Core Millennial (Ages 31-35)"
    ELDER_MILLENNIAL = "Elder Millennial (Ages 36-44)"
    GEN_X = "Gen X (Ages 45-60)"
    BOOMER = "Boomer (Ages 61+)"

    @property
    def label(self) -> str:
        return AGE_GROUP_LABELS[self]


AGE_GROUP_LABELS: dict[AgeGroup, str] = {
    AgeGroup.UNDERAGE: "Born 2004 or later (Under 21)",
    AgeGroup.GEN_Z: "Gen Z (Born 2000 - 2003)",
    AgeGroup.ZENNIAL: "Zennial / Late Millennial (1995 - 1999)",
    AgeGroup.CORE_MILLENNIAL: "Core Millennial (1990 - 1994)",
    AgeGroup.ELDER_MILLENNIAL: "Elder Millennial (1981 - 1989)",
    AgeGroup.GEN_X: "Gen X (1965 - 1980)",
    AgeGroup.BOOMER: "Boomer & Beyond (Born 1964 or earlier)",
}


class MBTI(str, Enum):
    ENFJ = "ENFJ"
    ENFP = "ENFP"
    ENTJ = "ENTJ"
    ENTP = "ENTP"
    ESFJ = "ESFJ"
    ESFP = "ESFP"
    ESTJ = "ESTJ"
    ESTP = "ESTP"
    INFJ = "INFJ"
    INFP = "INFP"
    INTJ = "INTJ"
    INTP = "INTP"
    ISFJ = "ISFJ"
    ISFP = "ISFP"
    ISTJ = "ISTJ"
    ISTP = "ISTP"


class Zodiac(str, Enum):
    CAPRICORN = "Capricorn"
    AQUARIUS = "Aquarius"
    PISCES = "Pisces"
    ARIES = "Aries"
    TAURUS = "Taurus"
    GEMINI = "Gemini"
    CANCER = "Cancer"
    LEO = "Leo"
    VIRGO = "Virgo"
    LIBRA = "Libra"
    SCORPIO = "Scorpio"
    SAGITTARIUS = "Sagittarius"


# ── Inputs ───────────────────────────────────────────────────────────


class UserProfile(BaseModel):
    """What the user tells the bartender about themselves.

    Frozen: a new submission is a new value. Selections may be unset here;
    ProfileValidator decides whether the profile is good enough to generate.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""                     # What the bartender calls you
    age_group: AgeGroup | None = None  # Drives the style tier
    mbti: MBTI | None = None           # One of the 16 personality codes
    zodiac: Zodiac | None = None       # One of the 12 signs
    mood: str = ""                     # How the user feels right now
    preferences: str = ""  # Taste preferences / allergies, may be empty

    @field_validator("age_group", "mbti", "zodiac", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: object) -> object:
        # Form selects post "" for "nothing chosen yet"
        if isinstance(value, str) and not value.strip():
            return None
        return value


STAPLES: tuple[str, ...] = ("Sugar", "Water", "Salt", "Ice")


class InventoryConstraint(BaseModel):
    """Ingredients the bar has on hand, supplied per generation call.

    ``items`` behaves as a set (duplicates dropped, case-sensitive) but keeps
    entry order so composed instructions are deterministic.
    """

    model_config = ConfigDict(frozen=True)

    items: tuple[str, ...] = ()
    strict: bool = False  # Forbid anything outside items + STAPLES

    @field_validator("items", mode="after")
    @classmethod
    def _dedupe(cls, items: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(items))


# ── Generation results ───────────────────────────────────────────────


class Ingredient(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    item: str = Field(..., min_length=1)    # Liquor, mixer, fruit, ...
    amount: str = Field(..., min_length=1)  # Quantity with units, e.g. "60ml", "1 dash", "top up"


class CocktailRecipe(BaseModel):
    """Structured recipe returned by the text model. Never mutated."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,   # visual_description <-> visualDescription
        populate_by_name=True,      # Accept either spelling on input
        str_strip_whitespace=True,  # "   " counts as blank
    )

    name: str = Field(..., min_length=1)          # Creative name of the drink
    tagline: str | None = None                    # Optional slogan
    story: str = Field(..., min_length=1)         # Why it fits the profile and mood
    ingredients: list[Ingredient] = Field(..., min_length=1)  # Generation order, kept for display
    glassware: str = Field(..., min_length=1)     # Glass to serve in
    garnish: str = Field(..., min_length=1)       # Garnish details
    instructions: str = Field(..., min_length=1)  # Step-by-step preparation
    visual_description: str = Field(..., min_length=1)  # Seed for the image model


class GeneratedCocktail(CocktailRecipe):
    """A recipe with the image attached (``imageUrl`` is a data URI)."""

    image_url: str | None = None


# ── Generation state (tagged variant) ────────────────────────────────


class Idle(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["IDLE"] = "IDLE"


class GeneratingRecipe(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["GENERATING_RECIPE"] = "GENERATING_RECIPE"


class GeneratingImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["GENERATING_IMAGE"] = "GENERATING_IMAGE"


class Complete(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["COMPLETE"] = "COMPLETE"
    cocktail: GeneratedCocktail  # Recipe + image, both succeeded


class Error(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["ERROR"] = "ERROR"
    message: str  # Human-readable, shown to the user as is


GenerationState = Annotated[
    Union[Idle, GeneratingRecipe, GeneratingImage, Complete, Error],
    Field(discriminator="status"),
]

IN_FLIGHT = (GeneratingRecipe, GeneratingImage)


# ── Workflow input / output ──────────────────────────────────────────


class SubmitRequest(BaseModel):
    """Input to the ``submit`` update: an already-validated profile."""

    profile: UserProfile                          # Becomes the retry profile
    inventory: InventoryConstraint | None = None  # None: no inventory clause


class RedoRequest(BaseModel):
    """Input to the ``redo`` update: critique of the last result."""

    critique: str                                 # Free-text feedback on the last drink
    inventory: InventoryConstraint | None = None  # May differ from the original submit


class SessionSnapshot(BaseModel):
    """Returned by updates and the ``get_state`` query."""

    state: GenerationState          # Exactly one variant at a time
    has_retry_profile: bool = False  # True once a submit has been accepted (redo is possible)


# ── Activity payload models ──────────────────────────────────────────


class RecipeInput(BaseModel):
    """Payload for the generate_recipe activity."""

    instruction: str = Field(..., min_length=1)


class ImageInput(BaseModel):
    """Payload for the generate_image activity."""

    instruction: str = Field(..., min_length=1)
