"""
Error taxonomy.

Validation errors are raised before anything reaches the orchestrator and
are recoverable by fixing the input. Generation errors end up as the
orchestrator's Error state. Programming errors (RuntimeError subclasses)
signal a caller driving the state machine through an illegal transition.
"""

FALLBACK_MESSAGE = "The spirits were silent. Please try again."


class MixologyError(Exception):
    """Base class for user-facing failures."""

    default_message = FALLBACK_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


# ── Validation (pre-generation) ──────────────────────────────────────


class ProfileValidationError(MixologyError):
    pass


class AgeRestricted(ProfileValidationError):
    default_message = (
        "We adhere to responsible drinking standards. "
        "You must be 21 or older to use this application."
    )


class MissingRequiredSelection(ProfileValidationError):
    default_message = "Please fill in all required fields (Age, Zodiac, and MBTI)."


class MissingRequiredText(ProfileValidationError):
    default_message = "Please fill in all required fields (Name and Mood)."


class FailedVerification(ProfileValidationError):
    default_message = "Incorrect verification answer. Please try again."


# ── Generation ───────────────────────────────────────────────────────


class GenerationError(MixologyError):
    pass


class RecipeGenerationFailed(GenerationError):
    default_message = "No recipe generated"


class RecipeParseFailed(GenerationError):
    default_message = "The recipe could not be read."


class ImageGenerationFailed(GenerationError):
    default_message = "No image generated in the response"


GENERATION_ERRORS: dict[str, type[GenerationError]] = {
    cls.__name__: cls
    for cls in (RecipeGenerationFailed, RecipeParseFailed, ImageGenerationFailed)
}


# ── Programming errors ───────────────────────────────────────────────


class IllegalTransition(RuntimeError):
    """The orchestrator was asked to move somewhere its state forbids."""


class RedoWithoutProfile(IllegalTransition):
    def __init__(self) -> None:
        super().__init__("redo requires a prior successful submission")
