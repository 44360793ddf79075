"""
GenerationOrchestrator: the state machine behind one cocktail session.

    Idle ──submit──▶ GeneratingRecipe ──▶ GeneratingImage ──▶ Complete
                           │                    │
                           └──────failure───────┴──────▶ Error
    Complete / Error ──redo(critique)──▶ GeneratingRecipe
    Complete / Error ──reset──▶ Idle

The orchestrator only talks to the outside world through the
``RecipeGenerator`` and ``ImageGenerator`` protocols, so it runs unchanged
inside a Temporal workflow (where the generators dispatch activities) and in
tests (where they return fixtures). It must stay deterministic: no I/O, no
randomness, no clock.
"""

import logging
from typing import Callable, Protocol

from temporal_mixology.domain.errors import (
    FALLBACK_MESSAGE,
    IllegalTransition,
    RedoWithoutProfile,
)
from temporal_mixology.domain.models import (
    IN_FLIGHT,
    CocktailRecipe,
    Complete,
    Error,
    GeneratedCocktail,
    GeneratingImage,
    GeneratingRecipe,
    GenerationState,
    Idle,
    InventoryConstraint,
    SessionSnapshot,
    UserProfile,
)
from temporal_mixology.domain.prompts import PromptComposer

logger = logging.getLogger(__name__)


class RecipeGenerator(Protocol):
    """Turns a recipe instruction into a structured recipe, or raises."""

    async def generate(self, instruction: str) -> CocktailRecipe: ...


class ImageGenerator(Protocol):
    """Turns an image instruction into a ``data:`` URI, or raises."""

    async def generate(self, instruction: str) -> str: ...


TransitionListener = Callable[[GenerationState], None]


class GenerationOrchestrator:
    """Owns GenerationState and the retry profile for a single session.

    Only one generation may run at a time; ``submit`` and ``redo`` raise
    IllegalTransition when called mid-flight. Generation failures never
    raise out of ``submit``/``redo``: they become the Error state.
    """

    def __init__(
        self,
        recipes: RecipeGenerator,
        images: ImageGenerator,
        composer: PromptComposer | None = None,
        *,
        log: logging.Logger | logging.LoggerAdapter | None = None,
        on_transition: TransitionListener | None = None,
    ) -> None:
        self.recipes = recipes
        self.images = images
        self.composer = composer or PromptComposer()
        self.log = log or logger
        self.on_transition = on_transition
        self._state: GenerationState = Idle()
        self._retry_profile: UserProfile | None = None

    # ── Inspection ───────────────────────────────────────────────

    @property
    def state(self) -> GenerationState:
        return self._state

    @property
    def retry_profile(self) -> UserProfile | None:
        return self._retry_profile

    @property
    def busy(self) -> bool:
        return isinstance(self._state, IN_FLIGHT)

    @property
    def can_submit(self) -> bool:
        return isinstance(self._state, Idle)

    @property
    def can_redo(self) -> bool:
        return self._retry_profile is not None and isinstance(self._state, (Complete, Error))

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(state=self._state, has_retry_profile=self._retry_profile is not None)

    # ── Transitions ──────────────────────────────────────────────

    async def submit(
        self,
        profile: UserProfile,
        inventory: InventoryConstraint | None = None,
    ) -> GenerationState:
        """Start a fresh generation for an already-validated profile."""
        if not self.can_submit:
            raise IllegalTransition(f"cannot submit from {self._state.status}")
        self._retry_profile = profile
        return await self._generate(profile, inventory, critique=None)

    async def redo(
        self,
        critique: str,
        inventory: InventoryConstraint | None = None,
    ) -> GenerationState:
        """Regenerate for the retained profile, steered by ``critique``.

        The retry profile is left untouched so a redo can follow a redo.
        """
        if self._retry_profile is None:
            raise RedoWithoutProfile()
        if not self.can_redo:
            raise IllegalTransition(f"cannot redo from {self._state.status}")
        return await self._generate(self._retry_profile, inventory, critique=critique)

    def reset(self) -> GenerationState:
        """Back to Idle, keeping the retry profile."""
        if self.busy:
            raise IllegalTransition(f"cannot reset from {self._state.status}")
        if not isinstance(self._state, Idle):
            self._transition(Idle())
        return self._state

    def start_over(self) -> GenerationState:
        """Back to Idle and forget the retry profile."""
        self.reset()
        self._retry_profile = None
        return self._state

    # ── Internals ────────────────────────────────────────────────

    def _transition(self, new: GenerationState) -> None:
        self.log.info("Generation state %s -> %s", self._state.status, new.status)
        self._state = new
        if self.on_transition is not None:
            self.on_transition(new)

    async def _generate(
        self,
        profile: UserProfile,
        inventory: InventoryConstraint | None,
        critique: str | None,
    ) -> GenerationState:
        self._transition(GeneratingRecipe())
        try:
            instruction = self.composer.compose_recipe_instruction(profile, inventory, critique)
            recipe = await self.recipes.generate(instruction)

            self._transition(GeneratingImage())
            image_instruction = self.composer.compose_image_instruction(recipe.visual_description)
            image_url = await self.images.generate(image_instruction)

            cocktail = GeneratedCocktail.model_validate({**recipe.model_dump(), "image_url": image_url})
        except Exception as exc:
            # A recipe without its image is not a result; discard it
            self.log.warning("Generation failed: %s", exc)
            self._transition(Error(message=str(exc) or FALLBACK_MESSAGE))
        else:
            self._transition(Complete(cocktail=cocktail))
        finally:
            if self.busy:
                self._transition(Error(message=FALLBACK_MESSAGE))
        return self._state
