"""
Temporal workflow: CocktailSessionWorkflow.

One workflow execution is one user session. It hosts a
GenerationOrchestrator and exposes it through Temporal's message handlers:

  - **Update** ``submit`` / ``redo``: run one generation and return the
    resulting SessionSnapshot. Their validators reject the update before
    anything is scheduled when the orchestrator cannot take it (a generation
    is already in flight, or there is nothing to redo).
  - **Signal** ``reset`` / ``start_over`` / ``close``.
  - **Query** ``get_state``: read-only snapshot.

Key constraints inside a workflow:
  - Must be **deterministic**: no I/O, no randomness, no system clock.
    The orchestrator and PromptComposer obey this; the model calls happen
    in activities.
  - Use ``workflow.logger`` instead of the stdlib ``logging`` module.
"""

from datetime import timedelta

from temporalio import workflow

# RetryPolicy is attached per-activity when calling `workflow.execute_activity(...)`.
from temporalio.common import RetryPolicy

# ActivityError wraps any activity failure seen by the workflow; its `cause`
# is the ApplicationError built from the exception the activity raised.
from temporalio.exceptions import ActivityError, ApplicationError

# ── Sandbox-safe imports ─────────────────────────────────────────────
# The workflow sandbox intercepts imports to enforce determinism. Pydantic,
# google-genai (pulled in through activities -> services) and our own modules
# do nothing non-deterministic at import time, so they are passed through.
with workflow.unsafe.imports_passed_through():
    from temporal_mixology.activities import generate_image, generate_recipe
    from temporal_mixology.domain.errors import (
        GENERATION_ERRORS,
        GenerationError,
        IllegalTransition,
        ImageGenerationFailed,
        RecipeGenerationFailed,
        RedoWithoutProfile,
    )
    from temporal_mixology.domain.models import (
        CocktailRecipe,
        ImageInput,
        RecipeInput,
        RedoRequest,
        SessionSnapshot,
        SubmitRequest,
    )
    from temporal_mixology.domain.orchestrator import GenerationOrchestrator


# start_to_close_timeout: max wall-clock time for one activity attempt.
# Temporal requires a timeout; model calls are slow, so it is generous.
# A timeout reaches the orchestrator as a generation failure (Error state).
ACTIVITY_TIMEOUT = timedelta(minutes=5)

# ── Activity options ─────────────────────────────────────────────────
# maximum_attempts=1 disables Temporal's automatic retries: a failed recipe
# or image goes straight to the Error state, and the user resubmits or redoes.
ACTIVITY_OPTS = {
    "start_to_close_timeout": ACTIVITY_TIMEOUT,
    "retry_policy": RetryPolicy(maximum_attempts=1),
}


def domain_error_from(
    cause: BaseException | None,
    default: type[GenerationError],
) -> GenerationError:
    """Rebuild the domain error an activity raised from its failure cause."""
    # Temporal sets ApplicationError.type to the raised exception's class name
    if isinstance(cause, ApplicationError):
        return GENERATION_ERRORS.get(cause.type or "", default)(cause.message)
    if cause is not None and str(cause):
        return default(str(cause))
    return default()


def _rejected(err: IllegalTransition) -> ApplicationError:
    # Fails the update only; a bare RuntimeError would fail the workflow task
    return ApplicationError(str(err), type=type(err).__name__, non_retryable=True)


# ── Generators backed by activities ──────────────────────────────────
# The orchestrator only knows the RecipeGenerator / ImageGenerator protocols.
# Inside the workflow they are satisfied by these adapters, which dispatch
# the activity and suspend until it completes or fails.


class ActivityRecipeGenerator:
    async def generate(self, instruction: str) -> CocktailRecipe:
        try:
            return await workflow.execute_activity(
                generate_recipe,
                RecipeInput(instruction=instruction),
                **ACTIVITY_OPTS,
            )
        except ActivityError as err:
            raise domain_error_from(err.cause, RecipeGenerationFailed) from err


class ActivityImageGenerator:
    async def generate(self, instruction: str) -> str:
        try:
            return await workflow.execute_activity(
                generate_image,
                ImageInput(instruction=instruction),
                **ACTIVITY_OPTS,
            )
        except ActivityError as err:
            raise domain_error_from(err.cause, ImageGenerationFailed) from err


@workflow.defn
class CocktailSessionWorkflow:
    """Keeps a cocktail session alive until ``close`` is signalled.

    Execution flow per generation (driven by an update):
        1. Compose the recipe instruction (deterministic, in-workflow)
        2. generate_recipe activity  → GeminiRecipeService
        3. Compose the image instruction from the recipe's visual description
        4. generate_image activity   → GeminiImageService
    """

    def __init__(self) -> None:
        # Workflow instance state; Temporal rebuilds it on replay.
        self.orchestrator = GenerationOrchestrator(
            ActivityRecipeGenerator(),
            ActivityImageGenerator(),
            log=workflow.logger,
        )
        self.closed = False

    # ── Updates ──────────────────────────────────────────────────
    # An **update** is a request/response message: the caller waits for the
    # handler to finish and receives its return value (here the snapshot
    # after the generation). The **validator** runs first, synchronously and
    # without side effects; raising there rejects the update before it is
    # written to history, so no activity is ever scheduled for it.

    @workflow.update
    async def submit(self, req: SubmitRequest) -> SessionSnapshot:
        try:
            await self.orchestrator.submit(req.profile, req.inventory)
        except IllegalTransition as err:
            # Two updates validated in the same activation; the second loses
            raise _rejected(err) from err
        return self.orchestrator.snapshot()

    @submit.validator
    def validate_submit(self, req: SubmitRequest) -> None:
        if self.closed:
            raise IllegalTransition("session is closed")
        if not self.orchestrator.can_submit:
            raise IllegalTransition(f"cannot submit from {self.orchestrator.state.status}")

    @workflow.update
    async def redo(self, req: RedoRequest) -> SessionSnapshot:
        try:
            await self.orchestrator.redo(req.critique, req.inventory)
        except IllegalTransition as err:
            raise _rejected(err) from err
        return self.orchestrator.snapshot()

    @redo.validator
    def validate_redo(self, req: RedoRequest) -> None:
        if self.closed:
            raise IllegalTransition("session is closed")
        # Nothing was ever submitted: a caller bug, rejected before any activity
        if self.orchestrator.retry_profile is None:
            raise RedoWithoutProfile()
        if not self.orchestrator.can_redo:
            raise IllegalTransition(f"cannot redo from {self.orchestrator.state.status}")

    # ── Signals ──────────────────────────────────────────────────
    # A **signal** is a fire-and-forget message: it mutates workflow state
    # but returns nothing to the sender. Signals arriving mid-generation are
    # ignored rather than failing the workflow task.

    @workflow.signal
    def reset(self) -> None:
        if not self.orchestrator.busy:
            self.orchestrator.reset()

    @workflow.signal
    def start_over(self) -> None:
        if not self.orchestrator.busy:
            self.orchestrator.start_over()

    @workflow.signal
    def close(self) -> None:
        self.closed = True

    # ── Query ────────────────────────────────────────────────────
    # A **query** is a synchronous, read-only inspection of workflow state.
    # It MUST NOT mutate state or perform side-effects.

    @workflow.query
    def get_state(self) -> SessionSnapshot:
        return self.orchestrator.snapshot()

    # ── Run (session lifetime) ───────────────────────────────────

    @workflow.run
    async def run(self) -> SessionSnapshot:
        workflow.logger.info("Cocktail session %s started", workflow.info().workflow_id)
        # Accepted updates whose handlers have not started yet are not "busy";
        # all_handlers_finished() covers them so none is dropped on close.
        await workflow.wait_condition(
            lambda: self.closed and not self.orchestrator.busy and workflow.all_handlers_finished()
        )
        workflow.logger.info("Cocktail session %s closed", workflow.info().workflow_id)
        return self.orchestrator.snapshot()
