"""
CLI client: one cocktail session from the terminal.

Validates the profile locally (age gate, required fields, captcha) before
anything is sent to Temporal, starts a session workflow, runs ``submit``,
prints the result, then offers redo rounds until a blank critique.

Usage:
    python -m temporal_mixology.client --name Ada --age-group gen_z \\
        --mbti INTJ --zodiac Leo --mood "restless but hopeful"

    # Ignore the saved bar inventory and keep the picture:
    python -m temporal_mixology.client ... --no-inventory --image-out drink.png
"""

import argparse
import asyncio
import base64
import logging
import uuid
from pathlib import Path
from typing import Callable

from temporalio.client import Client
from temporalio.contrib.pydantic import pydantic_data_converter

from temporal_mixology.config import configure_logging, get_settings
from temporal_mixology.domain.errors import FailedVerification, ProfileValidationError
from temporal_mixology.domain.models import (
    MBTI,
    AgeGroup,
    Complete,
    Error,
    GeneratedCocktail,
    InventoryConstraint,
    RedoRequest,
    SessionSnapshot,
    SubmitRequest,
    UserProfile,
    Zodiac,
)
from temporal_mixology.domain.validation import ProfileValidator
from temporal_mixology.services.inventory import JsonInventoryStore
from temporal_mixology.workflows import CocktailSessionWorkflow

CAPTCHA_ATTEMPTS = 3

logger = logging.getLogger(__name__)


def profile_from_args(args: argparse.Namespace) -> UserProfile:
    return UserProfile(
        name=args.name,
        age_group=AgeGroup[args.age_group.upper()] if args.age_group else None,
        mbti=args.mbti,
        zodiac=args.zodiac,
        mood=args.mood,
        preferences=args.preferences,
    )


def collect_profile(
    profile: UserProfile,
    validator: ProfileValidator,
    ask: Callable[[str], str] = input,
    attempts: int = CAPTCHA_ATTEMPTS,
) -> UserProfile:
    """Ask the captcha until it is answered or ``attempts`` run out.

    Any other validation failure is raised immediately: retrying the captcha
    cannot fix it.
    """
    for attempt in range(1, attempts + 1):
        answer = ask(f"Verification: {validator.challenge.question} ")
        try:
            return validator.validate(profile, answer)
        except FailedVerification as err:
            if attempt == attempts:
                raise
            print(err.message)
    raise FailedVerification()


def render_cocktail(cocktail: GeneratedCocktail) -> str:
    lines = [cocktail.name]
    if cocktail.tagline:
        lines.append(f"  {cocktail.tagline}")
    lines += ["", cocktail.story, "", "Ingredients:"]
    lines += [f"  - {i.amount} {i.item}" for i in cocktail.ingredients]
    lines += [
        "",
        f"Glassware: {cocktail.glassware}",
        f"Garnish: {cocktail.garnish}",
        "",
        cocktail.instructions,
    ]
    return "\n".join(lines)


def save_image(data_uri: str, path: Path) -> None:
    _, _, payload = data_uri.partition(";base64,")
    path.write_bytes(base64.b64decode(payload))


def report(snapshot: SessionSnapshot, image_out: Path | None) -> None:
    state = snapshot.state
    if isinstance(state, Complete):
        print(render_cocktail(state.cocktail))
        if image_out and state.cocktail.image_url:
            save_image(state.cocktail.image_url, image_out)
            print(f"\nImage written to {image_out}")
    elif isinstance(state, Error):
        print(f"Generation Failed: {state.message}")


async def run_client(args: argparse.Namespace) -> int:
    settings = get_settings()
    configure_logging(settings)

    try:
        profile = collect_profile(profile_from_args(args), ProfileValidator())
    except ProfileValidationError as err:
        print(err.message)
        return 1

    inventory: InventoryConstraint | None = None
    if not args.no_inventory:
        inventory = JsonInventoryStore(settings.inventory_path).load().constraint()

    client = await Client.connect(settings.temporal_address, data_converter=pydantic_data_converter)
    workflow_id = f"cocktail-session-{uuid.uuid4().hex}"
    logger.info("Starting workflow %s", workflow_id)
    handle = await client.start_workflow(
        CocktailSessionWorkflow.run,
        id=workflow_id,
        task_queue=settings.task_queue,
    )

    try:
        snapshot = await handle.execute_update(
            CocktailSessionWorkflow.submit,
            SubmitRequest(profile=profile, inventory=inventory),
        )
        report(snapshot, args.image_out)

        while True:
            prompt = "\nNot quite right? Describe what to change (blank to finish): "
            critique = (await asyncio.to_thread(input, prompt)).strip()
            if not critique:
                break
            snapshot = await handle.execute_update(
                CocktailSessionWorkflow.redo,
                RedoRequest(critique=critique, inventory=inventory),
            )
            report(snapshot, args.image_out)
    finally:
        await handle.signal(CocktailSessionWorkflow.close)

    return 0 if isinstance(snapshot.state, Complete) else 2


def main() -> None:
    parser = argparse.ArgumentParser(description="Get a cocktail that matches your personality")
    parser.add_argument("--name", default="", help="What the bartender should call you")
    parser.add_argument("--age-group", choices=[g.name.lower() for g in AgeGroup], help="Your generation")
    parser.add_argument("--mbti", choices=[m.value for m in MBTI], help="MBTI type")
    parser.add_argument("--zodiac", choices=[z.value for z in Zodiac], help="Zodiac sign")
    parser.add_argument("--mood", default="", help="How you feel right now")
    parser.add_argument("--preferences", default="", help="Taste preferences or allergies")
    parser.add_argument("--no-inventory", action="store_true", help="Ignore the saved bar inventory")
    parser.add_argument("--image-out", type=Path, default=None, help="Write the generated image here")
    raise SystemExit(asyncio.run(run_client(parser.parse_args())))


if __name__ == "__main__":
    main()
