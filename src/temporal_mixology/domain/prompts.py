"""
Prompt composition.

Everything here is a pure function of its inputs: the same profile,
inventory and critique always produce the same instruction string. That
matters because composition runs inside the Temporal workflow, which must
be deterministic on replay.
"""

from temporal_mixology.domain.models import (
    STAPLES,
    AgeGroup,
    InventoryConstraint,
    UserProfile,
)

BARTENDER_PERSONA = (
    "You are a sophisticated AI bartender. You are witty, insightful, and "
    "knowledgeable about flavor profiles across different generations."
)

TREND_FORWARD = (
    "Lean towards trendy, highly visual (instagrammable), perhaps sweeter, "
    "lower ABV or unique fusion flavors (yuzu, matcha, elderflower)."
)
BALANCED_CRAFT = "Balanced craft cocktails, fresh ingredients, nostalgic twists."
SPIRIT_FORWARD = "Sophisticated, spirit-forward, complex bitters, classic riffs."
TIMELESS_CLASSIC = (
    "Timeless classics, simple execution, premium spirits, recognizable profiles."
)

# Fixed lookup; UNDERAGE never gets this far.
AGE_STYLE_TIERS: dict[AgeGroup, str] = {
    AgeGroup.GEN_Z: TREND_FORWARD,
    AgeGroup.ZENNIAL: TREND_FORWARD,
    AgeGroup.CORE_MILLENNIAL: BALANCED_CRAFT,
    AgeGroup.ELDER_MILLENNIAL: SPIRIT_FORWARD,
    AgeGroup.GEN_X: SPIRIT_FORWARD,
    AgeGroup.BOOMER: TIMELESS_CLASSIC,
}

IMAGE_TEMPLATE = (
    "Professional food and drink photography, 8k resolution, cinematic lighting. "
    "{visual_description}. photorealistic, condensation on glass, dramatic shadows, "
    "shallow depth of field."
)


def _value(field: object) -> str:
    return "" if field is None else str(getattr(field, "value", field))


def _staples() -> str:
    *head, last = STAPLES
    return f"{', '.join(head)}, and {last}"


class PromptComposer:
    """Builds the recipe and image instructions sent to the generative models."""

    def compose_recipe_instruction(
        self,
        profile: UserProfile,
        inventory: InventoryConstraint | None = None,
        critique: str | None = None,
    ) -> str:
        age_group = _value(profile.age_group)
        sections = [
            "Act as a world-class master mixologist and psychologist.\n"
            "Create a bespoke cocktail recipe based on the following user profile:\n"
            f"Name: {profile.name}\n"
            f"Age Generation: {age_group}\n"
            f"MBTI: {_value(profile.mbti)}\n"
            f"Zodiac: {_value(profile.zodiac)}\n"
            f"Current Mood: {profile.mood}\n"
            f"Taste Preferences/Allergies: {profile.preferences}"
        ]

        inventory_clause = self.inventory_clause(inventory)
        if inventory_clause:
            sections.append(inventory_clause)
        if critique and critique.strip():
            sections.append(self.critique_clause(critique))

        sections.append("The drink should be physically possible to make but creative.")
        sections.append(self.style_clause(profile.age_group))
        sections.append(
            "The 'story' should connect the ingredients and style to their "
            "personality traits, age vibe, and mood.\n"
            "The 'visualDescription' must be vivid and specific for an image generator."
        )
        return "\n\n".join(sections)

    def inventory_clause(self, inventory: InventoryConstraint | None) -> str:
        if inventory is None or not inventory.items:
            return ""
        listed = ", ".join(inventory.items)
        if inventory.strict:
            return (
                "STRICT INVENTORY CONSTRAINT:\n"
                "You are serving from a limited bar. You MUST ONLY use the ingredients "
                "listed below. DO NOT introduce new spirits or mixers not in this list. "
                f"Common household staples like {_staples()} are assumed available "
                "even if not listed.\n"
                f"AVAILABLE INVENTORY: {listed}\n"
                "If a perfect match for the user's profile is not possible with these "
                "ingredients, create the best possible approximation or a creative "
                "fusion using ONLY what is available."
            )
        return (
            "INVENTORY PREFERENCE:\n"
            f"The user has the following ingredients available: {listed}.\n"
            "Prioritize using these ingredients if they fit the profile, but feel "
            "free to add other common ingredients if necessary to make a better drink."
        )

    def critique_clause(self, critique: str) -> str:
        return (
            "IMPORTANT: This is a REGENERATION request. The user rejected the previous "
            f'recipe with the following feedback: "{critique}".\n'
            "You MUST adjust the new recipe to address this critique specifically "
            '(e.g., if they said "too sweet", make it dry/bitter; if they disliked a '
            "spirit, swap it).\n"
            "Acknowledge the change subtly in the 'story' if appropriate."
        )

    def style_clause(self, age_group: AgeGroup | None) -> str:
        guidance = AGE_STYLE_TIERS.get(age_group, BALANCED_CRAFT)
        return (
            f"CRITICAL: Adapt the recipe style to the user's generation "
            f"({_value(age_group)}). {guidance}"
        )

    def compose_image_instruction(self, visual_description: str) -> str:
        return IMAGE_TEMPLATE.format(visual_description=visual_description.strip())
