"""Tool category resolution and enhancement template selection.

Free-form target labels (platform names, tool names, category slugs) are mapped
onto a closed set of :class:`ToolCategory` members. Each member owns exactly one
instruction template from :mod:`prompt_templates`; anything unrecognised falls
back to :attr:`ToolCategory.GENERAL`.

Updates:
  v0.2.0 - 2026-01-08 - Recognise tool names (Midjourney, Sora, Cursor, ...) as aliases.
  v0.1.1 - 2025-12-20 - Accept legacy slugs such as ``linkedin-post-generator``.
  v0.1.0 - 2025-12-12 - Introduce ToolCategory enum with exhaustive template match.
"""

from __future__ import annotations

import re
from enum import StrEnum

from prompt_templates import (
    FACEBOOK_POST_PROMPT,
    GENERAL_PROMPT,
    IMAGE_GENERATOR_PROMPT,
    INSTAGRAM_POST_PROMPT,
    LINKEDIN_POST_PROMPT,
    SOFTWARE_DEVELOPMENT_PROMPT,
    TEXT_GENERATOR_PROMPT,
    TWITTER_POST_PROMPT,
    VIDEO_GENERATOR_PROMPT,
    compose_system_prompt,
)

_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")


class ToolCategory(StrEnum):
    """Closed set of platform groupings used to pick an instruction template."""

    IMAGE = "image"
    VIDEO = "video"
    TEXT = "text"
    SOFTWARE_DEVELOPMENT = "software-development"
    LINKEDIN = "linkedin"
    FACEBOOK = "facebook"
    TWITTER = "twitter"
    INSTAGRAM = "instagram"
    GENERAL = "general"


TOOL_CATEGORY_NAMES: dict[ToolCategory, str] = {
    ToolCategory.IMAGE: "Image",
    ToolCategory.VIDEO: "Video",
    ToolCategory.TEXT: "Chat & Writing",
    ToolCategory.SOFTWARE_DEVELOPMENT: "Code",
    ToolCategory.LINKEDIN: "LinkedIn Post",
    ToolCategory.FACEBOOK: "Facebook Post",
    ToolCategory.TWITTER: "Twitter (X) Post",
    ToolCategory.INSTAGRAM: "Instagram Post",
    ToolCategory.GENERAL: "General",
}

TOOL_CATEGORY_DESCRIPTIONS: dict[ToolCategory, str] = {
    ToolCategory.IMAGE: (
        "(Nano Banana, Midjourney, Stable Diffusion, DALL-E 3, Flux, Leonardo AI, "
        "Ideogram, Niji, etc.)"
    ),
    ToolCategory.VIDEO: "(Sora, Runway, Luma, Kling, Pika, Haiper, etc.)",
    ToolCategory.TEXT: "(ChatGPT, Gemini, Claude, DeepSeek, etc.)",
    ToolCategory.SOFTWARE_DEVELOPMENT: "(GitHub Copilot, Cursor, Windsurf, Codeium, etc.)",
    ToolCategory.LINKEDIN: "(Professional LinkedIn post)",
    ToolCategory.FACEBOOK: "(Create engaging Facebook post)",
    ToolCategory.TWITTER: "(Compose catchy Twitter (X) tweet)",
    ToolCategory.INSTAGRAM: "(Write compelling Instagram captions with hashtags)",
    ToolCategory.GENERAL: "(ChatGPT, Gemini, Claude, etc.)",
}

# Whole-label aliases, compared after lowercasing and trimming.
_LABEL_ALIASES: dict[str, ToolCategory] = {
    "image-generator": ToolCategory.IMAGE,
    "video-generator": ToolCategory.VIDEO,
    "text-generator": ToolCategory.TEXT,
    "software-development-assistant": ToolCategory.SOFTWARE_DEVELOPMENT,
    "linkedin-post-generator": ToolCategory.LINKEDIN,
    "facebook-post-creator": ToolCategory.FACEBOOK,
    "twitter-post-creator": ToolCategory.TWITTER,
    "instagram-post-generator": ToolCategory.INSTAGRAM,
    "x": ToolCategory.TWITTER,
    "dall-e": ToolCategory.IMAGE,
    "dall-e 3": ToolCategory.IMAGE,
    "nano banana": ToolCategory.IMAGE,
    "stable diffusion": ToolCategory.IMAGE,
    "leonardo ai": ToolCategory.IMAGE,
    "github copilot": ToolCategory.SOFTWARE_DEVELOPMENT,
}

# Single-word aliases matched against the individual words of a label.
_TOKEN_ALIASES: dict[str, ToolCategory] = {
    "image": ToolCategory.IMAGE,
    "midjourney": ToolCategory.IMAGE,
    "dalle": ToolCategory.IMAGE,
    "flux": ToolCategory.IMAGE,
    "ideogram": ToolCategory.IMAGE,
    "niji": ToolCategory.IMAGE,
    "video": ToolCategory.VIDEO,
    "sora": ToolCategory.VIDEO,
    "runway": ToolCategory.VIDEO,
    "luma": ToolCategory.VIDEO,
    "kling": ToolCategory.VIDEO,
    "pika": ToolCategory.VIDEO,
    "haiper": ToolCategory.VIDEO,
    "text": ToolCategory.TEXT,
    "chatgpt": ToolCategory.TEXT,
    "gemini": ToolCategory.TEXT,
    "claude": ToolCategory.TEXT,
    "deepseek": ToolCategory.TEXT,
    "writing": ToolCategory.TEXT,
    "code": ToolCategory.SOFTWARE_DEVELOPMENT,
    "development": ToolCategory.SOFTWARE_DEVELOPMENT,
    "copilot": ToolCategory.SOFTWARE_DEVELOPMENT,
    "cursor": ToolCategory.SOFTWARE_DEVELOPMENT,
    "windsurf": ToolCategory.SOFTWARE_DEVELOPMENT,
    "codeium": ToolCategory.SOFTWARE_DEVELOPMENT,
    "linkedin": ToolCategory.LINKEDIN,
    "facebook": ToolCategory.FACEBOOK,
    "twitter": ToolCategory.TWITTER,
    "tweet": ToolCategory.TWITTER,
    "instagram": ToolCategory.INSTAGRAM,
    "general": ToolCategory.GENERAL,
}


def resolve_category(target: str) -> ToolCategory:
    """Return the :class:`ToolCategory` for a free-form *target* label."""

    normalized = (target or "").strip().lower()
    if not normalized:
        return ToolCategory.GENERAL
    try:
        return ToolCategory(normalized)
    except ValueError:
        pass
    alias = _LABEL_ALIASES.get(normalized)
    if alias is not None:
        return alias
    for category, name in TOOL_CATEGORY_NAMES.items():
        if name.lower() == normalized:
            return category
    for token in _TOKEN_SPLIT.split(normalized):
        alias = _TOKEN_ALIASES.get(token)
        if alias is not None:
            return alias
    return ToolCategory.GENERAL


def instruction_for(category: ToolCategory | str) -> str:
    """Return the category-specific instruction block without the guard suffix."""

    try:
        resolved = ToolCategory(category)
    except ValueError:
        resolved = ToolCategory.GENERAL
    match resolved:
        case ToolCategory.IMAGE:
            return IMAGE_GENERATOR_PROMPT
        case ToolCategory.VIDEO:
            return VIDEO_GENERATOR_PROMPT
        case ToolCategory.TEXT:
            return TEXT_GENERATOR_PROMPT
        case ToolCategory.SOFTWARE_DEVELOPMENT:
            return SOFTWARE_DEVELOPMENT_PROMPT
        case ToolCategory.LINKEDIN:
            return LINKEDIN_POST_PROMPT
        case ToolCategory.FACEBOOK:
            return FACEBOOK_POST_PROMPT
        case ToolCategory.TWITTER:
            return TWITTER_POST_PROMPT
        case ToolCategory.INSTAGRAM:
            return INSTAGRAM_POST_PROMPT
        case ToolCategory.GENERAL:
            return GENERAL_PROMPT


def system_prompt_for(category: ToolCategory | str) -> str:
    """Return the full system prompt (instruction, rewrite guard, example)."""

    return compose_system_prompt(instruction_for(category))


def list_tool_categories() -> list[dict[str, str]]:
    """Return categories in display order with labels and descriptions."""

    return [
        {
            "value": category.value,
            "label": TOOL_CATEGORY_NAMES[category],
            "description": TOOL_CATEGORY_DESCRIPTIONS[category],
        }
        for category in ToolCategory
    ]


__all__ = [
    "TOOL_CATEGORY_DESCRIPTIONS",
    "TOOL_CATEGORY_NAMES",
    "ToolCategory",
    "instruction_for",
    "list_tool_categories",
    "resolve_category",
    "system_prompt_for",
]
