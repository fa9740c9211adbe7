"""Prompt templates for the scene analysis model.

    from services.prompts import SCENE_ANALYZER_V1, strip_markdown_code_blocks
"""

from services.prompts._base import strip_markdown_code_blocks
from services.prompts.scene_analysis import SCENE_ANALYZER_SYSTEM, SCENE_ANALYZER_V1

# Increment when a prompt changes so stored analyses can be told apart
PROMPT_VERSIONS = {
    "analyze_scene": "v1",
}

__all__ = [
    "strip_markdown_code_blocks",
    "PROMPT_VERSIONS",
    "SCENE_ANALYZER_SYSTEM",
    "SCENE_ANALYZER_V1",
]
