"""Shared helpers for prompt modules."""

import re

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")


def strip_markdown_code_blocks(text: str) -> str:
    """Strip a surrounding markdown code fence (```json, ```, ...) from model output.

    Args:
        text: Raw text that may be wrapped in a code fence

    Returns:
        The inner text, stripped of whitespace
    """
    return _CODE_FENCE.sub("", text.strip()).strip()
