"""
Diagram markup helpers.

Cleans raw LLM output into markup, validates simple (Mermaid) markup,
and repairs common D2 problems before rendering.

Dependencies: re
System role: Markup parsing and cleanup for the render pipeline
"""

import re

CODE_FENCE = re.compile(r"```[\w-]*[ \t]*\n?")
D2_PADDING = re.compile(r"\s*padding\s*:\s*\d+\s*")

MERMAID_HEADERS = (
    "graph", "flowchart", "sequenceDiagram", "classDiagram", "stateDiagram",
    "stateDiagram-v2", "erDiagram", "journey", "gantt", "pie", "mindmap",
)


def strip_code_fences(raw: str) -> str:
    """Remove enclosing ``` markers (with or without a language tag)."""
    return CODE_FENCE.sub("", raw or "").strip()


def is_valid_simple_markup(markup: str, min_length: int) -> bool:
    """Mermaid markup is accepted when long enough and opens with a diagram header."""
    text = (markup or "").strip()
    if len(text) < min_length:
        return False
    first_line = next((line.strip() for line in text.splitlines() if line.strip()), "")
    return first_line.split(" ")[0] in MERMAID_HEADERS


def preprocess_d2(markup: str) -> str:
    """Drop unsupported ``padding`` properties and close unbalanced braces."""
    content = D2_PADDING.sub("\n", markup)
    missing = content.count("{") - content.count("}")
    if missing > 0:
        content = content.rstrip() + "\n}" * missing
    return content.strip() + "\n"


def comment_title(markup: str) -> str | None:
    """First ``# comment`` line, used as a title hint."""
    match = re.search(r"^\s*#\s*(.+)$", markup or "", re.MULTILINE)
    return match.group(1).strip() if match else None
