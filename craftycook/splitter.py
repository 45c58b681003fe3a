"""
Quick-create content organizer.

Splits one block of free text into an items list (ingredients for recipes,
materials for DIY projects) and an ordered steps list. The rules are a
best-effort heuristic and the product tells users to review the result.
"""

import re
from dataclasses import dataclass, field
from typing import List

ACTION_WORDS = (
    "mix",
    "add",
    "pour",
    "bake",
    "cook",
    "heat",
    "stir",
    "combine",
    "cut",
    "chop",
    "assemble",
    "attach",
    "glue",
    "paint",
    "drill",
    "screw",
    "nail",
    "measure",
)

ORDINAL_RE = re.compile(r"^\d+[.)]\s")
MAX_FALLBACK_ITEMS = 3


@dataclass
class SplitResult:
    items: List[str] = field(default_factory=list)
    steps: List[str] = field(default_factory=list)


def content_lines(text: str) -> List[str]:
    return [line.strip() for line in (text or "").split("\n") if line.strip()]


def looks_like_step(line: str) -> bool:
    # Plain substring match: "address" counts as "add".
    lowered = line.lower()
    return bool(ORDINAL_RE.match(line.strip())) or any(word in lowered for word in ACTION_WORDS) or "step" in lowered


def find_split_point(lines: List[str]) -> int:
    for idx, line in enumerate(lines):
        if looks_like_step(line):
            return idx
    return len(lines) // 2


def split_content(text: str, post_type: str = "recipe") -> SplitResult:
    """Organize free text into items and steps. Never raises.

    ``post_type`` only decides what the caller calls the items; the split is
    the same for recipes and DIY projects. An empty ``steps`` list means the
    input had no usable lines and the caller should reject it.
    """
    lines = content_lines(text)
    split_at = find_split_point(lines)

    items = [
        line
        for line in lines[:split_at]
        if "ingredient" not in line.lower() and "material" not in line.lower()
    ]
    steps = [
        line
        for line in lines[split_at:]
        if "step" not in line.lower() and "instruction" not in line.lower()
    ]

    if not items and len(lines) > 1:
        take = min(MAX_FALLBACK_ITEMS, len(lines) // 2)
        items = lines[:take]
        steps = lines[take:]

    if not steps:
        steps = list(lines)

    return SplitResult(items=items, steps=steps)
