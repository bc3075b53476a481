"""
Skill comparison for the matching engine.

Skills are free text. Two skills match when their normalized forms are
equal, when they are spellings of the same skill in ``SKILL_SYNONYMS``,
or when one contains the other (ignoring very short fragments).
"""

import re
from collections.abc import Iterable
from typing import Final, Optional

from o1match.utils.constants import MIN_PARTIAL_SKILL_LENGTH, SKILL_SYMBOL_SPELLINGS, SKILL_SYNONYMS

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_skill(skill: str) -> str:
    """
    Lowercase and drop everything but letters and digits.

    Symbol spellings such as ``C#`` and ``C++`` are spelled out first so they
    stay distinct from each other and from ``C``.
    """
    text = skill.lower()
    for symbol, word in SKILL_SYMBOL_SPELLINGS.items():
        text = text.replace(symbol, word)
    return _NON_ALNUM.sub("", text)


def _build_synonym_index() -> dict[str, frozenset[str]]:
    index: dict[str, frozenset[str]] = {}
    for canonical, variants in SKILL_SYNONYMS.items():
        group = frozenset(normalize_skill(s) for s in (canonical, *variants))
        for member in group:
            # Single letters are too ambiguous to join groups
            if len(member) < 2:
                continue
            # A spelling shared by two groups belongs to both
            index[member] = index.get(member, frozenset()) | group
    return index


_SYNONYM_INDEX: Final[dict[str, frozenset[str]]] = _build_synonym_index()


def skills_match(first: str, second: str) -> bool:
    """Check whether two skill names refer to the same skill. Symmetric."""
    a = normalize_skill(first)
    b = normalize_skill(second)
    if not a or not b:
        return False
    if a == b:
        return True
    if b in _SYNONYM_INDEX.get(a, frozenset()):
        return True

    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    return len(shorter) >= MIN_PARTIAL_SKILL_LENGTH and shorter in longer


def find_matching_skill(target: str, candidate_skills: Iterable[str]) -> Optional[str]:
    """
    Find the candidate skill satisfying ``target``.

    Candidates are checked in sorted order so the result is deterministic.
    """
    for skill in sorted(candidate_skills):
        if skills_match(skill, target):
            return skill
    return None
