from __future__ import annotations

import re
from typing import Dict, Iterable, List, Sequence

from fuzzywuzzy import fuzz

from .models import NameMatchResult

NON_ALNUM_RE = re.compile(r"[\W_]+")


def normalize_name(name: str) -> str:
    if not name:
        return ""
    cleaned = name.replace('"', "").strip()
    tokens: List[str] = []
    for part in cleaned.split(","):
        tokens.extend(part.split())
    normalized = [NON_ALNUM_RE.sub("", token.lower()) for token in tokens]
    return " ".join(sorted(token for token in normalized if token))


def match_name(
    candidate: str,
    pool: Sequence[str],
    threshold: int = 80,
) -> NameMatchResult:
    target = normalize_name(candidate)
    if not target:
        return NameMatchResult(match=None, score=0)

    best_name = None
    best_score = 0
    for name in pool:
        score = fuzz.token_set_ratio(target, normalize_name(name))
        if score > best_score:
            best_name, best_score = name, score

    if best_name is not None and best_score >= threshold:
        return NameMatchResult(match=best_name, score=best_score)
    return NameMatchResult(match=None, score=best_score)


def match_names(
    candidates: Iterable[str],
    pool: Sequence[str],
    threshold: int = 80,
) -> Dict[str, NameMatchResult]:
    results: Dict[str, NameMatchResult] = {}
    for candidate in candidates:
        if candidate in results:
            continue
        results[candidate] = match_name(candidate, pool, threshold=threshold)
    return results
