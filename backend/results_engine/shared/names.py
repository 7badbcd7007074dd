"""
Name normalization and string similarity.

Every cross-source comparison of athlete (and event) names goes through
`normalize_name` and `calculate_name_similarity`.
"""

import unicodedata

# Normalized names that are permutations of the same tokens score just
# below an exact match so exact matches always rank first.
REARRANGED_NAME_SIMILARITY = 0.98


def normalize_name(name: str | None) -> str:
    """
    Normalize a name for comparison.

    Lowercases, strips diacritics, drops everything that is not a letter
    or whitespace and collapses runs of whitespace.

    Examples:
        "  José  García-López " → "jose garcialopez"
        "O'Brien, Seán"         → "obrien sean"
    """
    if not name:
        return ""

    decomposed = unicodedata.normalize("NFD", name.lower())
    letters = [
        ch
        for ch in decomposed
        if not unicodedata.combining(ch) and (ch.isalpha() or ch.isspace())
    ]
    return " ".join("".join(letters).split())


def levenshtein_distance(a: str, b: str) -> int:
    """
    Edit distance between two strings (insert/delete/substitute cost 1).

    Iterative dynamic programming over two rolling rows.
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ch_a in enumerate(a, start=1):
        current = [i] + [0] * len(b)
        for j, ch_b in enumerate(b, start=1):
            if ch_a == ch_b:
                current[j] = previous[j - 1]
            else:
                current[j] = min(
                    previous[j - 1] + 1,  # substitution
                    current[j - 1] + 1,   # insertion
                    previous[j] + 1,      # deletion
                )
        previous = current

    return previous[len(b)]


def calculate_name_similarity(name_a: str | None, name_b: str | None) -> float:
    """
    Similarity between two names in [0, 1].

    Returns:
        1.0  for identical normalized names
        0.0  if either normalized name is empty
        0.98 for the same tokens in a different order ("Smith John")
        1 - levenshtein / max_len otherwise
    """
    normalized_a = normalize_name(name_a)
    normalized_b = normalize_name(name_b)

    if normalized_a == normalized_b:
        return 1.0 if normalized_a else 0.0
    if not normalized_a or not normalized_b:
        return 0.0

    if sorted(normalized_a.split(" ")) == sorted(normalized_b.split(" ")):
        return REARRANGED_NAME_SIMILARITY

    max_len = max(len(normalized_a), len(normalized_b))
    return 1 - levenshtein_distance(normalized_a, normalized_b) / max_len


def name_tokens(name: str | None) -> set[str]:
    """Set of normalized whitespace-separated tokens."""
    normalized = normalize_name(name)
    return set(normalized.split(" ")) if normalized else set()
