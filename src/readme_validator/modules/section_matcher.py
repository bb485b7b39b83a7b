"""Fuzzy matching of markdown section headings.

Decides whether an observed heading denotes the same logical section as an
expected name, tolerating case, singular/plural variation, and small typos.

Public API:
    levenshtein: Classic edit distance
    matches_section_name: Tolerant heading match used for section lookups
    is_similar_section: Stricter check used to flag misspelled headings
"""

MAX_TYPO_DISTANCE = 2

SPLIT_INPUT_SECTIONS = ("required inputs", "optional inputs")


def levenshtein(s1: str, s2: str) -> int:
    """Compute the Levenshtein distance between two strings.

    Insert, delete, and substitute all cost 1. Uses two rows of the
    dynamic-programming table.

    Example:
        >>> levenshtein("Resources", "Resourses")
        1
    """
    if len(s1) < len(s2):
        s1, s2 = s2, s1
    if not s2:
        return len(s1)

    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, 1):
        current = [i]
        for j, c2 in enumerate(s2, 1):
            cost = 0 if c1 == c2 else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]


def matches_section_name(observed: str, expected: str) -> bool:
    """Check whether an observed heading matches an expected section name.

    Rules, first match wins: case-insensitive equality, pluralization with a
    trailing "s" on either side, the "Inputs" special case for
    "Required Inputs"/"Optional Inputs", and an edit distance of at most 2.

    Args:
        observed: Heading text found in the document
        expected: Section name being looked for

    Returns:
        True if the heading denotes the expected section

    Example:
        >>> matches_section_name("Resource", "Resources")
        True
        >>> matches_section_name("Inputs", "Resources")
        False
    """
    observed = observed.strip()
    expected = expected.strip()
    if not observed or not expected:
        return False

    observed_lower = observed.lower()
    expected_lower = expected.lower()

    if observed_lower == expected_lower:
        return True

    if observed_lower == expected_lower + "s" or observed_lower + "s" == expected_lower:
        return True

    if expected == "Inputs" and observed_lower in SPLIT_INPUT_SECTIONS:
        return True

    return levenshtein(observed_lower, expected_lower) <= MAX_TYPO_DISTANCE


def is_similar_section(found: str, expected: str) -> bool:
    """Check whether a found heading is likely a misspelling of an expected one.

    Unlike matches_section_name, the plural and distance checks here are
    case-sensitive, and a pure case difference still counts as similar, so
    "resources" is reported against "Resources".
    """
    if found == expected:
        return True

    if found + "s" == expected or found == expected + "s":
        return True

    if levenshtein(found, expected) <= MAX_TYPO_DISTANCE:
        return True

    return found.lower() == expected.lower()


__all__ = ["levenshtein", "is_similar_section", "matches_section_name"]
