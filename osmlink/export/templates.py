"""Single-pass template substitution.

Placeholders are matched literally in one left-to-right scan. Inserted
values are never scanned again, so a description containing ``%d`` or
``%s`` is emitted verbatim.
"""

import re
from typing import Dict, Sequence

LITERAL_PERCENT = "%%"
POSITIONAL_TOKEN = "%s"


def _token_pattern(tokens: Sequence[str]) -> re.Pattern:
    # Longest first so that no token shadows a longer one sharing its prefix
    ordered = sorted(set(tokens), key=len, reverse=True)
    return re.compile("|".join(re.escape(token) for token in ordered))


def substitute_ordered(template: str, values: Sequence[str]) -> str:
    """Replace ``%s`` placeholders with values, in order.

    Args:
        template: Template with exactly len(values) ``%s`` placeholders
        values: Replacement values

    Returns:
        Substituted string

    Raises:
        ValueError: If the placeholder count does not match
    """
    pattern = _token_pattern([LITERAL_PERCENT, POSITIONAL_TOKEN])
    remaining = iter(values)
    used = 0

    def _replace(match: re.Match) -> str:
        nonlocal used
        if match.group(0) == LITERAL_PERCENT:
            return "%"
        try:
            value = next(remaining)
        except StopIteration:
            raise ValueError(
                f"Template has more '%s' placeholders than the {len(values)} values given: {template!r}"
            ) from None
        used += 1
        return value

    result = pattern.sub(_replace, template)

    if used != len(values):
        raise ValueError(f"Template uses {used} of {len(values)} values: {template!r}")

    return result


def substitute_named(template: str, mapping: Dict[str, str]) -> str:
    """Replace named placeholder tokens in a single scan.

    Args:
        template: Template containing any of the mapping's tokens
        mapping: Token -> replacement value (e.g. {'%F': '/abs/path'})

    Returns:
        Substituted string; tokens absent from the template are ignored
    """
    table = dict(mapping)
    table.setdefault(LITERAL_PERCENT, "%")
    pattern = _token_pattern(list(table))
    return pattern.sub(lambda match: table[match.group(0)], template)
