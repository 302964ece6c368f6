"""Split a card body into fields on ``::`` separators outside braces."""

from typing import NamedTuple

REVERSED_SEPARATOR_WIDTH = 3


class SplitFields(NamedTuple):
    """Fields of a card body and what kind of separators were seen."""

    fields: list[str]
    reversed: bool
    separated: bool = False


def split_fields(body: str) -> SplitFields:
    """Split ``body`` on runs of two or more colons at brace depth zero.

    The whole colon run is consumed as one separator. A run of exactly
    three colons marks the card as reversed. Colons inside ``{...}`` are
    field content, so cloze hints survive the split.

    Args:
        body: Card body with identifiers and tags already removed

    Returns:
        Trimmed fields in order, the reversed flag, and whether any
        separator was found
    """
    fields: list[str] = []
    current: list[str] = []
    depth = 0
    reversed_card = False
    separated = False
    i = 0
    length = len(body)

    while i < length:
        char = body[i]
        if char == ":" and depth == 0 and i + 1 < length and body[i + 1] == ":":
            run_end = i
            while run_end < length and body[run_end] == ":":
                run_end += 1
            fields.append("".join(current))
            current = []
            separated = True
            if run_end - i == REVERSED_SEPARATOR_WIDTH:
                reversed_card = True
            i = run_end
            continue
        if char == "{":
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
        current.append(char)
        i += 1

    if current:
        fields.append("".join(current))

    return SplitFields([field.strip() for field in fields], reversed_card, separated)
