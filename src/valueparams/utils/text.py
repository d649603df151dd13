"""Text helpers for list-valued parameters."""

from typing import Iterable, List

from ..constants import LIST_CLOSE, LIST_OPEN, LIST_SEPARATOR


def render_list(values: Iterable[str], open_char: str = LIST_OPEN,
                close_char: str = LIST_CLOSE) -> str:
    """Join element texts into a list value.

    Args:
        values: Canonical texts of the elements, in order
        open_char: Character emitted before the first element
        close_char: Character emitted after the last element

    Returns:
        "" for no elements, the bare element for one element, otherwise
        the bracketed comma-joined elements (e.g. "[a,b]")
    """
    items = list(values)
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return f"{open_char}{LIST_SEPARATOR.join(items)}{close_char}"


def split_list(text: str, open_char: str = LIST_OPEN,
               close_char: str = LIST_CLOSE) -> List[str]:
    """Split a list value back into element texts.

    Accepts both the bare single-element form and the bracketed form.
    Whitespace around elements is ignored; empty text yields no elements.
    """
    text = text.strip()
    if not text:
        return []
    if text.startswith(open_char) and text.endswith(close_char) and len(text) >= 2:
        text = text[len(open_char):len(text) - len(close_char)].strip()
        if not text:
            return []
    return [item.strip() for item in text.split(LIST_SEPARATOR)]
