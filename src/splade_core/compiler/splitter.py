"""Separates the leading <script setup> block from a server-rendered view."""

from typing import Optional, Tuple

from splade_core.compiler.exceptions import ScriptExtractionError
from splade_core.compiler.models import SplitView

SCRIPT_OPEN = "<script setup>"
SCRIPT_CLOSE = "</script>"


def has_script_block(view: str) -> bool:
    """Check whether the view starts with a <script setup> tag."""
    return view.lstrip().startswith(SCRIPT_OPEN)


def find_script_block(view: str) -> Optional[Tuple[int, int]]:
    """Locate the first <script setup> ... </script> pair.

    Returns the (start, end) offsets of the script contents, or None when
    either marker is missing.
    """
    open_at = view.find(SCRIPT_OPEN)
    if open_at == -1:
        return None

    start = open_at + len(SCRIPT_OPEN)
    end = view.find(SCRIPT_CLOSE, start)
    if end == -1:
        return None

    return start, end


def separate_script(view: str, file_path: Optional[str] = None) -> SplitView:
    """Extract the script fragment and return the markup without it."""
    located = find_script_block(view)
    if located is None:
        raise ScriptExtractionError(
            "Could not locate a complete <script setup> block", file_path=file_path
        )

    start, end = located
    script = view[start:end]
    markup = view.replace(f"{SCRIPT_OPEN}{script}{SCRIPT_CLOSE}", "", 1).strip()

    return SplitView(script=script, markup=markup)


def split_view(view: str, file_path: Optional[str] = None) -> Optional[SplitView]:
    """Split the view, or return None when it has no leading script block."""
    if not has_script_block(view):
        return None

    return separate_script(view, file_path=file_path)
