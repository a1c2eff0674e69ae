#------------------------------------------------------------
#                       page_service.py
#          Reads, writes and edits the marker-delimited
#                  slots of the HTML page shell.

import html
import re
import sys
from typing import Dict, List
from ..config import slot_markers

SLOT_PATTERN_TEMPLATE = r"({start})\n.*?({end})"
DUPLICATE_MARKER_WARNING_TEMPLATE = "WARNING: duplicate marker pairs found for {marker!r}; collapsing to first occurrence"

def _slot_pattern(slot: str) -> re.Pattern:
    start_marker, end_marker = slot_markers(slot)
    return re.compile(
        SLOT_PATTERN_TEMPLATE.format(start=re.escape(start_marker), end=re.escape(end_marker)),
        re.DOTALL,
    )

# This function does replace the body of one marker-delimited slot.
# Missing slots leave the content unchanged; duplicates collapse to the first pair.
def replace_slot(content: str, slot: str, new_body: str) -> str:
    pattern = _slot_pattern(slot)

    matches = list(pattern.finditer(content))
    if len(matches) > 1:
        print(DUPLICATE_MARKER_WARNING_TEMPLATE.format(marker=slot_markers(slot)[0]), file=sys.stderr)
        for duplicate in reversed(matches[1:]):
            content = content[:duplicate.start()] + content[duplicate.end():]

    body = f"{new_body}\n" if new_body else ""
    # A callable replacement keeps backslashes in the body literal.
    return pattern.sub(lambda match: f"{match.group(1)}\n{body}{match.group(2)}", content, count=1)

def load_page(path: str) -> str:
    with open(path, "r", encoding="utf-8") as file_handle:
        return file_handle.read()

def save_page(path: str, content: str) -> None:
    with open(path, "w", encoding="utf-8") as file_handle:
        file_handle.write(content)

# This class does expose the page shell's marker slots as a rendering surface.
# Writes to missing slots are ignored; appended markup replaces a container on render().
class MarkerPageSurface:

    def __init__(self, content: str):
        self.content = content
        self._pending: Dict[str, List[str]] = {}

    def has_slot(self, slot: str) -> bool:
        return _slot_pattern(slot).search(self.content) is not None

    def set_text(self, slot: str, text) -> None:
        self.set_html(slot, html.escape(str(text)))

    def set_html(self, slot: str, markup: str) -> None:
        if not self.has_slot(slot):
            return
        self._pending.pop(slot, None)
        self.content = replace_slot(self.content, slot, markup)

    def append(self, container: str, markup: str) -> None:
        self._pending.setdefault(container, []).append(markup)

    def render(self) -> str:
        content = self.content
        for container, units in self._pending.items():
            content = replace_slot(content, container, "\n".join(units))
        return content
