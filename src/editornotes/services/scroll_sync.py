from __future__ import annotations


def cursor_line_index(text: str, cursor_position: int) -> int:
    """Zero-based index of the newline-delimited line holding ``cursor_position``."""
    position = max(0, min(int(cursor_position), len(text)))
    start = 0
    for index, segment in enumerate(text.split("\n")):
        end = start + len(segment)
        if position <= end:
            return index
        start = end + 1
    return text.count("\n")


def scroll_offset_for_span(span_top: int, span_height: int, current_offset: int, viewport_height: int) -> int:
    """Scroll offset that brings the ``span_top``..``span_top + span_height`` band into view.

    Coordinates are content pixels. A band taller than the viewport is aligned to the top.
    """
    span_top = max(0, span_top)
    span_bottom = span_top + max(0, span_height)
    if span_top < current_offset:
        return span_top
    if viewport_height > 0 and span_bottom > current_offset + viewport_height:
        return max(0, min(span_top, span_bottom - viewport_height))
    return max(0, current_offset)
