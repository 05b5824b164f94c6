#!/usr/bin/env python3
"""
Tail a job log down to a bounded number of lines
"""

import re

from models import TrimmedLog

_LINE_BREAK = re.compile(r"\r?\n")


def trim_log(text: str, max_lines: int) -> TrimmedLog:
    """Keep the last ``max_lines`` lines of ``text``.

    ``max_lines`` is assumed to be a positive integer, the config layer
    rejects anything else.
    """
    text = text or ""
    lines = _LINE_BREAK.split(text)
    total = len(lines)

    if total <= max_lines:
        return TrimmedLog(tail_text=text, original_line_count=total, retained_line_count=total)

    return TrimmedLog(
        tail_text="\n".join(lines[-max_lines:]),
        original_line_count=total,
        retained_line_count=max_lines,
    )
