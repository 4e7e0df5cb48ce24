"""WebVTT to plain transcript normalisation."""

from __future__ import annotations

import re

_SKIPPED_PREFIXES = ("WEBVTT", "Language: ", "Kind: ", "NOTE")
_CUE_INDEX = re.compile(r"\d+")
_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")


def _is_caption(line: str) -> bool:
    if not line.strip():
        return False
    if line.startswith(_SKIPPED_PREFIXES):
        return False
    if "-->" in line:
        return False
    return _CUE_INDEX.fullmatch(line) is None


def vtt_to_text(content: str) -> str:
    """Strip headers, timings, cue numbers and markup; collapse whitespace."""

    joined = " ".join(line for line in content.splitlines() if _is_caption(line))
    without_tags = _TAG.sub("", joined)
    return _WHITESPACE.sub(" ", without_tags).strip()


__all__ = ["vtt_to_text"]
