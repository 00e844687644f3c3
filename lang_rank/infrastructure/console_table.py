"""Plain-text summary of the ranking for the terminal."""

from typing import Sequence

from lang_rank.domain.repository import LanguageStat


def format_table(ranked: Sequence[LanguageStat]) -> str:
    """Two-column language/bytes table in ranked order."""
    lines = ["Language Bytes", "-------- -----"]
    for item in ranked:
        lines.append(f"{item.language:<8} {item.bytes}")
    return "\n".join(lines)
