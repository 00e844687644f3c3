"""Language color table and fallback palette for the chart."""

LANGUAGE_COLORS = {
    "go": "#00ADD8",
    "python": "#3572A5",
    "javascript": "#f1e05a",
    "typescript": "#3178c6",
    "java": "#b07219",
    "php": "#4F5D95",
    "ruby": "#701516",
    "c": "#555555",
    "c++": "#f34b7d",
    "c#": "#178600",
    "swift": "#F05138",
    "kotlin": "#A97BFF",
    "rust": "#dea584",
    "scala": "#c22d40",
    "shell": "#89e051",
    "html": "#e34c26",
    "css": "#563d7c",
    "vue": "#41b883",
    "dart": "#00B4AB",
    "lua": "#000080",
    "r": "#198CE7",
    "matlab": "#e16737",
    "makefile": "#427819",
    "hcl": "#844FBA",
    "dockerfile": "#384d54",
}

FALLBACK_PALETTE = [
    "#f2c94c",
    "#2d9cdb",
    "#27ae60",
    "#bb6bd9",
    "#56ccf2",
    "#eb5757",
]


def color_for_language(language: str, index: int) -> str:
    """
    Resolve the color for a language at rank position ``index``.

    Known languages (case-insensitive) get their table color, anything else
    cycles through the fallback palette by position.
    """
    color = LANGUAGE_COLORS.get(language.lower())
    if color is not None:
        return color
    return FALLBACK_PALETTE[index % len(FALLBACK_PALETTE)]
