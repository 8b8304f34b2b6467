"""IUCN Red List categories and their badge styling."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IucnCategory:
    """Display attributes for one Red List category."""

    code: str
    name: str
    color: str
    background_color: str
    emoji: str


# Ordered from most to least threatened, then the data-poor categories.
CATEGORIES: dict[str, IucnCategory] = {
    c.code: c
    for c in (
        IucnCategory("EX", "Extinct", "#000000", "#E0E0E0", "💀"),
        IucnCategory("EW", "Extinct in the Wild", "#542344", "#EADCE6", "🏛️"),
        IucnCategory("CR", "Critically Endangered", "#D81E05", "#FBDAD5", "🚨"),
        IucnCategory("EN", "Endangered", "#FC7F3F", "#FEE5D8", "⚠️"),
        IucnCategory("VU", "Vulnerable", "#F9E814", "#FDF9C9", "🔶"),
        IucnCategory("NT", "Near Threatened", "#CCE226", "#F2F8CC", "🟡"),
        IucnCategory("LC", "Least Concern", "#60C659", "#DDF3DB", "🟢"),
        IucnCategory("DD", "Data Deficient", "#D1D1C6", "#F3F3EF", "❓"),
        IucnCategory("NE", "Not Evaluated", "#FFFFFF", "#F7F7F7", "⚪"),
    )
}

VALID_CATEGORIES: tuple[str, ...] = tuple(CATEGORIES)


def category_info(code: str | None) -> IucnCategory:
    """Look up a category by code; unknown or missing codes read as Not Evaluated."""
    if code is None:
        return CATEGORIES["NE"]
    return CATEGORIES.get(code.strip().upper(), CATEGORIES["NE"])
