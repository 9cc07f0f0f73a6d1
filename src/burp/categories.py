"""Package categories accepted by the AUR."""

from __future__ import annotations

from bisect import bisect_left

from burp.models import CategoryEntry

# Sent when the user did not pick a category.
NO_CATEGORY = "1"

# Must stay sorted by name.
CATEGORIES: tuple[CategoryEntry, ...] = (
    CategoryEntry("daemons", "2"),
    CategoryEntry("devel", "3"),
    CategoryEntry("editors", "4"),
    CategoryEntry("emulators", "5"),
    CategoryEntry("fonts", "20"),
    CategoryEntry("games", "6"),
    CategoryEntry("gnome", "7"),
    CategoryEntry("i18n", "8"),
    CategoryEntry("kde", "9"),
    CategoryEntry("kernels", "19"),
    CategoryEntry("lib", "10"),
    CategoryEntry("modules", "11"),
    CategoryEntry("multimedia", "12"),
    CategoryEntry("network", "13"),
    CategoryEntry("office", "14"),
    CategoryEntry("science", "15"),
    CategoryEntry("system", "16"),
    CategoryEntry("x11", "17"),
    CategoryEntry("xfce", "18"),
)

_NAMES = [entry.name for entry in CATEGORIES]


def validate(name: str) -> str | None:
    """Return the category id for name, or None if it is not a category."""
    idx = bisect_left(_NAMES, name)
    if idx < len(_NAMES) and _NAMES[idx] == name:
        return CATEGORIES[idx].id
    return None


def category_names() -> list[str]:
    """All category names in catalog order."""
    return list(_NAMES)
