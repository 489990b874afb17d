"""Anchor generation for markdown headings."""

from __future__ import annotations

import unicodedata


class AnchorRegistry:
    """Anchors already assigned while rendering one document.

    A fresh registry is created for every render; it is never shared across
    document versions.
    """

    def __init__(self) -> None:
        # next suffix to try for each base candidate
        self._counters: dict[str, int] = {}
        self._used: set[str] = set()

    def __contains__(self, anchor: str) -> bool:
        return anchor in self._used

    def __len__(self) -> int:
        return len(self._used)

    def claim(self, candidate: str) -> str:
        """Register and return the first free anchor for `candidate`.

        Tries ``candidate``, then ``candidate-1``, ``candidate-2``, and so on.
        The per-candidate counter skips suffixes already handed out for the
        same candidate, while the used set still catches cascading collisions
        such as ``"Intro"``, ``"Intro"``, ``"Intro 1"``.

        Args:
            candidate: Base anchor produced from heading text.

        Returns:
            str: The anchor now reserved in this registry.

        Examples:
            registry = AnchorRegistry()
            registry.claim("intro")  # "intro"
            registry.claim("intro")  # "intro-1"
        """
        count = self._counters.get(candidate, 0)
        anchor = candidate if count == 0 else f"{candidate}-{count}"
        while anchor in self._used:
            count += 1
            anchor = f"{candidate}-{count}"

        self._counters[candidate] = count + 1
        self._used.add(anchor)
        return anchor


def slug_candidate(text: str, ascii_only: bool = False) -> str:
    """Build the base anchor for heading text, before deduplication.

    Lower-cases the text, turns each space into a hyphen, and drops every
    character that is neither alphanumeric nor a hyphen. Spaces are not
    collapsed, so ``"a  b"`` becomes ``"a--b"``.

    Args:
        text: Heading text.
        ascii_only: When True, transliterate to ASCII first so only ASCII
            letters and digits survive.

    Returns:
        str: The candidate anchor, possibly empty.

    Examples:
        slug_candidate("Hello, World! 123")  # "hello-world-123"
        slug_candidate("Café", ascii_only=True)  # "cafe"
    """
    if ascii_only:
        text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")

    lowered = text.lower().replace(" ", "-")
    return "".join(character for character in lowered if character.isalnum() or character == "-")


def generate_slug(
    text: str, registry: AnchorRegistry | None = None, ascii_only: bool = False
) -> str:
    """Generate a unique anchor for heading text.

    Empty candidates are still registered, so a second empty heading gets
    ``"-1"``.

    Args:
        text: Heading text.
        registry: Anchors already used in the document. It is updated in
            place. A throwaway registry is used when omitted.
        ascii_only: Fold the text to ASCII before filtering.

    Returns:
        str: Anchor unique within `registry`.

    Examples:
        registry = AnchorRegistry()
        generate_slug("Intro", registry)  # "intro"
        generate_slug("Intro", registry)  # "intro-1"
    """
    if registry is None:
        registry = AnchorRegistry()
    return registry.claim(slug_candidate(text, ascii_only=ascii_only))
