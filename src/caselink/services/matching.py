"""Helper suggestions for a client, ranked by shared need-tags.

The score is the number of distinct normalized tags the client and helper
have in common. Suggestions are for display only; nothing here creates or
changes a connection.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class HelperCandidate:
    helper_id: str
    display_name: str
    needs: list[str] = field(default_factory=list)
    is_active: bool = True


@dataclass(frozen=True)
class Suggestion:
    helper_id: str
    display_name: str
    score: int
    matched_tags: list[str]
    connection_status: str | None = None

    @property
    def already_connected(self) -> bool:
        return self.connection_status is not None


def normalize_tags(tags: Iterable[str] | None) -> list[str]:
    """Trim and lower-case tags, dropping empties and repeats (first occurrence wins)."""
    seen: list[str] = []
    for tag in tags or []:
        norm = (tag or "").strip().lower()
        if norm and norm not in seen:
            seen.append(norm)
    return seen


def matched_tags(client_needs: Iterable[str] | None, helper_needs: Iterable[str] | None) -> list[str]:
    """Shared normalized tags, in the client's order."""
    helper_tags = set(normalize_tags(helper_needs))
    return [tag for tag in normalize_tags(client_needs) if tag in helper_tags]


def score_helper(client_needs: Iterable[str] | None, helper_needs: Iterable[str] | None) -> int:
    return len(matched_tags(client_needs, helper_needs))


def suggest_helpers(client_needs: Iterable[str] | None, helpers: Iterable[HelperCandidate]) -> list[Suggestion]:
    """Rank active helpers with at least one shared tag, best first.

    ``sorted`` is stable, so equal scores keep the order ``helpers`` was given in.
    A client without tags gets no suggestions.
    """
    client_tags = normalize_tags(client_needs)
    if not client_tags:
        return []

    scored = []
    for helper in helpers:
        if not helper.is_active:
            continue
        shared = matched_tags(client_tags, helper.needs)
        if shared:
            scored.append(
                Suggestion(
                    helper_id=helper.helper_id,
                    display_name=helper.display_name,
                    score=len(shared),
                    matched_tags=shared,
                )
            )
    return sorted(scored, key=lambda s: s.score, reverse=True)


def _name_key(name: str) -> str:
    return (name or "").strip().casefold()


def merge_with_connected(
    client_needs: Iterable[str] | None,
    connected: Iterable[tuple[HelperCandidate, str]],
    suggestions: Iterable[Suggestion],
) -> list[Suggestion]:
    """Already-connected helpers first (any status, any score), then fresh suggestions.

    ``connected`` pairs each helper with the status of its most recent
    connection to the client. The merged list is deduplicated by helper
    display name; the first occurrence is kept.
    """
    client_tags = normalize_tags(client_needs)
    merged: list[Suggestion] = []
    seen: set[str] = set()

    for helper, status in connected:
        key = _name_key(helper.display_name)
        if key in seen:
            continue
        seen.add(key)
        shared = matched_tags(client_tags, helper.needs)
        merged.append(
            Suggestion(
                helper_id=helper.helper_id,
                display_name=helper.display_name,
                score=len(shared),
                matched_tags=shared,
                connection_status=status,
            )
        )

    for suggestion in suggestions:
        key = _name_key(suggestion.display_name)
        if key in seen:
            continue
        seen.add(key)
        merged.append(suggestion)

    return merged
