from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResolvedMatch:
    matched_key: str = ""
    target_url: str | None = None

    @property
    def matched(self) -> bool:
        return self.target_url is not None


def resolve_target(routes: dict[str, str], normalized_path: str) -> ResolvedMatch:
    """Find the longest configured prefix of ``normalized_path``.

    Candidates are the first ``i`` path segments joined by ``/``; every length
    is tried and the last hit wins, so the most specific route is selected.
    """

    segments = [segment for segment in normalized_path.split("/") if segment]
    match = ResolvedMatch()
    for i in range(1, len(segments) + 1):
        candidate = "/".join(segments[:i])
        target = routes.get(candidate)
        if target:
            match = ResolvedMatch(matched_key=candidate, target_url=target)
    return match
