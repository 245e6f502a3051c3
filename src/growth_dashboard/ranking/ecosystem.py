from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from growth_dashboard.models import EntitySummary, SortKey
from growth_dashboard.ranking.engine import rank


@dataclass(frozen=True)
class EcosystemSummary:
    total_daos: int
    total_followers: float
    total_posts: float
    top_daos: tuple[EntitySummary, ...]
    largest: EntitySummary | None
    top_performer: EntitySummary | None
    most_active: EntitySummary | None

    def as_dict(self) -> dict[str, Any]:
        def _entry(entity: EntitySummary | None, field_name: str) -> dict[str, Any] | None:
            if entity is None:
                return None
            return {"name": entity.name, "slug": entity.slug, field_name: getattr(entity, field_name)}

        return {
            "totalDaos": self.total_daos,
            "totalFollowers": self.total_followers,
            "totalPosts": self.total_posts,
            "topDaos": [_entry(entity, "follower_count") for entity in self.top_daos],
            "largestDao": _entry(self.largest, "follower_count"),
            "topPerformer": _entry(self.top_performer, "follower_growth"),
            "mostActive": _entry(self.most_active, "total_posts"),
        }


def _leader(entities: list[EntitySummary], field_name: str) -> EntitySummary | None:
    if not entities:
        return None
    # max() returns the first maximal element, matching stable ranking on ties.
    return max(entities, key=lambda entity: getattr(entity, field_name))


def summarize_ecosystem(entities: Iterable[EntitySummary], top_n: int = 5) -> EcosystemSummary:
    collected = list(entities)
    return EcosystemSummary(
        total_daos=len(collected),
        total_followers=sum(entity.follower_count for entity in collected),
        total_posts=sum(entity.total_posts for entity in collected),
        top_daos=tuple(rank(collected, SortKey.followers)[:top_n]),
        largest=_leader(collected, "follower_count"),
        top_performer=_leader(collected, "follower_growth"),
        most_active=_leader(collected, "total_posts"),
    )
