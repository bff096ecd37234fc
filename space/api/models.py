from __future__ import annotations

from dataclasses import dataclass

from space.core.structured import StrDict, as_str_dict, get_str

# Promotion status reported for a release that went out.
PROMOTION_COMPLETE = "COMPLETE"


@dataclass(frozen=True, slots=True)
class Revision:
    """Server-assigned buildable snapshot of a project."""

    id: str
    tag: str

    @classmethod
    def from_obj(cls, obj: object) -> Revision | None:
        d = as_str_dict(obj)
        if d is None:
            return None
        rev_id = get_str(d, "id")
        if rev_id is None:
            return None
        return cls(id=rev_id, tag=get_str(d, "tag") or rev_id)


@dataclass(frozen=True, slots=True)
class ProjectInfo:
    id: str
    name: str | None
    alias: str | None


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    revision_id: str
    project_id: str
    version: str | None
    release_notes: str | None
    discovery_listed: bool
    channel: str

    def to_payload(self) -> StrDict:
        return {
            "revision_id": self.revision_id,
            "app_id": self.project_id,
            "version": self.version or "",
            "release_notes": self.release_notes or "",
            "discovery_list": self.discovery_listed,
            "channel": self.channel,
        }


@dataclass(frozen=True, slots=True)
class CreatedRelease:
    id: str


@dataclass(frozen=True, slots=True)
class ReleasePromotion:
    id: str
    status: str

    @property
    def is_complete(self) -> bool:
        return self.status == PROMOTION_COMPLETE
