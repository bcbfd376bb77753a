"""Allocation rule record.

Field contract
--------------
prefix       : digits-only prefix in national format (e.g. ``"0207946"``)
total_length : exact digit count of a full number under this prefix;
               never smaller than ``len(prefix)``
status       : Ofcom allocation status text (``"Allocated"``,
               ``"Free for allocation"``, ``"Withdrawn"`` ...)
provider     : communications provider holding the block, if known

The persisted JSON form uses ``totalLength`` for the length field.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PrefixRule:
    """One row of the numbering allocation table."""

    prefix: str
    total_length: int
    status: str
    provider: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PrefixRule:
        """Build a rule from its persisted mapping.

        Accepts ``totalLength`` or ``total_length``.  An empty provider is
        stored as ``None``.  Field validation is the loader's job.
        """
        total_length = data["totalLength"] if "totalLength" in data else data["total_length"]
        provider = data.get("provider") or None
        return cls(
            prefix=str(data["prefix"]),
            total_length=int(total_length),
            status=str(data.get("status") or ""),
            provider=provider,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "prefix": self.prefix,
            "totalLength": self.total_length,
            "status": self.status,
        }
        if self.provider:
            out["provider"] = self.provider
        return out
