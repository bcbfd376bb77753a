"""Dead-status policies.

Ofcom status text decides whether a matched rule counts towards
diallability.  Which statuses are "dead" has changed between dataset
revisions, so each variant is a named :class:`DeadStatusPolicy` rather
than a hard-coded pattern.

Built-in policies
-----------------
current : dead when the status is exactly ``free`` or
          ``free for allocation``, or contains ``unavailable`` or
          ``withdrawn``
legacy  : dead when the status contains ``unavailable``, ``closed`` or
          ``withdrawn``; ``Free for allocation`` is live

Additional policies can be declared in a YAML file::

    strict:
      exact: [free, free for allocation]
      contains: [unavailable, withdrawn, quarantined]

All matching is case-insensitive on the whitespace-trimmed status.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass(frozen=True, slots=True)
class DeadStatusPolicy:
    name: str
    exact: frozenset[str] = field(default_factory=frozenset)
    contains: tuple[str, ...] = ()

    def is_dead(self, status: str | None) -> bool:
        text = (status or "").strip().lower()
        if text in self.exact:
            return True
        return any(marker in text for marker in self.contains)

    def is_live(self, status: str | None) -> bool:
        return not self.is_dead(status)


CURRENT_POLICY = DeadStatusPolicy(
    name="current",
    exact=frozenset({"free", "free for allocation"}),
    contains=("unavailable", "withdrawn"),
)

LEGACY_POLICY = DeadStatusPolicy(
    name="legacy",
    contains=("unavailable", "closed", "withdrawn"),
)

DEFAULT_POLICY = CURRENT_POLICY


def _as_markers(value: object, *, path: Path, name: str, key: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{path}: policy {name!r} field {key!r} must be a list of strings")
    return [v.strip().lower() for v in value if v.strip()]


def load_policies(path: str | Path) -> list[DeadStatusPolicy]:
    """Load named policies from a YAML mapping of ``name -> {exact, contains}``.

    Raises
    ------
    ValueError
        If the file is not valid YAML, the document is not a mapping or a
        policy body is malformed.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ValueError(f"{path}: invalid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a YAML mapping, got {type(data).__name__}")

    policies: list[DeadStatusPolicy] = []
    for name, body in data.items():
        if not isinstance(body, dict):
            raise ValueError(f"{path}: policy {name!r} must be a mapping")
        unknown = body.keys() - {"exact", "contains"}
        if unknown:
            raise ValueError(f"{path}: policy {name!r} has unknown fields: {sorted(unknown)}")
        policies.append(
            DeadStatusPolicy(
                name=str(name),
                exact=frozenset(_as_markers(body.get("exact"), path=path, name=name, key="exact")),
                contains=tuple(_as_markers(body.get("contains"), path=path, name=name, key="contains")),
            )
        )
    return policies


class PolicyRegistry:
    """Lookup table of dead-status policies keyed by name."""

    def __init__(self, policies: list[DeadStatusPolicy] | None = None) -> None:
        self._policies: dict[str, DeadStatusPolicy] = {}
        for p in (CURRENT_POLICY, LEGACY_POLICY, *(policies or [])):
            self.register(p)

    def register(self, policy: DeadStatusPolicy) -> None:
        """Register (or replace) a policy."""
        self._policies[policy.name.strip().lower()] = policy

    def get(self, name: str) -> DeadStatusPolicy:
        """Return the policy called *name* or raise ``KeyError``."""
        try:
            return self._policies[name.strip().lower()]
        except KeyError:
            raise KeyError(f"Status policy not found: {name!r}")

    def names(self) -> list[str]:
        return sorted(self._policies)

    @classmethod
    def from_file(cls, path: str | Path | None) -> PolicyRegistry:
        """Return the built-ins plus any policies declared in *path*."""
        if path is None:
            return cls()
        return cls(load_policies(path))


def get_policy(name: str, policy_file: str | Path | None = None) -> DeadStatusPolicy:
    """Resolve a policy by name from the built-ins and optional *policy_file*."""
    return PolicyRegistry.from_file(policy_file).get(name)
