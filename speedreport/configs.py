# Copyright (c) 2025-2026 Tobias Weber <weber.tobias.md@gmail.com>
#
# This file is part of the speedreport library.
#
# Licensed under the MIT License. See LICENSE file in the project root
# for full license information.

"""Config role resolution.

Configuration names are free-form (``"prod_ruby_with_yjit"``,
``"5_prod_ruby_no_jit"``...). A :class:`NamingPolicy` says how to recognise
each :class:`Role` among them; :func:`resolve_roles` picks exactly one
configuration per role and returns them in display order.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Union

from .constants import DEFAULT_ROLE_RULES
from .errors import AmbiguousConfigError, ConfigRoleConflictError, MissingConfigError

Matcher = Union[str, Callable[[str], bool]]


class Role(enum.Enum):
    BASELINE = "baseline"
    OPTIMIZED_PRIMARY = "optimized_primary"
    OPTIMIZED_SECONDARY = "optimized_secondary"
    OPTIONAL_EXTRA = "optional_extra"


# Display order; also the order colours are assigned in.
ROLE_ORDER = (Role.BASELINE, Role.OPTIMIZED_PRIMARY, Role.OPTIMIZED_SECONDARY, Role.OPTIONAL_EXTRA)


@dataclass(frozen=True)
class RoleRule:
    """How to find one role: a substring or predicate, plus a display label."""

    match: Matcher
    label: str
    optional: bool = False

    def matches(self, config_name: str) -> bool:
        if callable(self.match):
            return bool(self.match(config_name))
        return self.match in config_name


class NamingPolicy:
    """Mapping of roles to rules. Baseline and primary are mandatory."""

    def __init__(self, rules: Mapping[Role, RoleRule]):
        for role in (Role.BASELINE, Role.OPTIMIZED_PRIMARY):
            if role not in rules:
                raise ValueError(f"Naming policy must define a rule for {role.value}")
            if rules[role].optional:
                raise ValueError(f"The {role.value} role cannot be optional")
        self._rules = {role: rules[role] for role in ROLE_ORDER if role in rules}

    @classmethod
    def from_substrings(cls, substrings: Mapping[str, tuple]) -> "NamingPolicy":
        """Build a policy from ``role value → (substring, label[, optional])``."""
        rules = {}
        for role_value, rule_args in substrings.items():
            rules[Role(role_value)] = RoleRule(*rule_args)
        return cls(rules)

    def rules(self) -> list[tuple[Role, RoleRule]]:
        return list(self._rules.items())

    def __contains__(self, role: Role) -> bool:
        return role in self._rules

    def __getitem__(self, role: Role) -> RoleRule:
        return self._rules[role]


DEFAULT_POLICY = NamingPolicy.from_substrings(DEFAULT_ROLE_RULES)


@dataclass(frozen=True)
class ResolvedConfig:
    role: Role
    name: str
    label: str


class ResolvedConfigs:
    """The configurations chosen for one report, in display order."""

    def __init__(self, entries: Iterable[ResolvedConfig]):
        self._entries = tuple(entries)
        self._by_role = {entry.role: entry for entry in self._entries}
        if Role.BASELINE not in self._by_role or Role.OPTIMIZED_PRIMARY not in self._by_role:
            raise ValueError("Resolved configs need both a baseline and a primary config")
        names = [entry.name for entry in self._entries]
        if len(set(names)) != len(names):
            raise ValueError(f"A config can fill only one role: {names!r}")

    @property
    def baseline(self) -> str:
        return self._by_role[Role.BASELINE].name

    @property
    def primary(self) -> str:
        return self._by_role[Role.OPTIMIZED_PRIMARY].name

    def get(self, role: Role) -> str | None:
        entry = self._by_role.get(role)
        return entry.name if entry else None

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self._entries]

    @property
    def non_baseline(self) -> list[str]:
        return [entry.name for entry in self._entries if entry.role is not Role.BASELINE]

    def with_labels(self) -> list[tuple[str, str]]:
        """``(label, config name)`` pairs in display order."""
        return [(entry.label, entry.name) for entry in self._entries]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ResolvedConfigs({self.with_labels()!r})"


def resolve_config(config_names: Iterable[str], role_substring: Matcher, role_label: str,
                   optional: bool = False) -> str | None:
    """Return the single config name matching *role_substring*.

    Raises :class:`AmbiguousConfigError` on more than one match and
    :class:`MissingConfigError` on none, unless *optional*, in which case
    ``None`` is returned.
    """
    names = list(config_names)
    rule = RoleRule(role_substring, role_label, optional)
    matching = [name for name in names if rule.matches(name)]
    if len(matching) > 1:
        raise AmbiguousConfigError(role_label, matching)
    if not matching:
        if optional:
            return None
        raise MissingConfigError(role_label, names)
    return matching[0]


def resolve_roles(config_names: Iterable[str], policy: NamingPolicy = DEFAULT_POLICY) -> ResolvedConfigs:
    """Resolve every role of *policy* against *config_names*."""
    names = list(config_names)
    entries = []
    claimed: dict[str, str] = {}
    for role, rule in policy.rules():
        name = resolve_config(names, rule.match, rule.label, optional=rule.optional)
        if name is None:
            continue
        if name in claimed:
            raise ConfigRoleConflictError(name, [claimed[name], rule.label])
        claimed[name] = rule.label
        entries.append(ResolvedConfig(role, name, rule.label))
    return ResolvedConfigs(entries)
