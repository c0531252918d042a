"""Catalog: loads, validates, and queries the canonical issues and events.

The catalog is built once at startup and is read-only afterwards:
- Exactly five issues, one per IssueCategory, in a fixed order. That
  order is the positional order of every stance vector in the run.
- Exactly seven event templates, one per EventKind, in event-id order.

Usage:
    catalog = Catalog.from_config_dir(Path("config"))
    issue = catalog.issue_for(IssueCategory.HEALTH)
    debate = catalog.events[0]
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from hustings.models.event import EventCategory, EventKind, EventTemplate
from hustings.models.issue import Issue, IssueCategory
from hustings.models.traits import Characteristic


class Catalog:
    """Immutable issue and event catalog."""

    CATALOG_FILENAME = "catalog.json"

    def __init__(self, catalog_data: dict[str, Any]) -> None:
        self._data = catalog_data
        self._issues: tuple[Issue, ...] = ()
        self._events: tuple[EventTemplate, ...] = ()
        self._parse()

    @classmethod
    def from_config_dir(cls, config_dir: Path) -> Catalog:
        """Load the catalog from the canonical config directory.

        Raises:
            FileNotFoundError: If catalog.json does not exist.
            ValueError: If the catalog is structurally invalid.
        """
        path = config_dir / cls.CATALOG_FILENAME
        if not path.exists():
            raise FileNotFoundError(f"Catalog not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return cls(data)

    def _parse(self) -> None:
        """Parse and validate catalog structure.

        Raises:
            ValueError: If the catalog is structurally invalid.
        """
        raw_issues = self._data.get("issues")
        if not isinstance(raw_issues, list):
            raise ValueError("Catalog missing 'issues' list")
        if len(raw_issues) != len(IssueCategory):
            raise ValueError(
                f"Catalog must define exactly {len(IssueCategory)} issues, "
                f"got {len(raw_issues)}"
            )

        issues: list[Issue] = []
        for idx, raw in enumerate(raw_issues):
            code = raw.get("code", "")
            if not isinstance(code, str) or not code.strip():
                raise ValueError(f"Issue[{idx}] has blank code")
            try:
                category = IssueCategory(raw.get("category"))
            except ValueError:
                raise ValueError(
                    f"Issue {code!r} has unknown category {raw.get('category')!r}"
                ) from None
            issues.append(Issue(code=code, statement=raw.get("statement", ""), category=category))

        if len({i.code for i in issues}) != len(issues):
            raise ValueError("Catalog has duplicate issue codes")
        if {i.category for i in issues} != set(IssueCategory):
            raise ValueError("Catalog must cover every issue category exactly once")

        raw_events = self._data.get("events")
        if not isinstance(raw_events, list):
            raise ValueError("Catalog missing 'events' list")
        if len(raw_events) != len(EventKind):
            raise ValueError(
                f"Catalog must define exactly {len(EventKind)} events, "
                f"got {len(raw_events)}"
            )

        events: list[EventTemplate] = []
        for idx, raw in enumerate(raw_events):
            kind = EventKind(raw.get("kind"))
            if kind.event_id != idx:
                raise ValueError(
                    f"Event[{idx}] is {kind.value!r}; events must be listed "
                    f"in event-id order"
                )
            impact = int(raw.get("impact", 0))
            if impact < 0:
                raise ValueError(f"Event {kind.value!r} has negative impact")
            category = EventCategory(raw.get("category"))
            if category != kind.expected_category:
                raise ValueError(
                    f"Event {kind.value!r} must be in category "
                    f"{kind.expected_category.value!r}, got {category.value!r}"
                )
            events.append(
                EventTemplate(
                    kind=kind,
                    category=category,
                    message=raw.get("message", ""),
                    impact=impact,
                    impacted_trait=Characteristic(raw.get("impacted_trait")),
                )
            )

        self._issues = tuple(issues)
        self._events = tuple(events)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def issues(self) -> tuple[Issue, ...]:
        return self._issues

    @property
    def events(self) -> tuple[EventTemplate, ...]:
        return self._events

    def issue_for(self, category: IssueCategory) -> Issue:
        for issue in self._issues:
            if issue.category == category:
                return issue
        raise KeyError(f"No issue for category {category.value!r}")

    def issue_index(self, category: IssueCategory) -> int:
        """Position of a category's issue in the catalog order."""
        return self._issues.index(self.issue_for(category))

    @property
    def version(self) -> str:
        return self._data.get("version", "unknown")
