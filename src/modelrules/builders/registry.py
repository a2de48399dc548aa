"""RuleBuilderRegistry — marker type -> builder dispatch table.

Two registration paths:

- :meth:`RuleBuilderRegistry.register` — explicit registration from the
  primary configuration path. Always wins; a later explicit registration
  for the same marker type replaces the earlier one.
- :meth:`RuleBuilderRegistry.register_discovered` — builders collected from
  plugins. Never replaces an existing entry.

INVARIANT: only constraint marker types may be registered. Violations fail
registration immediately with ``TypeError``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from modelrules.builders.base import RuleBuilder
from modelrules.domain.markers import is_constraint_marker

logger = logging.getLogger(__name__)


class RuleBuilderRegistry:
    """Resolves a constraint marker type to the builder that handles it."""

    def __init__(self) -> None:
        self._builders: dict[type, RuleBuilder] = {}
        self._lock = threading.Lock()

    def register(self, builder: RuleBuilder) -> None:
        """Explicitly associate every marker type *builder* declares with it."""
        marker_types = self._checked_marker_types(builder)
        with self._lock:
            for marker_type in marker_types:
                previous = self._builders.get(marker_type)
                self._builders[marker_type] = builder
                if previous is not None and previous is not builder:
                    logger.debug(
                        "Builder %r replaces %r for %s",
                        builder,
                        previous,
                        marker_type.__name__,
                    )

    def register_discovered(self, builders: Iterable[RuleBuilder]) -> None:
        """Register auto-discovered *builders* without overriding existing entries."""
        for builder in builders:
            marker_types = self._checked_marker_types(builder)
            with self._lock:
                for marker_type in marker_types:
                    if marker_type in self._builders:
                        logger.debug(
                            "Keeping %r for %s; discovered %r ignored",
                            self._builders[marker_type],
                            marker_type.__name__,
                            builder,
                        )
                        continue
                    self._builders[marker_type] = builder

    def resolve(self, marker_type: type) -> RuleBuilder | None:
        """Return the builder registered for exactly *marker_type*, if any."""
        return self._builders.get(marker_type)

    def marker_types(self) -> list[type]:
        return list(self._builders)

    def items(self) -> list[tuple[type, RuleBuilder]]:
        return list(self._builders.items())

    def __len__(self) -> int:
        return len(self._builders)

    def __contains__(self, marker_type: object) -> bool:
        return marker_type in self._builders

    @staticmethod
    def _checked_marker_types(builder: RuleBuilder) -> tuple[type, ...]:
        marker_types = tuple(builder.marker_types)
        for marker_type in marker_types:
            if not is_constraint_marker(marker_type):
                msg = f"{builder!r} declares {marker_type!r}, which is not a constraint marker type"
                raise TypeError(msg)
        return marker_types
