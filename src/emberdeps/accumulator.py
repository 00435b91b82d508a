"""
Accumulation of extracted dependency names.

One accumulator is created per extraction session and passed into the
traversal driver, which is the only writer.
"""
from dataclasses import dataclass, field
from typing import Optional

from emberdeps.models import Namespace


@dataclass
class DependencyAccumulator:
    """
    Namespaced mappings plus the ordered sequence of full names.

    Mapping writes are plain upserts. Whether a name is also appended to
    the ordered sequence is decided by the caller:

    - register(): mapping only
    - record(): mapping, then append unconditionally
    - record_first(): mapping and append, only if the short name is new
    """
    controllers: dict[str, str] = field(default_factory=dict)
    templates: dict[str, str] = field(default_factory=dict)
    views: dict[str, str] = field(default_factory=dict)
    names: list[str] = field(default_factory=list)

    def mapping_for(self, namespace: Namespace) -> dict[str, str]:
        """Return the mapping that stores names of the given namespace."""
        if namespace is Namespace.CONTROLLER:
            return self.controllers
        if namespace is Namespace.TEMPLATE:
            return self.templates
        return self.views

    def register(self, namespace: Namespace, short_name: str) -> str:
        """Store short_name under its namespace. Returns the full name."""
        full_name = namespace.qualify(short_name)
        self.mapping_for(namespace)[short_name] = full_name
        return full_name

    def record(self, namespace: Namespace, short_name: str) -> str:
        """Register short_name and append its full name."""
        full_name = self.register(namespace, short_name)
        self.names.append(full_name)
        return full_name

    def record_first(self, namespace: Namespace, short_name: str) -> Optional[str]:
        """
        Record short_name only on its first discovery in the namespace.

        Returns the full name when recorded, None when already known.
        """
        if short_name in self.mapping_for(namespace):
            return None
        return self.record(namespace, short_name)
