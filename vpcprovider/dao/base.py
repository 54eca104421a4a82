"""
Abstract DAO for provider state records.

A state record is the provider's memory of one managed resource: the
attribute set realized by the last successful Create/Read/Update.  It plays
the role of a Terraform state entry and is the only local state the
provider keeps.

Record shape
────────────
  resource_key   "<resource_type>/<resource_id>"  (unique identifier)
  resource_type  e.g. "dns_config", "dns_resolution_binding"
  resource_id    the remote identifier
  attributes     dict of realized attributes
  updated_at     ISO-8601 timestamp of the last write
"""

from abc import ABC, abstractmethod
from typing import Optional


def resource_key(resource_type: str, resource_id: str) -> str:
    return f"{resource_type}/{resource_id}"


class StateRepository(ABC):
    """Persistence interface for resource state records."""

    @abstractmethod
    def save(self, record: dict) -> None:
        """
        Persist a state record, replacing any record with the same
        ``resource_key``.
        """

    @abstractmethod
    def get(self, key: str) -> Optional[dict]:
        """
        Retrieve a single state record by its ``resource_key``.

        Returns ``None`` when no matching record is found.
        """

    @abstractmethod
    def list_all(self, resource_type: Optional[str] = None) -> list[dict]:
        """Return every stored record, optionally only one resource type."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Delete the record with the given ``resource_key``.

        Returns ``True`` if the record existed and was removed.
        """
