"""Abstract base class for DNS providers."""

from abc import ABC, abstractmethod

import httpx


class DNSProvider(ABC):
    """Abstract DNS provider interface for ACME challenge records."""

    @abstractmethod
    def add_txt_record(self, domain: str, name: str, value: str) -> httpx.Response:
        """Create a TXT record.

        Args:
            domain: The parent domain (e.g., "example.com")
            name: The host prefix (e.g., "_acme-challenge")
            value: The validation token

        Returns:
            The raw provider response
        """
        pass

    @abstractmethod
    def find_txt_record_id(
        self, domain: str, name: str, value: str | None = None
    ) -> str | None:
        """Look up the identifier of an existing TXT record.

        Args:
            domain: The parent domain (e.g., "example.com")
            name: The host prefix (e.g., "_acme-challenge")
            value: Preferred record content when several records share the name

        Returns:
            The record ID, or None if no matching record exists
        """
        pass

    @abstractmethod
    def delete_record(self, record_id: str) -> httpx.Response:
        """Delete a record by its identifier.

        Args:
            record_id: The identifier returned by find_txt_record_id

        Returns:
            The raw provider response
        """
        pass

    def close(self) -> None:
        """Release any underlying connections."""
