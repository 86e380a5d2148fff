"""Aliyun (Alibaba Cloud DNS) provider implementation."""

import httpx
from pydantic import ValidationError

from alidnshook.api import (
    DEFAULT_API_VERSION,
    DEFAULT_ENDPOINT,
    AliyunRequestBuilder,
    SignedRequest,
)
from alidnshook.config import Credentials
from alidnshook.providers.dns.base import DNSProvider
from alidnshook.providers.dns.models import DescribeDomainRecordsResponse

RECORD_TYPE = "TXT"


class AliyunAPIError(RuntimeError):
    """Raised when a lookup call gets a non-success HTTP status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Aliyun API returned HTTP {status_code}")
        self.status_code = status_code
        self.body = body


class AliyunDNSProvider(DNSProvider):
    """DNS provider implementation for Alibaba Cloud DNS."""

    def __init__(
        self,
        credentials: Credentials,
        endpoint: str = DEFAULT_ENDPOINT,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
    ):
        """Initialize Aliyun provider.

        Args:
            credentials: Aliyun AccessKey pair
            endpoint: API host name
            api_version: API version sent with every call
            timeout: HTTP timeout in seconds
        """
        self.builder = AliyunRequestBuilder(
            credentials, endpoint=endpoint, api_version=api_version
        )
        self.client = httpx.Client(
            headers={"Accept": "application/json"},
            timeout=timeout,
        )

    def _send(self, request: SignedRequest) -> httpx.Response:
        return self.client.get(request.url)

    def add_txt_record(self, domain: str, name: str, value: str) -> httpx.Response:
        """Create a TXT record and return the raw response."""
        request = self.builder.add_domain_record(domain, name, value, RECORD_TYPE)
        return self._send(request)

    def find_txt_record_id(
        self, domain: str, name: str, value: str | None = None
    ) -> str | None:
        """Find the ID of a TXT record named ``name`` in ``domain``.

        When ``value`` is given, a record holding that value is preferred over
        other records with the same name; otherwise the first match is used.

        Unparseable or empty bodies count as "not found". A non-success HTTP
        status raises AliyunAPIError so callers can tell a failed lookup from
        a missing record.
        """
        request = self.builder.describe_domain_records(domain, name, RECORD_TYPE)
        response = self._send(request)

        if not response.is_success:
            raise AliyunAPIError(response.status_code, response.text)

        return self._matching_record_id(response.text, name, value)

    @staticmethod
    def _matching_record_id(body: str, name: str, value: str | None = None) -> str | None:
        """Extract the best matching record ID from a DescribeDomainRecords body."""
        if not body:
            return None

        try:
            data = DescribeDomainRecordsResponse.model_validate_json(body)
        except ValidationError:
            return None

        # RRKeyWord is a fuzzy match, so "_acme-challenge.www" can come back too.
        # DNS names are case-insensitive.
        matches = [
            record
            for record in data.domain_records.record
            if record.record_id
            and (record.rr is None or record.rr.lower() == name.lower())
            and (record.type is None or record.type.upper() == RECORD_TYPE)
        ]
        if not matches:
            return None

        if value is not None:
            for record in matches:
                if record.value == value:
                    return record.record_id

        return matches[0].record_id

    def delete_record(self, record_id: str) -> httpx.Response:
        """Delete a record by ID and return the raw response."""
        request = self.builder.delete_domain_record(record_id)
        return self._send(request)

    def close(self) -> None:
        self.client.close()
