"""Signed request construction for the Aliyun DNS API."""

import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict

from alidnshook.config import Credentials
from alidnshook.signing import canonical_query_string, compute_signature, percent_encode

DEFAULT_ENDPOINT = "alidns.aliyuncs.com"
DEFAULT_API_VERSION = "2015-01-09"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class SignedRequest(BaseModel):
    """A fully signed API call, ready to be sent as a GET."""

    model_config = ConfigDict(frozen=True)

    params: dict[str, str]
    signature: str
    url: str


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_nonce() -> str:
    return str(uuid.uuid4())


class AliyunRequestBuilder:
    """Builds signed query-string requests for the DNS actions we use."""

    def __init__(
        self,
        credentials: Credentials,
        endpoint: str = DEFAULT_ENDPOINT,
        api_version: str = DEFAULT_API_VERSION,
        clock: Callable[[], datetime] | None = None,
        nonce_factory: Callable[[], str] | None = None,
    ):
        """Initialize the builder.

        Args:
            credentials: AccessKey pair used to sign every request
            endpoint: API host name (default: alidns.aliyuncs.com)
            api_version: Value of the ``Version`` parameter
            clock: Returns the current UTC time (for tests)
            nonce_factory: Returns a fresh ``SignatureNonce`` (for tests)
        """
        self.credentials = credentials
        self.endpoint = endpoint
        self.api_version = api_version
        self.clock = clock or _utc_now
        self.nonce_factory = nonce_factory or _new_nonce

    def _common_params(self, action: str) -> dict[str, str]:
        return {
            "AccessKeyId": self.credentials.key_id,
            "Action": action,
            "Format": "json",
            "SignatureMethod": "HMAC-SHA1",
            "SignatureNonce": self.nonce_factory(),
            "SignatureVersion": "1.0",
            "Timestamp": self.clock().strftime(TIMESTAMP_FORMAT),
            "Version": self.api_version,
        }

    def sign(self, params: dict[str, str]) -> SignedRequest:
        """Sign a parameter set and build the request URL."""
        ordered = {name: params[name] for name in sorted(params)}
        signature = compute_signature(ordered, self.credentials.key_secret)
        query = canonical_query_string(ordered)
        url = f"https://{self.endpoint}/?{query}&Signature={percent_encode(signature)}"
        return SignedRequest(params=ordered, signature=signature, url=url)

    def add_domain_record(
        self, domain: str, rr: str, value: str, record_type: str = "TXT"
    ) -> SignedRequest:
        """Build an AddDomainRecord request.

        Args:
            domain: The parent domain (e.g., "example.com")
            rr: The host prefix (e.g., "_acme-challenge")
            value: The record content
            record_type: The record type (default: TXT)
        """
        params = self._common_params("AddDomainRecord")
        params.update({"DomainName": domain, "RR": rr, "Type": record_type, "Value": value})
        return self.sign(params)

    def describe_domain_records(
        self, domain: str, rr_keyword: str, record_type: str = "TXT"
    ) -> SignedRequest:
        """Build a DescribeDomainRecords request filtered by host and type."""
        params = self._common_params("DescribeDomainRecords")
        params.update({"DomainName": domain, "RRKeyWord": rr_keyword, "Type": record_type})
        return self.sign(params)

    def delete_domain_record(self, record_id: str) -> SignedRequest:
        """Build a DeleteDomainRecord request."""
        params = self._common_params("DeleteDomainRecord")
        params["RecordId"] = record_id
        return self.sign(params)
