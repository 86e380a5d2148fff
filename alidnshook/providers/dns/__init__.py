"""DNS provider implementations."""

from alidnshook.providers.dns.aliyun import AliyunAPIError, AliyunDNSProvider
from alidnshook.providers.dns.base import DNSProvider

__all__ = ["AliyunAPIError", "AliyunDNSProvider", "DNSProvider"]
