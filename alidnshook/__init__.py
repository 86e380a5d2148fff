"""alidnshook - Aliyun DNS TXT record hook for ACME DNS-01 challenges."""

__version__ = "0.1.0"
