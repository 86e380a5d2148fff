"""Typed views of Aliyun DNS API responses."""

from pydantic import BaseModel, ConfigDict, Field


class DomainRecord(BaseModel):
    """A single entry of ``DomainRecords.Record``."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    record_id: str | None = Field(default=None, alias="RecordId")
    rr: str | None = Field(default=None, alias="RR")
    type: str | None = Field(default=None, alias="Type")
    value: str | None = Field(default=None, alias="Value")


class DomainRecords(BaseModel):
    record: list[DomainRecord] = Field(default_factory=list, alias="Record")


class DescribeDomainRecordsResponse(BaseModel):
    """Body of a DescribeDomainRecords response (unknown fields ignored)."""

    domain_records: DomainRecords = Field(
        default_factory=DomainRecords, alias="DomainRecords"
    )
