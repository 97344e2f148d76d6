"""Pydantic models describing the LinkSafe compliance API payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class LinkSafeBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class InductionPayload(LinkSafeBaseModel):
    induction_id: int | None = Field(default=None, alias="inductionID")
    inducted_on_utc: datetime = Field(alias="inductedOnUtc")
    expires_on_utc: datetime = Field(alias="expiresOnUtc")


class PrimaryContractorPayload(LinkSafeBaseModel):
    contractor_id: int = Field(alias="contractorID")
    display_name: str = Field(default="", alias="displayName")


class WorkerPayload(LinkSafeBaseModel):
    worker_id: int = Field(alias="workerID")
    email_address: str | None = Field(default=None, alias="emailAddress")
    first_name: str = Field(default="", alias="firstName")
    is_compliant: bool = Field(default=False, alias="isCompliant")
    inductions: list[InductionPayload] = Field(default_factory=list[InductionPayload])
    primary_contractor: PrimaryContractorPayload | None = Field(
        default=None, alias="primaryContractor"
    )

    _normalize_email = field_validator("email_address", mode="before")(_blank_to_none)

    @field_validator("first_name", mode="before")
    @classmethod
    def _null_name_to_blank(cls, value: object) -> object:
        return "" if value is None else value


class WorkersResponse(LinkSafeBaseModel):
    workers: list[WorkerPayload] = Field(default_factory=list[WorkerPayload])


class RecordPayload(LinkSafeBaseModel):
    record_id: int | None = Field(default=None, alias="recordID")
    record_type: str | None = Field(default=None, alias="recordType")
    description: str | None = None
    expires_on_utc: datetime | None = Field(default=None, alias="expiresOnUtc")
    record_status: str | None = Field(default=None, alias="recordStatus")


class ContractorPayload(LinkSafeBaseModel):
    contractor_id: int = Field(alias="contractorID")
    display_name: str = Field(default="", alias="displayName")
    is_compliant: bool = Field(default=False, alias="isCompliant")
    status: str | None = None
    non_compliant_items: int = Field(default=0, alias="nonCompliantItems")
    records: list[RecordPayload] = Field(default_factory=list[RecordPayload])

    @field_validator("display_name", mode="before")
    @classmethod
    def _null_name_to_blank(cls, value: object) -> object:
        return "" if value is None else value


class ContractorsResponse(LinkSafeBaseModel):
    contractors: list[ContractorPayload] = Field(default_factory=list[ContractorPayload])
