"""Pydantic models for API response schemas."""

from typing import List

from pydantic import BaseModel, Field


class NamesResponse(BaseModel):
    """Response from reverse lookup endpoint."""

    query: str
    names: List[str] = Field(default_factory=list)


class CanonicalNameResponse(BaseModel):
    """Response from canonical name endpoint."""

    query: str
    canonical_name: str


class HostResponse(BaseModel):
    """Response from host lookup endpoint."""

    query: str
    addresses: List[str] = Field(default_factory=list)


class IPAddressModel(BaseModel):
    """An address with its IP version."""

    address: str
    version: int


class IPResponse(BaseModel):
    """Response from IP lookup endpoint."""

    query: str
    addresses: List[IPAddressModel] = Field(default_factory=list)


class MXRecordModel(BaseModel):
    """MX record."""

    preference: int
    exchange: str


class MXResponse(BaseModel):
    """Response from MX lookup endpoint."""

    query: str
    records: List[MXRecordModel] = Field(default_factory=list)


class SRVRecordModel(BaseModel):
    """SRV record."""

    priority: int
    weight: int
    port: int
    target: str


class SRVResponse(BaseModel):
    """Response from SRV lookup endpoint."""

    query: str
    canonical_name: str = ""
    records: List[SRVRecordModel] = Field(default_factory=list)


class TXTResponse(BaseModel):
    """Response from TXT lookup endpoint."""

    query: str
    strings: List[str] = Field(default_factory=list)
