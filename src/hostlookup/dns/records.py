"""Typed resource records and decoding of dnspython answers."""

import ipaddress
from dataclasses import dataclass
from typing import Iterable, Type, TypeVar, Union

import dns.name
import dns.rdata
import dns.rdatatype
import dns.resolver

from hostlookup.utils.exceptions import DecodeMismatchError


@dataclass(frozen=True)
class ARecord:
    """IPv4 address record."""

    address: ipaddress.IPv4Address


@dataclass(frozen=True)
class AAAARecord:
    """IPv6 address record."""

    address: ipaddress.IPv6Address


@dataclass(frozen=True)
class PTRRecord:
    """Pointer record (reverse lookup target)."""

    target: str


@dataclass(frozen=True)
class MXRecord:
    """Mail exchange record."""

    preference: int
    exchange: str


@dataclass(frozen=True)
class TXTRecord:
    """Text record, one entry per character-string segment."""

    strings: tuple[str, ...]


@dataclass(frozen=True)
class SRVRecord:
    """Service location record (RFC 2782)."""

    priority: int
    weight: int
    port: int
    target: str


ResourceRecord = Union[ARecord, AAAARecord, PTRRecord, MXRecord, TXTRecord, SRVRecord]

R = TypeVar("R", ARecord, AAAARecord, PTRRecord, MXRecord, TXTRecord, SRVRecord)


@dataclass(frozen=True)
class Result:
    """
    Decoded outcome of one query.

    canonical_name is empty unless the answer followed a CNAME chain.
    records keep the order the resolver returned them in.
    """

    name: str
    canonical_name: str = ""
    records: tuple[ResourceRecord, ...] = ()
    ttl: int = 0


def _decode_a(rdata) -> ARecord:
    return ARecord(address=ipaddress.IPv4Address(rdata.address))


def _decode_aaaa(rdata) -> AAAARecord:
    return AAAARecord(address=ipaddress.IPv6Address(rdata.address))


def _decode_ptr(rdata) -> PTRRecord:
    return PTRRecord(target=rdata.target.to_text())


def _decode_mx(rdata) -> MXRecord:
    return MXRecord(preference=rdata.preference, exchange=rdata.exchange.to_text())


def _decode_txt(rdata) -> TXTRecord:
    return TXTRecord(
        strings=tuple(s.decode("utf-8", errors="replace") for s in rdata.strings)
    )


def _decode_srv(rdata) -> SRVRecord:
    return SRVRecord(
        priority=rdata.priority,
        weight=rdata.weight,
        port=rdata.port,
        target=rdata.target.to_text(),
    )


_DECODERS = {
    dns.rdatatype.A: _decode_a,
    dns.rdatatype.AAAA: _decode_aaaa,
    dns.rdatatype.PTR: _decode_ptr,
    dns.rdatatype.MX: _decode_mx,
    dns.rdatatype.TXT: _decode_txt,
    dns.rdatatype.SRV: _decode_srv,
}


def decode_rdata(rdata: dns.rdata.Rdata) -> ResourceRecord:
    """Convert a single dnspython rdata into its typed record."""
    decoder = _DECODERS.get(rdata.rdtype)

    if decoder is None:
        raise DecodeMismatchError(
            f"unsupported record type {dns.rdatatype.to_text(rdata.rdtype)}"
        )

    return decoder(rdata)


def decode_canonical_name(qname: dns.name.Name, canonical: dns.name.Name) -> str:
    """Return the canonical name, or "" when no CNAME was followed."""
    if canonical == qname:
        return ""
    return canonical.to_text()


def decode_answer(answer: dns.resolver.Answer) -> Result:
    """Project a dnspython Answer into a Result."""
    rrset = answer.rrset

    return Result(
        name=answer.qname.to_text(),
        canonical_name=decode_canonical_name(answer.qname, answer.canonical_name),
        records=tuple(decode_rdata(rdata) for rdata in (rrset or ())),
        ttl=rrset.ttl if rrset is not None else 0,
    )


def expect_records(records: Iterable[ResourceRecord], kind: Type[R]) -> list[R]:
    """
    Narrow records to a single variant.

    Raises DecodeMismatchError on the first record of another variant.
    """
    matched: list[R] = []

    for record in records:
        if not isinstance(record, kind):
            raise DecodeMismatchError(
                f"expected {kind.__name__}, got {type(record).__name__}"
            )
        matched.append(record)

    return matched
