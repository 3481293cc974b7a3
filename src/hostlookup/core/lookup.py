"""High-level lookup functions built on a Resolver."""

# pylint: disable=missing-function-docstring

import asyncio
import ipaddress
import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

import dns.exception
import dns.rdataclass
import dns.rdatatype

from hostlookup.dns.records import (
    AAAARecord,
    ARecord,
    MXRecord,
    PTRRecord,
    Result,
    SRVRecord,
    TXTRecord,
    expect_records,
)
from hostlookup.dns.resolver import Resolver, get_resolver, reverse_address
from hostlookup.dns.srv import order_srv, srv_query_name
from hostlookup.utils.exceptions import capture_exception, is_expected_dns_error

logger = logging.getLogger(__name__)

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


@dataclass
class Lookup:
    """
    Lookup functions in the shape of the standard library's net helpers.

    Every method issues its own queries; nothing is shared between calls
    except the resolver.
    """

    resolver: Resolver = field(default_factory=get_resolver)
    rng: Optional[random.Random] = None

    async def _query(self, name: str, rdtype: dns.rdatatype.RdataType) -> Result:
        return await self.resolver.resolve(name, rdtype, dns.rdataclass.IN)

    async def lookup_addr(self, address: str) -> list[str]:
        """
        Reverse lookup: return the names mapping to the given address.

        Raises AddressConversionError before any query for a malformed address.
        """
        reverse = reverse_address(address)
        result = await self._query(reverse, dns.rdatatype.PTR)
        return [rr.target for rr in expect_records(result.records, PTRRecord)]

    async def lookup_cname(self, name: str) -> str:
        """
        Return the canonical name for the given host.

        An empty string means the answer did not follow any CNAME.
        """
        # TODO: fall back to an AAAA query when the A query has no answer
        result = await self._query(name, dns.rdatatype.A)
        return result.canonical_name

    async def _resolve_family(
        self, host: str, rdtype: dns.rdatatype.RdataType
    ) -> Optional[Result]:
        """Resolve one address family; a failure means no addresses for it."""
        try:
            return await self._query(host, rdtype)
        except dns.exception.DNSException as e:
            if is_expected_dns_error(e):
                logger.debug(
                    "No %s data for %s: %s", dns.rdatatype.to_text(rdtype), host, e
                )
            else:
                capture_exception(
                    e,
                    {"hostname": host, "record_type": dns.rdatatype.to_text(rdtype)},
                    level="warning",
                )
            return None

    async def lookup_ip(self, host: str) -> list[IPAddress]:
        """
        Return the IPv4 then IPv6 addresses of host.

        The A and AAAA queries run in parallel. A family whose query fails
        contributes no addresses; that failure is not reported to the caller.
        Any other error is raised once both queries are finished or cancelled.
        """
        tasks = [
            asyncio.create_task(self._resolve_family(host, dns.rdatatype.A)),
            asyncio.create_task(self._resolve_family(host, dns.rdatatype.AAAA)),
        ]
        try:
            result_a, result_aaaa = await asyncio.gather(*tasks)
        except Exception:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        addrs: list[IPAddress] = []

        if result_a is not None:
            addrs.extend(rr.address for rr in expect_records(result_a.records, ARecord))

        if result_aaaa is not None:
            addrs.extend(
                rr.address for rr in expect_records(result_aaaa.records, AAAARecord)
            )

        return addrs

    async def lookup_host(self, host: str) -> list[str]:
        """Return the addresses of host as strings."""
        return [str(ip) for ip in await self.lookup_ip(host)]

    async def lookup_mx(self, name: str) -> list[MXRecord]:
        """Return the MX records of name in the order the resolver returned them."""
        result = await self._query(name, dns.rdatatype.MX)
        return expect_records(result.records, MXRecord)

    async def lookup_srv(
        self, service: str, proto: str, name: str
    ) -> Tuple[str, list[SRVRecord]]:
        """
        Resolve an SRV query for _service._proto.name.

        Records are sorted by priority and randomized by weight within a
        priority. The returned canonical name is always empty.
        """
        qname = srv_query_name(service, proto, name)
        result = await self._query(qname, dns.rdatatype.SRV)
        records = expect_records(result.records, SRVRecord)

        # TODO: return the canonical name of the SRV answer
        return "", order_srv(records, self.rng)

    async def lookup_txt(self, name: str) -> list[str]:
        """Return every TXT segment of name, flattened in record order."""
        result = await self._query(name, dns.rdatatype.TXT)
        txt: list[str] = []

        for rr in expect_records(result.records, TXTRecord):
            txt.extend(rr.strings)

        return txt


# Default lookup instance
_lookup: Optional[Lookup] = None


def get_lookup() -> Lookup:
    """Get or create the default lookup instance."""
    global _lookup  # pylint: disable=global-statement

    if _lookup is None:
        _lookup = Lookup()

    return _lookup


def set_lookup(lookup: Lookup) -> None:
    """Set a custom lookup instance (useful for testing)."""
    global _lookup  # pylint: disable=global-statement

    _lookup = lookup


def reset_lookup() -> None:
    """Reset the lookup instance (useful for testing)."""
    global _lookup  # pylint: disable=global-statement

    _lookup = None
