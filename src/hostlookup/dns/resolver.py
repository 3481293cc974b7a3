"""DNS resolution backed by dnspython's async resolver."""

import logging
from typing import Optional, Protocol

import dns.asyncresolver
import dns.exception
import dns.rdataclass
import dns.rdatatype
import dns.reversename

from hostlookup.core.config import Settings, get_settings
from hostlookup.dns.records import Result, decode_answer
from hostlookup.utils.exceptions import AddressConversionError

logger = logging.getLogger(__name__)


class Resolver(Protocol):
    """Protocol for the resolver the lookup functions query."""

    async def resolve(
        self,
        name: str,
        rdtype: dns.rdatatype.RdataType,
        rdclass: dns.rdataclass.RdataClass = dns.rdataclass.IN,
    ) -> Result: ...


def create_async_resolver(settings: Settings) -> dns.asyncresolver.Resolver:
    """Build a dnspython async resolver from settings."""
    resolver = dns.asyncresolver.Resolver(
        filename=settings.resolv_conf,
        configure=settings.use_system_config,
    )

    if not settings.use_system_config:
        resolver.nameservers = settings.nameservers_list

    resolver.port = settings.dns_port
    resolver.timeout = settings.dns_timeout
    resolver.lifetime = settings.dns_lifetime

    return resolver


class DNSPythonResolver:
    """Resolver that issues queries through dns.asyncresolver."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        resolver: Optional[dns.asyncresolver.Resolver] = None,
    ):
        self._settings = settings or get_settings()
        self._resolver = resolver or create_async_resolver(self._settings)

    async def resolve(
        self,
        name: str,
        rdtype: dns.rdatatype.RdataType,
        rdclass: dns.rdataclass.RdataClass = dns.rdataclass.IN,
    ) -> Result:
        """
        Resolve one query and decode the answer.

        dnspython errors (NXDOMAIN, NoAnswer, Timeout, ...) propagate unchanged.
        """
        logger.debug("Resolving %s %s", name, dns.rdatatype.to_text(rdtype))
        answer = await self._resolver.resolve(
            name,
            rdtype,
            rdclass,
            tcp=self._settings.dns_use_tcp,
            search=self._settings.dns_use_search,
        )
        return decode_answer(answer)


def reverse_address(address: str) -> str:
    """
    Convert an IPv4 or IPv6 address to its reverse-lookup name.

    1.2.3.4 -> 4.3.2.1.in-addr.arpa.
    """
    try:
        return dns.reversename.from_address(address).to_text()
    except (dns.exception.SyntaxError, ValueError) as e:
        raise AddressConversionError(f"Invalid IP address: {address}") from e


# Module-level resolver instance, created on first use
_resolver: Optional[Resolver] = None


def get_resolver() -> Resolver:
    """Get or create the default resolver."""
    global _resolver  # pylint: disable=global-statement

    if _resolver is None:
        _resolver = DNSPythonResolver()

    return _resolver


def set_resolver(resolver: Resolver) -> None:
    """Set a custom resolver (useful for testing)."""
    global _resolver  # pylint: disable=global-statement

    _resolver = resolver


def reset_resolver() -> None:
    """Reset the resolver (useful for testing)."""
    global _resolver  # pylint: disable=global-statement

    _resolver = None
