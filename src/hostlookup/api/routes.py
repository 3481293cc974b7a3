"""API routes exposing the lookup functions."""

import contextlib
from dataclasses import dataclass, field
from typing import Iterator, Optional

import dns.exception
import dns.resolver
from fastapi import APIRouter, Depends, HTTPException

from hostlookup.api.models import (
    CanonicalNameResponse,
    HostResponse,
    IPAddressModel,
    IPResponse,
    MXRecordModel,
    MXResponse,
    NamesResponse,
    SRVRecordModel,
    SRVResponse,
    TXTResponse,
)
from hostlookup.core.config import Settings, get_settings
from hostlookup.core.lookup import Lookup, get_lookup
from hostlookup.utils.decorators import sentry_exception_catcher
from hostlookup.utils.exceptions import (
    AddressConversionError,
    DecodeMismatchError,
    capture_exception,
)

router = APIRouter(prefix="/lookup", tags=["lookup"])


@dataclass
class RouteDependencies:
    """Dependencies for route handlers."""

    settings: Settings = field(default_factory=get_settings)
    lookup: Lookup = field(default_factory=get_lookup)


# Global dependencies instance (can be overridden for testing)
_dependencies: Optional[RouteDependencies] = None


def get_dependencies() -> RouteDependencies:
    """Get the current route dependencies."""
    global _dependencies  # pylint: disable=global-statement
    if _dependencies is None:
        _dependencies = RouteDependencies()
    return _dependencies


def set_dependencies(deps: RouteDependencies) -> None:
    """Set custom dependencies (useful for testing)."""
    global _dependencies  # pylint: disable=global-statement
    _dependencies = deps


def reset_dependencies() -> None:
    """Reset dependencies to default (useful for testing)."""
    global _dependencies  # pylint: disable=global-statement
    _dependencies = None


@contextlib.contextmanager
def dns_errors(query: str) -> Iterator[None]:
    """Translate lookup errors into HTTP errors."""
    try:
        yield
    except AddressConversionError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except dns.resolver.NXDOMAIN as e:
        raise HTTPException(status_code=404, detail=f"{query} does not exist") from e
    except dns.resolver.NoAnswer as e:
        raise HTTPException(status_code=404, detail=f"No answer for {query}") from e
    except dns.exception.Timeout as e:
        raise HTTPException(status_code=504, detail=f"Timeout resolving {query}") from e
    except dns.resolver.NoNameservers as e:
        raise HTTPException(
            status_code=502, detail=f"No nameservers could answer {query}"
        ) from e
    except DecodeMismatchError as e:
        capture_exception(e, {"query": query})
        raise HTTPException(status_code=500, detail="Unexpected record type") from e


@router.get("/addr/{address}", response_model=NamesResponse)
@sentry_exception_catcher
async def lookup_addr(
    address: str, deps: RouteDependencies = Depends(get_dependencies)
) -> NamesResponse:
    """Reverse lookup for an IPv4 or IPv6 address."""
    with dns_errors(address):
        names = await deps.lookup.lookup_addr(address)

    return NamesResponse(query=address, names=names)


@router.get("/cname/{name}", response_model=CanonicalNameResponse)
@sentry_exception_catcher
async def lookup_cname(
    name: str, deps: RouteDependencies = Depends(get_dependencies)
) -> CanonicalNameResponse:
    """Canonical name of a host."""
    with dns_errors(name):
        cname = await deps.lookup.lookup_cname(name)

    return CanonicalNameResponse(query=name, canonical_name=cname)


@router.get("/host/{name}", response_model=HostResponse)
@sentry_exception_catcher
async def lookup_host(
    name: str, deps: RouteDependencies = Depends(get_dependencies)
) -> HostResponse:
    """IPv4 and IPv6 addresses of a host as strings."""
    with dns_errors(name):
        addrs = await deps.lookup.lookup_host(name)

    return HostResponse(query=name, addresses=addrs)


@router.get("/ip/{name}", response_model=IPResponse)
@sentry_exception_catcher
async def lookup_ip(
    name: str, deps: RouteDependencies = Depends(get_dependencies)
) -> IPResponse:
    """IPv4 and IPv6 addresses of a host with their versions."""
    with dns_errors(name):
        ips = await deps.lookup.lookup_ip(name)

    return IPResponse(
        query=name,
        addresses=[IPAddressModel(address=str(ip), version=ip.version) for ip in ips],
    )


@router.get("/mx/{name}", response_model=MXResponse)
@sentry_exception_catcher
async def lookup_mx(
    name: str, deps: RouteDependencies = Depends(get_dependencies)
) -> MXResponse:
    """Mail exchangers of a domain."""
    with dns_errors(name):
        records = await deps.lookup.lookup_mx(name)

    return MXResponse(
        query=name,
        records=[
            MXRecordModel(preference=mx.preference, exchange=mx.exchange)
            for mx in records
        ],
    )


@router.get("/srv/{name}", response_model=SRVResponse)
@sentry_exception_catcher
async def lookup_srv(
    name: str,
    service: str = "",
    proto: str = "",
    deps: RouteDependencies = Depends(get_dependencies),
) -> SRVResponse:
    """
    Service records for _service._proto.name.

    With neither service nor proto given, name is queried directly.
    """
    with dns_errors(name):
        cname, records = await deps.lookup.lookup_srv(service, proto, name)

    return SRVResponse(
        query=name,
        canonical_name=cname,
        records=[
            SRVRecordModel(
                priority=srv.priority,
                weight=srv.weight,
                port=srv.port,
                target=srv.target,
            )
            for srv in records
        ],
    )


@router.get("/txt/{name}", response_model=TXTResponse)
@sentry_exception_catcher
async def lookup_txt(
    name: str, deps: RouteDependencies = Depends(get_dependencies)
) -> TXTResponse:
    """TXT strings of a domain."""
    with dns_errors(name):
        strings = await deps.lookup.lookup_txt(name)

    return TXTResponse(query=name, strings=strings)
