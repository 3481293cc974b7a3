"""SRV query names and RFC 2782 record ordering."""

import itertools
import random
from operator import attrgetter
from typing import Iterable, Optional

from hostlookup.dns.records import SRVRecord

_system_random = random.SystemRandom()


def srv_query_name(service: str, proto: str, name: str) -> str:
    """
    Build the name an SRV query is sent for.

    Looks up _service._proto.name, or name itself when both service and
    proto are empty (services published under non-standard names).
    """
    if service == "" and proto == "":
        return name

    return f"_{service}._{proto}.{name}"


def shuffle_by_weight(records: list[SRVRecord], rng: random.Random) -> list[SRVRecord]:
    """
    Order records of one priority by weighted random selection.

    Each pick draws from [0, remaining weight) and takes the first record
    whose running weight sum exceeds the draw. Once only zero-weight
    records are left they keep their original order.
    """
    remaining = list(records)
    ordered: list[SRVRecord] = []
    total = sum(record.weight for record in remaining)

    while total > 0 and len(remaining) > 1:
        draw = rng.randrange(total)
        running = 0
        chosen = 0

        for index, record in enumerate(remaining):
            running += record.weight
            if running > draw:
                chosen = index
                break

        record = remaining.pop(chosen)
        ordered.append(record)
        total -= record.weight

    ordered.extend(remaining)
    return ordered


def order_srv(
    records: Iterable[SRVRecord], rng: Optional[random.Random] = None
) -> list[SRVRecord]:
    """Sort by ascending priority, then shuffle by weight within each priority."""
    rng = rng or _system_random
    by_priority = sorted(records, key=attrgetter("priority"))

    ordered: list[SRVRecord] = []
    for _, group in itertools.groupby(by_priority, key=attrgetter("priority")):
        ordered.extend(shuffle_by_weight(list(group), rng))

    return ordered
