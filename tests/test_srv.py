"""Tests for dns/srv.py."""

# pylint: disable=missing-function-docstring

import random
from collections import Counter

import pytest

from hostlookup.dns.records import SRVRecord
from hostlookup.dns.srv import order_srv, shuffle_by_weight, srv_query_name


def srv(target: str, priority: int = 10, weight: int = 0, port: int = 5060) -> SRVRecord:
    return SRVRecord(priority=priority, weight=weight, port=port, target=target)


class TestSrvQueryName:
    """Tests for srv_query_name."""

    def test_builds_rfc2782_name(self):
        assert srv_query_name("ldap", "tcp", "example.com") == "_ldap._tcp.example.com"

    def test_empty_selectors_query_name_directly(self):
        assert srv_query_name("", "", "example.com") == "example.com"

    def test_only_service_given(self):
        assert srv_query_name("sip", "", "example.com") == "_sip._.example.com"

    def test_name_is_not_normalized(self):
        assert srv_query_name("xmpp", "tcp", "Example.COM.") == "_xmpp._tcp.Example.COM."


class TestShuffleByWeight:
    """Tests for shuffle_by_weight within one priority."""

    def test_empty(self):
        assert shuffle_by_weight([], random.Random(1)) == []

    def test_single_record(self):
        record = srv("a.", weight=0)
        assert shuffle_by_weight([record], random.Random(1)) == [record]

    def test_all_zero_weight_keeps_order(self):
        records = [srv("a."), srv("b."), srv("c.")]
        assert shuffle_by_weight(records, random.Random(1)) == records

    def test_zero_weight_comes_after_weighted(self):
        zero = srv("zero.", weight=0)
        heavy = srv("heavy.", weight=50)
        light = srv("light.", weight=1)
        rng = random.Random(7)

        for _ in range(500):
            ordered = shuffle_by_weight([zero, heavy, light], rng)
            assert ordered[-1] == zero
            assert set(ordered) == {zero, heavy, light}

    def test_does_not_mutate_input(self):
        records = [srv("a.", weight=1), srv("b.", weight=9)]
        copy = list(records)
        shuffle_by_weight(records, random.Random(3))
        assert records == copy

    def test_first_pick_proportional_to_weight(self):
        records = [srv("a.", weight=10), srv("b.", weight=20), srv("c.", weight=70)]
        rng = random.Random(2782)
        trials = 20000

        firsts = Counter(shuffle_by_weight(records, rng)[0].target for _ in range(trials))

        assert firsts["a."] / trials == pytest.approx(0.10, abs=0.02)
        assert firsts["b."] / trials == pytest.approx(0.20, abs=0.02)
        assert firsts["c."] / trials == pytest.approx(0.70, abs=0.02)


class TestOrderSrv:
    """Tests for order_srv."""

    def test_sorted_by_priority(self):
        records = [
            srv("c.", priority=30, weight=5),
            srv("a.", priority=10, weight=5),
            srv("b.", priority=20, weight=5),
        ]

        ordered = order_srv(records, random.Random(0))

        assert [r.priority for r in ordered] == [10, 20, 30]

    def test_equal_priority_zero_weight_is_stable(self):
        records = [
            srv("x.", priority=20),
            srv("a.", priority=10),
            srv("y.", priority=20),
            srv("b.", priority=10),
        ]

        ordered = order_srv(records, random.Random(0))

        assert [r.target for r in ordered] == ["a.", "b.", "x.", "y."]

    def test_priority_bands_never_interleave(self):
        records = [srv(f"h{i}.", priority=i % 3, weight=i + 1) for i in range(12)]
        rng = random.Random(11)

        for _ in range(200):
            ordered = order_srv(records, rng)
            priorities = [r.priority for r in ordered]
            assert priorities == sorted(priorities)
            assert sorted(ordered, key=lambda r: r.target) == sorted(
                records, key=lambda r: r.target
            )

    def test_weighted_within_priority(self):
        primary = [srv("p1.", priority=1, weight=1), srv("p2.", priority=1, weight=3)]
        backup = srv("backup.", priority=5, weight=100)
        rng = random.Random(99)
        trials = 10000

        firsts = Counter(
            order_srv([backup, *primary], rng)[0].target for _ in range(trials)
        )

        assert firsts["backup."] == 0
        assert firsts["p1."] / trials == pytest.approx(0.25, abs=0.02)
        assert firsts["p2."] / trials == pytest.approx(0.75, abs=0.02)

    def test_default_random_source(self):
        records = [srv("a.", priority=2, weight=1), srv("b.", priority=1, weight=1)]
        assert [r.target for r in order_srv(records)] == ["b.", "a."]

    def test_empty(self):
        assert order_srv([]) == []
