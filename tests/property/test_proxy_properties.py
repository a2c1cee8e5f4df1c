"""Property tests for proxy resolution and provider username synthesis."""

from __future__ import annotations

import random

from hypothesis import given, settings, strategies as st

from catalog_scraper.browser.session import CHROMIUM_ARGS, build_launch_options
from catalog_scraper.proxy.pool import parse_proxy_entry
from catalog_scraper.proxy.providers import BrightDataProvider, to_country_code
from catalog_scraper.proxy.resolver import ProxyResolver
from catalog_scraper.proxy.types import ProxyEndpoint


# --- Strategies ---

geo_codes = st.sampled_from(["RU", "DE", "BR", "EN", "FR", "ES", "IT", "PL", "US", "MX"])
hosts = st.from_regex(r"[a-z][a-z0-9\-]{0,15}(\.[a-z]{2,6}){0,2}", fullmatch=True)
ports = st.integers(min_value=1, max_value=65535)
usernames = st.from_regex(r"[A-Za-z0-9_\-]{1,30}", fullmatch=True)
passwords = st.text(
    alphabet=st.characters(blacklist_characters=",/", blacklist_categories=("Cs", "Zs", "Zl", "Zp", "Cc")),
    min_size=1,
    max_size=30,
)
customer_ids = st.from_regex(r"[a-z0-9]{4,12}", fullmatch=True).filter(lambda c: "zone" not in c)
zones = st.from_regex(r"[a-z_]{3,15}", fullmatch=True)

endpoints = st.builds(ProxyEndpoint, host=hosts, port=ports)


@settings(max_examples=100)
@given(
    pool=st.dictionaries(geo_codes, st.lists(endpoints, min_size=1, max_size=5), max_size=5),
    geo=geo_codes,
    seed=st.integers(),
)
def test_pool_choice_is_member_or_none(pool, geo, seed) -> None:
    resolver = ProxyResolver(pool=pool, rng=random.Random(seed))
    chosen = resolver.resolve(geo)

    if geo in pool:
        assert chosen in pool[geo]
    else:
        assert chosen is None


@settings(max_examples=100)
@given(customer=customer_ids, zone=zones, geo=geo_codes)
def test_brightdata_username_has_exactly_one_zone(customer, zone, geo) -> None:
    cc = to_country_code(geo).lower()

    plain = BrightDataProvider(f"brd-customer-{customer}", "pw", zone=zone).build(geo)
    zoned = BrightDataProvider(f"brd-customer-{customer}-zone-{zone}", "pw", zone="other").build(geo)

    assert plain.username == f"brd-customer-{customer}-zone-{zone}-country-{cc}"
    assert zoned.username == f"brd-customer-{customer}-zone-{zone}-country-{cc}"
    assert plain.username.count("-zone-") == 1


@settings(max_examples=100)
@given(host=hosts, port=ports, user=usernames, password=passwords)
def test_pool_entry_roundtrip_and_launch_args_carry_no_credentials(host, port, user, password) -> None:
    ep = parse_proxy_entry(f"{host}:{port}:{user}:{password}")

    assert ep is not None
    assert (ep.host, ep.port, ep.username) == (host, port, user)
    assert ep.password == password

    args = build_launch_options(ep)["args"]
    assert args == [*CHROMIUM_ARGS, f"--proxy-server={host}:{port}"]
