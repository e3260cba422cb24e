"""Property-based tests for provider lookup and recipient normalization."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from maildrop.domain.messages import Recipients
from maildrop.domain.providers import DEFAULT_SMTP_CONFIG, PROVIDER_RULES, find_provider, resolve_smtp_config

# ======================== Strategy helpers ========================

_local_part = st.from_regex(r"[a-z][a-z0-9_.+]{0,20}", fullmatch=True)
_known_domain = st.sampled_from(sorted(domain for rule in PROVIDER_RULES for domain in rule.domains))
_label = st.from_regex(r"[a-z][a-z0-9-]{0,10}", fullmatch=True)
_address = st.builds(lambda local, domain: f"{local}@{domain}", _local_part, _label.map(lambda d: f"{d}.test"))


@pytest.mark.os_agnostic
@given(local=_local_part, domain=_known_domain)
@settings(max_examples=100)
def test_every_listed_domain_resolves_to_its_rule(local: str, domain: str) -> None:
    rule = find_provider(f"{local}@{domain}")

    assert rule is not None
    assert resolve_smtp_config(f"{local}@{domain}") == rule.config


@pytest.mark.os_agnostic
@given(local=_local_part, label=_label)
@settings(max_examples=100)
def test_any_zoho_subdomain_resolves_to_zoho(local: str, label: str) -> None:
    assert resolve_smtp_config(f"{local}@{label}.zoho.com").host == "smtp.zoho.com"


@pytest.mark.os_agnostic
@given(local=_local_part, label=_label)
@settings(max_examples=100)
def test_unlisted_domains_resolve_to_default(local: str, label: str) -> None:
    assert resolve_smtp_config(f"{local}@{label}.test") == DEFAULT_SMTP_CONFIG


@pytest.mark.os_agnostic
@given(text=st.text(max_size=40))
@settings(max_examples=200)
def test_resolution_never_raises_without_strict(text: str) -> None:
    resolve_smtp_config(text)


@pytest.mark.os_agnostic
@given(addresses=st.lists(_address, min_size=1, max_size=6))
@settings(max_examples=100)
def test_recipient_lists_join_in_order(addresses: list[str]) -> None:
    joined = Recipients.coerce(addresses).joined()

    assert joined == ", ".join(addresses)
    assert joined is not None
    assert joined.split(", ") == addresses


@pytest.mark.os_agnostic
@given(address=_address)
@settings(max_examples=50)
def test_single_address_and_one_element_list_normalize_alike(address: str) -> None:
    assert Recipients.coerce(address) == Recipients.coerce([address])
