# tests/conftest.py - v1
"""Shared test fixtures for unit and integration tests.

Provides settings without .env lookup, an empty store, and a small
populated investigation graph. No external services.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pytest

from osintgraph.config.settings import Settings
from osintgraph.store.graph_store import GraphStore


@dataclass
class SampleGraph:
    """Ids of the records created by the ``sample_graph`` fixture."""

    alice: str
    wallet: str
    acme: str
    domain: str
    controls: str
    member_of: str
    transacts: str
    attachment: str


# === FIXTURES: Settings & stores ===


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def store(settings: Settings) -> GraphStore:
    return GraphStore(settings)


@pytest.fixture
def sample_graph(store: GraphStore) -> SampleGraph:
    """Alice controls a wallet, is a member of Acme, and Acme transacts with the wallet."""
    alice = store.create_entity(
        "Person", "Alice Smith",
        description="Suspected operator", tags=["suspect", "2024"],
    )
    wallet = store.create_entity("CryptoWallet", "0xabc", tags=["eth"])
    acme = store.create_entity("Organization", "Acme Corp", confidence=0.8)
    domain = store.create_entity(
        "Domain", "example.com", tags=["phishing", "2024"],
    )
    controls = store.create_relationship(
        alice, wallet, "Controls", confidence=0.9, source="Chain analysis",
    )
    member_of = store.create_relationship(alice, acme, "MemberOf")
    transacts = store.create_relationship(
        acme, wallet, "TransactsWith", weight=3.5, description="Payments, 2023",
    )
    attachment = store.save_attachment(alice, "photo.JPG", b"\xff\xd8\xff\xe0jpeg")
    return SampleGraph(
        alice=alice, wallet=wallet, acme=acme, domain=domain,
        controls=controls, member_of=member_of, transacts=transacts,
        attachment=attachment,
    )


# === FIXTURES: Temp dirs ===


@pytest.fixture
def tmp_output_dir(tmp_path: Path) -> Path:
    """Temporary output directory."""
    out = tmp_path / "output"
    out.mkdir()
    return out


@pytest.fixture(autouse=True)
def _reset_osintgraph_logging():
    """Drop handlers installed by setup_logging() so streams do not leak across tests."""
    yield
    root = logging.getLogger("osintgraph")
    for handler in list(root.handlers):
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
