"""Pytest fixtures for confd tests."""

from pathlib import Path

import pytest
from loguru import logger


@pytest.fixture
def write_config(tmp_path):
    """Factory writing a confd.toml into tmp_path and returning its path."""

    def _write(content: str, name: str = "confd.toml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def srv_records():
    """Two SRV answers for example.com."""
    from confd.srv import SRVRecord

    return [
        SRVRecord(hostname="etcd1.example.com", port=4001),
        SRVRecord(hostname="etcd2.example.com", port=4002),
    ]


@pytest.fixture
def stub_srv_lookup(srv_records):
    """SRV lookup returning srv_records and remembering the queried domains."""

    def _lookup(domain):
        _lookup.calls.append(domain)
        return list(srv_records)

    _lookup.calls = []
    return _lookup


@pytest.fixture
def failing_srv_lookup():
    """SRV lookup that always fails."""

    def _lookup(domain):
        raise OSError(f"no SRV answer for {domain}")

    return _lookup


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
