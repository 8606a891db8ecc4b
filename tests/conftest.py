"""Pytest hooks and fixtures."""

import copy
import json
import os
from pathlib import Path

import pytest

from mesc.config.schema import RpcConfig

SAMPLE_DOCUMENT = {
    "mesc_version": "MESC 1.0",
    "default_endpoint": "local_ethereum",
    "network_defaults": {
        "1": "local_ethereum",
        "10": "llamanodes_optimism",
    },
    "network_names": {
        "mainnet": "1",
        "optimism": "10",
        "goerli": "5",
    },
    "endpoints": {
        "local_ethereum": {
            "name": "local_ethereum",
            "url": "http://localhost:8545",
            "chain_id": "1",
            "endpoint_metadata": {},
        },
        "llamanodes_ethereum": {
            "name": "llamanodes_ethereum",
            "url": "https://eth.llamarpc.com",
            "chain_id": "1",
            "endpoint_metadata": {"rate_limit_rps": 100, "labels": ["public"]},
        },
        "llamanodes_optimism": {
            "name": "llamanodes_optimism",
            "url": "https://optimism.llamarpc.com",
            "chain_id": "10",
            "endpoint_metadata": {},
        },
        "goerli_alchemy": {
            "name": "goerli_alchemy",
            "url": "https://eth-goerli.g.alchemy.com/v2/0123456789abcdef0123456789abcdef",
            "chain_id": "5",
            "endpoint_metadata": {"provider": {"name": "alchemy", "tier": "free"}},
        },
    },
    "profiles": {
        "xyz": {
            "default_endpoint": "llamanodes_optimism",
            "network_defaults": {"1": "llamanodes_ethereum"},
        },
    },
    "global_metadata": {"api_keys": {"etherscan": "key"}, "x-custom": [1, 2, {"nested": None}]},
}


@pytest.fixture(autouse=True)
def clean_mesc_env(monkeypatch):
    """Tests never see the developer's MESC_* variables."""
    for key in list(os.environ):
        if key.upper().startswith("MESC_"):
            monkeypatch.delenv(key)


@pytest.fixture
def sample_document() -> dict:
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def sample_config(sample_document: dict) -> RpcConfig:
    return RpcConfig.model_validate(sample_document)


@pytest.fixture
def config_file(tmp_path: Path, sample_document: dict) -> Path:
    path = tmp_path / "mesc.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path
