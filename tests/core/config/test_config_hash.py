# tests/core/config/test_config_hash.py
"""Testes do hash canônico de configuração."""

import pytest

from series_vault.core.config.hashing import compute_config_hash


def test_hash_is_key_order_independent():
    a = {"engine": {"fail_fast": True}, "steps": {"transform.merge_versions": {"strategy": "latest"}}}
    b = {"steps": {"transform.merge_versions": {"strategy": "latest"}}, "engine": {"fail_fast": True}}

    assert compute_config_hash(a) == compute_config_hash(b)


def test_hash_changes_with_strategy():
    a = {"steps": {"transform.merge_versions": {"strategy": "latest"}}}
    b = {"steps": {"transform.merge_versions": {"strategy": "average"}}}

    assert compute_config_hash(a) != compute_config_hash(b)


def test_hash_is_sha256_hex():
    digest = compute_config_hash({})

    assert len(digest) == 64
    int(digest, 16)


def test_hash_rejects_non_dict():
    with pytest.raises(TypeError):
        compute_config_hash(["latest"])  # type: ignore[arg-type]
