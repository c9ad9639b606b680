# tests/conftest.py
"""
Fixtures compartilhados para testes do Series Vault.

Fornecem:
- configuração mínima e determinística
- RunContext controlado
- DatasetStore isolado em `tmp_path` com relógio determinístico
- Step dummy duck-typed para testes do Engine
- CSV de exemplo no formato stats-gov-cn

Invariantes:
    - Nenhuma fixture escreve fora de `tmp_path`
    - Timestamps e run_id são fixos
"""

from datetime import datetime, timedelta, timezone

import pytest


STATS_GOV_CN_CSV = """\
数据库：月度数据
时间：最近3个月
指标,2024年3月,2024年2月,2024年1月
居民消费价格指数(上年同月=100),100.1,100.7,99.2
工业生产者出厂价格指数(上年同月=100),97.2,,97.5
数据来源：国家统计局
"""


class TickingClock:
    """Relógio determinístico: cada chamada avança um minuto."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(minutes=1)
        return value


@pytest.fixture
def dummy_config(tmp_path) -> dict:
    """Configuração mínima já resolvida (sem loader)."""
    return {
        "engine": {"fail_fast": True},
        "store": {"data_dir": str(tmp_path / "data-store")},
        "steps": {},
    }


@pytest.fixture
def dummy_ctx(dummy_config):
    from series_vault.core.pipeline.context import RunContext

    return RunContext(
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        config=dummy_config,
        meta={"source": "pytest"},
    )


@pytest.fixture
def clock():
    return TickingClock(datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(dummy_config, clock):
    from series_vault.persistence.dataset_store import DatasetStore

    return DatasetStore(data_dir=dummy_config["store"]["data_dir"], now=clock)


@pytest.fixture
def stats_gov_cn_csv() -> str:
    return STATS_GOV_CN_CSV


@pytest.fixture
def DummyStep():
    """Classe de Step mínima, duck-typed, que publica `<id>.ok` no contexto."""
    from series_vault.core.pipeline.types import StepKind, StepResult, StepStatus

    class _DummyStep:
        def __init__(self, step_id="ingest.versions", kind=StepKind.INGEST, depends_on=None):
            self.id = step_id
            self.kind = kind
            self.depends_on = depends_on or []

        def run(self, ctx):
            ctx.set_artifact(f"{self.id}.ok", True)
            return StepResult(
                step_id=self.id,
                kind=self.kind,
                status=StepStatus.SUCCESS,
                summary="dummy ok",
            )

    return _DummyStep


@pytest.fixture
def seeded_store(store):
    """Store com um dataset e três versões processadas (A, B, C em ordem cronológica).

    - A: CPI 2024-01=10, 2024-02=20
    - B: CPI 2024-02=30, 2024-03=40; PPI 2024-01=1
    - C: sem dados processados
    """
    meta = store.create_dataset(name="Macro", description="monthly", source="test")
    ds = meta["id"]

    a = store.save_raw_file(ds, "a", original_name="a.csv")
    store.save_processed_file(ds, a["timestamp"], [
        {"indicator": "CPI", "data": [
            {"year": 2024, "month": 1, "value": 10},
            {"year": 2024, "month": 2, "value": 20},
        ]},
    ])
    b = store.save_raw_file(ds, "b", original_name="b.csv")
    store.save_processed_file(ds, b["timestamp"], [
        {"indicator": "CPI", "data": [
            {"year": 2024, "month": 3, "value": 40},
            {"year": 2024, "month": 2, "value": 30},
        ]},
        {"indicator": "PPI", "data": [{"year": 2024, "month": 1, "value": 1}]},
    ])
    c = store.save_raw_file(ds, "c", original_name="c.csv")

    return {
        "store": store,
        "dataset_id": ds,
        "a": a["timestamp"],
        "b": b["timestamp"],
        "c": c["timestamp"],
    }
