"""Store canônica de datasets e versões (v1).

Layout determinístico sob `data_dir`:

    datasets.json                 registry {dataset_id: {metadata, versions}}
    <id>/metadata.json            cópia dos metadados do dataset
    <id>/raw/<timestamp>.csv      upload original de cada versão
    <id>/processed/<timestamp>.json   saída do conversor (ou do merge)

Registro de versão (camelCase, compatível com o formato do registry):

    {
      "timestamp": "20250101_120000",
      "rawFileName": "20250101_120000.csv" | null,
      "processedFileName": "20250101_120000.json",
      "note": "...",
      "isMerged": true,
      "mergedFrom": ["20241201_080000", "20250101_080000"]
    }

Decisões (v1):
- Timestamps `YYYYMMDD_HHMMSS` são únicos por dataset; colisões avançam
  o relógio de segundo em segundo até encontrar um timestamp livre.
- Versões mescladas não possuem arquivo raw (`rawFileName = null`).
- O relógio é injetável (`now`) para testes determinísticos.

Limites explícitos:
- Sem coordenação entre processos escrevendo no mesmo `data_dir`.
- Não executa conversores nem merge.
"""

from __future__ import annotations

import json
import random
import string
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from series_vault.converters import get_converter
from series_vault.core.exceptions import DatasetNotFound, VersionNotFound

REGISTRY_FILE = "datasets.json"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

_ID_ALPHABET = string.ascii_lowercase + string.digits


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _timestamp_to_iso(timestamp: str) -> str:
    """`YYYYMMDD_HHMMSS` -> `YYYY-MM-DDTHH:MM:SS` (sem fuso)."""
    return f"{timestamp[0:4]}-{timestamp[4:6]}-{timestamp[6:8]}T{timestamp[9:11]}:{timestamp[11:13]}:{timestamp[13:15]}"


class DatasetStore:
    """Store JSON-file-backed para datasets, versões e arquivos raw/processed."""

    def __init__(
        self,
        *,
        data_dir: Union[str, Path],
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.data_dir = Path(data_dir)
        self._now = now or _local_now

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------
    def registry_path(self) -> Path:
        return self.data_dir / REGISTRY_FILE

    def dataset_dir(self, dataset_id: str) -> Path:
        return self.data_dir / dataset_id

    def raw_path(self, dataset_id: str, file_name: str) -> Path:
        return self.dataset_dir(dataset_id) / "raw" / file_name

    def processed_path(self, dataset_id: str, file_name: str) -> Path:
        return self.dataset_dir(dataset_id) / "processed" / file_name

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------
    def load_registry(self) -> Dict[str, Any]:
        path = self.registry_path()
        if not path.exists():
            return {}
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}

    def save_registry(self, registry: Dict[str, Any]) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._write_json(self.registry_path(), registry)

    def _require(self, registry: Dict[str, Any], dataset_id: str) -> Dict[str, Any]:
        if dataset_id not in registry:
            raise DatasetNotFound(
                message=f"Dataset not found: {dataset_id}",
                details={"dataset_id": dataset_id},
            )
        return registry[dataset_id]

    # ------------------------------------------------------------------
    # Datasets
    # ------------------------------------------------------------------
    def create_dataset(
        self,
        *,
        name: str,
        description: str = "",
        source: str = "",
        converter_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Cria o dataset, sua estrutura de diretórios e a entrada no registry."""
        now = self._now()
        dataset_id = self._generate_id(now)
        created = now.isoformat()

        metadata: Dict[str, Any] = {
            "id": dataset_id,
            "name": name,
            "description": description,
            "source": source,
            "created": created,
            "updated": created,
            "hasConverter": False,
        }
        if converter_id is not None:
            get_converter(converter_id)
            metadata["hasConverter"] = True
            metadata["converterType"] = "predefined"
            metadata["predefinedConverterId"] = converter_id

        base = self.dataset_dir(dataset_id)
        (base / "raw").mkdir(parents=True, exist_ok=True)
        (base / "processed").mkdir(parents=True, exist_ok=True)
        self._write_json(base / "metadata.json", metadata)

        registry = self.load_registry()
        registry[dataset_id] = {"metadata": metadata, "versions": []}
        self.save_registry(registry)
        return metadata

    def get_dataset(self, dataset_id: str) -> Optional[Dict[str, Any]]:
        return self.load_registry().get(dataset_id)

    def list_datasets(self) -> List[Dict[str, Any]]:
        return list(self.load_registry().values())

    def get_version(self, dataset_id: str, timestamp: str) -> Dict[str, Any]:
        dataset = self._require(self.load_registry(), dataset_id)
        return self._find(dataset, dataset_id, timestamp)

    # ------------------------------------------------------------------
    # Versions
    # ------------------------------------------------------------------
    def save_raw_file(
        self,
        dataset_id: str,
        content: str,
        original_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Persiste um upload CSV como nova versão (ainda não processada)."""
        registry = self.load_registry()
        dataset = self._require(registry, dataset_id)

        timestamp = self._next_timestamp(dataset)
        raw_file_name = f"{timestamp}.csv"
        path = self.raw_path(dataset_id, raw_file_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

        version: Dict[str, Any] = {"timestamp": timestamp, "rawFileName": raw_file_name}
        if original_name:
            version["note"] = f"Uploaded from: {original_name}"

        dataset["versions"].append(version)
        self._touch(dataset)
        self.save_registry(registry)
        return version

    def save_processed_file(self, dataset_id: str, timestamp: str, data: Any) -> Dict[str, Any]:
        """Grava o JSON processado da versão e registra `processedFileName`."""
        registry = self.load_registry()
        dataset = self._require(registry, dataset_id)
        version = self._find(dataset, dataset_id, timestamp)

        processed_file_name = f"{timestamp}.json"
        path = self.processed_path(dataset_id, processed_file_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._write_json(path, data)

        version["processedFileName"] = processed_file_name
        self._touch(dataset)
        self.save_registry(registry)
        return version

    def save_merged_version(
        self,
        dataset_id: str,
        merged_data: Any,
        merged_from: Sequence[str],
        note: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Persiste o resultado de um merge como nova versão `isMerged`."""
        registry = self.load_registry()
        dataset = self._require(registry, dataset_id)

        timestamp = self._next_timestamp(dataset)
        processed_file_name = f"{timestamp}.json"
        path = self.processed_path(dataset_id, processed_file_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._write_json(path, merged_data)

        version: Dict[str, Any] = {
            "timestamp": timestamp,
            "rawFileName": None,
            "processedFileName": processed_file_name,
            "note": note or f"Merged from {len(merged_from)} versions",
            "isMerged": True,
            "mergedFrom": list(merged_from),
        }
        dataset["versions"].append(version)
        self._touch(dataset)
        self.save_registry(registry)
        return version

    def delete_version(self, dataset_id: str, timestamp: str) -> Dict[str, Any]:
        """Remove a versão do registry e apaga seus arquivos raw/processed.

        Versões mescladas que referenciam a removida em `mergedFrom`
        permanecem inalteradas.

        Raises:
            DatasetNotFound: dataset inexistente.
            VersionNotFound: timestamp inexistente no dataset.
        """
        registry = self.load_registry()
        dataset = self._require(registry, dataset_id)
        version = self._find(dataset, dataset_id, timestamp)

        deleted: List[str] = []
        raw_name = version.get("rawFileName")
        if raw_name:
            path = self.raw_path(dataset_id, raw_name)
            if path.exists():
                path.unlink()
                deleted.append(f"raw/{raw_name}")
        processed_name = version.get("processedFileName")
        if processed_name:
            path = self.processed_path(dataset_id, processed_name)
            if path.exists():
                path.unlink()
                deleted.append(f"processed/{processed_name}")

        dataset["versions"] = [v for v in dataset["versions"] if v["timestamp"] != timestamp]
        self._touch(dataset)
        self.save_registry(registry)
        return {"timestamp": timestamp, "deletedFiles": deleted}

    def summary(self, *, recent: int = 10) -> Dict[str, Any]:
        """Visão agregada do registry: totais e as versões mais recentes."""
        datasets = self.list_datasets()
        updates: List[Dict[str, Any]] = []
        for dataset in datasets:
            metadata = dataset["metadata"]
            for version in dataset["versions"]:
                updates.append({
                    "datasetId": metadata["id"],
                    "datasetName": metadata["name"],
                    "version": version,
                    "updatedAt": _timestamp_to_iso(version["timestamp"]),
                })
        # sort estável: empates mantêm a ordem do registry
        updates.sort(key=lambda u: u["updatedAt"], reverse=True)

        return {
            "totalDatasets": len(datasets),
            "totalVersions": sum(len(d["versions"]) for d in datasets),
            "datasetsWithConverter": sum(1 for d in datasets if d["metadata"].get("hasConverter")),
            "recentUpdates": updates[:recent],
        }

    def get_raw_file_content(self, dataset_id: str, file_name: str) -> str:
        return self.raw_path(dataset_id, file_name).read_text(encoding="utf-8")

    def get_processed_file_content(self, dataset_id: str, file_name: str) -> Any:
        with self.processed_path(dataset_id, file_name).open("r", encoding="utf-8") as f:
            return json.load(f)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _find(self, dataset: Dict[str, Any], dataset_id: str, timestamp: str) -> Dict[str, Any]:
        for version in dataset["versions"]:
            if version["timestamp"] == timestamp:
                return version
        raise VersionNotFound(
            message=f"Version with timestamp {timestamp} not found",
            details={"dataset_id": dataset_id, "timestamp": timestamp},
        )

    def _next_timestamp(self, dataset: Dict[str, Any]) -> str:
        taken = {v["timestamp"] for v in dataset["versions"]}
        moment = self._now()
        timestamp = moment.strftime(TIMESTAMP_FORMAT)
        while timestamp in taken:
            moment = moment + timedelta(seconds=1)
            timestamp = moment.strftime(TIMESTAMP_FORMAT)
        return timestamp

    def _touch(self, dataset: Dict[str, Any]) -> None:
        dataset["metadata"]["updated"] = self._now().isoformat()
        self._write_json(self.dataset_dir(dataset["metadata"]["id"]) / "metadata.json", dataset["metadata"])

    def _generate_id(self, now: datetime) -> str:
        millis = int(now.astimezone(timezone.utc).timestamp() * 1000)
        suffix = "".join(random.choices(_ID_ALPHABET, k=6))
        return f"ds_{millis}_{suffix}"

    @staticmethod
    def _write_json(path: Path, data: Any) -> None:
        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)


__all__ = ["DatasetStore", "REGISTRY_FILE", "TIMESTAMP_FORMAT"]
