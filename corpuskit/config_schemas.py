# corpuskit/config_schemas.py
from __future__ import annotations

from dataclasses import dataclass, asdict, field, fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import json
import logging

import yaml

from corpuskit.core.document import Document
from corpuskit.metrics.similarity import SimilarityMetric, most_similar
from corpuskit.reporting.slda_export import SLDAExportConfig
from corpuskit.utils.log import setup_logging


@dataclass
class LoggingConfig:
    """
    Logging level and Rich handler options.
    """
    level: str = "INFO"
    rich_tracebacks: bool = True


@dataclass
class SimilarityConfig:
    """
    Defaults for similarity search.
    """
    metric: SimilarityMetric = SimilarityMetric.COSINE
    top_k: int = 10


@dataclass
class CorpusConfig:
    """
    Full configuration bundle.
    """
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    similarity: SimilarityConfig = field(default_factory=SimilarityConfig)
    export: SLDAExportConfig = field(default_factory=SLDAExportConfig)


# type hints are strings under postponed evaluation
_NESTED = {
    "logging": LoggingConfig,
    "similarity": SimilarityConfig,
    "export": SLDAExportConfig,
}


# helpers: dataclass reconstruction
def _dc_from_dict(dc_type, data: Dict[str, Any]):
    if not is_dataclass(dc_type):
        return data
    kwargs = {}
    for f in fields(dc_type):
        if f.name not in data:
            continue
        val = data[f.name]
        nested = _NESTED.get(f.name) if dc_type is CorpusConfig else None
        if nested is not None and isinstance(val, dict):
            kwargs[f.name] = _dc_from_dict(nested, val)
        else:
            kwargs[f.name] = val
    return dc_type(**kwargs)

def _deep_asdict(obj: Any) -> Any:
    if is_dataclass(obj):
        return {k: _deep_asdict(v) for k, v in asdict(obj).items()}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (list, tuple)):
        return [ _deep_asdict(x) for x in obj ]
    if isinstance(obj, dict):
        return {k: _deep_asdict(v) for k, v in obj.items()}
    return obj

# serialization
def to_dict(cfg: CorpusConfig) -> Dict[str, Any]:
    return _deep_asdict(cfg)

def from_dict(d: Dict[str, Any]) -> CorpusConfig:
    return validate(_dc_from_dict(CorpusConfig, d or {}))

def to_json(cfg: CorpusConfig, *, indent: Optional[int] = 2) -> str:
    return json.dumps(to_dict(cfg), ensure_ascii=False, indent=indent)

def from_json(s: str) -> CorpusConfig:
    return from_dict(json.loads(s))

def to_yaml(cfg: CorpusConfig) -> str:
    return yaml.safe_dump(to_dict(cfg), sort_keys=False)

def from_yaml(s: str) -> CorpusConfig:
    return from_dict(yaml.safe_load(s))

def load_config(path: Union[str, Path]) -> CorpusConfig:
    """
    Load a CorpusConfig from a .json, .yaml or .yml file.
    """
    p = Path(path)
    text = p.read_text(encoding="utf-8")
    suffix = p.suffix.lower()
    if suffix == ".json":
        return from_json(text)
    if suffix in (".yaml", ".yml"):
        return from_yaml(text)
    raise ValueError(f"unsupported config format: {p.suffix or p.name}")

# overrides
def apply_overrides(cfg: CorpusConfig, overrides: Dict[str, Any]) -> CorpusConfig:
    base = to_dict(cfg)
    _deep_update(base, overrides)
    return from_dict(base)

def _deep_update(dst: Dict[str, Any], src: Dict[str, Any]) -> None:
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            _deep_update(dst[k], v)
        else:
            dst[k] = v

# validation
def validate(cfg: CorpusConfig) -> CorpusConfig:
    # logging
    level = str(cfg.logging.level).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"unknown log level: {cfg.logging.level!r}")
    cfg.logging.level = level
    # similarity
    m = cfg.similarity.metric
    cfg.similarity.metric = m if isinstance(m, SimilarityMetric) else SimilarityMetric(str(m).lower())
    cfg.similarity.top_k = max(1, int(cfg.similarity.top_k))
    # export
    cfg.export.output_dir = str(cfg.export.output_dir)
    return cfg

# consumers
def configure_logging(cfg: CorpusConfig) -> logging.Logger:
    """Install the Rich handler at the configured level."""
    return setup_logging(cfg.logging.level, rich_tracebacks=cfg.logging.rich_tracebacks)

def find_similar(query: Document, candidates: Sequence[Document],
                 cfg: CorpusConfig) -> List[Tuple[Document, float]]:
    """most_similar with the configured metric and top_k."""
    return most_similar(query, candidates, cfg.similarity.metric, cfg.similarity.top_k)
