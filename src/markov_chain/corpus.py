from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, List

from log_helpers import log, log_verbose

from .trainer import WeightedSample

__all__ = [
    "TOKENIZER_MODES",
    "CorpusConfig",
    "tokenize",
    "infer_config_path",
    "load_corpus_config",
    "iter_samples",
    "load_samples",
]

TOKEN_PATTERN = re.compile(r"\w+|[^\w\s]", re.UNICODE)
TOKENIZER_MODES = ("chars", "words")
_JSON_SUFFIXES = {".json"}
_NDJSON_SUFFIXES = {".jsonl", ".ndjson"}


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def tokenize(text: str, mode: str = "chars", *, lowercase: bool = False) -> List[str]:
    """Split `text` into characters or regex word/punctuation tokens."""
    if lowercase:
        text = text.lower()
    if mode == "chars":
        return list(text)
    if mode == "words":
        return [match.group(0) for match in TOKEN_PATTERN.finditer(text)]
    raise ValueError(f"unknown tokenizer mode '{mode}' (expected one of {', '.join(TOKENIZER_MODES)})")


@dataclass(frozen=True)
class CorpusConfig:
    name: str = "default"
    text_field: str = "text"
    weight_field: str | None = "weight"
    tokenizer: str = "chars"
    lowercase: bool = False
    source_path: Path | None = None

    def extract_text(self, payload: dict[str, Any]) -> str:
        return _stringify(payload.get(self.text_field, "")).strip()

    def extract_weight(self, payload: dict[str, Any]) -> int:
        if not self.weight_field:
            return 1
        raw = payload.get(self.weight_field)
        if raw is None or raw == "":
            return 1
        if isinstance(raw, bool):
            raise ValueError(f"boolean weight {raw!r} in field '{self.weight_field}'")
        if isinstance(raw, float):
            if not raw.is_integer():
                raise ValueError(f"fractional weight {raw!r} in field '{self.weight_field}'")
            raw = int(raw)
        try:
            weight = int(raw)
        except (TypeError, ValueError):
            raise ValueError(f"invalid weight {raw!r} in field '{self.weight_field}'") from None
        if weight < 0:
            raise ValueError(f"negative weight {weight} in field '{self.weight_field}'")
        return weight

    def to_sample(self, text: str, weight: int = 1) -> WeightedSample:
        return WeightedSample(tuple(tokenize(text, self.tokenizer, lowercase=self.lowercase)), weight)


def infer_config_path(corpus_path: Path) -> Path:
    parent = corpus_path.parent if corpus_path.parent else Path(".")
    stem = corpus_path.stem or corpus_path.name
    return parent / f"{stem}.config.json"


def load_corpus_config(
    corpus_path: str | Path | None,
    *,
    override: str | None = None,
    defaults: CorpusConfig | None = None,
) -> CorpusConfig:
    """
    Resolve the corpus config: explicit override, then MARKOV_CORPUS_CONFIG_PATH,
    then `<corpus>.config.json` next to the corpus. Falls back to `defaults`.
    """
    base = defaults or CorpusConfig()
    path_obj = Path(corpus_path) if corpus_path else None
    override_path = Path(override) if override else None
    env_override = os.environ.get("MARKOV_CORPUS_CONFIG_PATH")
    env_path = Path(env_override) if env_override else None

    candidates: List[Path] = []
    for candidate in (override_path, env_path):
        if candidate and candidate.exists():
            candidates.append(candidate)
    if path_obj:
        inferred = infer_config_path(path_obj)
        if inferred.exists():
            candidates.append(inferred)
    for candidate in candidates:
        try:
            return _parse_corpus_config(candidate, base)
        except (OSError, ValueError) as exc:
            log(f"[corpus] Ignoring config {candidate}: {exc}")
            continue
    return base


def _parse_corpus_config(path: Path, base: CorpusConfig) -> CorpusConfig:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("config root must be a JSON object")
    name = _stringify(payload.get("name") or path.stem or base.name)
    text_field = _stringify(payload.get("text_field") or base.text_field)
    if "weight_field" in payload:
        weight_field = _stringify(payload.get("weight_field")).strip() or None
    else:
        weight_field = base.weight_field
    tokenizer = _stringify(payload.get("tokenizer") or base.tokenizer).strip().lower()
    if tokenizer not in TOKENIZER_MODES:
        raise ValueError(f"unknown tokenizer '{tokenizer}'")
    lowercase = bool(payload.get("lowercase", base.lowercase))
    return CorpusConfig(
        name=name,
        text_field=text_field,
        weight_field=weight_field,
        tokenizer=tokenizer,
        lowercase=lowercase,
        source_path=path,
    )


def iter_samples(path: str | Path, config: CorpusConfig, *, encoding: str = "utf-8") -> Iterator[WeightedSample]:
    """
    Yield weighted samples from a corpus file.

    Plain text contributes one sample per non-empty line. JSON arrays and
    NDJSON files contribute one sample per object, reading the configured
    text and weight fields. Malformed entries (bad JSON, non-objects, weights
    that are not non-negative integers) are logged and skipped.
    """
    path_obj = Path(path)
    suffix = path_obj.suffix.lower()
    if suffix in _JSON_SUFFIXES:
        payload = json.loads(path_obj.read_text(encoding=encoding))
        if not isinstance(payload, list):
            raise ValueError(f"{path_obj}: expected a JSON array of objects")
        for idx, entry in enumerate(payload):
            if not isinstance(entry, dict):
                log(f"[corpus] Skipping entry #{idx} in {path_obj}: not an object")
                continue
            try:
                sample = _sample_from_payload(entry, config)
            except ValueError as exc:
                log(f"[corpus] Skipping entry #{idx} in {path_obj}: {exc}")
                continue
            if sample is not None:
                yield sample
        return
    with path_obj.open("r", encoding=encoding) as handle:
        for line_no, raw_line in enumerate(handle, start=1):
            line = raw_line.strip()
            if not line:
                continue
            if suffix in _NDJSON_SUFFIXES:
                try:
                    entry = json.loads(line)
                    if not isinstance(entry, dict):
                        raise ValueError("not an object")
                    sample = _sample_from_payload(entry, config)
                except ValueError as exc:
                    log(f"[corpus] Skipping line {line_no} in {path_obj}: {exc}")
                    continue
                if sample is not None:
                    yield sample
            else:
                yield config.to_sample(line)
    log_verbose(3, f"[corpus:v3] Finished reading {path_obj}.")


def _sample_from_payload(payload: dict[str, Any], config: CorpusConfig) -> WeightedSample | None:
    text = config.extract_text(payload)
    if not text:
        return None
    return config.to_sample(text, config.extract_weight(payload))


def load_samples(path: str | Path, config: CorpusConfig, *, encoding: str = "utf-8") -> List[WeightedSample]:
    return list(iter_samples(path, config, encoding=encoding))
