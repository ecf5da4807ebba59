from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Dict


def _parse_env_file(path: Path) -> Dict[str, str]:
    """Minimal .env parser (no external dependency required)."""
    data: dict[str, str] = {}
    if not path.exists():
        return data
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        data[key.strip()] = value.strip().strip('"').strip("'")
    return data


@dataclass(frozen=True)
class ChainSettings:
    order: int
    samples: int
    seed: int | None
    tokenizer: str
    lowercase: bool
    encoding: str
    corpus_config_path: str | None
    env_file: Path | None


def load_settings(env_path: str | Path = ".env") -> ChainSettings:
    """Load chain settings from .env (if present) + real environment."""
    env_file = Path(env_path)
    file_values = _parse_env_file(env_file)

    def read(key: str, default: str) -> str:
        return os.environ.get(key, file_values.get(key, default))

    order = max(0, int(read("MARKOV_ORDER", "2")))
    samples = max(0, int(read("MARKOV_SAMPLES", "5")))
    seed_raw = read("MARKOV_SEED", "").strip()
    seed = int(seed_raw) if seed_raw else None
    tokenizer = read("MARKOV_TOKENIZER", "chars").strip().lower()
    lower_flag = read("MARKOV_LOWERCASE", "0").strip().lower()
    lowercase = lower_flag in {"1", "true", "yes", "on"}
    encoding = read("MARKOV_ENCODING", "utf-8").strip() or "utf-8"
    corpus_config_raw = read("MARKOV_CORPUS_CONFIG_PATH", "").strip()
    corpus_config_path = corpus_config_raw or None

    env_file_used = env_file if env_file.exists() else None
    return ChainSettings(
        order=order,
        samples=samples,
        seed=seed,
        tokenizer=tokenizer,
        lowercase=lowercase,
        encoding=encoding,
        corpus_config_path=corpus_config_path,
        env_file=env_file_used,
    )
