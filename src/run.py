from __future__ import annotations

import argparse
import itertools
import json
import sys
from pathlib import Path
from typing import List, Sequence, TextIO

from markov_chain import Chain, MersenneSource, UnknownStateError, WeightedSample
from markov_chain.corpus import TOKENIZER_MODES, CorpusConfig, iter_samples, load_corpus_config
from markov_chain.settings import ChainSettings, load_settings

from helpers.resource_monitor import ResourceMonitor
from log_helpers import log, log_verbose, set_log_level


def build_parser(settings: ChainSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Train a higher-order Markov chain on text corpora and print generated samples."
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        help="Text (one sample per line), JSON array, or NDJSON files to train on. Directories pull in *.txt files.",
    )
    parser.add_argument(
        "--order",
        type=int,
        default=settings.order,
        help="Number of previous symbols used as context (default: %(default)s).",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=settings.samples,
        help="Number of sequences to generate after training (default: %(default)s).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=settings.seed,
        help="Seed for the Mersenne Twister draw source (default: system entropy).",
    )
    parser.add_argument(
        "--tokenizer",
        choices=TOKENIZER_MODES,
        default=settings.tokenizer,
        help="Split samples into characters or word/punctuation tokens (default: %(default)s).",
    )
    parser.add_argument(
        "--lowercase",
        action="store_true",
        default=settings.lowercase,
        help="Lowercase samples before tokenizing.",
    )
    parser.add_argument(
        "--separator",
        help="String placed between generated symbols (default: '' for chars, ' ' for words).",
    )
    parser.add_argument(
        "--encoding",
        default=settings.encoding,
        help="File encoding used while reading corpora (default: %(default)s).",
    )
    parser.add_argument(
        "--stdin",
        action="store_true",
        help="Read an additional corpus from STDIN (one sample per line).",
    )
    parser.add_argument(
        "--corpus-config",
        default=settings.corpus_config_path,
        help=(
            "Path to a corpus config JSON (text_field, weight_field, tokenizer, lowercase). "
            "Defaults to <corpus>.config.json or MARKOV_CORPUS_CONFIG_PATH."
        ),
    )
    parser.add_argument(
        "--max-symbols",
        type=int,
        default=0,
        help="Truncate each printed sample after N symbols (default: 0 = unlimited).",
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Log wall time, CPU and RSS for the training and sampling phases.",
    )
    parser.add_argument(
        "--stats-json",
        action="store_true",
        help="Print the transition table summary as JSON after the samples.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Raise log verbosity (repeat for trace output).",
    )
    return parser


def collect_input_files(raw_inputs: Sequence[str]) -> List[Path]:
    files: List[Path] = []
    for raw in raw_inputs:
        path = Path(raw).expanduser()
        if path.is_dir():
            for candidate in sorted(path.glob("*.txt")):
                log_verbose(3, f"[run:v3] Discovered input file {candidate}")
                files.append(candidate)
        elif path.exists():
            files.append(path)
        else:
            raise ValueError(f"input path does not exist: {path}")
    return files


def train_chain(
    chain: Chain,
    files: Sequence[Path],
    defaults: CorpusConfig,
    *,
    encoding: str,
    override: str | None,
    stdin: TextIO | None = None,
) -> int:
    trained = 0
    for path in files:
        config = load_corpus_config(path, override=override, defaults=defaults)
        count = 0
        for sample in iter_samples(path, config, encoding=encoding):
            chain.train(sample.sequence, sample.weight)
            count += 1
        log(f"[run] Trained {count} sample(s) from {path} (tokenizer={config.tokenizer}).")
        trained += count
    if stdin is not None:
        count = 0
        for raw_line in stdin:
            line = raw_line.strip()
            if not line:
                continue
            sample: WeightedSample = defaults.to_sample(line)
            chain.train(sample.sequence, sample.weight)
            count += 1
        log(f"[run] Trained {count} sample(s) from STDIN.")
        trained += count
    return trained


def render_sample(chain: Chain, separator: str, max_symbols: int) -> str:
    symbols = chain.iter_symbols()
    if max_symbols > 0:
        symbols = itertools.islice(symbols, max_symbols)
    return separator.join(str(symbol) for symbol in symbols)


def main(argv: Sequence[str] | None = None) -> int:
    settings = load_settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)
    if args.verbose:
        set_log_level(1 + args.verbose)
    log_verbose(3, f"[run:v3] Parsed CLI arguments: {vars(args)}")
    if args.order < 0:
        parser.error("--order must be >= 0")
    if args.samples < 0:
        parser.error("--samples must be >= 0")
    if not args.inputs and not args.stdin:
        parser.error("provide at least one input file or --stdin")
    if args.tokenizer not in TOKENIZER_MODES:
        parser.error(f"unknown tokenizer '{args.tokenizer}'")

    defaults = CorpusConfig(tokenizer=args.tokenizer, lowercase=args.lowercase)
    separator = args.separator if args.separator is not None else ("" if args.tokenizer == "chars" else " ")
    monitor = ResourceMonitor() if args.profile else None
    chain = Chain(args.order, MersenneSource(args.seed))

    try:
        files = collect_input_files(args.inputs)
        before = monitor.snapshot() if monitor else None
        trained = train_chain(
            chain,
            files,
            defaults,
            encoding=args.encoding,
            override=args.corpus_config,
            stdin=sys.stdin if args.stdin else None,
        )
        if monitor and before is not None:
            log(f"[run] Training profile: {monitor.describe(monitor.delta(before, monitor.snapshot()))}")
    except (OSError, ValueError) as exc:
        parser.error(str(exc))
    stats = chain.stats()
    log(f"[run] Trained {trained} sample(s) total: {stats.describe()}")

    try:
        before = monitor.snapshot() if monitor else None
        for _ in range(args.samples):
            print(render_sample(chain, separator, args.max_symbols))
        if monitor and before is not None:
            log(f"[run] Sampling profile: {monitor.describe(monitor.delta(before, monitor.snapshot()))}")
    except UnknownStateError as exc:
        log(f"[run] Generation failed: {exc}")
        return 1
    if args.stats_json:
        print(json.dumps(stats.to_event(), sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
