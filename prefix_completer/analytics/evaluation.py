#!/usr/bin/env python3
"""
evaluation.py - benchmark and quality harness

- Builds a CompletionIndex on the training split of a corpus (whitespace tokens, in order).
- Times insert / bigram build and samples peak memory with tracemalloc.
- For every adjacent pair (prev, next) in the test split, queries half of `next`
  as a prefix with `prev` as context and scores the answer against the reference.
- Runs the same queries under both ranking strategies and writes a JSON report.

Usage:
python -m prefix_completer.analytics.evaluation data/demo_corpus.txt --out results.json
"""
from __future__ import annotations

import argparse
import json
import logging
import math
import time
import tracemalloc
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
from rich.console import Console
from rich.table import Table
from rich import box

from prefix_completer.context.tokenizer import simple_tokenize
from prefix_completer.core.autocompleter import CompletionIndex
from prefix_completer.core.ranking import STRATEGIES
from prefix_completer.utils.logger_utils import Log, configure_logging
from prefix_completer.utils.metrics_tracker import Metrics

logger = logging.getLogger(__name__)

Query = Tuple[Optional[str], str, str]  # (prev, prefix, expected word)


def measure_suggestion_quality(returned: Iterable[str], reference: Iterable[str]) -> float:
    """
    Share of the reference words that show up in `returned`.
    Order and duplicates are ignored; an empty reference scores 0.0.
    """
    ref = set(reference)
    if not ref:
        return 0.0
    return len(ref & set(returned)) / len(ref)


def load_corpus(path: Path) -> List[str]:
    """Whitespace tokens of the file, in corpus order."""
    with path.open("r", encoding="utf-8") as fh:
        return simple_tokenize(fh.read())


def split_corpus(tokens: Sequence[str], train_frac: float = 0.8) -> Tuple[List[str], List[str]]:
    """Deterministic train/test split."""
    n = max(1, int(len(tokens) * train_frac))
    return list(tokens[:n]), list(tokens[n:])


def make_queries(tokens: Sequence[str]) -> List[Query]:
    """One query per adjacent pair: half of the next word (at least 1 char) as prefix."""
    out: List[Query] = []
    for prev, nxt in zip(tokens, tokens[1:]):
        cut = max(1, math.ceil(len(nxt) / 2))
        out.append((prev, nxt[:cut], nxt))
    return out


def latency_summary(times_ms: Sequence[float]) -> Dict[str, float]:
    if not times_ms:
        return {"calls": 0, "mean_ms": 0.0, "median_ms": 0.0, "p99_ms": 0.0}
    arr = np.asarray(times_ms, dtype=float)
    return {
        "calls": int(arr.size),
        "mean_ms": float(arr.mean()),
        "median_ms": float(np.median(arr)),
        "p99_ms": float(np.percentile(arr, 99)),
    }


def build_index(words: Sequence[str], strategy: str = "contextual") -> Tuple[CompletionIndex, Dict[str, float]]:
    """Build an index and report insert/build time and peak traced memory."""
    tracemalloc.start()
    try:
        index = CompletionIndex(strategy=strategy)
        with Log.time_block("insert") as t_ins:
            index.insert_many(words)
        with Log.time_block("bigram build") as t_big:
            index.build_bigram_table(words)
        _, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()

    return index, {
        "insert_s": t_ins.elapsed,
        "bigram_build_s": t_big.elapsed,
        "peak_kib": peak / 1024.0,
        **index.stats(),
    }


def evaluate_on_test(index: CompletionIndex,
                     queries: Sequence[Query],
                     strategy: str,
                     k: int = 5,
                     metrics: Optional[Metrics] = None) -> Dict[str, float]:
    """Hit counts, mean quality and per-query latency for one strategy."""
    metrics = metrics or Metrics()
    hits = 0
    quality = 0.0
    times_ms: List[float] = []
    for prev, prefix, expected in queries:
        t0 = time.perf_counter()
        ranked = index.autocomplete(prefix, k=k, preceding_word=prev, strategy=strategy)
        dt = (time.perf_counter() - t0) * 1000.0
        times_ms.append(dt)
        metrics.record(f"{strategy}_ms", dt)

        words = [w for w, _ in ranked]
        q = measure_suggestion_quality(words, [expected])
        quality += q
        hits += q > 0

    total = len(queries)
    return {
        "hits": hits,
        "total": total,
        "quality": quality / total if total else 0.0,
        "latency": latency_summary(times_ms),
    }


def profile(index: CompletionIndex, prefixes: Sequence[str], strategy: str,
            k: int = 5, runs: int = 200, warmup: int = 20) -> List[float]:
    """Repeated queries over `prefixes`, returns per-call latency in ms."""
    if not prefixes:
        return []
    for i in range(warmup):
        index.autocomplete(prefixes[i % len(prefixes)], k=k, strategy=strategy)

    times = []
    for i in range(runs):
        p = prefixes[i % len(prefixes)]
        t0 = time.perf_counter()
        index.autocomplete(p, k=k, strategy=strategy)
        times.append((time.perf_counter() - t0) * 1000.0)
    return times


def run_benchmark(tokens: Sequence[str], k: int = 5, train_frac: float = 0.8,
                  runs: int = 200) -> Dict:
    """Full report: build costs, then quality and latency per strategy."""
    train, test = split_corpus(tokens, train_frac)
    index, build = build_index(train)
    queries = make_queries(test)
    prefixes = sorted({prefix for _, prefix, _ in queries}) or sorted({w[:2] for w in train})

    report = {
        "corpus": {"tokens": len(tokens), "train": len(train), "test": len(test), "queries": len(queries)},
        "build": build,
        "strategies": {},
    }
    for name in STRATEGIES:
        res = evaluate_on_test(index, queries, strategy=name, k=k)
        res["profile"] = latency_summary(profile(index, prefixes, strategy=name, k=k, runs=runs))
        report["strategies"][name] = res
        logger.info("%s: hits %d/%d", name, res["hits"], res["total"])
    return report


def summarize(report: Dict, console: Console) -> None:
    b = report["build"]
    console.print(
        f"[bold]Index[/bold] words={b['words']} nodes={b['nodes']} "
        f"insert={b['insert_s']:.4f}s bigrams={b['bigram_build_s']:.4f}s peak={b['peak_kib']:.1f}KiB"
    )
    t = Table(title="Strategies", box=box.SIMPLE)
    t.add_column("Strategy", style="cyan")
    t.add_column("Hits", justify="right")
    t.add_column("Quality", justify="right", style="magenta")
    t.add_column("Mean ms", justify="right")
    t.add_column("p99 ms", justify="right")
    for name, res in report["strategies"].items():
        lat = res["profile"]
        t.add_row(name, f"{res['hits']}/{res['total']}", f"{res['quality']:.3f}",
                  f"{lat['mean_ms']:.4f}", f"{lat['p99_ms']:.4f}")
    console.print(t)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="prefix-completer-bench",
                                     description="Benchmark frequency vs contextual ranking on a corpus")
    parser.add_argument("corpus", type=Path, help="text file, whitespace tokenized")
    parser.add_argument("--out", type=Path, default=Path("evaluation_results.json"), help="output JSON file")
    parser.add_argument("--train-frac", type=float, default=0.8, help="training fraction (0..1)")
    parser.add_argument("-k", type=int, default=5, help="suggestions per query")
    parser.add_argument("--runs", type=int, default=200, help="profiling calls per strategy")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    console = Console()
    if not args.corpus.exists():
        console.print(f"[red]Corpus not found:[/red] {args.corpus}")
        return 1

    tokens = load_corpus(args.corpus)
    report = run_benchmark(tokens, k=args.k, train_frac=args.train_frac, runs=args.runs)
    summarize(report, console)
    with args.out.open("w", encoding="utf-8") as fh:
        json.dump(report, fh, indent=2)
    console.print(f"Full JSON written to: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
