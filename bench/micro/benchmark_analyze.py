from __future__ import annotations

import argparse
from datetime import datetime
import json
from pathlib import Path
import statistics
import sys
import time


BENCH_ROOT = Path(__file__).resolve().parents[1]
if str(BENCH_ROOT) not in sys.path:
    sys.path.insert(0, str(BENCH_ROOT))


from workloads.lexicon_workload import LexiconWorkloadConfig, build_service, build_text


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Microbenchmark text analysis (sequential vs thread-pool token resolution).",
    )
    parser.add_argument("--phase", choices=("before", "after", "ci"), default="after")
    parser.add_argument("--runs", type=int, default=15)
    parser.add_argument("--warmups", type=int, default=3)
    parser.add_argument("--lemmas", type=int, default=2000)
    parser.add_argument("--text-words", type=int, default=5000)
    parser.add_argument("--workers", type=int, default=4)
    return parser


def _quantile(values: list[float], q: float) -> float:
    if not values:
        return 0.0
    sorted_values = sorted(values)
    index = int(round((len(sorted_values) - 1) * q))
    return float(sorted_values[index])


def _run_case(
    *,
    name: str,
    config: LexiconWorkloadConfig,
    runs: int,
    warmups: int,
    workers: int,
) -> dict[str, object]:
    service = build_service(config, max_workers=workers, parallel_min_tokens=1)
    text = build_text(config)
    try:
        for _ in range(max(0, int(warmups))):
            service.analyze(text)

        elapsed_ms: list[float] = []
        total_words = 0
        for _ in range(max(1, int(runs))):
            started_at = time.perf_counter()
            result = service.analyze(text)
            elapsed_ms.append((time.perf_counter() - started_at) * 1000.0)
            total_words = result.stats.total_words
    finally:
        service.close()

    return {
        "case": name,
        "workload": {"lemmas": config.lemmas, "text_words": config.text_words},
        "workers": workers,
        "runs": len(elapsed_ms),
        "latency_ms": {
            "mean": statistics.mean(elapsed_ms),
            "stddev": statistics.stdev(elapsed_ms) if len(elapsed_ms) > 1 else 0.0,
            "p50": _quantile(elapsed_ms, 0.50),
            "p95": _quantile(elapsed_ms, 0.95),
            "min": min(elapsed_ms),
            "max": max(elapsed_ms),
        },
        "total_words": total_words,
    }


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    config = LexiconWorkloadConfig(lemmas=args.lemmas, text_words=args.text_words)
    sequential = _run_case(
        name="sequential",
        config=config,
        runs=args.runs,
        warmups=args.warmups,
        workers=1,
    )
    pooled = _run_case(
        name="thread_pool",
        config=config,
        runs=args.runs,
        warmups=args.warmups,
        workers=max(2, args.workers),
    )

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_dir = Path("profiles") / "micro"
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"{timestamp}_{args.phase}_analyze_micro.json"
    payload = {
        "phase": args.phase,
        "timestamp": timestamp,
        "cases": [sequential, pooled],
    }
    output_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")

    print(f"summary={output_path.as_posix()}")
    print(f"sequential_mean_ms={sequential['latency_ms']['mean']:.3f}")
    print(f"thread_pool_mean_ms={pooled['latency_ms']['mean']:.3f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
