from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from .analysis import validate_position
from .errors import AnalyzerError
from .paths import resolve_output_path
from .records import load_position, write_result
from .tracking import log_metrics, log_params, maybe_mlflow_run


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ttt-analyze",
        description="Analyze every legal move of a tic-tac-toe position under perfect play",
    )
    p.add_argument("input_file_path", type=Path, nargs="?", help="JSON file with `turn` and `board`")
    p.add_argument(
        "--output-file-path",
        "-o",
        type=Path,
        default=None,
        metavar="FILE",
        help="Where to write the analysis (default: $TTT_OUTPUT_PATH or output.json)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Reject boards that cannot arise from legal play before analyzing",
    )
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs/artifacts (for mlflow local backend)",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if ns.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if ns.version:
        try:
            from importlib.metadata import version as _ver

            print(_ver("ttt-analyzer"))
        except Exception:
            print("unknown")
        return 0

    if ns.input_file_path is None:
        parser.print_usage()
        logging.error("An input file path is required")
        return 1

    try:
        position = load_position(ns.input_file_path)
        if ns.strict:
            validate_position(position)
    except AnalyzerError as e:
        logging.error("%s", e)
        return 1

    output_path = resolve_output_path(ns.output_file_path)
    with maybe_mlflow_run(ns.tracking == "mlflow", run_name="analyze", log_dir=ns.log_dir) as tracking:
        if tracking:
            log_params({
                "input": str(ns.input_file_path),
                "turn": position.turn.value,
                "strict": ns.strict,
            })
        print("Analyzing...")
        t0 = time.perf_counter()
        try:
            result = position.analyze()
        except AnalyzerError as e:
            logging.error("%s", e)
            return 1
        elapsed = time.perf_counter() - t0
        print("Finished analyzing!")
        logging.debug("eval=%s moves=%d elapsed=%.3fs",
                      result.eval.value if result.eval else None, len(result.moves), elapsed)
        if tracking:
            log_params({"eval": result.eval.value if result.eval else "none"})
            log_metrics({"moves": float(len(result.moves)), "elapsed_s": elapsed})

        try:
            write_result(result, output_path)
        except AnalyzerError as e:
            logging.error("%s", e)
            return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
