from __future__ import annotations

import argparse
import logging
import sys

from xydata.config.loader import load_config
from xydata.runner import execute_from_yaml


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Generate synthetic data windows from a YAML configuration.")
    parser.add_argument("-c", "--config", required=True, help="Path to YAML config")
    parser.add_argument("--seed", type=int, help="Seed for the random source")
    parser.add_argument("--windows", type=int, help="Stream this many windows (enables continuous mode)")
    parser.add_argument("-o", "--output", help="Write JSON lines to this file instead of stdout")
    parser.add_argument("--run-id", help="Optional run identifier")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    args = parser.parse_args(argv)

    # Logs go to stderr so stdout stays pure JSON lines.
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
    )
    try:
        cfg = load_config(args.config)
        if args.seed is not None:
            cfg.seed = args.seed
        if args.windows is not None:
            cfg.stream = cfg.stream.model_copy(update={"infinite": True, "max_windows": max(args.windows, 1)})
        if args.output:
            cfg.output = cfg.output.model_copy(update={"path": args.output})
        run_id = execute_from_yaml(args.config, config=cfg, run_id=args.run_id)
    except KeyboardInterrupt:
        print("Run interrupted by user (Ctrl-C).", file=sys.stderr)
        raise SystemExit(130)
    print(f"Run completed. run_id={run_id}", file=sys.stderr)


if __name__ == "__main__":
    main()
