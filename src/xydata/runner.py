from __future__ import annotations

import asyncio
import dataclasses
import json
import logging
import random
import sys
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from xydata.config.loader import load_config
from xydata.config.models import RunConfig
from xydata.generators.registry import create_generator
from xydata.scheduling import CooperativeScheduler
from xydata.stream import Stream

logger = logging.getLogger(__name__)


def encode_point(point: Any) -> Any:
    if dataclasses.is_dataclass(point) and not isinstance(point, type):
        return dataclasses.asdict(point)
    if isinstance(point, (list, tuple)):
        return [encode_point(item) for item in point]
    return point


def encode_window(run_id: str, index: int, window: List[Any]) -> Dict[str, Any]:
    return {
        "run_id": run_id,
        "window": index,
        "count": len(window),
        "points": [encode_point(point) for point in window],
    }


class RunManager:
    def __init__(
        self,
        config: RunConfig,
        *,
        run_id: str | None = None,
    ):
        self.config = config
        self.run_id = run_id or uuid.uuid4().hex

        rng = random.Random(config.seed) if config.seed is not None else random.Random()
        scheduler = (
            CooperativeScheduler.from_settings(config.scheduler) if config.scheduler else None
        )
        self.generator = create_generator(
            config.generator.type,
            options=config.generator.options,
            rng=rng,
            scheduler=scheduler,
        )
        self.stream = Stream(self.generator, config.stream)

    async def run_async(self, sink: TextIO) -> int:
        """Write every window (or batch) as one JSON line; returns how many lines were written."""
        source = self.stream.batches() if self.config.output.batches else self.stream.windows()
        written = 0
        points = 0
        async for chunk in source:
            sink.write(json.dumps(encode_window(self.run_id, written, chunk), default=str) + "\n")
            written += 1
            points += len(chunk)
            logger.info(
                "Run %s: wrote %s %d (%d points, %d total)",
                self.run_id,
                "batch" if self.config.output.batches else "window",
                written,
                len(chunk),
                points,
            )
        return written

    def run(self) -> str:
        if self.config.info:
            logger.info("Run %s: %s", self.run_id, self.config.info)
        logger.info(
            "Generating %s data (%d points per window, infinite=%s)",
            self.generator.strategy.name,
            self.generator.point_count(),
            self.config.stream.infinite,
        )
        output_path = self.config.output.path
        if output_path:
            path = Path(output_path).expanduser()
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as fh:
                written = asyncio.run(self.run_async(fh))
        else:
            written = asyncio.run(self.run_async(sys.stdout))
        logger.info("Run %s finished with %d line(s)", self.run_id, written)
        return self.run_id


def execute_from_yaml(
    config_path: str,
    *,
    config: Optional[RunConfig] = None,
    run_id: str | None = None,
) -> str:
    cfg = config or load_config(config_path)
    manager = RunManager(cfg, run_id=run_id)
    try:
        return manager.run()
    except KeyboardInterrupt:
        manager.stream.close()
        logger.warning("Run interrupted by user (Ctrl-C).")
        raise
