#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from PIL import Image

from luvatrix_linechart import PlotConfiguration, line_chart


MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
VALUES = [10.0, 25.0, 18.0, 30.0, 22.0, 27.0, 35.0, 31.0, 29.0, 40.0, 38.0, 45.0]


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render a sample line chart to PNG.")
    p.add_argument("--out", default="line_chart.png")
    p.add_argument("--width", type=int, default=640)
    p.add_argument("--height", type=int, default=360)
    p.add_argument("--max-labels", type=int, default=6)
    p.add_argument("--progress", type=float, default=1.0, help="draw-in animation point to capture, 0..1")
    p.add_argument("--no-fill", action="store_true")
    p.add_argument("--no-dots", action="store_true")
    return p.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = PlotConfiguration()
    config.update(
        max_label_count=args.max_labels,
        show_fill=not args.no_fill,
        show_dots=not args.no_dots,
    )
    frame = line_chart(MONTHS, VALUES, args.width, args.height, config=config, progress=args.progress)

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(frame).save(out_path)
    print(f"wrote {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
