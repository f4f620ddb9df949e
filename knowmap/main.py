import argparse
import json
import logging
import math
import os
import random
import sys
from dataclasses import replace

from knowmap.graph_engine import compute_layout
from knowmap.graph_io import GraphFormatError, dump_graph, load_graph, save_graph
from knowmap.layout_config import LayoutConfig

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="knowmap", description="Lay out a knowledge graph snapshot.")
    parser.add_argument("snapshot", help="graph snapshot (JSON)")
    parser.add_argument("--width", type=float, help="canvas width (default: snapshot, then 800)")
    parser.add_argument("--height", type=float, help="canvas height (default: snapshot, then 600)")
    parser.add_argument("--iterations", type=int, help="number of iterations")
    parser.add_argument("--seed", type=int, help="seed for placing unplaced nodes")
    parser.add_argument("--config", help="layout settings (JSON)")
    parser.add_argument("-o", "--output", help="write the laid-out snapshot here")
    parser.add_argument("--show", action="store_true", help="open a window with the result")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def _pick_size(given, from_snapshot, default):
    if given is not None:
        return given
    if from_snapshot is not None:
        return from_snapshot
    return default


def show_window(nodes, edges, width, height, title):
    from PyQt6.QtWidgets import QApplication, QMainWindow
    from knowmap.ui.graph_widget import GraphWidget

    app = QApplication.instance() or QApplication(sys.argv)
    window = QMainWindow()
    window.setWindowTitle(f"KnowMap - {title}")
    widget = GraphWidget(width, height)
    widget.set_graph(nodes, edges)
    window.setCentralWidget(widget)
    window.show()
    return app.exec()


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        snapshot = load_graph(args.snapshot)
        config = LayoutConfig.load(args.config) if args.config else LayoutConfig()
        if args.iterations is not None:
            config = replace(config, iterations=args.iterations)
    except (OSError, GraphFormatError, TypeError, ValueError) as e:
        print(f"knowmap: {e}", file=sys.stderr)
        return 1

    width = _pick_size(args.width, snapshot.width, DEFAULT_WIDTH)
    height = _pick_size(args.height, snapshot.height, DEFAULT_HEIGHT)
    if width <= 0 or height <= 0 or not math.isfinite(width) or not math.isfinite(height):
        print(f"knowmap: canvas size must be positive, got {width:g}x{height:g}", file=sys.stderr)
        return 1
    rng = random.Random(args.seed) if args.seed is not None else None

    compute_layout(snapshot.nodes, snapshot.edges, width, height, rng=rng, config=config)
    logger.info(f"Layout done: {len(snapshot.nodes)} nodes on {width:g}x{height:g}")

    if args.output:
        save_graph(args.output, snapshot.nodes, snapshot.edges, width, height)
        logger.info(f"Wrote {args.output}")
    elif not args.show:
        json.dump(dump_graph(snapshot.nodes, snapshot.edges, width, height), sys.stdout, indent=2)
        sys.stdout.write("\n")

    if args.show:
        return show_window(snapshot.nodes, snapshot.edges, width, height,
                           os.path.basename(args.snapshot))
    return 0


if __name__ == "__main__":
    sys.exit(main())
