"""
Sierpinski Chaos Game - Main Entry Point

Starts the PySide6 desktop explorer.
"""
import argparse
import logging
import sys

from PySide6 import QtWidgets

from core.config import ChaosConfig


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Explore the Sierpinski triangle via the chaos game.")
    parser.add_argument("--seed", type=int, default=None, help="random seed for reproducible runs")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging verbosity")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = ChaosConfig(rng_seed=args.seed).validate()

    # imported late so --help works without a display
    from app.desktop.main_window import MainWindow

    app = QtWidgets.QApplication(sys.argv[:1])
    window = MainWindow(config)
    window.show()

    print("Sierpinski Chaos Game started.")
    print("Controls: Scroll to Zoom, Drag to Pan.")
    print("Key 'g': Generate points.")
    print("Key 'a': Toggle Instant / Animate mode.")
    print("Key 'r': Reset.")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
