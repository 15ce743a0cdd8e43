import argparse
import logging
import sys

from oasis.game_engine import GameEngine
from refractor.config import RenderSettings, ARCHS
from refractor.constants import WIDTH, HEIGHT


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="CPU ray traced oasis scene")
    parser.add_argument('--width', type=int, default=WIDTH)
    parser.add_argument('--height', type=int, default=HEIGHT)
    parser.add_argument('--arch', choices=ARCHS, default='cpu', help="taichi backend")
    parser.add_argument('--log-level', default='INFO')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format='%(asctime)s %(name)s %(levelname)s %(message)s')

    settings = RenderSettings(width=args.width, height=args.height, arch=args.arch)
    engine = GameEngine(settings)
    engine.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
