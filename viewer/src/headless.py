"""Headless Layer Renderer: CLI entry point.

Loads layer content (a JSON file, or the built-in water cycle sample),
replays a navigation on a virtual clock and renders the resulting view to
PNG. With --frames every animation frame is written as well.

Usage:
    python viewer/src/headless.py [content.json] [-o OUTPUT_DIR] [--path NODE,NODE] [--zoom-out N] [--home] [--frames]

Examples:
    python viewer/src/headless.py
    python viewer/src/headless.py --path evaporation -o renders/
    python viewer/src/headless.py my_layers.json --path a,b --zoom-out 1 --frames
"""

import sys
import os
import argparse
import logging

# Add viewer/src to path so imports work
_src_dir = os.path.dirname(os.path.abspath(__file__))
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from models.layer import LayerDataError
from constants import HEADLESS_WIDTH, HEADLESS_HEIGHT


def _parse_size(text):
    """Parse WIDTHxHEIGHT into an int pair"""
    try:
        width, height = (int(part) for part in text.lower().split('x'))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got {text!r}")
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(f"Size must be positive, got {text!r}")
    return width, height


class NavigationRecorder:
    """Replays navigation steps on a stepped clock, rendering as it goes.

    Args:
        engine: Initialized NavigationEngine
        scheduler: SteppedFrameScheduler driving the engine's animator
        renderer: HeadlessRenderer
        output_dir: Directory for PNG output
        write_frames: Save every animation frame, not just the final view
    """

    def __init__(self, engine, scheduler, renderer, output_dir, write_frames=False):
        self.engine = engine
        self.scheduler = scheduler
        self.renderer = renderer
        self.output_dir = output_dir
        self.write_frames = write_frames
        self.frames_written = 0

    def _frame_path(self, name):
        return os.path.join(self.output_dir, f"{name}.png")

    def settle(self):
        """Run frames until the current transition finishes"""
        while self.scheduler.pending:
            self.scheduler.step()
            if self.write_frames:
                image = self.renderer.render_state(self.engine)
                self.renderer.save(image, self._frame_path(f"frame_{self.frames_written:04d}"))
                self.frames_written += 1

    def drill(self, node_id):
        """Zoom into node_id of the current layer

        Raises:
            ValueError: If the node does not exist or has no child layer
        """
        layer = self.engine.get_current_layer()
        node = layer.get_node(node_id) if layer else None
        if node is None:
            raise ValueError(f"Layer {self.engine.current_layer_id!r} has no node {node_id!r}")
        if not node.child_layer_id:
            raise ValueError(f"Node {node_id!r} has no child layer")
        self.engine.zoom_in(node, *self.renderer.viewport_size)
        self.settle()

    def zoom_out(self):
        self.engine.zoom_out(*self.renderer.viewport_size)
        self.settle()

    def go_home(self):
        self.engine.go_home()
        self.settle()

    def write_final(self, name="final"):
        image = self.renderer.render_state(self.engine)
        return self.renderer.save(image, self._frame_path(name))


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Render layer navigation to PNG images (headless).',
    )
    parser.add_argument(
        'input_file',
        nargs='?',
        help='Path to a JSON layer content file (default: built-in water cycle sample).',
    )
    parser.add_argument(
        '-o', '--output',
        default='./output',
        help='Output directory for PNG files (default: ./output).',
    )
    parser.add_argument(
        '-p', '--path',
        default='',
        help='Comma-separated node ids to drill into, starting from the root layer.',
    )
    parser.add_argument(
        '--zoom-out',
        type=int,
        default=0,
        metavar='N',
        help='Zoom out N levels after drilling.',
    )
    parser.add_argument(
        '--home',
        action='store_true',
        help='Go home after all other navigation.',
    )
    parser.add_argument(
        '-s', '--size',
        type=_parse_size,
        default=(HEADLESS_WIDTH, HEADLESS_HEIGHT),
        help=f'Viewport size as WIDTHxHEIGHT (default: {HEADLESS_WIDTH}x{HEADLESS_HEIGHT}).',
    )
    parser.add_argument(
        '-f', '--frames',
        action='store_true',
        help='Write every animation frame, not just the final view.',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    args = parser.parse_args(argv)

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    from services.animator import Animator
    from services.frame_scheduler import SteppedFrameScheduler
    from services.file_operations import load_config_from_file
    from services.headless_renderer import HeadlessRenderer
    from services.navigation_engine import NavigationEngine
    from services.sample_data import water_cycle_config

    if args.input_file:
        input_path = os.path.abspath(args.input_file)
        if not os.path.isfile(input_path):
            print(f"Error: Input file not found: {input_path}")
            return 1
        try:
            config = load_config_from_file(input_path)
        except LayerDataError as e:
            print(f"Error: Invalid layer content in {input_path}:")
            for problem in e.problems:
                print(f"  - {problem}")
            return 1
    else:
        config = water_cycle_config()

    scheduler = SteppedFrameScheduler()
    engine = NavigationEngine(Animator(scheduler))
    engine.initialize(config)

    output_dir = os.path.abspath(args.output)
    width, height = args.size
    recorder = NavigationRecorder(
        engine, scheduler, HeadlessRenderer(width, height), output_dir, write_frames=args.frames,
    )

    try:
        for node_id in [part.strip() for part in args.path.split(',') if part.strip()]:
            recorder.drill(node_id)
            print(f"  entered {engine.current_layer_id}")
        for _ in range(args.zoom_out):
            recorder.zoom_out()
            print(f"  back to {engine.current_layer_id}")
        if args.home:
            recorder.go_home()
            print(f"  home at {engine.current_layer_id}")
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    final_path = recorder.write_final()
    print(f"\nDone. Final view of {engine.current_layer_id!r} written to {final_path}")
    if args.frames:
        print(f"  ({recorder.frames_written} animation frame(s) in {output_dir}/)")
    return 0


if __name__ == '__main__':
    sys.exit(main())
