import argparse
import math
import sys
import time
from pathlib import Path

from .errors import RayTracerError
from .scenes import demo_camera, demo_world


def main(argv=None) -> int:
    # --- Argument Parsing ---
    parser = argparse.ArgumentParser(description="JAX Ray Caster - Forward Rendering")
    parser.add_argument('--width', type=int, default=200, help='Image width')
    parser.add_argument('--height', type=int, default=100, help='Image height')
    parser.add_argument('--fov', type=float, default=60.0, help='Field of view in degrees')
    parser.add_argument('--output', type=str, default='output_render.png', help='Output path (.png or .ppm)')
    parser.add_argument('--pattern', action='store_true', help='Give the floor a checkers pattern')
    parser.add_argument('--no-progress', action='store_true', help='Hide the progress bar')
    args = parser.parse_args(argv)

    output_path = Path(args.output)
    if output_path.suffix.lower() not in ('.png', '.ppm'):
        parser.error(f"Unsupported output format '{output_path.suffix}', use .png or .ppm")

    try:
        world = demo_world(checkered_floor=args.pattern)
        camera = demo_camera(args.width, args.height, math.radians(args.fov))
        print(f"Rendering {args.width}x{args.height} image of {len(world.shapes)} shapes...")

        start_time = time.time()
        canvas = camera.render(world, progress=not args.no_progress)
        end_time = time.time()
    except (RayTracerError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    print(f"Rendering finished in {end_time - start_time:.2f} seconds.")

    if output_path.suffix.lower() == '.ppm':
        canvas.save_ppm(output_path)
    else:
        canvas.save_png(output_path)
    print(f"Image saved to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
