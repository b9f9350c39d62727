import argparse
import logging
import sys
from pathlib import Path

from asciiramp import charsets
from asciiramp.batch import plan_jobs, render_batch
from asciiramp.converter import AsciiConverter
from asciiramp.model import LuminanceModel, RenderMode
from asciiramp.render import DEFAULT_FONT_SIZE, grid_to_strings

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {".txt", ".text", ""}


def setup_logging(log_level: str = "WARNING") -> None:
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")
    logging.basicConfig(level=numeric_level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert an image to ascii text or an ascii-art image")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-s", "--scale", type=float, default=1.0, help="Scale factor between 0 and 1 applied first (default: 1.0)"
    )
    parser.add_argument(
        "-r", "--ramp", default="simple", choices=sorted(charsets.RAMPS), help="Character ramp preset (default: simple)"
    )
    parser.add_argument("--chars", default=None, help="Custom ramp, darkest character first. Overrides --ramp")
    parser.add_argument(
        "-l",
        "--luminance",
        default=LuminanceModel.RELATIVE.value,
        choices=[m.value for m in LuminanceModel],
        help="Luminance model (default: relative)",
    )
    parser.add_argument(
        "-m",
        "--mode",
        default=RenderMode.GREYSCALE.value,
        choices=[m.value for m in RenderMode],
        help="Colour mode for image output (default: greyscale)",
    )
    parser.add_argument(
        "-f", "--font-size", type=int, default=DEFAULT_FONT_SIZE, help=f"Font size in pixels (default: {DEFAULT_FONT_SIZE})"
    )
    parser.add_argument("--font", default=None, help="Path to a monospace TrueType font")
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file. .txt writes text, any image extension renders an image. Prints text when omitted.",
    )
    parser.add_argument(
        "--batch", metavar="DIR", default=None, help="Render every ramp, mode and luminance combination into DIR"
    )
    parser.add_argument("-j", "--workers", type=int, default=None, help="Worker threads for --batch")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG")
    return parser


def run(args: argparse.Namespace) -> int:
    image_path = Path(args.image)
    if not image_path.exists():
        logger.error("File not found: %s", image_path)
        return 1

    ramp = args.chars if args.chars is not None else charsets.RAMPS[args.ramp]
    ramp = charsets.check_ramp(ramp)
    luminance = LuminanceModel(args.luminance)
    mode = RenderMode(args.mode)

    converter = AsciiConverter(image_path, scale=args.scale)
    logger.info("Loaded %s at %dx%d", image_path, converter.width, converter.height)

    if args.batch is not None:
        ramps = {"chars": ramp} if args.chars is not None else None
        result = render_batch(
            converter, args.batch, plan_jobs(ramps), font_size=args.font_size, font=args.font, max_workers=args.workers
        )
        return 0 if result.ok else 1

    if args.output is None:
        print("\n".join(grid_to_strings(converter.ascii_grid(ramp, luminance))))
        return 0

    output = Path(args.output)
    if output.suffix.lower() in TEXT_SUFFIXES:
        converter.write_text(output, ramp, luminance)
    else:
        converter.render_image(ramp, args.font_size, mode, luminance, args.font).save(output)
    logger.info("Wrote %s", output)
    return 0


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else args.log_level)
    try:
        code = run(args)
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
