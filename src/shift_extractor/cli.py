"""Command-line interface for Shift Extractor.

This module provides the main entry point for the CLI application.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError as RequestValidationError

from shift_extractor import __version__
from shift_extractor.agent import NO_SHIFTS_MESSAGE, UploadAgent
from shift_extractor.config import Settings, get_settings
from shift_extractor.exceptions import ValidationError
from shift_extractor.extraction.prompt import build_shift_extraction_prompt
from shift_extractor.models import AllDayShift, ShiftExtractionRequest, UploadImage, UploadResult
from shift_extractor.vision import AnthropicVisionClient, MockVisionClient

logger = structlog.get_logger()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shift-extractor", description="Shift Extractor")
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract a resident's call shifts from schedule images",
    )
    extract_parser.add_argument("images", nargs="*", type=Path, help="Schedule images (png, jpeg, webp)")
    extract_parser.add_argument("--name", required=True, help="Resident name to look for")
    extract_parser.add_argument(
        "--extra",
        default=None,
        help="Optional hints, e.g. how the resident's name is abbreviated",
    )
    extract_parser.add_argument(
        "--text",
        default=None,
        help="Optional plain-language description of shifts",
    )
    extract_parser.add_argument(
        "--format",
        choices=["json", "table"],
        default="json",
        help="Output format (default: json)",
    )
    extract_parser.add_argument(
        "--mock",
        action="store_true",
        help="Use canned sample output instead of calling the model",
    )

    prompt_parser = subparsers.add_parser("prompt", help="Print the extraction prompt")
    prompt_parser.add_argument("--name", required=True, help="Resident name")
    prompt_parser.add_argument("--extra", default=None, help="Optional hints")
    prompt_parser.add_argument("--text", default=None, help="Optional plain-language shifts")

    return parser


def _load_images(paths: list[Path], settings: Settings) -> list[UploadImage]:
    if len(paths) > settings.max_images:
        raise ValidationError(f"At most {settings.max_images} images can be uploaded at once.")

    images: list[UploadImage] = []
    for path in paths:
        if not path.is_file():
            raise ValidationError(f"Image not found: {path}")
        if path.stat().st_size > settings.max_image_bytes:
            raise ValidationError(f"Image too large: {path.name}")
        images.append(UploadImage.from_path(path))
    return images


def _print_result(result: UploadResult, output_format: str) -> None:
    if output_format == "json":
        print(json.dumps([s.model_dump(exclude_none=True) for s in result.shifts], indent=2))
        return

    for s in result.shifts:
        if isinstance(s, AllDayShift):
            print(f"{s.kind}\t{s.date}\t\t{s.notes or ''}")
        else:
            print(f"{s.kind}\t{s.start}\t{s.end}\t{s.notes or ''}")


async def _cmd_extract(args: argparse.Namespace) -> int:
    settings = get_settings()

    if not args.images and not args.text:
        print("Provide at least one image or --text.", file=sys.stderr)
        return 2

    try:
        images = _load_images(args.images, settings)
        request = ShiftExtractionRequest(
            resident_name=args.name,
            extra_context=args.extra,
            text=args.text,
            images=images,
        )
    except ValidationError as e:
        print(str(e), file=sys.stderr)
        return 2
    except OSError as e:
        print(f"Could not read image: {e}", file=sys.stderr)
        return 2
    except RequestValidationError:
        print("Resident name must not be empty.", file=sys.stderr)
        return 2

    client = MockVisionClient() if args.mock else AnthropicVisionClient(settings=settings)
    agent = UploadAgent(vision_client=client, settings=settings)
    result = await agent.process(request)

    if not result.success:
        print(result.error_message, file=sys.stderr)
        return 1

    if not result.shifts:
        print(NO_SHIFTS_MESSAGE, file=sys.stderr)
        return 1

    _print_result(result, args.format)
    return 0


def _cmd_prompt(args: argparse.Namespace) -> int:
    try:
        prompt = build_shift_extraction_prompt(
            resident_name=args.name,
            extra_context=args.extra,
            text=args.text,
        )
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2

    print(prompt)
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the Shift Extractor CLI.

    Args:
        args: Command-line arguments. If None, uses sys.argv.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    if args is None:
        args = sys.argv[1:]

    settings = get_settings()

    # Configure logging; log output goes to stderr so stdout stays parseable.
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )

    logger.info("shift_extractor_started", version=__version__, debug=settings.debug)

    parser = _build_parser()
    parsed = parser.parse_args(args)

    if parsed.command == "extract":
        return asyncio.run(_cmd_extract(parsed))
    if parsed.command == "prompt":
        return _cmd_prompt(parsed)

    logger.error("unknown_command", command=parsed.command)
    return 2


if __name__ == "__main__":
    sys.exit(main())
