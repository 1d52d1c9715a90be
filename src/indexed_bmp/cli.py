"""Command line interface: normalise BMP/PNG files to 8-bit indexed BMPs."""

from __future__ import annotations

import argparse
import sys
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from .bitmap import IndexedBitmap
from .errors import BitmapError
from .imaging import open_image, save_preview
from .palette import Color, load_jasc_palette

INPUT_SUFFIXES = (".bmp", ".png")


@dataclass
class ConvertOptions:
    """Options for reading and writing bitmaps."""

    palette_path: Path | None = None
    read_file_header: bool = True
    write_file_header: bool = True
    write_preview: bool = False


def iter_inputs(paths: Iterable[str]) -> List[Path]:
    results: List[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_file():
            if path.suffix.lower() not in INPUT_SUFFIXES:
                raise BitmapError(f"Unsupported file type (expected .bmp or .png): {path}")
            results.append(path)
        elif path.is_dir():
            for entry in sorted(path.iterdir()):
                if entry.is_file() and entry.suffix.lower() in INPUT_SUFFIXES:
                    results.append(entry)
        else:
            raise BitmapError(f"Input path does not exist: {path}")
    if not results:
        raise BitmapError("No BMP or PNG files were found in the provided inputs.")
    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Convert 8-bit/24-bit BMP files (or PNG files) into 8-bit indexed BMP files.\n"
            "Colors are mapped to the nearest entry of the target palette; without --palette "
            "the built-in 256-color palette is used."
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        help="BMP/PNG files or folders containing them (non-recursive)",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        required=True,
        help="Destination directory for .bmp files",
    )
    parser.add_argument(
        "--palette",
        type=Path,
        help="JASC-PAL file with the 256-color target palette",
    )
    parser.add_argument(
        "--raw-input",
        action="store_true",
        help="Input BMP files start at the BITMAPINFOHEADER (no 14-byte file header)",
    )
    parser.add_argument(
        "--no-file-header",
        action="store_true",
        help="Write output without the 14-byte file header",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Also write a PNG preview next to each output",
    )
    parser.add_argument("--prefix", default="", help="Optional prefix for output filenames")
    parser.add_argument("--suffix", default="", help="Optional suffix for output filenames")
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite existing files without prompting",
    )
    return parser


def ensure_unique_names(paths: List[Path], prefix: str, suffix: str) -> List[str]:
    names: List[str] = []
    seen = set()
    for path in paths:
        name = f"{prefix}{path.stem}{suffix}.bmp"
        if name in seen:
            raise BitmapError(f"Duplicate output name would occur: {name}")
        seen.add(name)
        names.append(name)
    return names


def load_bitmap(path: Path, palette: List[Color] | None, options: ConvertOptions) -> IndexedBitmap:
    if path.suffix.lower() == ".png":
        return open_image(path, palette)
    try:
        return IndexedBitmap.from_file(path, palette=palette, file_header=options.read_file_header)
    except FileNotFoundError as exc:
        raise BitmapError(f"Input file not found: {path}") from exc


def write_outputs(
    inputs: List[Path],
    names: List[str],
    options: ConvertOptions,
    output_dir: Path,
    force: bool,
) -> None:
    conflicts = []
    for name in names:
        target = output_dir / name
        if target.exists() and not force:
            conflicts.append(str(target))
    if conflicts:
        raise BitmapError(
            "Output files already exist (use --force to overwrite):\n" + "\n".join(conflicts)
        )

    palette = load_jasc_palette(options.palette_path) if options.palette_path else None
    output_dir.mkdir(parents=True, exist_ok=True)

    for src, name in zip(inputs, names):
        bitmap = load_bitmap(src, palette, options)
        target = bitmap.save(output_dir / name, file_header=options.write_file_header)
        print(f"wrote {target}")
        if options.write_preview:
            preview = save_preview(bitmap, target.with_suffix(".png"))
            print(f"wrote {preview}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = ConvertOptions()
        options.palette_path = args.palette
        options.read_file_header = not args.raw_input
        options.write_file_header = not args.no_file_header
        options.write_preview = args.preview

        inputs = iter_inputs(args.inputs)
        output_dir = Path(args.output_dir)
        names = ensure_unique_names(inputs, args.prefix, args.suffix)
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            write_outputs(inputs, names, options, output_dir, args.force)
        for warning in caught:
            print(f"Warning: {warning.message}", file=sys.stderr)
        return 0
    except (BitmapError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
