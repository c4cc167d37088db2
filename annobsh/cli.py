"""
BSH Sprite Extractor
Decodes BSH graphics containers from Anno 1602 into standalone images.

Usage:
  annobsh ANNO_DIR BSH_FILE [BSH_FILE ...] [-o OUTDIR] [--palette PATH]
          [--format png] [--scale N | --width W --height H]
          [--manifest] [--debug]

Examples:
  annobsh /games/anno1602 GFX/STADTFLD.BSH
  annobsh /games/anno1602 "GFX/*.BSH" -o sprites --manifest
"""

import argparse
import glob
import os
import sys
from datetime import datetime
from typing import Dict, List, Union

import pandas as pd
from tqdm import tqdm

from .bsh_decoder import BshDecoder
from .config import Config
from .decoded_image import output_name
from .exceptions import BshError
from .palette import Palette


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def append_timestamp(filename: str) -> str:
    """Append current timestamp to filename."""
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    file_name, file_extension = os.path.splitext(filename)
    return f"{file_name}_{timestamp}{file_extension}"


def resolve_inputs(anno_dir: str, patterns: List[str]) -> List[str]:
    """
    Resolve container names relative to the game directory.

    Glob patterns are expanded; plain names are kept even if missing so the
    caller can report them.
    """
    files = []
    for pattern in patterns:
        path = os.path.join(anno_dir, pattern)
        if any(ch in pattern for ch in "*?[]"):
            files.extend(sorted(glob.glob(path)))
        else:
            files.append(path)
    return list(dict.fromkeys(files))


# ============================================================================
# DATA EXPORTER
# ============================================================================

class DataExporter:
    """Handles exporting the image manifest to CSV files."""

    @staticmethod
    def build_manifest(rows: List[Dict]) -> pd.DataFrame:
        """
        Build a manifest DataFrame with display column names.

        Args:
            rows: One dict per written image, keyed like Config.FIELD_MAPPINGS

        Returns:
            DataFrame with mapped columns
        """
        df = pd.DataFrame(rows, columns=list(Config.FIELD_MAPPINGS.keys()))
        return df.rename(columns=Config.FIELD_MAPPINGS)

    @staticmethod
    def export_to_csv(df: pd.DataFrame, base_filename: str, output_dir: str = None) -> str:
        """
        Export DataFrame to CSV with timestamp.

        Args:
            df: DataFrame to export
            base_filename: Base filename (timestamp will be appended)
            output_dir: Output directory (default: Config.OUTPUT_DIR)

        Returns:
            Full path of exported file
        """
        if output_dir is None:
            output_dir = Config.OUTPUT_DIR

        os.makedirs(output_dir, exist_ok=True)

        filename = append_timestamp(base_filename)
        filepath = os.path.join(output_dir, filename)

        df.to_csv(filepath, index=False)
        print(f"[OK] Exported: {filepath}")
        return filepath


# ============================================================================
# EXTRACTION
# ============================================================================

def decode_bsh_file(
    bsh_path: str,
    decoder: BshDecoder,
    output_dir: str = None,
    image_format: str = None,
    scale: Union[int, float] = 1,
    target_width: int = None,
    target_height: int = None,
    show_progress: bool = True,
    rows: List[Dict] = None,
) -> List[Dict]:
    """
    Decode every image of a single BSH container and write them to disk.

    Args:
        bsh_path: Path to the .BSH file
        decoder: Decoder holding the palette
        output_dir: Directory for the images (default: Config.OUTPUT_DIR)
        image_format: Image file extension (default: Config.IMAGE_FORMAT)
        scale: Optional scale factor for output images
        target_width: Optional explicit output width
        target_height: Optional explicit output height
        show_progress: Show a progress bar over the container's records
        rows: Optional list the manifest rows are appended to, so rows of
            images written before an error are kept

    Returns:
        The manifest rows, one per written image

    Raises:
        BshError: If the container is malformed or a record is corrupt.
            Images written before the error are kept.
        OSError: If the container cannot be read or an image cannot be written
    """
    if output_dir is None:
        output_dir = Config.OUTPUT_DIR
    if image_format is None:
        image_format = Config.IMAGE_FORMAT
    os.makedirs(output_dir, exist_ok=True)

    with open(bsh_path, 'rb') as fp:
        data = fp.read()

    name = os.path.basename(bsh_path)
    offsets = decoder.offsets(data)
    if rows is None:
        rows = []

    with tqdm(total=len(offsets), desc=name, unit="record", disable=not show_progress) as progress:
        for index, image in decoder.iter_images(data, progress=progress):
            filename = output_name(name, index, image_format)
            image.save(
                os.path.join(output_dir, filename),
                scale=scale,
                target_width=target_width,
                target_height=target_height,
            )
            rows.append({
                "container": name,
                "index": index,
                "offset": image.offset,
                "width": image.width,
                "height": image.height,
                "filename": filename,
            })

    return rows


class BshExtractor:
    """Main application orchestrator."""

    def __init__(
        self,
        palette: Palette,
        output_dir: str = None,
        image_format: str = None,
        scale: Union[int, float] = 1,
        target_width: int = None,
        target_height: int = None,
        debug: bool = False,
    ):
        self.decoder = BshDecoder(palette, debug=debug)
        self.exporter = DataExporter()
        self.output_dir = output_dir or Config.OUTPUT_DIR
        self.image_format = image_format or Config.IMAGE_FORMAT
        self.scale = scale
        self.target_width = target_width
        self.target_height = target_height
        self.debug = debug

    def run(self, file_paths: List[str], manifest: bool = False) -> int:
        """
        Decode all containers and return the process exit code.

        A corrupt container is reported and the remaining ones are still
        processed; the exit code is then 1.
        """
        print("=" * 70)
        print("BSH Sprite Extractor")
        print("=" * 70)

        rows: List[Dict] = []
        failed = 0
        for i, path in enumerate(file_paths, 1):
            name = os.path.basename(path)
            print(f"\n[{i}/{len(file_paths)}] {name}")
            written = len(rows)
            try:
                decode_bsh_file(
                    path,
                    self.decoder,
                    output_dir=self.output_dir,
                    image_format=self.image_format,
                    scale=self.scale,
                    target_width=self.target_width,
                    target_height=self.target_height,
                    show_progress=not self.debug,
                    rows=rows,
                )
            except (BshError, OSError) as e:
                print(f"  [ERROR] {name}: {e} ({len(rows) - written} images written)")
                failed += 1
                continue

            print(f"  [OK] {len(rows) - written} images -> {self.output_dir}")
            if self.decoder.skipped:
                print(f"  [SKIP] {len(self.decoder.skipped)} invalid records")

        if manifest and rows:
            print("\n" + "-" * 70)
            df = self.exporter.build_manifest(rows)
            self.exporter.export_to_csv(df, Config.MANIFEST_FILENAME, self.output_dir)

        print("\n" + "=" * 70)
        print("Summary:")
        print(f"  - Containers decoded: {len(file_paths) - failed}/{len(file_paths)}")
        print(f"  - Images written: {len(rows)}")
        print(f"  - Output directory: {self.output_dir}")
        print("=" * 70)

        return 1 if failed else 0


# ============================================================================
# ENTRY POINT
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Decode Anno 1602 BSH graphics into images.")
    ap.add_argument("anno_dir", help="Anno 1602 game directory")
    ap.add_argument("inputs", nargs="+", help="BSH files or globs relative to ANNO_DIR (e.g. GFX/*.BSH)")
    ap.add_argument("-o", "--outdir", default=Config.OUTPUT_DIR,
                    help=f"Output directory (default: {Config.OUTPUT_DIR})")
    ap.add_argument("--palette", default=Config.PALETTE_FILE,
                    help=f"Palette file relative to ANNO_DIR (default: {Config.PALETTE_FILE})")
    ap.add_argument("--format", dest="image_format", default=Config.IMAGE_FORMAT,
                    choices=Config.IMAGE_FORMATS,
                    help=f"Output image format (default: {Config.IMAGE_FORMAT})")
    ap.add_argument("--scale", type=float, default=1, help="Scale factor for output images")
    ap.add_argument("--width", type=int, help="Explicit output width (keeps aspect ratio unless --height is given)")
    ap.add_argument("--height", type=int, help="Explicit output height (keeps aspect ratio unless --width is given)")
    ap.add_argument("--manifest", action="store_true", help="Also write a CSV manifest of all images")
    ap.add_argument("--debug", action="store_true", help="Print per-record details")
    return ap


def main(argv: List[str] = None) -> int:
    args = build_parser().parse_args(argv)

    files = resolve_inputs(args.anno_dir, args.inputs)
    if not files:
        print("No input files.", file=sys.stderr)
        return 1
    missing = [f for f in files if not os.path.isfile(f)]
    if missing:
        for f in missing:
            print(f"File not found: {f}", file=sys.stderr)
        return 1

    palette_path = os.path.join(args.anno_dir, args.palette)
    print(f"Reading palette: {palette_path}")
    try:
        palette = Palette.from_file(palette_path)
    except (OSError, BshError) as e:
        print(f"Cannot read palette: {e}", file=sys.stderr)
        return 1

    scale = int(args.scale) if float(args.scale).is_integer() else args.scale
    extractor = BshExtractor(
        palette,
        output_dir=args.outdir,
        image_format=args.image_format,
        scale=scale,
        target_width=args.width,
        target_height=args.height,
        debug=args.debug,
    )
    try:
        return extractor.run(files, manifest=args.manifest)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


if __name__ == '__main__':
    raise SystemExit(main())
