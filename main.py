"""
Anno 1602 BSH Sprite Extractor

Reads a BSH graphics container and saves every image it holds as a PNG,
using the game's STADTFLD.COL palette.

Usage:
  python main.py ANNO_DIR BSH_FILE [options]
"""

from annobsh.cli import main


if __name__ == '__main__':
    raise SystemExit(main())
