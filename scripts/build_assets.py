#!/usr/bin/env python3
"""
Post-bundle step for the admin theme.

Run the bundler with `metafile: true` first, then point this script at the
metafile to build the icon sprite and the entrypoints.json manifest.
"""

import argparse
import json
import logging
import shutil
import sys
from pathlib import Path

# Add the project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from activity_log.core.config.settings import settings
from activity_log.modules.assets import build_sprite, write_build_artifacts

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Write the sprite and asset manifest for a theme build")
    parser.add_argument(
        "--theme-dir",
        required=True,
        help="Theme directory holding assets/ and build/"
    )
    parser.add_argument(
        "--metafile",
        help="esbuild metafile JSON (default: <theme-dir>/build/meta.json)"
    )
    parser.add_argument(
        "--public-prefix",
        default=settings.ASSETS_PUBLIC_PREFIX,
        help=f"Public URL prefix of the build dir (default: {settings.ASSETS_PUBLIC_PREFIX})"
    )
    parser.add_argument(
        "--entry-name",
        default=settings.ASSETS_ENTRY_NAME,
        help=f"Logical entry name in the manifest (default: {settings.ASSETS_ENTRY_NAME})"
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Remove the symbol dir before building the sprite"
    )

    args = parser.parse_args()

    theme_dir = Path(args.theme_dir).resolve()
    build_dir = theme_dir / "build"
    metafile_path = Path(args.metafile) if args.metafile else build_dir / "meta.json"

    if args.clean:
        shutil.rmtree(build_dir / "symbol", ignore_errors=True)

    build_sprite(theme_dir / "assets" / "icons", build_dir / "symbol" / "icons-sprite.svg")

    try:
        metafile = json.loads(metafile_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read metafile {metafile_path}: {e}")
        sys.exit(1)

    write_build_artifacts(
        metafile,
        build_dir=build_dir,
        base_dir=theme_dir,
        public_prefix=args.public_prefix,
        entry_name=args.entry_name,
    )
    print(f"✅ Theme build artifacts written to {build_dir}")


if __name__ == "__main__":
    main()
