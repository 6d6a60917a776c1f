"""
Writes the `entrypoints.json` manifest for bundled theme assets.

The bundler (esbuild) is run elsewhere with `metafile: true`; this module only
reads its metafile, keeps the outputs that belong to an entry point and
records their public path and subresource-integrity hash:

    {
      "entrypoints": {"fossbilling": {"css": [...], "js": [...]}},
      "integrity": {"/themes/.../css/fossbilling-bundle.X.css": "sha384-..."}
    }
"""

import base64
import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Mapping

from activity_log.core.config.settings import settings


logger = logging.getLogger(__name__)

MANIFEST_NAME = "entrypoints.json"


def make_integrity(data: bytes) -> str:
    digest = hashlib.sha384(data).digest()
    return f"sha384-{base64.b64encode(digest).decode('ascii')}"


def _asset_type(out_path: str) -> str:
    return "css" if out_path.endswith(".css") else "js"


def _entry_outputs(metafile: Mapping[str, Any]) -> list[tuple[str, Mapping[str, Any]]]:
    outputs = metafile.get("outputs") or {}
    entries = [
        (out_path, data) for out_path, data in outputs.items() if data.get("entryPoint")
    ]
    # Stylesheets first so they are linked before scripts
    entries.sort(key=lambda e: (_asset_type(e[0]) != "css", e[1]["entryPoint"]))
    return entries


def build_manifest(
    metafile: Mapping[str, Any],
    base_dir: Path,
    public_prefix: str = settings.ASSETS_PUBLIC_PREFIX,
    entry_name: str = settings.ASSETS_ENTRY_NAME,
) -> dict[str, Any]:
    """
    Build the manifest dict from an esbuild metafile.
    Relative output paths are resolved against `base_dir`; outputs missing
    on disk are left out.
    """
    manifest: dict[str, Any] = {
        "entrypoints": {entry_name: {"css": [], "js": []}},
        "integrity": {},
    }
    prefix = public_prefix.rstrip("/")

    for out_path, _ in _entry_outputs(metafile):
        path = Path(out_path)
        absolute = path if path.is_absolute() else base_dir / path
        if not absolute.exists():
            logger.warning(f"Bundler output {out_path} not found, skipping")
            continue

        public_path = f"{prefix}/{'/'.join(path.parts[-2:])}"
        manifest["entrypoints"][entry_name][_asset_type(out_path)].append(public_path)
        # an unreadable output stays linked, only its integrity entry is left out
        try:
            manifest["integrity"][public_path] = make_integrity(absolute.read_bytes())
        except OSError as e:
            logger.warning(f"Could not hash {absolute}: {e}")

    return manifest


def write_build_artifacts(
    metafile: Mapping[str, Any],
    build_dir: Path,
    base_dir: Path,
    public_prefix: str = settings.ASSETS_PUBLIC_PREFIX,
    entry_name: str = settings.ASSETS_ENTRY_NAME,
) -> dict[str, Any]:
    manifest = build_manifest(metafile, base_dir, public_prefix, entry_name)
    build_dir.mkdir(parents=True, exist_ok=True)
    target = build_dir / MANIFEST_NAME
    target.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
    logger.info(f"Wrote asset manifest to {target}")
    return manifest
