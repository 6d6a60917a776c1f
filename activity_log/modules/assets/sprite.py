import logging
import re
from pathlib import Path


logger = logging.getLogger(__name__)

SPRITE_OPEN = (
    '<svg xmlns="http://www.w3.org/2000/svg" aria-hidden="true" '
    'style="position:absolute;width:0;height:0;overflow:hidden;">'
)

_XML_DECL_RE = re.compile(r"<\?xml[^>]*>", re.IGNORECASE)
_DOCTYPE_RE = re.compile(r"<!DOCTYPE[^>]*>", re.IGNORECASE)
_SVG_RE = re.compile(r"<svg\b([^>]*)>(.*?)</svg>", re.IGNORECASE | re.DOTALL)
_XMLNS_RE = re.compile(r'\s+xmlns(:\w+)?="[^"]*"', re.IGNORECASE)


def svg_to_symbol(symbol_id: str, raw: str) -> str | None:
    """Turn one standalone SVG document into a <symbol>, or None if it has no <svg>."""
    sanitized = _DOCTYPE_RE.sub("", _XML_DECL_RE.sub("", raw.lstrip("\ufeff")))
    match = _SVG_RE.search(sanitized)
    if not match:
        return None
    attrs = _XMLNS_RE.sub("", match.group(1) or "").strip()
    body = (match.group(2) or "").strip()
    attr_segment = f" {attrs}" if attrs else ""
    return f'<symbol id="{symbol_id}"{attr_segment}>{body}</symbol>'


def build_sprite(icons_dir: Path, output_file: Path) -> Path:
    """
    Concatenate every *.svg in `icons_dir`, sorted by name, into one hidden
    sprite of <symbol> elements keyed by file stem.
    """
    symbols = []
    files = sorted(icons_dir.glob("*.svg")) if icons_dir.is_dir() else []
    for file in files:
        symbol = svg_to_symbol(file.stem, file.read_text(encoding="utf-8"))
        if symbol is None:
            logger.warning(f"Skipping {file.name}: no <svg> element")
            continue
        symbols.append(symbol)

    output_file.parent.mkdir(parents=True, exist_ok=True)
    sprite = "\n".join([SPRITE_OPEN, *symbols, "</svg>"])
    output_file.write_text(sprite + "\n", encoding="utf-8")
    logger.info(f"Wrote sprite with {len(symbols)} icons to {output_file}")
    return output_file
