from activity_log.modules.assets.manifest import build_manifest, make_integrity, write_build_artifacts
from activity_log.modules.assets.sprite import build_sprite

__all__ = ["build_manifest", "build_sprite", "make_integrity", "write_build_artifacts"]
