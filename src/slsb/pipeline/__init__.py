"""slsb compile pipeline - legacy ingestion, offsets and artifact export."""

from slsb.pipeline.binary import write_binary_file
from slsb.pipeline.export import build_package, validate_build
from slsb.pipeline.legacy import import_legacy, import_legacy_file
from slsb.pipeline.manifest import ManifestState, make_fnis_lines, write_manifests
from slsb.pipeline.offsets import import_offsets, import_offsets_file

__all__ = [
    "ManifestState",
    "build_package",
    "import_legacy",
    "import_legacy_file",
    "import_offsets",
    "import_offsets_file",
    "make_fnis_lines",
    "validate_build",
    "write_binary_file",
    "write_manifests",
]
