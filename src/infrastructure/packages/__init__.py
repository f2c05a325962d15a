"""Package inspector implementations."""

from .manifest_inspector import ManifestDirectoryInspector
from .memory_inspector import InMemoryPackageInspector, InstalledPackage

__all__ = [
    "InMemoryPackageInspector",
    "InstalledPackage",
    "ManifestDirectoryInspector",
]
