"""Package inspector reading XML package manifests from a directory.

Each ``*.xml`` file describes one package::

    <package name="com.example.notes">
      <provider authority="com.example.notes.suggest" />
      <activity name=".SearchNotes">
        <searchable label="@0x7f050001"
                    searchMode="showSearchLabelAsBadge"
                    searchSuggestAuthority="com.example.notes.suggest">
          <actionkey keycode="5" queryActionMsg="call" />
        </searchable>
      </activity>
    </package>

Attributes may carry an XML namespace prefix (``android:label``); the
namespace is dropped. Every element below an ``activity`` becomes one
``MetadataElement`` in document order.
"""

from collections.abc import Sequence
from pathlib import Path
from xml.etree import ElementTree

from attrs import define, field

from src.config import get_logger, resilient_operation
from src.domain.entities import SEARCHABLE_TAG, ComponentName, MetadataElement
from src.domain.errors import MetadataUnavailableError

logger = get_logger(__name__)


def _local_name(name: str) -> str:
    return name.rsplit("}", 1)[-1].rsplit(":", 1)[-1]


@define(frozen=True, slots=True)
class _ManifestScan:
    components: dict[ComponentName, tuple[MetadataElement, ...]] = field(factory=dict)
    providers: dict[str, str] = field(factory=dict)


class ManifestDirectoryInspector:
    """Package inspector over a directory of XML manifests.

    ``list_searchable_components`` rescans the directory; metadata and
    provider lookups are answered from the most recent scan.
    """

    def __init__(self, manifest_dir: Path | str) -> None:
        self.manifest_dir = Path(manifest_dir)
        self._scan = _ManifestScan()

    @resilient_operation("manifest_scan")
    def refresh(self) -> None:
        """Rescan the manifest directory, skipping manifests that fail to parse."""
        components: dict[ComponentName, tuple[MetadataElement, ...]] = {}
        providers: dict[str, str] = {}

        for path in sorted(self.manifest_dir.glob("*.xml")):
            try:
                root = ElementTree.parse(path).getroot()
            except ElementTree.ParseError as e:
                logger.warning(f"Skipping malformed manifest {path.name}: {e}")
                continue
            self._read_package(root, path, components, providers)

        # Swap in one assignment so lookups see a complete scan
        self._scan = _ManifestScan(components, providers)
        logger.debug(
            f"Scanned {self.manifest_dir}: {len(components)} searchable components, "
            f"{len(providers)} providers"
        )

    @staticmethod
    def _read_package(
        root: ElementTree.Element,
        path: Path,
        components: dict[ComponentName, tuple[MetadataElement, ...]],
        providers: dict[str, str],
    ) -> None:
        attributes = {_local_name(k): v for k, v in root.attrib.items()}
        package_name = attributes.get("name")
        if _local_name(root.tag) != "package" or not package_name:
            logger.warning(f"Skipping {path.name}: root must be <package name=...>")
            return

        for element in root:
            tag = _local_name(element.tag)
            element_attributes = {_local_name(k): v for k, v in element.attrib.items()}

            if tag == "provider":
                authority = element_attributes.get("authority")
                if authority:
                    providers.setdefault(authority, package_name)

            elif tag == "activity":
                class_name = element_attributes.get("name")
                if not class_name:
                    logger.warning(f"Skipping unnamed activity in {path.name}")
                    continue
                if class_name.startswith("."):
                    class_name = package_name + class_name

                stream = tuple(
                    MetadataElement(
                        _local_name(child.tag),
                        {_local_name(k): v for k, v in child.attrib.items()},
                    )
                    for child in element.iter()
                    if child is not element
                )
                if any(item.tag == SEARCHABLE_TAG for item in stream):
                    components[ComponentName(package_name, class_name)] = stream

    # -------------------------------------------------------------------------
    # PackageInspectorProtocol
    # -------------------------------------------------------------------------

    def list_searchable_components(self) -> Sequence[ComponentName]:
        self.refresh()
        return list(self._scan.components)

    def get_raw_metadata(
        self, component: ComponentName
    ) -> Sequence[MetadataElement] | None:
        metadata = self._scan.components.get(component)
        if metadata is None:
            raise MetadataUnavailableError(component, "no manifest declares it")
        return metadata

    def resolve_provider_owner(self, authority: str) -> str | None:
        return self._scan.providers.get(authority)
