"""Terraform content extraction using python-hcl2.

Reads ``.tf`` files and extracts the names of declared blocks: variables and
outputs by label, resources and data sources as both ``type`` and
``type.name``.

Philosophy:
- Missing files contribute nothing, they are not errors
- Parse and read failures raise TerraformParseError naming the file
- Two scan strategies: a single module directory, or a caller workspace
  with nested modules scanned in parallel

Public API (the "studs"):
    ScanMode: Where resources are looked for
    TerraformContent: Extractor bound to one module path
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from pathlib import Path

import hcl2

from readme_validator.errors import TerraformParseError

logger = logging.getLogger(__name__)

TF_SUFFIX = ".tf"
DEFINITION_BLOCKS = ("resource", "data")


class ScanMode(str, Enum):
    """Layout of the Terraform code being validated."""

    MODULE = "module"  # *.tf directly in the module directory
    CALLER = "caller"  # caller/main.tf plus caller/modules/**


class TerraformContent:
    """Extract declared item names from Terraform files.

    Example:
        >>> terraform = TerraformContent(Path("modules/network"))
        >>> terraform.extract_items(terraform.resolve_item_file("variables.tf"), "variable")
        ['location', 'name']
    """

    def __init__(
        self,
        module_path: str | Path,
        scan_mode: ScanMode = ScanMode.MODULE,
        max_workers: int = 4,
    ):
        """Initialize extractor.

        Args:
            module_path: Module directory (MODULE) or workspace root (CALLER)
            scan_mode: Scan strategy for resources and data sources
            max_workers: Thread pool size for CALLER scans
        """
        self.module_path = Path(module_path)
        self.scan_mode = scan_mode
        self.max_workers = max_workers

    @property
    def caller_path(self) -> Path:
        return self.module_path / "caller"

    def resolve_item_file(self, file_name: str | Path) -> Path:
        """Resolve the file holding variable or output declarations.

        Absolute paths are returned unchanged. Relative names resolve against
        the module directory, or against ``<workspace>/caller`` in CALLER mode.
        """
        path = Path(file_name)
        if path.is_absolute():
            return path
        if self.scan_mode is ScanMode.CALLER:
            return self.caller_path / path
        return self.module_path / path

    def extract_items(self, file_path: str | Path, block_type: str) -> list[str]:
        """Collect the first label of every top-level block of block_type.

        Args:
            file_path: Terraform file to read
            block_type: Block kind, e.g. "variable" or "output"

        Returns:
            Labels in file order, empty if the file does not exist

        Raises:
            TerraformParseError: If the file cannot be read or parsed
        """
        parsed = self._load(Path(file_path))
        if parsed is None:
            return []

        items = []
        for block in parsed.get(block_type, []):
            for label in _block_labels(block):
                items.append(label)
        logger.debug("Found %d %s blocks in %s", len(items), block_type, file_path)
        return items

    def extract_resources_and_data_sources(self) -> tuple[list[str], list[str]]:
        """Collect resources and data sources according to the scan mode.

        Each block contributes its bare type and its ``type.name`` form.

        Returns:
            Tuple of (resources, data_sources)

        Raises:
            TerraformParseError: If any scanned file cannot be read or parsed
        """
        if self.scan_mode is ScanMode.CALLER:
            resources, data_sources = self._scan_caller()
        else:
            resources, data_sources = self._scan_files(self._module_files())

        logger.debug(
            "Extracted %d resources and %d data sources from %s",
            len(resources),
            len(data_sources),
            self.module_path,
        )
        return resources, data_sources

    def _module_files(self) -> list[Path]:
        if not self.module_path.is_dir():
            return []
        try:
            return sorted(
                entry
                for entry in self.module_path.iterdir()
                if entry.is_file() and entry.suffix == TF_SUFFIX
            )
        except OSError as e:
            raise TerraformParseError(
                f"error reading directory {self.module_path}: {e}"
            ) from e

    def _scan_caller(self) -> tuple[list[str], list[str]]:
        """Scan caller/main.tf and every subtree of caller/modules in parallel."""
        modules_dir = self.caller_path / "modules"
        subtrees: list[list[Path]] = [[self.caller_path / "main.tf"]]
        if modules_dir.is_dir():
            loose_files = sorted(p for p in modules_dir.glob(f"*{TF_SUFFIX}") if p.is_file())
            if loose_files:
                subtrees.append(loose_files)
            for child in sorted(modules_dir.iterdir()):
                if child.is_dir():
                    subtrees.append(sorted(p for p in child.rglob(f"*{TF_SUFFIX}") if p.is_file()))

        resources: list[str] = []
        data_sources: list[str] = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(self._scan_files, files) for files in subtrees]
            # Merge in submission order so results are deterministic
            for future in futures:
                subtree_resources, subtree_data_sources = future.result()
                resources.extend(subtree_resources)
                data_sources.extend(subtree_data_sources)
        return resources, data_sources

    def _scan_files(self, files: list[Path]) -> tuple[list[str], list[str]]:
        resources: list[str] = []
        data_sources: list[str] = []
        for file_path in files:
            parsed = self._load(file_path)
            if parsed is None:
                continue
            for block_kind in DEFINITION_BLOCKS:
                target = resources if block_kind == "resource" else data_sources
                for block in parsed.get(block_kind, []):
                    for resource_type, body in _labelled_items(block):
                        for name in _block_labels(body):
                            target.append(resource_type)
                            target.append(f"{resource_type}.{name}")
        return resources, data_sources

    def _load(self, file_path: Path) -> dict | None:
        """Parse one file, returning None when it does not exist."""
        try:
            with open(file_path, encoding="utf-8") as f:
                return hcl2.load(f)
        except FileNotFoundError:
            return None
        except OSError as e:
            raise TerraformParseError(f"error reading file {file_path.name}: {e}") from e
        except Exception as e:
            raise TerraformParseError(f"error parsing HCL in {file_path.name}: {e}") from e


def _clean_label(label: str) -> str:
    return label.strip().strip('"').strip()


def _labelled_items(block) -> list[tuple[str, object]]:
    """Return (label, body) pairs of a parsed block, skipping parser metadata keys."""
    if not isinstance(block, dict):
        return []
    return [
        (_clean_label(key), value)
        for key, value in block.items()
        if not key.startswith("__") and _clean_label(key)
    ]


def _block_labels(block) -> list[str]:
    return [label for label, _ in _labelled_items(block)]


__all__ = ["ScanMode", "TerraformContent"]
