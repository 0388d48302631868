import json
import logging
from pathlib import Path
from typing import List, Optional

from haproxy_sections.errors import SnapshotError
from haproxy_sections.storage.document import ConfigDocument

logger = logging.getLogger(__name__)


# ==============================================
# SnapshotStore
# ==============================================
#
# PURPOSE:
#   Save parsed config documents to disk as JSON so a later parse
#   can be compared against an earlier one without keeping the
#   original config file around.
#
# WHAT IS PERSISTED:
#   One <name>.json per snapshot, in ConfigDocument.to_dict() form:
#     {"global": [...], "defaults": [...],
#      "frontends": {name: [...]}, "backends": {name: [...]},
#      "warnings": [...]}
#
# CLASS: SnapshotStore
# --------------------
#   Stateful: holds a reference to the storage directory.
#
#   Constructor:
#   ------------
#   - __init__(storage_dir: str = "snapshots/")
#       Create storage directory if it doesn't exist.
#
class SnapshotStore:
    """
    Handles persistence of parsed documents to disk.

    Files created:
    - snapshots/<name>.json  → one parsed document
    """

    SUFFIX = ".json"

    def __init__(self, storage_dir: str = "snapshots/"):
        """
        Initialize the snapshot store.

        Args:
            storage_dir: Directory to store snapshot files
        """
        self.storage_dir = Path(storage_dir)

        # Create directory if it doesn't exist
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        if not name or "/" in name or "\\" in name or name.startswith("."):
            raise ValueError(f"Invalid snapshot name '{name}'")
        return self.storage_dir / f"{name}{self.SUFFIX}"

#   Methods:
#   --------
#   - save(name, document) -> Path
#       Serialize document to <name>.json.
#
#   - load(name) -> ConfigDocument | None
#       None when no such snapshot exists.
#
#   - list_snapshots() -> list[str]
#   - delete(name) -> bool
#
    def save(self, name: str, document: ConfigDocument) -> Path:
        """
        Save a parsed document to disk.

        Args:
            name: Snapshot name (file stem)
            document: The document to store

        Returns:
            Path of the written file
        """
        path = self.path_for(name)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(document.to_dict(), f, indent=2)

        logger.info("Saved snapshot '%s' to %s", name, path)
        return path

    def load(self, name: str) -> Optional[ConfigDocument]:
        """
        Load a previously saved document.

        Returns:
            The ConfigDocument, or None if the snapshot does not exist

        Raises:
            SnapshotError: if the file is not a valid snapshot
        """
        path = self.path_for(name)
        if not path.exists():
            logger.info("No snapshot found at %s", path)
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Could not load snapshot {path}: {e}") from e

        if not isinstance(data, dict):
            raise SnapshotError(f"Snapshot {path} does not contain a JSON object")

        return ConfigDocument.from_dict(data)

    def list_snapshots(self) -> List[str]:
        """Names of all stored snapshots, sorted."""
        return sorted(p.stem for p in self.storage_dir.glob(f"*{self.SUFFIX}"))

    def delete(self, name: str) -> bool:
        """
        Delete a snapshot.

        Returns:
            True if a file was removed, False if it did not exist
        """
        path = self.path_for(name)
        if not path.exists():
            return False
        path.unlink()
        logger.info("Deleted snapshot %s", path)
        return True
