# talenthub/services/transfer.py

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from talenthub.schemas.assessment import utcnow
from talenthub.services.store import LocalStore

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = "1.0"


def export_snapshot(store: LocalStore, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Every collection as camelCase JSON-ready documents.

    Returns:
        {"version": "1.0", "timestamp": ISO-8601, "data": {collection: [...]}}
    """
    data = {
        name: [item.to_document() for item in collection.list_all()]
        for name, collection in store.collections().items()
    }
    snapshot = {
        "version": SNAPSHOT_VERSION,
        "timestamp": (now or utcnow()).isoformat(),
        "data": data,
    }
    logger.info(
        "Exported snapshot: " + ", ".join(f"{len(items)} {name}" for name, items in data.items())
    )
    return snapshot


def import_snapshot(store: LocalStore, snapshot: Dict[str, Any]) -> Dict[str, int]:
    """
    Replace the whole store with the snapshot's collections.

    Nothing is checked up front: a snapshot missing a collection or holding
    an item that does not parse raises, and the store is left as it was.
    """
    version = snapshot.get("version")
    if version != SNAPSHOT_VERSION:
        logger.warning(f"Importing snapshot version {version!r}, expected {SNAPSHOT_VERSION}")

    counts = store.replace_all(snapshot["data"])
    logger.info(f"Imported snapshot: {counts}")
    return counts


def dump_snapshot(snapshot: Dict[str, Any], path: Union[str, Path]) -> Path:
    path = Path(path)
    path.write_text(json.dumps(snapshot, indent=2), encoding="utf-8")
    logger.info(f"Snapshot written to {path}")
    return path


def load_snapshot(path: Union[str, Path]) -> Dict[str, Any]:
    return json.loads(Path(path).read_text(encoding="utf-8"))
