import argparse
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict

CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.dirname(CURRENT_DIR)
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from app.core.config import settings  # noqa: E402
from app.db.mongo import MongoTherapistStore  # noqa: E402
from app.services.csv_import import read_csv  # noqa: E402
from app.telemetry.logging import setup_logging  # noqa: E402


async def import_file(path: Path, uri: str, dbname: str, collection: str) -> Dict[str, Any]:
    """Reemplaza el contenido de la colección con las filas del CSV."""
    docs, skipped = read_csv(path)

    store = MongoTherapistStore.connect(uri, dbname, collection, timeout_ms=settings.MONGO_TIMEOUT_MS)
    try:
        inserted = await store.replace_all(docs)
        await store.ensure_indexes()
        return {
            "inserted": inserted,
            "skipped": skipped,
            "sample": [d["name"] for d in docs[:5]],
            "total_in_collection": await store.count(),
        }
    finally:
        await store.close()


async def main() -> None:
    p = argparse.ArgumentParser(description="Import therapists from a CSV file into MongoDB (replaces existing records).")
    p.add_argument("--file", default="data/therapists.csv", help="Path to the therapists CSV")
    p.add_argument("--uri", default=settings.MONGO_URI)
    p.add_argument("--db", default=settings.MONGO_DB)
    p.add_argument("--collection", default=settings.MONGO_COLLECTION)
    args = p.parse_args()

    setup_logging()
    path = Path(args.file)
    if not path.exists():
        print(f"CSV not found at: {path}", file=sys.stderr)
        sys.exit(1)

    stats = await import_file(path, args.uri, args.db, args.collection)
    print(json.dumps({"file": str(path), "db_stats": stats}, ensure_ascii=False, indent=2, default=str))


if __name__ == "__main__":
    asyncio.run(main())
