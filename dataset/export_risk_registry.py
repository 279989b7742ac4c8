"""Write the registry to CSV, once with a BOM for Excel and once without.

    python -m dataset.export_risk_registry --out exports/
"""
import argparse
import logging
from pathlib import Path

from db import SessionLocal
from services.registry_csv import registry_csv
from services.risk_registry import get_all_risk_registry

logger = logging.getLogger(__name__)


def export_registry(db, out_dir: Path) -> list:
    entries = get_all_risk_registry(db)
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for name, bom in (("risk_registry_excel.csv", True), ("risk_registry.csv", False)):
        path = out_dir / name
        path.write_text(registry_csv(entries, bom=bom), encoding="utf-8")
        written.append(path)
        logger.info("Wrote %s entries to %s", len(entries), path)
    return written


def main():
    parser = argparse.ArgumentParser(description="Export the risk registry to CSV")
    parser.add_argument("--out", default=".", help="output directory")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    db = SessionLocal()
    try:
        export_registry(db, Path(args.out))
    finally:
        db.close()


if __name__ == "__main__":
    main()
