"""Load the risk registry workbook (saved as CSV) into ``risk_registry``.

    python -m dataset.import_risk_registry 風險登錄表.csv
"""
import argparse
import logging
import sys

from config.settings import IMPORT_BATCH_SIZE
from db import SessionLocal, init_db
from services.registry_csv import read_registry_csv, rows_from_frame, import_registry_rows

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Import the risk registry CSV")
    parser.add_argument("path", help="CSV exported from the registry workbook")
    parser.add_argument("--batch-size", type=int, default=IMPORT_BATCH_SIZE)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    init_db()

    rows = rows_from_frame(read_registry_csv(args.path))
    logger.info("Read %s registry rows from %s", len(rows), args.path)

    db = SessionLocal()
    try:
        imported = import_registry_rows(db, rows, args.batch_size)
    except Exception:
        logger.exception("Import stopped")
        sys.exit(1)
    finally:
        db.close()

    logger.info("Imported %s risk registry entries", imported)


if __name__ == "__main__":
    main()
