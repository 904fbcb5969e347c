import asyncio
from pathlib import Path

from recipebox.crud import RecipeStore
from recipebox.db import init_db, SessionLocal
from recipebox.duplicates import PendingDecision
from recipebox.errors import RecipeParseError
from recipebox.importer import RecipeImporter
from recipebox.logging_utils import get_logger
from recipebox.recipes import load_import_list

logger = get_logger("import_data")


async def import_all(importer, urls):
    added = skipped = failed = 0
    for url in urls:
        try:
            outcome = await importer.import_from_url(url)
        except RecipeParseError as exc:
            logger.warning("%s: %s", url, exc.user_message)
            failed += 1
            continue
        if isinstance(outcome, PendingDecision):
            # batch runs never overwrite; already-known recipes are skipped
            outcome.cancel()
            skipped += 1
            continue
        added += 1
    return added, skipped, failed


def main():
    init_db()
    p = Path(__file__).resolve().parents[1] / 'data' / 'import_urls.json'
    if not p.exists():
        print('data/import_urls.json not found')
        return
    urls = load_import_list(p)
    db = SessionLocal()
    try:
        added, skipped, failed = asyncio.run(import_all(RecipeImporter(RecipeStore(db)), urls))
    finally:
        db.close()
    print(f'Imported {added} recipes ({skipped} duplicates skipped, {failed} failed)')


if __name__ == '__main__':
    main()
