import argparse
import asyncio
import sys

from .crud import RecipeStore
from .db import SessionLocal, init_db
from .duplicates import PendingDecision
from .errors import RecipeParseError
from .importer import RecipeImporter

PROMPT = "[u]pdate existing / save as [n]ew / [c]ancel? "


def describe_match(decision: PendingDecision) -> str:
    how = "from the same URL" if decision.matched_by_url else "with the same name"
    return f"A recipe {how} already exists: {decision.existing.name} ({decision.existing.id})"


def ask(read=input) -> str:
    while True:
        answer = read(PROMPT).strip().lower()[:1]
        if answer in ("u", "n", "c"):
            return answer


def resolve(decision: PendingDecision, answer: str):
    if answer == "u":
        return decision.confirm_update()
    if answer == "n":
        return decision.confirm_new()
    decision.cancel()
    return None


async def run_import(importer: RecipeImporter, url: str, read=input):
    outcome = await importer.import_from_url(url)
    if not isinstance(outcome, PendingDecision):
        return outcome.recipe
    print(describe_match(outcome))
    return resolve(outcome, ask(read))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Import a recipe from a web page.")
    parser.add_argument("url", help="recipe page URL")
    args = parser.parse_args(argv)

    init_db()
    db = SessionLocal()
    try:
        importer = RecipeImporter(RecipeStore(db))
        recipe = asyncio.run(run_import(importer, args.url))
    except RecipeParseError as exc:
        print(exc.user_message, file=sys.stderr)
        return 1
    finally:
        db.close()

    if recipe is None:
        print("Import cancelled.")
    else:
        print(f"Imported {recipe.name} ({recipe.slug})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
