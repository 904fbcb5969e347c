# flake8: noqa

from contextlib import asynccontextmanager
from typing import Dict, List

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from . import schemas
from .crud import RecipeStore
from .db import SessionLocal, init_db
from .duplicates import PendingDecision, Persisted, merge_for_update
from .errors import FetchFailed, InvalidURL, RecipeParseError
from .images import ImageStore
from .importer import RecipeImporter
from .logging_utils import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize DB once at startup
    init_db()
    yield


app = FastAPI(lifespan=lifespan)

# Duplicate decisions waiting on the caller, keyed by candidate id. Entries
# leave only when answered; unanswered ones stay until the process exits.
app.state.pending = {}

# Allow CORS for API clients (adjust origins for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_images() -> ImageStore:
    return ImageStore()


def get_store(
    db: Session = Depends(get_db), images: ImageStore = Depends(get_images)
) -> RecipeStore:
    return RecipeStore(db, images)


def get_importer(store: RecipeStore = Depends(get_store)) -> RecipeImporter:
    return RecipeImporter(store)


def pending_decisions() -> Dict[str, PendingDecision]:
    return app.state.pending


def _error_status(exc: RecipeParseError) -> int:
    if isinstance(exc, InvalidURL):
        return 400
    if isinstance(exc, FetchFailed):
        return 502
    return 422


@app.exception_handler(RecipeParseError)
async def recipe_parse_error_handler(request: Request, exc: RecipeParseError):
    logger.info("Import failed: %s (%s)", exc.user_message, exc)
    return JSONResponse(status_code=_error_status(exc), content={"detail": exc.user_message})


def _page_link(request: Request, page: int, page_size: int) -> str:
    return str(request.url.include_query_params(page=page, page_size=page_size))


@app.get('/api/recipes', response_model=schemas.RecipePage)
def list_recipes(
    request: Request,
    response: Response,
    q: str | None = None,
    page: int = 1,
    page_size: int = 20,
    store: RecipeStore = Depends(get_store),
):
    if page < 1 or page_size < 1:
        raise HTTPException(status_code=400, detail='page and page_size must be positive')
    total = store.count(q)
    recipes = store.list_recipes(skip=(page - 1) * page_size, limit=page_size, q=q)

    # RFC 5988 Link header for prev/next pages
    links = []
    if page > 1:
        links.append(f'<{_page_link(request, page - 1, page_size)}>; rel="prev"')
    if page * page_size < total:
        links.append(f'<{_page_link(request, page + 1, page_size)}>; rel="next"')
    if links:
        response.headers["Link"] = ", ".join(links)

    return schemas.RecipePage(
        items=[schemas.RecipeSummary.from_recipe(r) for r in recipes],
        total=total,
        page=page,
        page_size=page_size,
    )


@app.get('/api/recipes/slug/{slug}', response_model=schemas.Recipe)
def get_recipe_by_slug(slug: str, store: RecipeStore = Depends(get_store)):
    recipe = store.get_by_slug(slug)
    if recipe is None:
        raise HTTPException(status_code=404, detail='Recipe not found')
    return recipe


@app.get('/api/recipes/{recipe_id}', response_model=schemas.Recipe)
def get_recipe(recipe_id: str, store: RecipeStore = Depends(get_store)):
    recipe = store.get(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail='Recipe not found')
    return recipe


@app.post('/api/recipes', response_model=schemas.Recipe)
def create_recipe(recipe: schemas.Recipe, store: RecipeStore = Depends(get_store)):
    # records posted here are already canonical; only missing identity is filled
    return store.save(recipe)


@app.put('/api/recipes/{recipe_id}', response_model=schemas.Recipe)
def update_recipe(recipe_id: str, recipe: schemas.Recipe, store: RecipeStore = Depends(get_store)):
    existing = store.get(recipe_id)
    if existing is None:
        raise HTTPException(status_code=404, detail='Recipe not found')
    merged = merge_for_update(existing, recipe)
    merged = merged.model_copy(update={
        "slug": recipe.slug or existing.slug,
        "image": recipe.image or existing.image,
    })
    return store.save(merged)


@app.delete('/api/recipes/{recipe_id}')
def delete_recipe(recipe_id: str, store: RecipeStore = Depends(get_store)):
    if not store.delete(recipe_id):
        raise HTTPException(status_code=404, detail='Recipe not found')
    return {"deleted": True}


@app.post('/api/import', status_code=201)
async def import_recipe(
    payload: schemas.ImportRequest,
    response: Response,
    importer: RecipeImporter = Depends(get_importer),
    pending: Dict[str, PendingDecision] = Depends(pending_decisions),
):
    outcome = await importer.import_from_url(payload.url)
    if isinstance(outcome, Persisted):
        return {"status": "imported", "recipe": outcome.recipe.model_dump()}

    decision_id = outcome.candidate.id
    pending[decision_id] = outcome
    response.status_code = 409
    return {
        "status": "duplicate",
        "decision_id": decision_id,
        "matched_by_url": outcome.matched_by_url,
        "existing": outcome.existing.model_dump(),
        "candidate": outcome.candidate.model_dump(),
    }


@app.post('/api/import/{decision_id}')
def resolve_import(
    decision_id: str,
    payload: schemas.DecisionRequest,
    store: RecipeStore = Depends(get_store),
    pending: Dict[str, PendingDecision] = Depends(pending_decisions),
):
    decision = pending.pop(decision_id, None)
    if decision is None:
        raise HTTPException(status_code=404, detail='No pending import with that id')
    decision = decision.rebind(store)

    if payload.action == "cancel":
        decision.cancel()
        return {"cancelled": True}
    if payload.action == "update":
        recipe = decision.confirm_update()
    else:
        recipe = decision.confirm_new()
    return {"status": "imported", "recipe": recipe.model_dump()}


@app.get('/api/favorites', response_model=List[str])
def list_favorites(store: RecipeStore = Depends(get_store)):
    return store.list_favorites()


@app.put('/api/favorites/{slug}')
def add_favorite(slug: str, store: RecipeStore = Depends(get_store)):
    if store.get_by_slug(slug) is None:
        raise HTTPException(status_code=404, detail='Recipe not found')
    store.add_favorite(slug)
    return {"slug": slug, "favorite": True}


@app.delete('/api/favorites/{slug}')
def remove_favorite(slug: str, store: RecipeStore = Depends(get_store)):
    if not store.remove_favorite(slug):
        raise HTTPException(status_code=404, detail='Not a favorite')
    return {"slug": slug, "favorite": False}
