import json
from typing import List, Optional

from sqlalchemy.orm import Session

from . import models, schemas
from .images import ImageStore
from .normalize import generate_slug, utc_now_iso

PLAIN_FIELDS = (
    "id", "slug", "name", "description", "image", "rating", "recipe_yield",
    "prep_time", "perform_time", "total_time", "org_url",
    "date_added", "date_updated", "created_at", "updated_at",
)
JSON_FIELDS = (
    "recipe_category", "tags", "tools", "recipe_ingredient",
    "recipe_instructions", "nutrition", "settings", "extras",
)


def to_schema(db_recipe: models.Recipe) -> schemas.Recipe:
    data = {f: getattr(db_recipe, f) for f in PLAIN_FIELDS}
    for f in JSON_FIELDS:
        raw = getattr(db_recipe, f)
        data[f] = json.loads(raw) if raw else None
    return schemas.Recipe.model_validate(data)


def _apply(db_recipe: models.Recipe, recipe: schemas.Recipe) -> None:
    dumped = recipe.model_dump()
    for f in PLAIN_FIELDS:
        setattr(db_recipe, f, dumped[f])
    for f in JSON_FIELDS:
        value = dumped[f]
        setattr(db_recipe, f, json.dumps(value) if value is not None else None)


def get_recipe(db: Session, recipe_id: str):
    return db.query(models.Recipe).filter(models.Recipe.id == recipe_id).first()


def get_recipe_by_name(db: Session, name: str):
    return db.query(models.Recipe).filter(models.Recipe.name == name).first()


def get_recipe_by_slug(db: Session, slug: str):
    return db.query(models.Recipe).filter(models.Recipe.slug == slug).first()


def get_recipe_by_source_url(db: Session, url: str):
    return db.query(models.Recipe).filter(models.Recipe.org_url == url).first()


def _search(db: Session, q: Optional[str] = None):
    query = db.query(models.Recipe)
    if q:
        query = query.filter(models.Recipe.name.ilike(f"%{q}%"))
    return query


def get_recipes(db: Session, skip: int = 0, limit: int = 100, q: Optional[str] = None):
    return _search(db, q).order_by(models.Recipe.name).offset(skip).limit(limit).all()


def count_recipes(db: Session, q: Optional[str] = None) -> int:
    return _search(db, q).count()


def save_recipe(db: Session, recipe: schemas.Recipe):
    """Insert or replace the row with the recipe's id."""
    if recipe.id is None or recipe.slug is None or recipe.date_added is None:
        now = utc_now_iso()
        recipe = recipe.model_copy(update={
            "id": recipe.id or schemas.new_id(),
            "slug": recipe.slug or generate_slug(recipe.name),
            "date_added": recipe.date_added or now,
            "date_updated": recipe.date_updated or now,
            "created_at": recipe.created_at or now,
            "updated_at": recipe.updated_at or now,
        })
    db_recipe = get_recipe(db, recipe.id)
    if db_recipe is None:
        db_recipe = models.Recipe()
    _apply(db_recipe, recipe)
    db.add(db_recipe)
    db.commit()
    db.refresh(db_recipe)
    return db_recipe


def delete_recipe(db: Session, recipe_id: str, images: Optional[ImageStore] = None):
    db_recipe = get_recipe(db, recipe_id)
    if not db_recipe:
        return False
    db.delete(db_recipe)
    db.commit()
    if images is not None:
        images.delete(recipe_id)
    return True


def list_favorites(db: Session) -> List[str]:
    return [f.slug for f in db.query(models.Favorite).order_by(models.Favorite.slug).all()]


def add_favorite(db: Session, slug: str) -> bool:
    """Mark a slug as favorite. Returns False when it already was."""
    if db.get(models.Favorite, slug) is not None:
        return False
    db.add(models.Favorite(slug=slug, created_at=utc_now_iso()))
    db.commit()
    return True


def remove_favorite(db: Session, slug: str) -> bool:
    favorite = db.get(models.Favorite, slug)
    if favorite is None:
        return False
    db.delete(favorite)
    db.commit()
    return True


class RecipeStore:
    """Recipe store backed by a SQLAlchemy session; also owns the images."""

    def __init__(self, db: Session, images: Optional[ImageStore] = None):
        self.db = db
        self.images = images or ImageStore()

    def _one(self, db_recipe) -> Optional[schemas.Recipe]:
        return to_schema(db_recipe) if db_recipe is not None else None

    def get(self, recipe_id: str) -> Optional[schemas.Recipe]:
        return self._one(get_recipe(self.db, recipe_id))

    def get_by_slug(self, slug: str) -> Optional[schemas.Recipe]:
        return self._one(get_recipe_by_slug(self.db, slug))

    def find_by_source_url(self, url: Optional[str]) -> Optional[schemas.Recipe]:
        if not url:
            return None
        return self._one(get_recipe_by_source_url(self.db, url))

    def find_by_name(self, name: str) -> Optional[schemas.Recipe]:
        return self._one(get_recipe_by_name(self.db, name))

    def list_recipes(
        self, skip: int = 0, limit: int = 100, q: Optional[str] = None
    ) -> List[schemas.Recipe]:
        return [to_schema(r) for r in get_recipes(self.db, skip=skip, limit=limit, q=q)]

    def count(self, q: Optional[str] = None) -> int:
        return count_recipes(self.db, q)

    def save(self, recipe: schemas.Recipe) -> schemas.Recipe:
        return to_schema(save_recipe(self.db, recipe))

    def delete(self, recipe_id: str) -> bool:
        return delete_recipe(self.db, recipe_id, self.images)

    def save_image(self, data: bytes, recipe_id: str) -> Optional[str]:
        return self.images.save(data, recipe_id)

    def move_image(self, from_id: str, to_id: str) -> Optional[str]:
        return self.images.move(from_id, to_id)

    def delete_image(self, recipe_id: str) -> None:
        self.images.delete(recipe_id)

    def list_favorites(self) -> List[str]:
        return list_favorites(self.db)

    def add_favorite(self, slug: str) -> bool:
        return add_favorite(self.db, slug)

    def remove_favorite(self, slug: str) -> bool:
        return remove_favorite(self.db, slug)

    def is_favorite(self, slug: str) -> bool:
        return self.db.get(models.Favorite, slug) is not None
