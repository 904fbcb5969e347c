import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from recipebox import models
from recipebox.crud import RecipeStore
from recipebox.images import ImageStore
from recipebox.normalize import normalize_recipe
from recipebox.schemas import Recipe


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    models.Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sql_store(db, tmp_path):
    return RecipeStore(db, ImageStore(str(tmp_path / "images")))


def imported(name, url="https://example.com/r"):
    node = {
        "@type": "Recipe",
        "name": name,
        "recipeIngredient": ["1 cup rice"],
        "recipeInstructions": ["Cook."],
        "keywords": "easy",
        "nutrition": {"calories": "200"},
    }
    return normalize_recipe(node, url)


def test_save_and_get_roundtrip_nested_fields(sql_store):
    recipe = imported("Rice Bowl")
    sql_store.save(recipe)

    loaded = sql_store.get(recipe.id)
    assert loaded == recipe
    assert loaded.recipe_ingredient[0].display == "1 cup rice"
    assert loaded.nutrition.calories == "200"
    assert sql_store.get_by_slug("rice-bowl").id == recipe.id


def test_lookups_by_source_url_and_name(sql_store):
    recipe = sql_store.save(imported("Fried Rice", url="https://example.com/fried-rice"))
    assert sql_store.find_by_source_url("https://example.com/fried-rice").id == recipe.id
    assert sql_store.find_by_source_url("https://example.com/other") is None
    assert sql_store.find_by_source_url(None) is None
    assert sql_store.find_by_name("Fried Rice").id == recipe.id
    assert sql_store.find_by_name("fried rice") is None


def test_save_fills_missing_identity(sql_store):
    saved = sql_store.save(Recipe(name="Hand Typed"))
    assert saved.id
    assert saved.slug == "hand-typed"
    assert saved.date_added
    assert saved.updated_at


def test_save_with_same_id_replaces(sql_store):
    recipe = sql_store.save(imported("Stew"))
    sql_store.save(recipe.model_copy(update={"description": "hearty"}))
    assert sql_store.count() == 1
    assert sql_store.get(recipe.id).description == "hearty"


def test_list_search_and_count(sql_store):
    for name in ("Cherry Tart", "Apple Pie", "Banana Bread"):
        sql_store.save(imported(name))

    assert [r.name for r in sql_store.list_recipes()] == ["Apple Pie", "Banana Bread", "Cherry Tart"]
    assert [r.name for r in sql_store.list_recipes(skip=1, limit=1)] == ["Banana Bread"]
    assert sql_store.count() == 3
    assert sql_store.count("an") == 1
    assert [r.name for r in sql_store.list_recipes(q="banana")] == ["Banana Bread"]


def test_delete_removes_the_image(sql_store):
    recipe = sql_store.save(imported("Curry"))
    path = sql_store.save_image(b"img", recipe.id)
    assert path is not None

    assert sql_store.delete(recipe.id) is True
    assert sql_store.get(recipe.id) is None
    assert not sql_store.images.path_for(recipe.id).exists()
    assert sql_store.delete(recipe.id) is False


def test_image_move_replaces_target(tmp_path):
    images = ImageStore(str(tmp_path))
    images.save(b"old", "a")
    images.save(b"new", "b")
    assert images.move("b", "a") == str(tmp_path / "a.jpg")
    assert (tmp_path / "a.jpg").read_bytes() == b"new"
    assert images.image_path("b") is None

    assert images.move("missing", "a") is None
    assert images.image_path("a") is None


def test_favorites_by_slug(sql_store):
    sql_store.save(imported("Pho"))
    assert sql_store.list_favorites() == []

    assert sql_store.add_favorite("pho") is True
    assert sql_store.add_favorite("pho") is False
    assert sql_store.add_favorite("banh-mi") is True
    assert sql_store.list_favorites() == ["banh-mi", "pho"]
    assert sql_store.is_favorite("pho")

    assert sql_store.remove_favorite("pho") is True
    assert sql_store.remove_favorite("pho") is False
    assert sql_store.list_favorites() == ["banh-mi"]
    assert not sql_store.is_favorite("pho")
