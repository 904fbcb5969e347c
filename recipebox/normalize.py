# No quantity/unit parsing: ingredient lines are kept verbatim

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from . import schemas
from .entities import decode_entities
from .schemas import new_id

DEFAULT_NAME = "Untitled"
SLUG_FALLBACK = "recipe"

# schema.org NutritionInformation key -> canonical field
NUTRITION_FIELDS = {
    "calories": "calories",
    "fatContent": "fat_content",
    "proteinContent": "protein_content",
    "carbohydrateContent": "carbohydrate_content",
    "fiberContent": "fiber_content",
    "sodiumContent": "sodium_content",
    "sugarContent": "sugar_content",
}


def generate_slug(name: str) -> str:
    slug = name.lower().replace(" ", "-")
    slug = "".join(ch for ch in slug if ch.isalnum() or ch == "-")
    return slug or SLUG_FALLBACK


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _string_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def extract_image_url(value: Any) -> Optional[str]:
    """Accept a URL string, an ImageObject with "url", or a list of either.

    For lists only the first element is considered.
    """
    if isinstance(value, list):
        if not value:
            return None
        value = value[0]
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return _string_or_none(value.get("url"))
    return None


def extract_ingredients(value: Any) -> Optional[List[schemas.RecipeIngredient]]:
    if not isinstance(value, list):
        return None
    return [
        schemas.RecipeIngredient.from_text(decode_entities(text))
        for text in value
        if isinstance(text, str)
    ]


def _instruction(text: str, title: Optional[str] = None) -> schemas.RecipeInstruction:
    return schemas.RecipeInstruction(id=new_id(), title=title, text=decode_entities(text))


def _section_instruction(name: str, items: List[Any]) -> Optional[schemas.RecipeInstruction]:
    # A HowToSection collapses to its first step, titled with the section name.
    for item in items:
        if isinstance(item, dict) and isinstance(item.get("text"), str):
            return _instruction(item["text"], title=decode_entities(name))
    return None


def extract_instructions(value: Any) -> Optional[List[schemas.RecipeInstruction]]:
    if not isinstance(value, list):
        return None
    instructions = []
    for step in value:
        if isinstance(step, str):
            instructions.append(_instruction(step))
        elif isinstance(step, dict):
            name = step.get("name")
            items = step.get("itemListElement")
            if isinstance(name, str) and isinstance(items, list):
                section = _section_instruction(name, items)
                if section is not None:
                    instructions.append(section)
            elif isinstance(step.get("text"), str):
                instructions.append(_instruction(step["text"]))
    return instructions


def extract_yield(value: Any) -> Optional[str]:
    if isinstance(value, list):
        if not value:
            return None
        value = value[0]
    # bool is an int subclass but never a yield
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return None


def extract_names(value: Any) -> Optional[List[str]]:
    """Names from a list of strings or one comma-separated string.

    Names are trimmed; blanks and repeats are dropped, first occurrence wins.
    """
    if isinstance(value, str):
        raw = value.split(",")
    elif isinstance(value, list):
        raw = [v for v in value if isinstance(v, str)]
    else:
        return None
    names: List[str] = []
    for name in raw:
        name = decode_entities(name.strip())
        if name and name not in names:
            names.append(name)
    return names or None


def extract_categories(value: Any) -> Optional[List[schemas.RecipeCategory]]:
    names = extract_names(value)
    if names is None:
        return None
    return [schemas.RecipeCategory(id=new_id(), name=n, slug=generate_slug(n)) for n in names]


def extract_tags(value: Any) -> Optional[List[schemas.RecipeTag]]:
    names = extract_names(value)
    if names is None:
        return None
    return [schemas.RecipeTag(id=new_id(), name=n, slug=generate_slug(n)) for n in names]


def extract_nutrition(value: Any) -> Optional[schemas.Nutrition]:
    if not isinstance(value, dict):
        return None
    fields = {
        target: value[source]
        for source, target in NUTRITION_FIELDS.items()
        if isinstance(value.get(source), str)
    }
    return schemas.Nutrition(**fields)


def normalize_recipe(
    node: Dict[str, Any],
    source_url: str,
    *,
    recipe_id: Optional[str] = None,
    image_path: Optional[str] = None,
    now: Optional[str] = None,
) -> schemas.Recipe:
    """Map a schema.org Recipe node to the canonical recipe record.

    Identity, slug and the four timestamps are generated here and never
    copied from the page. Fields that are missing or have an unrecognised
    shape become None.
    """
    name = _string_or_none(node.get("name"))
    name = decode_entities(name) if name is not None else DEFAULT_NAME
    description = _string_or_none(node.get("description"))
    if description is not None:
        description = decode_entities(description)
    now = now or utc_now_iso()

    return schemas.Recipe(
        id=recipe_id or new_id(),
        slug=generate_slug(name),
        name=name,
        description=description,
        image=image_path,
        recipe_category=extract_categories(node.get("recipeCategory")),
        tags=extract_tags(node.get("keywords")),
        recipe_yield=extract_yield(node.get("recipeYield")),
        recipe_ingredient=extract_ingredients(node.get("recipeIngredient")),
        recipe_instructions=extract_instructions(node.get("recipeInstructions")),
        prep_time=_string_or_none(node.get("prepTime")),
        perform_time=_string_or_none(node.get("cookTime")),
        total_time=_string_or_none(node.get("totalTime")),
        nutrition=extract_nutrition(node.get("nutrition")),
        org_url=source_url,
        date_added=now,
        date_updated=now,
        created_at=now,
        updated_at=now,
    )
