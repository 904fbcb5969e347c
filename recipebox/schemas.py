import uuid
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


def new_id() -> str:
    return str(uuid.uuid4())


class RecipeCategory(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None


class RecipeTag(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None


class RecipeTool(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    on_hand: Optional[bool] = None


class IngredientUnit(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    abbreviation: Optional[str] = None
    description: Optional[str] = None


class IngredientFood(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    label_id: Optional[str] = None


class RecipeIngredient(BaseModel):
    id: Optional[str] = None
    quantity: Optional[float] = None
    unit: Optional[IngredientUnit] = None
    food: Optional[IngredientFood] = None
    note: Optional[str] = None
    is_food: Optional[bool] = None
    disable_amount: Optional[bool] = None
    display: Optional[str] = None
    title: Optional[str] = None
    original_text: Optional[str] = None
    reference_id: Optional[str] = None

    @classmethod
    def from_text(cls, text: str) -> "RecipeIngredient":
        """Build an unparsed ingredient that keeps the source line verbatim.

        Quantity, unit and food stay empty; note, display and original_text
        all carry ``text``.
        """
        return cls(
            note=text,
            is_food=False,
            disable_amount=True,
            display=text,
            original_text=text,
            reference_id=new_id(),
        )

    @property
    def display_text(self) -> str:
        if self.display:
            return self.display
        parts = []
        if self.quantity is not None and self.quantity > 0:
            q = self.quantity
            parts.append(str(int(q)) if q == int(q) else str(q))
        if self.unit is not None and self.unit.name:
            parts.append(self.unit.name)
        if self.food is not None and self.food.name:
            parts.append(self.food.name)
        if self.note:
            parts.append(self.note)
        return " ".join(parts)


class RecipeInstruction(BaseModel):
    id: Optional[str] = None
    title: Optional[str] = None
    text: Optional[str] = None
    ingredient_references: Optional[List[str]] = None


class Nutrition(BaseModel):
    calories: Optional[str] = None
    fat_content: Optional[str] = None
    protein_content: Optional[str] = None
    carbohydrate_content: Optional[str] = None
    fiber_content: Optional[str] = None
    sodium_content: Optional[str] = None
    sugar_content: Optional[str] = None


class RecipeSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_public: Optional[bool] = Field(default=None, alias="public")
    show_nutrition: Optional[bool] = None
    show_assets: Optional[bool] = None
    landscape_view: Optional[bool] = None
    disable_comments: Optional[bool] = None
    disable_amount: Optional[bool] = None


class RecipeBase(BaseModel):
    name: str = Field(
        ..., json_schema_extra={"example": "Simple Pancakes"}
    )
    description: Optional[str] = None
    image: Optional[str] = None
    recipe_category: Optional[List[RecipeCategory]] = None
    tags: Optional[List[RecipeTag]] = None
    tools: Optional[List[RecipeTool]] = None
    rating: Optional[int] = None
    recipe_yield: Optional[str] = Field(
        default=None, json_schema_extra={"example": "4 servings"}
    )
    recipe_ingredient: Optional[List[RecipeIngredient]] = None
    recipe_instructions: Optional[List[RecipeInstruction]] = None
    total_time: Optional[str] = Field(
        default=None, json_schema_extra={"example": "PT45M"}
    )
    prep_time: Optional[str] = None
    perform_time: Optional[str] = None
    nutrition: Optional[Nutrition] = None
    settings: Optional[RecipeSettings] = None
    org_url: Optional[str] = None
    extras: Optional[Dict[str, str]] = None


class Recipe(RecipeBase):
    id: Optional[str] = None
    slug: Optional[str] = None
    date_added: Optional[str] = None
    date_updated: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class RecipeSummary(BaseModel):
    id: Optional[str] = None
    slug: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    recipe_category: Optional[List[RecipeCategory]] = None
    tags: Optional[List[RecipeTag]] = None
    rating: Optional[int] = None
    date_added: Optional[str] = None
    date_updated: Optional[str] = None

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> "RecipeSummary":
        return cls(**recipe.model_dump(include=set(cls.model_fields)))


class RecipePage(BaseModel):
    items: List[RecipeSummary]
    total: int
    page: int
    page_size: int


class ImportRequest(BaseModel):
    url: str = Field(
        ..., json_schema_extra={"example": "https://cookieandkate.com/beet-salad"}
    )


class DecisionRequest(BaseModel):
    action: Literal["update", "new", "cancel"] = Field(
        ..., json_schema_extra={"example": "update"}
    )
