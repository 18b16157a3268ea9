"""Recipe data types shared by scaling, shopping lists and export."""

from dataclasses import dataclass, field
from typing import Optional, Self


def _list_field(d: dict, key: str) -> list:
    """A JSON list field, empty when absent. Raises ValueError for any other type."""
    value = d.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"\"{key}\" must be a list, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Ingredient:
    """A single recipe ingredient. The amount string is the source of truth."""
    item: str
    amount: str = ""
    unit: str = ""
    prep: Optional[str] = None
    optional: bool = False
    substitutes: tuple[str, ...] = ()

    @property
    def key(self) -> str:
        """Identity key: lowercased, whitespace-collapsed item name."""
        return " ".join(self.item.lower().split())

    def to_dict(self) -> dict:
        return {
            "item": self.item,
            "amount": self.amount,
            "unit": self.unit,
            "prep": self.prep,
            "optional": self.optional,
            "substitutes": list(self.substitutes),
        }

    @classmethod
    def from_dict(cls, d: dict) -> Self:
        """Build an Ingredient from a recipe JSON entry.

        Raises:
            ValueError: If the item name is missing or blank.
        """
        if not isinstance(d, dict):
            raise ValueError(f"Ingredient must be an object: {d!r}")
        item = str(d.get("item") or "").strip()
        if not item:
            raise ValueError(f"Ingredient has no item name: {d!r}")
        amount = d.get("amount")
        return cls(
            item=item,
            amount="" if amount is None else str(amount).strip(),
            unit=str(d.get("unit") or "").strip(),
            prep=d.get("prep") or None,
            optional=bool(d.get("optional", False)),
            substitutes=tuple(str(s) for s in _list_field(d, "substitutes")),
        )


@dataclass(frozen=True)
class Step:
    """One instruction step."""
    title: str
    instruction: str
    time_minutes: int = 0
    time_display: str = ""
    type: str = "active"
    tip: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "instruction": self.instruction,
            "time_minutes": self.time_minutes,
            "time_display": self.time_display,
            "type": self.type,
            "tip": self.tip,
        }

    @classmethod
    def from_dict(cls, d: dict) -> Self:
        if not isinstance(d, dict):
            raise ValueError(f"Step must be an object: {d!r}")
        try:
            time_minutes = int(d.get("time_minutes") or 0)
        except (TypeError, ValueError, OverflowError) as e:
            raise ValueError(f"Invalid step time: {d.get('time_minutes')!r}") from e
        return cls(
            title=str(d.get("title", "")),
            instruction=str(d.get("instruction", "")),
            time_minutes=time_minutes,
            time_display=str(d.get("time_display") or ""),
            type=d.get("type") or "active",
            tip=d.get("tip") or None,
        )


@dataclass
class Recipe:
    """A recipe. `yields` holds the free-text yield ("4 servings")."""
    name: str
    yields: str
    ingredients: list[Ingredient] = field(default_factory=list)
    id: str = ""
    description: str = ""
    total_time: str = ""
    active_time: str = ""
    equipment: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    steps: list[Step] = field(default_factory=list)
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "total_time": self.total_time,
            "active_time": self.active_time,
            "yield": self.yields,
            "equipment": list(self.equipment),
            "tags": list(self.tags),
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "steps": [step.to_dict() for step in self.steps],
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, d: dict) -> Self:
        """Build a Recipe from its JSON form (key "yield" maps to `yields`).

        Raises:
            ValueError: If the recipe has no name, a list field holds some
                other type, or an ingredient or step is malformed.
        """
        if not isinstance(d, dict):
            raise ValueError(f"Recipe must be an object: {d!r}")
        name = str(d.get("name") or "").strip()
        if not name:
            raise ValueError("Recipe has no name")
        return cls(
            id=str(d.get("id") or ""),
            name=name,
            yields=str(d.get("yield") or ""),
            description=str(d.get("description") or ""),
            total_time=str(d.get("total_time") or ""),
            active_time=str(d.get("active_time") or ""),
            equipment=[str(e) for e in _list_field(d, "equipment")],
            tags=[str(t) for t in _list_field(d, "tags")],
            ingredients=[Ingredient.from_dict(i) for i in _list_field(d, "ingredients")],
            steps=[Step.from_dict(s) for s in _list_field(d, "steps")],
            notes=str(d.get("notes") or ""),
        )


@dataclass(frozen=True)
class ParsedYield:
    value: float
    unit: str
    original: str


@dataclass(frozen=True)
class ScaledIngredient:
    """An ingredient with its amount recalculated for a new yield."""
    ingredient: Ingredient
    original_amount: str
    scaled_amount: str
    scaling_warning: Optional[str] = None

    @property
    def item(self) -> str:
        return self.ingredient.item

    @property
    def unit(self) -> str:
        return self.ingredient.unit

    @property
    def prep(self) -> Optional[str]:
        return self.ingredient.prep

    @property
    def optional(self) -> bool:
        return self.ingredient.optional

    @property
    def substitutes(self) -> tuple[str, ...]:
        return self.ingredient.substitutes

    def as_ingredient(self) -> Ingredient:
        """The source ingredient with the scaled amount swapped in."""
        return Ingredient(
            item=self.item,
            amount=self.scaled_amount,
            unit=self.unit,
            prep=self.prep,
            optional=self.optional,
            substitutes=self.substitutes,
        )


@dataclass(frozen=True)
class ScaledRecipe:
    """A recipe recalculated for a target yield. Never persisted."""
    recipe: Recipe
    scale_factor: float
    original_yield: str
    yields: str
    scaled_ingredients: tuple[ScaledIngredient, ...]
    scaling_notes: tuple[str, ...] = ()

    def as_recipe(self) -> Recipe:
        """A plain Recipe carrying the scaled yield and amounts."""
        source = self.recipe
        return Recipe(
            id=source.id,
            name=source.name,
            yields=self.yields,
            ingredients=[s.as_ingredient() for s in self.scaled_ingredients],
            description=source.description,
            total_time=source.total_time,
            active_time=source.active_time,
            equipment=list(source.equipment),
            tags=list(source.tags),
            steps=list(source.steps),
            notes=source.notes,
        )
