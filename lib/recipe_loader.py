"""Load recipes from JSON files."""
import json
from pathlib import Path

from lib.models import Recipe


def parse_recipe_json(content: str) -> Recipe:
    """Parse recipe JSON text into a Recipe.

    Accepts either a bare recipe object or {"recipe": {...}}.

    Raises:
        ValueError: If the JSON is invalid or the recipe is incomplete
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid recipe JSON: {e}") from e

    if isinstance(data, dict) and isinstance(data.get("recipe"), dict):
        data = data["recipe"]

    if not isinstance(data, dict):
        raise ValueError("Recipe JSON must be an object")

    return Recipe.from_dict(data)


def load_recipe(file_path: Path) -> Recipe:
    """Load a recipe from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file isn't a valid recipe
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Recipe file not found: {file_path}")

    return parse_recipe_json(file_path.read_text(encoding='utf-8'))
