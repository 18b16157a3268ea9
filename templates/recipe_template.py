"""Recipe export templates - JSON, markdown and plain text."""

import json
import re

from lib.models import Recipe

EXPORT_FORMATS = ("json", "markdown", "text")


def export_recipe_json(recipe: Recipe) -> str:
    """Recipe as pretty-printed JSON (same shape recipe_loader reads)."""
    return json.dumps(recipe.to_dict(), indent=2, ensure_ascii=False)


def format_ingredient_line(ing) -> str:
    parts = [p for p in (ing.amount, ing.unit, ing.item) if p]
    line = ' '.join(parts)
    if ing.prep:
        line += f", {ing.prep}"
    return line


def format_recipe_markdown(recipe: Recipe, include_notes: bool = True) -> str:
    """Format a recipe as markdown.

    Args:
        recipe: Recipe to export
        include_notes: Whether to append the Notes section

    Returns:
        Markdown string
    """
    lines = [f"# {recipe.name}", ""]

    if recipe.description:
        lines.extend([recipe.description, ""])

    lines.append(f"**Yield:** {recipe.yields}  ")
    if recipe.total_time:
        lines.append(f"**Total Time:** {recipe.total_time}  ")
    if recipe.active_time:
        lines.append(f"**Active Time:** {recipe.active_time}  ")
    lines.append("")

    if recipe.equipment:
        lines.extend(["## Equipment", ""])
        lines.extend(f"- {eq}" for eq in recipe.equipment)
        lines.append("")

    lines.extend(["## Ingredients", ""])
    for ing in recipe.ingredients:
        line = f"- {format_ingredient_line(ing)}"
        if ing.optional:
            line += " *(optional)*"
        lines.append(line)
    lines.append("")

    if recipe.steps:
        lines.extend(["## Instructions", ""])
        for i, step in enumerate(recipe.steps, 1):
            lines.extend([f"### {i}. {step.title}", "", step.instruction, ""])
            if step.time_display:
                lines.extend([f"*Time: {step.time_display} ({step.type})*", ""])
            if step.tip:
                lines.extend([f"> **Tip:** {step.tip}", ""])

    if include_notes and recipe.notes:
        lines.extend(["## Notes", "", recipe.notes, ""])

    if recipe.tags:
        lines.extend(["---", "", f"*Tags: {', '.join(recipe.tags)}*", ""])

    return '\n'.join(lines)


def format_recipe_text(recipe: Recipe) -> str:
    """Format a recipe as plain text for printing or sharing."""
    rule = "=" * 50
    section = "-" * 30
    lines = [rule, recipe.name.upper(), rule, ""]

    if recipe.description:
        lines.extend([recipe.description, ""])

    lines.append(f"Yield: {recipe.yields}")
    if recipe.total_time:
        lines.append(f"Total Time: {recipe.total_time}")
    if recipe.active_time:
        lines.append(f"Active Time: {recipe.active_time}")
    lines.append("")

    if recipe.equipment:
        lines.extend(["EQUIPMENT", section])
        lines.extend(f"• {eq}" for eq in recipe.equipment)
        lines.append("")

    lines.extend(["INGREDIENTS", section])
    for ing in recipe.ingredients:
        line = f"• {format_ingredient_line(ing)}"
        if ing.optional:
            line += " (optional)"
        lines.append(line)
    lines.append("")

    if recipe.steps:
        lines.extend(["INSTRUCTIONS", section, ""])
        for i, step in enumerate(recipe.steps, 1):
            lines.append(f"{i}. {step.title.upper()}")
            lines.append(f"   {step.instruction}")
            if step.time_display:
                lines.append(f"   [{step.time_display} - {step.type}]")
            if step.tip:
                lines.append(f"   TIP: {step.tip}")
            lines.append("")

    return '\n'.join(lines)


def export_recipe(recipe: Recipe, fmt: str = "json") -> str:
    """Export a recipe in one of EXPORT_FORMATS.

    Raises:
        ValueError: For an unknown format
    """
    if fmt == "markdown":
        return format_recipe_markdown(recipe)
    if fmt == "text":
        return format_recipe_text(recipe)
    if fmt == "json":
        return export_recipe_json(recipe)
    raise ValueError(f"Unknown export format: {fmt}. Expected one of: {', '.join(EXPORT_FORMATS)}")


def generate_filename(recipe_name: str, fmt: str = "markdown") -> str:
    """Generate a filename like 'Test Pasta.md' from a recipe name."""
    extension = {"json": ".json", "markdown": ".md", "text": ".txt"}.get(fmt, ".txt")
    clean = re.sub(r'[<>:"/\\|?*]', '', recipe_name).strip()
    return f"{clean or 'Untitled Recipe'}{extension}"
