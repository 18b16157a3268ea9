"""Shopping list template generation.

Creates markdown shopping lists with checkboxes, grouped by store section.
"""

import re

from lib.shopping_list_generator import format_list_item


def generate_shopping_list_markdown(title: str, groups: list[tuple[str, list]], sources: list[str] | None = None) -> str:
    """Generate shopping list markdown.

    Args:
        title: Heading text, e.g. "Test Pasta (4 servings)"
        groups: Output of generate_shopping_list()
        sources: Recipe names the list was built from (optional)

    Returns:
        Formatted markdown string
    """
    lines = [
        f"# Shopping List: {title}",
        "",
    ]

    if sources:
        lines.append("Generated from " + ", ".join(sources))
        lines.append("")

    for category, items in groups:
        lines.append(f"## {category}")
        lines.append("")
        for ing in items:
            lines.append(f"- [ ] {format_list_item(ing)}")
        lines.append("")

    if not groups:
        lines.append("All items checked off!")
        lines.append("")

    return '\n'.join(lines)


def generate_filename(title: str) -> str:
    """Generate filename for a shopping list.

    Args:
        title: Recipe or list name like 'Test Pasta'

    Returns:
        Filename like 'shopping-list-test-pasta.md'
    """
    slug = re.sub(r'[^a-z0-9]+', '-', title.lower()).strip('-')
    return f"shopping-list-{slug or 'untitled'}.md"
