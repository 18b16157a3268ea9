#!/usr/bin/env python3
"""Ask Chef Ollama a question about the recipe you're cooking.

Usage:
    python ask_chef.py recipe.json "My sauce split, can I save it?" --step 3
    python ask_chef.py recipe.json "cream" --action substitution
    python ask_chef.py recipe.json --subs              # Offline substitutions only
    python ask_chef.py --check                         # Is Ollama reachable?
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from lib.chef_ollama import QUICK_ACTION_PROMPTS, chat_with_chef, check_connection, execute_quick_action
from lib.recipe_loader import load_recipe
from lib.substitutions import filter_by_dietary, find_substitutions

load_dotenv()


def print_substitutions(recipe, dietary: list[str]):
    """Print offline substitutes for every ingredient that has some."""
    found = 0
    for ingredient in recipe.ingredients:
        result = find_substitutions(ingredient)
        if not result:
            continue
        subs = filter_by_dietary(result.substitutes, dietary)
        if not subs and not result.recipe_substitutes:
            continue
        found += 1
        print(f"{ingredient.item} [{result.category}]")
        for name in result.recipe_substitutes:
            print(f"  - {name} (from recipe)")
        for sub in subs:
            print(f"  - {sub.substitute} ({sub.ratio}): {sub.notes}")

    if not found:
        print("No substitutions found.")


def main():
    parser = argparse.ArgumentParser(description="Ask Chef Ollama for cooking help")
    parser.add_argument('recipe', type=Path, nargs='?', help='Recipe JSON file')
    parser.add_argument('question', nargs='?', default='', help='Question or extra context')
    parser.add_argument('--step', type=int, default=1, help='Current step number (1-based)')
    parser.add_argument('--have', nargs='*', default=[], help='Ingredients you have on hand')
    parser.add_argument('--action', choices=sorted(QUICK_ACTION_PROMPTS), help='Use a quick action prompt')
    parser.add_argument('--subs', action='store_true', help='List offline substitutions and exit')
    parser.add_argument('--dietary', nargs='*', default=[], help='Dietary tags for --subs (e.g., vegan)')
    parser.add_argument('--check', action='store_true', help='Check Ollama connection and exit')
    args = parser.parse_args()

    if args.check:
        status = check_connection()
        if status["connected"]:
            print(f"Connected. Models: {', '.join(status['models']) or '(none)'}")
            return
        print(f"Error: {status['error']}", file=sys.stderr)
        sys.exit(1)

    if not args.recipe:
        parser.error("recipe is required unless --check is given")

    try:
        recipe = load_recipe(args.recipe)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.subs:
        print_substitutions(recipe, args.dietary)
        return

    if not args.question and not args.action:
        parser.error("a question is required (or use --action / --subs)")

    step_index = args.step - 1
    if args.action:
        result = execute_quick_action(args.action, args.question, recipe, step_index, args.have)
    else:
        result = chat_with_chef(args.question, recipe, step_index, args.have)

    if result.error:
        print(f"Warning: {result.error}", file=sys.stderr)

    print(result.response)

    if result.suggested_actions:
        print()
        print("Options: " + " | ".join(a["label"] for a in result.suggested_actions))


if __name__ == "__main__":
    main()
