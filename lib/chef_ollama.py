"""Chef Ollama - context-aware cooking help from a local Ollama server.

Sends the recipe, current step and what the cook has on hand as a system
message to Ollama's /api/chat. When the server can't be reached,
substitution questions are answered from the offline substitution table.

Configuration (environment, usually via .env):
    OLLAMA_URL        Base URL of the Ollama server (default http://localhost:11434)
    OLLAMA_MODEL      Model name (default mistral:7b)
    OLLAMA_TIMEOUT    Request timeout in seconds (default 60)
    CHEF_SKILL_LEVEL  beginner / intermediate / advanced / expert
"""

import os
from dataclasses import dataclass, field
from typing import Optional

import requests

from lib.models import Ingredient, Recipe
from lib.substitutions import find_substitutions

DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "mistral:7b"
DEFAULT_TIMEOUT = 60
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 500

CHEF_SYSTEM_PROMPT = """You are Chef Ollama, a friendly and knowledgeable cooking assistant.
You help users navigate cooking challenges in real-time.

Your capabilities:
- Ingredient substitutions with proper ratio adjustments
- Error recovery when things go wrong (burned, overcooked, wrong amounts)
- Technique explanations and visual descriptions
- Recipe modifications and scaling
- Timing adjustments based on equipment differences

Guidelines:
- Be concise and practical - users are actively cooking
- Provide specific measurements and times, not vague suggestions
- If recovery isn't possible, be honest but suggest alternatives
- For substitutions, always provide the conversion ratio"""

QUICK_ACTION_PROMPTS = {
    "substitution": "I don't have an ingredient. Please suggest a substitute with the proper amount to use.",
    "i_messed_up": "Something went wrong during cooking. Please help me assess if it's recoverable and what I should do.",
    "what_should_this_look_like": "I'm not sure if my current result looks right. Please describe what I should be seeing at this step.",
    "adjust_for_equipment": "I don't have the specified equipment. Please suggest how to modify the technique for what I have.",
    "scale_recipe": "I need to adjust the serving size. Please recalculate the ingredients and note any steps that need modification.",
}

CONNECTION_HELP = (
    "I'm having trouble connecting. Please check that Ollama is running locally "
    "(try: ollama serve), or try again in a moment."
)


@dataclass
class ChatResult:
    response: str
    suggested_actions: list[dict] = field(default_factory=list)
    error: Optional[str] = None
    offline: bool = False


def get_config() -> dict:
    """Read Ollama settings from the environment."""
    try:
        timeout = float(os.getenv("OLLAMA_TIMEOUT") or DEFAULT_TIMEOUT)
    except ValueError:
        timeout = DEFAULT_TIMEOUT
    return {
        "url": (os.getenv("OLLAMA_URL") or DEFAULT_OLLAMA_URL).rstrip("/"),
        "model": os.getenv("OLLAMA_MODEL") or DEFAULT_OLLAMA_MODEL,
        "timeout": timeout,
        "skill_level": os.getenv("CHEF_SKILL_LEVEL") or "intermediate",
    }


def _ingredient_summary(ingredients: list[Ingredient]) -> str:
    return ", ".join(
        " ".join(p for p in (i.amount, i.unit, i.item) if p) for i in ingredients
    )


def build_system_message(
    recipe: Recipe,
    current_step: int = 0,
    checked_ingredients: list[str] | None = None,
    skill_level: str = "intermediate",
    times_cooked: int = 0,
) -> str:
    """Build the system prompt with the cook's current context.

    Args:
        recipe: Recipe being cooked
        current_step: Zero-based index of the step in progress
        checked_ingredients: Item names the cook has confirmed on hand
        skill_level: Cook's self-reported skill level
        times_cooked: How often this recipe has been made before
    """
    lines = [CHEF_SYSTEM_PROMPT, "", "Current Recipe Context:", f"- Recipe: {recipe.name}"]

    if recipe.steps:
        index = min(max(current_step, 0), len(recipe.steps) - 1)
        step = recipe.steps[index]
        lines.append(f"- Step {index + 1} of {len(recipe.steps)}: {step.title}")
        lines.append(f"- Current instruction: {step.instruction}")

    lines.append(f"- Yield: {recipe.yields}")
    lines.append(f"- Ingredients: {_ingredient_summary(recipe.ingredients)}")
    lines.append(f"- User has: {', '.join(checked_ingredients or []) or 'ingredients not yet checked'}")
    lines.extend([
        "",
        "User Context:",
        f"- Skill level: {skill_level}",
        f"- Times cooked this recipe: {times_cooked}",
    ])
    return "\n".join(lines)


def send_to_ollama(messages: list[dict], config: dict) -> str:
    """POST a chat to Ollama and return the assistant's text.

    Raises:
        requests.exceptions.RequestException: On connection/HTTP errors
        ValueError: If the response body isn't JSON
    """
    response = requests.post(
        f"{config['url']}/api/chat",
        json={
            "model": config["model"],
            "messages": messages,
            "stream": False,
            "options": {
                "temperature": DEFAULT_TEMPERATURE,
                "num_predict": DEFAULT_MAX_TOKENS,
            },
        },
        timeout=config["timeout"],
    )
    response.raise_for_status()

    data = response.json()
    return (data.get("message") or {}).get("content") or data.get("response") or ""


def parse_actions_from_response(response: str) -> list[dict]:
    """Suggest follow-up buttons based on what the chef recommended."""
    lower = response.lower()
    actions = []

    if "substitute" in lower or "instead of" in lower or "use " in lower:
        actions.append({"type": "just_this_time", "label": "Just This Time"})
        actions.append({"type": "update_recipe", "label": "Update Recipe"})

    if "variation" in lower or "version" in lower:
        actions.append({"type": "save_as_variant", "label": "Save as Variant"})

    return actions


def _is_substitution_question(message: str) -> bool:
    lower = message.lower()
    return "don't have" in lower or "dont have" in lower or "substitut" in lower


def get_offline_substitution(message: str, ingredients: list[Ingredient]) -> str:
    """Answer a substitution question from the local table.

    Looks for a recipe ingredient named in the message.
    """
    lower = message.lower()
    for ingredient in ingredients:
        if ingredient.key not in lower:
            continue
        result = find_substitutions(ingredient)
        if not result:
            continue

        lines = [f"Substitutes for {ingredient.item} (offline suggestions):"]
        for name in result.recipe_substitutes:
            lines.append(f"- {name} (suggested by the recipe)")
        for sub in result.substitutes[:4]:
            lines.append(f"- {sub.substitute} ({sub.ratio}): {sub.notes}")
        return "\n".join(lines)

    return (
        "I can't reach Chef Ollama right now. Tell me which ingredient you're "
        "missing and I'll check the offline substitution list."
    )


def chat_with_chef(
    message: str,
    recipe: Recipe,
    current_step: int = 0,
    checked_ingredients: list[str] | None = None,
    history: list[dict] | None = None,
    times_cooked: int = 0,
) -> ChatResult:
    """Send a message to Chef Ollama with full recipe context.

    Args:
        message: The cook's question
        recipe: Recipe being cooked
        current_step: Zero-based index of the current step
        checked_ingredients: Item names on hand
        history: Earlier {"role", "content"} messages in this conversation
        times_cooked: How often this recipe has been made

    Returns:
        ChatResult. Connection problems don't raise; they produce a
        friendly response with `error` set.
    """
    config = get_config()
    messages = [{
        "role": "system",
        "content": build_system_message(
            recipe, current_step, checked_ingredients, config["skill_level"], times_cooked
        ),
    }]
    messages.extend(history or [])
    messages.append({"role": "user", "content": message})

    try:
        response = send_to_ollama(messages, config)
    except requests.exceptions.ConnectionError:
        error = "Cannot connect to Ollama. Is it running? Try: ollama serve"
    except requests.exceptions.Timeout:
        error = f"Ollama request timed out ({config['timeout']:g}s)."
    except requests.exceptions.RequestException as e:
        error = f"Ollama error: {e}"
    except ValueError as e:
        error = f"Failed to parse Ollama response as JSON: {e}"
    else:
        return ChatResult(response=response, suggested_actions=parse_actions_from_response(response))

    if _is_substitution_question(message):
        return ChatResult(
            response=get_offline_substitution(message, recipe.ingredients),
            error=error,
            offline=True,
        )
    return ChatResult(response=CONNECTION_HELP, error=error)


def execute_quick_action(
    action: str,
    additional_context: str,
    recipe: Recipe,
    current_step: int = 0,
    checked_ingredients: list[str] | None = None,
) -> ChatResult:
    """Run one of the canned QUICK_ACTION_PROMPTS.

    Raises:
        ValueError: For an unknown action name
    """
    if action not in QUICK_ACTION_PROMPTS:
        raise ValueError(f"Unknown quick action: {action}. Expected one of: {', '.join(QUICK_ACTION_PROMPTS)}")

    prompt = f"{QUICK_ACTION_PROMPTS[action]}\n\nContext: {additional_context}"
    return chat_with_chef(prompt, recipe, current_step, checked_ingredients)


def check_connection() -> dict:
    """Check that Ollama is reachable and list its models.

    Returns:
        {"connected": True, "models": [...]} or {"connected": False, "error": str}
    """
    config = get_config()
    try:
        response = requests.get(f"{config['url']}/api/tags", timeout=10)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.RequestException as e:
        return {"connected": False, "error": str(e)}
    except ValueError as e:
        return {"connected": False, "error": f"Invalid response: {e}"}

    models = [m.get("name", "") for m in data.get("models", [])]
    return {"connected": True, "models": models}
