"""Tests for the Chef Ollama cooking assistant."""

from unittest.mock import patch, Mock

import pytest
import requests

from lib.models import Ingredient, Recipe, Step
from lib.chef_ollama import (
    CONNECTION_HELP,
    QUICK_ACTION_PROMPTS,
    build_system_message,
    chat_with_chef,
    check_connection,
    execute_quick_action,
    get_config,
    get_offline_substitution,
    parse_actions_from_response,
)


def make_recipe():
    return Recipe(
        name="Buttermilk Pancakes",
        yields="4 servings",
        ingredients=[
            Ingredient(item="flour", amount="2", unit="cups"),
            Ingredient(item="butter", amount="3", unit="tbsp", substitutes=("ghee",)),
            Ingredient(item="eggs", amount="2"),
        ],
        steps=[
            Step(title="Mix", instruction="Whisk the dry ingredients."),
            Step(title="Cook", instruction="Ladle onto a hot griddle."),
        ],
    )


def ollama_reply(content):
    return Mock(status_code=200, json=lambda: {"message": {"role": "assistant", "content": content}})


class TestGetConfig:
    def test_defaults(self):
        with patch("lib.chef_ollama.os.getenv", return_value=None):
            config = get_config()
        assert config["url"] == "http://localhost:11434"
        assert config["model"] == "mistral:7b"
        assert config["timeout"] == 60
        assert config["skill_level"] == "intermediate"

    def test_from_environment(self):
        env = {
            "OLLAMA_URL": "http://kitchen-pi:11434/",
            "OLLAMA_MODEL": "llama3",
            "OLLAMA_TIMEOUT": "15",
            "CHEF_SKILL_LEVEL": "beginner",
        }
        with patch("lib.chef_ollama.os.getenv") as mock_getenv:
            mock_getenv.side_effect = lambda key: env.get(key)
            config = get_config()
        assert config["url"] == "http://kitchen-pi:11434"
        assert config["model"] == "llama3"
        assert config["timeout"] == 15
        assert config["skill_level"] == "beginner"

    def test_bad_timeout_falls_back(self):
        with patch("lib.chef_ollama.os.getenv") as mock_getenv:
            mock_getenv.side_effect = lambda key: {"OLLAMA_TIMEOUT": "soon"}.get(key)
            assert get_config()["timeout"] == 60


class TestBuildSystemMessage:
    def test_includes_recipe_context(self):
        message = build_system_message(make_recipe(), current_step=1, checked_ingredients=["flour"])
        assert "- Recipe: Buttermilk Pancakes" in message
        assert "- Step 2 of 2: Cook" in message
        assert "- Current instruction: Ladle onto a hot griddle." in message
        assert "2 cups flour, 3 tbsp butter, 2 eggs" in message
        assert "- User has: flour" in message

    def test_step_clamped(self):
        message = build_system_message(make_recipe(), current_step=9)
        assert "- Step 2 of 2" in message

    def test_nothing_checked(self):
        message = build_system_message(make_recipe())
        assert "ingredients not yet checked" in message

    def test_user_context(self):
        message = build_system_message(make_recipe(), skill_level="expert", times_cooked=3)
        assert "- Skill level: expert" in message
        assert "- Times cooked this recipe: 3" in message


class TestParseActions:
    def test_substitution_actions(self):
        actions = parse_actions_from_response("You can substitute oil for butter.")
        assert [a["type"] for a in actions] == ["just_this_time", "update_recipe"]

    def test_variation_action(self):
        actions = parse_actions_from_response("This makes a nice variation.")
        assert [a["type"] for a in actions] == ["save_as_variant"]

    def test_no_actions(self):
        assert parse_actions_from_response("Keep stirring.") == []


class TestOfflineSubstitution:
    def test_names_recipe_ingredient(self):
        text = get_offline_substitution("I don't have butter", make_recipe().ingredients)
        assert text.startswith("Substitutes for butter")
        assert "- ghee (suggested by the recipe)" in text
        assert "coconut oil" in text

    def test_unknown_ingredient(self):
        text = get_offline_substitution("I don't have saffron", make_recipe().ingredients)
        assert "can't reach Chef Ollama" in text


class TestChatWithChef:
    def test_successful_chat(self):
        with patch("lib.chef_ollama.requests.post") as mock_post:
            mock_post.return_value = ollama_reply("Use 3 tbsp oil instead of butter.")
            result = chat_with_chef("Can I skip butter?", make_recipe(), 0, ["flour"])

        assert result.response == "Use 3 tbsp oil instead of butter."
        assert result.error is None
        assert result.offline is False
        assert result.suggested_actions

        url = mock_post.call_args[0][0]
        payload = mock_post.call_args[1]["json"]
        assert url.endswith("/api/chat")
        assert payload["stream"] is False
        assert payload["messages"][0]["role"] == "system"
        assert payload["messages"][-1] == {"role": "user", "content": "Can I skip butter?"}

    def test_history_included(self):
        history = [
            {"role": "user", "content": "Hi"},
            {"role": "assistant", "content": "Hello!"},
        ]
        with patch("lib.chef_ollama.requests.post") as mock_post:
            mock_post.return_value = ollama_reply("Sure.")
            chat_with_chef("Next?", make_recipe(), history=history)

        messages = mock_post.call_args[1]["json"]["messages"]
        assert messages[1:3] == history
        assert len(messages) == 4

    def test_connection_error_offline_substitution(self):
        """Substitution questions still get an answer when Ollama is down"""
        with patch("lib.chef_ollama.requests.post", side_effect=requests.exceptions.ConnectionError()):
            result = chat_with_chef("I don't have butter, what can I use?", make_recipe())

        assert result.offline is True
        assert "Cannot connect" in result.error
        assert "Substitutes for butter" in result.response

    def test_connection_error_other_question(self):
        with patch("lib.chef_ollama.requests.post", side_effect=requests.exceptions.ConnectionError()):
            result = chat_with_chef("Is my griddle hot enough?", make_recipe())

        assert result.offline is False
        assert result.response == CONNECTION_HELP
        assert result.error is not None

    def test_timeout(self):
        with patch("lib.chef_ollama.requests.post", side_effect=requests.exceptions.Timeout()):
            result = chat_with_chef("How long?", make_recipe())
        assert "timed out" in result.error

    def test_http_error(self):
        mock_response = Mock()
        mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError("500 Server Error")
        with patch("lib.chef_ollama.requests.post", return_value=mock_response):
            result = chat_with_chef("How long?", make_recipe())
        assert "Ollama error" in result.error

    def test_bad_json(self):
        mock_response = Mock()
        mock_response.json.side_effect = ValueError("no json")
        with patch("lib.chef_ollama.requests.post", return_value=mock_response):
            result = chat_with_chef("How long?", make_recipe())
        assert "parse" in result.error


class TestQuickAction:
    def test_prompt_used(self):
        with patch("lib.chef_ollama.requests.post") as mock_post:
            mock_post.return_value = ollama_reply("Looks right.")
            execute_quick_action("what_should_this_look_like", "bubbles on top", make_recipe(), 1)

        content = mock_post.call_args[1]["json"]["messages"][-1]["content"]
        assert content.startswith(QUICK_ACTION_PROMPTS["what_should_this_look_like"])
        assert content.endswith("Context: bubbles on top")

    def test_unknown_action(self):
        with pytest.raises(ValueError, match="Unknown quick action"):
            execute_quick_action("make_it_vegan", "", make_recipe())


class TestCheckConnection:
    def test_connected(self):
        mock_response = Mock(status_code=200, json=lambda: {"models": [{"name": "mistral:7b"}]})
        with patch("lib.chef_ollama.requests.get", return_value=mock_response):
            status = check_connection()
        assert status == {"connected": True, "models": ["mistral:7b"]}

    def test_not_connected(self):
        with patch("lib.chef_ollama.requests.get", side_effect=requests.exceptions.ConnectionError("refused")):
            status = check_connection()
        assert status["connected"] is False
        assert "refused" in status["error"]
