"""Tests for the SDK-backed providers (SDK clients are mocked)."""

import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import anthropic
import httpx
import openai

from multi_model_mcp.errors import ProviderError
from multi_model_mcp.providers import PROVIDER_CLASSES
from multi_model_mcp.providers.anthropic import KNOWN_MODELS, AnthropicProvider
from multi_model_mcp.providers.base import (
    CompletionRequest,
    Message,
    build_http_timeout,
    split_system_prompt,
)
from multi_model_mcp.providers.gemini import GeminiProvider
from multi_model_mcp.providers.openai import OpenAIProvider

_FAKE_REQUEST = httpx.Request("POST", "https://api.example.test/v1")


def _request(model="m-1"):
    return CompletionRequest(
        messages=[
            Message(role="system", content="be brief"),
            Message(role="user", content="hello"),
        ],
        model=model,
        max_tokens=100,
        temperature=0.5,
    )


class TestBaseHelpers(unittest.TestCase):
    def test_split_system_prompt(self):
        system, turns = split_system_prompt(_request().messages)
        self.assertEqual(system, "be brief")
        self.assertEqual(turns, [Message(role="user", content="hello")])

    def test_split_without_system(self):
        system, turns = split_system_prompt([Message(role="user", content="x")])
        self.assertIsNone(system)
        self.assertEqual(len(turns), 1)

    def test_http_timeout(self):
        timeout = build_http_timeout(30.0, 10.0)
        self.assertEqual(timeout.read, 30.0)
        self.assertEqual(timeout.connect, 10.0)

    def test_registry_order(self):
        self.assertEqual(list(PROVIDER_CLASSES), ["anthropic", "openai", "gemini"])


class TestOpenAIProvider(unittest.TestCase):
    def setUp(self):
        patcher = patch("multi_model_mcp.providers.openai.openai.OpenAI")
        self.mock_openai_class = patcher.start()
        self.addCleanup(patcher.stop)
        self.mock_client = self.mock_openai_class.return_value
        self.provider = OpenAIProvider(api_key="sk-test", timeout=12.0, connect_timeout=3.0)

    def test_client_configuration(self):
        kwargs = self.mock_openai_class.call_args.kwargs
        self.assertEqual(kwargs["api_key"], "sk-test")
        self.assertEqual(kwargs["max_retries"], 0)
        self.assertEqual(kwargs["timeout"].read, 12.0)
        self.assertEqual(kwargs["timeout"].connect, 3.0)
        self.assertEqual(self.provider.name, "openai")

    def test_complete(self):
        self.mock_client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content="print(1)"))],
            model="gpt-4o-2024",
            usage=SimpleNamespace(prompt_tokens=7, completion_tokens=3),
        )

        response = self.provider.complete(_request("gpt-4o"))

        self.mock_client.chat.completions.create.assert_called_once_with(
            model="gpt-4o",
            messages=[
                {"role": "system", "content": "be brief"},
                {"role": "user", "content": "hello"},
            ],
            max_tokens=100,
            temperature=0.5,
        )
        self.assertEqual(response.content, "print(1)")
        self.assertEqual(response.model, "gpt-4o-2024")
        self.assertEqual(response.usage_dict(), {"input_tokens": 7, "output_tokens": 3})

    def test_complete_without_choices_or_usage(self):
        self.mock_client.chat.completions.create.return_value = SimpleNamespace(
            choices=[], model="gpt-4o", usage=None
        )
        response = self.provider.complete(_request())
        self.assertEqual(response.content, "")
        self.assertIsNone(response.usage_dict())

    def test_complete_api_error(self):
        self.mock_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=_FAKE_REQUEST
        )
        with self.assertRaises(ProviderError) as ctx:
            self.provider.complete(_request())
        self.assertTrue(str(ctx.exception).startswith("openai: API error"))

    def test_list_models_filters_chat_models(self):
        self.mock_client.models.list.return_value = [
            SimpleNamespace(id="gpt-4o"),
            SimpleNamespace(id="text-embedding-3-small"),
            SimpleNamespace(id="gpt-3.5-turbo"),
            SimpleNamespace(id="dall-e-3"),
        ]
        self.assertEqual(self.provider.list_models(), ["gpt-4o", "gpt-3.5-turbo"])

    def test_list_models_error(self):
        self.mock_client.models.list.side_effect = openai.APIConnectionError(
            request=_FAKE_REQUEST
        )
        with self.assertRaises(ProviderError):
            self.provider.list_models()


class TestAnthropicProvider(unittest.TestCase):
    def setUp(self):
        patcher = patch("multi_model_mcp.providers.anthropic.anthropic.Anthropic")
        self.mock_anthropic_class = patcher.start()
        self.addCleanup(patcher.stop)
        self.mock_client = self.mock_anthropic_class.return_value
        self.provider = AnthropicProvider(api_key="sk-ant")

    def test_client_configuration(self):
        kwargs = self.mock_anthropic_class.call_args.kwargs
        self.assertEqual(kwargs["api_key"], "sk-ant")
        self.assertEqual(kwargs["max_retries"], 0)
        self.assertEqual(kwargs["timeout"].read, 30.0)
        self.assertEqual(kwargs["timeout"].connect, 10.0)

    def test_complete_sends_system_separately(self):
        self.mock_client.messages.create.return_value = SimpleNamespace(
            content=[SimpleNamespace(type="text", text="answer")],
            model="claude-3-5-sonnet-20241022",
            usage=SimpleNamespace(input_tokens=11, output_tokens=22),
        )

        response = self.provider.complete(_request("claude-3-5-sonnet-20241022"))

        self.mock_client.messages.create.assert_called_once_with(
            model="claude-3-5-sonnet-20241022",
            messages=[{"role": "user", "content": "hello"}],
            max_tokens=100,
            system="be brief",
            temperature=0.5,
        )
        self.assertEqual(response.content, "answer")
        self.assertEqual(response.usage_dict(), {"input_tokens": 11, "output_tokens": 22})

    def test_complete_defaults_max_tokens(self):
        self.mock_client.messages.create.return_value = SimpleNamespace(
            content=[], model="claude", usage=SimpleNamespace(input_tokens=0, output_tokens=0)
        )
        self.provider.complete(
            CompletionRequest(messages=[Message(role="user", content="x")], model="claude")
        )
        kwargs = self.mock_client.messages.create.call_args.kwargs
        self.assertEqual(kwargs["max_tokens"], 4096)
        self.assertNotIn("system", kwargs)
        self.assertNotIn("temperature", kwargs)

    def test_complete_skips_non_text_blocks(self):
        self.mock_client.messages.create.return_value = SimpleNamespace(
            content=[
                SimpleNamespace(type="text", text="one"),
                SimpleNamespace(type="tool_use", id="t1"),
                SimpleNamespace(type="text", text="two"),
            ],
            model="claude",
            usage=SimpleNamespace(input_tokens=1, output_tokens=1),
        )
        response = self.provider.complete(_request())
        self.assertEqual(response.content, "one\ntwo")

    def test_complete_api_error(self):
        self.mock_client.messages.create.side_effect = anthropic.APIConnectionError(
            request=_FAKE_REQUEST
        )
        with self.assertRaises(ProviderError) as ctx:
            self.provider.complete(_request())
        self.assertEqual(ctx.exception.provider, "anthropic")

    def test_list_models_is_static(self):
        self.assertEqual(self.provider.list_models(), KNOWN_MODELS)
        self.mock_client.models.list.assert_not_called()


class TestGeminiProvider(unittest.TestCase):
    def setUp(self):
        patcher = patch("multi_model_mcp.providers.gemini.genai.Client")
        self.mock_client_class = patcher.start()
        self.addCleanup(patcher.stop)
        self.mock_client = self.mock_client_class.return_value
        self.provider = GeminiProvider(api_key="g-key", timeout=30.0)

    def test_client_configuration(self):
        kwargs = self.mock_client_class.call_args.kwargs
        self.assertEqual(kwargs["api_key"], "g-key")
        self.assertEqual(kwargs["http_options"].timeout, 30000)

    def test_complete(self):
        self.mock_client.models.generate_content.return_value = SimpleNamespace(
            text="gemini says hi",
            model_version="gemini-1.5-pro-002",
            usage_metadata=SimpleNamespace(prompt_token_count=5, candidates_token_count=6),
        )

        response = self.provider.complete(_request("gemini-1.5-pro"))

        kwargs = self.mock_client.models.generate_content.call_args.kwargs
        self.assertEqual(kwargs["model"], "gemini-1.5-pro")
        self.assertEqual(kwargs["config"].system_instruction, "be brief")
        self.assertEqual(kwargs["config"].temperature, 0.5)
        self.assertEqual(kwargs["config"].max_output_tokens, 100)
        self.assertEqual(len(kwargs["contents"]), 1)
        self.assertEqual(kwargs["contents"][0].role, "user")
        self.assertEqual(kwargs["contents"][0].parts[0].text, "hello")

        self.assertEqual(response.content, "gemini says hi")
        self.assertEqual(response.model, "gemini-1.5-pro-002")
        self.assertEqual(response.usage_dict(), {"input_tokens": 5, "output_tokens": 6})

    def test_assistant_turns_become_model_role(self):
        contents = GeminiProvider._to_contents(
            [Message(role="user", content="q"), Message(role="assistant", content="a")]
        )
        self.assertEqual([c.role for c in contents], ["user", "model"])

    def test_complete_falls_back_to_requested_model(self):
        self.mock_client.models.generate_content.return_value = SimpleNamespace(
            text=None, model_version=None, usage_metadata=None
        )
        response = self.provider.complete(_request("gemini-x"))
        self.assertEqual(response.content, "")
        self.assertEqual(response.model, "gemini-x")
        self.assertIsNone(response.usage)

    def test_complete_transport_error(self):
        self.mock_client.models.generate_content.side_effect = httpx.ConnectError("refused")
        with self.assertRaises(ProviderError) as ctx:
            self.provider.complete(_request())
        self.assertIn("gemini: API error", str(ctx.exception))

    def test_list_models_filters_generate_content(self):
        self.mock_client.models.list.return_value = iter(
            [
                SimpleNamespace(name="models/gemini-1.5-pro", supported_actions=["generateContent"]),
                SimpleNamespace(name="models/embedding-001", supported_actions=["embedContent"]),
                SimpleNamespace(name="models/legacy", supported_actions=None),
            ]
        )
        self.assertEqual(self.provider.list_models(), ["gemini-1.5-pro"])

    def test_list_models_error(self):
        self.mock_client.models.list.side_effect = httpx.ReadTimeout("slow")
        with self.assertRaises(ProviderError):
            self.provider.list_models()


if __name__ == "__main__":
    unittest.main()
