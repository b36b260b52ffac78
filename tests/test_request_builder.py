"""
tests/test_request_builder.py

Unit tests for turning node parameters into a completion request body.
"""

from yandexgpt_nodes.plugins.yandexgpt.completion import build_request
from yandexgpt_nodes.schema import GenerationRequest


class TestTextCompletion:
    def test_system_then_user(self):
        req = build_request(
            {
                "operation": "textCompletion",
                "catalogId": "b1gabc",
                "systemMessage": "Be brief",
                "userMessage": "Hello",
            }
        )
        assert req.payload()["messages"] == [
            {"role": "system", "text": "Be brief"},
            {"role": "user", "text": "Hello"},
        ]

    def test_empty_system_message_is_skipped(self):
        req = build_request({"operation": "textCompletion", "catalogId": "c", "userMessage": "Hi"})
        assert req.payload()["messages"] == [{"role": "user", "text": "Hi"}]

    def test_empty_user_message_is_skipped(self):
        req = build_request({"operation": "textCompletion", "catalogId": "c", "systemMessage": "S", "userMessage": ""})
        assert req.payload()["messages"] == [{"role": "system", "text": "S"}]

    def test_chat_messages_ignored_for_text_completion(self):
        req = build_request(
            {
                "operation": "textCompletion",
                "catalogId": "c",
                "userMessage": "Hi",
                "messages": [{"role": "assistant", "text": "ignored"}],
            }
        )
        assert [m.text for m in req.messages] == ["Hi"]

    def test_operation_defaults_to_text_completion(self):
        req = build_request({"catalogId": "c", "userMessage": "Hi"})
        assert [m.role for m in req.messages] == ["user"]


class TestChat:
    def test_messages_pass_through_verbatim(self):
        messages = [
            {"role": "user", "text": "one"},
            {"role": "assistant", "text": "two"},
            {"role": "user", "text": "three"},
        ]
        req = build_request({"operation": "chat", "catalogId": "c", "messages": messages})
        assert req.payload()["messages"] == messages

    def test_system_message_prepended(self):
        messages = [{"role": "user", "text": "q"}, {"role": "assistant", "text": "a"}]
        req = build_request({"operation": "chat", "catalogId": "c", "systemMessage": "ctx", "messages": messages})
        assert req.payload()["messages"] == [{"role": "system", "text": "ctx"}] + messages

    def test_fixed_collection_shape_is_unwrapped(self):
        req = build_request(
            {
                "operation": "chat",
                "catalogId": "c",
                "messages": {"messagesValues": [{"role": "user", "text": "hi"}]},
            }
        )
        assert req.payload()["messages"] == [{"role": "user", "text": "hi"}]

    def test_unknown_roles_are_not_validated(self):
        req = build_request({"operation": "chat", "catalogId": "c", "messages": [{"role": "narrator", "text": "x"}]})
        assert req.messages[0].role == "narrator"

    def test_user_message_ignored_for_chat(self):
        req = build_request({"operation": "chat", "catalogId": "c", "userMessage": "nope", "messages": {}})
        assert req.messages == []


class TestPayload:
    def test_model_uri_from_catalog(self):
        req = build_request({"catalogId": "b1g2h3"})
        assert req.payload()["modelUri"] == "gpt://b1g2h3/yandexgpt"

    def test_legacy_folder_id_key(self):
        req = build_request({"folderId": "folder-1"})
        assert req.model_uri == "gpt://folder-1/yandexgpt"

    def test_defaults(self):
        body = build_request({"catalogId": "c"}).payload()
        assert body["completionOptions"] == {
            "stream": False,
            "temperature": 0.6,
            "maxTokens": "2000",
            "reasoningOptions": {"mode": "DISABLED"},
        }

    def test_max_tokens_serialized_as_string(self):
        body = build_request({"catalogId": "c", "additionalOptions": {"maxTokens": 512}}).payload()
        assert body["completionOptions"]["maxTokens"] == "512"
        assert isinstance(body["completionOptions"]["maxTokens"], str)

    def test_temperature_stays_numeric(self):
        body = build_request({"catalogId": "c", "additionalOptions": {"temperature": 0.2}}).payload()
        assert body["completionOptions"]["temperature"] == 0.2

    def test_reasoning_mode(self):
        body = build_request({"catalogId": "c", "additionalOptions": {"reasoningMode": "DETAILED"}}).payload()
        assert body["completionOptions"]["reasoningOptions"] == {"mode": "DETAILED"}

    def test_null_options_fall_back_to_defaults(self):
        body = build_request(
            {"catalogId": "c", "additionalOptions": {"temperature": None, "maxTokens": None}}
        ).payload()
        assert body["completionOptions"]["temperature"] == 0.6
        assert body["completionOptions"]["maxTokens"] == "2000"

    def test_top_level_keys(self):
        body = build_request({"catalogId": "c"}).payload()
        assert list(body) == ["modelUri", "completionOptions", "messages"]

    def test_returns_generation_request(self):
        assert isinstance(build_request({"catalogId": "c"}), GenerationRequest)


class TestNumericValues:
    def test_numeric_user_message_becomes_text(self):
        req = build_request({"catalogId": "c", "userMessage": 42})
        assert req.payload()["messages"] == [{"role": "user", "text": "42"}]

    def test_numeric_chat_text_becomes_text(self):
        req = build_request({"operation": "chat", "catalogId": "c", "messages": [{"role": "user", "text": 3.5}]})
        assert req.payload()["messages"] == [{"role": "user", "text": "3.5"}]

    def test_numeric_catalog_id(self):
        assert build_request({"catalogId": 1234}).model_uri == "gpt://1234/yandexgpt"

    def test_lower_bounds_are_kept(self):
        body = build_request({"catalogId": "c", "additionalOptions": {"temperature": 0, "maxTokens": 1}}).payload()
        assert body["completionOptions"]["temperature"] == 0
        assert body["completionOptions"]["maxTokens"] == "1"
