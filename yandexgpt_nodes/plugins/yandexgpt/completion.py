from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from yandexgpt_nodes.config import get_settings
from yandexgpt_nodes.credentials import YANDEX_GPT_API
from yandexgpt_nodes.exec_http import api_key_headers, post_json
from yandexgpt_nodes.schema import (
    ChatMessage,
    CompletionOptions,
    GenerationRequest,
    IOField,
    NodeSpec,
    OptionValue,
    ReasoningMode,
    ReasoningOptions,
)


NODE_SPEC = NodeSpec(
    name="yandexgpt.completion",
    version="1.0.0",
    title="Yandex GPT",
    category="Yandex GPT",
    group=["transform"],
    subtitle="={{$parameter['operation']}}",
    doc="Text generation and chat with the Yandex GPT API",
    auth={"type": "api_key", "provider": YANDEX_GPT_API.name},  # type: ignore[arg-type]
    inputs={
        "operation": IOField(
            type="options",
            display_name="Operation",
            default="textCompletion",
            options=[
                OptionValue(name="Text Completion", value="textCompletion", description="Generate text with Yandex GPT"),
                OptionValue(name="Chat", value="chat", description="Hold a dialog with Yandex GPT"),
            ],
        ),
        "catalogId": IOField(
            type="string",
            display_name="Catalog ID",
            required=True,
            default="",
            description="Yandex Cloud catalog (folder) identifier",
        ),
        "systemMessage": IOField(
            type="string",
            display_name="System Message",
            default="",
            description="Instruction that sets the context (system role)",
            show_for_operations=["textCompletion", "chat"],
        ),
        "userMessage": IOField(
            type="string",
            display_name="Prompt",
            default="",
            description="Request text for the model (user role)",
            show_for_operations=["textCompletion"],
        ),
        "messages": IOField(
            type="fixedCollection",
            display_name="Messages",
            default={},
            multiple_values=True,
            show_for_operations=["chat"],
            values={
                "role": IOField(
                    type="options",
                    display_name="Role",
                    default="user",
                    options=[OptionValue(name="User", value="user"), OptionValue(name="Assistant", value="assistant")],
                ),
                "text": IOField(type="string", display_name="Text", default=""),
            },
        ),
        "additionalOptions": IOField(
            type="collection",
            display_name="Additional Options",
            default={},
            values={
                "temperature": IOField(
                    type="number",
                    display_name="Temperature",
                    default=0.6,
                    min_value=0,
                    max_value=1,
                    step=0.1,
                    description="Values near 0 give more deterministic answers, values near 1 more random ones",
                ),
                "maxTokens": IOField(
                    type="number",
                    display_name="Max Tokens",
                    default=2000,
                    min_value=1,
                    max_value=8192,
                    description="Maximum length of the generated answer in tokens",
                ),
                "reasoningMode": IOField(
                    type="options",
                    display_name="Reasoning Mode",
                    default=ReasoningMode.DISABLED.value,
                    options=[OptionValue(name=m.value.title(), value=m.value) for m in ReasoningMode],
                ),
            },
        ),
    },
    outputs={
        "result": IOField(type="object"),
        "usage": IOField(type="object"),
        "completionResponse": IOField(type="object"),
    },
    impl={"type": "python", "module": "yandexgpt_nodes.plugins.yandexgpt.completion", "function": "run"},  # type: ignore[arg-type]
)


def _drop_none(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: v for k, v in data.items() if v is not None}
    return data


class AdditionalOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    temperature: float = 0.6
    max_tokens: int = Field(2000, alias="maxTokens")
    reasoning_mode: str = Field(ReasoningMode.DISABLED.value, alias="reasoningMode")

    @model_validator(mode="before")
    @classmethod
    def unset_to_default(cls, data):
        return _drop_none(data)


class CompletionParams(BaseModel):
    # Whole-value placeholders may resolve to numbers from the item
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    operation: str = "textCompletion"
    catalog_id: str = Field("", validation_alias=AliasChoices("catalogId", "folderId", "catalog_id"))
    system_message: str = Field("", alias="systemMessage")
    user_message: str = Field("", alias="userMessage")
    messages: List[ChatMessage] = []
    additional_options: AdditionalOptions = Field(default_factory=AdditionalOptions, alias="additionalOptions")

    @model_validator(mode="before")
    @classmethod
    def unset_to_default(cls, data):
        return _drop_none(data)

    @field_validator("messages", mode="before")
    @classmethod
    def unwrap_collection(cls, v):
        # Hosts send fixed collections as {"messagesValues": [...]}
        if isinstance(v, dict):
            return v.get("messagesValues") or []
        return v


def build_request(raw: Dict[str, Any]) -> GenerationRequest:
    params = CompletionParams.model_validate(raw)
    messages: List[ChatMessage] = []
    if params.system_message:
        messages.append(ChatMessage(role="system", text=params.system_message))

    if params.operation == "textCompletion":
        if params.user_message:
            messages.append(ChatMessage(role="user", text=params.user_message))
    elif params.operation == "chat":
        messages.extend(ChatMessage(role=m.role, text=m.text) for m in params.messages)

    opts = params.additional_options
    return GenerationRequest(
        model_uri=f"gpt://{params.catalog_id}/yandexgpt",
        completion_options=CompletionOptions(
            temperature=opts.temperature,
            max_tokens=str(opts.max_tokens),
            reasoning_options=ReasoningOptions(mode=opts.reasoning_mode),
        ),
        messages=messages,
    )


async def run(params: Dict[str, Any], item: Dict[str, Any], creds: Optional[Dict[str, Any]], ctx):
    api_key = (creds or {}).get("apiKey") or ""
    request = build_request(params)
    endpoint = get_settings().completion_endpoint
    ctx.log.debug(f"yandexgpt: POST {endpoint} model={request.model_uri} messages={len(request.messages)}")
    response = await post_json(ctx.http, endpoint, request.payload(), headers=api_key_headers(api_key))
    body = response if isinstance(response, dict) else {}
    return {
        "result": body.get("result"),
        "usage": body.get("usage"),
        "completionResponse": response,
    }
