from enum import Enum
from typing import Dict, List, Literal, Optional, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OptionValue(BaseModel):
    name: str
    value: str
    description: Optional[str] = None


class IOField(BaseModel):
    type: Literal[
        "string", "number", "boolean", "options", "collection", "fixedCollection", "object", "array", "any"
    ] = "string"
    display_name: Optional[str] = None
    required: bool = False
    default: Optional[Any] = None
    description: Optional[str] = None
    options: List[OptionValue] = []
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    step: Optional[float] = None
    multiple_values: bool = False
    password: bool = False
    # Operations for which the field is shown; empty means always
    show_for_operations: List[str] = []
    values: Dict[str, "IOField"] = Field(default_factory=dict)


IOField.model_rebuild()


class AuthSpec(BaseModel):
    type: Literal["none", "api_key"] = "none"
    provider: Optional[str] = None
    required: bool = True


class ImplPython(BaseModel):
    type: Literal["python"] = "python"
    module: str
    function: str = "run"


class NodeSpec(BaseModel):
    name: str
    version: str = "1.0.0"
    title: str
    category: str
    group: List[str] = []
    subtitle: Optional[str] = None
    doc: Optional[str] = None
    auth: AuthSpec = AuthSpec()
    inputs: Dict[str, IOField] = Field(default_factory=dict)
    outputs: Dict[str, IOField] = Field(default_factory=dict)
    impl: ImplPython

    @field_validator("name")
    @classmethod
    def name_must_have_dot(cls, v):
        if "." not in v:
            raise ValueError("name should be namespaced like provider.action")
        return v


class ReasoningMode(str, Enum):
    DISABLED = "DISABLED"
    ENABLED = "ENABLED"
    DETAILED = "DETAILED"


class ChatMessage(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    # Role is passed to the provider as-is
    role: str
    text: str


class ReasoningOptions(BaseModel):
    mode: str = ReasoningMode.DISABLED.value


class CompletionOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stream: Literal[False] = False
    temperature: float = 0.6
    max_tokens: str = Field("2000", alias="maxTokens")
    reasoning_options: ReasoningOptions = Field(default_factory=ReasoningOptions, alias="reasoningOptions")


class GenerationRequest(BaseModel):
    """Body of a single completion call, serialized with the provider's camelCase keys."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    model_uri: str = Field(alias="modelUri")
    completion_options: CompletionOptions = Field(default_factory=CompletionOptions, alias="completionOptions")
    messages: List[ChatMessage] = []

    def payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
