from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from .config import get_settings
from .schema import IOField


MASK = "********"


class CredentialSpec(BaseModel):
    name: str
    display_name: str
    documentation_url: Optional[str] = None
    properties: Dict[str, IOField] = Field(default_factory=dict)

    def masked(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Return a copy of ``values`` with every password property hidden."""
        out = dict(values)
        for key, field in self.properties.items():
            if field.password and out.get(key):
                out[key] = MASK
        return out


YANDEX_GPT_API = CredentialSpec(
    name="yandexGptApi",
    display_name="Yandex GPT API",
    documentation_url="https://cloud.yandex.ru/ru/docs/yandexgpt/api-ref/",
    properties={
        "apiKey": IOField(type="string", display_name="API Key", default="", required=True, password=True),
    },
)

CREDENTIALS: Dict[str, CredentialSpec] = {YANDEX_GPT_API.name: YANDEX_GPT_API}


async def env_cred_resolver(provider: Optional[str], credential_id: Optional[str]) -> Dict[str, Any]:
    # Storage is owned by the host; locally the key comes from the environment
    if provider == YANDEX_GPT_API.name:
        api_key = get_settings().yandex_api_key
        return {"apiKey": api_key} if api_key else {}
    return {}
