from typing import AsyncIterator, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from yandexgpt_nodes.config import get_settings
from yandexgpt_nodes.credentials import CREDENTIALS, env_cred_resolver
from yandexgpt_nodes.registry import get_node, list_nodes
from yandexgpt_nodes.runtime import Context, ExecutionError, NodeOperationError, run_node


router = APIRouter(prefix="/api/nodes")


class RunIn(BaseModel):
    name: str
    version: Optional[str] = None
    params: dict = {}
    items: list[dict] = []
    credential_id: Optional[str] = None
    continue_on_fail: Optional[bool] = None


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=get_settings().http_timeout) as http:
        yield http


@router.get("")
def api_list_nodes(category: Optional[str] = None):
    return list_nodes(category)


@router.get("/credentials")
async def api_list_credentials():
    out = []
    for spec in CREDENTIALS.values():
        values = await env_cred_resolver(spec.name, None)
        out.append({**spec.model_dump(), "configured": bool(values), "values": spec.masked(values)})
    return out


@router.post("/run")
async def api_run_node(body: RunIn, http: httpx.AsyncClient = Depends(get_http_client)):
    spec = get_node(body.name, body.version)
    if not spec:
        raise HTTPException(404, f"node {body.name} not found")

    continue_on_fail = body.continue_on_fail
    if continue_on_fail is None:
        continue_on_fail = get_settings().continue_on_fail
    ctx = Context(http=http, cred_resolver=env_cred_resolver, continue_on_fail=continue_on_fail)
    try:
        out = await run_node(spec, {**body.params, "credential_id": body.credential_id}, body.items, ctx)
    except NodeOperationError as e:
        raise HTTPException(502, {"message": e.message, "item_index": e.item_index})
    except ExecutionError as e:
        raise HTTPException(400, {"message": str(e), "item_index": None})
    return {"items": out}
