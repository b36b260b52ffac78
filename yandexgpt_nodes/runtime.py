import logging
import re
from typing import Any, Dict, List, Optional
from .schema import NodeSpec, ImplPython
from .exec_python import load_python_impl


_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")


class ExecutionError(Exception):
    ...


class NodeOperationError(ExecutionError):
    """Raised when a node fails on an item and the run is not allowed to continue."""

    def __init__(self, node_name: str, error: BaseException, item_index: Optional[int] = None):
        self.node_name = node_name
        self.item_index = item_index
        self.message = str(error)
        where = f" (item {item_index})" if item_index is not None else ""
        super().__init__(f"{node_name}{where}: {self.message}")


class Context:
    def __init__(self, http, logger=None, cred_resolver=None, continue_on_fail: bool = False):
        self.http = http
        self.log = logger or logging.getLogger("yandexgpt_nodes.runtime")
        self.cred_resolver = cred_resolver
        self.continue_on_fail = continue_on_fail


def _item_scope(item: dict, index: int) -> dict:
    return {"json": item.get("json") or {}, "pairedItem": item.get("pairedItem"), "$index": index}


def _lookup(path: str, scope: dict) -> Any:
    parts = path.strip().split(".")
    if parts[0] not in scope:
        # Bare paths read from the item's json payload
        parts = ["json", *parts]
    current: Any = scope
    for part in parts:
        if isinstance(current, dict):
            current = current.get(part)
        elif isinstance(current, (list, tuple)) and part.isdigit() and int(part) < len(current):
            current = current[int(part)]
        else:
            raise ExecutionError(f"Unable to resolve placeholder '{path}' for item {scope['$index']}")
    return current


def render_parameters(value: Any, item: dict, index: int = 0) -> Any:
    """Resolve placeholders in node parameters against one input item.

    ``${json.field}`` and the shorthand ``${field}`` read the item's payload,
    ``${$index}`` is the item's position. A parameter that is exactly one
    placeholder keeps the resolved value's type; placeholders embedded in
    text are stringified, with missing values rendered as an empty string.
    """
    scope = _item_scope(item, index)

    def _render(v: Any) -> Any:
        if isinstance(v, dict):
            return {k: _render(x) for k, x in v.items()}
        if isinstance(v, list):
            return [_render(x) for x in v]
        if not isinstance(v, str) or "${" not in v:
            return v
        whole = _PLACEHOLDER_RE.fullmatch(v)
        if whole:
            return _lookup(whole.group(1), scope)

        def _text(m: re.Match) -> str:
            found = _lookup(m.group(1), scope)
            return "" if found is None else str(found)

        return _PLACEHOLDER_RE.sub(_text, v)

    return _render(value)


async def run_node(spec: NodeSpec, params: Dict[str, Any], items: List[Dict[str, Any]], ctx: Context) -> List[Dict[str, Any]]:
    creds = None
    if spec.auth and spec.auth.type != "none":
        credential_id = params.get("credential_id") if isinstance(params, dict) else None
        if ctx.cred_resolver is None:
            raise ExecutionError("No credential resolver configured")
        creds = await ctx.cred_resolver(spec.auth.provider, credential_id)
        if spec.auth.required and not creds:
            raise ExecutionError(f"No credentials available for {spec.auth.provider}")

    if not isinstance(spec.impl, ImplPython):
        raise ExecutionError(f"Unknown impl for {spec.name}")
    fn = load_python_impl(spec)

    out: List[Dict[str, Any]] = []
    for i, item in enumerate(items):
        try:
            item_params = render_parameters(params, item, i)
            result = await fn(item_params, item, creds, ctx)
        except Exception as e:
            if ctx.continue_on_fail:
                ctx.log.warning(f"{spec.name}: item {i} failed, continuing: {e}")
                out.append({"json": {"error": str(e)}, "pairedItem": {"item": i}})
                continue
            ctx.log.error(f"{spec.name}: item {i} failed: {e}")
            raise NodeOperationError(spec.name, e, item_index=i) from e
        out.append({"json": result, "pairedItem": {"item": i}})
    return out
