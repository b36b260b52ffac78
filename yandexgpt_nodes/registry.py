import re
from typing import Dict, List, Optional, Tuple
from .schema import NodeSpec


_NODES: Dict[Tuple[str, str], NodeSpec] = {}


def _version_key(version: str) -> Tuple:
    return tuple(int(p) for p in re.findall(r"\d+", version))


def install_nodes(specs: List[dict]) -> int:
    for d in specs:
        spec = d if isinstance(d, NodeSpec) else NodeSpec(**d)
        _NODES[(spec.name, spec.version)] = spec
    return len(specs)


def builtin_specs() -> List[NodeSpec]:
    from .plugins.yandexgpt.completion import NODE_SPEC

    return [NODE_SPEC]


def ensure_builtin_nodes() -> None:
    install_nodes(builtin_specs())


def _infer_required_keys(spec: NodeSpec) -> List[str]:
    provider = (spec.auth.provider or "").lower()
    if "yandex" in provider:
        return ["YANDEX_GPT_API_KEY"]
    return []


def list_nodes(category: Optional[str] = None) -> List[dict]:
    ensure_builtin_nodes()
    out: List[dict] = []
    for spec in _NODES.values():
        if category and spec.category != category:
            continue
        d = {"name": spec.name, "version": spec.version, "title": spec.title, "category": spec.category}
        doc = spec.doc
        if not doc and spec.inputs:
            # Compose a short description from the first few inputs
            doc = "Inputs: " + ", ".join(list(spec.inputs.keys())[:4])
        if doc:
            d["doc"] = doc
        req_keys = _infer_required_keys(spec)
        if req_keys:
            d["required_keys"] = req_keys
        out.append(d)
    return out


def get_node(name: str, version: Optional[str] = None) -> Optional[NodeSpec]:
    ensure_builtin_nodes()
    if version:
        return _NODES.get((name, version))
    candidates = [spec for (n, _), spec in _NODES.items() if n == name]
    if not candidates:
        return None
    return max(candidates, key=lambda s: _version_key(s.version))
