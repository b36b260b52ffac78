import importlib
from typing import Any, Awaitable, Callable, Dict, Optional
from .schema import NodeSpec, ImplPython


PluginFn = Callable[[Dict[str, Any], Dict[str, Any], Optional[Dict[str, Any]], Any], Awaitable[Dict[str, Any]]]


def load_python_impl(spec: NodeSpec) -> PluginFn:
    from .runtime import ExecutionError

    impl: ImplPython = spec.impl
    mod = importlib.import_module(impl.module)
    fn = getattr(mod, impl.function, None)
    if not fn:
        raise ExecutionError(f"Function {impl.function} not found in {impl.module}")
    return fn
