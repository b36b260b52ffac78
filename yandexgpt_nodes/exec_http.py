from typing import Any, Dict, Optional

import httpx


def api_key_headers(api_key: str) -> Dict[str, str]:
    return {"Authorization": f"Api-Key {api_key}"}


async def post_json(http: httpx.AsyncClient, url: str, body: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> Any:
    """POST ``body`` as JSON and return the decoded JSON response.

    Transport errors, non-2xx statuses and undecodable bodies all surface as
    exceptions; nothing is retried here.
    """
    hdrs = {"Content-Type": "application/json", **(headers or {})}
    r = await http.post(url, json=body, headers=hdrs)
    r.raise_for_status()
    return r.json()
