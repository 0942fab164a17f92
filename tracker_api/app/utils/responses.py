from typing import Any, Dict


def _meta(code: int, error: str = "", info: str = "") -> Dict[str, Any]:
    return {"code": code, "error": error, "info": info}


def ok(data: Any, info: str = "") -> Dict[str, Any]:
    """Return a success envelope."""
    return {"meta": _meta(200, info=info), "response": data}


def err(code: int, message: str, info: str = "") -> Dict[str, Any]:
    """Return an error envelope.

    The request id travels in the ``X-Request-ID`` header, not the body.
    """
    return {"meta": _meta(code, error=message, info=info), "response": None}
