from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Mapping

from flask import jsonify, request

from ..core.exceptions import NotFoundError, ValidationError
from .serialization import to_json

logger = logging.getLogger(__name__)


def api_errors(failure_message: str):
    """Translate service errors into JSON responses.

    ValidationError -> 400, NotFoundError -> 404, anything else (including
    driver errors from the store) -> 500 with `failure_message`.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return jsonify({"message": "Dados inválidos", "errors": [str(e)]}), 400
            except NotFoundError as e:
                return jsonify({"message": str(e)}), 404
            except Exception:
                logger.exception("%s (%s %s)", failure_message, request.method, request.path)
                return jsonify({"message": failure_message}), 500

        return wrapper

    return decorator


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Corpo da requisição deve ser um objeto JSON")
    return data


def pick_fields(body: Mapping[str, Any], mapping: Mapping[str, str]) -> dict:
    """Keep only known camelCase keys, renamed to their snake_case field names."""
    unknown = sorted(set(body) - set(mapping))
    if unknown:
        raise ValidationError(f"Campos desconhecidos: {', '.join(unknown)}")
    return {mapping[k]: v for k, v in body.items()}


def optional_int_arg(name: str) -> int | None:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Parâmetro {name} inválido")


def ok(payload: Any, status: int = 200):
    return jsonify(to_json(payload)), status


def no_content():
    return "", 204
