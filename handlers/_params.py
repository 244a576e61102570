"""
handlers/_params.py
-------------------
Query-string helpers shared by the blueprints.
"""

from typing import Optional

from flask import request

from utils.errors import ValidationFailure


def arg_choice(name: str, choices: tuple, default: str) -> str:
    value = request.args.get(name) or default
    if value not in choices:
        raise ValidationFailure([f"{name}: must be one of {', '.join(choices)}"])
    return value


def arg_int(name: str, default: Optional[int] = None, minimum: int = 1) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationFailure([f"{name}: must be an integer"]) from None
    if value < minimum:
        raise ValidationFailure([f"{name}: must be at least {minimum}"])
    return value


def json_body() -> object:
    """The request's JSON body, or None when it is missing or malformed."""
    return request.get_json(silent=True)
