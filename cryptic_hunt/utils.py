from collections.abc import Mapping

from flask import request

from cryptic_hunt.services.progression.errors import ValidationError


def request_data() -> Mapping:
    """JSON object body, falling back to form fields."""
    data = request.get_json(silent=True) or request.form
    if not isinstance(data, Mapping):
        raise ValidationError('missing')
    return data
