from typing import Type, TypeVar

from flask import request
from pydantic import BaseModel

from teatro.errors import InvalidInputError

Model = TypeVar("Model", bound=BaseModel)


def parse_body(model: Type[Model]) -> Model:
    """JSON тела запроса -> pydantic-модель (ValidationError -> 400)"""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidInputError("Corpo da requisição deve ser um objeto JSON")
    return model.model_validate(data)
