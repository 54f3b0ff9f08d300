"""Request and response validation shared by the domain API modules."""
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from social_sports.errors import ClientValidationError, NetworkError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse(model: type[ModelT], data: Any) -> ModelT:
    """Validate a response body, reporting a malformed one as a transport failure."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        logger.error("Malformed %s in response: %s", model.__name__, exc)
        raise NetworkError(f"Unexpected response format for {model.__name__}") from exc


def build_request(model: type[ModelT], data: Any) -> ModelT:
    """Validate caller-supplied input; failures are raised before any request is sent."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ClientValidationError(str(exc)) from exc


def parse_list(model: type[ModelT], data: Any) -> list[ModelT]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise NetworkError(f"Expected a list of {model.__name__}, got {type(data).__name__}")
    return [parse(model, item) for item in data]
