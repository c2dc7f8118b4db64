from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from careercoach.errors import ParseError
from careercoach.schemas.recommendation import CareerRecommendation, CareerRecommendationSet, CareerRoadmap


T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    value: T | None = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ParseResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, message: str) -> "ParseResult[T]":
        return cls(error=ParseError(message))


def find_balanced_object(text: str) -> str | None:
    """Return the first balanced `{...}` region of `text`, or None.

    Braces inside JSON string literals are ignored, so prose such as
    `Here you go: {"a": "}"} hope it helps` yields `{"a": "}"}`.
    """

    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for idx in range(start, len(text)):
            ch = text[idx]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return text[start : idx + 1]
        start = text.find("{", start + 1)
    return None


def extract_json_object(text: str | None) -> ParseResult[dict[str, Any]]:
    if not text or not text.strip():
        return ParseResult.failure("empty response text")

    region = find_balanced_object(text)
    if region is None:
        return ParseResult.failure("no balanced JSON object found")

    try:
        value = json.loads(region)
    except ValueError as exc:
        return ParseResult.failure(f"embedded JSON could not be decoded: {exc}")

    if not isinstance(value, dict):
        return ParseResult.failure("embedded JSON is not an object")
    return ParseResult.success(value)


def validate_model(data: Any, model: type[M]) -> ParseResult[M]:
    try:
        return ParseResult.success(model.model_validate(data))
    except ValidationError as exc:
        return ParseResult.failure(f"{model.__name__} shape mismatch: {exc.error_count()} error(s)")
    except (TypeError, OverflowError) as exc:
        return ParseResult.failure(f"{model.__name__} could not be built: {exc}")


def parse_model(text: str | None, model: type[M], *, envelope: str | None = None) -> ParseResult[M]:
    """Extract the embedded object and validate it against `model`.

    `envelope` names a key the provider sometimes wraps the payload in
    (e.g. {"roadmap": {...}}); it is unwrapped when present.
    """

    extracted = extract_json_object(text)
    if not extracted.ok:
        return ParseResult(error=extracted.error)
    data = extracted.value
    if envelope and isinstance(data.get(envelope), dict):
        data = data[envelope]
    return validate_model(data, model)


def parse_recommendations(text: str | None) -> ParseResult[list[CareerRecommendation]]:
    extracted = extract_json_object(text)
    if not extracted.ok:
        return ParseResult(error=extracted.error)

    data = extracted.value
    items = data.get("recommendations")
    if items is None:
        # A single recommendation object instead of a list.
        items = [data]

    validated = validate_model({"recommendations": items}, CareerRecommendationSet)
    if not validated.ok:
        return ParseResult(error=validated.error)
    return ParseResult.success(validated.value.recommendations)


def parse_roadmap(text: str | None) -> ParseResult[CareerRoadmap]:
    return parse_model(text, CareerRoadmap, envelope="roadmap")
