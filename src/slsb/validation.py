"""JSON Schema checks for documents imported into a project."""

from __future__ import annotations

import functools
import json
from importlib import resources

import jsonschema


@functools.cache
def _offsets_schema() -> dict[str, object]:
    text = resources.files("slsb").joinpath("schemas/offsets.schema.json").read_text("utf-8")
    return json.loads(text)


def validate_offsets_json(data: object) -> None:
    """Check the outer shape of an offset document.

    An offset document maps scene ids to ``{stage_id: [offset, ...]}``
    mappings. Only the top two levels are checked here; stage entries are
    checked against the scene they target.

    Raises
    ------
    jsonschema.ValidationError
        If *data* is not a mapping of non-empty scene ids to mappings.
    """
    jsonschema.validate(data, _offsets_schema())
