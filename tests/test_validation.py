"""Tests for offset document schema validation."""

import jsonschema
import pytest

from slsb.validation import validate_offsets_json


def test_valid_document():
    validate_offsets_json({"abc12345": {"stage001": [{"x": 1.0}]}})


def test_empty_document_is_valid():
    validate_offsets_json({})


def test_root_must_be_object():
    with pytest.raises(jsonschema.ValidationError):
        validate_offsets_json([{"x": 1.0}])


def test_scene_entry_must_be_object():
    with pytest.raises(jsonschema.ValidationError):
        validate_offsets_json({"abc12345": [1, 2, 3]})


def test_scene_id_must_not_be_empty():
    with pytest.raises(jsonschema.ValidationError):
        validate_offsets_json({"": {}})
