"""Tests for the pydantic serialization adapter."""

import pytest
from pydantic import BaseModel, ValidationError

from fuzzy_path import FuzzyPath, dump_fuzzy_path, load_fuzzy_path, load_fuzzy_path_json


class Album(BaseModel):
    """Model with a FuzzyPath field."""

    title: str
    path: FuzzyPath


class TestModelField:
    """Tests for FuzzyPath as a pydantic model field."""

    def test_str_input_is_normalized(self):
        """Test that text input goes through normalization."""
        album = Album(title="Trip", path="Photos\\2023\\Trip//")
        assert album.path == FuzzyPath("photos/2023/trip")

    def test_instance_input_kept(self):
        """Test that an existing FuzzyPath is accepted."""
        path = FuzzyPath("a/b")
        album = Album(title="Trip", path=path)
        assert album.path == path

    def test_dump_python(self):
        """Test model_dump writes the normalized text."""
        album = Album(title="Trip", path="C:\\Photos")
        assert album.model_dump() == {"title": "Trip", "path": "c:/photos"}

    def test_dump_json(self):
        """Test model_dump_json writes the normalized text."""
        album = Album(title="Trip", path="/Photos/")
        assert album.model_dump_json() == '{"title":"Trip","path":"/photos"}'

    def test_validate_json_normalizes(self):
        """Test that JSON input is re-normalized."""
        album = Album.model_validate_json('{"title": "Trip", "path": "C:\\\\Photos\\\\"}')
        assert album.path.as_str() == "c:/photos"

    def test_json_round_trip(self):
        """Test dump then validate gives an equal model."""
        album = Album(title="Trip", path="\\\\HELLO\\\\world")
        assert Album.model_validate_json(album.model_dump_json()) == album

    def test_rejects_non_text(self):
        """Test that non-text input is a validation error."""
        with pytest.raises(ValidationError):
            Album(title="Trip", path=42)

        with pytest.raises(ValidationError):
            Album(title="Trip", path=b"photos")

    def test_rejects_non_text_json(self):
        """Test that a JSON number is a validation error."""
        with pytest.raises(ValidationError):
            Album.model_validate_json('{"title": "Trip", "path": 42}')

    def test_json_schema_is_string(self):
        """Test the field is described as a plain string."""
        schema = Album.model_json_schema()
        assert schema["properties"]["path"]["type"] == "string"


class TestHelpers:
    """Tests for the module-level load/dump helpers."""

    def test_dump(self):
        """Test dump returns the normalized text."""
        assert dump_fuzzy_path(FuzzyPath("A\\B\\")) == "a/b"

    def test_load(self):
        """Test load normalizes text."""
        assert load_fuzzy_path("A\\B\\") == FuzzyPath("a/b")

    def test_load_does_not_trust_input(self):
        """Test that loading re-normalizes text written from an unchecked value."""
        unchecked = FuzzyPath.from_str_unchecked("A//B/")
        assert load_fuzzy_path(dump_fuzzy_path(unchecked)) == FuzzyPath("a/b")

    def test_load_rejects_non_text(self):
        """Test load raises pydantic's error for non-text."""
        with pytest.raises(ValidationError):
            load_fuzzy_path(["a", "b"])

    def test_load_json(self):
        """Test loading a JSON string document."""
        assert load_fuzzy_path_json('"A/B/"') == FuzzyPath("a/b")

    def test_load_json_rejects_non_string(self):
        """Test loading a JSON number raises."""
        with pytest.raises(ValidationError):
            load_fuzzy_path_json("123")
