"""Tests for Content-Type parsing and classification."""

import pytest
from httpprovider.http.content_type import (
    ContentClassifier,
    MediaTypeError,
    is_content_type_text,
    parse_media_type,
)


class TestParseMediaType:
    """Tests for parse_media_type."""

    def test_type_and_charset(self):
        """Test parsing a type with a charset parameter."""
        media_type, params = parse_media_type("text/plain; charset=utf-8")
        assert media_type == "text/plain"
        assert params == {"charset": "utf-8"}

    def test_lowercases_type_and_param_names(self):
        """Test that media type and parameter names are lower-cased."""
        media_type, params = parse_media_type("Text/HTML; Charset=UTF-8")
        assert media_type == "text/html"
        assert params == {"charset": "UTF-8"}

    def test_quoted_parameter(self):
        """Test quoted-string parameter values."""
        _, params = parse_media_type('multipart/form-data; boundary="a b;c"')
        assert params["boundary"] == "a b;c"

    def test_trailing_semicolon_ignored(self):
        """Test that a trailing semicolon is tolerated."""
        media_type, params = parse_media_type("application/json;")
        assert media_type == "application/json"
        assert params == {}

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "not a mime type;;;",
            "text/",
            "text/plain extra",
            "text/plain; charset",
            "text/plain; charset=utf-8; charset=us-ascii",
            'text/plain; charset="utf-8',
        ],
    )
    def test_invalid_values_rejected(self, value):
        """Test that malformed values raise MediaTypeError."""
        with pytest.raises(MediaTypeError):
            parse_media_type(value)


class TestContentClassifier:
    """Tests for ContentClassifier."""

    @pytest.fixture
    def classifier(self):
        return ContentClassifier()

    @pytest.mark.parametrize(
        "content_type",
        [
            "text/plain; charset=utf-8",
            "text/plain",
            "text/html; charset=US-ASCII",
            "application/json",
            "application/samlmetadata+xml",
            "application/samlmetadata+xml; charset=utf-8",
        ],
    )
    def test_text_types(self, classifier, content_type):
        """Test media types classified as text."""
        assert classifier.classify(content_type).is_text is True

    @pytest.mark.parametrize(
        "content_type",
        [
            "application/octet-stream",
            "text/plain; charset=iso-8859-1",
            "application/json; charset=utf-16",
            "application/jsonp",
            "application/xml",
            "image/png",
            "not a mime type;;;",
            "",
        ],
    )
    def test_non_text_types(self, classifier, content_type):
        """Test media types classified as non-text."""
        assert classifier.classify(content_type).is_text is False

    def test_classification_exposes_params(self, classifier):
        """Test that parsed parameters are returned with the classification."""
        classification = classifier.classify("text/csv; charset=utf-8; header=present")
        assert classification.media_type == "text/csv"
        assert classification.params["header"] == "present"

    def test_helper_function(self):
        """Test the is_content_type_text shortcut."""
        assert is_content_type_text("text/markdown") is True
        assert is_content_type_text("application/pdf") is False
