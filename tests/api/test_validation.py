"""Tests for validate() and the @validate_request decorator."""

import pytest
from flask import Flask, jsonify
from pydantic import BaseModel, Field

from usergate.api.validation import ValidationResult, validate, validate_request
from usergate.exceptions import ValidationError
from usergate.gateway.errors import register_error_handlers


class MockCreateRequest(BaseModel):
    """Schema for request body validation."""
    name: str = Field(..., min_length=2)
    password: str


class MockUpdateRequest(BaseModel):
    """Schema with all optional fields."""
    name: str | None = None


@pytest.fixture
def validation_client():
    app = Flask(__name__)
    register_error_handlers(app)

    @app.post("/create")
    @validate_request
    def create(data: MockCreateRequest):
        return jsonify({"name": data.name}), 201

    @app.put("/items/<item_id>")
    @validate_request
    def update(item_id: str, data: MockUpdateRequest):
        return jsonify({"item_id": item_id, "name": data.name})

    with app.test_client() as client:
        yield client


class TestValidate:
    """Tests for validate()."""

    def test_valid_data(self):
        """Valid data should produce an ok result."""
        result = validate(MockCreateRequest, {"name": "Widget", "password": "x"})

        assert result.ok
        assert result.unwrap().name == "Widget"

    def test_invalid_data_returns_error(self):
        """Invalid data should list every failing field."""
        result = validate(MockCreateRequest, {"name": "W"})

        assert not result.ok
        assert isinstance(result.error, ValidationError)
        fields = {e["field"] for e in result.error.details["errors"]}
        assert fields == {"name", "password"}

    def test_password_redacted_in_details(self):
        """Top-level passwords should be masked in error details."""
        result = validate(MockCreateRequest, {"name": "W", "password": "Secret123"})
        assert result.error.details["received"]["password"] == "***"

    def test_nested_password_redacted(self):
        """Passwords inside nested objects and lists should be masked too."""
        class Wrapper(BaseModel):
            user: MockCreateRequest

        result = validate(Wrapper, {
            "user": {"name": "W", "password": "Secret123"},
            "history": [{"old_password": "Older123"}],
        })
        received = result.error.details["received"]

        assert received["user"] == {"name": "W", "password": "***"}
        assert received["history"] == [{"old_password": "***"}]
        assert "Secret123" not in str(result.error.details)

    def test_non_object_rejected(self):
        """Non-object bodies should be rejected."""
        result = validate(MockCreateRequest, ["not", "an", "object"])

        assert not result.ok
        assert result.error.message == "Request body must be a JSON object"

    def test_unwrap_raises_error(self):
        """unwrap() should raise the stored error."""
        with pytest.raises(ValidationError):
            ValidationResult(error=ValidationError("bad")).unwrap()


class TestValidateRequest:
    """Tests for the @validate_request decorator."""

    def test_valid_body(self, validation_client):
        """A valid body should reach the view as a model."""
        response = validation_client.post("/create", json={"name": "Widget", "password": "x"})

        assert response.status_code == 201
        assert response.get_json() == {"name": "Widget"}

    def test_invalid_body_lists_field_messages(self, validation_client):
        """Invalid bodies should give 400 with one message per field."""
        response = validation_client.post("/create", json={"name": "W"})
        body = response.get_json()

        assert response.status_code == 400
        assert body["error"] == "BAD_REQUEST"
        assert isinstance(body["message"], list)
        assert any(message.startswith("name:") for message in body["message"])
        assert any(message.startswith("password:") for message in body["message"])

    def test_missing_body_treated_as_empty(self, validation_client):
        """A missing body should validate as an empty object."""
        response = validation_client.post("/create")
        assert response.status_code == 400

    def test_path_parameter_passed_through(self, validation_client):
        """Path parameters should reach the view unchanged."""
        response = validation_client.put("/items/abc", json={"name": "New"})

        assert response.status_code == 200
        assert response.get_json() == {"item_id": "abc", "name": "New"}

    def test_view_without_data_annotation_rejected(self):
        """Views without a data model annotation should fail at decoration."""
        with pytest.raises(TypeError):
            @validate_request
            def view(item_id: str):
                pass
