"""Tests for Pydantic schemas and upload validation."""

import io
import uuid

import pytest
from fastapi import UploadFile
from pydantic import ValidationError

from config import StorageConfig
from contacts_api.exceptions import InvalidFileTypeError, PhotoTooLargeError
from contacts_api.models import Category, Contact
from contacts_api.schemas import CategoryRequest, ContactForm, ContactResponse, ErrorResponse
from contacts_api.uploads import has_allowed_extension, to_photo_upload

ALLOWED = [".jpg", ".jpeg", ".png"]


class TestCategoryRequest:
    """Test cases for CategoryRequest schema."""

    def test_name_is_stripped(self):
        assert CategoryRequest(name="  Family ").name == "Family"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            CategoryRequest(name="   ")
        assert "Name is required" in str(exc_info.value)

    def test_missing_name(self):
        with pytest.raises(ValidationError) as exc_info:
            CategoryRequest()

        errors = exc_info.value.errors()
        assert len(errors) == 1
        assert errors[0]["type"] == "missing"
        assert errors[0]["loc"] == ("name",)


class TestContactForm:
    """Test cases for ContactForm schema."""

    def test_valid(self):
        category_id = uuid.uuid4()
        form = ContactForm(name=" Ana ", email=" ana@example.com ", phone=" 555 ", category_id=str(category_id))

        assert form.name == "Ana"
        assert form.email == "ana@example.com"
        assert form.phone == "555"
        assert form.category_id == category_id

    @pytest.mark.parametrize("phone", [None, "", "   "])
    def test_empty_phone_is_none(self, phone):
        form = ContactForm(name="Ana", email="ana@example.com", phone=phone, category_id=uuid.uuid4())
        assert form.phone is None

    def test_blank_email_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ContactForm(name="Ana", email=" ", category_id=uuid.uuid4())
        assert "Email is required" in str(exc_info.value)

    def test_invalid_category_id(self):
        with pytest.raises(ValidationError) as exc_info:
            ContactForm(name="Ana", email="ana@example.com", category_id="not-a-uuid")
        assert exc_info.value.errors()[0]["loc"] == ("category_id",)


class TestContactResponse:
    """Test cases for ContactResponse schema."""

    @pytest.fixture
    def contact(self):
        category = Category(id=uuid.uuid4(), name="Family")
        return Contact(
            id=uuid.uuid4(),
            name="Ana",
            email="ana@example.com",
            photo="abc_cat.png",
            category=category,
        )

    def test_local_photo_url(self, contact):
        response = ContactResponse.from_contact(contact, StorageConfig(backend="local"))

        assert response.photo == "abc_cat.png"
        assert response.photo_url == "/contacts/image/abc_cat.png"
        assert response.category.name == "Family"

    def test_cdn_photo_url(self, contact):
        config = StorageConfig(backend="s3", bucket_name="b", cdn_url="https://cdn.example.com/")

        response = ContactResponse.from_contact(contact, config)

        assert response.photo_url == "https://cdn.example.com/abc_cat.png"

    def test_no_photo(self, contact):
        contact.photo = None

        response = ContactResponse.from_contact(contact, StorageConfig(backend="local"))

        assert response.photo is None
        assert response.photo_url is None

    def test_json_serialization(self, contact):
        data = ContactResponse.from_contact(contact, StorageConfig()).model_dump(mode="json")

        assert data["id"] == str(contact.id)
        assert data["category"] == {"id": str(contact.category.id), "name": "Family"}


def test_error_response_has_timestamp():
    data = ErrorResponse(status=404, message="Contact not found").model_dump(mode="json")

    assert data["status"] == 404
    assert data["message"] == "Contact not found"
    assert data["timestamp"]


class TestPhotoUploadValidation:
    """Test cases for multipart photo validation."""

    @pytest.mark.parametrize("filename, allowed", [
        ("cat.png", True),
        ("cat.PNG", True),
        ("cat.jpeg", True),
        ("cat.jpg", True),
        ("cat.gif", False),
        ("cat", False),
        ("cat.png.exe", False),
    ])
    def test_has_allowed_extension(self, filename, allowed):
        assert has_allowed_extension(filename, ALLOWED) is allowed

    def test_no_upload(self):
        assert to_photo_upload(None, ALLOWED, 1024) is None

    def test_upload_without_filename(self):
        upload = UploadFile(file=io.BytesIO(b""), filename="")
        assert to_photo_upload(upload, ALLOWED, 1024) is None

    def test_valid_upload(self):
        upload = UploadFile(file=io.BytesIO(b"png bytes"), filename="cat.png", size=9)

        photo = to_photo_upload(upload, ALLOWED, 1024)

        assert photo.filename == "cat.png"
        assert photo.content.read() == b"png bytes"

    def test_size_measured_when_unknown(self):
        upload = UploadFile(file=io.BytesIO(b"x" * 100), filename="cat.png")

        with pytest.raises(PhotoTooLargeError):
            to_photo_upload(upload, ALLOWED, 10)

        photo = to_photo_upload(UploadFile(file=io.BytesIO(b"x" * 100), filename="cat.png"), ALLOWED, 100)
        assert photo.content.read() == b"x" * 100

    def test_invalid_extension(self):
        upload = UploadFile(file=io.BytesIO(b"text"), filename="notes.txt", size=4)

        with pytest.raises(InvalidFileTypeError):
            to_photo_upload(upload, ALLOWED, 1024)
