# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Builds the Flask app with an in-memory store and fake upstream clients so the
# whole HTTP surface can be exercised without MySQL, OpenRouter, OpenAI or
# Cloudinary.
# =============================================================================

import copy
import itertools
import os
import uuid
from datetime import datetime, timedelta

# Set up test environment BEFORE importing app.config, which reads it at import.
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("INIT_DB", "false")
os.environ.setdefault("RATELIMIT_ENABLED", "false")

import pytest

from app import create_app
from app.utils.database import DuplicateRecord

API = "/api/v1"
HOSTED_URL = "https://cdn.example/ai-branding/xyz.png"
GENERATED_URL = "https://images.example/tmp/generated.png"


# =============================================================================
# Test doubles
# =============================================================================

class InMemoryStore:
    """Dict-backed stand-in for MySQLStore with the same method surface."""

    def __init__(self):
        self.tables = {
            "users": {},
            "businesses": {},
            "media_files": {},
            "marketing_plans": {},
            "conversations": {},
        }
        self._clock = itertools.count()
        self._epoch = datetime(2025, 1, 1)
        self.schema_initialized = False

    def init_schema(self):
        self.schema_initialized = True

    def close(self, exception=None):
        pass

    def _now(self):
        return self._epoch + timedelta(seconds=next(self._clock))

    def _insert(self, table, row):
        row = dict(row, id=str(uuid.uuid4()), created_at=self._now())
        self.tables[table][row["id"]] = row
        return copy.deepcopy(row)

    def _get(self, table, row_id):
        row = self.tables[table].get(row_id)
        return copy.deepcopy(row) if row else None

    def _select(self, table, **filters):
        rows = [
            row for row in self.tables[table].values()
            if all(row.get(key) == value for key, value in filters.items() if value is not None)
        ]
        rows.sort(key=lambda row: row["created_at"], reverse=True)
        return copy.deepcopy(rows)

    def create_user(self, name, email, password_hash):
        if any(row["email"] == email for row in self.tables["users"].values()):
            raise DuplicateRecord(f"User {email} already exists")
        return self._insert("users", {"name": name, "email": email, "password_hash": password_hash})

    def get_user_by_id(self, user_id):
        return self._get("users", user_id)

    def get_user_by_email(self, email):
        for row in self.tables["users"].values():
            if row["email"] == email:
                return copy.deepcopy(row)
        return None

    def list_businesses(self, owner_id):
        return self._select("businesses", owner_id=owner_id)

    def create_business(self, owner_id, name, field, description=None, color_palette=None):
        return self._insert("businesses", {
            "name": name, "field": field, "description": description,
            "color_palette": color_palette, "owner_id": owner_id,
        })

    def get_business(self, business_id):
        return self._get("businesses", business_id)

    def update_business(self, business_id, changes):
        self.tables["businesses"][business_id].update(changes)
        return self.get_business(business_id)

    def delete_business(self, business_id):
        del self.tables["businesses"][business_id]
        for table in ("media_files", "marketing_plans", "conversations"):
            for row_id in [k for k, v in self.tables[table].items() if v.get("business_id") == business_id]:
                del self.tables[table][row_id]
        return 1

    def list_media_files(self, owner_id, business_id=None, media_type=None):
        return self._select("media_files", owner_id=owner_id, business_id=business_id, type=media_type)

    def create_media_file(self, owner_id, url, media_type, business_id=None):
        return self._insert("media_files", {
            "url": url, "type": media_type, "owner_id": owner_id, "business_id": business_id,
        })

    def get_media_file(self, media_id):
        return self._get("media_files", media_id)

    def delete_media_file(self, media_id):
        return 1 if self.tables["media_files"].pop(media_id, None) else 0

    def list_marketing_plans(self, owner_id, business_id=None):
        return self._select("marketing_plans", owner_id=owner_id, business_id=business_id)

    def create_marketing_plan(self, owner_id, business_id, content):
        return self._insert("marketing_plans", {
            "content": content, "owner_id": owner_id, "business_id": business_id,
        })

    def get_marketing_plan(self, plan_id):
        return self._get("marketing_plans", plan_id)

    def update_marketing_plan(self, plan_id, content):
        self.tables["marketing_plans"][plan_id]["content"] = content
        return self.get_marketing_plan(plan_id)

    def delete_marketing_plan(self, plan_id):
        return 1 if self.tables["marketing_plans"].pop(plan_id, None) else 0

    def list_conversations(self, owner_id, business_id):
        return self._select("conversations", owner_id=owner_id, business_id=business_id)

    def create_conversation(self, owner_id, business_id, prompt_content, response_content):
        return self._insert("conversations", {
            "prompt_content": prompt_content, "response_content": response_content,
            "owner_id": owner_id, "business_id": business_id,
        })


class FakeChatClient:
    def __init__(self):
        self.calls = []
        self.error = None
        self.payload = {
            "id": "gen-1",
            "choices": [{"message": {"role": "assistant", "content": "Try a bold teal palette."}}],
        }

    def complete(self, messages, referer=None):
        self.calls.append({"messages": messages, "referer": referer})
        if self.error:
            raise self.error
        return self.payload


class FakeImageClient:
    def __init__(self):
        self.prompts = []
        self.fetched = []
        self.error = None

    def generate(self, prompt, size):
        self.prompts.append((prompt, size))
        if self.error:
            raise self.error
        return GENERATED_URL

    def fetch_as_data_url(self, url):
        self.fetched.append(url)
        return "data:image/png;base64,iVBORw0KGgo="


class FakeUploader:
    configured = True

    def __init__(self):
        self.sources = []
        self.error = None

    def upload(self, source):
        self.sources.append(source)
        if self.error:
            raise self.error
        return HOSTED_URL


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def chat_client():
    return FakeChatClient()


@pytest.fixture
def image_client():
    return FakeImageClient()


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def app(store, chat_client, image_client, uploader):
    return create_app(
        {"TESTING": True, "SECRET_KEY": "test-secret", "INIT_DB": False, "RATELIMIT_ENABLED": False},
        store=store,
        chat_client=chat_client,
        image_client=image_client,
        uploader=uploader,
    )


@pytest.fixture
def client(app):
    return app.test_client()


def register(client, email, password="s3cret-pass", name=None):
    response = client.post(f"{API}/auth/register", json={"email": email, "password": password, "name": name})
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(client):
    data = register(client, "alice@example.com", name="Alice")
    return {"id": data["user"]["id"], "headers": auth_header(data["token"])}


@pytest.fixture
def bob(client):
    data = register(client, "bob@example.com", name="Bob")
    return {"id": data["user"]["id"], "headers": auth_header(data["token"])}


@pytest.fixture
def business(client, alice):
    response = client.post(
        f"{API}/businesses",
        json={"name": "Bean There", "field": "coffee", "colorPalette": ["#3e2723", "#d7ccc8"]},
        headers=alice["headers"],
    )
    return response.get_json()["data"]
