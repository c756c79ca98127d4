"""Pytest configuration and fixtures."""

import os
from unittest.mock import MagicMock

import pytest
import respx

from blueprint import Node, ROOT_ID, initial_tree
from clients.sync import SyncHub
from core import get_settings
from interpreter import ActionExecutor, Renderer, VariableStore
from models.config import GeminiConfig


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ['STUDIO_LOG_LEVEL'] = 'DEBUG'
    os.environ['STUDIO_ENABLE_EXPORT_CACHE'] = 'true'
    os.environ['GOOGLE_API_KEY'] = 'test-api-key'  # Mock API key


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    get_settings.cache_clear()
    return get_settings()


# ============================================================================
# Tree Fixtures
# ============================================================================

@pytest.fixture
def dashboard() -> Node:
    """The initial Orion Dashboard document."""
    return initial_tree()


@pytest.fixture
def small_tree() -> Node:
    """Root container holding a card with a button and a hidden text."""
    return Node.from_wire({
        "id": ROOT_ID,
        "type": "Container",
        "props": {"className": "p-4"},
        "children": [
            {
                "id": "card",
                "type": "Card",
                "props": {},
                "children": [
                    {"id": "go-btn", "type": "Button", "props": {"label": "Go", "variant": "primary"}},
                ],
            },
            {
                "id": "secret",
                "type": "Text",
                "props": {"content": "Shown when open"},
                "visibleIf": "isOpen",
            },
            {"id": "name-input", "type": "Input", "props": {"placeholder": "Name"}, "bind": "userName"},
        ],
    })


# ============================================================================
# Runtime Fixtures
# ============================================================================

@pytest.fixture
def store() -> VariableStore:
    """Empty variable store."""
    return VariableStore()


@pytest.fixture
def notifications() -> list[str]:
    """Collected alert messages."""
    return []


@pytest.fixture
def executor(store, notifications) -> ActionExecutor:
    """Action executor without artificial latency (HTTP client is created lazily)."""
    return ActionExecutor(store, notifier=notifications.append)


@pytest.fixture
def renderer(store, executor) -> Renderer:
    return Renderer(store, executor)


# ============================================================================
# Collaborator Fixtures
# ============================================================================

@pytest.fixture
def sync_hub() -> SyncHub:
    return SyncHub()


@pytest.fixture
def gemini_config():
    """Gemini config for testing."""
    return GeminiConfig(
        model_name="gemini-2.0-flash-exp",
        api_key="test-api-key",
        temperature=0.1,
        max_tokens=1024,
    )


@pytest.fixture
def mock_gemini_model():
    """Mock Gemini model returning two list items."""
    mock = MagicMock()
    mock.name = "gemini-2.0-flash-exp"
    mock.generate_json.return_value = (
        '[{"id": "1", "title": "AAPL", "subtitle": "Apple", "value": "$190", "badge": "Buy"},'
        ' {"id": "2", "title": "MSFT", "value": "$410"}]'
    )
    return mock


# ============================================================================
# HTTP/Network Fixtures
# ============================================================================

@pytest.fixture
def mock_httpx_client():
    """Mock httpx transport."""
    with respx.mock:
        yield respx
