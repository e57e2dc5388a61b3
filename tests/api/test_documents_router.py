"""
Test suite for document chat API endpoints.

System role: Verification of document chat HTTP API
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from docchat.api.deps import get_chat_service
from docchat.api.routers.documents import router
from docchat.core.exceptions import DocumentNotFoundError, LLMProviderError
from docchat.models.chat import ChatHistoryResponse, ChatMessageResponse
from docchat.models.reference import ImageReference

TIMESTAMP = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def mock_chat_service() -> MagicMock:
    """Provide mock chat service."""
    service = MagicMock()
    service.process_message = AsyncMock()
    service.get_messages = AsyncMock()
    service.get_document_images = AsyncMock()
    return service


@pytest.fixture
def client(mock_chat_service) -> TestClient:
    """Create test client with mocked dependencies."""
    app = FastAPI()
    app.include_router(router, prefix="/api/v1")
    app.dependency_overrides[get_chat_service] = lambda: mock_chat_service
    return TestClient(app)


class TestChatEndpoint:
    """Test suite for POST /documents/{id}/chat."""

    def test_chat_should_return_answer_with_references(self, client, mock_chat_service) -> None:
        # Arrange
        mock_chat_service.process_message.return_value = ChatMessageResponse(
            id=2,
            content="Figure 8 shows the workflow.",
            role="assistant",
            timestamp=TIMESTAMP,
            references=[ImageReference(id=8, image_path="/uploads/images/8.png", caption="Figure 8")],
        )

        # Act
        response = client.post("/api/v1/documents/1/chat", json={"content": "How does OS migration work?"})

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["references"] == [
            {"type": "image", "id": 8, "imagePath": "/uploads/images/8.png", "caption": "Figure 8"}
        ]
        assert data["diagram_error"] is None
        mock_chat_service.process_message.assert_awaited_once_with(1, "How does OS migration work?")

    def test_unknown_document_should_return_404(self, client, mock_chat_service) -> None:
        mock_chat_service.process_message.side_effect = DocumentNotFoundError(42)

        response = client.post("/api/v1/documents/42/chat", json={"content": "Hi"})

        assert response.status_code == 404

    def test_llm_failure_should_return_500(self, client, mock_chat_service) -> None:
        mock_chat_service.process_message.side_effect = LLMProviderError("timed out", operation="chat")

        response = client.post("/api/v1/documents/1/chat", json={"content": "Hi"})

        assert response.status_code == 500

    def test_empty_message_should_fail_validation(self, client) -> None:
        response = client.post("/api/v1/documents/1/chat", json={"content": ""})

        assert response.status_code == 422


class TestReadEndpoints:

    def test_messages_should_return_history(self, client, mock_chat_service) -> None:
        # Arrange
        mock_chat_service.get_messages.return_value = ChatHistoryResponse(
            messages=[ChatMessageResponse(id=1, content="Hi", role="user", timestamp=TIMESTAMP)],
            total=1,
        )

        # Act
        response = client.get("/api/v1/documents/1/messages")

        # Assert
        assert response.status_code == 200
        assert response.json()["total"] == 1
        assert response.json()["messages"][0]["references"] == []

    def test_messages_for_unknown_document_should_return_404(self, client, mock_chat_service) -> None:
        mock_chat_service.get_messages.side_effect = DocumentNotFoundError(42)

        response = client.get("/api/v1/documents/42/messages")

        assert response.status_code == 404

    def test_images_should_be_listed(self, client, mock_chat_service, sample_images) -> None:
        mock_chat_service.get_document_images.return_value = sample_images

        response = client.get("/api/v1/documents/1/images")

        assert response.status_code == 200
        assert [image["id"] for image in response.json()] == [1, 3, 7, 8, 12]
