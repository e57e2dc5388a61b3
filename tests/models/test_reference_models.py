"""
Test suite for citation and chat schemas.

System role: Verification of citation storage format and API contracts
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from docchat.models.chat import ChatMessageRequest, ChatMessageResponse
from docchat.models.reference import ImageReference, dump_references, load_references


class TestImageReference:

    def test_dump_should_use_camel_case_image_path(self) -> None:
        # Arrange
        reference = ImageReference(id=8, image_path="/uploads/images/8.png", caption="Figure 8")

        # Act
        stored = dump_references([reference])

        # Assert
        assert stored == [
            {"type": "image", "id": 8, "imagePath": "/uploads/images/8.png", "caption": "Figure 8"}
        ]

    def test_stored_json_should_load_back(self) -> None:
        stored = [{"type": "image", "id": None, "imagePath": "/api/v1/diagrams/svg/a.svg", "caption": "A"}]

        references = load_references(stored)

        assert references[0].id is None
        assert references[0].image_path == "/api/v1/diagrams/svg/a.svg"

    def test_empty_list_should_be_stored_as_none(self) -> None:
        assert dump_references([]) is None

    @pytest.mark.parametrize("stored", [None, []])
    def test_missing_references_should_load_as_empty_list(self, stored) -> None:
        assert load_references(stored) == []


class TestChatSchemas:

    def test_request_should_reject_empty_content(self) -> None:
        with pytest.raises(ValidationError):
            ChatMessageRequest(content="")

    def test_request_should_reject_overlong_content(self) -> None:
        with pytest.raises(ValidationError):
            ChatMessageRequest(content="x" * 1001)

    def test_response_should_default_to_no_references(self) -> None:
        response = ChatMessageResponse(
            id=1, content="Hi", role="assistant", timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc)
        )

        assert response.references == []
        assert response.diagram_error is None
