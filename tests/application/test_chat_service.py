"""
Test suite for ChatService.

Runs against the in-memory database with real citation resolution; the
LLM and diagram service are mocked.

System role: Verification of document chat orchestration
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from docchat.application.services.chat_service import ChatService
from docchat.application.services.diagram_service import DiagramService
from docchat.boundary.db.CRUD.document_crud import document_crud, document_image_crud
from docchat.boundary.db.CRUD.message_crud import message_crud
from docchat.configs.llm import LLMSettings
from docchat.configs.references import ReferenceSettings
from docchat.core.exceptions import DiagramRenderError, DocumentNotFoundError, LLMProviderError
from docchat.core.references.figure_resolver import FigureReferenceResolver
from docchat.core.references.structure_mapper import DocumentStructureMapper
from docchat.models.diagram import DiagramIntent
from docchat.models.reference import ImageReference

DOCUMENT_TEXT = """# Migration Guide
## OS Migration
The OS-based migration workflow copies the operating system to the target.
[Figure 8]
## Deployment
Deploy the appliance in Google Cloud before the first migration.
"""


@pytest.fixture
async def document(test_async_db, sample_images):
    """Stored migration guide with the sample images."""
    doc = await document_crud.create(
        test_async_db, name="guide.pdf", original_name="Migration Guide.pdf", content_text=DOCUMENT_TEXT
    )
    for image in sample_images:
        await document_image_crud.create(test_async_db, **image.model_dump(exclude={"document_id"}), document_id=doc.id)
    await test_async_db.commit()
    return doc


@pytest.fixture
def mock_llm() -> AsyncMock:
    """Provide mock LLM provider."""
    llm = AsyncMock()
    llm.chat = AsyncMock(return_value="Here is the diagram: Figure 8 shows the workflow.")
    return llm


@pytest.fixture
def mock_diagram_service() -> MagicMock:
    """Diagram service that never sees a diagram request."""
    service = MagicMock(spec=DiagramService)
    service.classify.return_value = DiagramIntent(is_diagram_request=False)
    service.generate = AsyncMock()
    return service


@pytest.fixture
def chat_service(test_async_db, mock_llm, mock_diagram_service) -> ChatService:
    return ChatService(
        db=test_async_db,
        llm=mock_llm,
        diagram_service=mock_diagram_service,
        resolver=FigureReferenceResolver(product_name="RiverMeadow"),
        mapper=DocumentStructureMapper(),
        llm_settings=LLMSettings(),
        reference_settings=ReferenceSettings(),
    )


class TestProcessMessage:
    """Test suite for ChatService.process_message."""

    @pytest.mark.asyncio
    async def test_answer_should_cite_figures_and_persist_both_turns(
        self, chat_service, document, test_async_db, mock_llm
    ) -> None:
        # Act
        response = await chat_service.process_message(document.id, "How does RiverMeadow OS migration work?")

        # Assert
        assert response.role == "assistant"
        assert response.content == "Here is the diagram: Figure 8 shows the workflow."
        assert [ref.id for ref in response.references] == [8]
        assert response.diagram_error is None

        stored = await message_crud.get_by_document_id(test_async_db, document.id)
        assert [row.role for row in stored] == ["user", "assistant"]
        assert message_crud.references_of(stored[1]) == response.references

    @pytest.mark.asyncio
    async def test_prompt_should_include_document_and_figure_context(
        self, chat_service, document, mock_llm
    ) -> None:
        # Act
        await chat_service.process_message(document.id, "What does the guide cover?")

        # Assert
        messages = mock_llm.chat.await_args.args[0]
        assert isinstance(messages[0], SystemMessage)
        assert "Migration Guide.pdf" in messages[0].content
        assert "OS-based migration workflow" in messages[0].content
        assert "- Figure 8:" in messages[0].content
        assert messages[-1].content == "What does the guide cover?"
        assert mock_llm.chat.await_args.kwargs == {"temperature": 0.7, "max_tokens": 1000}

    @pytest.mark.asyncio
    async def test_previous_turns_should_be_sent_as_history(self, chat_service, document, mock_llm) -> None:
        # Arrange
        await chat_service.process_message(document.id, "First question")

        # Act
        await chat_service.process_message(document.id, "Second question")

        # Assert
        messages = mock_llm.chat.await_args.args[0]
        assert isinstance(messages[1], HumanMessage)
        assert messages[1].content == "First question"
        assert isinstance(messages[2], AIMessage)
        assert messages[-1].content == "Second question"

    @pytest.mark.asyncio
    async def test_unknown_document_should_raise(self, chat_service, test_async_db) -> None:
        with pytest.raises(DocumentNotFoundError):
            await chat_service.process_message(999, "Hello")

    @pytest.mark.asyncio
    async def test_llm_failure_should_propagate_after_storing_question(
        self, chat_service, document, mock_llm, test_async_db
    ) -> None:
        # Arrange
        mock_llm.chat.side_effect = LLMProviderError("timeout", operation="chat")

        # Act / Assert
        with pytest.raises(LLMProviderError):
            await chat_service.process_message(document.id, "Hello")
        assert await message_crud.count_by_document_id(test_async_db, document.id) == 1


class TestDiagramAttachment:
    """Test suite for diagrams generated from chat."""

    @pytest.mark.asyncio
    async def test_diagram_request_should_append_diagram_reference(
        self, chat_service, document, mock_diagram_service
    ) -> None:
        # Arrange
        intent = DiagramIntent(is_diagram_request=True)
        diagram_reference = ImageReference(image_path="/api/v1/diagrams/svg/a.svg", caption="Migration Diagram")
        mock_diagram_service.classify.return_value = intent
        mock_diagram_service.generate.return_value = MagicMock(reference=diagram_reference)

        # Act
        response = await chat_service.process_message(document.id, "Show me the migration diagram")

        # Assert
        mock_diagram_service.generate.assert_awaited_once_with("Show me the migration diagram", intent=intent)
        assert response.references[-1] == diagram_reference
        assert response.diagram_error is None

    @pytest.mark.asyncio
    async def test_diagram_failure_should_still_return_answer(
        self, chat_service, document, mock_diagram_service
    ) -> None:
        # Arrange
        mock_diagram_service.classify.return_value = DiagramIntent(is_diagram_request=True)
        mock_diagram_service.generate.side_effect = DiagramRenderError(unique_id="x")

        # Act
        response = await chat_service.process_message(document.id, "Show me the migration diagram")

        # Assert
        assert response.diagram_error == "Diagram generation failed"
        assert response.content == "Here is the diagram: Figure 8 shows the workflow."
        assert all(ref.id is not None for ref in response.references)


class TestReadOperations:

    @pytest.mark.asyncio
    async def test_get_messages_should_return_history_with_references(self, chat_service, document) -> None:
        # Arrange
        await chat_service.process_message(document.id, "How does RiverMeadow OS migration work?")

        # Act
        history = await chat_service.get_messages(document.id)

        # Assert
        assert history.total == 2
        assert history.messages[0].references == []
        assert [ref.id for ref in history.messages[1].references] == [8]

    @pytest.mark.asyncio
    async def test_get_document_images_should_return_images_in_id_order(self, chat_service, document) -> None:
        images = await chat_service.get_document_images(document.id)

        assert [image.id for image in images] == [1, 3, 7, 8, 12]

    @pytest.mark.asyncio
    async def test_get_messages_for_unknown_document_should_raise(self, chat_service, test_async_db) -> None:
        with pytest.raises(DocumentNotFoundError):
            await chat_service.get_messages(999)
