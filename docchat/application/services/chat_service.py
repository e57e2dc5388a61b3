"""
Document chat service.

Answers a question about one document: assembles document text and the
most important figure contexts into the prompt, calls the chat model,
resolves figure citations, optionally attaches a generated diagram, and
persists both turns.

Dependencies: sqlalchemy, docchat.core, docchat.boundary.db, docchat.application.services
System role: Chat service orchestration layer
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from docchat.application.services.diagram_service import DiagramService
from docchat.boundary.db.CRUD.document_crud import document_crud, document_image_crud
from docchat.boundary.db.CRUD.message_crud import message_crud
from docchat.configs.llm import LLMSettings
from docchat.configs.references import ReferenceSettings
from docchat.core.exceptions import DiagramRenderError, DocumentNotFoundError
from docchat.core.llm.chat_prompt import build_chat_messages, format_image_context
from docchat.core.llm.llm_provider import LLMProvider
from docchat.core.references.figure_resolver import FigureReferenceResolver
from docchat.core.references.structure_mapper import DocumentStructureMapper, top_contexts
from docchat.models.chat import ChatHistoryResponse, ChatMessageResponse
from docchat.models.document import DocumentImage
from docchat.models.reference import ImageReference

logger = logging.getLogger(__name__)

DIAGRAM_FAILED_MESSAGE = "Diagram generation failed"


class ChatService:
    """
    Document-scoped chat.

    Coordinates document lookup, prompt assembly, the LLM call, citation
    resolution, optional diagram generation and message persistence.
    """

    def __init__(
        self,
        db: AsyncSession,
        llm: LLMProvider,
        diagram_service: DiagramService,
        resolver: FigureReferenceResolver,
        mapper: DocumentStructureMapper,
        llm_settings: LLMSettings | None = None,
        reference_settings: ReferenceSettings | None = None,
    ) -> None:
        """
        Initialize chat service.

        Args:
            db: AsyncSession for database operations
            llm: Chat model provider
            diagram_service: Diagram generation for diagram requests
            resolver: Citation resolver
            mapper: Image-to-section mapper for prompt context
            llm_settings: Chat sampling parameters
            reference_settings: Prompt sizing limits
        """
        self.db = db
        self.llm = llm
        self.diagram_service = diagram_service
        self.resolver = resolver
        self.mapper = mapper
        self.llm_settings = llm_settings or LLMSettings()
        self.reference_settings = reference_settings or ReferenceSettings()

    async def process_message(self, document_id: int, user_message: str) -> ChatMessageResponse:
        """
        Answer one user message.

        Flow:
        1. Load document, images and recent history
        2. Build the prompt with document text and top image contexts
        3. Store the user message and call the chat model
        4. Resolve figure citations
        5. Attach a generated diagram when the message asks for one
        6. Store and return the assistant message

        Args:
            document_id: Document the conversation is about
            user_message: User's message

        Returns:
            ChatMessageResponse: Assistant message with citations

        Raises:
            DocumentNotFoundError: If the document does not exist
            LLMProviderError: If the chat model call fails
        """
        logger.info(f"{__name__}:process_message - START document_id={document_id}")

        document = await document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)

        image_rows = await document_image_crud.get_by_document_id(self.db, document_id)
        images = [DocumentImage.model_validate(row) for row in image_rows]
        history_rows = await message_crud.get_recent(
            self.db, document_id, limit=self.reference_settings.history_window
        )
        history = [(row.role, row.content) for row in history_rows]

        contexts = self.mapper.map_images_to_sections(document.content_text, images)
        ranked = top_contexts(contexts, self.reference_settings.max_image_contexts)
        by_id = {image.id: image for image in images}
        ranked_images = [by_id[image_id] for image_id, _info in ranked]
        messages = build_chat_messages(
            document_title=document.original_name,
            document_content=(document.content_text or "")[: self.reference_settings.document_context_chars],
            image_context=format_image_context(ranked_images, contexts),
            history=history,
            question=user_message,
        )

        await message_crud.create_message(self.db, document_id, role="user", content=user_message)
        await self.db.commit()

        answer = await self.llm.chat(
            messages,
            temperature=self.llm_settings.chat_temperature,
            max_tokens=self.llm_settings.chat_max_tokens,
        )

        references = self.resolver.resolve(answer, user_message, images)

        diagram_reference, diagram_error = await self._maybe_generate_diagram(user_message)
        if diagram_reference is not None:
            references.append(diagram_reference)

        assistant = await message_crud.create_message(
            self.db,
            document_id,
            role="assistant",
            content=answer,
            references=references,
        )
        await self.db.commit()

        logger.info(
            f"{__name__}:process_message - END message_id={assistant.id} "
            f"references={len(references)} diagram_error={diagram_error is not None}"
        )
        return ChatMessageResponse(
            id=assistant.id,
            content=assistant.content,
            role=assistant.role,
            timestamp=assistant.timestamp,
            references=references,
            diagram_error=diagram_error,
        )

    async def _maybe_generate_diagram(self, user_message: str) -> tuple[ImageReference | None, str | None]:
        intent = self.diagram_service.classify(user_message)
        if not intent.is_diagram_request:
            return None, None
        try:
            generated = await self.diagram_service.generate(user_message, intent=intent)
        except DiagramRenderError as e:
            logger.error(f"{__name__}:process_message - {type(e).__name__}: {e}")
            return None, DIAGRAM_FAILED_MESSAGE
        return generated.reference, None

    async def get_document_images(self, document_id: int) -> list[DocumentImage]:
        """
        Images of a document in extraction order.

        Raises:
            DocumentNotFoundError: If the document does not exist
        """
        if not await document_crud.exists(self.db, document_id):
            raise DocumentNotFoundError(document_id)
        rows = await document_image_crud.get_by_document_id(self.db, document_id)
        return [DocumentImage.model_validate(row) for row in rows]

    async def get_messages(self, document_id: int) -> ChatHistoryResponse:
        """
        Full conversation for a document.

        Raises:
            DocumentNotFoundError: If the document does not exist
        """
        if not await document_crud.exists(self.db, document_id):
            raise DocumentNotFoundError(document_id)

        rows = await message_crud.get_by_document_id(self.db, document_id)
        messages = [
            ChatMessageResponse(
                id=row.id,
                content=row.content,
                role=row.role,
                timestamp=row.timestamp,
                references=message_crud.references_of(row),
            )
            for row in rows
        ]
        return ChatHistoryResponse(messages=messages, total=len(messages))
