"""
Document chat API endpoints.

Routes:
- GET /documents/{document_id}/images - Figures extracted from a document
- GET /documents/{document_id}/messages - Conversation history
- POST /documents/{document_id}/chat - Ask a question about a document

Dependencies: docchat.application.services.chat_service
System role: Document chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from docchat.api.deps import get_chat_service
from docchat.application.services.chat_service import ChatService
from docchat.core.exceptions import DocumentNotFoundError, ValidationError
from docchat.models.chat import ChatHistoryResponse, ChatMessageRequest, ChatMessageResponse
from docchat.models.document import DocumentImageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("/{document_id}/images", response_model=list[DocumentImageResponse])
async def list_document_images(
    document_id: int,
    chat_service: ChatService = Depends(get_chat_service),
) -> list[DocumentImageResponse]:
    """List a document's images in extraction order."""
    try:
        images = await chat_service.get_document_images(document_id)
        return [DocumentImageResponse.model_validate(image) for image in images]
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"{__name__}:list_document_images - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to list images: {str(e)}")


@router.get("/{document_id}/messages", response_model=ChatHistoryResponse)
async def list_messages(
    document_id: int,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatHistoryResponse:
    """Conversation history with stored citations."""
    try:
        return await chat_service.get_messages(document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"{__name__}:list_messages - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to load messages: {str(e)}")


@router.post("/{document_id}/chat", response_model=ChatMessageResponse)
async def chat(
    document_id: int,
    request: ChatMessageRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatMessageResponse:
    """
    Send a message about a document.

    Flow:
    1. ChatService answers with document and figure context
    2. Figure citations and an optional generated diagram are attached
    3. Both turns are persisted

    Raises:
        HTTPException(400): Invalid message
        HTTPException(404): Document not found
        HTTPException(500): Processing error
    """
    try:
        return await chat_service.process_message(document_id, request.content)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"{__name__}:chat - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"Chat processing failed: {str(e)}")
