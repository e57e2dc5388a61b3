"""
Document chat prompt.

System prompt telling the model how to cite figures, plus the template
that assembles document text, image context and conversation history.

Dependencies: langchain_core.prompts, langchain_core.messages
System role: Prompt template for document-scoped chat
"""

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

from docchat.models.document import DocumentImage, ImageContextInfo

SYSTEM_PROMPT = """You are a document analysis assistant. You have access to a document with text content and images.
Analyze the document content to provide accurate and helpful responses.

IMPORTANT INSTRUCTIONS FOR HANDLING IMAGES:
1. When the user asks about diagrams, charts, or any visual elements, ALWAYS include references to the relevant images.
2. When referencing images, use the exact format: "Figure X" where X is the figure number.
3. If the user specifically requests to see diagrams or images, you MUST reference at least one image from the document.
4. When describing a diagram, always start by saying "Here is the diagram:" or "This diagram shows:" followed by your description.

Be concise but thorough in your answers, and always cite the specific sections or images you're referencing.

Document Title: {document_title}

Document Content:
{document_content}

Key Figures:
{image_context}"""

DOCUMENT_CHAT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    MessagesPlaceholder("history"),
    ("human", "{question}"),
])


def format_image_context(
    images: list[DocumentImage],
    contexts: dict[int, ImageContextInfo],
) -> str:
    """One line per image: figure label, caption, section and a text excerpt."""
    if not images:
        return "(no figures extracted)"
    lines = []
    for image in images:
        info = contexts.get(image.id)
        label = f"Figure {info.figure_number}" if info and info.figure_number else f"Image {image.id}"
        line = f"- {label}: {image.caption or image.alt_text or 'untitled'}"
        if info and info.section:
            line += f" (section: {info.section})"
        if info and info.surrounding_text:
            line += f" | context: {info.surrounding_text[:200]}"
        lines.append(line)
    return "\n".join(lines)


def history_messages(history: list[tuple[str, str]]) -> list[BaseMessage]:
    """Convert ``(role, content)`` pairs into LangChain messages."""
    messages: list[BaseMessage] = []
    for role, content in history:
        if role == "user":
            messages.append(HumanMessage(content=content or ""))
        else:
            messages.append(AIMessage(content=content or ""))
    return messages


def build_chat_messages(
    document_title: str,
    document_content: str,
    image_context: str,
    history: list[tuple[str, str]],
    question: str,
) -> list[BaseMessage]:
    """Format the full message list for one chat turn."""
    return DOCUMENT_CHAT_PROMPT.format_messages(
        document_title=document_title,
        document_content=document_content,
        image_context=image_context,
        history=history_messages(history),
        question=question,
    )
