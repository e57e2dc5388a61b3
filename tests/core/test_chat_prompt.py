"""
Test suite for the document chat prompt.

System role: Verification of chat prompt assembly
"""

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from docchat.core.llm.chat_prompt import build_chat_messages, format_image_context, history_messages
from docchat.models.document import DocumentImage, ImageContextInfo


class TestFormatImageContext:

    def test_should_label_images_with_figure_numbers(self, sample_images) -> None:
        # Arrange
        contexts = {12: ImageContextInfo(figure_number=7, section="Deployment", surrounding_text="Deploy it")}

        # Act
        text = format_image_context(sample_images[-1:], contexts)

        # Assert
        assert text == (
            "- Figure 7: Figure 7: Google Cloud appliance deployment (section: Deployment) | context: Deploy it"
        )

    def test_unmapped_image_should_use_image_id(self) -> None:
        image = DocumentImage(id=4, document_id=1, image_path="/uploads/images/4.png", alt_text="Console")

        assert format_image_context([image], {}) == "- Image 4: Console"

    def test_no_images_should_say_so(self) -> None:
        assert format_image_context([], {}) == "(no figures extracted)"


class TestBuildChatMessages:

    def test_should_place_history_between_system_and_question(self) -> None:
        # Act
        messages = build_chat_messages(
            document_title="Migration Guide",
            document_content="Step one {not a variable}",
            image_context="- Figure 8: Workflow",
            history=[("user", "Hi"), ("assistant", "Hello")],
            question="Show me the workflow",
        )

        # Assert
        assert isinstance(messages[0], SystemMessage)
        assert "Migration Guide" in messages[0].content
        assert "Step one {not a variable}" in messages[0].content
        assert "- Figure 8: Workflow" in messages[0].content
        assert isinstance(messages[1], HumanMessage)
        assert isinstance(messages[2], AIMessage)
        assert messages[-1].content == "Show me the workflow"
        assert len(messages) == 4

    def test_history_messages_should_map_roles(self) -> None:
        messages = history_messages([("assistant", "a"), ("user", "u")])

        assert [type(m) for m in messages] == [AIMessage, HumanMessage]
