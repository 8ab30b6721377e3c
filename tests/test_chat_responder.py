import pytest
from langchain_core.language_models import FakeListChatModel
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from chatforge.agents import ChatGenerationRequest, ChatResponder, ChatTurn, EmailWriter, GenerationError
from chatforge.config import settings
from tests.fakes import BrokenChatModel, MidStreamFailureChatModel


def test_messages_carry_instructions_history_and_current_message():
    responder = ChatResponder(model=FakeListChatModel(responses=["ok"]))
    request = ChatGenerationRequest(
        message="And on Sunday?",
        instructions="You are Acme's support bot.",
        history=[
            ChatTurn(role="user", text="Are you open on Saturday?"),
            ChatTurn(role="model", text="Yes, 9 to 1."),
            ChatTurn(role="user", text=""),
        ],
    )

    messages = responder.build_messages(request)

    assert isinstance(messages[0], SystemMessage)
    assert "You are Acme's support bot." in messages[0].content
    assert [type(m) for m in messages[1:]] == [HumanMessage, AIMessage, HumanMessage]
    assert messages[-1].content == "And on Sunday?"


def test_qa_pairs_are_listed_in_system_prompt():
    responder = ChatResponder(model=FakeListChatModel(responses=["ok"]))
    request = ChatGenerationRequest(
        message="Hi",
        qa=[("What is the price?", "It is free."), ("Refunds?", "Within 30 days.")],
    )

    system_prompt = responder.build_messages(request)[0].content

    assert 'Question: "What is the price?"\nAnswer: "It is free."' in system_prompt
    assert 'Question: "Refunds?"\nAnswer: "Within 30 days."' in system_prompt
    assert "exactly as written" in system_prompt


def test_system_prompt_without_qa_has_no_pairs_block():
    prompt = settings.format_chat_prompt("Be nice.", [])

    assert "Be nice." in prompt
    assert "Question:" not in prompt


def test_blank_instructions_fall_back_to_default():
    prompt = settings.format_chat_prompt("", [])

    assert settings.DEFAULT_BOT_INSTRUCTIONS in prompt


@pytest.mark.asyncio
async def test_generate_returns_model_reply():
    responder = ChatResponder(model=FakeListChatModel(responses=["Hello!"]))

    assert await responder.generate(ChatGenerationRequest(message="Hi")) == "Hello!"


@pytest.mark.asyncio
async def test_stream_yields_fragments_of_the_reply():
    responder = ChatResponder(model=FakeListChatModel(responses=["Hello!"]))

    chunks = [chunk async for chunk in responder.stream(ChatGenerationRequest(message="Hi"))]

    assert len(chunks) > 1
    assert "".join(chunks) == "Hello!"


@pytest.mark.asyncio
async def test_generate_failure_is_wrapped():
    responder = ChatResponder(model=BrokenChatModel(responses=["unused"]))

    with pytest.raises(GenerationError):
        await responder.generate(ChatGenerationRequest(message="Hi"))


@pytest.mark.asyncio
async def test_stream_failure_after_first_fragment_is_wrapped():
    responder = ChatResponder(model=MidStreamFailureChatModel(responses=["unused"]))
    received = []

    with pytest.raises(GenerationError):
        async for chunk in responder.stream(ChatGenerationRequest(message="Hi")):
            received.append(chunk)

    assert received == ["Hel"]


@pytest.mark.asyncio
async def test_email_writer_strips_markdown_fences():
    writer = EmailWriter(model=FakeListChatModel(responses=["```html\n<html>Hi Jane</html>\n```"]))

    html = await writer.generate_direct_email("Welcome them", "Jane")

    assert html == "<html>Hi Jane</html>"


@pytest.mark.asyncio
async def test_email_writer_failure_is_wrapped():
    writer = EmailWriter(model=BrokenChatModel(responses=["unused"]))

    with pytest.raises(GenerationError):
        await writer.generate_newsletter("Launch")
