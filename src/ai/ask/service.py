"""
Ask service: answers a question from the knowledge base.

One request is one sequential chain of three external calls:

1. full-text search of the knowledge sources (failure is logged and the chain
   continues with no sources),
2. answer generation with the configured provider (failure fails the request),
3. an append to the conversation log (failure is logged; the answer is still
   returned).
"""

import uuid

from src.ai.ask.exceptions import (
    GenerationFailedError,
    InvalidInputError,
    UpstreamUnavailableError,
)
from src.ai.ask.prompts import build_prompt
from src.ai.ask.schemas import AskResponse, KnowledgeSourceSchema
from src.ai.base import FALLBACK_ANSWER, AnswerProvider
from src.db.conversations.repository import ConversationRepository
from src.db.knowledge_sources.model import KnowledgeSource
from src.db.knowledge_sources.repository import KnowledgeSourceRepository
from src.utils.logger import logger


class AskService:
    """Coordinates knowledge search, answer generation and conversation logging."""

    def __init__(
        self,
        knowledge_sources: KnowledgeSourceRepository,
        conversations: ConversationRepository,
        provider: AnswerProvider,
        preamble: str | None = None,
    ):
        """
        Args:
            knowledge_sources: Repository used to search for context
            conversations: Repository the exchange is logged to
            provider: Answer generation backend
            preamble: Override for the company preamble in prompts
        """
        self.knowledge_sources = knowledge_sources
        self.conversations = conversations
        self.provider = provider
        self.preamble = preamble

    async def handle(self, question: str | None, session_id: str | None = None) -> AskResponse:
        """
        Answer a question.

        Args:
            question: The user's question
            session_id: Client session identifier, echoed back; a new UUID is
                generated when absent

        Returns:
            AskResponse: Answer, the full matched sources and the session id

        Raises:
            InvalidInputError: If the question is missing or blank. No
                external call is made.
            GenerationFailedError: If the answer provider fails. Nothing is
                logged to the conversation table in that case.
        """
        if question is None or not question.strip():
            raise InvalidInputError("Question is required")

        question = question.strip()
        session_id = session_id or str(uuid.uuid4())
        logger.info(
            "[ASK] Processing question",
            session_id=session_id,
            question_length=len(question),
        )

        sources = await self._search_sources(question)
        prompt = build_prompt(question, sources, self.preamble)
        answer = await self._generate_answer(prompt)
        await self._log_conversation(question, answer, sources, session_id)

        logger.info(
            "[ASK] Answered question",
            session_id=session_id,
            source_count=len(sources),
            provider=self.provider.name,
        )
        return AskResponse(
            answer=answer,
            sources=[KnowledgeSourceSchema.model_validate(source) for source in sources],
            session_id=session_id,
        )

    async def _search_sources(self, question: str) -> list[KnowledgeSource]:
        try:
            return await self.knowledge_sources.search(question)
        except Exception as e:
            failure = UpstreamUnavailableError(
                "Knowledge search failed; answering without context",
                upstream="knowledge_sources",
            )
            logger.warning(
                failure.message,
                upstream=failure.upstream,
                error=str(e),
                error_type=type(e).__name__,
            )
            return []

    async def _generate_answer(self, prompt: str) -> str:
        try:
            result = await self.provider.generate_answer(prompt)
        except Exception as e:
            logger.error(
                "[ASK] Answer generation failed",
                provider=self.provider.name,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise GenerationFailedError() from e

        # Providers normalize already; this covers a provider returning blank text
        return result.text if result.text and result.text.strip() else FALLBACK_ANSWER

    async def _log_conversation(
        self,
        question: str,
        answer: str,
        sources: list[KnowledgeSource],
        session_id: str,
    ) -> None:
        try:
            await self.conversations.create_conversation(
                question=question,
                answer=answer,
                source_ids=[source.id for source in sources],
                session_id=session_id,
            )
        except Exception as e:
            failure = UpstreamUnavailableError(
                "Failed to store conversation", upstream="conversations"
            )
            logger.warning(
                failure.message,
                upstream=failure.upstream,
                session_id=session_id,
                error=str(e),
                error_type=type(e).__name__,
            )
