import logging
import uuid
from functools import lru_cache
from typing import Protocol

from fastapi import Depends

from ..config import settings
from ..core.errors import AdvisorUnavailable
from ..models.user import User
from .aggregation import compute_totals, top_expense_categories
from .repository import LedgerRepository, get_repository


logger = logging.getLogger(__name__)

CONTEXT_TRANSACTIONS = 20
TOP_CATEGORIES = 5

SYSTEM_PROMPT = """You are Moneta AI, a helpful financial advisor assistant for {full_name}.
You provide personalized financial advice based on their real transaction data.

User's Financial Summary:
{context}

Guidelines:
- Be concise and actionable
- Provide specific recommendations based on their data
- Use friendly, encouraging tone
- Focus on practical money management tips
- Keep responses under 150 words"""


def build_financial_context(repository: LedgerRepository, user_id: uuid.UUID) -> str:
    """Summarise the user's recent activity as plain text for the advisor.

    All figures come from the most recent transactions only. Repository
    errors are not caught.
    """
    txs = repository.transactions_for(user_id, limit=CONTEXT_TRANSACTIONS)
    budgets = repository.budgets_for(user_id)

    totals = compute_totals(txs)
    top = top_expense_categories(txs, TOP_CATEGORIES)
    category_text = ", ".join(f"{name}: ${amount:.2f}" for name, amount in top)

    return "\n".join([
        f"Total Income: ${totals.total_income:.2f}",
        f"Total Expenses: ${totals.total_expenses:.2f}",
        f"Current Balance: ${totals.balance:.2f}",
        f"Active Budgets: {len(budgets)}",
        f"Recent Transactions: {len(txs)}",
        f"Top Spending Categories: {category_text or 'None yet'}",
    ])


class ChatProvider(Protocol):
    def send(self, system_prompt: str, message: str) -> str:
        ...


class MockChatProvider:
    def send(self, system_prompt: str, message: str) -> str:
        return f"This is a mock AI response to: {message}"


class LangChainChatProvider:
    """OpenAI-compatible chat completion (Groq by default) through LangChain."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.temperature = temperature
        self.max_tokens = max_tokens

    def send(self, system_prompt: str, message: str) -> str:
        try:
            from langchain_openai import ChatOpenAI
            from langchain_core.prompts import ChatPromptTemplate
        except ImportError:
            raise AdvisorUnavailable("LLM dependencies missing. Install 'langchain-openai'.")

        prompt = ChatPromptTemplate.from_messages(
            [("system", "{system_prompt}"), ("human", "{message}")]
        )
        llm = ChatOpenAI(
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            api_key=self.api_key,
            base_url=self.base_url,
        )

        try:
            result = llm.invoke(prompt.format_messages(system_prompt=system_prompt, message=message))
        except Exception as e:
            logger.error("Chat provider call failed: %s", e)
            raise AdvisorUnavailable()

        content = getattr(result, "content", None)
        if not content or not isinstance(content, str):
            logger.error("Chat provider returned an empty response")
            raise AdvisorUnavailable("Invalid AI response")
        return content


# Chosen once per process.
@lru_cache(maxsize=None)
def get_chat_provider() -> ChatProvider:
    if settings.groq_api_key:
        return LangChainChatProvider(
            api_key=settings.groq_api_key,
            model=settings.groq_model,
            base_url=settings.groq_base_url,
        )
    logger.warning("GROQ_API_KEY not configured, using MockChatProvider")
    return MockChatProvider()


class AdvisorService:
    def __init__(self, repository: LedgerRepository, provider: ChatProvider):
        self._repo = repository
        self._provider = provider

    def chat(self, user: User, message: str) -> str:
        context = build_financial_context(self._repo, user.id)
        system_prompt = SYSTEM_PROMPT.format(full_name=user.full_name, context=context)
        return self._provider.send(system_prompt, message)


def get_advisor_service(
    repository: LedgerRepository = Depends(get_repository),
    provider: ChatProvider = Depends(get_chat_provider),
) -> AdvisorService:
    return AdvisorService(repository, provider)
