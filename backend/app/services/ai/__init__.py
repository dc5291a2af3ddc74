"""
AI index building - language-model providers plus a keyword fallback.

- Claude (primary) with cost tracking and a daily budget
- Groq (secondary) rotating across models
- Canned theme bundles when no model answers
"""
from app.services.ai.base import (
    # Data classes
    CompanyMatch,
    IndexProposal,
    TokenUsage,
    ResponseParser,
    CompanyProvider,
    # Exceptions
    AIAnalysisError,
    RateLimitError,
    BudgetExceededError,
    ModelUnavailableError,
    InvalidResponseError,
)
from app.services.ai.claude_service import ClaudeIndexService, CostTracker, get_claude_service
from app.services.ai.groq_service import GroqIndexService, get_groq_service
from app.services.ai.company_generator import (
    CompanyGenerator,
    KeywordFallbackProvider,
    get_company_generator,
)

__all__ = [
    # Services
    'ClaudeIndexService',
    'GroqIndexService',
    'KeywordFallbackProvider',
    'CompanyGenerator',
    'get_claude_service',
    'get_groq_service',
    'get_company_generator',
    # Data classes
    'CompanyMatch',
    'IndexProposal',
    'TokenUsage',
    'CostTracker',
    'ResponseParser',
    'CompanyProvider',
    # Exceptions
    'AIAnalysisError',
    'RateLimitError',
    'BudgetExceededError',
    'ModelUnavailableError',
    'InvalidResponseError',
]
