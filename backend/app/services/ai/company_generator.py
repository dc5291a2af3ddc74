"""
Company generator: turns a free-text theme into an index proposal.

Tiers are tried in order (Claude, Groq, keyword fallback). Each language
model tier is bounded by AI_PROVIDER_TIMEOUT_SECONDS; any failure moves on
to the next tier. The keyword tier never fails, so ``generate`` always
returns a proposal.
"""
import asyncio
from typing import List, Optional, Sequence

from loguru import logger

from app.config import get_settings
from app.data.themes import match_theme, generic_theme
from app.services.ai.base import CompanyMatch, CompanyProvider, IndexProposal


class KeywordFallbackProvider:
    """Deterministic last tier backed by the canned theme bundles."""

    name = "fallback"

    def is_available(self) -> bool:
        return True

    def build(self, prompt: str) -> IndexProposal:
        theme = match_theme(prompt) or generic_theme(prompt)
        return IndexProposal(
            index_name=theme["indexName"],
            description=theme["description"],
            companies=[CompanyMatch(**company) for company in theme["companies"]],
            source=f"{self.name}:{theme['key']}",
        )

    async def propose(self, prompt: str) -> IndexProposal:
        return self.build(prompt)


class CompanyGenerator:
    def __init__(
        self,
        providers: Optional[Sequence[CompanyProvider]] = None,
        fallback: Optional[KeywordFallbackProvider] = None,
        timeout_seconds: Optional[float] = None,
    ):
        if providers is None:
            from app.services.ai.claude_service import get_claude_service
            from app.services.ai.groq_service import get_groq_service
            providers = [get_claude_service(), get_groq_service()]
        self.providers: List[CompanyProvider] = list(providers)
        self.fallback = fallback or KeywordFallbackProvider()
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None
            else get_settings().AI_PROVIDER_TIMEOUT_SECONDS
        )

    async def generate(self, prompt: str) -> IndexProposal:
        for provider in self.providers:
            if not provider.is_available():
                logger.debug(f"Company provider {provider.name} not configured, skipping")
                continue
            try:
                proposal = await asyncio.wait_for(provider.propose(prompt), timeout=self.timeout_seconds)
            except asyncio.TimeoutError:
                logger.warning(f"Company provider {provider.name} timed out after {self.timeout_seconds}s")
                continue
            except Exception as e:
                logger.warning(f"Company provider {provider.name} failed: {e}")
                continue

            logger.info(
                f"Index proposal from {proposal.source}: {proposal.index_name} "
                f"({len(proposal.companies)} companies)"
            )
            return proposal

        proposal = self.fallback.build(prompt)
        logger.info(f"Using keyword fallback {proposal.source} for prompt '{prompt}'")
        return proposal


_company_generator: Optional[CompanyGenerator] = None


def get_company_generator() -> CompanyGenerator:
    global _company_generator
    if _company_generator is None:
        _company_generator = CompanyGenerator()
    return _company_generator
