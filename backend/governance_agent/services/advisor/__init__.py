"""AI advisor collaborators."""
from governance_agent.services.advisor.advisor import CannedAdvisor, LLMAdvisor
from governance_agent.services.advisor.llm_client import LLMClientFactory, OllamaClient, OpenAIClient

__all__ = [
    "CannedAdvisor",
    "LLMAdvisor",
    "LLMClientFactory",
    "OllamaClient",
    "OpenAIClient",
]
