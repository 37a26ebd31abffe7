"""LLM Module - provider interface and the OpenAI-backed evaluator client."""
from core.llm.interfaces import LLMProvider
from core.llm.openai_service import OpenAIService

__all__ = ['LLMProvider', 'OpenAIService']
