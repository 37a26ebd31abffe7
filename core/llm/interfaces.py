"""
LLM Provider Interface - Abstract base for AI service providers.

This module defines the interface for LLM services (OpenAI, or any
OpenAI-compatible endpoint).
"""
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional


class LLMProvider(ABC):
    """
    Abstract Interface for AI Service Providers.
    """

    @abstractmethod
    def extract_structured_data(
        self,
        text: str,
        schema_spec: Dict,
        system_prompt: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Send ``text`` as the user message and return the parsed JSON reply.

        Args:
            text: Prompt text
            schema_spec: Either a wrapped spec {'name', 'strict', 'schema'} or raw JSON schema
            system_prompt: Optional system message

        Raises:
            Any provider or parse error. Callers decide how to degrade.
        """
        pass
