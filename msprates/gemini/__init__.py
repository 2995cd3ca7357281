"""Gemini: generative text provider used to fetch and structure MSP data."""

from msprates.gemini.client import GeminiProvider, TextProvider, build_default_provider

__all__ = ["GeminiProvider", "TextProvider", "build_default_provider"]
