"""
Remote model boundary.

Exports:
  - GeminiImageClient: google-genai image generation adapter (server side)
  - HttpGenerationTransport: httpx client for the /generate endpoint
"""

from dreamgen.boundary.genai.gemini_client import GeminiImageClient
from dreamgen.boundary.genai.http_transport import HttpGenerationTransport

__all__ = ["GeminiImageClient", "HttpGenerationTransport"]
