# ABOUTME: Gemini client construction for Vertex AI
# ABOUTME: One client per run, built from the explicit Config and shared by text and image calls

from google import genai
from google.genai import types

from municipality_crawler.config import Config


def create_genai_client(config: Config) -> genai.Client:
    """Create a Vertex AI backed Gemini client for the configured project and region."""
    return genai.Client(
        vertexai=True,
        project=config.google_cloud_project,
        location=config.google_cloud_location,
    )


def user_turn(parts: list[types.Part]) -> list[types.Content]:
    """Wrap parts into the single user turn every request here sends."""
    return [types.Content(role="user", parts=parts)]
