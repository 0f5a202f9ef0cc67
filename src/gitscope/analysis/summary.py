"""Repository summarization — GitHub metadata plus one Gemini call."""

import asyncio
import logging
from typing import Iterable, Optional

from gitscope.errors import NotFound
from gitscope.fetcher import GitHubFetcher
from gitscope.llm import GeminiClient
from gitscope.models import Repository

logger = logging.getLogger(__name__)

README_CHAR_LIMIT = 1500
FALLBACK_BRANCH = "main"
SUMMARY_FALLBACK = "Failed to generate summary. Please try again later."


def truncate_readme(readme: str, limit: int = README_CHAR_LIMIT) -> str:
    """Hard cut at ``limit`` characters."""
    return readme[:limit]


def build_summary_prompt(
    name: str,
    description: Optional[str],
    languages: Iterable[str],
    readme: str,
) -> str:
    """Compose the instruction sent to the text-generation model."""
    language_list = ", ".join(languages)
    description = description or ""
    readme = truncate_readme(readme)
    return f"""Please provide a concise, human-friendly summary of this GitHub repository:

Repository Name: {name}
Description: {description}
Primary Languages: {language_list}

README Content:
{readme}

Create a 5-10 line summary that:
1. Explains the project's purpose in simple terms
2. Highlights key features and technologies
3. Describes potential use cases
4. Makes technical concepts accessible to non-developers

Format the response in clear, concise paragraphs."""


def find_repository(repos: list[Repository], name: str) -> Repository:
    for r in repos:
        if r.name == name:
            return r
    raise NotFound(f"Repository '{name}' not found.")


async def compose_summary_prompt(
    fetcher: GitHubFetcher, owner: str, repo: str
) -> str:
    """Resolve the repository and gather languages and README into a prompt."""
    repository = find_repository(await fetcher.fetch_repositories(owner), repo)
    branch = repository.default_branch or FALLBACK_BRANCH
    languages, readme = await asyncio.gather(
        fetcher.fetch_languages(owner, repo),
        fetcher.fetch_readme(owner, repo, branch),
    )
    return build_summary_prompt(
        repository.name, repository.description, list(languages), readme
    )


async def summarize_repository(
    fetcher: GitHubFetcher,
    llm: GeminiClient,
    owner: str,
    repo: str,
) -> str:
    """Generate a short description; never raises."""
    try:
        prompt = await compose_summary_prompt(fetcher, owner, repo)
        return await llm.generate(prompt)
    except Exception as exc:
        logger.warning("Summary generation failed for %s/%s: %s", owner, repo, exc)
        return SUMMARY_FALLBACK
