"""Pydantic models for agent definitions and the tool catalog."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, field_validator

ToolCategory = Literal["search", "data", "communication", "analysis", "utility"]


class Tool(BaseModel):
    """A tool an agent can be given."""

    value: str  # stable key stored on the agent, e.g. "exa_search"
    label: str
    description: str
    author: str
    category: ToolCategory
    logo: str = ""  # emoji
    verified: bool = False


AVAILABLE_TOOLS: list[Tool] = [
    Tool(
        value="parallel_search",
        label="Parallel Search",
        description="Execute multiple search queries simultaneously for faster results and comprehensive data gathering.",
        author="Subnet",
        category="search",
        logo="🔍",
        verified=True,
    ),
    Tool(
        value="exa_search",
        label="Exa Search",
        description="AI-powered semantic search engine that understands context and meaning for more relevant results.",
        author="Exa AI",
        category="search",
        logo="🎯",
        verified=True,
    ),
    Tool(
        value="exa_crawl",
        label="Exa Crawl",
        description="Intelligently crawl and extract structured data from websites with advanced parsing capabilities.",
        author="Exa AI",
        category="data",
        logo="🕷️",
        verified=True,
    ),
    Tool(
        value="exa_find_similar",
        label="Exa Find Similar",
        description="Discover content similar to a given webpage using neural similarity matching algorithms.",
        author="Exa AI",
        category="search",
        logo="🔗",
        verified=True,
    ),
    Tool(
        value="web_search",
        label="Google Web Search",
        description="Access Google's comprehensive web search index for finding information across the internet.",
        author="Google",
        category="search",
        logo="🌐",
        verified=True,
    ),
    Tool(
        value="webpage_understanding",
        label="Jina Webpage Understanding",
        description="Extract and understand webpage content with advanced AI-powered content analysis and summarization.",
        author="Jina AI",
        category="analysis",
        logo="📄",
        verified=True,
    ),
]


def get_tool(value: str) -> Tool | None:
    """Look up a catalog tool by its key."""
    for tool in AVAILABLE_TOOLS:
        if tool.value == value:
            return tool
    return None


class AgentDefinition(BaseModel):
    """An agent configuration: what it is, how it is instructed, and what it can use."""

    title: str
    description: str = ""
    prompt: str = ""
    tools: list[str] = []

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Agent title must not be blank")
        return v

    @field_validator("description", "prompt", mode="before")
    @classmethod
    def coerce_none_to_empty(cls, v: object) -> object:
        return "" if v is None else v

    @field_validator("tools", mode="before")
    @classmethod
    def coerce_tools(cls, v: object) -> object:
        return [] if v is None else v

    @field_validator("tools")
    @classmethod
    def check_known_tools(cls, v: list[str]) -> list[str]:
        unknown = [t for t in v if get_tool(t) is None]
        if unknown:
            raise ValueError(f"Unknown tool(s): {', '.join(unknown)}")
        # De-duplicate, keeping first-selection order
        return list(dict.fromkeys(v))

    def selected_tools(self) -> list[Tool]:
        return [t for t in (get_tool(v) for v in self.tools) if t is not None]
