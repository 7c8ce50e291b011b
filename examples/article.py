#!/usr/bin/env python3
"""
Structured generation example.

Asks the model for a pydantic model, a list of integers and a nilable
scalar, and prints the decoded values.

Usage:
    export TYPED_LLM_BASE_URL="https://api.openai.com/v1"
    export TYPED_LLM_API_KEY="your-api-key"
    export TYPED_LLM_MODEL="gpt-4o-mini"
    python examples/article.py
"""

import asyncio

from pydantic import BaseModel

from typed_llm import ClientConfig, PromptTemplate, StructuredClient
from typed_llm.shapes import STRING, nullable


class Article(BaseModel):
    title: str
    content: str
    tags: list[str] = []


async def main() -> None:
    """Run structured generation example."""
    async with StructuredClient(ClientConfig.from_env()) as client:
        article = await client.generate(
            PromptTemplate.of("Write a three sentence article about ", "tide pools"),
            Article,
        )
        print(f"Title: {article.title}")
        print(f"Content: {article.content}")
        print(f"Tags: {', '.join(article.tags)}")
        print()

        primes = await client.generate("List the first five prime numbers", list[int])
        print(f"Primes: {primes}")

        # shape descriptors work without a Python type
        capital = await client.generate(
            "What is the capital of Atlantis? Answer null if unknown.",
            nullable(STRING),
        )
        print(f"Capital: {capital}")


if __name__ == "__main__":
    asyncio.run(main())
