#!/usr/bin/env python3
"""
Multimodal structured generation example.

Embeds an image (by URL or from a local file) and an optional audio clip in
the prompt and asks for a typed description.

Usage:
    export TYPED_LLM_BASE_URL="https://api.openai.com/v1"
    export TYPED_LLM_API_KEY="your-api-key"
    export TYPED_LLM_MODEL="gpt-4o"
    python examples/multimodal.py [image_path] [audio.wav]
"""

import asyncio
import sys
from dataclasses import dataclass

from typed_llm import (
    AudioDocument,
    ClientConfig,
    ImageDocument,
    PromptTemplate,
    StructuredClient,
)

SAMPLE_IMAGE_URL = "https://upload.wikimedia.org/wikipedia/commons/3/3a/Cat03.jpg"


@dataclass
class ImageDescription:
    subject: str
    colors: list[str]
    contains_text: bool


async def main() -> None:
    """Run multimodal example."""
    if len(sys.argv) > 1:
        image = ImageDocument.from_file(sys.argv[1])
    else:
        image = ImageDocument.from_url(SAMPLE_IMAGE_URL)

    async with StructuredClient(ClientConfig.from_env()) as client:
        description = await client.generate(
            PromptTemplate.of("Describe this image: ", image),
            ImageDescription,
        )
        print(f"Subject: {description.subject}")
        print(f"Colors: {', '.join(description.colors)}")
        print(f"Contains text: {description.contains_text}")

        if len(sys.argv) > 2:
            clip = AudioDocument.from_file(sys.argv[2], format="wav")
            words = await client.generate(
                PromptTemplate.of("How many words are spoken in ", clip, "?"),
                int,
            )
            print(f"Spoken words: {words}")


if __name__ == "__main__":
    asyncio.run(main())
