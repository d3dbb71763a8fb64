from pydantic import BaseModel, Field

# Upper bound for a single README; larger bodies are rejected with 422.
MAX_MARKDOWN_CHARS = 500_000


class ExtractRequest(BaseModel):
    markdown: str = Field(
        max_length=MAX_MARKDOWN_CHARS,
        description="Raw README markdown to convert into a landing-page model.",
        examples=["# Foo\n\nDoes bar.\n\n## Installation\n\n```bash\nnpm i foo\n```\n"],
    )
