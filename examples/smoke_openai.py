"""Manual smoke test against the live OpenAI API.

Run with ``OPENAI_API_KEY`` set::

    python examples/smoke_openai.py
"""
from __future__ import annotations

from genai_bridge import ClientConfig, GenAIClient


def main() -> None:
    with GenAIClient("openai") as simple_client:
        print(simple_client.generate("Name one Greek letter."))

    acc: list[str] = []

    def on_chunk(delta: str) -> None:
        print(delta, end="", flush=True)
        acc.append(delta)

    config = ClientConfig(stream=True, timeout=120, retries=0)
    with GenAIClient("openai", config=config) as stream_client:
        stream_client.generate(
            "Stream the word 'नमस्ते' in two parts: 'नम' then 'स्ते'. "
            "Respond as plain text, no punctuation.",
            on_chunk=on_chunk,
        )
    print()
    print("----")
    print("".join(acc))


if __name__ == "__main__":
    main()
