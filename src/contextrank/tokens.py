"""Rough token estimation for rendered digests.

Counts are a character-based approximation, not a tokenizer: good enough
to tell whether a digest fits a model's context window.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field

CHARS_PER_TOKEN = 3.5
CODE_BLOCK_MULTIPLIER = 1.1

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ModelLimit:
    name: str
    max_tokens: int
    provider: str


MODEL_LIMITS: tuple[ModelLimit, ...] = (
    ModelLimit("GPT-5", 400_000, "OpenAI"),
    ModelLimit("Gemini 2.5 Pro", 1_000_000, "Google"),
    ModelLimit("Claude Opus 4.1", 200_000, "Anthropic"),
    ModelLimit("Claude Sonnet 4", 200_000, "Anthropic"),
    ModelLimit("Grok-4", 200_000, "xAI"),
    ModelLimit("Llama 3.1", 128_000, "Meta"),
    ModelLimit("Mistral Large 2", 128_000, "Mistral"),
    ModelLimit("Command R+", 128_000, "Cohere"),
    ModelLimit("Phi-3 Medium", 128_000, "Microsoft"),
    ModelLimit("GPT-4o", 128_000, "OpenAI"),
    ModelLimit("Claude Haiku", 200_000, "Anthropic"),
)


@dataclass
class TokenAnalysis:
    estimated_tokens: int
    compatible: list[ModelLimit] = field(default_factory=list)
    incompatible: list[ModelLimit] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "estimated_tokens": self.estimated_tokens,
            "compatible": [m.name for m in self.compatible],
            "incompatible": [m.name for m in self.incompatible],
            "recommendations": list(self.recommendations),
        }


def estimate_tokens(text: str) -> int:
    """Whitespace-normalised length / 3.5, plus 10% when fenced code is present."""
    normalized = _WHITESPACE.sub(" ", text).strip()
    base = math.ceil(len(normalized) / CHARS_PER_TOKEN)
    multiplier = CODE_BLOCK_MULTIPLIER if "```" in text else 1.0
    return math.ceil(base * multiplier)


def analyze_token_usage(tokens: int) -> TokenAnalysis:
    """Split the model table by whether ``tokens`` fits, largest window first."""
    compatible = sorted(
        (m for m in MODEL_LIMITS if tokens <= m.max_tokens), key=lambda m: -m.max_tokens
    )
    incompatible = sorted(
        (m for m in MODEL_LIMITS if tokens > m.max_tokens), key=lambda m: -m.max_tokens
    )
    return TokenAnalysis(
        estimated_tokens=tokens,
        compatible=compatible,
        incompatible=incompatible,
        recommendations=_recommendations(tokens, compatible, incompatible),
    )


def _recommendations(
    tokens: int, compatible: list[ModelLimit], incompatible: list[ModelLimit]
) -> list[str]:
    recs: list[str] = []

    if not compatible:
        recs.append("Output too large for every listed model; filter the project to shrink it.")
        recs.append("Try: --exclude '**/*.test.*,**/*.spec.*,coverage/**'")
        recs.append("Or lower the file size limit: --max-size 51200")
    elif len(compatible) <= 3:
        recs.append("Limited model compatibility; reduce the output for broader support.")
        if incompatible:
            smallest = incompatible[-1]
            reduction = math.ceil((tokens - smallest.max_tokens) / tokens * 100)
            recs.append(f"Reduce by ~{reduction}% to fit {smallest.name}")
    else:
        recs.append("Fits most listed models.")
        if tokens > 50_000:
            recs.append("Consider splitting into smaller chunks for faster processing.")

    if tokens > 500_000:
        recs.append("Ultra-large codebase: use project filtering.")
    elif tokens > 200_000:
        recs.append("Large codebase: needs a long-context model.")
    elif tokens > 50_000:
        recs.append("Medium codebase: fits most models comfortably.")
    else:
        recs.append("Small codebase: fits every listed model.")

    return recs
