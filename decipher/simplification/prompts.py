"""Prompt construction for simplification and document Q&A."""

from __future__ import annotations

from decipher.reading_config import ReadingLevel, rules_for

# Hard cap on characters sent to the model per request.
MAX_INPUT_CHARS = 15000

SIMPLIFICATION_PROMPT = """\
You are an expert dyslexia reading assistant. Rewrite the text below so it is \
easier to read.

Rephrase rules:
{rules}

Summary rules:
- At most 3 short sentences
- Plain language

Return ONLY a single JSON object with exactly these fields:
- "rephrased": an array of objects, one per sentence of the source, each with
  - "original": the source sentence, copied as an EXACT quote from the text
  - "simplified": your rewrite of that sentence
- "summary": the summary as a single string

Do not include "1.", "2.", or bullet points in any "simplified" value. \
Just write standard sentences that end with a period.

Text to process:
\"\"\"{text}\"\"\"
"""

CHAT_PROMPT = """\
You are a friendly reading assistant helping a reader with dyslexia \
understand a document.

Rules:
- Answer in at most 2 short sentences.
- Use simple, everyday words.
- Only answer from the document below. If the answer is not in it, say so.

Document:
\"\"\"{context}\"\"\"

Question: {question}
"""


def truncate_input(text: str, max_chars: int = MAX_INPUT_CHARS) -> str:
    return text[:max_chars]


def build_simplification_prompt(text: str, level: str | ReadingLevel | None) -> str:
    """Build the rewrite prompt for *text* at the given reading level.

    Unknown levels use the moderate rule set. The JSON contract in the
    prompt is what :mod:`decipher.simplification.parsing` validates.
    """
    rules = rules_for(level)
    return SIMPLIFICATION_PROMPT.format(
        rules="\n".join(rules.as_prompt_lines()),
        text=truncate_input(text),
    )


def build_chat_prompt(question: str, context: str) -> str:
    """Build a constrained question-answering prompt over *context*."""
    return CHAT_PROMPT.format(
        context=truncate_input(context),
        question=question.strip(),
    )
