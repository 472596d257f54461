"""Prompt-driven rule-based generator standing in for a language model.

Prompts are built from templates the way they would be for a hosted model;
`process` recovers the text (and themes, if any) from the prompt and hands
it to the rewriter.
"""

from __future__ import annotations
import logging
import re
from typing import Callable, Optional

from .analysis import analyze_content, analyze_text
from .datatypes import KeyElements
from .rewriter import TextRewriter, basic_cleanup, split_sentences

logger = logging.getLogger(__name__)

PROCESSING_DELAY = 0.3
_THEMES_RE = re.compile(r"themes:\s*([^.\n]+)", re.I)

SUMMARIZE_TEMPLATES = {
    "basic": "Provide a concise summary of the following text in {n} sentences:\n\n{text}",
    "formal": "Create a formal, academic summary of the following text in {n} sentences:\n\n{text}",
    "explanatory": "Summarize the following text in {n} sentences, explaining the key concepts clearly:\n\n{text}",
    "creative": "Create an engaging summary of the following text in {n} sentences:\n\n{text}",
    "biographical": "Create a biographical summary of the following text in {n} sentences, "
                    "focusing on key achievements and contributions:\n\n{text}",
}
ENHANCE_TEMPLATES = {
    "with_themes": "Improve the following summary by incorporating these key themes: {themes}.\n\n"
                   "Summary: {text}",
    "with_entities": "Improve the following summary by highlighting these key entities: {entities}.\n\n"
                     "Summary: {text}",
    "academic": "Rewrite the following summary in an academic style, incorporating these themes: {themes}.\n\n"
                "Summary: {text}",
    "simplified": "Simplify the following summary while preserving the key points:\n\nSummary: {text}",
}
SUMMARIZE_STYLE_BY_TYPE = {
    "biographical": "biographical",
    "academic": "formal",
    "technical": "explanatory",
}


def extract_prompt_text(prompt: str) -> str:
    """Text after "Summary:", else after the first blank line, else the whole prompt."""
    if "Summary:" in prompt:
        return prompt.split("Summary:", 1)[1].strip()
    parts = prompt.split("\n\n", 1)
    if len(parts) > 1 and parts[1].strip():
        return parts[1].strip()
    return prompt.strip()


class LLMHandler:
    def __init__(self, rewriter: Optional[TextRewriter] = None, delay: float = PROCESSING_DELAY,
                 wait: Optional[Callable[[float], None]] = None) -> None:
        self.rewriter = rewriter or TextRewriter()
        self.delay = delay
        self._wait = wait

    def process(self, prompt: str, sentence_count: int = 3, content_type: Optional[str] = None) -> str:
        if self._wait is not None:
            self._wait(self.delay)

        text = extract_prompt_text(prompt)
        sentences = split_sentences(text)
        if not sentences:
            return basic_cleanup(text)

        analysis = analyze_text(text, sentences)
        content_type = content_type or analyze_content(text).content_type

        if "themes:" in prompt or "incorporating these key themes" in prompt:
            match = _THEMES_RE.search(prompt)
            themes = [t.strip() for t in match.group(1).split(",") if t.strip()] if match else []
            return self.rewriter.generate_adaptive_summary(
                sentences, analysis, themes or analysis.key_topics, sentence_count)

        if content_type == "biographical":
            return self.rewriter.generate_adaptive_biography(sentences, analysis)
        return self.rewriter.generate_adaptive_summary(sentences, analysis, [], sentence_count)

    def generate_summary(self, text: str, content_type: Optional[str] = None, sentence_count: int = 3) -> str:
        style = SUMMARIZE_STYLE_BY_TYPE.get(content_type, "basic")
        prompt = SUMMARIZE_TEMPLATES[style].format(n=sentence_count, text=text)
        logger.debug("summarize prompt style=%s", style)
        return self.process(prompt, sentence_count, content_type)

    def enhance_summary(self, summary: str, key_elements: KeyElements, content_type: Optional[str] = None,
                        sentence_count: int = 3) -> str:
        themes = ", ".join(key_elements.theme_texts(5))
        if content_type == "academic":
            prompt = ENHANCE_TEMPLATES["academic"].format(themes=themes, text=summary)
        elif themes:
            prompt = ENHANCE_TEMPLATES["with_themes"].format(themes=themes, text=summary)
        else:
            entities = ", ".join(key_elements.entity_texts(5))
            template = "with_entities" if entities else "simplified"
            prompt = ENHANCE_TEMPLATES[template].format(entities=entities, text=summary)
        return self.process(prompt, sentence_count, content_type)

    def transform_summary(self, extractive: str) -> str:
        """Rewrite an extractive summary keeping roughly its length."""
        if not extractive:
            return ""
        profile = analyze_content(extractive)
        count = max(1, len(split_sentences(extractive)))
        return self.generate_summary(extractive, profile.content_type, count)

    def generate_abstractive_summary(self, key_elements: KeyElements, text: str, sentence_count: int = 3) -> str:
        profile = analyze_content(text)
        basic = self.generate_summary(text, profile.content_type, sentence_count)
        return self.enhance_summary(basic, key_elements, profile.content_type, sentence_count)
