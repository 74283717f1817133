"""
Answer generator module for the Answer Engine.

Provides deterministic, template-based answer assembly:
- Citation-annotated answer synthesis
- Fallback answer when no provider returned content
- Related follow-up questions
"""

from answer_engine.answer_generator.synthesizer import (
    AnswerSynthesizer,
    CitationCounter,
    SynthesisInput,
    FALLBACK_INTRO,
    FALLBACK_BODY,
)
from answer_engine.answer_generator.related_questions import (
    RelatedQuestionGenerator,
    QUESTION_TEMPLATES,
)

__all__ = [
    "AnswerSynthesizer",
    "CitationCounter",
    "SynthesisInput",
    "FALLBACK_INTRO",
    "FALLBACK_BODY",
    "RelatedQuestionGenerator",
    "QUESTION_TEMPLATES",
]
