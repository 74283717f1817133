"""
Tests for related-question generation.
"""

import pytest

from answer_engine.answer_generator import QUESTION_TEMPLATES, RelatedQuestionGenerator
from answer_engine.config import SynthesisSettings
from answer_engine.core.models import InstantAnswer, RelatedTopic


class TestRelatedQuestionGenerator:
    """Tests for RelatedQuestionGenerator."""

    @pytest.fixture
    def generator(self) -> RelatedQuestionGenerator:
        return RelatedQuestionGenerator()

    def test_templates_only(self, generator):
        """Without topics the first five templates are used."""
        questions = generator.generate("Mars", None)

        assert questions == [
            template.format(query="Mars") for template in QUESTION_TEMPLATES[:5]
        ]

    def test_topic_questions_first(self, generator, sample_instant_answer):
        """Topic text before ' - ' becomes a 'What is' question."""
        questions = generator.generate("Python", sample_instant_answer)

        assert questions[:2] == ["What is CPython?", "What is PyPy?"]
        # The third entry is a category group with no text
        assert questions[2] == "What are the benefits of Python?"
        assert len(questions) == 5

    def test_template_walk_starts_after_topic_count(self, generator):
        """Templates start at the position equal to the topic question count."""
        instant = InstantAnswer(related_topics=(RelatedTopic("Phobos - Moon"),))

        questions = generator.generate("Mars", instant)

        assert questions == [
            "What is Phobos?",
            "How does Mars work?",
            "What are the benefits of Mars?",
            "Who are the key players in Mars?",
            "What is the history of Mars?",
        ]

    def test_long_topics_skipped(self, generator):
        """Topics of 100 characters or more are not turned into questions."""
        instant = InstantAnswer(related_topics=(RelatedTopic("x" * 100), RelatedTopic("Deimos")))

        questions = generator.generate("Mars", instant)

        assert questions[0] == "What is Deimos?"
        assert not any("xxxx" in q for q in questions)

    def test_only_first_three_topics(self, generator):
        topics = tuple(RelatedTopic(f"Moon {i}") for i in range(5))

        questions = generator.generate("Mars", InstantAnswer(related_topics=topics))

        assert questions[:3] == ["What is Moon 0?", "What is Moon 1?", "What is Moon 2?"]
        assert "What is Moon 3?" not in questions

    def test_duplicate_topics_dropped(self, generator):
        """Topics that cut to the same text yield one question."""
        instant = InstantAnswer(
            related_topics=(
                RelatedTopic("the history of Mars"),
                RelatedTopic("the history of Mars - again"),
            )
        )

        questions = generator.generate("Mars", instant)

        assert len(questions) == len(set(questions))
        assert questions.count("What is the history of Mars?") == 1

    def test_duplicate_template_stops_filling(self, generator):
        """A template repeating a topic question ends filling; later templates are not used."""
        instant = InstantAnswer(related_topics=(RelatedTopic("the history of Mars"),))

        questions = generator.generate("Mars", instant)

        assert questions == [
            "What is the history of Mars?",
            "How does Mars work?",
            "What are the benefits of Mars?",
            "Who are the key players in Mars?",
        ]
        assert "What are common misconceptions about Mars?" not in questions

    def test_templates_exhausted(self):
        """Filling stops when the templates run out."""
        generator = RelatedQuestionGenerator(SynthesisSettings(max_related_questions=8))
        topics = tuple(RelatedTopic(f"Moon {i}") for i in range(3))

        questions = generator.generate("Mars", InstantAnswer(related_topics=topics))

        assert questions[3:] == [
            template.format(query="Mars") for template in QUESTION_TEMPLATES[3:]
        ]
        assert len(questions) == 8
