"""
Related follow-up question generation.

Questions come from instant-answer related topics first, then from a
fixed list of templates parameterized by the query.
"""

from answer_engine.config import Settings, SynthesisSettings
from answer_engine.core.models import InstantAnswer

QUESTION_TEMPLATES = (
    "What are the latest developments in {query}?",
    "How does {query} work?",
    "What are the benefits of {query}?",
    "Who are the key players in {query}?",
    "What is the history of {query}?",
    "What are common misconceptions about {query}?",
    "How is {query} changing in 2024?",
    "What are the challenges facing {query}?",
)

TOPIC_DELIMITER = " - "


class RelatedQuestionGenerator:
    """
    Derives up to `max_related_questions` distinct follow-up questions.

    Template filling starts at the template whose position equals the
    number of topic questions already collected and walks forward. It
    stops at the first template that repeats an existing question.
    """

    def __init__(self, config: SynthesisSettings | None = None) -> None:
        self.config = config or SynthesisSettings()

    @classmethod
    def from_settings(cls, settings: Settings) -> "RelatedQuestionGenerator":
        return cls(config=settings.synthesis)

    def generate(self, query: str, instant_answer: InstantAnswer | None) -> list[str]:
        """
        Build the related-question list.

        Args:
            query: The user's query
            instant_answer: Instant-answer payload, if any

        Returns:
            Ordered, duplicate-free questions
        """
        limit = self.config.max_related_questions
        questions = self.topic_questions(instant_answer)[:limit]

        for template in QUESTION_TEMPLATES[len(questions):]:
            if len(questions) >= limit:
                break
            question = template.format(query=query)
            if question in questions:
                break
            questions.append(question)

        return questions

    def topic_questions(self, instant_answer: InstantAnswer | None) -> list[str]:
        """'What is X?' for each short related topic, X cut at the first ' - '."""
        if instant_answer is None:
            return []

        questions: list[str] = []
        for topic in instant_answer.related_topics[:self.config.max_topic_questions]:
            if not topic.text or len(topic.text) >= self.config.topic_question_max_length:
                continue
            question = f"What is {topic.text.split(TOPIC_DELIMITER)[0]}?"
            if question not in questions:
                questions.append(question)
        return questions
