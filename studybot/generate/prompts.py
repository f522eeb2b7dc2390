# Prompt templates for every endpoint.
# All wrapping is plain string formatting; nothing here calls the model.

from typing import Iterable, List, Optional

from .types import ChatTurn

TUTOR_GUIDELINES = """\
- Be friendly, encouraging and patient, like a good tutor.
- Use Markdown: short paragraphs, bullet points and **bold** key terms.
- Keep the answer under 200 words unless the student asks for more detail.
- If the question is off-topic, gently steer back to the topic.
"""

NO_HISTORY_PLACEHOLDER = "(no conversation yet)"

FLASHCARD_EXAMPLE = """\
```json
[
  {"question": "What is the powerhouse of the cell?", "answer": "The mitochondria."},
  {"question": "What does DNA stand for?", "answer": "Deoxyribonucleic acid."}
]
```"""

QUIZ_EXAMPLE = """\
```json
[
  {
    "question": "Which organelle produces most of the cell's ATP?",
    "options": ["Nucleus", "Mitochondria", "Ribosome", "Golgi apparatus"],
    "correctAnswer": 1
  }
]
```"""


def build_tutor_prompt(message: str, topic: Optional[str]) -> str:
    topic_line = f"The student is studying: {topic}." if topic else "The student has not picked a topic."
    return f"""You are a helpful AI study tutor.
{topic_line}

Follow these style rules:
{TUTOR_GUIDELINES}
Student's question:
{message}
"""


def build_styled_prompt(
    message: str,
    topic: Optional[str],
    mode: Optional[str],
    mood: Optional[str],
    personas: Iterable[str],
) -> str:
    lines: List[str] = ["You are an AI study companion."]
    if topic:
        lines.append(f"Topic: {topic}")
    if mode:
        lines.append(f"Mode: {mode}")
    if mood:
        lines.append(f"The student's current mood: {mood}. Adapt your tone to it.")
    persona_list = [p for p in personas if p]
    if persona_list:
        lines.append(f"Answer in the combined voice of these personas: {', '.join(persona_list)}.")
    lines.append("")
    lines.append(f"Student: {message}")
    return "\n".join(lines)


def flatten_history(history: Iterable[ChatTurn]) -> str:
    """Render history as `sender: content` lines, oldest first."""
    lines = [f"{turn.sender}: {turn.content}" for turn in history]
    return "\n".join(lines) if lines else NO_HISTORY_PLACEHOLDER


def build_flashcards_prompt(topic: str, history: Iterable[ChatTurn]) -> str:
    return f"""Based on the following study conversation about "{topic}", create 5 to 10 flashcards
that cover the key concepts discussed.

Conversation:
{flatten_history(history)}

Return ONLY a JSON array inside a ```json fenced block. Each element must be an object
with exactly two string fields: "question" and "answer". Example:
{FLASHCARD_EXAMPLE}
"""


def build_quiz_prompt(topic: str, history: Iterable[ChatTurn]) -> str:
    return f"""Based on the following study conversation about "{topic}", create 5 multiple-choice
quiz questions that test understanding of the key concepts discussed.

Conversation:
{flatten_history(history)}

Return ONLY a JSON array inside a ```json fenced block. Each element must be an object with
"question" (string), "options" (array of 4 strings) and "correctAnswer" (the 0-based index
of the correct option). Example:
{QUIZ_EXAMPLE}
"""
