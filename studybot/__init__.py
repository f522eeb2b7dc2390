# StudyBot: Gemini-backed study tutor API.

__version__ = "1.0.0"
