"""Pydantic schemas for stored records and API request/response validation."""

from studydesk.schemas.base import CreatedResponse
from studydesk.schemas.profile import PersonalityMode, Profile, ProfileWrite
from studydesk.schemas.chat import ChatRole, ChatSession, ChatSessionCreate, Message, MessageCreate
from studydesk.schemas.notes import Note, NoteWrite
from studydesk.schemas.flashcards import (
    CardCreate,
    CardReviewRating,
    CardReviewUpdate,
    DeckCreate,
    Flashcard,
    FlashcardDeck,
)
from studydesk.schemas.quizzes import QuizResult, QuizResultCreate
from studydesk.schemas.goals import Goal, GoalCreate
from studydesk.schemas.progress import ProgressStat, ProgressStatUpdate, StudyStreak

__all__ = [
    "CreatedResponse",
    # Profile
    "PersonalityMode",
    "Profile",
    "ProfileWrite",
    # Chat
    "ChatRole",
    "ChatSession",
    "ChatSessionCreate",
    "Message",
    "MessageCreate",
    # Notes
    "Note",
    "NoteWrite",
    # Flashcards
    "CardCreate",
    "CardReviewRating",
    "CardReviewUpdate",
    "DeckCreate",
    "Flashcard",
    "FlashcardDeck",
    # Quizzes
    "QuizResult",
    "QuizResultCreate",
    # Goals
    "Goal",
    "GoalCreate",
    # Progress
    "ProgressStat",
    "ProgressStatUpdate",
    "StudyStreak",
]
