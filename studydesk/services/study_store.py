"""
Study store: every user-facing operation on a tenant's study data.

Each public method takes the caller's tenant (identity subject) first and runs
as one atomic unit inside `CollectionStore.partition`, so two operations for
the same tenant never interleave while different tenants proceed in parallel.

Missing records are handled by one of two named policies:

- MissingPolicy.STRICT raises NotFoundError (profile, chat sessions, decks,
  single-note reads, goals)
- MissingPolicy.LENIENT logs and does nothing (note update/delete, legacy
  review of an unknown card)
"""

import logging
import math
from enum import Enum as PyEnum
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from studydesk.clock import Clock
from studydesk.exceptions import AlreadyExistsError, InvalidValueError, NotFoundError
from studydesk.scheduling import (
    DEFAULT_EASE_FACTOR,
    MIN_EASE_FACTOR,
    ReviewRating,
    StreakUpdate,
    next_streak,
    schedule_review,
)
from studydesk.scheduling.review import next_review_at
from studydesk.schemas import (
    ChatRole,
    ChatSession,
    Flashcard,
    FlashcardDeck,
    Goal,
    Message,
    Note,
    PersonalityMode,
    Profile,
    ProgressStat,
    QuizResult,
    StudyStreak,
)
from studydesk.store import CollectionStore, TenantPartition

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Collection names inside a tenant partition
PROFILE = "profile"
CHAT_SESSIONS = "chat_sessions"
NOTES = "notes"
DECKS = "decks"
QUIZ_RESULTS = "quiz_results"
GOALS = "goals"
PROGRESS_STATS = "progress_stats"
STUDY_STREAK = "study_streak"

# Record IDs of the per-tenant singletons
PROFILE_ID = "profile"
STREAK_ID = "streak"


class MissingPolicy(str, PyEnum):
    """What to do when an operation references a record that does not exist."""

    STRICT = "strict"
    LENIENT = "lenient"


def build(model: type[ModelT], **fields) -> ModelT:
    """Construct a record, reporting invariant violations as InvalidValueError."""
    try:
        return model(**fields)
    except ValidationError as e:
        raise InvalidValueError(f"Invalid {model.__name__}: {e.errors()[0]['msg']}") from e


class StudyStore:
    """Profile, chat, notes, flashcards, quizzes, goals and progress for each tenant."""

    def __init__(self, collections: CollectionStore, clock: Clock) -> None:
        self.collections = collections
        self.clock = clock

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _now(self) -> int:
        return self.clock.now_ns()

    async def _load(
        self,
        part: TenantPartition,
        collection: str,
        record_id: str,
        model: type[ModelT],
        policy: MissingPolicy = MissingPolicy.STRICT,
    ) -> ModelT | None:
        payload = await part.find(collection, record_id)
        if payload is None:
            if policy is MissingPolicy.STRICT:
                raise NotFoundError(collection, record_id)
            logger.info(
                "Ignoring missing %s record %s for tenant %s", collection, record_id, part.tenant
            )
            return None
        return model.model_validate(payload)

    async def _load_all(self, part: TenantPartition, collection: str, model: type[ModelT]) -> list[ModelT]:
        records = await part.get(collection)
        return [model.model_validate(payload) for payload in records.values()]

    @staticmethod
    async def _save(part: TenantPartition, collection: str, record_id: str, record: BaseModel) -> None:
        await part.put(collection, record_id, record.model_dump(mode="json"))

    # =========================================================================
    # PROFILE
    # =========================================================================

    async def create_profile(
        self,
        tenant: str,
        display_name: str,
        personality_mode: PersonalityMode | str,
        preferred_language: str,
    ) -> Profile:
        async with self.collections.partition(tenant) as part:
            if await part.find(PROFILE, PROFILE_ID) is not None:
                raise AlreadyExistsError(PROFILE, PROFILE_ID)
            profile = build(
                Profile,
                display_name=display_name,
                personality_mode=personality_mode,
                preferred_language=preferred_language,
                created_at=self._now(),
            )
            await self._save(part, PROFILE, PROFILE_ID, profile)
            logger.info("Created profile for tenant %s", tenant)
            return profile

    async def update_profile(
        self,
        tenant: str,
        display_name: str,
        personality_mode: PersonalityMode | str,
        preferred_language: str,
    ) -> Profile:
        async with self.collections.partition(tenant) as part:
            current = await self._load(part, PROFILE, PROFILE_ID, Profile)
            profile = build(
                Profile,
                display_name=display_name,
                personality_mode=personality_mode,
                preferred_language=preferred_language,
                created_at=current.created_at,
            )
            await self._save(part, PROFILE, PROFILE_ID, profile)
            return profile

    async def get_profile(self, tenant: str) -> Profile:
        async with self.collections.partition(tenant) as part:
            return await self._load(part, PROFILE, PROFILE_ID, Profile)

    # =========================================================================
    # CHAT SESSIONS
    # =========================================================================

    async def create_chat_session(self, tenant: str, title: str) -> str:
        session_id = self.collections.new_id("chat")
        async with self.collections.partition(tenant) as part:
            session = build(ChatSession, id=session_id, title=title, created_at=self._now())
            await self._save(part, CHAT_SESSIONS, session_id, session)
        return session_id

    async def add_message(self, tenant: str, session_id: str, role: ChatRole | str, content: str) -> Message:
        async with self.collections.partition(tenant) as part:
            session = await self._load(part, CHAT_SESSIONS, session_id, ChatSession)
            message = build(Message, role=role, content=content, timestamp=self._now())
            session.messages.append(message)
            await self._save(part, CHAT_SESSIONS, session_id, session)
            return message

    async def get_chat_sessions(self, tenant: str) -> list[ChatSession]:
        """All sessions, newest first. Equal timestamps keep insertion order."""
        async with self.collections.partition(tenant) as part:
            sessions = await self._load_all(part, CHAT_SESSIONS, ChatSession)
        return sorted(sessions, key=lambda s: s.created_at, reverse=True)

    async def get_chat_messages(self, tenant: str, session_id: str) -> list[Message]:
        async with self.collections.partition(tenant) as part:
            session = await self._load(part, CHAT_SESSIONS, session_id, ChatSession)
        return session.messages

    async def delete_chat_session(self, tenant: str, session_id: str) -> None:
        async with self.collections.partition(tenant) as part:
            await part.remove(CHAT_SESSIONS, session_id)

    # =========================================================================
    # NOTES
    # =========================================================================

    async def create_note(self, tenant: str, title: str, content: str, topic: str) -> str:
        note_id = self.collections.new_id("note")
        async with self.collections.partition(tenant) as part:
            now = self._now()
            note = build(
                Note,
                id=note_id,
                title=title,
                content=content,
                topic=topic,
                created_at=now,
                updated_at=now,
            )
            await self._save(part, NOTES, note_id, note)
        return note_id

    async def update_note(self, tenant: str, note_id: str, title: str, content: str, topic: str) -> None:
        async with self.collections.partition(tenant) as part:
            current = await self._load(part, NOTES, note_id, Note, MissingPolicy.LENIENT)
            if current is None:
                return
            note = build(
                Note,
                id=current.id,
                title=title,
                content=content,
                topic=topic,
                created_at=current.created_at,
                updated_at=max(self._now(), current.created_at),
            )
            await self._save(part, NOTES, note_id, note)

    async def delete_note(self, tenant: str, note_id: str) -> None:
        async with self.collections.partition(tenant) as part:
            await part.remove(NOTES, note_id)

    async def get_notes(self, tenant: str) -> list[Note]:
        async with self.collections.partition(tenant) as part:
            return await self._load_all(part, NOTES, Note)

    async def get_note(self, tenant: str, note_id: str) -> Note:
        async with self.collections.partition(tenant) as part:
            return await self._load(part, NOTES, note_id, Note)

    # =========================================================================
    # FLASHCARD DECKS
    # =========================================================================

    async def create_deck(self, tenant: str, name: str, subject: str) -> str:
        deck_id = self.collections.new_id("deck")
        async with self.collections.partition(tenant) as part:
            deck = build(FlashcardDeck, id=deck_id, name=name, subject=subject)
            await self._save(part, DECKS, deck_id, deck)
        return deck_id

    async def add_card(self, tenant: str, deck_id: str, front: str, back: str) -> str:
        card_id = self.collections.new_id("card")
        async with self.collections.partition(tenant) as part:
            deck = await self._load(part, DECKS, deck_id, FlashcardDeck)
            card = build(
                Flashcard,
                id=card_id,
                front=front,
                back=back,
                difficulty=1,
                next_review=self._now(),
                interval=0,
                ease_factor=DEFAULT_EASE_FACTOR,
            )
            deck.cards.append(card)
            await self._save(part, DECKS, deck_id, deck)
        return card_id

    async def get_decks(self, tenant: str) -> list[FlashcardDeck]:
        async with self.collections.partition(tenant) as part:
            return await self._load_all(part, DECKS, FlashcardDeck)

    async def get_deck_cards(self, tenant: str, deck_id: str) -> list[Flashcard]:
        async with self.collections.partition(tenant) as part:
            deck = await self._load(part, DECKS, deck_id, FlashcardDeck)
        return deck.cards

    async def get_due_cards(self, tenant: str, deck_id: str) -> list[Flashcard]:
        """Cards whose next review is now or in the past, in deck order."""
        async with self.collections.partition(tenant) as part:
            deck = await self._load(part, DECKS, deck_id, FlashcardDeck)
            now = self._now()
        return [card for card in deck.cards if card.next_review <= now]

    async def update_card_review(
        self,
        tenant: str,
        deck_id: str,
        card_id: str,
        interval: int,
        ease_factor: float,
    ) -> None:
        """
        Store a review result computed by the caller.

        The caller is trusted to have applied the scheduling rule; only the
        interval/ease invariants are checked. An unknown card_id leaves the
        deck unchanged. Prefer `review_card`, which computes the result here.
        """
        async with self.collections.partition(tenant) as part:
            deck = await self._load(part, DECKS, deck_id, FlashcardDeck)
            if interval < 0:
                raise InvalidValueError("interval must be non-negative")
            # NaN compares false against the floor
            if not math.isfinite(ease_factor) or ease_factor < MIN_EASE_FACTOR:
                raise InvalidValueError(f"ease_factor must be a finite number of at least {MIN_EASE_FACTOR}")
            index = _card_index(deck, card_id)
            if index is None:
                logger.info("Ignoring review of unknown card %s in deck %s", card_id, deck_id)
                return
            deck.cards[index] = deck.cards[index].model_copy(
                update={
                    "interval": interval,
                    "ease_factor": ease_factor,
                    "next_review": next_review_at(self._now(), interval),
                }
            )
            await self._save(part, DECKS, deck_id, deck)

    async def review_card(
        self,
        tenant: str,
        deck_id: str,
        card_id: str,
        rating: ReviewRating | str,
    ) -> Flashcard:
        """Apply a rating to a card using the server-side scheduler."""
        async with self.collections.partition(tenant) as part:
            deck = await self._load(part, DECKS, deck_id, FlashcardDeck)
            index = _card_index(deck, card_id)
            if index is None:
                raise NotFoundError(f"{DECKS}/{deck_id}/cards", card_id)
            card = deck.cards[index]
            outcome = schedule_review(rating, card.interval, card.ease_factor, self._now())
            card = card.model_copy(update=outcome._asdict())
            deck.cards[index] = card
            await self._save(part, DECKS, deck_id, deck)
            return card

    # =========================================================================
    # QUIZ RESULTS
    # =========================================================================

    async def record_quiz_result(self, tenant: str, subject: str, score: int, total_questions: int) -> str:
        result_id = self.collections.new_id("quiz")
        async with self.collections.partition(tenant) as part:
            result = build(
                QuizResult,
                id=result_id,
                subject=subject,
                score=score,
                total_questions=total_questions,
                timestamp=self._now(),
            )
            await self._save(part, QUIZ_RESULTS, result_id, result)
        return result_id

    async def get_quiz_results(self, tenant: str) -> list[QuizResult]:
        """Most recent first. Equal timestamps keep insertion order."""
        async with self.collections.partition(tenant) as part:
            results = await self._load_all(part, QUIZ_RESULTS, QuizResult)
        return sorted(results, key=lambda r: r.timestamp, reverse=True)

    # =========================================================================
    # GOALS
    # =========================================================================

    async def create_goal(self, tenant: str, title: str, description: str, target_date: int) -> str:
        goal_id = self.collections.new_id("goal")
        async with self.collections.partition(tenant) as part:
            goal = build(
                Goal,
                id=goal_id,
                title=title,
                description=description,
                target_date=target_date,
                is_completed=False,
                created_at=self._now(),
            )
            await self._save(part, GOALS, goal_id, goal)
        return goal_id

    async def complete_goal(self, tenant: str, goal_id: str) -> None:
        async with self.collections.partition(tenant) as part:
            goal = await self._load(part, GOALS, goal_id, Goal)
            if goal.is_completed:
                return
            goal.is_completed = True
            await self._save(part, GOALS, goal_id, goal)

    async def get_goals(self, tenant: str) -> list[Goal]:
        async with self.collections.partition(tenant) as part:
            return await self._load_all(part, GOALS, Goal)

    # =========================================================================
    # PROGRESS & STREAK
    # =========================================================================

    async def update_progress_stat(self, tenant: str, subject: str, mastery_percent: float) -> ProgressStat:
        async with self.collections.partition(tenant) as part:
            stat = build(
                ProgressStat,
                subject=subject,
                mastery_percent=mastery_percent,
                last_updated=self._now(),
            )
            # Keyed by the validated subject so one row per subject
            await self._save(part, PROGRESS_STATS, stat.subject, stat)
            return stat

    async def get_progress_stats(self, tenant: str) -> list[ProgressStat]:
        async with self.collections.partition(tenant) as part:
            return await self._load_all(part, PROGRESS_STATS, ProgressStat)

    async def record_study_activity(self, tenant: str) -> StudyStreak:
        async with self.collections.partition(tenant) as part:
            payload = await part.find(STUDY_STREAK, STREAK_ID)
            previous = None
            if payload is not None:
                current = StudyStreak.model_validate(payload)
                previous = StreakUpdate(current.current_streak, current.last_study_date)
            update = next_streak(previous, self._now())
            streak = StudyStreak(**update._asdict())
            if previous is not None and update.current_streak <= previous.current_streak:
                logger.info("Study streak for tenant %s reset to %d", tenant, update.current_streak)
            await self._save(part, STUDY_STREAK, STREAK_ID, streak)
            return streak

    async def get_study_streak(self, tenant: str) -> StudyStreak:
        async with self.collections.partition(tenant) as part:
            payload = await part.find(STUDY_STREAK, STREAK_ID)
        return StudyStreak() if payload is None else StudyStreak.model_validate(payload)


def _card_index(deck: FlashcardDeck, card_id: str) -> int | None:
    for index, card in enumerate(deck.cards):
        if card.id == card_id:
            return index
    return None
