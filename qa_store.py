import logging
import threading
from typing import Any, Dict, List, Optional, Tuple

from qa_errors import NotFoundError, ValidationError
from qa_events import NEW_ANSWER, NEW_QUESTION, VOTE_UPDATE, Broadcaster
from qa_models import Answer, Question
from qa_search import search_questions

logger = logging.getLogger(__name__)

# In-memory question board.
# Questions are kept newest first; answers are embedded in their question,
# oldest first. A side index maps answer id -> (question, answer) so votes
# don't have to scan every question.


def _normalize_delta(delta: Any, strict: bool) -> int:
    # bool is an int subclass; True must not count as an upvote
    is_number = isinstance(delta, (int, float)) and not isinstance(delta, bool)
    if is_number and delta == 1:
        return 1
    if strict and not (is_number and delta == -1):
        raise ValidationError('Vote delta must be 1 or -1')
    return -1


def _check_strings(**fields: Any) -> None:
    # any falsy value means "missing" and is handled by the caller
    for name, value in fields.items():
        if value and not isinstance(value, str):
            raise ValidationError(f"'{name}' must be a string")


class QuestionStore:
    def __init__(self, broadcaster: Optional[Broadcaster] = None, strict_votes: bool = False):
        self.broadcaster = broadcaster or Broadcaster()
        self.strict_votes = strict_votes
        self._questions: List[Question] = []
        self._by_id: Dict[str, Question] = {}
        self._answers: Dict[str, Tuple[Question, Answer]] = {}
        # held across apply + publish so events go out in mutation order
        self._lock = threading.Lock()

    def create_question(self, title: str, description: str,
                        category: Optional[str] = None, created_by: Optional[str] = None) -> Dict[str, Any]:
        if not title or not description:
            raise ValidationError('Title and description required')
        _check_strings(title=title, description=description, category=category, createdBy=created_by)
        q = Question(
            title=title,
            description=description,
            category=category or "General",
            created_by=created_by or "Anonymous",
        )
        with self._lock:
            self._questions.insert(0, q)  # newest first
            self._by_id[q.id] = q
            record = q.to_dict()
            self.broadcaster.publish(NEW_QUESTION, record)
        logger.debug("created question %s (%s)", q.id, q.category)
        return record

    def create_answer(self, question_id: str, text: str, created_by: Optional[str] = None) -> Dict[str, Any]:
        if not text:
            raise ValidationError('Answer text required')
        _check_strings(text=text, createdBy=created_by)
        with self._lock:
            q = self._by_id.get(question_id)
            if q is None:
                raise NotFoundError('Question not found')
            a = Answer(text=text, created_by=created_by or "Anonymous")
            q.answers.append(a)
            self._answers[a.id] = (q, a)
            record = a.to_dict()
            self.broadcaster.publish(NEW_ANSWER, {"questionId": q.id, "answer": record})
        logger.debug("created answer %s on question %s", a.id, q.id)
        return record

    def apply_vote(self, answer_id: str, delta: Any) -> int:
        with self._lock:
            found = self._answers.get(answer_id)
            if found is None:
                raise NotFoundError('Answer not found')
            step = _normalize_delta(delta, self.strict_votes)
            q, a = found
            a.votes = max(0, a.votes + step)  # never negative
            self.broadcaster.publish(VOTE_UPDATE, {
                "questionId": q.id,
                "answerId": a.id,
                "votes": a.votes,
            })
            votes = a.votes
        logger.debug("vote %+d on answer %s -> %d", step, answer_id, votes)
        return votes

    def list_questions(self, query: Optional[str] = None) -> List[Dict[str, Any]]:
        with self._lock:
            questions = list(self._questions)
            if query:
                questions = search_questions(questions, query)
            return [q.to_dict() for q in questions]

    def get_question(self, question_id: str) -> Dict[str, Any]:
        with self._lock:
            q = self._by_id.get(question_id)
            if q is None:
                raise NotFoundError('Question not found')
            return q.to_dict()

    def stats(self) -> Dict[str, int]:
        with self._lock:
            counts = {"questions": len(self._questions), "answers": len(self._answers)}
        counts["subscribers"] = self.broadcaster.subscriber_count
        return counts
