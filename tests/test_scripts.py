"""Tests for the demo seeding and the board consistency check."""

from __future__ import annotations

import check_qa_consistency
import qa_demo
from check_qa_consistency import check_board
from qa_store import QuestionStore
from tests.conftest import drain


def _answer(aid: str, created: str, votes: int = 0) -> dict:
    return {"id": aid, "text": "x", "createdAt": created, "votes": votes}


def _question(qid: str, created: str, answers: list[dict]) -> dict:
    return {"id": qid, "title": qid, "createdAt": created, "answers": answers}


class TestCheckBoard:
    def test_live_store_is_consistent(self, store: QuestionStore) -> None:
        qa_demo.seed_demo(store)
        q = store.create_question("T", "D")
        a = store.create_answer(q["id"], "x")
        store.create_answer(q["id"], "y")
        store.apply_vote(a["id"], -1)
        errors, warnings = check_board(store.list_questions())
        assert errors == []
        assert warnings == []

    def test_duplicate_answer_id(self) -> None:
        board = [
            _question("q2", "2024-01-02", [_answer("a1", "2024-01-02")]),
            _question("q1", "2024-01-01", [_answer("a1", "2024-01-01")]),
        ]
        errors, _ = check_board(board)
        assert len(errors) == 1
        assert "[a1]" in errors[0]

    def test_negative_votes(self) -> None:
        errors, _ = check_board([_question("q1", "2024-01-01", [_answer("a1", "2024-01-01", -1)])])
        assert errors == ["Answer [a1] has invalid vote count -1"]

    def test_oldest_question_first_is_error(self) -> None:
        board = [_question("q1", "2024-01-01", []), _question("q2", "2024-01-02", [])]
        errors, warnings = check_board(board)
        assert len(errors) == 1
        assert len(warnings) == 2

    def test_newest_answer_first_is_error(self) -> None:
        board = [_question("q1", "2024-01-01", [
            _answer("a2", "2024-01-03"),
            _answer("a1", "2024-01-02"),
        ])]
        errors, _ = check_board(board)
        assert len(errors) == 1

    def test_main_reports_against_fetched_board(self, monkeypatch, capsys) -> None:
        board = [_question("q1", "2024-01-01", [_answer("a1", "2024-01-01", -3)])]
        monkeypatch.setattr(check_qa_consistency, "fetch_board", lambda url: board)
        assert check_qa_consistency.main(["--url", "http://example.test"]) is False
        out = capsys.readouterr().out
        assert "http://example.test" in out
        assert "Errors: 1" in out

    def test_fetch_board_requests_listing(self, monkeypatch) -> None:
        calls = []

        class _Resp:
            def raise_for_status(self) -> None:
                pass

            def json(self) -> list:
                return [{"id": "q1"}]

        def fake_get(url, timeout):
            calls.append(url)
            return _Resp()

        monkeypatch.setattr(check_qa_consistency.requests, "get", fake_get)
        assert check_qa_consistency.fetch_board("http://example.test/") == [{"id": "q1"}]
        assert calls == ["http://example.test/api/questions"]


class TestDemo:
    def test_seed_only_into_empty_store(self, store: QuestionStore) -> None:
        assert len(qa_demo.seed_demo(store)) == 2
        assert qa_demo.seed_demo(store) == []
        assert store.stats()["questions"] == 2

    def test_seed_broadcasts(self, store: QuestionStore, recorder) -> None:
        qa_demo.seed_demo(store)
        events = [e for e, _ in drain(recorder)]
        assert events == ["new-question", "new-answer"] * 2

    def test_main_prints_board(self, capsys) -> None:
        qa_demo.main()
        out = capsys.readouterr().out
        assert "Question: How do I apply for unemployment benefits?" in out
        assert "Votes after +1 +1 -1: 1" in out
        assert "What are my rights as a tenant?" in out
