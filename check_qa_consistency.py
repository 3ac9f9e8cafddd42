#!/usr/bin/env python3
"""
Script to check a running AskLaw server's board against the store invariants.
Fetches /api/questions and verifies:
  - questions are listed newest first
  - answers within a question are listed oldest first
  - answer ids are unique across the whole board (and question ids too)
  - vote counts are never negative

Usage:
    python check_qa_consistency.py                          # http://localhost:3000
    python check_qa_consistency.py --url http://host:port
"""

import argparse
import sys

import requests

DEFAULT_URL = "http://localhost:3000"


def check_board(questions):
    """Return (errors, warnings) for a list of question records."""
    errors = []
    warnings = []

    seen_questions = set()
    seen_answers = {}

    prev_created = None
    for q in questions:
        qid = q.get('id')
        if qid in seen_questions:
            errors.append(f"Question [{qid}] is listed twice")
        seen_questions.add(qid)

        created = q.get('createdAt', '')
        if prev_created is not None and created > prev_created:
            errors.append(f"Question [{qid}] is newer than the question listed before it")
        prev_created = created

        answers = q.get('answers') or []
        if not answers:
            warnings.append(f"Question [{qid}] has no answers: {q.get('title', '')}")

        prev_answer_created = None
        for a in answers:
            aid = a.get('id')
            if aid in seen_answers:
                errors.append(f"Answer [{aid}] appears under questions [{seen_answers[aid]}] and [{qid}]")
            else:
                seen_answers[aid] = qid

            votes = a.get('votes', 0)
            if not isinstance(votes, int) or votes < 0:
                errors.append(f"Answer [{aid}] has invalid vote count {votes!r}")

            a_created = a.get('createdAt', '')
            if prev_answer_created is not None and a_created < prev_answer_created:
                errors.append(f"Answer [{aid}] on question [{qid}] is older than the answer listed before it")
            prev_answer_created = a_created

    return errors, warnings


def fetch_board(url):
    resp = requests.get(url.rstrip('/') + '/api/questions', timeout=10)
    resp.raise_for_status()
    return resp.json()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Check AskLaw board consistency")
    parser.add_argument('--url', default=DEFAULT_URL, help="server base URL")
    args = parser.parse_args(argv)

    print("=" * 60)
    print("AskLaw Board Consistency Check")
    print(f"Server: {args.url}")
    print("=" * 60)

    questions = fetch_board(args.url)
    n_answers = sum(len(q.get('answers') or []) for q in questions)
    print(f"Loaded {len(questions)} questions and {n_answers} answers\n")

    errors, warnings = check_board(questions)

    if errors:
        print(f"\nERRORS ({len(errors)}):")
        for err in errors:
            print(f"  - {err}")
    else:
        print("\nNo invariant violations found!")

    if warnings:
        print(f"\nWARNINGS ({len(warnings)}):")
        for warn in warnings[:20]:  # Limit display
            print(f"  - {warn}")
        if len(warnings) > 20:
            print(f"  ... and {len(warnings) - 20} more warnings")

    print("\nSummary:")
    print(f"  Total questions: {len(questions)}")
    print(f"  Total answers: {n_answers}")
    print(f"  Errors: {len(errors)}")
    print(f"  Warnings: {len(warnings)}")

    return len(errors) == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
