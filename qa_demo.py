from qa_store import QuestionStore

DEMO_QUESTIONS = [
    {
        "title": "How do I apply for unemployment benefits?",
        "description": "I recently lost my job and need to know the process for applying "
                       "for unemployment benefits in my state.",
        "category": "Employment",
        "created_by": "Sam Wilson",
        "answers": [
            ("You can apply online through your state's unemployment website. You'll need "
             "your Social Security number, driver's license, and employment history for the "
             "past 18 months. Processing usually takes 2-3 weeks.", "Alex Johnson"),
        ],
    },
    {
        "title": "What are my rights as a tenant?",
        "description": "My landlord is refusing to fix a broken heater. What legal actions can I take?",
        "category": "Housing",
        "created_by": "Taylor Reed",
        "answers": [
            ("As a tenant, you have the right to a habitable living space. Document the issue "
             "with photos and written notices to your landlord. You may be able to withhold rent "
             "or use the \"repair and deduct\" method, but check your local laws first.", "Jordan Lee"),
        ],
    },
]


def seed_demo(store: QuestionStore):
    """Load the demo questions into an empty store. Returns the created question ids."""
    if store.stats()["questions"]:
        return []
    ids = []
    # oldest first so the listing ends up newest first like the demo board
    for item in reversed(DEMO_QUESTIONS):
        q = store.create_question(item["title"], item["description"],
                                  item["category"], item["created_by"])
        for text, author in item["answers"]:
            store.create_answer(q["id"], text, author)
        ids.append(q["id"])
    return ids


def main():
    store = QuestionStore()
    created = seed_demo(store)
    print(f"Created questions: {', '.join(created)}")

    for q in store.list_questions():
        print("Question:", q["title"], f"[{q['category']}]")
        for a in q["answers"]:
            print("  -", a["text"][:70], f"({a['votes']} votes)")

    # Example: upvote the first answer twice, then downvote it
    first = store.list_questions()[0]["answers"][0]
    for delta in (1, 1, -1):
        votes = store.apply_vote(first["id"], delta)
    print("Votes after +1 +1 -1:", votes)

    print("Search 'landlord':", [q["title"] for q in store.list_questions("landlord")])


if __name__ == '__main__':
    main()
