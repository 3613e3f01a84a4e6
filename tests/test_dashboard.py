from tf_tutor.dashboard import (
    get_area_scores, get_score_color, get_score_label, get_study_stats, get_weakest_area,
)


def _by_text(store, text):
    return next(q for q in store.questions if q.text == text)


def test_score_labels():
    assert get_score_label(90) == "STRONG"
    assert get_score_label(70) == "GOOD"
    assert get_score_label(55) == "NEEDS WORK"
    assert get_score_label(10) == "WEAK"


def test_score_colors():
    assert get_score_color(80) == "green"
    assert get_score_color(65) == "yellow"
    assert get_score_color(50) == "dark_orange"
    assert get_score_color(0) == "red"


def test_area_scores_before_any_answer(tracker):
    rows = get_area_scores(tracker)
    assert [r["area"] for r in rows] == ["A", "B"]
    assert all(r["score"] is None for r in rows)
    assert rows[0]["total"] == 2
    assert rows[1]["viewed"] == 0


def test_area_scores_after_answers(tracker, store):
    tracker.record_answer(_by_text(store, "x"), True)
    tracker.record_answer(_by_text(store, "y"), False)
    rows = {r["area"]: r for r in get_area_scores(tracker)}
    assert rows["A"]["score"] == 95.0
    assert rows["A"]["label"] == "STRONG"
    assert rows["A"]["viewed"] == 2
    assert rows["B"]["score"] is None


def test_weakest_area(tracker, store):
    assert get_weakest_area(tracker) is None
    tracker.record_answer(_by_text(store, "x"), True)
    tracker.record_answer(_by_text(store, "z"), False)
    assert get_weakest_area(tracker)["area"] == "B"


def test_study_stats(tracker, store):
    tracker.record_answer(_by_text(store, "x"), True)
    tracker.record_answer(_by_text(store, "y"), False)
    stats = get_study_stats(tracker)
    assert stats == {
        "question_count": 3,
        "viewed_count": 2,
        "viewed_pct": 66.7,
        "incorrect_count": 1,
        "incorrect_pct": 33.3,
    }
