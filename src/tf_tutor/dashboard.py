"""Summary screen scoring and statistics."""
from tf_tutor.progress import ProgressTracker


def get_score_label(score: float) -> str:
    if score >= 80:
        return "STRONG"
    elif score >= 65:
        return "GOOD"
    elif score >= 50:
        return "NEEDS WORK"
    return "WEAK"


def get_score_color(score: float) -> str:
    if score >= 80:
        return "green"
    elif score >= 65:
        return "yellow"
    elif score >= 50:
        return "dark_orange"
    return "red"


def get_area_scores(tracker: ProgressTracker) -> list[dict]:
    """One row per bank area: moving average as a percentage, viewed and total counts.

    Areas with no answers yet have ``score`` None.
    """
    results = []
    for area in tracker.store.areas():
        average = tracker.average_for(area)
        score = round(average * 100, 1) if average is not None else None
        results.append({
            "area": area,
            "score": score,
            "label": get_score_label(score) if score is not None else "",
            "viewed": tracker.viewed_count_for(area),
            "total": tracker.store.area_size(area),
        })
    return results


def get_weakest_area(tracker: ProgressTracker) -> dict | None:
    scored = [row for row in get_area_scores(tracker) if row["score"] is not None]
    if not scored:
        return None
    return min(scored, key=lambda row: row["score"])


def get_study_stats(tracker: ProgressTracker) -> dict:
    return {
        "question_count": len(tracker.store),
        "viewed_count": tracker.viewed_count,
        "viewed_pct": round(tracker.viewed_ratio * 100, 1),
        "incorrect_count": tracker.incorrect_count,
        "incorrect_pct": round(tracker.incorrect_ratio * 100, 1),
    }
