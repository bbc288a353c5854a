def normalize_answer(value) -> str:
    """Canonical form used for comparison: stripped and case-folded."""
    if value is None:
        return ''
    return str(value).strip().lower()


def answers_match(submitted, expected) -> bool:
    return normalize_answer(submitted) == normalize_answer(expected)
