"""Subject classification for conversation blocks."""

from botmetrics.core.models import ClassificationRule


def classify(block_name: str, rule: ClassificationRule) -> str:
    """Resolve a block name to one of the configured subjects.

    The first candidate, in configured order, that occurs anywhere in the
    block name wins. Matching is case-sensitive.

    Args:
        block_name: Free-form block name (e.g., "Greeting Flow").
        rule: Candidate subjects and the default subject.

    Returns:
        The matching candidate, or the default subject when none matches.
    """
    for subject in rule.candidate_subjects:
        if subject and subject in block_name:
            return subject
    return rule.default_subject
