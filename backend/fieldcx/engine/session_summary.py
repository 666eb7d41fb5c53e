"""
Session-level aggregation of test results for dashboards and reports.
"""

import math

from fieldcx.models.readings import TEST_TYPE_NAMES
from fieldcx.models.session import ResultRecord, SessionStatistics


def summarize_session(tests: list[ResultRecord]) -> SessionStatistics:
    """
    Count tests by type and verdict.

    Completion rate is the share of tests that have a verdict, rounded half
    up to a whole percent; 0 for an empty session. Every failing check of a
    failed test becomes an attention item.
    """
    stats = SessionStatistics()

    for record in tests:
        key = record.test_type.value
        stats.tests_by_type[key] = stats.tests_by_type.get(key, 0) + 1

        verdict = record.verdict()
        if verdict is True:
            stats.passed += 1
        elif verdict is False:
            stats.failed += 1
            stats.attention_items.extend(_attention_items(record))
        else:
            stats.pending += 1

    if tests:
        stats.completion_rate = math.floor((stats.passed + stats.failed) / len(tests) * 100 + 0.5)

    return stats


def _attention_items(record: ResultRecord) -> list[str]:
    name = TEST_TYPE_NAMES[record.test_type]
    if record.unit_label:
        name = f"{name} ({record.unit_label})"

    if record.computed is None:
        return [f"{name}: failed"]

    failing = [c.message for c in record.computed.checks.values() if not c.passed]
    return [f"{name}: {message}" for message in failing] or [f"{name}: failed"]
