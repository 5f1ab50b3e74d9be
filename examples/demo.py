#!/usr/bin/env python3
"""Demo: Using pushrisk as a Python library.

Scores a push in-process, then the same push through a spawned engine
process the way a webhook handler would.
"""

from pushrisk.client import score_push_subprocess
from pushrisk.engine import score_push
from pushrisk.models import ScoreRequest, severity_for_score
from pushrisk.renderer import render_push_summary


def main():
    request = ScoreRequest(
        commit_message="feat(billing): add annual plans",
        files_changed=[
            "src/billing/plans.py",
            "db/migrations/0042_add_plan_interval.sql",
            "tests/test_plans.py",
            "package-lock.json",
        ],
        additions=420,
        deletions=35,
    )

    # 1. In-process: pure function, no I/O
    print("--- In-process ---")
    response = score_push(request)
    print(f"  Impact: {response.impact_score} ({severity_for_score(response.impact_score)})")
    print(f"  Flags: {[f.value for f in response.risk_flags]}")
    print(f"  Tags: {[t.value for t in response.change_type_tags]}")
    print(f"  Hotspots: {response.hotspot_files}")

    # 2. Out of process: None means "no risk data", never an error
    print("\n--- Subprocess ---")
    remote = score_push_subprocess(request)
    if remote is None:
        print("  Engine unavailable; push recorded without risk data")
    else:
        print(f"  Same result: {remote == response}")

    # 3. Markdown for a chat notification
    print("\n--- Markdown ---")
    print(render_push_summary(response, title=request.commit_message))


if __name__ == "__main__":
    main()
