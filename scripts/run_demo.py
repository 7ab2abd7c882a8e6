#!/usr/bin/env python3
"""run_demo.py — Exercise the CareerSync features against a live API.

Usage:
    python scripts/run_demo.py              # default: http://localhost:8000
    python scripts/run_demo.py --base-url http://localhost:8000 --token <supabase-jwt>
"""

from __future__ import annotations

import argparse
import sys

import httpx

DEMO_CV = (
    "Jane Smith - Data Analyst with five years of experience building dashboards, "
    "cleaning large datasets and running A/B tests. Skilled in Python, pandas, SQL, "
    "scikit-learn and Tableau. Led a churn model project that cut customer attrition "
    "by 12 percent. MSc in Statistics."
)

DEMO_JOB = (
    "We are hiring a Data Scientist to build predictive models, own experimentation "
    "and communicate insights. Requirements: Python, SQL, machine learning, statistics."
)

SCENARIOS = [
    {
        "id": "cv_analysis",
        "name": "CV Analysis",
        "path": "/api/v1/cv-analysis",
        "payload": {"role": "Data Scientist", "cv_text": DEMO_CV},
    },
    {
        "id": "job_match",
        "name": "Job Match",
        "path": "/api/v1/job-match",
        "payload": {"cv_text": DEMO_CV, "job_description_text": DEMO_JOB},
    },
    {
        "id": "skills_roadmap",
        "name": "Skills Roadmap",
        "path": "/api/v1/skills-roadmap",
        "payload": {"target_role": "Machine Learning Engineer", "cv_text": DEMO_CV},
    },
    {
        "id": "cv_too_short",
        "name": "CV Analysis (too short, expect 422)",
        "path": "/api/v1/cv-analysis",
        "payload": {"role": "Data Scientist", "cv_text": "Python, SQL."},
        "expect_status": 422,
    },
]


def _post(client: httpx.Client, path: str, payload: dict) -> httpx.Response:
    return client.post(path, json=payload, timeout=90)


def run_demo(base_url: str, token: str | None) -> None:
    print("═" * 60)
    print(" CareerSync AI — Demo")
    print("═" * 60)
    print(f"Target: {base_url}\n")

    headers = {"Authorization": f"Bearer {token}"} if token else {}
    with httpx.Client(base_url=base_url, headers=headers) as client:
        # Health check
        try:
            resp = client.get("/api/v1/health", timeout=5)
            resp.raise_for_status()
            print(f"✅ Health check: {resp.json()}\n")
        except httpx.HTTPError as exc:
            print(f"❌ Health check failed: {exc}")
            print("   Make sure the server is running: uvicorn app.main:app --reload")
            sys.exit(1)

        results = []
        for scenario in SCENARIOS:
            print(f"─── {scenario['name']} {'─' * (40 - len(scenario['name']))}")
            expected = scenario.get("expect_status", 200)
            try:
                resp = _post(client, scenario["path"], scenario["payload"])
            except httpx.HTTPError as exc:
                print(f"  ❌ Error: {exc}\n")
                results.append(False)
                continue

            data = resp.json()
            if resp.status_code == 200:
                score = data["score"] if data["score"] is not None else "not available"
                print(f"  → State:  {data['state']}")
                print(f"  → Score:  {score}")
                print(f"  → Text:   {(data['text'] or '')[:120]}...")
            else:
                print(f"  → HTTP {resp.status_code}: {data.get('detail')}")
            results.append(resp.status_code == expected)
            print()

        # Mock interview: opening question + one answer
        print(f"─── Mock Interview {'─' * 29}")
        try:
            started = _post(client, "/api/v1/interviews", {"job_title": "Data Scientist", "job_description": DEMO_JOB})
            started.raise_for_status()
            session_id = started.json()["session_id"]
            print(f"  → Question: {started.json()['history'][-1]['text'][:120]}...")
            answered = _post(
                client,
                f"/api/v1/interviews/{session_id}/answers",
                {"response": "I built a churn model in scikit-learn and ran the A/B test that validated it."},
            )
            answered.raise_for_status()
            print(f"  → Feedback: {answered.json()['history'][-1]['text'][:120]}...")
            client.delete(f"/api/v1/interviews/{session_id}")
            results.append(True)
        except httpx.HTTPError as exc:
            print(f"  ❌ Error: {exc}")
            results.append(False)
        print()

    # Summary
    print("═" * 60)
    print(f" Results: {sum(results)}/{len(results)} scenarios behaved as expected")
    print("═" * 60)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run CareerSync demo scenarios")
    parser.add_argument("--base-url", default="http://localhost:8000", help="API base URL")
    parser.add_argument("--token", default=None, help="Supabase access token, when auth is enabled")
    args = parser.parse_args()
    run_demo(args.base_url, args.token)
