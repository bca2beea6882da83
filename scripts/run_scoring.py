"""
scripts/run_scoring.py — Score a leads CSV against an offer without the API or DB.

Steps:
  1. Read the offer JSON ({"name", "value_props", "ideal_use_cases"})
  2. Parse and validate the leads CSV
  3. Score every valid lead (LLM intent if configured, heuristic otherwise)
  4. Print a summary and optionally write the results CSV

Usage:
    python scripts/run_scoring.py --leads leads.csv --offer offer.json
    python scripts/run_scoring.py --leads leads.csv --offer offer.json --output results.csv
"""

import argparse
import json
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from app.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("run_scoring")

from app.ingestion.csv_io import CSVValidationError, parse_leads_csv, results_to_csv, split_valid_rows
from app.scoring.models import Lead, Offer, ScoredLead
from app.services.scoring import BatchScoringError, ScoringEngine


def load_offer(path: str) -> Offer:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    for key in ("name", "value_props", "ideal_use_cases"):
        if not data.get(key):
            raise ValueError(f"Offer file is missing '{key}'")
    return Offer(
        name=data["name"],
        value_props=list(data["value_props"]),
        ideal_use_cases=list(data["ideal_use_cases"]),
    )


def load_leads(path: str) -> list[Lead]:
    with open(path, "rb") as f:
        rows = parse_leads_csv(f.read())

    valid, invalid = split_valid_rows(rows)
    for entry in invalid:
        logger.warning("Skipping incomplete lead on line %d: %s", entry["line"], entry["lead"].get("name"))

    return [
        Lead(
            id=index,
            name=row["name"],
            role=row["role"],
            company=row["company"],
            industry=row["industry"],
            location=row["location"],
            bio=row.get("linkedin_bio") or None,
        )
        for index, row in enumerate(valid, start=1)
    ]


def run(leads_path: str, offer_path: str, output_path: str | None) -> list[ScoredLead]:
    offer = load_offer(offer_path)
    leads = load_leads(leads_path)

    engine = ScoringEngine.from_settings(settings)
    scored = engine.score_batch_sync(leads, offer)

    if output_path:
        ranked = sorted(scored, key=lambda s: s.final_score, reverse=True)
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            f.write(results_to_csv([s.to_dict() for s in ranked]))
        logger.info("Wrote %d results to %s", len(ranked), output_path)

    return scored


# ── Entry point ───────────────────────────────────────────────────────────────

def main():
    parser = argparse.ArgumentParser(description="Lead Scoring — score a CSV of leads")
    parser.add_argument("--leads", required=True, help="Path to the leads CSV")
    parser.add_argument("--offer", required=True, help="Path to the offer JSON")
    parser.add_argument("--output", default=None, help="Where to write the results CSV")
    args = parser.parse_args()

    print("\n" + "=" * 55)
    print("  Lead Scoring — offline batch")
    print("=" * 55 + "\n")

    try:
        scored = run(args.leads, args.offer, args.output)
    except (CSVValidationError, ValueError, OSError) as exc:
        logger.error("Could not load input: %s", exc)
        sys.exit(2)
    except BatchScoringError as exc:
        logger.error("Scoring failed: %s", exc)
        sys.exit(1)

    by_intent = {"High": 0, "Medium": 0, "Low": 0}
    for s in scored:
        by_intent[s.intent.value] += 1

    print("\n" + "=" * 55)
    print("  Scoring complete!")
    print(f"     Leads   : {len(scored)}")
    print(f"     High    : {by_intent['High']}")
    print(f"     Medium  : {by_intent['Medium']}")
    print(f"     Low     : {by_intent['Low']}")
    print("=" * 55 + "\n")

    for s in sorted(scored, key=lambda s: s.final_score, reverse=True):
        print(f"  {s.final_score:>3}  {s.intent.value:<6}  {s.lead.name} ({s.lead.role} @ {s.lead.company})")


if __name__ == "__main__":
    main()
