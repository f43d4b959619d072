"""
N-of-1 Nutrition Engine — Main Pipeline
Processes a personal daily nutrition / sleep log through the full pipeline:
Load → Timeline → Mediation DAG → Pairwise ITE → Ranking → Summary → Foods
"""
import sys
from pathlib import Path
from typing import Optional

from nof1_engine.causal.mediation_graph import (
    build_mediation_dag,
    generate_mermaid_dag,
    print_dag_summary,
    summarize_dag,
)
from nof1_engine.config import DEFAULT_SEED, MEDIATOR_KEY, SAMPLE_RECORDS_PATH
from nof1_engine.data_prep.timeline_builder import build_daily_timeline
from nof1_engine.etl.loader import load_records, load_user_name
from nof1_engine.inference.population_baseline import PopulationBaselineEstimator
from nof1_engine.knowledge.food_repository import FoodRepository
from nof1_engine.output.profile_generator import calculate_ite, save_profile_json
from nof1_engine.output.recommendations import recommend_foods
from nof1_engine.safety.guards import (
    InsufficientDataError,
    RecordValidationError,
    UnknownVariableError,
    describe_insufficient_data,
)


def run_pipeline(
    input_path: Optional[Path] = None,
    seed: Optional[int] = DEFAULT_SEED,
    query: Optional[str] = None,
    output_path: Optional[Path] = None,
    show_mermaid: bool = False,
    verbose: bool = False,
):
    """
    Execute the full pipeline.

    Args:
        input_path: JSON or CSV export of daily records (defaults to the sample week).
        seed: Seed for the population-baseline jitter. None for non-deterministic.
        query: Optional question to turn into food recommendations.
        output_path: Where to write the JSON bundle.
        show_mermaid: Print the mediation DAG as Mermaid.
        verbose: Print every reported pair.
    """
    input_path = Path(input_path or SAMPLE_RECORDS_PATH)

    print("=" * 60)
    print("N-OF-1 NUTRITION ENGINE — Personal ITE Pipeline")
    print(f"  Random seed: {seed}" if seed is not None else "  Random seed: None (non-deterministic)")
    print("=" * 60)

    # ── Phase 1: Load ───────────────────────────────────────────
    print("\n▶ Phase 1: Loading daily records...")
    records = load_records(input_path)
    user_name = load_user_name(input_path)
    print(f"  → {len(records)} days loaded from {input_path.name}"
          + (f" ({user_name})" if user_name else ""))

    timeline = build_daily_timeline(records)
    if len(timeline) > 0:
        print(f"  → {timeline['date'].min():%Y-%m-%d} … {timeline['date'].max():%Y-%m-%d}, "
              f"{len(timeline.columns) - 1} variables")

    # ── Phase 2: Causal structure ───────────────────────────────
    print("\n▶ Phase 2: Building mediation DAG...")
    dag = build_mediation_dag(mediator_key=MEDIATOR_KEY)
    print_dag_summary(dag)
    if show_mermaid:
        print()
        print(generate_mermaid_dag(dag))

    # ── Phase 3: Estimation ─────────────────────────────────────
    print("\n▶ Phase 3: Estimating individual treatment effects...")
    baseline = PopulationBaselineEstimator(seed=seed)
    profile = calculate_ite(records, baseline=baseline, verbose=verbose)
    print(f"  → {len(profile.ite_results)} nutrient → outcome effects reported")

    for i, ite in enumerate(profile.ite_results[:10]):
        marker = "⚠️" if ite.direction == "negative" else "✓"
        print(f"    {i+1}. [{marker}] {ite.nutrient_label} → {ite.outcome_label}: "
              f"ITE={ite.ite_value:+.4f} (confidence {ite.confidence:.2f})")

    # ── Phase 4: Summary ────────────────────────────────────────
    print("\n▶ Phase 4: Personal summary")
    for line in profile.personal_summary.splitlines():
        print(f"  {line}")

    bundle = {
        "user": {"name": user_name} if user_name else {},
        "causal_graph": summarize_dag(dag),
        "profile": profile.to_dict(),
    }

    # ── Phase 5: Food recommendations ───────────────────────────
    if query:
        print("\n▶ Phase 5: Food recommendations")
        rec = recommend_foods(profile, query, FoodRepository())
        print(f"  → Health goal: {rec.health_goal}")
        print(f"  → Actionable effects: {len(rec.effects)}")
        print(f"  → Foods: {', '.join(f.name for f in rec.foods) or 'none'}")
        bundle["recommendation"] = rec.to_dict()

    saved = save_profile_json(bundle, output_path)

    print("\n" + "=" * 60)
    print("PIPELINE COMPLETE")
    print("=" * 60)
    print(f"  Days analysed: {len(records)}")
    print(f"  Effects reported: {len(profile.ite_results)}")
    print(f"  Output: {saved}")
    print()

    return bundle


def main(argv=None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description="N-of-1 Nutrition Engine")
    parser.add_argument("--input", type=Path, default=None, help="JSON or CSV daily records")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED,
                        help=f"Random seed (default: {DEFAULT_SEED}, use -1 for non-deterministic)")
    parser.add_argument("--query", type=str, default=None, help="Question for food recommendations")
    parser.add_argument("--output", type=Path, default=None, help="Output JSON path")
    parser.add_argument("--mermaid", action="store_true", help="Print the mediation DAG as Mermaid")
    parser.add_argument("--verbose", action="store_true", help="Print every reported pair")
    args = parser.parse_args(argv)

    seed = args.seed if args.seed >= 0 else None
    try:
        run_pipeline(
            input_path=args.input,
            seed=seed,
            query=args.query,
            output_path=args.output,
            show_mermaid=args.mermaid,
            verbose=args.verbose,
        )
    except InsufficientDataError as e:
        print(f"\n⚠️ {describe_insufficient_data(e)}", file=sys.stderr)
        return 1
    except (RecordValidationError, UnknownVariableError) as e:
        print(f"\n⚠️ Invalid input file: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
