#!/usr/bin/env python3
"""
Evaluate CLI - Score an RT transmission

Scores a transcript against its expected message and writes a JSON
evaluation plus a markdown report. Scores are rule-based; --use-api adds
narrative feedback from Claude.

Usage:
    python evaluate.py --request request.json
    python evaluate.py --request request.json --difficulty hard --use-api
    python evaluate.py --scenarios scenarios.json --scenario 1 --node 3 --transcript "SHEPHARD, REDCROSS 1, ..."

Output:
    outputs/evaluations/{name}_rt_evaluation.json
    outputs/reports/{name}_rt_report.md
"""

import argparse
import json
import re
import sys
from pathlib import Path

from rt_scorer.evaluators import get_evaluator
from rt_scorer.evaluators.rt.taxonomies import DEFAULT_FEEDBACK_MODEL


def safe_filename(name) -> str:
    """Trainee name reduced to a single path component"""
    cleaned = re.sub(r'[^\w.-]', '_', str(name)).strip('._')
    return cleaned or 'Trainee'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Score an RT transmission against its expected message',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Score a request file (difficulty taken from the file, default medium)
    python evaluate.py --request request.json

    # Force hard mode and add Claude feedback
    python evaluate.py --request request.json --difficulty hard --use-api

    # Score against a scenario node
    python evaluate.py --scenarios scenarios.json --scenario 1 --node 3 \\
        --transcript "SHEPHARD, REDCROSS 1, at Medical Bay, request taxi"

    # Custom output directory and trainee name
    python evaluate.py --request request.json --output ./my_outputs --name "J Smith"
        """
    )

    parser.add_argument(
        '--request',
        help='Path to request JSON file (transcript, expected, difficulty, context, parameters)'
    )
    parser.add_argument(
        '--scenarios',
        help='Path to scenarios JSON file (scenario mode)'
    )
    parser.add_argument(
        '--scenario',
        help='Scenario id (scenario mode)'
    )
    parser.add_argument(
        '--node',
        help='Node id within the scenario (scenario mode)'
    )
    parser.add_argument(
        '--transcript',
        help='Transcript text to score (scenario mode)'
    )
    parser.add_argument(
        '--difficulty',
        choices=['easy', 'medium', 'hard'],
        help='Difficulty tier (overrides the request file)'
    )
    parser.add_argument(
        '--use-api',
        action='store_true',
        help='Add narrative feedback from Claude (scores stay rule-based)'
    )
    parser.add_argument(
        '--api-key',
        help='Anthropic API key (optional, can also use ANTHROPIC_API_KEY env var)'
    )
    parser.add_argument(
        '--model',
        default=DEFAULT_FEEDBACK_MODEL,
        help=f'Claude model for feedback (default: {DEFAULT_FEEDBACK_MODEL})'
    )
    parser.add_argument(
        '--output',
        default='./outputs',
        help='Output directory base (default: ./outputs)'
    )
    parser.add_argument(
        '--name',
        help='Trainee name for output files (default: from request, else "Trainee")'
    )

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    scenario_mode = bool(args.scenarios)
    if not scenario_mode and not args.request:
        print("ERROR: Provide --request, or --scenarios with --scenario, --node and --transcript")
        sys.exit(1)
    if scenario_mode and (args.scenario is None or args.node is None or args.transcript is None):
        print("ERROR: Scenario mode needs --scenario, --node and --transcript")
        sys.exit(1)

    EvaluatorClass = get_evaluator('rt')
    evaluator = EvaluatorClass()

    api_options = {
        'use_api': args.use_api,
        'api_key': args.api_key,
        'model': args.model,
    }

    print(f"\n{'='*60}")
    print("LOADING INPUT")
    print(f"{'='*60}")

    if scenario_mode:
        scenarios_path = Path(args.scenarios)
        if not scenarios_path.exists():
            print(f"ERROR: Scenarios file not found: {scenarios_path}")
            sys.exit(1)

        evaluator.load_scenarios(str(scenarios_path))
        trainee_name = args.name or 'Trainee'
        print(f"Scenario: {args.scenario}, node {args.node}")

        print(f"\n{'='*60}")
        print(f"EVALUATING ({args.difficulty or 'medium'})")
        print(f"{'='*60}")

        try:
            result = evaluator.evaluate_node(
                args.scenario,
                args.node,
                args.transcript,
                difficulty=args.difficulty or 'medium',
                **api_options
            )
        except ValueError as e:
            print(f"ERROR: {e}")
            sys.exit(1)
    else:
        request_path = Path(args.request)
        if not request_path.exists():
            print(f"ERROR: Request not found: {request_path}")
            sys.exit(1)

        with open(request_path, 'r') as f:
            try:
                payload = json.load(f)
            except json.JSONDecodeError as e:
                print(f"ERROR: Request is not valid JSON: {e}")
                sys.exit(1)

        if args.difficulty and isinstance(payload, dict):
            payload['difficulty'] = args.difficulty

        trainee_name = args.name
        if not trainee_name and isinstance(payload, dict):
            trainee_name = payload.get('trainee_name')
        trainee_name = str(trainee_name or 'Trainee')

        print(f"Trainee: {trainee_name}")
        if isinstance(payload, dict):
            print(f"Words: {len(str(payload.get('transcript') or '').split())}")

        print(f"\n{'='*60}")
        print("EVALUATING")
        if args.use_api:
            print(f"  With Claude feedback ({args.model})")
        print(f"{'='*60}")

        try:
            result = evaluator.evaluate(payload, **api_options)
        except ValueError as e:
            print(f"ERROR: Invalid request: {e}")
            sys.exit(1)

    # Print scores
    print(f"\n✓ Evaluation complete ({result.difficulty.value})")
    print(f"  Structure: {result.structure.score}/30")
    print(f"  Accuracy:  {result.accuracy.score}/50")
    print(f"  Fluency:   {result.fluency.score}/20 ({result.fluency.fluency_rating})")
    print(f"  Total:     {result.total}/100")
    if result.cost:
        print(f"  LLM cost:  ${result.cost:.6f}")

    # Save evaluation
    output_base = Path(args.output)
    eval_dir = output_base / "evaluations"
    report_dir = output_base / "reports"
    eval_dir.mkdir(parents=True, exist_ok=True)
    report_dir.mkdir(parents=True, exist_ok=True)

    safe_name = safe_filename(trainee_name)

    eval_path = eval_dir / f"{safe_name}_rt_evaluation.json"
    eval_data = {
        'trainee': trainee_name,
        'evaluator': 'rt',
        'transcript': result.transcript,
        'expected': result.expected,
        'result': result.to_dict(),
    }
    with open(eval_path, 'w') as f:
        json.dump(eval_data, f, indent=2)

    report_path = report_dir / f"{safe_name}_rt_report.md"
    with open(report_path, 'w') as f:
        f.write(evaluator.generate_report(result, trainee_name))

    # Summary
    print(f"\n{'='*60}")
    print("EVALUATION COMPLETE")
    print(f"{'='*60}")
    print(f"Evaluation: {eval_path}")
    print(f"Report: {report_path}")

    return result


if __name__ == "__main__":
    main()
