# File: backend/app/cli/scan_cli.py
# Version: v0.1.0
"""
CLI for LambdaGuide candidate discovery and lambda scoring.

Two input modes:
- --fasta: discover PAM-anchored candidates in every record, then score them
           → fasta_lambda_scores.csv + lambda_scores.json
- --table: score an existing CSV with `protospacer` and `PAM` columns
           → table_lambda_scores.csv + lambda_scores.json

Parameters come from --params-json (ScanParameters schema, camelCase) when
given, otherwise from the stored scan_param.json / defaults. --pam, --step
and --workers override individual fields.

Exit codes: 0 ok, 1 no candidates found, 2 invalid input.

Usage:
    python -m backend.app.cli.scan_cli \
        --fasta backend/data/input/region.fasta \
        --outdir backend/data/out/scan \
        [--pam NGG] [--step 1] [--workers 4] [--params-json params.json] \
        [--log-level INFO]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from backend.app.config.config_scan import load_current_params, load_params_file
from backend.app.core.config import settings
from backend.app.core.crispr.errors import CrisprError
from backend.app.core.crispr.parameters import ScanParameters
from backend.app.core.crispr.pipeline import scan_records, score_table, to_export_row
from backend.app.core.dna.fasta import FastaParser
from backend.app.core.export.csv_exporter import export_scores_csv, read_candidate_table
from backend.app.core.export.json_exporter import export_scores_json

log = logging.getLogger("scan_cli")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="PAM-anchored candidate discovery and semiprime lambda scoring")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--fasta", type=Path, help="Input FASTA with one or more records")
    src.add_argument("--table", type=Path, help="CSV with protospacer and PAM columns")
    p.add_argument("--outdir", type=Path, default=settings.OUTPUT_DIR, help="Output directory")
    p.add_argument("--params-json", type=Path, help="ScanParameters JSON (camelCase)")
    p.add_argument("--pam", help="PAM pattern override, N = any base (e.g. NGG)")
    p.add_argument("--step", type=int, help="Window step override (>= 1)")
    p.add_argument("--workers", type=int, default=None, help="Scoring threads (0 = auto)")
    p.add_argument("--no-factorizations", action="store_true", help="Omit per-window records from JSON")
    p.add_argument("--log-level", dest="log_level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Logging level (default: INFO)")
    return p


def _resolve_params(args: argparse.Namespace) -> ScanParameters:
    params = load_params_file(args.params_json) if args.params_json else load_current_params()
    update = {}
    if args.pam:
        update["motifPattern"] = args.pam
    if args.step is not None:
        update["step"] = args.step
    if args.workers is not None:
        update["workers"] = args.workers
    elif not args.params_json:
        update["workers"] = settings.SCAN_WORKERS
    if args.no_factorizations:
        update["includeFactorizations"] = False
    if not update:
        return params
    # re-validate so overrides go through the same checks as the JSON
    return ScanParameters.model_validate({**params.model_dump(), **update})


def _run_fasta(args: argparse.Namespace, params: ScanParameters) -> int:
    records = FastaParser.parse_file(args.fasta)
    log.info("Loaded %d record(s) from %s", len(records), args.fasta)
    scored = scan_records(records, params)
    if not scored:
        return 1

    csv_path = export_scores_csv([to_export_row(c) for c in scored], args.outdir / "fasta_lambda_scores.csv")
    payload = export_scores_json(
        scored,
        args.outdir / "lambda_scores.json",
        motif_pattern=params.motifPattern,
        step=params.step,
        include_factorizations=params.includeFactorizations,
    )
    s = payload["summary"]
    log.info("✓ %d candidates | max λ=%s at %s:%s | mean λ=%s",
             s["count"], s["max_score"], s["best_source"], s["best_location"], s["mean_score"])
    log.info("CSV written: %s", csv_path)
    return 0


def _run_table(args: argparse.Namespace, params: ScanParameters) -> int:
    rows = read_candidate_table(args.table)
    if not rows:
        raise ValueError(f"CSV file {args.table} is empty or contains no data rows.")
    scored = score_table(rows, params)
    csv_path = export_scores_csv(scored, args.outdir / "table_lambda_scores.csv")
    (args.outdir / "lambda_scores.json").write_text(json.dumps(scored, indent=2), encoding="utf-8")
    missing = sum(1 for r in scored if r.get("error"))
    log.info("✓ %d rows scored (%d missing protospacer/PAM)", len(scored), missing)
    log.info("CSV written: %s", csv_path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))
    log.info("=== lambdaguide scan ===")
    log.info("FASTA=%s | TABLE=%s | OUTDIR=%s | PARAMS=%s",
             args.fasta, args.table, args.outdir, args.params_json or "stored")

    try:
        params = _resolve_params(args)
        args.outdir.mkdir(parents=True, exist_ok=True)
        if args.fasta:
            return _run_fasta(args, params)
        return _run_table(args, params)
    except (CrisprError, ValueError, OSError) as ex:
        log.error("✗ %s", ex)
        print(f"[ERROR] {ex}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
