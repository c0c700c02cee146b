#!/usr/bin/env python3
"""Export a diploma as a certified PDF.

Builds a record from the command line, generates a fresh certificate
(random id, fingerprint, verification URL), renders the PDF with its QR
code and writes it as Diploma_<name>_<year>.pdf.

The certificate id and full fingerprint are printed: they are not kept
anywhere else, and verification needs the id.

Usage:
    python scripts/export_diploma.py \
        --student-name "Alice Smith" --title "B.Sc. CS" \
        --institution "Tech U" --year 2024 --out-dir exports/
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from src.bootstrap.diploma_registry import (
    get_export_service,
    get_registry_config,
    set_registry_config,
)
from src.bootstrap.logging import configure_structlog
from src.domain.errors.diploma import ValidationError
from src.domain.models.certificate import FingerprintAlgorithm
from src.domain.models.diploma_record import DiplomaDraft, DiplomaRecord


def build_record(args: argparse.Namespace) -> DiplomaRecord:
    """Trim, check and convert the CLI values into a record.

    Raises:
        ValidationError: Missing field or non-integer year.
    """
    draft = DiplomaDraft(
        student_name=args.student_name,
        diploma_title=args.title,
        institution=args.institution,
        year=args.year,
    )
    return draft.to_record()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Render a diploma with a fresh verification certificate."
    )
    p.add_argument("--student-name", required=True, help="Graduate's name")
    p.add_argument("--title", required=True, help="Diploma title, e.g. 'B.Sc. CS'")
    p.add_argument("--institution", required=True, help="Issuing institution")
    p.add_argument("--year", required=True, help="Graduation year")
    p.add_argument(
        "--out-dir",
        default=None,
        help="Output directory (default: DIPLOMA_EXPORT_DIR, else current directory)",
    )
    p.add_argument(
        "--base-url",
        default=None,
        help="Verification origin (default: DIPLOMA_VERIFICATION_BASE_URL)",
    )
    p.add_argument(
        "--algorithm",
        choices=[a.value for a in FingerprintAlgorithm],
        default=None,
        help="Fingerprint digest (default: DIPLOMA_FINGERPRINT_ALGORITHM)",
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Print the certificate as JSON instead of text",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    config = get_registry_config()
    overrides: dict[str, object] = {}
    if args.base_url:
        overrides["verification_base_url"] = args.base_url
    if args.algorithm:
        overrides["fingerprint_algorithm"] = FingerprintAlgorithm(args.algorithm)
    if overrides:
        config = replace(config, **overrides)
        set_registry_config(config)
    configure_structlog()

    try:
        record = build_record(args)
    except ValidationError as e:
        print(f"EXPORT REJECTED: {e.message}", file=sys.stderr)
        return 1

    out_dir = Path(args.out_dir) if args.out_dir else (config.export_dir or Path.cwd())
    export = get_export_service().export(record, output_dir=out_dir)
    certificate = export.certificate

    if args.json:
        print(json.dumps({**certificate.to_dict(), "path": str(export.path)}, indent=2))
    else:
        print(f"Written: {export.path}")
        print(f"Certificate ID: {certificate.certificate_id}")
        print(f"Fingerprint: {certificate.fingerprint}")
        print(f"Verify: {certificate.verification_url}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
