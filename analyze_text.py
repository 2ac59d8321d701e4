"""
Stylistic Fingerprint Analysis from the command line.

Fingerprints one or more texts, classifies each against the risk thresholds
and, for two or more samples, reports the corpus calibration view.

Features:
- Tier-1 triad (burstiness, STTR, metadiscourse density) with per-metric status
- Veto rule and majority verdict per sample
- Corpus statistics, z-score outliers, confusion matrix and Youden's J
- JSON output (nested records) or CSV export (flat dotted columns)

Usage:
    python analyze_text.py essay1.txt essay2.pdf --labels H AI
    python analyze_text.py --text "Your text here"
    python analyze_text.py corpus/*.docx --cv-threshold 0.3 --json
    cat essay.txt | python analyze_text.py
"""

import argparse
import csv
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from fingerprint.calibration import Corpus
from fingerprint.engine import FingerprintEngine, Label
from fingerprint.ingest import ingest_files
from fingerprint.risk import ThresholdConfig
import config

STATUS_ICONS = {
    config.STATUS_HUMAN: "🟢",
    config.STATUS_AI: "🔴",
    config.STATUS_AMBIGUOUS: "🟡",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Stylometric fingerprint and risk analysis")
    parser.add_argument("files", nargs="*", help="TXT, PDF or DOCX files to analyze")
    parser.add_argument("--text", action="append", default=[],
                        help="Text to analyze (quoted string, repeatable)")
    parser.add_argument("--labels", nargs="+", default=None,
                        help="External labels (H / AI / ?) in input order: files, then texts")
    parser.add_argument("--cv-threshold", type=float, default=config.DEFAULT_CV_THRESHOLD,
                        help="Burstiness veto cutoff")
    parser.add_argument("--sttr-threshold", type=float, default=config.DEFAULT_STTR_THRESHOLD,
                        help="Diversity human-like floor")
    parser.add_argument("--md-threshold", type=float, default=config.DEFAULT_METADISCOURSE_THRESHOLD,
                        help="Metadiscourse density human-like floor (per 1k tokens)")
    parser.add_argument("--tiers", nargs="+", default=None,
                        help="Tiers to compute (tier1 is always included)")
    parser.add_argument("--seed", type=int, default=config.RANDOM_SEED,
                        help="Seed for VOCD-D subsampling")
    parser.add_argument("--no-pos", action="store_true",
                        help="Skip POS-dependent metrics (no NLTK tagger)")
    parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")
    parser.add_argument("--csv", type=str, default=None,
                        help="Write flat per-sample records to this CSV file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def print_sample(index: int, record: dict):
    """Console report for one sample."""
    tier1 = record["features"]["tier1"]
    risk = record["risk"]

    print(f"\n📄 [{index}] {record['name']}  (label: {record['external_label']})")
    print(f"   Words: {tier1['word_count']} | Sentences: {tier1['sentence_count']} | "
          f"Avg sentence length: {tier1['avg_sentence_length']:.1f}")
    print(f"   {STATUS_ICONS[risk['burstiness_status']]} Burstiness (CV): {tier1['burstiness']:.3f}"
          f"  → {risk['burstiness_status']}")
    print(f"   {STATUS_ICONS[risk['diversity_status']]} Diversity (STTR): {tier1['sttr']:.3f}"
          f"  → {risk['diversity_status']}")
    print(f"   {STATUS_ICONS[risk['metadiscourse_status']]} Metadiscourse: "
          f"{tier1['metadiscourse_density']:.1f}/1k  → {risk['metadiscourse_status']}")

    if risk["veto"]:
        print(f"   ⛔ VERDICT: {risk['overall_risk']} (burstiness veto)")
    else:
        print(f"   📊 VERDICT: {risk['overall_risk']}")

    if record["partial"]:
        print(f"   ⚠ Partial analysis: {len(record['omitted_metrics'])} POS-dependent metrics omitted")


def print_corpus(corpus: Corpus):
    """Console report for the corpus calibration view."""
    stats = corpus.stats()
    print(f"\n{'='*60}")
    print("CORPUS STATISTICS")
    print(f"{'='*60}")
    print(f"  Samples: {stats['count']} | Words: {stats['total_words']} | "
          f"Sentences: {stats['total_sentences']}")
    print(f"  Burstiness:    mean={stats['mean_burstiness']:.3f}  SD={stats['std_burstiness']:.3f}")
    print(f"  Diversity:     mean={stats['mean_diversity']:.3f}  SD={stats['std_diversity']:.3f}")
    print(f"  Metadiscourse: mean={stats['mean_metadiscourse_density']:.2f}  "
          f"SD={stats['std_metadiscourse_density']:.2f}")

    print(f"\n{'='*60}")
    print("OUTLIERS (largest |z|)")
    print(f"{'='*60}")
    for entry in corpus.outliers(config.OUTLIER_TOP_K):
        z = entry["z_scores"]
        print(f"  [{entry['index']}] {entry['name']}: max|z|={entry['max_abs_z']:.2f} "
              f"(z_cv={z['z_cv']:+.2f}, z_sttr={z['z_sttr']:+.2f}, z_md={z['z_md']:+.2f})")

    print(f"\n{'='*60}")
    print("VERDICT DISTRIBUTION")
    print(f"{'='*60}")
    for verdict, count in corpus.verdict_distribution().items():
        print(f"  {verdict}: {count}")
    print(f"\n💡 {corpus.insight()}")

    c = corpus.confusion()
    if c["labelled"]:
        print(f"\n{'='*60}")
        print(f"CONFUSION MATRIX ({c['labelled']} labelled, positive = Human)")
        print(f"{'='*60}")
        print(f"  TP={c['tp']}  FN={c['fn']}")
        print(f"  FP={c['fp']}  TN={c['tn']}")
        print(f"\n  Sensitivity: {c['sensitivity']:.3f}")
        print(f"  Specificity: {c['specificity']:.3f}")
        print(f"  Accuracy:    {c['accuracy']:.3f}")
        print(f"  Youden's J:  {c['youden_j']:.3f}")

    print(f"\n📝 Methods paragraph:\n{corpus.methods_paragraph()}")


def write_csv(path: str, records: list[dict]):
    columns = []
    for record in records:
        columns.extend(key for key in record if key not in columns)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns)
        writer.writeheader()
        writer.writerows(records)


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        thresholds = ThresholdConfig(
            cv_threshold=args.cv_threshold,
            sttr_threshold=args.sttr_threshold,
            metadiscourse_threshold=args.md_threshold,
        )
    except ValidationError as e:
        parser.error(f"invalid threshold: {e.errors()[0]['loc'][0]}: {e.errors()[0]['msg']}")

    try:
        engine = FingerprintEngine(use_tagger=not args.no_pos, tiers=args.tiers, seed=args.seed)
    except ValueError as e:
        parser.error(str(e))

    # Labels line up with the inputs as given: files first, then --text values
    n_inputs = len(args.files) + len(args.text)
    labels = [Label.UNKNOWN] * max(n_inputs, 1)
    if args.labels is not None:
        if len(args.labels) != n_inputs:
            parser.error(f"--labels expects {n_inputs} values, got {len(args.labels)}")
        try:
            labels = [Label.parse(v) for v in args.labels]
        except ValueError as e:
            parser.error(str(e))

    documents = []
    failures = []
    for path, label in zip(args.files, labels):
        extracted, failed = ingest_files([path])
        failures.extend(failed)
        documents.extend((name, text, label) for name, text in extracted)
    for i, (text, label) in enumerate(zip(args.text, labels[len(args.files):]), 1):
        documents.append((f"Pasted Text {i}", text, label))
    if not n_inputs:
        if not args.json:
            print("\n" + "="*60)
            print("Enter or paste your text (Ctrl+D on Mac/Linux, Ctrl+Z then Enter on Windows):")
            print("="*60 + "\n")
        documents.append(("Pasted Text 1", sys.stdin.read(), Label.UNKNOWN))

    for failure in failures:
        print(f"❌ {failure.filename}: {failure.reason}", file=sys.stderr)

    documents = [doc for doc in documents if doc[1] and doc[1].strip()]
    if not documents:
        print("❌ Error: No text provided")
        sys.exit(1)

    corpus = Corpus(thresholds=thresholds, engine=engine)
    for name, text, label in documents:
        corpus.add(engine.analyze(text, name=name, label=label))

    records = corpus.sample_records()
    if args.csv:
        write_csv(args.csv, corpus.sample_records(flat=True))

    if args.json:
        output = {
            "samples": records,
            "failures": [{"filename": f.filename, "reason": f.reason} for f in failures],
        }
        if len(corpus) > 1:
            output["corpus"] = corpus.summary()
        print(json.dumps(output, indent=2))
        return

    print("\n" + "="*60)
    print("🔍 STYLISTIC FINGERPRINT ANALYSIS")
    print("="*60)
    print(f"Thresholds: CV<{thresholds.cv_threshold} (veto), STTR>{thresholds.sttr_threshold}, "
          f"MD>{thresholds.metadiscourse_threshold}/1k")

    for index, record in enumerate(records):
        print_sample(index, record)

    if len(corpus) > 1:
        print_corpus(corpus)

    if args.csv:
        print(f"\n💾 Flat records written to {args.csv}")

    print("\n" + "="*60)
    print("✅ ANALYSIS COMPLETE")
    print("="*60 + "\n")


if __name__ == "__main__":
    main()
