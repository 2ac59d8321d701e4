"""
Evaluation script: measures the risk classifier on a labelled corpus.

Expects a directory with one subdirectory per label:

    <corpus_dir>/human/    documents written by people
    <corpus_dir>/machine/  machine-generated documents

Reports:
  - Corpus statistics of the burstiness / STTR / metadiscourse triad
  - Confusion matrix (positive = Human), sensitivity, specificity, Youden's J
  - Per-class report (precision / recall / F1)
  - Threshold sweep for the J-maximizing value of each threshold
  - Timing benchmarks

Usage:
    python evaluate_corpus.py              (defaults to data/corpus)
    python evaluate_corpus.py path/to/corpus
    python evaluate_corpus.py data/corpus --max_samples 200 --seed 7 --pos
"""

import json
import time
from pathlib import Path

import numpy as np
from sklearn.metrics import classification_report

import config
from fingerprint.calibration import Corpus
from fingerprint.engine import FingerprintEngine, Label
from fingerprint.ingest import ingest_files
from fingerprint.risk import ThresholdConfig

LABEL_DIRS = {"human": Label.HUMAN, "machine": Label.MACHINE}


def collect_documents(corpus_dir: Path, max_samples: int) -> list[tuple[str, str, Label]]:
    """(name, text, label) for every readable document under the label directories."""
    documents = []
    for dirname, label in LABEL_DIRS.items():
        folder = corpus_dir / dirname
        if not folder.is_dir():
            print(f"  ⚠ Missing {folder}, no {label.value} samples")
            continue
        paths = sorted(p for p in folder.iterdir() if p.suffix.lower() in config.SUPPORTED_EXTENSIONS)
        extracted, failures = ingest_files(paths[:max_samples])
        for failure in failures:
            print(f"  ❌ Skipped {failure}")
        documents.extend((f"{dirname}/{name}", text, label) for name, text in extracted)
    return documents


def build_engine(use_tagger: bool = False, seed: int | None = config.RANDOM_SEED,
                 tagger=None) -> FingerprintEngine:
    """
    Tier 1 alone carries the verdict. With POS tagging on, every tier is
    computed so the tagger-dependent metrics are actually produced.
    """
    tiers = None if use_tagger else ["tier1"]
    return FingerprintEngine(tagger=tagger, use_tagger=use_tagger, tiers=tiers, seed=seed)


def evaluate(
    corpus_dir: str,
    max_samples: int = 500,
    seed: int | None = config.RANDOM_SEED,
    use_tagger: bool = False,
    sweep_thresholds: bool = True,
    output: str | None = None,
) -> Corpus | None:
    """
    Fingerprint a labelled corpus and report classifier performance.

    Args:
        corpus_dir: Directory holding ``human/`` and ``machine/`` subdirectories.
        max_samples: Max documents read per label.
        seed: VOCD-D seed.
        use_tagger: Compute every tier, POS-dependent metrics included (slower, not needed for the verdict).
        sweep_thresholds: Whether to search each threshold's grid for the best J.
        output: Optional path for a JSON dump of the corpus summary and sweeps.
    """
    corpus_dir = Path(corpus_dir)
    if not corpus_dir.is_dir():
        print(f"ERROR: Corpus directory not found: {corpus_dir}")
        return None

    documents = collect_documents(corpus_dir, max_samples)
    if not documents:
        print("ERROR: No readable documents found.")
        return None
    print(f"Loaded {len(documents)} documents")

    engine = build_engine(use_tagger=use_tagger, seed=seed)
    corpus = Corpus(thresholds=ThresholdConfig(), engine=engine)

    times = []
    for i, (name, text, label) in enumerate(documents):
        start = time.time()
        corpus.add(engine.analyze(text, name=name, label=label))
        times.append(time.time() - start)

        if (i + 1) % 20 == 0:
            avg_time = np.mean(times[-20:])
            print(f"  Evaluated {i + 1}/{len(documents)} samples... "
                  f"({avg_time:.3f}s/sample)")

    stats = corpus.stats()
    print(f"\n{'='*60}")
    print("CORPUS STATISTICS")
    print(f"{'='*60}")
    print(f"  Samples: {stats['count']}  Words: {stats['total_words']}  "
          f"Sentences: {stats['total_sentences']}")
    print(f"  Burstiness:    mean={stats['mean_burstiness']:.3f}  SD={stats['std_burstiness']:.3f}")
    print(f"  Diversity:     mean={stats['mean_diversity']:.3f}  SD={stats['std_diversity']:.3f}")
    print(f"  Metadiscourse: mean={stats['mean_metadiscourse_density']:.2f}  "
          f"SD={stats['std_metadiscourse_density']:.2f}")

    c = corpus.confusion()
    print(f"\n{'='*60}")
    print("CLASSIFIER RESULTS (default thresholds, positive = Human)")
    print(f"{'='*60}")
    true_labels = [s.external_label is Label.HUMAN for s in corpus]
    pred_labels = [risk.is_human_prediction for risk in corpus.assessments()]
    print(classification_report(
        true_labels, pred_labels, labels=[False, True],
        target_names=["Machine", "Human"], zero_division=0,
    ))
    print("Confusion Matrix:")
    print(f"  TP={c['tp']}  FN={c['fn']}")
    print(f"  FP={c['fp']}  TN={c['tn']}")
    print(f"\n  Sensitivity: {c['sensitivity']:.4f}")
    print(f"  Specificity: {c['specificity']:.4f}")
    print(f"  Youden's J:  {c['youden_j']:.4f}")
    print(f"  Vetoed:      {corpus.veto_count()}")

    # --- Threshold sweep ---
    sweeps = {}
    if sweep_thresholds:
        print(f"\n{'='*60}")
        print("OPTIMAL THRESHOLD SEARCH (Youden's J)")
        print(f"{'='*60}")
        for name in ThresholdConfig.model_fields:
            sweep = corpus.sweep_threshold(name)
            sweeps[name] = sweep
            print(f"  {name}: current={sweep['current_value']}  "
                  f"best={sweep['best_value']}  J={sweep['best_youden_j']:.4f}")

    # --- Timing ---
    print(f"\n{'='*60}")
    print("PERFORMANCE")
    print(f"{'='*60}")
    print(f"  Total samples:  {len(times)}")
    print(f"  Total time:     {sum(times):.1f}s")
    print(f"  Avg per sample: {np.mean(times):.3f}s")
    print(f"  Median:         {np.median(times):.3f}s")
    print(f"  P95:            {np.percentile(times, 95):.3f}s")

    print(f"\n{corpus.methods_paragraph()}")

    if output:
        with open(output, "w") as f:
            json.dump({"summary": corpus.summary(), "sweeps": sweeps}, f, indent=2)
        print(f"\nResults written to {output}")

    return corpus


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Evaluate the stylometric risk classifier")
    parser.add_argument("corpus_dir", type=str, nargs="?", default=str(config.DATA_DIR / "corpus"))
    parser.add_argument("--max_samples", type=int, default=500)
    parser.add_argument("--seed", type=int, default=config.RANDOM_SEED)
    parser.add_argument("--pos", action="store_true", help="Compute all tiers, POS-dependent metrics included")
    parser.add_argument("--no_sweep", action="store_true")
    parser.add_argument("--output", type=str, default=None)
    args = parser.parse_args()

    evaluate(
        corpus_dir=args.corpus_dir,
        max_samples=args.max_samples,
        seed=args.seed,
        use_tagger=args.pos,
        sweep_thresholds=not args.no_sweep,
        output=args.output,
    )
