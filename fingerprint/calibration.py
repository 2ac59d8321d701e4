"""
Corpus Calibrator: corpus-level views over analyzed samples.

Everything here is derived on demand from the current samples, labels and
thresholds; nothing is cached, so label or threshold edits never leave a
stale statistic behind.

Provides:
  - Aggregate statistics (mean / population std of the Tier-1 triad)
  - Per-sample z-scores against the current thresholds
  - Confusion matrix over labelled samples, sensitivity, specificity, Youden's J
  - Outlier ranking by largest absolute z-score
  - Verdict distribution, veto count and a one-line insight
  - Threshold sweep for the J-maximizing value of one threshold
  - A LaTeX method paragraph summarizing the corpus
"""

import logging

import numpy as np
from sklearn.metrics import confusion_matrix

import config
from fingerprint.engine import FingerprintEngine, Label, TextSample
from fingerprint.readability import burrows_delta
from fingerprint.risk import RiskAssessment, ThresholdConfig, assess

logger = logging.getLogger(__name__)

# Triad accessor, matching threshold field and z-score key
TRIAD = (
    ("burstiness", "cv_threshold", "z_cv"),
    ("diversity", "sttr_threshold", "z_sttr"),
    ("metadiscourse_density", "metadiscourse_threshold", "z_md"),
)


class Corpus:
    """
    Ordered, append-only collection of samples sharing one ThresholdConfig.

    Samples are never removed; only their external labels change.
    """

    def __init__(self, thresholds: ThresholdConfig | None = None,
                 engine: FingerprintEngine | None = None):
        self.thresholds = thresholds if thresholds is not None else ThresholdConfig()
        self.engine = engine
        self._samples: list[TextSample] = []

    def __len__(self) -> int:
        return len(self._samples)

    def __getitem__(self, index: int) -> TextSample:
        return self._samples[index]

    def __iter__(self):
        return iter(list(self._samples))

    @property
    def samples(self) -> tuple:
        return tuple(self._samples)

    # --- Growth ---

    def add(self, sample: TextSample) -> int:
        """Append an analyzed sample and return its index."""
        self._samples.append(sample)
        logger.debug("Corpus: added '%s' (%d samples)", sample.name, len(self._samples))
        return len(self._samples) - 1

    def add_text(self, text: str, name: str | None = None, label=Label.UNKNOWN) -> TextSample:
        """Analyze ``text`` with the corpus engine and append it."""
        if self.engine is None:
            self.engine = FingerprintEngine()
        sample = self.engine.analyze(text, name=name or f"Pasted Text {len(self) + 1}", label=label)
        self.add(sample)
        return sample

    def set_label(self, index: int, label) -> TextSample:
        """
        Set the external label of one sample.

        Raises:
            IndexError: no sample at ``index``.
            ValueError: unrecognized label.
        """
        if not 0 <= index < len(self._samples):
            raise IndexError(f"No sample at index {index}")
        sample = self._samples[index]
        sample.external_label = Label.parse(label)
        return sample

    # --- Statistics ---

    def stats(self) -> dict:
        """Count, totals, and mean / population std of the triad."""
        n = len(self._samples)
        result = {
            "count": n,
            "total_words": sum(s.word_count for s in self._samples),
            "total_sentences": sum(s.sentence_count for s in self._samples),
        }
        for attr, _, _ in TRIAD:
            values = np.array([getattr(s, attr) for s in self._samples], dtype=np.float64)
            result[f"mean_{attr}"] = float(np.mean(values)) if n else 0.0
            result[f"std_{attr}"] = float(np.std(values)) if n else 0.0
        return result

    def z_scores(self, sample: TextSample, stats: dict | None = None,
                 thresholds: ThresholdConfig | None = None) -> dict:
        """(value - threshold) / corpus std for each triad metric; 0 when std is 0."""
        stats = stats if stats is not None else self.stats()
        thresholds = thresholds if thresholds is not None else self.thresholds
        z = {}
        for attr, threshold_field, key in TRIAD:
            std = stats[f"std_{attr}"]
            value = getattr(sample, attr)
            z[key] = (value - getattr(thresholds, threshold_field)) / std if std > 0 else 0.0
        return z

    def assessments(self, thresholds: ThresholdConfig | None = None) -> list[RiskAssessment]:
        thresholds = thresholds if thresholds is not None else self.thresholds
        return [assess(s, thresholds) for s in self._samples]

    # --- Confusion matrix ---

    def confusion(self, thresholds: ThresholdConfig | None = None) -> dict:
        """
        Confusion matrix over samples with a Human or Machine label.

        Positive = Human: predicted positive when the verdict mentions
        "human", actually positive when labelled Human.
        """
        thresholds = thresholds if thresholds is not None else self.thresholds
        labelled = [s for s in self._samples if s.external_label is not Label.UNKNOWN]

        if labelled:
            actual = [s.external_label is Label.HUMAN for s in labelled]
            predicted = [assess(s, thresholds).is_human_prediction for s in labelled]
            tn, fp, fn, tp = (
                int(v) for v in confusion_matrix(actual, predicted, labels=[False, True]).ravel()
            )
        else:
            tn = fp = fn = tp = 0

        sensitivity = tp / (tp + fn) if (tp + fn) > 0 else 0.0
        specificity = tn / (tn + fp) if (tn + fp) > 0 else 0.0
        return {
            "labelled": len(labelled),
            "tp": tp,
            "fp": fp,
            "tn": tn,
            "fn": fn,
            "sensitivity": sensitivity,
            "specificity": specificity,
            "accuracy": (tp + tn) / len(labelled) if labelled else 0.0,
            "youden_j": sensitivity + specificity - 1,
        }

    # --- Rankings and distributions ---

    def outliers(self, top_k: int | None = None) -> list[dict]:
        """Samples ordered by their largest absolute z-score, descending."""
        stats = self.stats()
        ranked = []
        for index, sample in enumerate(self._samples):
            z = self.z_scores(sample, stats)
            ranked.append({
                "index": index,
                "name": sample.name,
                "z_scores": z,
                "max_abs_z": max(abs(v) for v in z.values()),
            })
        ranked.sort(key=lambda r: r["max_abs_z"], reverse=True)
        return ranked[:top_k] if top_k is not None else ranked

    def verdict_distribution(self) -> dict:
        distribution = {
            config.VERDICT_VETO: 0,
            config.VERDICT_HUMAN: 0,
            config.VERDICT_AI: 0,
            config.VERDICT_MIXED: 0,
        }
        for risk in self.assessments():
            distribution[risk.overall_risk] += 1
        return distribution

    def veto_count(self) -> int:
        return sum(1 for risk in self.assessments() if risk.veto)

    def insight(self) -> str:
        """One-line reading of the corpus against the current thresholds."""
        n = len(self._samples)
        if n == 0:
            return "No samples analyzed yet."

        stats = self.stats()
        parts = []
        if (stats["mean_burstiness"] >= self.thresholds.cv_threshold
                and stats["mean_diversity"] >= self.thresholds.sttr_threshold):
            parts.append("Corpus averages are human-like")
        else:
            parts.append("Corpus averages show potential AI characteristics")

        vetoed = self.veto_count()
        if 0 < vetoed < n / 2:
            noun, verb = ("text", "drives") if vetoed == 1 else ("texts", "drive")
            parts.append(f"but {vetoed} {noun} {verb} CV down into AI territory")
        if vetoed > 0:
            parts.append(f"{vetoed} file{'s' if vetoed > 1 else ''} flagged as HIGH RISK")
        return ", ".join(parts) + "."

    # --- Threshold sweep ---

    def sweep_threshold(self, name: str, values=None) -> dict:
        """
        Youden's J for each candidate value of one threshold.

        Runs on a copy of the configuration; the shared thresholds are not
        touched. The best value is the first one reaching the highest J.

        Raises:
            ValueError: unknown threshold name, or a value out of range.
        """
        if name not in ThresholdConfig.model_fields:
            raise ValueError(
                f"Unknown threshold '{name}'. Choose from: {', '.join(ThresholdConfig.model_fields)}"
            )
        if values is None:
            values = config.SWEEP_GRIDS[name]

        trial = self.thresholds.model_copy()
        results = []
        for value in values:
            setattr(trial, name, value)
            c = self.confusion(trial)
            results.append({
                "value": float(value),
                "youden_j": c["youden_j"],
                "sensitivity": c["sensitivity"],
                "specificity": c["specificity"],
            })

        labelled = any(s.external_label is not Label.UNKNOWN for s in self._samples)
        best = max(results, key=lambda r: r["youden_j"]) if results and labelled else None
        return {
            "threshold": name,
            "current_value": getattr(self.thresholds, name),
            "results": results,
            "best_value": best["value"] if best else None,
            "best_youden_j": best["youden_j"] if best else None,
        }

    # --- Comparison ---

    def compare(self, index_a: int, index_b: int) -> dict:
        """Burrows' Delta between two samples of the corpus."""
        a = self._samples[index_a]
        b = self._samples[index_b]
        return {
            "a": {"index": index_a, "name": a.name},
            "b": {"index": index_b, "name": b.name},
            "burrows_delta": burrows_delta(a.tokens, b.tokens),
        }

    # --- Reporting ---

    def methods_paragraph(self) -> str:
        """LaTeX method paragraph; empty for an empty corpus."""
        if not self._samples:
            return ""

        s = self.stats()
        c = self.confusion()
        j = f"{c['youden_j']:.2f}" if c["labelled"] else "N/A"
        t = self.thresholds
        return (
            f"The corpus ($N$={s['count']}) was analysed with CV "
            f"(mean={s['mean_burstiness']:.3f}, SD={s['std_burstiness']:.2f}), STTR "
            f"(mean={s['mean_diversity']:.3f}, SD={s['std_diversity']:.2f}) and metadiscourse density "
            f"(mean={s['mean_metadiscourse_density']:.2f}/1k, SD={s['std_metadiscourse_density']:.1f}). "
            f"Thresholds were CV$<${t.cv_threshold:.2f}, STTR$>${t.sttr_threshold:.2f}, "
            f"MD$>${t.metadiscourse_threshold:.1f}, yielding Youden's $J$={j}."
        )

    def sample_records(self, flat: bool = False) -> list[dict]:
        """Per-sample records with the current risk assessment and z-scores."""
        stats = self.stats()
        records = []
        for sample in self._samples:
            risk = assess(sample, self.thresholds).to_dict()
            z = self.z_scores(sample, stats)
            if flat:
                records.append(sample.flat_record(risk=risk, z_scores=z))
            else:
                records.append(sample.to_record(risk=risk, z_scores=z))
        return records

    def summary(self, top_k: int = config.OUTLIER_TOP_K) -> dict:
        """Corpus record: stats, confusion, outliers and verdict distribution."""
        return {
            "thresholds": self.thresholds.model_dump(),
            "stats": self.stats(),
            "confusion": self.confusion(),
            "outliers": self.outliers(top_k),
            "verdict_distribution": self.verdict_distribution(),
            "veto_count": self.veto_count(),
            "insight": self.insight(),
            "methods_paragraph": self.methods_paragraph(),
        }
