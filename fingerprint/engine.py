"""
Fingerprint Engine: runs the tiered metric battery over one text.

Pipeline per sample:
  1. Unicode cleanup + segmentation (tokens, sentences, paragraphs)
  2. Every metric of every selected tier, in registry order
  3. POS-dependent metrics go through the injected tagger; if it is missing
     or fails, those metrics are omitted and the sample is marked partial

Risk verdicts are not stored on the sample: ``fingerprint.risk`` recomputes
them from the features against the thresholds current at call time.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

import numpy as np

import config
from fingerprint import tiers as tier_registry
from fingerprint.segmenter import segment, split_sentences
from fingerprint.tagging import PosTagger, TaggedSentence, TaggerUnavailable, load_default_tagger

logger = logging.getLogger(__name__)


class Label(str, Enum):
    """Operator-supplied ground truth for a sample."""

    HUMAN = "Human"
    MACHINE = "Machine"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value) -> "Label":
        """
        Accept full names as well as the shorthand flags H / AI / ?.

        Empty values mean Unknown.

        Raises:
            ValueError: on anything else.
        """
        if isinstance(value, Label):
            return value
        key = (value or "").strip().lower()
        if key in ("", "?", "unknown"):
            return cls.UNKNOWN
        if key in ("h", "human"):
            return cls.HUMAN
        if key in ("ai", "m", "machine"):
            return cls.MACHINE
        raise ValueError(f"Unrecognized label '{value}'. Use Human/H, Machine/AI or Unknown/?")


class AnalysisContext:
    """
    Per-sample state shared by the metrics of one analysis.

    Holds the segmentation, a private random generator, and lazily computed
    tagged sentences. Nothing here is shared between samples.
    """

    def __init__(self, segmented: dict, tagger: PosTagger | None, rng: np.random.Generator):
        self.text = segmented["text"]
        self.tokens = segmented["tokens"]
        self.sentences = segmented["sentences"]
        self.sentence_lengths = segmented["sentence_lengths"]
        self.paragraphs = segmented["paragraphs"]
        self.rng = rng
        self.tagger = tagger
        self.tagger_error: str | None = None if tagger else "no POS tagger configured"
        self._tag_cache: dict[str, TaggedSentence] = {}
        self._memo: dict[str, Any] = {}

    def memo(self, key: str, compute: Callable[[], Any]) -> Any:
        """Compute a shared intermediate once per sample."""
        if key not in self._memo:
            self._memo[key] = compute()
        return self._memo[key]

    def tag(self, sentence: str) -> TaggedSentence:
        if self.tagger_error:
            raise TaggerUnavailable(self.tagger_error)
        if sentence not in self._tag_cache:
            try:
                self._tag_cache[sentence] = self.tagger.tag(sentence)
            except Exception as e:
                # Injected oracle: any failure disables tagging for this sample
                self.tagger_error = f"{type(e).__name__}: {e}"
                raise TaggerUnavailable(self.tagger_error) from e
        return self._tag_cache[sentence]

    def tagged(self) -> list[TaggedSentence]:
        return self.memo("tagged", lambda: [self.tag(s) for s in self.sentences])

    def tagged_paragraphs(self) -> list[list[TaggedSentence]]:
        return self.memo(
            "tagged_paragraphs",
            lambda: [[self.tag(s) for s in split_sentences(p)] for p in self.paragraphs],
        )


@dataclass
class TextSample:
    """
    One analyzed document.

    ``tokens``, ``sentences`` and ``sentence_lengths`` are fixed at analysis
    time; only ``external_label`` is expected to change afterwards.
    """

    name: str
    tokens: tuple
    sentences: tuple
    sentence_lengths: tuple
    features: dict
    external_label: Label = Label.UNKNOWN
    omitted_metrics: tuple = field(default=())

    @property
    def partial(self) -> bool:
        return bool(self.omitted_metrics)

    @property
    def burstiness(self) -> float:
        return self.features["tier1"]["burstiness"]

    @property
    def diversity(self) -> float:
        return self.features["tier1"]["sttr"]

    @property
    def metadiscourse_density(self) -> float:
        return self.features["tier1"]["metadiscourse_density"]

    @property
    def word_count(self) -> int:
        return len(self.tokens)

    @property
    def sentence_count(self) -> int:
        return len(self.sentences)

    def to_record(self, risk: dict | None = None, z_scores: dict | None = None) -> dict:
        """Nested record grouped by tier, for JSON consumers."""
        record = {
            "name": self.name,
            "external_label": self.external_label.value,
            "partial": self.partial,
            "omitted_metrics": list(self.omitted_metrics),
            "features": self.features,
        }
        if risk is not None:
            record["risk"] = risk
        if z_scores is not None:
            record["z_scores"] = z_scores
        return record

    def flat_record(self, risk: dict | None = None, z_scores: dict | None = None) -> dict:
        """
        Single-level record with dotted keys (``tier2.hapax_ratio``) for
        tabular export. Sequence-valued traces (growth curve, first
        appearances, rankings) are left out; nested dicts are flattened.
        """
        flat = {
            "name": self.name,
            "external_label": self.external_label.value,
            "partial": self.partial,
        }
        _flatten(self.features, "", flat)
        if risk is not None:
            _flatten(risk, "risk.", flat)
        if z_scores is not None:
            _flatten(z_scores, "z.", flat)
        return flat


def _flatten(values: dict, prefix: str, out: dict):
    for key, value in values.items():
        if isinstance(value, dict):
            _flatten(value, f"{prefix}{key}.", out)
        elif not isinstance(value, (list, tuple)):
            out[f"{prefix}{key}"] = value


class FingerprintEngine:
    """
    Computes the stylometric fingerprint of a text.

    Args:
        tagger: POS oracle. When None and ``use_tagger`` is on, the NLTK
            tagger is loaded lazily on the first analysis.
        use_tagger: Disable all POS-dependent metrics.
        tiers: Tier names to compute (tier1 is always included).
        seed: Seed for VOCD-D subsampling; every sample gets its own
            generator built from it.
        normalize: Apply homoglyph/invisible-character cleanup first.

    Raises:
        ValueError: on an unknown tier name.
    """

    def __init__(
        self,
        tagger: PosTagger | None = None,
        use_tagger: bool = config.USE_POS_TAGGER,
        tiers=None,
        seed: int | None = config.RANDOM_SEED,
        normalize: bool = config.NORMALIZE_UNICODE,
    ):
        self.tiers = tier_registry.resolve(tiers)
        self.seed = seed
        self.normalize = normalize
        self.use_tagger = use_tagger
        self._tagger = tagger
        self._tagger_loaded = tagger is not None

    @property
    def tagger(self) -> PosTagger | None:
        if not self.use_tagger:
            return None
        if not self._tagger_loaded:
            self._tagger = load_default_tagger()
            self._tagger_loaded = True
        return self._tagger

    def analyze(self, text: str, name: str = "Pasted Text", label=Label.UNKNOWN) -> TextSample:
        """
        Analyze one text. Never raises on degenerate input or tagger failure.

        Args:
            text: Raw, already-decoded text.
            name: Display name (need not be unique).
            label: External label (Label or shorthand string).
        """
        segmented = segment(text or "", normalize=self.normalize)
        ctx = AnalysisContext(segmented, self.tagger, np.random.default_rng(self.seed))

        features = {}
        omitted = []
        for tier_name in self.tiers:
            values = {}
            for metric in tier_registry.TIERS[tier_name]:
                if metric.needs_tags:
                    try:
                        values[metric.name] = metric.compute(ctx)
                    except TaggerUnavailable:
                        omitted.append(f"{tier_name}.{metric.name}")
                    continue
                values[metric.name] = metric.compute(ctx)
            features[tier_name] = values

        if omitted and self.use_tagger:
            logger.warning(
                "Partial analysis of '%s': %d POS-dependent metrics omitted (%s)",
                name, len(omitted), ctx.tagger_error,
            )

        return TextSample(
            name=name,
            tokens=tuple(ctx.tokens),
            sentences=tuple(ctx.sentences),
            sentence_lengths=tuple(ctx.sentence_lengths),
            features=features,
            external_label=Label.parse(label),
            omitted_metrics=tuple(omitted),
        )
