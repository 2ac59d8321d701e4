"""
Centralized configuration for the Stylistic Fingerprint Analyzer.
All thresholds, fixed classification bands, window sizes and service
settings are defined here.

Architecture follows a tiered stylometric approach:
  - Tier 1: burstiness (CV), STTR, metadiscourse density (classifier triad)
  - Tier 2: stylometric profile, sophistication, syntax, extended metadiscourse, cohesion
  - Tier 3: advanced lexical diversity, POS style ratios, academic moves, readability
  - Tier 4: clause-level analysis, syntactic patterns, discourse, paragraphs
  - Tier 5: stance, Hallidayan processes, tense and grammatical ratios
  - Tier 6: readability/provenance and micro-syntactic alternations
"""

import os
from pathlib import Path

# --- Project Paths ---
PROJECT_ROOT = Path(__file__).resolve().parent
DATA_DIR = PROJECT_ROOT / "data"

# --- Risk Thresholds (operator adjustable, defaults) ---
DEFAULT_CV_THRESHOLD = 0.25          # Burstiness below this → veto, AI/HIGH-RISK
DEFAULT_STTR_THRESHOLD = 0.45        # Diversity above this → Human-like
DEFAULT_METADISCOURSE_THRESHOLD = 8.0  # Density (per 1k tokens) above this → Human-like

# Declared ranges; values outside are rejected before being stored
CV_THRESHOLD_MAX = 5.0
STTR_THRESHOLD_MAX = 1.0
METADISCOURSE_THRESHOLD_MAX = 1000.0

# --- Fixed Classification Bands ---
# Empirical cutoffs carried over unchanged; changing them changes verdicts.
CV_HUMAN_BAND = 0.30        # Burstiness above this → Human-like
CV_AI_BAND = 0.20           # Burstiness below this → AI-like
STTR_AI_BAND = 0.40         # Diversity below this → AI-like
METADISCOURSE_AI_BAND = 5.0  # Density below this → AI-like

# --- Verdict Labels ---
VERDICT_VETO = "AI/HIGH-RISK"
VERDICT_HUMAN = "High variation — likely human"
VERDICT_AI = "Low variation — likely AI"
VERDICT_MIXED = "Mixed — inconclusive"

STATUS_HUMAN = "Human-like"
STATUS_AI = "AI-like"
STATUS_AMBIGUOUS = "Ambiguous"

# --- Segmentation ---
NORMALIZE_UNICODE = True  # Homoglyph/zero-width cleanup before segmentation

# --- Lexical Diversity ---
STTR_BLOCK_SIZE = 100
MATTR_WINDOW = 50
MTLD_THRESHOLD = 0.72
MTLD_MIN_TOKENS = 50
VOCD_MIN_TOKENS = 50
VOCD_SAMPLE_SIZES = (35, 40, 45, 50)
VOCD_TRIALS = 3
GROWTH_CURVE_STEP = 50
TTR_DECAY_WINDOWS = (50, 100, 150, 200)

# Optional seed for VOCD-D subsampling (reproducible runs / tests)
_seed = os.getenv("FINGERPRINT_SEED")
RANDOM_SEED = int(_seed) if _seed else None

# --- Stylometric Profiles ---
FUNCTION_WORD_TOP_N = 50
FUNCTION_WORD_RANKING = 10
BURROWS_DELTA_TOP_N = 50

# --- Syntactic Complexity Index caps (must sum to 100) ---
COMPLEXITY_LENGTH_POINTS = 33
COMPLEXITY_CLAUSE_POINTS = 33
COMPLEXITY_SUBORDINATION_POINTS = 34
COMPLEXITY_LENGTH_SATURATION = 30.0   # Average sentence length giving full points
COMPLEXITY_CLAUSE_SATURATION = 3.0    # Clauses per sentence giving full points

# --- POS Oracle (NLTK) ---
NLTK_TAGGER_RESOURCE = "taggers/averaged_perceptron_tagger_eng"
NLTK_TAGGER_PACKAGE = "averaged_perceptron_tagger_eng"
USE_POS_TAGGER = os.getenv("FINGERPRINT_USE_POS", "1") != "0"

# --- Calibration ---
OUTLIER_TOP_K = 5
SWEEP_GRIDS = {
    "cv_threshold": [round(0.05 * i, 2) for i in range(1, 13)],          # 0.05 .. 0.60
    "sttr_threshold": [round(0.30 + 0.025 * i, 3) for i in range(0, 17)],  # 0.30 .. 0.70
    "metadiscourse_threshold": [float(v) for v in range(0, 41, 2)],      # 0 .. 40
}

# --- Ingestion ---
SUPPORTED_EXTENSIONS = (".txt", ".pdf", ".docx")

# --- API Configuration ---
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
API_KEYS_FILE = PROJECT_ROOT / ".api_keys.json"
API_KEY_PREFIX = "sfp_"
API_MAX_FILE_SIZE_MB = 10
API_MAX_TEXT_CHARS = 200000
API_MAX_BATCH_SIZE = 20
API_BATCH_WORKERS = 4
