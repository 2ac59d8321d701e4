"""
Closed word lists used by the feature extractors.

Metadiscourse categories follow Hyland (2005); the academic list is a
representative subset of Coxhead's (2000) Academic Word List; the function
words are the 100 most frequent English words.
"""

# --- Tier 1: metadiscourse (single-token matching) ---
METADISCOURSE_CATEGORIES = {
    "transitions": [
        "however", "therefore", "thus", "moreover", "furthermore", "consequently",
        "nevertheless", "nonetheless", "additionally", "similarly", "conversely",
        "meanwhile", "subsequently", "accordingly", "hence", "whereas",
    ],
    "hedges": [
        "might", "perhaps", "possibly", "probably", "maybe", "could", "would", "seem",
        "appear", "suggest", "indicate", "likely", "unlikely", "somewhat", "relatively",
        "fairly", "rather", "quite",
    ],
    "boosters": [
        "clearly", "obviously", "definitely", "certainly", "undoubtedly", "indeed",
        "surely", "always", "never", "must", "demonstrate", "prove", "show",
        "establish", "confirm",
    ],
    "attitude_markers": [
        "surprisingly", "unfortunately", "fortunately", "importantly", "interestingly",
        "remarkably", "hopefully", "regrettably", "essentially", "dramatically",
    ],
    "self_mention": ["i", "we", "my", "our", "me", "us", "mine", "ours"],
    "engagement_markers": [
        "consider", "note", "see", "imagine", "suppose", "assume", "recall",
        "remember", "think", "believe",
    ],
}

# --- Tier 2: extended metadiscourse (phrase matching over raw text) ---
EXTENDED_METADISCOURSE = {
    "code_glosses": [
        "i.e.", "e.g.", "namely", "that is", "in other words", "for example",
        "for instance", "such as", "specifically",
    ],
    "frame_markers": [
        "finally", "first", "second", "third", "firstly", "secondly", "to conclude",
        "in conclusion", "in summary", "to summarize", "overall", "lastly", "next", "then",
    ],
    "evidentials": [
        "according to", "based on", "argues", "claims", "suggests", "states", "reports",
        "finds", "demonstrates", "shows", "research shows", "studies show",
    ],
    "directives": [
        "consider", "note", "see", "observe", "examine", "look at", "refer to",
        "review", "compare", "analyze",
    ],
    "reader_pronouns": ["you", "your", "yours", "yourself", "yourselves"],
}

FUNCTION_WORDS = [
    "the", "be", "to", "of", "and", "a", "in", "that", "have", "i",
    "it", "for", "not", "on", "with", "he", "as", "you", "do", "at",
    "this", "but", "his", "by", "from", "they", "we", "say", "her", "she",
    "or", "an", "will", "my", "one", "all", "would", "there", "their", "what",
    "so", "up", "out", "if", "about", "who", "get", "which", "go", "me",
    "when", "make", "can", "like", "time", "no", "just", "him", "know", "take",
    "people", "into", "year", "your", "good", "some", "could", "them", "see", "other",
    "than", "then", "now", "look", "only", "come", "its", "over", "think", "also",
    "back", "after", "use", "two", "how", "our", "work", "first", "well", "way",
    "even", "new", "want", "because", "any", "these", "give", "day", "most", "us",
]
FUNCTION_WORD_SET = frozenset(FUNCTION_WORDS)

ACADEMIC_WORDS = frozenset([
    "analyze", "approach", "area", "assess", "assume", "authority", "available", "benefit",
    "concept", "consist", "constitute", "context", "contract", "create", "data", "define",
    "derive", "distribute", "economy", "environment", "establish", "estimate", "evident",
    "export", "factor", "finance", "formula", "function", "identify", "income", "indicate",
    "individual", "interpret", "involve", "issue", "labor", "legal", "legislate", "major",
    "method", "occur", "percent", "period", "policy", "principle", "proceed", "process",
    "require", "research", "respond", "role", "section", "sector", "significant", "similar",
    "source", "specific", "structure", "theory", "vary", "achieve", "acquire", "administrate",
    "affect", "appropriate", "aspect", "assist", "category", "chapter", "commission",
    "community", "complex", "compute", "conclude", "conduct", "consequent", "construct",
    "consume", "credit", "culture", "design", "distinct", "element", "equate", "evaluate",
    "feature", "final", "focus", "impact", "injure", "institute", "invest", "item", "journal",
    "maintain", "normal", "obtain", "participate", "perceive", "positive", "potential",
    "previous", "primary", "purchase", "range", "region", "regulate", "relevant", "reside",
    "resource", "restrict", "secure", "seek", "select", "site", "strategy", "survey", "text",
    "tradition", "transfer", "alternative", "circumstance", "comment", "compensate",
    "component", "consent", "considerable", "constant", "constrain", "contribute", "convene",
    "coordinate", "core", "corporate", "correspond", "criteria", "deduce", "demonstrate",
    "document", "dominate", "emphasis", "ensure", "exclude", "framework", "fund", "illustrate",
    "immigrate", "imply", "initial", "instance", "interact", "justify", "layer", "link",
    "locate", "maximize", "minor", "negate", "outcome", "partner", "philosophy", "physical",
    "proportion", "publish", "react", "register", "rely", "remove", "scheme", "sequence",
    "sex", "shift", "specify", "sufficient", "task", "technical", "technique", "technology",
    "valid", "volume",
])

# High-frequency core vocabulary, overwhelmingly Germanic in origin
GERMANIC_CORE = FUNCTION_WORD_SET

PRONOUNS = {
    "first": frozenset(["i", "me", "my", "mine", "we", "us", "our", "ours", "myself", "ourselves"]),
    "second": frozenset(["you", "your", "yours", "yourself", "yourselves"]),
    "third": frozenset([
        "he", "him", "his", "himself", "she", "her", "hers", "herself", "it", "its",
        "itself", "they", "them", "their", "theirs", "themselves",
    ]),
}

# --- Syntax ---
SUBORDINATORS = [
    "although", "though", "even though", "because", "since", "as", "if", "unless", "until",
    "while", "whereas", "after", "before", "when", "whenever", "where", "wherever", "whether",
]
COMPLEX_MARKERS = ["although", "because", "since", "unless", "while", "if", "when", "where"]
COORDINATORS = ["and", "but", "or", "nor", "for", "yet", "so"]
CORRELATIVE_PAIRS = [("either", "or"), ("neither", "nor"), ("both", "and"), ("not only", "but also")]
PHRASAL_PARTICLES = frozenset(["up", "down", "out", "in", "on", "off", "over", "back", "away", "through"])
BE_FORMS = frozenset(["is", "are", "was", "were", "been", "be", "being", "am"])
DEMONSTRATIVES = frozenset(["this", "that", "these", "those"])

# --- Discourse ---
DISCOURSE_MARKERS = frozenset([
    "furthermore", "moreover", "additionally", "besides", "likewise",
    "however", "nevertheless", "nonetheless", "conversely", "alternatively",
    "therefore", "thus", "consequently", "hence", "accordingly",
    "meanwhile", "subsequently", "previously", "initially", "finally",
])
HEDGES = frozenset([
    "possibly", "probably", "perhaps", "maybe", "might", "may", "could", "can",
    "seem", "appear", "suggest", "indicate", "assume", "likely", "unlikely",
    "conceivably", "potentially", "presumably", "apparently",
])
BOOSTER_WORDS = frozenset([
    "definitely", "certainly", "clearly", "obviously", "undeniably", "absolutely",
    "always", "never", "must", "prove", "conclusively", "evidently", "invariably",
])
BOOSTER_PHRASES = ["show that", "demonstrate that"]
EPISTEMIC_ADVERBS = frozenset([
    "arguably", "reportedly", "supposedly", "allegedly", "undoubtedly", "actually",
    "really", "truly", "factually",
])
REPORTING_VERBS = frozenset([
    "argue", "argues", "argued", "claim", "claims", "claimed",
    "suggest", "suggests", "suggested", "demonstrate", "demonstrates", "demonstrated",
    "show", "shows", "showed", "indicate", "indicates", "indicated",
    "reveal", "reveals", "revealed", "find", "finds", "found",
    "conclude", "concludes", "concluded", "state", "states", "stated",
    "report", "reports", "reported", "assert", "asserts", "asserted",
])
GENRE_MOVES = {
    "territory": ["research has shown", "studies have", "it is well known", "previous work", "literature shows"],
    "niche": ["however", "but", "yet", "although", "gap", "lack of", "few studies", "limited research"],
    "purpose": ["this study", "this paper", "this research", "we investigate", "we examine", "the aim", "the purpose"],
}
CITATION_SHELL_NOUNS = [
    "argument", "claim", "idea", "notion", "view", "finding", "result",
    "conclusion", "suggestion", "proposal",
]
NOMINALIZATION_SUFFIXES = ("tion", "sion", "ness", "ment", "ity", "ance", "ence")

# --- Grammar / micro-syntax ---
HALLIDAYAN_PROCESSES = {
    "material": frozenset(["do", "make", "go", "run", "walk", "work", "play", "take", "give", "build", "create", "write", "eat"]),
    "mental": frozenset(["think", "know", "feel", "believe", "understand", "want", "like", "love", "see", "hear", "smell", "remember", "forget"]),
    "relational": frozenset(["be", "have", "become", "seem", "appear", "sound", "look", "remain", "stay"]),
}
IRREGULAR_VERB_ROOTS = {
    "is": "be", "are": "be", "am": "be", "was": "be", "were": "be", "been": "be", "being": "be",
    "has": "have", "had": "have", "having": "have",
    "does": "do", "did": "do", "done": "do",
    "made": "make", "goes": "go", "went": "go", "gone": "go", "ran": "run",
    "took": "take", "taken": "take", "gave": "give", "given": "give",
    "built": "build", "wrote": "write", "written": "write", "ate": "eat", "eaten": "eat",
    "thought": "think", "knew": "know", "known": "know", "felt": "feel",
    "understood": "understand", "saw": "see", "seen": "see", "heard": "hear",
    "smelt": "smell", "forgot": "forget", "forgotten": "forget",
    "became": "become", "stayed": "stay",
}
SHELL_NOUN_CATEGORIES = {
    "factual": ["fact", "problem", "reason", "result", "proof", "evidence", "sign"],
    "mental": ["idea", "theory", "notion", "belief", "concept", "hypothesis", "view"],
    "eventive": ["process", "development", "change", "situation", "occurrence", "incident"],
    "modal": ["possibility", "chance", "risk", "uncertainty", "opportunity", "danger"],
}
DATIVE_VERBS = frozenset([
    "give", "gives", "gave", "given", "send", "sends", "sent", "show", "shows", "showed",
    "tell", "tells", "told", "offer", "offers", "offered",
])
RELATIVE_PREPOSITIONS = frozenset(["to", "for", "with", "by", "from", "in"])
COLOR_ADJECTIVES = ["red", "blue", "green", "black", "white", "yellow"]
SIZE_ADJECTIVES = ["big", "small", "large", "tiny", "huge", "short", "long"]
IDIOMS = [
    "piece of cake", "break a leg", "hit the nail", "bite the bullet",
    "under the weather", "spill the beans", "once in a blue moon",
    "see eye to eye", "ball is in your court", "barking up the wrong tree",
    "blessing in disguise", "burn the midnight oil", "cut corners",
]
