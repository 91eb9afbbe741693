"""Project-wide constants."""

import re

# -- PubMed / NCBI ----------------------------------------------------------
NCBI_BASE_URL: str = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"
PUBMED_SEARCH_URL: str = f"{NCBI_BASE_URL}/esearch.fcgi"
PUBMED_FETCH_URL: str = f"{NCBI_BASE_URL}/efetch.fcgi"
PUBMED_SUMMARY_URL: str = f"{NCBI_BASE_URL}/esummary.fcgi"
PUBMED_ARTICLE_URL: str = "https://pubmed.ncbi.nlm.nih.gov/{pmid}/"

# -- Fetcher defaults --------------------------------------------------------
DEFAULT_MAX_RETRIES: int = 3
DEFAULT_TIMEOUT_SHORT: float = 10.0  # seconds
DEFAULT_TIMEOUT_LONG: float = 15.0  # seconds
DEFAULT_MAX_CITATIONS: int = 5
DEFAULT_PRIORITIZE_REVIEWS: bool = True
DEFAULT_MAX_AGE_YEARS: int = 5

# NCBI allows ~10 req/s with an API key and ~3 req/s without one.
REQUEST_DELAY_WITH_KEY: float = 0.11
REQUEST_DELAY_WITHOUT_KEY: float = 0.35
RATE_LIMIT_MIN_BACKOFF: float = 5.0
OVER_FETCH_FACTOR: int = 2

# -- Entity patterns ---------------------------------------------------------
GENE_PATTERN: re.Pattern[str] = re.compile(r"\b[A-Z][A-Z0-9]+(?:-\d+)?\b")

PROTEIN_PATTERN: re.Pattern[str] = re.compile(
    r"\b[A-Z][a-z]*(?:-[A-Z][a-z]+)*(?:\s+[A-Z][a-z]+){0,3}\s+"
    r"(?:protein|receptor|kinase|phosphatase|enzyme|transporter|channel|factor)\b"
)

DISEASE_PATTERN: re.Pattern[str] = re.compile(
    r"\b(?:[A-Z][a-z]+(?:'s)?\s+){1,4}"
    r"(?:disease|disorder|syndrome|deficiency|cancer|tumor|carcinoma|leukemia|lymphoma)\b"
)

PATHWAY_PATTERN: re.Pattern[str] = re.compile(
    r"\b(?:[A-Z][a-z]+\s+){0,3}(?:pathway|signaling|signalling|cascade|axis)\b"
)

# Acronyms that look like gene symbols but almost never are.
COMMON_NON_GENES: frozenset[str] = frozenset(
    {
        "DNA", "RNA", "PCR", "THE", "AND", "NOT", "FOR", "THIS", "WITH", "FROM",
        "TYPE", "CELL", "CELLS", "FACTOR", "STUDY", "REVIEW", "HUMAN", "MOUSE",
        "RAT", "CASE", "REPORT", "ANALYSIS", "EFFECT", "EFFECTS", "ROLE",
        "ASSOCIATED", "ASSOCIATION", "INVOLVED", "PATHWAY", "RECEPTOR", "PROTEIN",
        "EXPRESSION", "LEVELS", "ACTIVITY", "REGULATION", "FUNCTION", "MUTATION",
        "MUTATIONS", "GENE", "GENES", "SNP", "SNPS", "MIRNA", "NCRNA", "LNCRA",
        "COVID", "SARS-COV-2", "AIDS", "HIV", "USA", "NIH", "FDA",
    }
)  # fmt: skip

# -- Query intent vocabulary -------------------------------------------------
QUERY_TYPE_INDICATORS: dict[str, list[str]] = {
    "gene": ["gene", "genes", "mutation", "allele", "locus", "polymorphism", "variant"],
    "protein": ["protein", "receptor", "enzyme", "antibody", "kinase", "transporter"],
    "pathway": ["pathway", "signaling", "cascade", "metabolic", "process"],
    "disease": ["disease", "disorder", "syndrome", "condition", "pathology", "cancer"],
}

# -- Focus fragment vocabulary (MeSH + Title/Abstract synonyms) -------------
GENE_FOCUS_MESH: list[str] = [
    "Genes, Medical[MeSH Terms]",
    "Genetic Predisposition to Disease[MeSH Terms]",
    "Mutation[MeSH Terms]",
]
GENE_FOCUS_TIAB: list[str] = [
    "gene",
    "genetic*",
    "mutation*",
    "variant*",
    "allele*",
    "polymorphism*",
]

PATHWAY_FOCUS_MESH: list[str] = [
    "Signal Transduction[MeSH Terms]",
    "Metabolic Pathways[MeSH Terms]",
]
PATHWAY_FOCUS_TIAB: list[str] = [
    "pathway",
    "signaling",
    "signalling",
    "cascade",
    "metabolic process",
]

PROTEIN_FOCUS_MESH: list[str] = ["Proteins[MeSH Terms]"]
PROTEIN_FOCUS_TIAB: list[str] = ["protein", "receptor", "enzyme", "kinase", "antibody"]

# -- Query filters -----------------------------------------------------------
REVIEW_FILTER: str = "Review[Publication Type]"

# -- Ranking -----------------------------------------------------------------
REVIEW_BONUS: float = 10.0
RECENCY_WEIGHT: float = 5.0
RECENCY_DECAY: float = 0.85

# -- Rendering ---------------------------------------------------------------
NO_CITATIONS_MESSAGE: str = "No citations found."
LUCKY_SEARCH_URL: str = (
    "https://www.google.com/search?q={title}&btnI=I%27m%20Feeling%20Lucky"
)
