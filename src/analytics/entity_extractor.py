"""
Entity Extractor - Turn a free-text question into EarmarkFilters.

Pure regex work, no I/O. Each matched span is blanked out of a working
copy of the question so it cannot be matched twice (an "in VA" location
must not also become the VA agency) and so that whatever is left over can
become search keywords.
"""
import re
from typing import Dict, List, Optional, Tuple

from src.core.logging_config import get_logger
from src.models.filters import EarmarkFilters, SORT_AMOUNT_ASC, SORT_AMOUNT_DESC

logger = get_logger(__name__)


US_STATES: Dict[str, str] = {
    "Alabama": "AL", "Alaska": "AK", "Arizona": "AZ", "Arkansas": "AR",
    "California": "CA", "Colorado": "CO", "Connecticut": "CT", "Delaware": "DE",
    "District of Columbia": "DC", "Florida": "FL", "Georgia": "GA", "Hawaii": "HI",
    "Idaho": "ID", "Illinois": "IL", "Indiana": "IN", "Iowa": "IA",
    "Kansas": "KS", "Kentucky": "KY", "Louisiana": "LA", "Maine": "ME",
    "Maryland": "MD", "Massachusetts": "MA", "Michigan": "MI", "Minnesota": "MN",
    "Mississippi": "MS", "Missouri": "MO", "Montana": "MT", "Nebraska": "NE",
    "Nevada": "NV", "New Hampshire": "NH", "New Jersey": "NJ", "New Mexico": "NM",
    "New York": "NY", "North Carolina": "NC", "North Dakota": "ND", "Ohio": "OH",
    "Oklahoma": "OK", "Oregon": "OR", "Pennsylvania": "PA", "Puerto Rico": "PR",
    "Rhode Island": "RI", "South Carolina": "SC", "South Dakota": "SD",
    "Tennessee": "TN", "Texas": "TX", "Utah": "UT", "Vermont": "VT",
    "Virginia": "VA", "Washington": "WA", "West Virginia": "WV",
    "Wisconsin": "WI", "Wyoming": "WY",
}
_STATE_BY_CODE = {code: name for name, code in US_STATES.items()}

# Lower-case agency name -> term stored in the agency column
AGENCY_NAMES: Dict[str, str] = {
    "agriculture": "Agriculture",
    "commerce": "Commerce",
    "defense": "Defense",
    "education": "Education",
    "energy": "Energy",
    "health and human services": "Health and Human Services",
    "homeland security": "Homeland Security",
    "housing and urban development": "Housing and Urban Development",
    "interior": "Interior",
    "justice": "Justice",
    "labor": "Labor",
    "transportation": "Transportation",
    "veterans affairs": "Veterans Affairs",
    "corps of engineers": "Corps of Engineers",
    "army corps of engineers": "Corps of Engineers",
    "environmental protection agency": "Environmental Protection",
    "small business administration": "Small Business Administration",
}

# Upper-case abbreviations, matched case-sensitively
AGENCY_ABBREVIATIONS: Dict[str, str] = {
    "DOL": "Labor",
    "DOT": "Transportation",
    "HUD": "Housing and Urban Development",
    "HHS": "Health and Human Services",
    "DOD": "Defense",
    "DoD": "Defense",
    "VA": "Veterans Affairs",
    "USDA": "Agriculture",
    "DOJ": "Justice",
    "DHS": "Homeland Security",
    "DOE": "Energy",
    "EPA": "Environmental Protection",
    "NASA": "National Aeronautics",
    "SBA": "Small Business Administration",
}

STOP_WORDS = frozenset({
    # from the earmark domain
    "projects", "project", "earmarks", "earmark", "funding", "funded", "funds",
    "department", "agency", "agencies", "community", "federal", "congress",
    "congressional", "member", "members", "representatives", "senators",
    "districts", "district", "money", "dollars", "million", "billion",
    "thousand", "amount", "amounts", "total", "fiscal", "year", "years",
    # question scaffolding
    "show", "what", "which", "where", "when", "were", "with", "from", "that",
    "this", "there", "their", "them", "they", "those", "these", "about",
    "give", "list", "find", "many", "much", "does", "have", "tell", "please",
    "could", "would", "should", "into", "some", "more", "less", "than", "most",
    "least", "largest", "biggest", "smallest", "highest", "lowest", "received",
    "receive", "requested", "request", "secured", "allocated", "compare",
    "between", "related", "over", "under", "above", "below", "greater",
    "each", "every", "other", "like", "also", "only", "just", "being",
    "been", "across", "time", "trends", "trend", "went", "gets",
    "recipients", "recipient", "awarded", "anything", "information",
})

_MEMBER_TITLE_PATTERN = re.compile(
    r"\b(?:sen(?:ator)?|rep(?:resentative)?|congress(?:man|woman))\.?\s+",
    re.IGNORECASE,
)
_NAME_TOKEN_PATTERN = re.compile(r"[\w'.-]+")
_MAX_NAME_TOKENS = 3
_FY_OR_DIGITS_PATTERN = re.compile(r"^(?:fy\d*|.*\d.*)$", re.IGNORECASE)
_NAME_FILLERS = frozenset({"in", "for", "from", "of", "the", "and", "by", "to"})
_YEAR_PATTERN = re.compile(r"\b(?:FY\s*)?(20\d{2})\b", re.IGNORECASE)

_AMOUNT = r"\$?\s*(\d[\d,]*(?:\.\d+)?)\s*(k|thousand|mm|m|million|bn|b|billion)?\b"
_BETWEEN_PATTERN = re.compile(
    r"\bbetween\s+\$\s*(\d[\d,]*(?:\.\d+)?)\s*(k|thousand|mm|m|million|bn|b|billion)?\b"
    r"\s+and\s+" + _AMOUNT,
    re.IGNORECASE,
)
_OVER_PATTERN = re.compile(
    r"\b(?:over|above|greater\s+than|more\s+than|at\s+least|exceeding)\s+" + _AMOUNT,
    re.IGNORECASE,
)
_UNDER_PATTERN = re.compile(
    r"\b(?:under|below|less\s+than|at\s+most|smaller\s+than)\s+" + _AMOUNT,
    re.IGNORECASE,
)

_AGENCY_STOP = (
    r"in|for|from|during|over|under|above|below|with|by|between|since|to|"
    r"vs|versus|compared|that|which|who|where|on|at|earmarks?|projects?|funding|grants?|"
    r"money|accounts?|and\s+(?:the\s+)?(?:Department|Dept)"
)
_DEPARTMENT_OF_PATTERN = re.compile(
    r"\b(?:U\.?S\.?\s+)?(?:Department|Dept\.?)\s+of\s+(?:the\s+)?"
    r"([A-Za-z&]+(?:\s+(?!(?:" + _AGENCY_STOP + r")\b)[A-Za-z&]+)*)",
    re.IGNORECASE,
)
_X_DEPARTMENT_PATTERN = re.compile(r"\b([A-Z][a-z]+)\s+(?:Department|Dept\.?)\b")
_IN_STATE_CODE_PATTERN = re.compile(r"\bin\s+([A-Z]{2})\b")
_WORD_PATTERN = re.compile(r"[a-z][a-z0-9'-]*")

_SORT_DESC_PATTERN = re.compile(r"\b(largest|biggest|top|highest|most|greatest)\b", re.IGNORECASE)
_SORT_ASC_PATTERN = re.compile(r"\b(smallest|lowest|least|fewest)\b", re.IGNORECASE)

# Checked in order, first match wins
_INTENT_PATTERNS: List[Tuple[str, re.Pattern]] = [
    ("guidance", re.compile(
        r"\b(how\s+(?:do|can|to|does)|best\s+way|should\s+i|apply|eligib\w*|process\s+work)\b",
        re.IGNORECASE)),
    ("compare", re.compile(r"\b(compare|comparison|versus|vs\.?|difference\s+between)\b", re.IGNORECASE)),
    ("trend", re.compile(r"\b(trends?|over\s+time|year\s+over\s+year|growth)\b", re.IGNORECASE)),
    ("analyze", re.compile(r"\b(analy[sz]e|analysis|breakdown|distribution|patterns?)\b", re.IGNORECASE)),
    ("summarize", re.compile(
        r"\b(total|sum|how\s+much|how\s+many|average|summary|summari[sz]e|overall)\b", re.IGNORECASE)),
    ("list", re.compile(r"\b(list|show|find|which|what\s+are|give\s+me)\b", re.IGNORECASE)),
]


def parse_dollars(number: str, suffix: Optional[str] = None) -> float:
    """
    Convert a matched figure to dollars.

    >>> parse_dollars("5,000")
    5000.0
    >>> parse_dollars("2.5", "million")
    2500000.0
    """
    value = float(number.replace(",", ""))
    if not suffix:
        return value
    suffix = suffix.lower()
    if suffix in ("k", "thousand"):
        return value * 1_000
    if suffix in ("m", "mm", "million"):
        return value * 1_000_000
    if suffix in ("b", "bn", "billion"):
        return value * 1_000_000_000
    return value


def classify_intent(question: str) -> str:
    """Coarse question type used for prompting and suggestions."""
    for intent, pattern in _INTENT_PATTERNS:
        if pattern.search(question):
            return intent
    return "search"


class _Scratch:
    """Working copy of the question with consumed spans blanked out."""

    def __init__(self, text: str):
        self.text = text

    def consume(self, match: re.Match) -> None:
        self.consume_span(*match.span())

    def consume_span(self, start: int, end: int) -> None:
        self.text = self.text[:start] + " " * (end - start) + self.text[end:]


def _ends_name(token: str, rest: str) -> bool:
    """True if `token` (at the start of `rest`) cannot be part of a member's name."""
    word = token.rstrip(".").removesuffix("'s")
    lowered = word.lower()
    if lowered in STOP_WORDS or lowered in _NAME_FILLERS or _FY_OR_DIGITS_PATTERN.match(word):
        return True
    if word in AGENCY_ABBREVIATIONS:
        return True
    # "Sen. Padilla California projects", "Sen. Brown Labor projects"
    return any(
        re.match(rf"{re.escape(name)}\b", rest, re.IGNORECASE)
        for name in (*US_STATES, *AGENCY_NAMES)
    )


def _extract_member(scratch: _Scratch) -> Optional[str]:
    """
    Surname after a Sen./Rep./Congressman title.

    Up to three name tokens are read ("Senator Bob Casey"); reading stops at
    punctuation, stop words, years, states and agencies, which are left in
    place for the other extractors. Only the title and the name are consumed.
    """
    for title in _MEMBER_TITLE_PATTERN.finditer(scratch.text):
        names: List[str] = []
        end = title.end()
        for token in _NAME_TOKEN_PATTERN.finditer(scratch.text, title.end()):
            text = token.group(0)
            if len(names) == _MAX_NAME_TOKENS or scratch.text[end:token.start()].strip():
                break
            if _ends_name(text, scratch.text[token.start():]):
                break
            # Only the first token may be lower case ("senator menendez")
            if names and not text[0].isupper():
                break
            names.append(text.rstrip(".").removesuffix("'s"))
            end = token.end()

        if names:
            scratch.consume_span(title.start(), end)
            surname = names[-1]
            return surname.capitalize() if surname.islower() else surname
    return None


def _extract_amounts(scratch: _Scratch) -> Tuple[Optional[float], Optional[float]]:
    min_amount = max_amount = None

    match = _BETWEEN_PATTERN.search(scratch.text)
    if match:
        low = parse_dollars(match.group(1), match.group(2) or match.group(4))
        # "between $1 and 5 million" means both figures are millions
        high = parse_dollars(match.group(3), match.group(4) or match.group(2))
        scratch.consume(match)
        return min(low, high), max(low, high)

    match = _OVER_PATTERN.search(scratch.text)
    if match:
        min_amount = parse_dollars(match.group(1), match.group(2))
        scratch.consume(match)

    match = _UNDER_PATTERN.search(scratch.text)
    if match:
        max_amount = parse_dollars(match.group(1), match.group(2))
        scratch.consume(match)

    return min_amount, max_amount


def _extract_year(scratch: _Scratch) -> Optional[int]:
    match = _YEAR_PATTERN.search(scratch.text)
    if not match:
        return None
    scratch.consume(match)
    return int(match.group(1))


def _extract_location(scratch: _Scratch) -> Tuple[Optional[str], Optional[str]]:
    # Longest names first so "West Virginia" wins over "Virginia"
    for name in sorted(US_STATES, key=len, reverse=True):
        match = re.search(rf"\b{re.escape(name)}\b", scratch.text, re.IGNORECASE)
        if match:
            scratch.consume(match)
            return name, US_STATES[name]

    match = _IN_STATE_CODE_PATTERN.search(scratch.text)
    if match and match.group(1) in _STATE_BY_CODE:
        code = match.group(1)
        scratch.consume(match)
        return _STATE_BY_CODE[code], code

    return None, None


def _normalize_agency(name: str) -> str:
    cleaned = re.sub(r"\s+", " ", name).strip(" &")
    return AGENCY_NAMES.get(cleaned.lower(), cleaned.title().replace(" And ", " and ").replace(" Of ", " of "))


def _extract_agencies(scratch: _Scratch) -> List[str]:
    agencies: List[str] = []

    def add(agency: str) -> None:
        if agency and agency not in agencies:
            agencies.append(agency)

    for match in list(_DEPARTMENT_OF_PATTERN.finditer(scratch.text)):
        add(_normalize_agency(match.group(1)))
        scratch.consume(match)

    for match in list(_X_DEPARTMENT_PATTERN.finditer(scratch.text)):
        if match.group(1).lower() in ("the", "which", "what", "each", "every"):
            continue
        add(_normalize_agency(match.group(1)))
        scratch.consume(match)

    # Bare agency names only count when capitalised ("from Transportation"),
    # lower-case "energy efficiency" stays a keyword
    for name in sorted(AGENCY_NAMES, key=len, reverse=True):
        pattern = re.compile(rf"\b{re.escape(name)}\b", re.IGNORECASE)
        for match in list(pattern.finditer(scratch.text)):
            if match.group(0)[0].isupper():
                add(AGENCY_NAMES[name])
                scratch.consume(match)

    for abbreviation, agency in AGENCY_ABBREVIATIONS.items():
        for match in list(re.finditer(rf"\b{abbreviation}\b", scratch.text)):
            add(agency)
            scratch.consume(match)

    return agencies


def _extract_keywords(text: str) -> List[str]:
    keywords: List[str] = []
    for word in _WORD_PATTERN.findall(text.lower()):
        word = word.strip("'-")
        if len(word) > 3 and word not in STOP_WORDS and word not in keywords:
            keywords.append(word)
    return keywords


def _extract_sort(question: str) -> Optional[str]:
    if _SORT_ASC_PATTERN.search(question):
        return SORT_AMOUNT_ASC
    if _SORT_DESC_PATTERN.search(question):
        return SORT_AMOUNT_DESC
    return None


def extract_entities(question: str) -> EarmarkFilters:
    """
    Extract structured filters from a question.

    Example:
        >>> f = extract_entities("Show me Department of Education earmarks in 2022 over $1 million")
        >>> f.agencies, f.year, f.min_amount
        (['Education'], 2022, 1000000.0)
    """
    if not question or not question.strip():
        return EarmarkFilters()

    scratch = _Scratch(question)

    # Order matters: amounts before years so "$2,000" is never a year,
    # locations before agencies so "in VA" is Virginia
    member = _extract_member(scratch)
    min_amount, max_amount = _extract_amounts(scratch)
    year = _extract_year(scratch)
    location, location_code = _extract_location(scratch)
    agencies = _extract_agencies(scratch)
    keywords = _extract_keywords(scratch.text)

    filters = EarmarkFilters(
        member=member,
        year=year,
        agencies=agencies,
        location=location,
        location_code=location_code,
        min_amount=min_amount,
        max_amount=max_amount,
        keywords=keywords,
        sort=_extract_sort(scratch.text),
        intent=classify_intent(question),
    )

    logger.debug(f"Extracted filters: {filters.to_dict()} intent={filters.intent}")
    return filters
