"""
Value normalizers for eligibility matching

Student records and scholarship criteria encode the same value in several ways
("FDS" vs "Full Discount with Stipend", "1st Year" vs "Freshman", "CAS" vs
"College of Arts and Sciences"). Every normalizer here maps a raw value to one
canonical form so comparisons do not depend on how the value was typed in.
Unknown values are returned unchanged; None and blank input return None.
"""
import math
import re
from typing import Any, Dict, Iterable, Optional

# UP grading scale: 1.0 is the best grade, 5.0 is failing
GWA_BEST = 1.0
GWA_WORST = 5.0

NEUTRAL_SCORE = 0.5


ST_BRACKET_MAP: Dict[str, str] = {
    # Short codes
    "FDS": "Full Discount with Stipend",
    "FD": "Full Discount",
    "PD80": "PD80",
    "PD60": "PD60",
    "PD40": "PD40",
    "PD20": "PD20",
    "ND": "No Discount",
    # Full names
    "FULL DISCOUNT WITH STIPEND": "Full Discount with Stipend",
    "FULL DISCOUNT": "Full Discount",
    "80% PARTIAL DISCOUNT": "PD80",
    "60% PARTIAL DISCOUNT": "PD60",
    "40% PARTIAL DISCOUNT": "PD40",
    "20% PARTIAL DISCOUNT": "PD20",
    "PARTIAL DISCOUNT 80": "PD80",
    "PARTIAL DISCOUNT 60": "PD60",
    "PARTIAL DISCOUNT 40": "PD40",
    "PARTIAL DISCOUNT 20": "PD20",
    "NO DISCOUNT": "No Discount",
}

YEAR_LEVEL_MAP: Dict[str, str] = {
    # Numeric
    "1": "Freshman",
    "2": "Sophomore",
    "3": "Junior",
    "4": "Senior",
    "5": "Graduate",
    # Ordinal
    "1ST YEAR": "Freshman",
    "2ND YEAR": "Sophomore",
    "3RD YEAR": "Junior",
    "4TH YEAR": "Senior",
    "5TH YEAR": "Senior",
    # Spelled out
    "FIRST YEAR": "Freshman",
    "SECOND YEAR": "Sophomore",
    "THIRD YEAR": "Junior",
    "FOURTH YEAR": "Senior",
    "FIFTH YEAR": "Senior",
    # Classification names
    "FRESHMAN": "Freshman",
    "SOPHOMORE": "Sophomore",
    "JUNIOR": "Junior",
    "SENIOR": "Senior",
    "GRADUATE": "Graduate",
    "GRADUATE STUDENT": "Graduate",
    "INCOMING FRESHMAN": "Incoming Freshman",
}

COLLEGE_CODE_MAP: Dict[str, str] = {
    "CAS": "College of Arts and Sciences",
    "CAFS": "College of Agriculture and Food Science",
    "CEM": "College of Economics and Management",
    "CEAT": "College of Engineering and Agro-Industrial Technology",
    "CFNR": "College of Forestry and Natural Resources",
    "CHE": "College of Human Ecology",
    "CVM": "College of Veterinary Medicine",
    "CDC": "College of Development Communication",
    "CPAF": "College of Public Affairs and Development",
    "GS": "Graduate School",
    "SESAM": "School of Environmental Science and Management",
}

CITIZENSHIP_MAP: Dict[str, str] = {
    "FILIPINO": "Filipino",
    "FILIPINA": "Filipino",
    "PILIPINO": "Filipino",
    "PHILIPPINE": "Filipino",
    "PHILIPPINES": "Filipino",
    "FILIPINO CITIZEN": "Filipino",
    "PH": "Filipino",
    "PHL": "Filipino",
    "DUAL": "Dual Citizen",
    "DUAL CITIZEN": "Dual Citizen",
    "DUAL CITIZENSHIP": "Dual Citizen",
    "FOREIGN": "Foreign",
    "FOREIGNER": "Foreign",
    "FOREIGN NATIONAL": "Foreign",
    "NON-FILIPINO": "Foreign",
}

PROVINCE_ALIASES: Dict[str, str] = {
    "NCR": "Metro Manila",
    "METRO MANILA": "Metro Manila",
    "NATIONAL CAPITAL REGION": "Metro Manila",
    "MM": "Metro Manila",
    "MT. PROVINCE": "Mountain Province",
    "MT PROVINCE": "Mountain Province",
    "MOUNTAIN PROVINCE": "Mountain Province",
    "LAGUNA PROVINCE": "Laguna",
    "LAGUNA": "Laguna",
    "BATANGAS": "Batangas",
    "CAVITE": "Cavite",
    "QUEZON PROVINCE": "Quezon",
    "QUEZON": "Quezon",
    "RIZAL": "Rizal",
    "DAVAO DEL SUR": "Davao del Sur",
    "DAVAO DEL NORTE": "Davao del Norte",
    "LANAO DEL SUR": "Lanao del Sur",
    "LANAO DEL NORTE": "Lanao del Norte",
    "ZAMBOANGA DEL SUR": "Zamboanga del Sur",
    "ZAMBOANGA DEL NORTE": "Zamboanga del Norte",
    "NUEVA ECIJA": "Nueva Ecija",
    "NUEVA VIZCAYA": "Nueva Vizcaya",
    "CAMARINES SUR": "Camarines Sur",
    "CAMARINES NORTE": "Camarines Norte",
    "OCCIDENTAL MINDORO": "Occidental Mindoro",
    "ORIENTAL MINDORO": "Oriental Mindoro",
}

COURSE_ABBREVIATIONS: Dict[str, str] = {
    "BSCS": "BS Computer Science",
    "BSCE": "BS Civil Engineering",
    "BSEE": "BS Electrical Engineering",
    "BSME": "BS Mechanical Engineering",
    "BSCHE": "BS Chemical Engineering",
    "BSCPE": "BS Computer Engineering",
    "BSIE": "BS Industrial Engineering",
    "BSABE": "BS Agricultural and Biosystems Engineering",
    "BSA": "BS Agriculture",
    "BSAGCHEM": "BS Agricultural Chemistry",
    "BSABT": "BS Agricultural Biotechnology",
    "BSAE": "BS Agricultural Economics",
    "BSAECO": "BS Agricultural Economics",
    "BSABM": "BS Agribusiness Management",
    "BSBIO": "BS Biology",
    "BSCHEM": "BS Chemistry",
    "BSMATH": "BS Mathematics",
    "BSAM": "BS Applied Mathematics",
    "BSAP": "BS Applied Physics",
    "BSSTAT": "BS Statistics",
    "BSECON": "BS Economics",
    "BSACC": "BS Accountancy",
    "BSFT": "BS Food Technology",
    "BSF": "BS Forestry",
    "BSN": "BS Nutrition",
    "BSHE": "BS Human Ecology",
    "BSDC": "BS Development Communication",
    "BSES": "BS Environmental Science",
    "BACA": "BA Communication Arts",
    "BASOC": "BA Sociology",
    "BAPHILO": "BA Philosophy",
    "DVM": "Doctor of Veterinary Medicine",
}

ST_BRACKET_SCORES: Dict[str, float] = {
    "Full Discount with Stipend": 1.0,
    "Full Discount": 0.85,
    "PD80": 0.7,
    "PD60": 0.55,
    "PD40": 0.4,
    "PD20": 0.25,
    "No Discount": 0.1,
}

YEAR_LEVEL_ORDER: Dict[str, int] = {
    "Incoming Freshman": 0,
    "Freshman": 1,
    "Sophomore": 2,
    "Junior": 3,
    "Senior": 4,
    "Graduate": 5,
}

_CURRENCY_PATTERN = re.compile(r"(PHP|Php|php|P(?=\d)|₱|\$|,|\s)")


def _lookup_key(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    key = str(value).strip()
    if not key:
        return None
    return re.sub(r"\s+", " ", key).upper()


def _normalize_with(table: Dict[str, str], value: Any) -> Optional[Any]:
    key = _lookup_key(value)
    if key is None:
        return None
    return table.get(key, value)


def _same(a: Any, b: Any) -> bool:
    if a is None or b is None:
        return False
    return str(a).strip().lower() == str(b).strip().lower()


def _contains_either_way(a: Any, b: Any) -> bool:
    if a is None or b is None:
        return False
    left = str(a).strip().lower()
    right = str(b).strip().lower()
    if not left or not right:
        return False
    return left == right or left in right or right in left


def _any_entry(eligible: Optional[Iterable[Any]]) -> list:
    if eligible is None:
        return []
    if isinstance(eligible, (str, int, float)):
        eligible = [eligible]
    return [entry for entry in eligible if _lookup_key(entry) is not None]


# =============================================================================
# ST BRACKET
# =============================================================================

def normalize_st_bracket(bracket: Any) -> Optional[Any]:
    """
    Normalize an ST bracket code or full name to its canonical form

    Args:
        bracket: Short code ("FDS") or full name ("Full Discount with Stipend")

    Returns:
        Canonical bracket name, the original value if unknown, None if blank
    """
    return _normalize_with(ST_BRACKET_MAP, bracket)


def st_brackets_match(student_bracket: Any, eligible_brackets: Optional[Iterable[Any]]) -> bool:
    """True if the student's bracket equals any eligible bracket after normalization"""
    student = normalize_st_bracket(student_bracket)
    return any(_same(student, normalize_st_bracket(b)) for b in _any_entry(eligible_brackets))


# =============================================================================
# YEAR LEVEL
# =============================================================================

def normalize_year_level(year_level: Any) -> Optional[Any]:
    """
    Normalize a year level ("1", "1st Year", "First Year", "Freshman") to a classification name

    Args:
        year_level: Year level in any supported format

    Returns:
        Canonical classification, the original value if unknown, None if blank
    """
    return _normalize_with(YEAR_LEVEL_MAP, year_level)


def year_levels_match(student_level: Any, eligible_levels: Optional[Iterable[Any]]) -> bool:
    """True if the student's year level equals any eligible level after normalization"""
    student = normalize_year_level(student_level)
    return any(_same(student, normalize_year_level(level)) for level in _any_entry(eligible_levels))


# =============================================================================
# COLLEGE
# =============================================================================

def normalize_college(college: Any, to_code: bool = False) -> Optional[Any]:
    """
    Normalize a college code or full name

    Args:
        college: College code ("CAS") or full name
        to_code: Return the short code instead of the full name

    Returns:
        Full name (or code), the original value if unknown, None if blank
    """
    key = _lookup_key(college)
    if key is None:
        return None

    if key in COLLEGE_CODE_MAP:
        return key if to_code else COLLEGE_CODE_MAP[key]

    for code, full_name in COLLEGE_CODE_MAP.items():
        if full_name.upper() == key:
            return code if to_code else full_name

    return college


def colleges_match(student_college: Any, eligible_colleges: Optional[Iterable[Any]]) -> bool:
    """True if the student's college equals any eligible college, code or full name"""
    student = normalize_college(student_college)
    return any(_same(student, normalize_college(c)) for c in _any_entry(eligible_colleges))


# =============================================================================
# CITIZENSHIP
# =============================================================================

def normalize_citizenship(citizenship: Any) -> Optional[Any]:
    """Normalize citizenship labels ("PH", "Philippine", "Filipino Citizen") to a canonical label"""
    return _normalize_with(CITIZENSHIP_MAP, citizenship)


def citizenships_match(student_citizenship: Any, eligible: Optional[Iterable[Any]]) -> bool:
    student = normalize_citizenship(student_citizenship)
    return any(_same(student, normalize_citizenship(c)) for c in _any_entry(eligible))


# =============================================================================
# FREE TEXT (course, major, province)
# =============================================================================

def normalize_province(province: Any) -> Optional[Any]:
    """Normalize province aliases ("NCR", "Mt. Province") to a canonical province name"""
    return _normalize_with(PROVINCE_ALIASES, province)


def normalize_course(course: Any) -> Optional[Any]:
    """
    Expand a course abbreviation to its full program name

    "BSCS" and "BS CS" both become "BS Computer Science". Names that are not
    abbreviations are returned unchanged.
    """
    key = _lookup_key(course)
    if key is None:
        return None
    compact = key.replace(" ", "").replace(".", "")
    return COURSE_ABBREVIATIONS.get(compact, course)


def courses_match(student_course: Any, eligible_courses: Optional[Iterable[Any]]) -> bool:
    """
    Fuzzy course match

    A course matches when, after abbreviation expansion, either name contains
    the other ("Computer Science" matches "BS Computer Science").
    """
    student = normalize_course(student_course)
    return any(_contains_either_way(student, normalize_course(c)) for c in _any_entry(eligible_courses))


def majors_match(student_major: Any, eligible_majors: Optional[Iterable[Any]]) -> bool:
    """Fuzzy major match by substring containment in either direction"""
    if _lookup_key(student_major) is None:
        return False
    return any(_contains_either_way(student_major, m) for m in _any_entry(eligible_majors))


def provinces_match(student_province: Any, eligible_provinces: Optional[Iterable[Any]]) -> bool:
    """Fuzzy province match on canonical names ("Laguna" matches "Province of Laguna")"""
    student = normalize_province(student_province)
    return any(_contains_either_way(student, normalize_province(p)) for p in _any_entry(eligible_provinces))


# =============================================================================
# NUMERIC
# =============================================================================

def parse_number(value: Any) -> Optional[float]:
    """Parse an int/float/numeric string, returning None for anything else (including NaN)"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number):
        return None
    return number


def normalize_gwa(gwa: Any) -> Optional[float]:
    """
    Parse a GWA and clamp it to the grading scale

    Args:
        gwa: GWA as number or string

    Returns:
        GWA within [1.0, 5.0], or None if it cannot be parsed
    """
    number = parse_number(gwa)
    if number is None:
        return None
    return max(GWA_BEST, min(GWA_WORST, number))


def normalize_income(income: Any) -> Optional[float]:
    """
    Parse an income amount, stripping currency symbols, commas and whitespace

    Args:
        income: Amount such as 250000, "250,000" or "₱250,000.00"

    Returns:
        Income as float, or None if it cannot be parsed
    """
    if isinstance(income, str):
        income = _CURRENCY_PATTERN.sub("", income)
    number = parse_number(income)
    if number is None or math.isinf(number):
        return None
    return number


# =============================================================================
# FEATURE SCALES (0-1, higher = stronger candidate)
# =============================================================================

def gwa_score(gwa: Any) -> float:
    """Map a GWA onto [0, 1] where 1.0 GWA scores 1 and 5.0 scores 0"""
    value = normalize_gwa(gwa)
    if value is None:
        return NEUTRAL_SCORE
    return (GWA_WORST - value) / (GWA_WORST - GWA_BEST)


def income_score(income: Any, max_income: Any) -> float:
    """Lower income relative to the ceiling scores higher; above the ceiling scores 0"""
    value = normalize_income(income)
    ceiling = normalize_income(max_income)
    if not value or not ceiling or ceiling <= 0:
        return NEUTRAL_SCORE
    if value > ceiling:
        return 0.0
    return max(0.0, min(1.0, 1 - (value / ceiling) * 0.5))


def st_bracket_score(bracket: Any) -> float:
    """Financial need implied by the ST bracket, highest for full discount with stipend"""
    return ST_BRACKET_SCORES.get(normalize_st_bracket(bracket), NEUTRAL_SCORE)


def year_level_score(year_level: Any) -> float:
    rank = YEAR_LEVEL_ORDER.get(normalize_year_level(year_level))
    if rank is None:
        return NEUTRAL_SCORE
    return rank / max(YEAR_LEVEL_ORDER.values())


# =============================================================================
# DISPLAY
# =============================================================================

def format_currency(amount: Any) -> str:
    value = normalize_income(amount)
    if value is None:
        return "Not specified"
    if value == int(value):
        return f"₱{int(value):,}"
    return f"₱{value:,.2f}"


def format_gwa(gwa: Any) -> str:
    value = parse_number(gwa)
    if value is None:
        return "Not specified"
    return f"{value:.2f}"
