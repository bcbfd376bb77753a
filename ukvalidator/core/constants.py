"""UK numbering-plan and Ofcom dataset constants.

Numbering plan
--------------
COUNTRY_CODE          : ITU country calling code for the UK
INTERNATIONAL_PREFIX  : written caller escape preceding the country code ("00")
TRUNK_PREFIX          : domestic leading-zero access digit
ACCESS_CODE_DIGIT     : leading digit of Type A/B/C access codes, which are
                        dialled without the trunk prefix
NATIONAL_NUMBER_LENGTH: digit count of a full national-format number

Ofcom dataset
-------------
The numbering-data CSVs keep stable file names but their column headings
drift between sheets and releases.  Each logical column is resolved from
the first alias present in a row.
"""
from __future__ import annotations

# ---------------------------------------------------------------------------
# Numbering plan
# ---------------------------------------------------------------------------

COUNTRY_CODE: str = "44"
INTERNATIONAL_PREFIX: str = "00"
TRUNK_PREFIX: str = "0"
ACCESS_CODE_DIGIT: str = "1"
NATIONAL_NUMBER_LENGTH: int = 11

REGION_CODE: str = "GB"

# ---------------------------------------------------------------------------
# Ofcom numbering data
# ---------------------------------------------------------------------------

OFCOM_BASE_URL: str = (
    "https://www.ofcom.org.uk/siteassets/resources/documents/phones-telecoms-and-internet/"
    "information-for-industry/numbering/regular-updates/telephone-numbers/"
)

OFCOM_FILES: tuple[str, ...] = (
    "s1.csv",  # geographic 01 / 02
    "s3.csv",  # 03 non-geographic
    "s5.csv",  # 055 / 056
    "s7.csv",  # 07 mobile, personal numbering, paging
    "s8.csv",  # 08 freephone / special services
    "s9.csv",  # 09 premium rate
    "s10 (type a and c).csv",  # access codes
    "s10 (type b).csv",
)

# Sheets listing Type A/B/C access codes, dialled without the trunk prefix.
ACCESS_CODE_FILES: frozenset[str] = frozenset({
    "s10 (type a and c).csv",
    "s10 (type b).csv",
})

RANGE_COLUMNS: tuple[str, ...] = (
    "NMS Number Block: Number Block",
    "Number Range",
    "Number range (non-geographic) or Area code",
    "Code",
    "Dialling code",
)

STATUS_COLUMNS: tuple[str, ...] = (
    "Block Status",
    "Status",
    "Allocation Status",
    "Availability",
    "Notes",
)

PROVIDER_COLUMNS: tuple[str, ...] = (
    "CP Name",
    "Provider",
)

# Statuses kept when building a rule set restricted to diallable ranges.
DIALLABLE_STATUSES: frozenset[str] = frozenset({
    "allocated",
    "allocated(closed range)",
})

# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

BATCH_MAX_ITEMS: int = 100
