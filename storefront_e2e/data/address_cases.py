"""Address validation test cases for the Action checkout (AEC-1472).

Each row combines a street name, house number and addition into the single
"Adres & huisnummer" checkout field and records what the shop is observed to
do with it. The shop's field-length limit is treated as a black box: rows
assert observed behaviour, including the known inconsistencies flagged in
``notes`` (NL-006 versus HC-005).
"""

from enum import Enum
from typing import Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from ..tools.address import build_address_field
from ..tools.checkout import CheckoutOutcome

ISSUE_KEY = "AEC-1472"
ADDRESS_ERROR_MESSAGE = "Controleer je ingevoerde gegevens"

# Need manual or specialised tooling; never automated
EXCLUDED_CATEGORIES = frozenset({"Security", "Interaction", "A11y"})


class ExpectedResult(str, Enum):
    """Verdict the shop is expected to give for an address."""
    ACCEPT = "Accept"
    ACCEPT_TRIMMED = "Accept (trimmed)"
    SHOW_ERROR = "Show error"


class AddressTestCase(BaseModel):
    """One address input combination and its expected verdict."""

    model_config = ConfigDict(frozen=True)

    test_id: str
    category: str
    street_name: str
    house_number: str
    addition: str
    expected_result: ExpectedResult
    error_message: Optional[str] = None
    priority: str
    notes: str

    @model_validator(mode="after")
    def check_error_message(self):
        if self.expected_result == ExpectedResult.SHOW_ERROR and not self.error_message:
            raise ValueError(f"{self.test_id}: 'Show error' rows need an error_message")
        if self.expected_result != ExpectedResult.SHOW_ERROR and self.error_message:
            raise ValueError(f"{self.test_id}: only 'Show error' rows may carry an error_message")
        return self

    @property
    def should_reach_processor(self) -> bool:
        return self.expected_result in (ExpectedResult.ACCEPT, ExpectedResult.ACCEPT_TRIMMED)

    @property
    def expected_outcome(self) -> CheckoutOutcome:
        """Where the browser must end up after submitting this address."""
        if self.should_reach_processor:
            return CheckoutOutcome.REACHED_PROCESSOR
        return CheckoutOutcome.STAYED_ON_CHECKOUT

    @property
    def address_field(self) -> str:
        return build_address_field(self.street_name, self.house_number, self.addition)

    @property
    def title(self) -> str:
        return f"{ISSUE_KEY} {self.test_id} - {self.notes}"

    @property
    def screenshot_name(self) -> str:
        return f"{ISSUE_KEY}_{self.test_id}-{self.category}.png"


def _accept(test_id, category, street_name, house_number, addition, priority, notes,
            trimmed=False) -> AddressTestCase:
    return AddressTestCase(
        test_id=test_id,
        category=category,
        street_name=street_name,
        house_number=house_number,
        addition=addition,
        expected_result=ExpectedResult.ACCEPT_TRIMMED if trimmed else ExpectedResult.ACCEPT,
        priority=priority,
        notes=notes,
    )


def _reject(test_id, category, street_name, house_number, addition, priority, notes) -> AddressTestCase:
    return AddressTestCase(
        test_id=test_id,
        category=category,
        street_name=street_name,
        house_number=house_number,
        addition=addition,
        expected_result=ExpectedResult.SHOW_ERROR,
        error_message=ADDRESS_ERROR_MESSAGE,
        priority=priority,
        notes=notes,
    )


ADDRESS_TEST_CASES: List[AddressTestCase] = [
    # Boundary testing: addition length
    _accept("BT-001", "Boundary", "Main Street", "123", "", "High", "Empty addition should be allowed"),
    _accept("BT-002", "Boundary", "Main Street", "123", "A", "High", "Minimum length (1 character)"),
    _accept("BT-003", "Boundary", "Main Street", "123", "ABCDE", "High", "Just below limit (5 characters)"),
    _accept("BT-004", "Boundary", "Main Street", "123", "ABCDEF", "Critical", "Exact limit (6 characters) - boundary value"),
    _reject("BT-005", "Boundary", "Main Street", "123", "ABCDEFG", "Critical", "Over limit (7 characters)"),
    _reject("BT-006", "Boundary", "Main Street", "123", "ABCDEFGH", "High", "8 characters"),
    _reject("BT-007", "Boundary", "Main Street", "123", "ABCDEFGHIJ", "High", "10 characters"),
    _reject("BT-008", "Boundary", "Main Street", "123", "ABCDEFGHIJKLMNO", "Medium", "15 characters - extreme case"),

    # Boundary testing: house number length
    _accept("BT-101", "Boundary", "Main Street", "1", "", "High", "Minimum house number"),
    _accept("BT-102", "Boundary", "Main Street", "12", "", "High", "2 digits"),
    _accept("BT-103", "Boundary", "Main Street", "123", "", "High", "3 digits"),
    _accept("BT-104", "Boundary", "Main Street", "1234", "", "High", "4 digits"),
    _accept("BT-105", "Boundary", "Main Street", "12345", "", "High", "5 digits"),
    _reject("BT-106", "Boundary", "Main Street", "123456", "", "Critical", "6 digits - boundary value test"),
    _reject("BT-107", "Boundary", "Main Street", "1234567", "", "Critical", "7 digits"),
    _reject("BT-108", "Boundary", "Main Street", "12345678", "", "High", "8 digits"),

    # House number with consecutive characters
    _accept("HC-001", "Combination", "Main Street", "12A", "", "Critical", "House number + 1 letter (3 total)"),
    _accept("HC-002", "Combination", "Main Street", "12AB", "", "Critical", "House number + 2 letters (4 total)"),
    _accept("HC-003", "Combination", "Main Street", "12ABC", "", "Critical", "5 characters total"),
    _accept("HC-004", "Combination", "Main Street", "12ABCD", "", "Critical", "6 characters total - boundary value"),
    _accept("HC-005", "Combination", "Main Street", "12ABCDE", "", "Critical", "7 characters total - possible bug"),
    _accept("HC-006", "Combination", "Main Street", "12ABCDEF", "", "Critical", "8 characters total"),
    _accept("HC-007", "Combination", "Main Street", "123ABCDEF", "", "High", "9 characters total"),
    _reject("HC-008", "Combination", "Main Street", "1234567890", "", "High", "10 digits"),

    # Realistic Dutch additions
    _accept("NL-001", "Realistic", "Church Street", "45", "A", "Critical", "Most common addition"),
    _accept("NL-002", "Realistic", "Church Street", "45", "bis", "High", "3 characters"),
    _accept("NL-003", "Realistic", "Church Street", "45", "rood", "High", "4 characters (occurs in old neighborhoods)"),
    _accept("NL-004", "Realistic", "Church Street", "45", "zwart", "High", "5 characters (occurs in old neighborhoods)"),
    _accept("NL-005", "Realistic", "Church Street", "45", "boven", "Critical", "5 characters - common"),
    _reject("NL-006", "Realistic", "Church Street", "45", "beneden", "Critical", "7 characters - common, known bug"),
    _reject("NL-007", "Realistic", "Church Street", "45", "parterre", "Critical", "8 characters - common"),
    _reject("NL-008", "Realistic", "Church Street", "45", "souterrain", "Critical", "10 characters - common"),
    _accept("NL-009", "Realistic", "Church Street", "45", "2hoog", "High", "5 characters"),
    _accept("NL-010", "Realistic", "Church Street", "45", "3hoog", "High", "5 characters"),
    _accept("NL-011", "Realistic", "Church Street", "45", "I", "Medium", "Roman numeral"),
    _accept("NL-012", "Realistic", "Church Street", "45", "II", "Medium", "Roman numeral"),
    _accept("NL-013", "Realistic", "Church Street", "45", "III", "Medium", "3 characters"),
    _reject("NL-014", "Realistic", "Church Street", "45", "(bus-1)", "Medium", "additional scenario"),
    _accept("NL-015", "Realistic", "Church Street", "45A", "Bus1", "Medium", "additional scenario"),

    # Combinations house number + addition
    _accept("CO-001", "Combination", "Village Street", "12345", "ABCDEF", "High", "Max both fields (11 total)"),
    _reject("CO-002", "Combination", "Village Street", "123456", "ABCDEF", "High", "Both at limit (12 total)"),
    _reject("CO-003", "Combination", "Village Street", "12345", "ABCDEFG", "High", "Addition over limit"),

    # Street name validation
    _accept("ST-001", "Street Name", "Main Street", "1", "", "High", "Normal street name"),
    _accept("ST-002", "Street Name", "van der Helst Street", "1", "", "High", "Multiple words"),
    _accept("ST-003", "Street Name", "'s-Graveland Road", "1", "", "High", "Apostrophe and hyphen"),
    _accept("ST-004", "Street Name", "Jan-Pieter Heije Street", "1", "", "High", "Hyphen in name"),
    _accept("ST-005", "Street Name", "Dr. P.J.H. Cuypers Street", "1", "", "Medium", "Periods and abbreviations"),
    _accept("ST-006", "Street Name", "Aa", "1", "", "Medium", "Very short street name (2 characters)"),
    _accept("ST-007", "Street Name", "Professor Doctor Jan van der Waals Straat met een hele lange naam", "1", "",
            "Medium", "Test maximum street name length"),

    # Spaces and whitespace
    _accept("WS-001", "Whitespace", "Main Street", "123", "  ABC", "High", "Leading spaces in addition", trimmed=True),
    _accept("WS-002", "Whitespace", "Main Street", "123", "ABC  ", "High", "Trailing spaces in addition", trimmed=True),
    _accept("WS-003", "Whitespace", "Main Street", "123", "AB CD", "Medium", "Space in addition"),
    _accept("WS-004", "Whitespace", "Main Street", "123", "      ", "Medium", "Only spaces as addition"),
    _accept("WS-005", "Whitespace", "  Main Street", "123", "A", "High", "Leading spaces in street name", trimmed=True),

    # Empty fields
    _reject("EV-001", "Validation", "", "123", "A", "Critical", "Empty street name"),
    _reject("EV-002", "Validation", "Main Street", "", "A", "Critical", "Empty house number"),
    _accept("EV-003", "Validation", "Main Street", "123", "", "Critical", "Empty addition (optional field)"),
    _reject("EV-004", "Validation", "", "", "", "High", "All fields empty"),

    # Special characters
    _accept("SC-001", "Validation", "Main Street", "123", "A-B", "Medium", "Hyphen in addition"),
    _accept("SC-002", "Validation", "Main Street", "123", "A/B", "Medium", "Slash"),
    _accept("SC-003", "Validation", "Main Street", "123", "A.B", "Medium", "Period in addition"),
    _accept("SC-004", "Validation", "Main Street", "123", "A@B", "High", "Invalid character @"),
    _accept("SC-005", "Validation", "Main Street", "123", "A#B", "High", "Invalid character #"),
    _accept("SC-006", "Validation", "Main Street", "123", "A$B", "High", "Invalid character $"),

    # Numeric validation
    _accept("NV-001", "Validation", "Main Street", "0", "", "High", "House number 0"),
    _reject("NV-002", "Validation", "Main Street", "-5", "", "High", "Negative house number"),
    _accept("NV-003", "Validation", "Main Street", "007", "", "Medium", "Leading zeros"),
    _accept("NV-004", "Validation", "Main Street", "1.5", "", "Medium", "Decimal number"),
    _reject("NV-005", "Validation", "Main Street", "ABC", "", "High", "Letters in house number field"),
    _accept("NV-006", "Validation", "123Street", "45", "", "Medium", "Numbers in street name"),
]


def automated_cases() -> List[AddressTestCase]:
    """Return the cases that run unattended, in table order."""
    return [case for case in ADDRESS_TEST_CASES if case.category not in EXCLUDED_CATEGORIES]


def cases_by_category(category: str) -> Iterator[AddressTestCase]:
    return (case for case in ADDRESS_TEST_CASES if case.category == category)
